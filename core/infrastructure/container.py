"""
Data access bundle.

Public actions receive one DataAccess explicitly instead of reaching for
module-level clients. Production code builds it with django_data_access();
tests build it from in-memory repositories.
"""

from dataclasses import dataclass

from applications.ports.application_repository import ApplicationRepository
from applications.ports.application_step_repository import ApplicationStepRepository
from core.domain.events import EventBus
from core.infrastructure.view_invalidation import ViewInvalidator
from requirements.ports.requirement_document_repository import (
    RequirementDocumentRepository,
    RequirementTemplateFileRepository,
)
from requirements.ports.requirement_repository import RequirementRepository
from requirements.ports.requirement_step_repository import RequirementStepRepository


@dataclass
class DataAccess:
    """Repositories and collaborators one operation works against."""

    requirements: RequirementRepository
    requirement_steps: RequirementStepRepository
    requirement_documents: RequirementDocumentRepository
    requirement_templates: RequirementTemplateFileRepository
    applications: ApplicationRepository
    application_steps: ApplicationStepRepository
    views: ViewInvalidator
    event_bus: EventBus


def django_data_access() -> DataAccess:
    """
    Build a DataAccess backed by the Django ORM and Django's cache.

    Returns:
        DataAccess wired to the default database and cache
    """
    from applications.infrastructure.repositories.django_application_repository import (
        DjangoApplicationRepository,
    )
    from applications.infrastructure.repositories.django_application_step_repository import (
        DjangoApplicationStepRepository,
    )
    from core.infrastructure.cache_adapters import cache_adapter
    from core.infrastructure.events import event_bus
    from core.infrastructure.view_invalidation import CacheViewInvalidator
    from requirements.infrastructure.repositories.django_requirement_document_repository import (  # noqa: E501
        DjangoRequirementDocumentRepository,
        DjangoRequirementTemplateFileRepository,
    )
    from requirements.infrastructure.repositories.django_requirement_repository import (
        DjangoRequirementRepository,
    )
    from requirements.infrastructure.repositories.django_requirement_step_repository import (  # noqa: E501
        DjangoRequirementStepRepository,
    )

    return DataAccess(
        requirements=DjangoRequirementRepository(),
        requirement_steps=DjangoRequirementStepRepository(),
        requirement_documents=DjangoRequirementDocumentRepository(),
        requirement_templates=DjangoRequirementTemplateFileRepository(),
        applications=DjangoApplicationRepository(),
        application_steps=DjangoApplicationStepRepository(),
        views=CacheViewInvalidator(cache_adapter),
        event_bus=event_bus,
    )
