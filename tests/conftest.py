"""
Pytest configuration and shared fixtures.
"""

import uuid

import pytest

from applications.domain.application import Application
from applications.infrastructure.repositories.django_application_repository import (
    DjangoApplicationRepository,
)
from applications.infrastructure.repositories.django_application_step_repository import (
    DjangoApplicationStepRepository,
)
from core.infrastructure.events import InMemoryEventBus
from requirements.domain.requirement import Requirement
from requirements.domain.requirement_step import RequirementStep
from requirements.infrastructure.repositories.django_requirement_document_repository import (
    DjangoRequirementDocumentRepository,
    DjangoRequirementTemplateFileRepository,
)
from requirements.infrastructure.repositories.django_requirement_repository import (
    DjangoRequirementRepository,
)
from requirements.infrastructure.repositories.django_requirement_step_repository import (
    DjangoRequirementStepRepository,
)
from tests.fakes import in_memory_data_access


@pytest.fixture
def event_bus():
    """Fixture for a fresh event bus with no subscribers."""
    return InMemoryEventBus()


@pytest.fixture
def data(event_bus):
    """Fixture for a DataAccess backed by in-memory repositories."""
    return in_memory_data_access(event_bus)


@pytest.fixture
def requirement(data):
    """Fixture for a stored Texas / Home Health Agency requirement."""
    requirement = Requirement.create(state="Texas", license_type_name="Home Health Agency")
    data.requirements.rows[requirement.id] = requirement
    return requirement


@pytest.fixture
def other_requirement(data):
    """Fixture for a second stored requirement."""
    requirement = Requirement.create(state="Florida", license_type_name="Assisted Living")
    data.requirements.rows[requirement.id] = requirement
    return requirement


@pytest.fixture
def add_step(data):
    """Fixture returning a helper that stores a requirement step."""

    def _add(requirement_id, name, order, is_expert_step=False, **details):
        if is_expert_step:
            step = RequirementStep.create_expert(
                requirement_id=requirement_id, name=name, order=order, **details
            )
        else:
            step = RequirementStep.create(
                requirement_id=requirement_id, name=name, order=order, **details
            )
        data.requirement_steps.rows[step.id] = step
        return step

    return _add


@pytest.fixture
def application(data):
    """Fixture for a stored, requested Texas / Home Health Agency application."""
    application = Application.create(
        owner_id=uuid.uuid4(),
        application_name="Sunrise Home Health",
        state="Texas",
        license_type_name="Home Health Agency",
    )
    data.applications.rows[application.id] = application
    return application


@pytest.fixture
def assigned_application(data, application):
    """Fixture for the stored application with an expert assigned."""
    assigned = application.assign_expert(uuid.uuid4())
    data.applications.rows[assigned.id] = assigned
    return assigned


# Django-backed repositories for integration tests


@pytest.fixture
def requirement_repository():
    """Fixture for RequirementRepository."""
    return DjangoRequirementRepository()


@pytest.fixture
def requirement_step_repository():
    """Fixture for RequirementStepRepository."""
    return DjangoRequirementStepRepository()


@pytest.fixture
def requirement_document_repository():
    """Fixture for RequirementDocumentRepository."""
    return DjangoRequirementDocumentRepository()


@pytest.fixture
def requirement_template_repository():
    """Fixture for RequirementTemplateFileRepository."""
    return DjangoRequirementTemplateFileRepository()


@pytest.fixture
def application_repository():
    """Fixture for ApplicationRepository."""
    return DjangoApplicationRepository()


@pytest.fixture
def application_step_repository():
    """Fixture for ApplicationStepRepository."""
    return DjangoApplicationStepRepository()
