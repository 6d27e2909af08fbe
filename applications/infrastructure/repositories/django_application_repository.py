"""
Django implementation of ApplicationRepository port.

This adapter converts between domain entities and Django ORM models.
"""
import uuid
from typing import List, Optional, Sequence

from asgiref.sync import sync_to_async
from django.db import IntegrityError

from applications.domain.application import Application
from applications.infrastructure.models import Application as ApplicationModel
from applications.ports.application_repository import ApplicationRepository
from core.domain.exceptions import ConstraintError
from core.domain.value_objects import ApplicationStatus


class DjangoApplicationRepository(ApplicationRepository):
    """
    Django ORM implementation of ApplicationRepository.

    This adapter:
    1. Converts Django models to domain entities
    2. Converts domain entities to Django models
    3. Implements repository interface
    """

    def _to_domain(self, model: ApplicationModel) -> Application:
        """
        Convert Django model to domain entity.

        Args:
            model: Django Application model

        Returns:
            Application domain entity
        """
        return Application(
            id=model.id,
            owner_id=model.owner_id,
            application_name=model.application_name,
            state=model.state,
            license_type_name=model.license_type,
            assigned_expert_id=model.assigned_expert_id,
            status=ApplicationStatus(model.status),
            progress_percentage=model.progress_percentage,
            revision_reason=model.revision_reason,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, application: Application) -> ApplicationModel:
        """
        Convert domain entity to Django model.

        Args:
            application: Application domain entity

        Returns:
            Django Application model
        """
        model, created = ApplicationModel.objects.get_or_create(
            id=application.id,
            defaults={
                "owner_id": application.owner_id,
                "application_name": application.application_name,
                "state": application.state,
                "license_type": application.license_type_name,
                "assigned_expert_id": application.assigned_expert_id,
                "status": application.status.value,
                "progress_percentage": application.progress_percentage,
                "revision_reason": application.revision_reason,
            },
        )
        # Update if exists
        if not created:
            model.application_name = application.application_name
            model.state = application.state
            model.license_type = application.license_type_name
            model.assigned_expert_id = application.assigned_expert_id
            model.status = application.status.value
            model.progress_percentage = application.progress_percentage
            model.revision_reason = application.revision_reason
        return model

    @sync_to_async
    def save(self, application: Application) -> Application:
        """
        Save an application entity.

        Args:
            application: Application entity to save

        Returns:
            Saved application entity
        """
        try:
            model = self._to_model(application)
            model.save()
        except IntegrityError as e:
            raise ConstraintError(str(e))
        return self._to_domain(model)

    @sync_to_async
    def find_by_id(self, application_id: uuid.UUID) -> Optional[Application]:
        """
        Find an application by ID.

        Args:
            application_id: Application UUID

        Returns:
            Application entity or None if not found
        """
        try:
            model = ApplicationModel.objects.get(id=application_id)
            return self._to_domain(model)
        except ApplicationModel.DoesNotExist:
            return None

    @sync_to_async
    def find_by_ids(self, application_ids: Sequence[uuid.UUID]) -> List[Application]:
        models = ApplicationModel.objects.filter(id__in=list(application_ids))
        return [self._to_domain(model) for model in models]
