"""
Django implementation of RequirementRepository port.

This adapter converts between domain entities and Django ORM models.
"""
import uuid
from typing import List, Optional, Sequence

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction

from core.domain.exceptions import ConstraintError
from requirements.domain.requirement import Requirement
from requirements.infrastructure.models import LicenseRequirement as RequirementModel
from requirements.ports.requirement_repository import RequirementRepository


class DjangoRequirementRepository(RequirementRepository):
    """Django ORM implementation of RequirementRepository."""

    def _to_domain(self, model: RequirementModel) -> Requirement:
        """
        Convert Django model to domain entity.

        Args:
            model: Django LicenseRequirement model

        Returns:
            Requirement domain entity
        """
        return Requirement(
            id=model.id,
            state=model.state,
            license_type_name=model.license_type,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, requirement: Requirement) -> RequirementModel:
        model, created = RequirementModel.objects.get_or_create(
            id=requirement.id,
            defaults={
                "state": requirement.state,
                "license_type": requirement.license_type_name,
            },
        )
        if not created:
            model.state = requirement.state
            model.license_type = requirement.license_type_name
        return model

    @sync_to_async
    def save(self, requirement: Requirement) -> Requirement:
        """
        Save a requirement entity.

        Raises:
            ConstraintError: If the (state, license type) pair already exists
        """
        try:
            with transaction.atomic():
                model = self._to_model(requirement)
                model.save()
        except IntegrityError as e:
            raise ConstraintError(str(e))
        return self._to_domain(model)

    @sync_to_async
    def find_by_id(self, requirement_id: uuid.UUID) -> Optional[Requirement]:
        try:
            model = RequirementModel.objects.get(id=requirement_id)
            return self._to_domain(model)
        except RequirementModel.DoesNotExist:
            return None

    @sync_to_async
    def find_by_ids(self, requirement_ids: Sequence[uuid.UUID]) -> List[Requirement]:
        models = RequirementModel.objects.filter(id__in=list(requirement_ids))
        return [self._to_domain(model) for model in models]

    @sync_to_async
    def find_by_state_and_license_type(
        self, state: str, license_type_name: str
    ) -> Optional[Requirement]:
        """
        Find a requirement by its unique pair.

        Args:
            state: State
            license_type_name: License type name

        Returns:
            Requirement entity or None if not found
        """
        try:
            model = RequirementModel.objects.get(state=state, license_type=license_type_name)
            return self._to_domain(model)
        except RequirementModel.DoesNotExist:
            return None

    @sync_to_async
    def list_all(self) -> List[Requirement]:
        models = RequirementModel.objects.order_by("state", "license_type")
        return [self._to_domain(model) for model in models]

    @sync_to_async
    def count(self) -> int:
        return RequirementModel.objects.count()
