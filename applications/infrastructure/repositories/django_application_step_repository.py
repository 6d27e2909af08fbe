"""
Django implementation of ApplicationStepRepository port.
"""
import uuid
from typing import List, Optional, Sequence

from asgiref.sync import sync_to_async
from django.db import IntegrityError
from django.db.models import Max

from applications.domain.application_step import ApplicationStep
from applications.infrastructure.models import ApplicationStep as StepModel
from applications.ports.application_step_repository import ApplicationStepRepository
from core.domain.exceptions import ConstraintError


class DjangoApplicationStepRepository(ApplicationStepRepository):
    """Django ORM implementation of ApplicationStepRepository."""

    def _to_domain(self, model: StepModel) -> ApplicationStep:
        return ApplicationStep(
            id=model.id,
            application_id=model.application_id,
            name=model.step_name,
            order=model.step_order,
            description=model.description,
            instructions=model.instructions,
            phase=model.phase,
            is_expert_step=model.is_expert_step,
            is_completed=model.is_completed,
            completed_at=model.completed_at,
            created_at=model.created_at,
        )

    def _new_model(self, step: ApplicationStep) -> StepModel:
        return StepModel(
            id=step.id,
            application_id=step.application_id,
            step_name=step.name,
            step_order=step.order,
            description=step.description,
            instructions=step.instructions,
            phase=step.phase,
            is_expert_step=step.is_expert_step,
            is_completed=step.is_completed,
            completed_at=step.completed_at,
        )

    def _queryset(self, is_expert_step: Optional[bool] = None):
        queryset = StepModel.objects.all()
        if is_expert_step is not None:
            queryset = queryset.filter(is_expert_step=is_expert_step)
        return queryset

    @sync_to_async
    def save(self, step: ApplicationStep) -> ApplicationStep:
        model = StepModel.objects.filter(id=step.id).first()
        if model is None:
            model = self._new_model(step)
        else:
            model.step_name = step.name
            model.step_order = step.order
            model.description = step.description
            model.instructions = step.instructions
            model.phase = step.phase
            model.is_completed = step.is_completed
            model.completed_at = step.completed_at
        try:
            model.save()
        except IntegrityError as e:
            raise ConstraintError(str(e))
        return self._to_domain(model)

    @sync_to_async
    def save_many(self, steps: Sequence[ApplicationStep]) -> List[ApplicationStep]:
        """
        Insert several new steps as one statement.

        Args:
            steps: New step entities

        Returns:
            Inserted step entities, in the given order
        """
        if not steps:
            return []
        try:
            models = StepModel.objects.bulk_create([self._new_model(step) for step in steps])
        except IntegrityError as e:
            raise ConstraintError(str(e))
        return [self._to_domain(model) for model in models]

    @sync_to_async
    def find_by_id(self, step_id: uuid.UUID) -> Optional[ApplicationStep]:
        try:
            return self._to_domain(StepModel.objects.get(id=step_id))
        except StepModel.DoesNotExist:
            return None

    @sync_to_async
    def find_by_ids(
        self, step_ids: Sequence[uuid.UUID], is_expert_step: Optional[bool] = None
    ) -> List[ApplicationStep]:
        models = self._queryset(is_expert_step).filter(id__in=list(step_ids)).order_by(
            "step_order"
        )
        return [self._to_domain(model) for model in models]

    @sync_to_async
    def find_by_application(
        self, application_id: uuid.UUID, is_expert_step: Optional[bool] = None
    ) -> List[ApplicationStep]:
        models = self._queryset(is_expert_step).filter(
            application_id=application_id
        ).order_by("is_expert_step", "step_order")
        return [self._to_domain(model) for model in models]

    @sync_to_async
    def list_expert_steps(self) -> List[ApplicationStep]:
        models = self._queryset(True).order_by("step_order", "application_id")
        return [self._to_domain(model) for model in models]

    @sync_to_async
    def has_steps(self, application_id: uuid.UUID, is_expert_step: bool) -> bool:
        return self._queryset(is_expert_step).filter(application_id=application_id).exists()

    @sync_to_async
    def max_order(self, application_id: uuid.UUID, is_expert_step: bool) -> Optional[int]:
        result = self._queryset(is_expert_step).filter(
            application_id=application_id
        ).aggregate(highest=Max("step_order"))
        return result["highest"]

    @sync_to_async
    def delete(self, step_id: uuid.UUID, is_expert_step: Optional[bool] = None) -> bool:
        deleted, _ = self._queryset(is_expert_step).filter(id=step_id).delete()
        return deleted > 0
