"""
Django implementation of RequirementStepRepository port.
"""
import uuid
from typing import List, Optional, Sequence, Tuple

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction
from django.db.models import Max

from core.domain.exceptions import ConstraintError, StepNotFoundError, ValidationError
from requirements.domain.requirement_step import RequirementStep
from requirements.infrastructure.models import LicenseRequirementStep as StepModel
from requirements.ports.requirement_step_repository import RequirementStepRepository


class DjangoRequirementStepRepository(RequirementStepRepository):
    """
    Django ORM implementation of RequirementStepRepository.

    Both partitions live in one table, told apart by ``is_expert_step``.
    """

    def _to_domain(self, model: StepModel) -> RequirementStep:
        return RequirementStep(
            id=model.id,
            requirement_id=model.requirement_id,
            name=model.step_name,
            order=model.step_order,
            description=model.description,
            instructions=model.instructions,
            is_required=model.is_required,
            estimated_days=model.estimated_days,
            is_expert_step=model.is_expert_step,
            phase=model.phase,
            created_at=model.created_at,
        )

    def _new_model(self, step: RequirementStep) -> StepModel:
        return StepModel(
            id=step.id,
            requirement_id=step.requirement_id,
            step_name=step.name,
            step_order=step.order,
            description=step.description,
            instructions=step.instructions,
            is_required=step.is_required,
            estimated_days=step.estimated_days,
            is_expert_step=step.is_expert_step,
            phase=step.phase,
        )

    def _queryset(
        self,
        is_expert_step: Optional[bool] = None,
        requirement_id: Optional[uuid.UUID] = None,
    ):
        queryset = StepModel.objects.all()
        if is_expert_step is not None:
            queryset = queryset.filter(is_expert_step=is_expert_step)
        if requirement_id is not None:
            queryset = queryset.filter(requirement_id=requirement_id)
        return queryset

    @sync_to_async
    def save(self, step: RequirementStep) -> RequirementStep:
        """
        Insert or update a single step.

        Args:
            step: RequirementStep entity to save

        Returns:
            Saved step entity
        """
        try:
            with transaction.atomic():
                model = StepModel.objects.filter(id=step.id).first()
                if model is None:
                    model = self._new_model(step)
                else:
                    model.step_name = step.name
                    model.step_order = step.order
                    model.description = step.description
                    model.instructions = step.instructions
                    model.is_required = step.is_required
                    model.estimated_days = step.estimated_days
                    model.phase = step.phase
                model.save()
        except IntegrityError as e:
            raise ConstraintError(str(e))
        return self._to_domain(model)

    @sync_to_async
    def save_many(self, steps: Sequence[RequirementStep]) -> List[RequirementStep]:
        if not steps:
            return []
        try:
            models = StepModel.objects.bulk_create([self._new_model(step) for step in steps])
        except IntegrityError as e:
            raise ConstraintError(str(e))
        return [self._to_domain(model) for model in models]

    @sync_to_async
    def find_by_id(self, step_id: uuid.UUID) -> Optional[RequirementStep]:
        try:
            return self._to_domain(StepModel.objects.get(id=step_id))
        except StepModel.DoesNotExist:
            return None

    @sync_to_async
    def find_by_ids(
        self,
        step_ids: Sequence[uuid.UUID],
        is_expert_step: Optional[bool] = None,
        requirement_id: Optional[uuid.UUID] = None,
    ) -> List[RequirementStep]:
        models = self._queryset(is_expert_step, requirement_id).filter(
            id__in=list(step_ids)
        ).order_by("step_order")
        return [self._to_domain(model) for model in models]

    @sync_to_async
    def find_by_requirement(
        self, requirement_id: uuid.UUID, is_expert_step: Optional[bool] = None
    ) -> List[RequirementStep]:
        models = self._queryset(is_expert_step, requirement_id).order_by(
            "is_expert_step", "step_order"
        )
        return [self._to_domain(model) for model in models]

    @sync_to_async
    def list_all(
        self,
        is_expert_step: Optional[bool] = None,
        exclude_requirement_id: Optional[uuid.UUID] = None,
    ) -> List[RequirementStep]:
        queryset = self._queryset(is_expert_step)
        if exclude_requirement_id is not None:
            queryset = queryset.exclude(requirement_id=exclude_requirement_id)
        models = queryset.order_by("requirement_id", "step_order")
        return [self._to_domain(model) for model in models]

    @sync_to_async
    def max_order(self, requirement_id: uuid.UUID, is_expert_step: bool) -> Optional[int]:
        """
        Read the highest step order within one partition.

        Args:
            requirement_id: Requirement UUID
            is_expert_step: Partition to read

        Returns:
            Highest order, or None if the partition is empty
        """
        result = self._queryset(is_expert_step, requirement_id).aggregate(
            highest=Max("step_order")
        )
        return result["highest"]

    @sync_to_async
    def apply_order(
        self,
        requirement_id: uuid.UUID,
        assignments: Sequence[Tuple[uuid.UUID, int]],
        is_expert_step: bool = False,
    ) -> None:
        """
        Assign new orders inside one transaction.

        Raises:
            StepNotFoundError: If any id is outside the partition
            ValidationError: If the assignments leave out a step of the partition

        Either error rolls the transaction back and no order changes.
        """
        partition = self._queryset(is_expert_step, requirement_id)
        with transaction.atomic():
            partition_ids = set(partition.values_list("id", flat=True))
            assigned_ids = {step_id for step_id, _ in assignments}
            unknown = [step_id for step_id, _ in assignments if step_id not in partition_ids]
            if unknown:
                raise StepNotFoundError(
                    f"Step {unknown[0]} does not belong to requirement {requirement_id}"
                )
            if assigned_ids != partition_ids:
                raise ValidationError("Step order must list every step of the requirement")
            for step_id, order in assignments:
                partition.filter(id=step_id).update(step_order=order)

    @sync_to_async
    def delete(self, step_id: uuid.UUID, is_expert_step: Optional[bool] = None) -> bool:
        deleted, _ = self._queryset(is_expert_step).filter(id=step_id).delete()
        return deleted > 0

    @sync_to_async
    def count_by_requirement(self, requirement_id: uuid.UUID) -> int:
        return StepModel.objects.filter(requirement_id=requirement_id).count()
