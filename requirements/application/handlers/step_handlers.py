"""
Requirement step handlers.

Handlers for creating, editing, deleting and reordering template steps.
Edits and deletes never reach steps already copied into applications.
"""
import logging

from core.domain.exceptions import RequirementNotFoundError, StepNotFoundError
from provisioning.domain.ordering import OrderingSequencer
from requirements.application.commands.step_commands import (
    CreateExpertStepCommand,
    CreateStepCommand,
    DeleteStepCommand,
    ReorderStepsCommand,
    UpdateExpertStepCommand,
    UpdateStepCommand,
)
from requirements.domain.requirement_step import RequirementStep
from requirements.ports.requirement_repository import RequirementRepository
from requirements.ports.requirement_step_repository import RequirementStepRepository

logger = logging.getLogger(__name__)


class _StepHandler:
    def __init__(
        self,
        requirement_repository: RequirementRepository,
        step_repository: RequirementStepRepository,
    ):
        """Initialize handler with repositories."""
        self.requirement_repository = requirement_repository
        self.step_repository = step_repository
        self.sequencer = OrderingSequencer(step_repository)

    async def _require_requirement(self, requirement_id) -> None:
        if not await self.requirement_repository.find_by_id(requirement_id):
            raise RequirementNotFoundError(f"License requirement {requirement_id} not found")

    async def _require_step(self, step_id, is_expert_step: bool) -> RequirementStep:
        step = await self.step_repository.find_by_id(step_id)
        if not step or step.is_expert_step != is_expert_step:
            raise StepNotFoundError(f"Step {step_id} not found")
        return step


class CreateStepHandler(_StepHandler):
    """Handler for CreateStepCommand."""

    async def handle(self, command: CreateStepCommand) -> RequirementStep:
        """
        Append a regular step.

        Args:
            command: CreateStepCommand

        Returns:
            Created step, ordered after the last regular step

        Raises:
            RequirementNotFoundError: If the requirement does not exist
        """
        await self._require_requirement(command.requirement_id)
        order = await self.sequencer.next_order(command.requirement_id, False)
        step = RequirementStep.create(
            requirement_id=command.requirement_id,
            name=command.step_name,
            order=order,
            description=command.description,
            instructions=command.instructions,
            is_required=command.is_required,
            estimated_days=command.estimated_days,
        )
        saved = await self.step_repository.save(step)
        logger.info("Created step %s at order %d", saved.id, saved.order)
        return saved


class CreateExpertStepHandler(_StepHandler):
    """Handler for CreateExpertStepCommand."""

    async def handle(self, command: CreateExpertStepCommand) -> RequirementStep:
        await self._require_requirement(command.requirement_id)
        order = await self.sequencer.next_order(command.requirement_id, True)
        step = RequirementStep.create_expert(
            requirement_id=command.requirement_id,
            name=command.step_title,
            order=order,
            phase=command.phase,
            description=command.description,
            instructions=command.instructions,
        )
        saved = await self.step_repository.save(step)
        logger.info("Created expert step %s at order %d", saved.id, saved.order)
        return saved


class UpdateStepHandler(_StepHandler):
    """Handler for UpdateStepCommand."""

    async def handle(self, command: UpdateStepCommand) -> RequirementStep:
        step = await self._require_step(command.step_id, is_expert_step=False)
        updated = step.with_details(
            name=command.step_name,
            description=command.description,
            instructions=command.instructions,
            is_required=command.is_required,
            estimated_days=command.estimated_days,
        )
        return await self.step_repository.save(updated)


class UpdateExpertStepHandler(_StepHandler):
    """Handler for UpdateExpertStepCommand."""

    async def handle(self, command: UpdateExpertStepCommand) -> RequirementStep:
        step = await self._require_step(command.step_id, is_expert_step=True)
        updated = step.with_details(
            name=command.step_title,
            description=command.description,
            instructions=command.instructions,
            phase=command.phase,
        )
        return await self.step_repository.save(updated)


class DeleteStepHandler(_StepHandler):
    """
    Handler for DeleteStepCommand.

    Remaining steps keep their orders; reorder to close the gap.
    """

    async def handle(self, command: DeleteStepCommand) -> None:
        deleted = await self.step_repository.delete(
            command.step_id, is_expert_step=command.is_expert_step
        )
        if not deleted:
            raise StepNotFoundError(f"Step {command.step_id} not found")
        logger.info("Deleted step %s", command.step_id)


class ReorderStepsHandler(_StepHandler):
    """Handler for ReorderStepsCommand."""

    async def handle(self, command: ReorderStepsCommand) -> None:
        """
        Renumber the regular steps of a requirement.

        Raises:
            ValidationError: If the list is empty or repeats an id
            StepNotFoundError: If an id is not a regular step of the requirement
        """
        await self._require_requirement(command.requirement_id)
        await self.sequencer.reorder(command.requirement_id, command.ordered_step_ids)
