"""
Application step handlers.

Expert step maintenance on a single application, and completion toggles
that keep the application's progress percentage current.
"""
import logging

from applications.application.commands.step_commands import (
    AddExpertStepCommand,
    DeleteApplicationExpertStepCommand,
    SetStepCompletionCommand,
    UpdateApplicationExpertStepCommand,
)
from applications.domain.application import Application
from applications.domain.application_step import ApplicationStep
from applications.ports.application_repository import ApplicationRepository
from applications.ports.application_step_repository import ApplicationStepRepository
from core.domain.exceptions import ApplicationNotFoundError, StepNotFoundError
from provisioning.domain.ordering import OrderingSequencer

logger = logging.getLogger(__name__)


class _ApplicationStepHandler:
    def __init__(
        self,
        application_repository: ApplicationRepository,
        step_repository: ApplicationStepRepository,
    ):
        """Initialize handler with repositories."""
        self.application_repository = application_repository
        self.step_repository = step_repository

    async def _load_application(self, application_id) -> Application:
        application = await self.application_repository.find_by_id(application_id)
        if not application:
            raise ApplicationNotFoundError(f"Application {application_id} not found")
        return application

    async def _load_step(self, application_id, step_id, is_expert_step=None) -> ApplicationStep:
        step = await self.step_repository.find_by_id(step_id)
        if (
            not step
            or step.application_id != application_id
            or (is_expert_step is not None and step.is_expert_step != is_expert_step)
        ):
            raise StepNotFoundError(f"Step {step_id} not found")
        return step


class AddExpertStepHandler(_ApplicationStepHandler):
    """Handler for AddExpertStepCommand."""

    async def handle(self, command: AddExpertStepCommand) -> ApplicationStep:
        """
        Append an expert step after the application's last expert step.

        Raises:
            ApplicationNotFoundError: If the application does not exist
            ValueError: If the step name is blank
        """
        await self._load_application(command.application_id)
        order = await OrderingSequencer(self.step_repository).next_order(
            command.application_id, True
        )
        step = ApplicationStep.create(
            application_id=command.application_id,
            name=command.step_name,
            order=order,
            description=command.description,
            phase=command.phase,
            is_expert_step=True,
        )
        saved = await self.step_repository.save(step)
        logger.info("Added expert step %s to application %s", saved.id, saved.application_id)
        return saved


class UpdateApplicationExpertStepHandler(_ApplicationStepHandler):
    """Handler for UpdateApplicationExpertStepCommand."""

    async def handle(self, command: UpdateApplicationExpertStepCommand) -> ApplicationStep:
        step = await self._load_step(command.application_id, command.step_id, is_expert_step=True)
        updated = step.with_details(
            name=command.step_name, description=command.description, phase=command.phase
        )
        return await self.step_repository.save(updated)


class DeleteApplicationExpertStepHandler(_ApplicationStepHandler):
    """Handler for DeleteApplicationExpertStepCommand."""

    async def handle(self, command: DeleteApplicationExpertStepCommand) -> None:
        await self._load_step(command.application_id, command.step_id, is_expert_step=True)
        await self.step_repository.delete(command.step_id, is_expert_step=True)
        logger.info(
            "Deleted expert step %s from application %s", command.step_id, command.application_id
        )


class SetStepCompletionHandler(_ApplicationStepHandler):
    """Handler for SetStepCompletionCommand."""

    async def handle(self, command: SetStepCompletionCommand) -> Application:
        """
        Toggle completion and recompute progress over all of the application's steps.

        Returns:
            Application with refreshed progress_percentage
        """
        application = await self._load_application(command.application_id)
        step = await self._load_step(command.application_id, command.step_id)
        await self.step_repository.save(step.mark_completed(command.is_completed))

        steps = await self.step_repository.find_by_application(command.application_id)
        completed = sum(1 for s in steps if s.is_completed)
        saved = await self.application_repository.save(
            application.with_progress(completed, len(steps))
        )
        logger.info(
            "Application %s progress %d%% (%d/%d steps)",
            saved.id,
            saved.progress_percentage,
            completed,
            len(steps),
        )
        return saved
