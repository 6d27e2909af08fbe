"""
Application lifecycle handlers.

Handlers for submitting an application, assigning its expert and moving
it between statuses. A rejected transition raises before anything is
saved, so the stored application is never partially updated.
"""
import logging
from typing import Callable

from applications.application.commands.lifecycle_commands import (
    ApproveApplicationCommand,
    ApproveReviewCommand,
    AssignExpertCommand,
    CloseApplicationCommand,
    RejectApplicationCommand,
    RequestRevisionCommand,
    SubmitApplicationCommand,
    SubmitForReviewCommand,
)
from applications.domain.application import Application
from applications.domain.events import (
    ApplicationApproved,
    ApplicationStatusChanged,
    ApplicationSubmitted,
    ExpertAssigned,
)
from applications.ports.application_repository import ApplicationRepository
from core.domain.events import EventBus
from core.domain.exceptions import ApplicationNotFoundError
from core.metrics import application_transitions_total

logger = logging.getLogger(__name__)


class SubmitApplicationHandler:
    """Handler for SubmitApplicationCommand."""

    def __init__(self, application_repository: ApplicationRepository, event_bus: EventBus):
        """Initialize handler with repository and event bus."""
        self.application_repository = application_repository
        self.event_bus = event_bus

    async def handle(self, command: SubmitApplicationCommand) -> Application:
        """
        Create an application in the requested status.

        Raises:
            ValueError: If the name or state is blank
        """
        application = Application.create(
            owner_id=command.owner_id,
            application_name=command.application_name,
            state=command.state,
            license_type_name=command.license_type_name,
        )
        saved = await self.application_repository.save(application)
        logger.info("Application %s submitted by %s", saved.id, saved.owner_id)

        await self.event_bus.publish(
            ApplicationSubmitted(application_id=saved.id, owner_id=saved.owner_id)
        )
        return saved


class _ApplicationHandler:
    def __init__(self, application_repository: ApplicationRepository, event_bus: EventBus):
        """Initialize handler with repository and event bus."""
        self.application_repository = application_repository
        self.event_bus = event_bus

    async def _load(self, application_id) -> Application:
        application = await self.application_repository.find_by_id(application_id)
        if not application:
            raise ApplicationNotFoundError(f"Application {application_id} not found")
        return application

    async def _transition(
        self, application_id, change: Callable[[Application], Application]
    ) -> Application:
        """Apply a status change, persist it and announce it."""
        application = await self._load(application_id)
        changed = change(application)
        if changed is application:
            return application

        saved = await self.application_repository.save(changed)
        from_status, to_status = application.status.value, saved.status.value
        application_transitions_total.labels(from_status=from_status, to_status=to_status).inc()
        logger.info("Application %s moved from %s to %s", saved.id, from_status, to_status)

        await self.event_bus.publish(
            ApplicationStatusChanged(
                application_id=saved.id, from_status=from_status, to_status=to_status
            )
        )
        return saved


class AssignExpertHandler(_ApplicationHandler):
    """Handler for AssignExpertCommand. The status is left as it is."""

    async def handle(self, command: AssignExpertCommand) -> Application:
        application = await self._load(command.application_id)
        saved = await self.application_repository.save(
            application.assign_expert(command.expert_id)
        )
        logger.info("Expert %s assigned to application %s", command.expert_id, saved.id)

        await self.event_bus.publish(
            ExpertAssigned(
                application_id=saved.id,
                expert_id=command.expert_id,
                previous_expert_id=application.assigned_expert_id,
            )
        )
        return saved


class ApproveApplicationHandler(_ApplicationHandler):
    """
    Handler for ApproveApplicationCommand.

    Publishes ApplicationApproved; subscribers provision the application's
    steps. Steps are not guaranteed to exist when this handler returns.
    """

    async def handle(self, command: ApproveApplicationCommand) -> Application:
        """
        Handle admin approval.

        Args:
            command: ApproveApplicationCommand

        Returns:
            Application in progress

        Raises:
            ApplicationNotFoundError: If application not found
            ExpertNotAssignedError: If no expert is assigned
            InvalidApplicationStatusError: If the application is not requested
        """
        saved = await self._transition(command.application_id, lambda a: a.approve())
        await self.event_bus.publish(
            ApplicationApproved(
                application_id=saved.id,
                state=saved.state,
                license_type_name=saved.license_type_name,
            )
        )
        return saved


class RejectApplicationHandler(_ApplicationHandler):
    """Handler for RejectApplicationCommand."""

    async def handle(self, command: RejectApplicationCommand) -> Application:
        return await self._transition(command.application_id, lambda a: a.reject())


class SubmitForReviewHandler(_ApplicationHandler):
    """Handler for SubmitForReviewCommand."""

    async def handle(self, command: SubmitForReviewCommand) -> Application:
        return await self._transition(command.application_id, lambda a: a.submit_for_review())


class ApproveReviewHandler(_ApplicationHandler):
    """Handler for ApproveReviewCommand."""

    async def handle(self, command: ApproveReviewCommand) -> Application:
        return await self._transition(command.application_id, lambda a: a.approve_review())


class RequestRevisionHandler(_ApplicationHandler):
    """Handler for RequestRevisionCommand."""

    async def handle(self, command: RequestRevisionCommand) -> Application:
        """
        Send the application back to its owner.

        Raises:
            RevisionReasonRequiredError: If the reason is blank
            InvalidApplicationStatusError: If the application is not under review
        """
        return await self._transition(
            command.application_id, lambda a: a.request_revision(command.reason)
        )


class CloseApplicationHandler(_ApplicationHandler):
    """Handler for CloseApplicationCommand. Closing a closed application is a no-op."""

    async def handle(self, command: CloseApplicationCommand) -> Application:
        return await self._transition(command.application_id, lambda a: a.close())
