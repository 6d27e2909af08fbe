"""
Handlers that copy steps into an application.

Provisioning copies a requirement's whole template into an application
once per partition. Partial copies append caller-chosen steps after the
application's current maximum order and do not deduplicate.
"""

import logging
import uuid
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from applications.domain.application_step import ApplicationStep
from applications.domain.events import ExpertStepsProvisioned
from applications.ports.application_repository import ApplicationRepository
from applications.ports.application_step_repository import ApplicationStepRepository
from core.domain.events import EventBus
from core.domain.exceptions import (
    ApplicationNotFoundError,
    NotFoundError,
    ValidationError,
)
from core.metrics import applications_provisioned_total, steps_copied_total
from provisioning.application.commands.copy_commands import (
    CopyApplicationExpertStepsCommand,
    CopySelectedExpertStepsCommand,
    ProvisionApplicationStepsCommand,
)
from provisioning.domain.ordering import OrderingSequencer
from provisioning.domain.services import SourceStep, order_like
from requirements.domain.services import RequirementResolver
from requirements.ports.requirement_repository import RequirementRepository
from requirements.ports.requirement_step_repository import RequirementStepRepository

logger = logging.getLogger(__name__)

CREATED = "created"
ALREADY_PROVISIONED = "already_provisioned"
EMPTY_TEMPLATE = "empty_template"


@dataclass
class ProvisioningOutcome:
    """What a provisioning run did."""

    outcome: str
    requirement_id: Optional[uuid.UUID] = None
    steps: List[ApplicationStep] = field(default_factory=list)


async def _require_application(repository: ApplicationRepository, application_id) -> None:
    if not await repository.find_by_id(application_id):
        raise ApplicationNotFoundError(f"Application {application_id} not found")


class ProvisionApplicationStepsHandler:
    """
    Handler for ProvisionApplicationStepsCommand.

    Copies one partition of the requirement template (expert steps by
    default) into the application. A partition that already holds steps
    is left untouched, so running the handler again is a no-op.
    """

    def __init__(
        self,
        application_repository: ApplicationRepository,
        application_step_repository: ApplicationStepRepository,
        requirement_repository: RequirementRepository,
        step_repository: RequirementStepRepository,
        event_bus: EventBus,
        is_expert_step: bool = True,
    ):
        """Initialize handler with repositories."""
        self.application_repository = application_repository
        self.application_step_repository = application_step_repository
        self.step_repository = step_repository
        self.resolver = RequirementResolver(requirement_repository)
        self.event_bus = event_bus
        self.is_expert_step = is_expert_step

    @property
    def partition(self) -> str:
        return "expert" if self.is_expert_step else "regular"

    async def handle(self, command: ProvisionApplicationStepsCommand) -> ProvisioningOutcome:
        """
        Handle provisioning.

        Args:
            command: ProvisionApplicationStepsCommand

        Returns:
            ProvisioningOutcome; ``steps`` is empty unless rows were created

        Raises:
            ApplicationNotFoundError: If the application does not exist
            ValueError: If the state or license type name is blank
        """
        await _require_application(self.application_repository, command.application_id)

        if await self.application_step_repository.has_steps(
            command.application_id, self.is_expert_step
        ):
            logger.debug(
                "Application %s already has %s steps; skipping provisioning",
                command.application_id,
                self.partition,
            )
            applications_provisioned_total.labels(outcome=ALREADY_PROVISIONED).inc()
            return ProvisioningOutcome(outcome=ALREADY_PROVISIONED)

        requirement_id = await self.resolver.resolve(command.state, command.license_type_name)
        template = await self.step_repository.find_by_requirement(
            requirement_id, is_expert_step=self.is_expert_step
        )
        if not template:
            logger.debug(
                "Requirement %s has no %s steps to provision", requirement_id, self.partition
            )
            applications_provisioned_total.labels(outcome=EMPTY_TEMPLATE).inc()
            return ProvisioningOutcome(outcome=EMPTY_TEMPLATE, requirement_id=requirement_id)

        snapshots = [
            ApplicationStep.snapshot_of(step, command.application_id, order)
            for order, step in enumerate(template, start=1)
        ]
        saved = await self.application_step_repository.save_many(snapshots)

        applications_provisioned_total.labels(outcome=CREATED).inc()
        steps_copied_total.labels(target="application", partition=self.partition).inc(len(saved))
        logger.info(
            "Provisioned %d %s steps into application %s from requirement %s",
            len(saved),
            self.partition,
            command.application_id,
            requirement_id,
        )

        if self.is_expert_step:
            await self.event_bus.publish(
                ExpertStepsProvisioned(
                    application_id=command.application_id,
                    requirement_id=requirement_id,
                    step_count=len(saved),
                )
            )

        return ProvisioningOutcome(outcome=CREATED, requirement_id=requirement_id, steps=saved)


class _AppendExpertStepsHandler:
    """Appends copies of source steps after the application's highest expert order."""

    def __init__(
        self,
        application_repository: ApplicationRepository,
        application_step_repository: ApplicationStepRepository,
    ):
        self.application_repository = application_repository
        self.application_step_repository = application_step_repository
        self.sequencer = OrderingSequencer(application_step_repository)

    async def _append(
        self,
        application_id: uuid.UUID,
        sources: Sequence[SourceStep],
    ) -> List[ApplicationStep]:
        orders = await self.sequencer.allocate(application_id, True, len(sources))
        copies = [self._copy(step, application_id, order) for step, order in zip(sources, orders)]
        saved = await self.application_step_repository.save_many(copies)
        steps_copied_total.labels(target="application", partition="expert").inc(len(saved))
        logger.info("Appended %d expert steps to application %s", len(saved), application_id)
        return saved

    def _copy(self, step: SourceStep, application_id: uuid.UUID, order: int) -> ApplicationStep:
        raise NotImplementedError


class CopySelectedExpertStepsHandler(_AppendExpertStepsHandler):
    """Handler for CopySelectedExpertStepsCommand."""

    def __init__(
        self,
        application_repository: ApplicationRepository,
        application_step_repository: ApplicationStepRepository,
        step_repository: RequirementStepRepository,
    ):
        """Initialize handler with repositories."""
        super().__init__(application_repository, application_step_repository)
        self.step_repository = step_repository

    def _copy(self, step, application_id, order):
        return ApplicationStep.snapshot_of(step, application_id, order)

    async def handle(self, command: CopySelectedExpertStepsCommand) -> List[ApplicationStep]:
        """
        Append the chosen template expert steps of one requirement.

        Raises:
            ValidationError: If no step ids were given
            ApplicationNotFoundError: If the application does not exist
            NotFoundError: If none of the ids are expert steps of the requirement
        """
        if not command.step_ids:
            raise ValidationError("No expert steps selected")
        await _require_application(self.application_repository, command.application_id)

        sources = await self.step_repository.find_by_ids(
            command.step_ids, is_expert_step=True, requirement_id=command.requirement_id
        )
        if not sources:
            raise NotFoundError("Failed to fetch source expert steps")
        return await self._append(command.application_id, order_like(sources, command.step_ids))


class CopyApplicationExpertStepsHandler(_AppendExpertStepsHandler):
    """Handler for CopyApplicationExpertStepsCommand."""

    def _copy(self, step, application_id, order):
        return step.copy_to(application_id, order)

    async def handle(self, command: CopyApplicationExpertStepsCommand) -> List[ApplicationStep]:
        """
        Append expert steps copied from other applications.

        Raises:
            ValidationError: If no step ids were given
            ApplicationNotFoundError: If the application does not exist
            NotFoundError: If none of the ids are application expert steps
        """
        if not command.source_application_step_ids:
            raise ValidationError("No expert steps selected")
        await _require_application(self.application_repository, command.application_id)

        sources = await self.application_step_repository.find_by_ids(
            command.source_application_step_ids, is_expert_step=True
        )
        if not sources:
            raise NotFoundError("Failed to fetch source expert steps")
        return await self._append(
            command.application_id,
            order_like(sources, command.source_application_step_ids),
        )
