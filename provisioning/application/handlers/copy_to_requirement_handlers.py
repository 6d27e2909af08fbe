"""
Handlers that copy template rows from one requirement into another.
"""

import logging
from typing import List

from applications.ports.application_step_repository import ApplicationStepRepository
from core.domain.exceptions import (
    NotFoundError,
    RequirementNotFoundError,
    ValidationError,
)
from core.metrics import documents_copied_total, steps_copied_total
from provisioning.application.commands.copy_commands import (
    CopyDocumentsCommand,
    CopyExpertStepsCommand,
    CopyStepsCommand,
)
from provisioning.domain.ordering import OrderingSequencer
from provisioning.domain.services import (
    ApplicationExpertStepSource,
    FallbackStepSources,
    TemplateExpertStepSource,
    deduplicate_by_signature,
    order_like,
)
from requirements.domain.requirement_document import RequirementDocument
from requirements.domain.requirement_step import RequirementStep
from requirements.ports.requirement_document_repository import RequirementDocumentRepository
from requirements.ports.requirement_repository import RequirementRepository
from requirements.ports.requirement_step_repository import RequirementStepRepository

logger = logging.getLogger(__name__)


async def _require_requirement(repository: RequirementRepository, requirement_id) -> None:
    if not await repository.find_by_id(requirement_id):
        raise RequirementNotFoundError(f"License requirement {requirement_id} not found")


def _partition_label(is_expert_step: bool) -> str:
    return "expert" if is_expert_step else "regular"


class CopyStepsHandler:
    """Handler for CopyStepsCommand."""

    def __init__(
        self,
        requirement_repository: RequirementRepository,
        step_repository: RequirementStepRepository,
    ):
        """Initialize handler with repositories."""
        self.requirement_repository = requirement_repository
        self.step_repository = step_repository
        self.sequencer = OrderingSequencer(step_repository)

    async def handle(self, command: CopyStepsCommand) -> List[RequirementStep]:
        """
        Copy steps into the target requirement.

        Sources keep the order in which their ids were given and are
        appended after the target's current maximum, each partition
        numbered on its own.

        Args:
            command: CopyStepsCommand

        Returns:
            The inserted steps

        Raises:
            ValidationError: If no step ids were given
            RequirementNotFoundError: If the target requirement does not exist
            NotFoundError: If none of the ids resolve
        """
        if not command.source_step_ids:
            raise ValidationError("No steps selected")

        await _require_requirement(self.requirement_repository, command.target_requirement_id)

        sources = await self.step_repository.find_by_ids(command.source_step_ids)
        if not sources:
            raise NotFoundError("Failed to fetch source steps")
        sources = order_like(sources, command.source_step_ids)

        copies: List[RequirementStep] = []
        for is_expert_step in (False, True):
            partition = [step for step in sources if step.is_expert_step == is_expert_step]
            orders = await self.sequencer.allocate(
                command.target_requirement_id, is_expert_step, len(partition)
            )
            copies.extend(
                step.copy_to(command.target_requirement_id, order)
                for step, order in zip(partition, orders)
            )
            if partition:
                steps_copied_total.labels(
                    target="requirement", partition=_partition_label(is_expert_step)
                ).inc(len(partition))

        saved = await self.step_repository.save_many(copies)
        logger.info(
            "Copied %d steps into requirement %s", len(saved), command.target_requirement_id
        )
        return saved


class CopyDocumentsHandler:
    """Handler for CopyDocumentsCommand."""

    def __init__(
        self,
        requirement_repository: RequirementRepository,
        document_repository: RequirementDocumentRepository,
    ):
        """Initialize handler with repositories."""
        self.requirement_repository = requirement_repository
        self.document_repository = document_repository

    async def handle(self, command: CopyDocumentsCommand) -> List[RequirementDocument]:
        """
        Copy documents into the target requirement.

        Raises:
            ValidationError: If no document ids were given
            NotFoundError: If none of the ids resolve
        """
        if not command.source_document_ids:
            raise ValidationError("No documents selected")

        await _require_requirement(self.requirement_repository, command.target_requirement_id)

        sources = await self.document_repository.find_by_ids(command.source_document_ids)
        if not sources:
            raise NotFoundError("Failed to fetch source documents")

        copies = [
            document.copy_to(command.target_requirement_id)
            for document in order_like(sources, command.source_document_ids)
        ]
        saved = await self.document_repository.save_many(copies)
        documents_copied_total.inc(len(saved))
        logger.info(
            "Copied %d documents into requirement %s",
            len(saved),
            command.target_requirement_id,
        )
        return saved


class CopyExpertStepsHandler:
    """
    Handler for CopyExpertStepsCommand.

    Resolves sources through the template table first and falls back to
    application expert steps only when the template table has none of the
    ids. The batch is deduplicated by (name, description, phase) before it
    is appended to the target's expert template.
    """

    def __init__(
        self,
        requirement_repository: RequirementRepository,
        step_repository: RequirementStepRepository,
        application_step_repository: ApplicationStepRepository,
    ):
        """Initialize handler with repositories."""
        self.requirement_repository = requirement_repository
        self.step_repository = step_repository
        self.sequencer = OrderingSequencer(step_repository)
        self.sources = FallbackStepSources(
            [
                TemplateExpertStepSource(step_repository),
                ApplicationExpertStepSource(application_step_repository),
            ]
        )

    async def handle(self, command: CopyExpertStepsCommand) -> List[RequirementStep]:
        """
        Copy expert steps into the target requirement.

        Args:
            command: CopyExpertStepsCommand

        Returns:
            The inserted expert steps

        Raises:
            ValidationError: If no ids were given
            NotFoundError: If no source resolves any of the ids
        """
        if not command.source_ids:
            raise ValidationError("No expert steps selected")

        await _require_requirement(self.requirement_repository, command.target_requirement_id)

        sources = await self.sources.fetch(command.source_ids)
        if not sources:
            raise NotFoundError("Failed to fetch source expert steps")

        unique = deduplicate_by_signature(order_like(sources, command.source_ids))
        orders = await self.sequencer.allocate(
            command.target_requirement_id, True, len(unique)
        )
        copies = [
            RequirementStep.create_expert(
                requirement_id=command.target_requirement_id,
                name=step.name,
                order=order,
                phase=step.phase,
                description=step.description,
                instructions=step.instructions,
            )
            for step, order in zip(unique, orders)
        ]

        saved = await self.step_repository.save_many(copies)
        steps_copied_total.labels(target="requirement", partition="expert").inc(len(saved))
        logger.info(
            "Copied %d expert steps into requirement %s (%d duplicates skipped)",
            len(saved),
            command.target_requirement_id,
            len(sources) - len(unique),
        )
        return saved
