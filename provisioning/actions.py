"""
Provisioning actions.

Public copy operations. Each takes the DataAccess to work against and
returns a result object instead of raising.
"""

import logging
from typing import List, Optional, Sequence

from applications.application.dto.application_dto import ApplicationStepDTO
from core.boundary import Identifier, parse_id, parse_ids, returns_result
from core.infrastructure.container import DataAccess
from core.infrastructure.view_invalidation import (
    APPLICATIONS_VIEW,
    LICENSE_REQUIREMENTS_VIEW,
    application_view,
)
from provisioning.application.commands.copy_commands import (
    CopyApplicationExpertStepsCommand,
    CopyDocumentsCommand,
    CopyExpertStepsCommand,
    CopySelectedExpertStepsCommand,
    CopyStepsCommand,
    ProvisionApplicationStepsCommand,
)
from provisioning.application.handlers.copy_to_application_handlers import (
    CREATED,
    CopyApplicationExpertStepsHandler,
    CopySelectedExpertStepsHandler,
    ProvisionApplicationStepsHandler,
    ProvisioningOutcome,
)
from provisioning.application.handlers.copy_to_requirement_handlers import (
    CopyDocumentsHandler,
    CopyExpertStepsHandler,
    CopyStepsHandler,
)
from requirements.application.dto.requirement_dto import (
    RequirementDocumentDTO,
    RequirementStepDTO,
)

logger = logging.getLogger(__name__)


async def _mark_application_stale(data: DataAccess, application_id) -> None:
    await data.views.mark_stale(application_view(application_id))
    await data.views.mark_stale(APPLICATIONS_VIEW)


@returns_result
async def copy_steps(
    data: DataAccess, target_requirement_id: Identifier, source_step_ids: Sequence[Identifier]
) -> List[RequirementStepDTO]:
    """Copy template steps into another requirement, appended per partition."""
    handler = CopyStepsHandler(data.requirements, data.requirement_steps)
    steps = await handler.handle(
        CopyStepsCommand(
            target_requirement_id=parse_id(target_requirement_id, "requirement ID"),
            source_step_ids=parse_ids(source_step_ids, "step ID"),
        )
    )
    await data.views.mark_stale(LICENSE_REQUIREMENTS_VIEW)
    return [RequirementStepDTO.from_domain(step) for step in steps]


@returns_result
async def copy_documents(
    data: DataAccess,
    target_requirement_id: Identifier,
    source_document_ids: Sequence[Identifier],
) -> List[RequirementDocumentDTO]:
    """Copy required documents into another requirement."""
    handler = CopyDocumentsHandler(data.requirements, data.requirement_documents)
    documents = await handler.handle(
        CopyDocumentsCommand(
            target_requirement_id=parse_id(target_requirement_id, "requirement ID"),
            source_document_ids=parse_ids(source_document_ids, "document ID"),
        )
    )
    await data.views.mark_stale(LICENSE_REQUIREMENTS_VIEW)
    return [RequirementDocumentDTO.from_domain(document) for document in documents]


@returns_result
async def copy_expert_steps(
    data: DataAccess, target_requirement_id: Identifier, source_ids: Sequence[Identifier]
) -> List[RequirementStepDTO]:
    """
    Copy expert steps into a requirement's expert template.

    Ids are looked up among template expert steps first and among
    application expert steps only if none matched there. Duplicate
    (name, description, phase) triples are inserted once.
    """
    handler = CopyExpertStepsHandler(
        data.requirements, data.requirement_steps, data.application_steps
    )
    steps = await handler.handle(
        CopyExpertStepsCommand(
            target_requirement_id=parse_id(target_requirement_id, "requirement ID"),
            source_ids=parse_ids(source_ids, "step ID"),
        )
    )
    await data.views.mark_stale(LICENSE_REQUIREMENTS_VIEW)
    return [RequirementStepDTO.from_domain(step) for step in steps]


async def _provision_application_steps(
    data: DataAccess,
    application_id: Identifier,
    state: str,
    license_type_name: Optional[str],
    is_expert_step: bool = True,
) -> ProvisioningOutcome:
    """
    Copy one partition of the requirement template into an application.

    Raises on failure; the public wrappers convert errors to results.
    """
    handler = ProvisionApplicationStepsHandler(
        data.applications,
        data.application_steps,
        data.requirements,
        data.requirement_steps,
        data.event_bus,
        is_expert_step=is_expert_step,
    )
    outcome = await handler.handle(
        ProvisionApplicationStepsCommand(
            application_id=parse_id(application_id, "application ID"),
            state=state,
            license_type_name=license_type_name,
        )
    )
    if outcome.outcome == CREATED:
        await _mark_application_stale(data, application_id)
    return outcome


@returns_result
async def copy_expert_steps_from_requirement_to_application(
    data: DataAccess, application_id: Identifier, state: str, license_type_name: Optional[str]
) -> List[ApplicationStepDTO]:
    """
    Provision an application's expert steps from its requirement.

    Idempotent: an application that already has expert steps gets no new
    rows and the call succeeds with an empty list. Never raises.
    """
    outcome = await _provision_application_steps(data, application_id, state, license_type_name)
    return [ApplicationStepDTO.from_domain(step) for step in outcome.steps]


@returns_result
async def copy_regular_steps_from_requirement_to_application(
    data: DataAccess, application_id: Identifier, state: str, license_type_name: Optional[str]
) -> List[ApplicationStepDTO]:
    """Provision an application's regular steps; idempotent like the expert variant."""
    outcome = await _provision_application_steps(
        data, application_id, state, license_type_name, is_expert_step=False
    )
    return [ApplicationStepDTO.from_domain(step) for step in outcome.steps]


@returns_result
async def copy_selected_expert_steps_from_requirement_to_application(
    data: DataAccess,
    application_id: Identifier,
    requirement_id: Identifier,
    step_ids: Sequence[Identifier],
) -> List[ApplicationStepDTO]:
    """Append chosen template expert steps to an application. Repeats duplicate."""
    handler = CopySelectedExpertStepsHandler(
        data.applications, data.application_steps, data.requirement_steps
    )
    steps = await handler.handle(
        CopySelectedExpertStepsCommand(
            application_id=parse_id(application_id, "application ID"),
            requirement_id=parse_id(requirement_id, "requirement ID"),
            step_ids=parse_ids(step_ids, "step ID"),
        )
    )
    await _mark_application_stale(data, application_id)
    return [ApplicationStepDTO.from_domain(step) for step in steps]


@returns_result
async def copy_expert_steps_from_application_steps_to_application(
    data: DataAccess,
    application_id: Identifier,
    source_application_step_ids: Sequence[Identifier],
) -> List[ApplicationStepDTO]:
    """Append expert steps taken from other applications. Repeats duplicate."""
    handler = CopyApplicationExpertStepsHandler(data.applications, data.application_steps)
    steps = await handler.handle(
        CopyApplicationExpertStepsCommand(
            application_id=parse_id(application_id, "application ID"),
            source_application_step_ids=parse_ids(source_application_step_ids, "step ID"),
        )
    )
    await _mark_application_stale(data, application_id)
    return [ApplicationStepDTO.from_domain(step) for step in steps]
