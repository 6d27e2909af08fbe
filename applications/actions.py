"""
Application actions.

Public operations on applications and their steps. Each takes the
DataAccess to work against and returns an OperationResult or VoidResult;
none of them raises.
"""

from typing import List, Optional

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
from applications.application.commands.step_commands import (
    AddExpertStepCommand,
    DeleteApplicationExpertStepCommand,
    SetStepCompletionCommand,
    UpdateApplicationExpertStepCommand,
)
from applications.application.dto.application_dto import ApplicationDTO, ApplicationStepDTO
from applications.application.handlers.lifecycle_handlers import (
    ApproveApplicationHandler,
    ApproveReviewHandler,
    AssignExpertHandler,
    CloseApplicationHandler,
    RejectApplicationHandler,
    RequestRevisionHandler,
    SubmitApplicationHandler,
    SubmitForReviewHandler,
)
from applications.application.handlers.step_handlers import (
    AddExpertStepHandler,
    DeleteApplicationExpertStepHandler,
    SetStepCompletionHandler,
    UpdateApplicationExpertStepHandler,
)
from core.boundary import Identifier, parse_id, returns_result, returns_void_result
from core.domain.exceptions import ApplicationNotFoundError
from core.infrastructure.container import DataAccess
from core.infrastructure.view_invalidation import APPLICATIONS_VIEW, application_view


async def _mark_stale(data: DataAccess, application_id) -> None:
    await data.views.mark_stale(application_view(application_id))
    await data.views.mark_stale(APPLICATIONS_VIEW)


# Reads


@returns_result
async def get_application(data: DataAccess, application_id: Identifier) -> ApplicationDTO:
    application_id = parse_id(application_id, "application ID")
    application = await data.applications.find_by_id(application_id)
    if not application:
        raise ApplicationNotFoundError(f"Application {application_id} not found")
    return ApplicationDTO.from_domain(application)


@returns_result
async def get_application_steps(
    data: DataAccess, application_id: Identifier
) -> List[ApplicationStepDTO]:
    """Both partitions of an application: regular steps first, each by order."""
    steps = await data.application_steps.find_by_application(
        parse_id(application_id, "application ID")
    )
    return [ApplicationStepDTO.from_domain(step) for step in steps]


@returns_result
async def get_expert_application_steps(
    data: DataAccess, application_id: Identifier
) -> List[ApplicationStepDTO]:
    steps = await data.application_steps.find_by_application(
        parse_id(application_id, "application ID"), is_expert_step=True
    )
    return [ApplicationStepDTO.from_domain(step) for step in steps]


# Lifecycle


@returns_result
async def submit_application(
    data: DataAccess,
    owner_id: Identifier,
    application_name: str,
    state: str,
    license_type_name: Optional[str] = None,
) -> ApplicationDTO:
    """Create a new application in the requested status."""
    handler = SubmitApplicationHandler(data.applications, data.event_bus)
    application = await handler.handle(
        SubmitApplicationCommand(
            owner_id=parse_id(owner_id, "owner ID"),
            application_name=application_name,
            state=state,
            license_type_name=license_type_name,
        )
    )
    await data.views.mark_stale(APPLICATIONS_VIEW)
    return ApplicationDTO.from_domain(application)


@returns_result
async def assign_expert(
    data: DataAccess, application_id: Identifier, expert_id: Identifier
) -> ApplicationDTO:
    """Assign or reassign the expert without changing the status."""
    handler = AssignExpertHandler(data.applications, data.event_bus)
    application = await handler.handle(
        AssignExpertCommand(
            application_id=parse_id(application_id, "application ID"),
            expert_id=parse_id(expert_id, "expert ID"),
        )
    )
    await _mark_stale(data, application.id)
    return ApplicationDTO.from_domain(application)


@returns_result
async def approve_application(data: DataAccess, application_id: Identifier) -> ApplicationDTO:
    """
    Admin approval: requested -> in_progress.

    Fails without an assigned expert. Step provisioning is triggered
    downstream; do not assume steps exist once this returns.
    """
    handler = ApproveApplicationHandler(data.applications, data.event_bus)
    application = await handler.handle(
        ApproveApplicationCommand(application_id=parse_id(application_id, "application ID"))
    )
    await _mark_stale(data, application.id)
    return ApplicationDTO.from_domain(application)


@returns_result
async def reject_application(data: DataAccess, application_id: Identifier) -> ApplicationDTO:
    handler = RejectApplicationHandler(data.applications, data.event_bus)
    application = await handler.handle(
        RejectApplicationCommand(application_id=parse_id(application_id, "application ID"))
    )
    await _mark_stale(data, application.id)
    return ApplicationDTO.from_domain(application)


@returns_result
async def submit_for_review(data: DataAccess, application_id: Identifier) -> ApplicationDTO:
    handler = SubmitForReviewHandler(data.applications, data.event_bus)
    application = await handler.handle(
        SubmitForReviewCommand(application_id=parse_id(application_id, "application ID"))
    )
    await _mark_stale(data, application.id)
    return ApplicationDTO.from_domain(application)


@returns_result
async def approve_review(data: DataAccess, application_id: Identifier) -> ApplicationDTO:
    """Expert approval: under_review -> approved. Clears the revision reason."""
    handler = ApproveReviewHandler(data.applications, data.event_bus)
    application = await handler.handle(
        ApproveReviewCommand(application_id=parse_id(application_id, "application ID"))
    )
    await _mark_stale(data, application.id)
    return ApplicationDTO.from_domain(application)


@returns_result
async def request_revision(
    data: DataAccess, application_id: Identifier, reason: Optional[str]
) -> ApplicationDTO:
    """Expert sends the application back with a non-empty reason."""
    handler = RequestRevisionHandler(data.applications, data.event_bus)
    application = await handler.handle(
        RequestRevisionCommand(
            application_id=parse_id(application_id, "application ID"), reason=reason
        )
    )
    await _mark_stale(data, application.id)
    return ApplicationDTO.from_domain(application)


@returns_result
async def close_application(data: DataAccess, application_id: Identifier) -> ApplicationDTO:
    handler = CloseApplicationHandler(data.applications, data.event_bus)
    application = await handler.handle(
        CloseApplicationCommand(application_id=parse_id(application_id, "application ID"))
    )
    await _mark_stale(data, application.id)
    return ApplicationDTO.from_domain(application)


# Steps


@returns_result
async def add_expert_step_to_application(
    data: DataAccess,
    application_id: Identifier,
    step_name: str,
    description: Optional[str] = None,
    phase: Optional[str] = None,
) -> ApplicationStepDTO:
    handler = AddExpertStepHandler(data.applications, data.application_steps)
    step = await handler.handle(
        AddExpertStepCommand(
            application_id=parse_id(application_id, "application ID"),
            step_name=step_name,
            description=description,
            phase=phase,
        )
    )
    await _mark_stale(data, step.application_id)
    return ApplicationStepDTO.from_domain(step)


@returns_result
async def update_application_expert_step(
    data: DataAccess,
    application_id: Identifier,
    step_id: Identifier,
    step_name: str,
    description: Optional[str] = None,
    phase: Optional[str] = None,
) -> ApplicationStepDTO:
    handler = UpdateApplicationExpertStepHandler(data.applications, data.application_steps)
    step = await handler.handle(
        UpdateApplicationExpertStepCommand(
            application_id=parse_id(application_id, "application ID"),
            step_id=parse_id(step_id, "step ID"),
            step_name=step_name,
            description=description,
            phase=phase,
        )
    )
    await _mark_stale(data, step.application_id)
    return ApplicationStepDTO.from_domain(step)


@returns_void_result
async def delete_application_expert_step(
    data: DataAccess, application_id: Identifier, step_id: Identifier
) -> None:
    application_id = parse_id(application_id, "application ID")
    handler = DeleteApplicationExpertStepHandler(data.applications, data.application_steps)
    await handler.handle(
        DeleteApplicationExpertStepCommand(
            application_id=application_id, step_id=parse_id(step_id, "step ID")
        )
    )
    await _mark_stale(data, application_id)


@returns_result
async def set_step_completion(
    data: DataAccess, application_id: Identifier, step_id: Identifier, is_completed: bool
) -> ApplicationDTO:
    """Toggle a step's completion; the result carries the refreshed progress."""
    handler = SetStepCompletionHandler(data.applications, data.application_steps)
    application = await handler.handle(
        SetStepCompletionCommand(
            application_id=parse_id(application_id, "application ID"),
            step_id=parse_id(step_id, "step ID"),
            is_completed=is_completed,
        )
    )
    await _mark_stale(data, application.id)
    return ApplicationDTO.from_domain(application)
