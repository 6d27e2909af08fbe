"""
Application DTOs returned by application actions.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from applications.domain.application import Application
from applications.domain.application_step import ApplicationStep


@dataclass
class ApplicationDTO:
    """DTO for application information."""

    id: uuid.UUID
    owner_id: uuid.UUID
    application_name: str
    state: str
    license_type: Optional[str]
    assigned_expert_id: Optional[uuid.UUID]
    status: str
    progress_percentage: int
    revision_reason: Optional[str]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, application: Application) -> "ApplicationDTO":
        return cls(
            id=application.id,
            owner_id=application.owner_id,
            application_name=application.application_name,
            state=application.state,
            license_type=application.license_type_name,
            assigned_expert_id=application.assigned_expert_id,
            status=application.status.value,
            progress_percentage=application.progress_percentage,
            revision_reason=application.revision_reason,
            created_at=application.created_at,
            updated_at=application.updated_at,
        )


@dataclass
class ApplicationStepDTO:
    """DTO for an application step."""

    id: uuid.UUID
    application_id: uuid.UUID
    step_name: str
    step_order: int
    description: Optional[str]
    instructions: Optional[str]
    phase: Optional[str]
    is_expert_step: bool
    is_completed: bool
    completed_at: Optional[datetime]

    @classmethod
    def from_domain(cls, step: ApplicationStep) -> "ApplicationStepDTO":
        return cls(
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
