"""
ApplicationStep domain entity.

An application step is a snapshot copy of a template step taken when the
application is provisioned (or when steps are appended later). After the
copy it is independent: edits to the source never reach it.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

from core.domain.value_objects import StepSignature
from requirements.domain.requirement_step import RequirementStep


@dataclass(frozen=True)
class ApplicationStep:
    """Application step domain entity."""

    id: uuid.UUID
    application_id: uuid.UUID
    name: str
    order: int
    description: Optional[str]
    instructions: Optional[str]
    phase: Optional[str]
    is_expert_step: bool
    is_completed: bool
    completed_at: Optional[datetime]
    created_at: datetime

    def __post_init__(self):
        """Validate application step entity."""
        if not self.application_id:
            raise ValueError("Application ID is required")
        if not self.name or not self.name.strip():
            raise ValueError("Step name is required")
        if self.order < 1:
            raise ValueError("Step order must be at least 1")

    @classmethod
    def create(
        cls,
        application_id: uuid.UUID,
        name: str,
        order: int,
        description: Optional[str] = None,
        instructions: Optional[str] = None,
        phase: Optional[str] = None,
        is_expert_step: bool = True,
    ) -> "ApplicationStep":
        return cls(
            id=uuid.uuid4(),
            application_id=application_id,
            name=name.strip(),
            order=order,
            description=description or None,
            instructions=instructions or None,
            phase=phase or None,
            is_expert_step=is_expert_step,
            is_completed=False,
            completed_at=None,
            created_at=datetime.now(timezone.utc),
        )

    @classmethod
    def snapshot_of(
        cls, step: RequirementStep, application_id: uuid.UUID, order: int
    ) -> "ApplicationStep":
        """Materialize a template step into an application."""
        return cls.create(
            application_id=application_id,
            name=step.name,
            order=order,
            description=step.description,
            instructions=step.instructions,
            phase=step.phase,
            is_expert_step=step.is_expert_step,
        )

    def copy_to(self, application_id: uuid.UUID, order: int) -> "ApplicationStep":
        """Copy this step into another application, uncompleted."""
        return ApplicationStep.create(
            application_id=application_id,
            name=self.name,
            order=order,
            description=self.description,
            instructions=self.instructions,
            phase=self.phase,
            is_expert_step=self.is_expert_step,
        )

    @property
    def signature(self) -> StepSignature:
        return StepSignature.of(self.name, self.description, self.phase)

    def mark_completed(self, is_completed: bool) -> "ApplicationStep":
        """Toggle completion, stamping or clearing completed_at."""
        return replace(
            self,
            is_completed=is_completed,
            completed_at=datetime.now(timezone.utc) if is_completed else None,
        )

    def with_details(
        self, name: str, description: Optional[str], phase: Optional[str]
    ) -> "ApplicationStep":
        return replace(
            self, name=name.strip(), description=description or None, phase=phase or None
        )
