"""
RequirementStep domain entity.

Steps belong to a requirement and live in one of two independently
numbered partitions: regular steps and expert steps. Only expert steps
carry a phase.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

from core.domain.value_objects import DEFAULT_EXPERT_STEP_PHASE, StepSignature


@dataclass(frozen=True)
class RequirementStep:
    """Requirement step domain entity."""

    id: uuid.UUID
    requirement_id: uuid.UUID
    name: str
    order: int
    description: Optional[str]
    instructions: Optional[str]
    is_required: bool
    estimated_days: Optional[int]
    is_expert_step: bool
    phase: Optional[str]
    created_at: datetime

    def __post_init__(self):
        """Validate requirement step entity."""
        if not self.requirement_id:
            raise ValueError("Requirement ID is required")
        if not self.name or not self.name.strip():
            raise ValueError("Step name is required")
        if self.order < 1:
            raise ValueError("Step order must be at least 1")
        if self.estimated_days is not None and self.estimated_days < 0:
            raise ValueError("Estimated days cannot be negative")
        if self.phase and not self.is_expert_step:
            raise ValueError("Only expert steps can have a phase")

    @classmethod
    def create(
        cls,
        requirement_id: uuid.UUID,
        name: str,
        order: int,
        description: Optional[str] = None,
        instructions: Optional[str] = None,
        is_required: bool = True,
        estimated_days: Optional[int] = None,
    ) -> "RequirementStep":
        """
        Create a new regular step.

        Args:
            requirement_id: Owning requirement UUID
            name: Step name
            order: Position within the regular partition
            description: Optional description
            instructions: Optional instructions
            is_required: Whether the step is mandatory
            estimated_days: Optional estimate in days

        Returns:
            RequirementStep entity instance
        """
        return cls(
            id=uuid.uuid4(),
            requirement_id=requirement_id,
            name=name.strip(),
            order=order,
            description=description or None,
            instructions=instructions or None,
            is_required=is_required,
            estimated_days=estimated_days,
            is_expert_step=False,
            phase=None,
            created_at=datetime.now(timezone.utc),
        )

    @classmethod
    def create_expert(
        cls,
        requirement_id: uuid.UUID,
        name: str,
        order: int,
        phase: Optional[str] = None,
        description: Optional[str] = None,
        instructions: Optional[str] = None,
    ) -> "RequirementStep":
        """Create a new expert template step; blank phases get the default phase."""
        return cls(
            id=uuid.uuid4(),
            requirement_id=requirement_id,
            name=name.strip(),
            order=order,
            description=description or None,
            instructions=instructions or None,
            is_required=True,
            estimated_days=None,
            is_expert_step=True,
            phase=phase or DEFAULT_EXPERT_STEP_PHASE,
            created_at=datetime.now(timezone.utc),
        )

    @property
    def signature(self) -> StepSignature:
        return StepSignature.of(self.name, self.description, self.phase)

    def copy_to(self, requirement_id: uuid.UUID, order: int) -> "RequirementStep":
        """
        Copy this step into another requirement.

        The copy gets a fresh id and the given order and keeps its partition.
        """
        return replace(
            self,
            id=uuid.uuid4(),
            requirement_id=requirement_id,
            order=order,
            created_at=datetime.now(timezone.utc),
        )

    def with_details(
        self,
        name: str,
        description: Optional[str],
        instructions: Optional[str] = None,
        is_required: Optional[bool] = None,
        estimated_days: Optional[int] = None,
        phase: Optional[str] = None,
    ) -> "RequirementStep":
        """Return a copy with edited details; the order is never changed here."""
        return replace(
            self,
            name=name.strip(),
            description=description or None,
            instructions=instructions if instructions is not None else self.instructions,
            is_required=self.is_required if is_required is None else is_required,
            estimated_days=estimated_days if not self.is_expert_step else None,
            phase=(phase or self.phase or DEFAULT_EXPERT_STEP_PHASE) if self.is_expert_step else None,
        )
