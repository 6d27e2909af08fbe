"""
Requirement step commands.

Commands for authoring the regular and expert steps of a requirement.
"""

import uuid
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class CreateStepCommand:
    """Append a regular step to a requirement."""

    requirement_id: uuid.UUID
    step_name: str
    description: Optional[str] = None
    instructions: Optional[str] = None
    estimated_days: Optional[int] = None
    is_required: bool = True


@dataclass
class CreateExpertStepCommand:
    """Append an expert step to a requirement's expert template."""

    requirement_id: uuid.UUID
    step_title: str
    phase: Optional[str] = None
    description: Optional[str] = None
    instructions: Optional[str] = None


@dataclass
class UpdateStepCommand:
    """Edit the details of a regular step. The order is never changed here."""

    step_id: uuid.UUID
    step_name: str
    description: Optional[str] = None
    instructions: Optional[str] = None
    estimated_days: Optional[int] = None
    is_required: bool = True


@dataclass
class UpdateExpertStepCommand:
    """Edit the details of an expert template step."""

    step_id: uuid.UUID
    step_title: str
    phase: Optional[str] = None
    description: Optional[str] = None
    instructions: Optional[str] = None


@dataclass
class DeleteStepCommand:
    """Delete a step from one partition; copies in applications are kept."""

    step_id: uuid.UUID
    is_expert_step: bool = False


@dataclass
class ReorderStepsCommand:
    """Renumber a requirement's regular steps in the given sequence."""

    requirement_id: uuid.UUID
    ordered_step_ids: List[uuid.UUID] = field(default_factory=list)
