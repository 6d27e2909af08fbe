"""
Application step commands.
"""

import uuid
from dataclasses import dataclass
from typing import Optional


@dataclass
class AddExpertStepCommand:
    """Append an expert step to one application."""

    application_id: uuid.UUID
    step_name: str
    description: Optional[str] = None
    phase: Optional[str] = None


@dataclass
class UpdateApplicationExpertStepCommand:
    application_id: uuid.UUID
    step_id: uuid.UUID
    step_name: str
    description: Optional[str] = None
    phase: Optional[str] = None


@dataclass
class DeleteApplicationExpertStepCommand:
    application_id: uuid.UUID
    step_id: uuid.UUID


@dataclass
class SetStepCompletionCommand:
    """Toggle a step's completion and refresh the application's progress."""

    application_id: uuid.UUID
    step_id: uuid.UUID
    is_completed: bool
