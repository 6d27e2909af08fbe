"""
Copy commands.

Commands that materialize template rows into another requirement or into
an application.
"""

import uuid
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class CopyStepsCommand:
    """Copy template steps into another requirement."""

    target_requirement_id: uuid.UUID
    source_step_ids: List[uuid.UUID] = field(default_factory=list)


@dataclass
class CopyDocumentsCommand:
    """Copy required documents into another requirement."""

    target_requirement_id: uuid.UUID
    source_document_ids: List[uuid.UUID] = field(default_factory=list)


@dataclass
class CopyExpertStepsCommand:
    """
    Copy expert steps into a requirement's expert template.

    Source ids may name template expert steps or application expert steps.
    """

    target_requirement_id: uuid.UUID
    source_ids: List[uuid.UUID] = field(default_factory=list)


@dataclass
class ProvisionApplicationStepsCommand:
    """Copy a requirement's template steps into an application, once."""

    application_id: uuid.UUID
    state: str
    license_type_name: Optional[str]


@dataclass
class CopySelectedExpertStepsCommand:
    """Append chosen template expert steps to an application."""

    application_id: uuid.UUID
    requirement_id: uuid.UUID
    step_ids: List[uuid.UUID] = field(default_factory=list)


@dataclass
class CopyApplicationExpertStepsCommand:
    """Append expert steps of other applications to an application."""

    application_id: uuid.UUID
    source_application_step_ids: List[uuid.UUID] = field(default_factory=list)
