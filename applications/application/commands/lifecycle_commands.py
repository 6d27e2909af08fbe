"""
Application lifecycle commands.

Commands that create an application or move it through its review
lifecycle. Actor checks (owner, admin, expert) happen before these
commands are issued.
"""

import uuid
from dataclasses import dataclass
from typing import Optional


@dataclass
class SubmitApplicationCommand:
    """Owner requests a new license application."""

    owner_id: uuid.UUID
    application_name: str
    state: str
    license_type_name: Optional[str] = None


@dataclass
class AssignExpertCommand:
    """Admin assigns or reassigns the expert."""

    application_id: uuid.UUID
    expert_id: uuid.UUID


@dataclass
class ApproveApplicationCommand:
    """Admin approval: requested -> in_progress."""

    application_id: uuid.UUID


@dataclass
class RejectApplicationCommand:
    """Admin rejection: requested -> rejected."""

    application_id: uuid.UUID


@dataclass
class SubmitForReviewCommand:
    """Owner submission: in_progress or needs_revision -> under_review."""

    application_id: uuid.UUID


@dataclass
class ApproveReviewCommand:
    """Expert approval: under_review -> approved."""

    application_id: uuid.UUID


@dataclass
class RequestRevisionCommand:
    """Expert sends the application back: under_review -> needs_revision."""

    application_id: uuid.UUID
    reason: Optional[str]


@dataclass
class CloseApplicationCommand:
    """Archive an application whose steps are all complete."""

    application_id: uuid.UUID
