"""
Application domain events.
"""

import uuid
from datetime import datetime
from typing import Optional

from core.domain.events import DomainEvent


class ApplicationSubmitted(DomainEvent):
    """Event raised when an owner submits a new application."""

    def __init__(
        self,
        application_id: uuid.UUID,
        owner_id: uuid.UUID,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(application_id, occurred_at)
        self.application_id = application_id
        self.owner_id = owner_id


class ExpertAssigned(DomainEvent):
    """Event raised when an admin assigns or reassigns an expert."""

    def __init__(
        self,
        application_id: uuid.UUID,
        expert_id: uuid.UUID,
        previous_expert_id: Optional[uuid.UUID] = None,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(application_id, occurred_at)
        self.application_id = application_id
        self.expert_id = expert_id
        self.previous_expert_id = previous_expert_id


class ApplicationApproved(DomainEvent):
    """
    Event raised when an admin moves an application to in_progress.

    Subscribers provision the application's steps from its requirement.

    Args:
        application_id: Application UUID
        state: Application state
        license_type_name: License type name used to resolve the requirement
        occurred_at: When the event occurred
    """

    def __init__(
        self,
        application_id: uuid.UUID,
        state: str,
        license_type_name: Optional[str],
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(application_id, occurred_at)
        self.application_id = application_id
        self.state = state
        self.license_type_name = license_type_name


class ApplicationStatusChanged(DomainEvent):
    """Event raised on every application status change."""

    def __init__(
        self,
        application_id: uuid.UUID,
        from_status: str,
        to_status: str,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(application_id, occurred_at)
        self.application_id = application_id
        self.from_status = from_status
        self.to_status = to_status


class ExpertStepsProvisioned(DomainEvent):
    """Event raised when expert steps are copied into an application."""

    def __init__(
        self,
        application_id: uuid.UUID,
        requirement_id: uuid.UUID,
        step_count: int,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(application_id, occurred_at)
        self.application_id = application_id
        self.requirement_id = requirement_id
        self.step_count = step_count
