"""
Application domain entity.

An application is one owner's request for a license in a state. Its
status follows a guarded lifecycle:

    requested -> in_progress -> under_review -> approved
                                             -> needs_revision -> under_review
    requested -> rejected

``closed`` is a terminal archival state reachable once progress hits 100%.
Every transition returns a new instance; invalid transitions raise and
leave the original untouched.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Dict, FrozenSet, Optional

from core.domain.exceptions import (
    ExpertNotAssignedError,
    InvalidApplicationStatusError,
    RevisionReasonRequiredError,
)
from core.domain.value_objects import ApplicationStatus

# Source statuses allowed for each lifecycle action.
TRANSITION_SOURCES: Dict[str, FrozenSet[ApplicationStatus]] = {
    "approve": frozenset({ApplicationStatus.REQUESTED}),
    "reject": frozenset({ApplicationStatus.REQUESTED}),
    "submit_for_review": frozenset(
        {ApplicationStatus.IN_PROGRESS, ApplicationStatus.NEEDS_REVISION}
    ),
    "approve_review": frozenset({ApplicationStatus.UNDER_REVIEW}),
    "request_revision": frozenset({ApplicationStatus.UNDER_REVIEW}),
}


@dataclass(frozen=True)
class Application:
    """Application domain entity."""

    id: uuid.UUID
    owner_id: uuid.UUID
    application_name: str
    state: str
    license_type_name: Optional[str]
    assigned_expert_id: Optional[uuid.UUID]
    status: ApplicationStatus
    progress_percentage: int
    revision_reason: Optional[str]
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        """Validate application entity."""
        if not self.owner_id:
            raise ValueError("Owner ID is required")
        if not self.application_name or not self.application_name.strip():
            raise ValueError("Application name is required")
        if not self.state or not self.state.strip():
            raise ValueError("State is required")
        if not 0 <= self.progress_percentage <= 100:
            raise ValueError("Progress percentage must be between 0 and 100")

    @classmethod
    def create(
        cls,
        owner_id: uuid.UUID,
        application_name: str,
        state: str,
        license_type_name: Optional[str] = None,
        application_id: Optional[uuid.UUID] = None,
    ) -> "Application":
        """
        Create a new application in the requested status.

        Args:
            owner_id: Owning user UUID
            application_name: Display name
            state: State the license is requested in
            license_type_name: License type name, if known
            application_id: Optional UUID (generated if not provided)

        Returns:
            Application entity instance
        """
        now = datetime.now(timezone.utc)
        return cls(
            id=application_id or uuid.uuid4(),
            owner_id=owner_id,
            application_name=application_name.strip(),
            state=state.strip(),
            license_type_name=(license_type_name or "").strip() or None,
            assigned_expert_id=None,
            status=ApplicationStatus.REQUESTED,
            progress_percentage=0,
            revision_reason=None,
            created_at=now,
            updated_at=now,
        )

    def _check_source(self, action: str) -> None:
        if self.status not in TRANSITION_SOURCES[action]:
            raise InvalidApplicationStatusError(
                f"Cannot {action.replace('_', ' ')} an application in status '{self.status}'"
            )

    def _transition(self, status: ApplicationStatus, **changes) -> "Application":
        return replace(self, status=status, updated_at=datetime.now(timezone.utc), **changes)

    def assign_expert(self, expert_id: uuid.UUID) -> "Application":
        """Assign or reassign the expert; the status is unchanged."""
        if not expert_id:
            raise ValueError("Expert ID is required")
        return replace(self, assigned_expert_id=expert_id, updated_at=datetime.now(timezone.utc))

    def approve(self) -> "Application":
        """
        Admin approval: requested -> in_progress.

        Raises:
            ExpertNotAssignedError: If no expert is assigned
            InvalidApplicationStatusError: If not requested
        """
        self._check_source("approve")
        if not self.assigned_expert_id:
            raise ExpertNotAssignedError()
        return self._transition(ApplicationStatus.IN_PROGRESS)

    def reject(self) -> "Application":
        """Admin rejection: requested -> rejected."""
        self._check_source("reject")
        return self._transition(ApplicationStatus.REJECTED)

    def submit_for_review(self) -> "Application":
        """Owner submission: in_progress or needs_revision -> under_review."""
        self._check_source("submit_for_review")
        return self._transition(ApplicationStatus.UNDER_REVIEW)

    def approve_review(self) -> "Application":
        """Expert approval: under_review -> approved; clears the revision reason."""
        self._check_source("approve_review")
        return self._transition(ApplicationStatus.APPROVED, revision_reason=None)

    def request_revision(self, reason: Optional[str]) -> "Application":
        """
        Expert sends the application back: under_review -> needs_revision.

        Raises:
            RevisionReasonRequiredError: If the reason is blank
        """
        if not reason or not reason.strip():
            raise RevisionReasonRequiredError()
        self._check_source("request_revision")
        return self._transition(ApplicationStatus.NEEDS_REVISION, revision_reason=reason.strip())

    def close(self) -> "Application":
        """
        Archive a finished application.

        Raises:
            InvalidApplicationStatusError: If progress is below 100%
        """
        if self.status == ApplicationStatus.CLOSED:
            return self
        if self.progress_percentage < 100:
            raise InvalidApplicationStatusError(
                "Application can only be closed when progress is 100%"
            )
        return self._transition(ApplicationStatus.CLOSED)

    def with_progress(self, completed: int, total: int) -> "Application":
        """Return a copy whose progress reflects completed/total steps."""
        percentage = round(100 * completed / total) if total else 0
        return replace(
            self, progress_percentage=percentage, updated_at=datetime.now(timezone.utc)
        )
