"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
from abc import ABC
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.

    Value objects are immutable and compared by value.
    """

    def __eq__(self, other):
        """Compare value objects by their attributes."""
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self):
        """Make value objects hashable."""
        return hash(tuple(sorted(self.__dict__.items())))


class ApplicationStatus(Enum):
    """Application status value object."""

    REQUESTED = "requested"
    IN_PROGRESS = "in_progress"
    UNDER_REVIEW = "under_review"
    APPROVED = "approved"
    NEEDS_REVISION = "needs_revision"
    REJECTED = "rejected"
    CLOSED = "closed"

    def __str__(self) -> str:
        """Return status as string."""
        return self.value


EXPERT_STEP_PHASES: Tuple[str, ...] = (
    "Client Intake",
    "Application Preparation",
    "Application Submission",
    "Survey Preparation",
    "Survey Guidance",
)

DEFAULT_EXPERT_STEP_PHASE = EXPERT_STEP_PHASES[0]


@dataclass(frozen=True)
class RequirementKey(ValueObject):
    """The unique (state, license type name) pair identifying a requirement."""

    state: str
    license_type_name: str

    def __post_init__(self):
        """Validate both halves of the key and strip surrounding whitespace."""
        if not self.state or not self.state.strip():
            raise ValueError("State is required")
        if not self.license_type_name or not self.license_type_name.strip():
            raise ValueError("License type name is required")
        object.__setattr__(self, "state", self.state.strip())
        object.__setattr__(self, "license_type_name", self.license_type_name.strip())

    @property
    def cache_key(self) -> str:
        """Key used to memoize resolutions within one batch operation."""
        return f"{self.state}\n{self.license_type_name}"

    def __str__(self) -> str:
        return f"{self.state} / {self.license_type_name}"


@dataclass(frozen=True)
class StepSignature(ValueObject):
    """
    Content identity of an expert step: (name, description, phase).

    Missing description and phase compare equal to empty strings, so the
    same step copied through different sources collapses to one signature.
    """

    name: str
    description: str
    phase: str

    @classmethod
    def of(
        cls, name: str, description: Optional[str], phase: Optional[str]
    ) -> "StepSignature":
        return cls(name=name, description=description or "", phase=phase or "")
