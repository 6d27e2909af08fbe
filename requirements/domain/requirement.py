"""
Requirement domain entity.

A requirement is the per-(state, license type) template that steps,
documents and template files hang off. It is created lazily the first
time its pair is resolved and is never deleted in normal flow.
"""
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from core.domain.value_objects import RequirementKey


@dataclass(frozen=True)
class Requirement:
    """License requirement domain entity."""

    id: uuid.UUID
    state: str
    license_type_name: str
    created_at: datetime
    updated_at: datetime

    def __post_init__(self):
        """Validate requirement entity."""
        # Raises ValueError on a blank state or license type
        RequirementKey(state=self.state, license_type_name=self.license_type_name)

    @classmethod
    def create(
        cls,
        state: str,
        license_type_name: str,
        requirement_id: Optional[uuid.UUID] = None,
    ) -> "Requirement":
        """
        Create a new Requirement entity.

        Args:
            state: State the license is issued in
            license_type_name: License type name
            requirement_id: Optional UUID (generated if not provided)

        Returns:
            Requirement entity instance
        """
        now = datetime.now(timezone.utc)
        return cls(
            id=requirement_id or uuid.uuid4(),
            state=state.strip(),
            license_type_name=license_type_name.strip(),
            created_at=now,
            updated_at=now,
        )

    @property
    def key(self) -> RequirementKey:
        """The unique (state, license type name) pair."""
        return RequirementKey(state=self.state, license_type_name=self.license_type_name)
