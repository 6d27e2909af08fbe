"""
Requirement repository port (interface).

This defines the contract for requirement persistence operations.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence
import uuid

from requirements.domain.requirement import Requirement


class RequirementRepository(ABC):
    """Abstract repository for Requirement entities."""

    @abstractmethod
    async def save(self, requirement: Requirement) -> Requirement:
        """
        Save a requirement entity.

        Args:
            requirement: Requirement entity to save

        Returns:
            Saved requirement entity

        Raises:
            ConstraintError: If the (state, license type) pair already exists
        """
        pass

    @abstractmethod
    async def find_by_id(self, requirement_id: uuid.UUID) -> Optional[Requirement]:
        """
        Find a requirement by ID.

        Args:
            requirement_id: Requirement UUID

        Returns:
            Requirement entity or None if not found
        """
        pass

    @abstractmethod
    async def find_by_ids(self, requirement_ids: Sequence[uuid.UUID]) -> List[Requirement]:
        """Find every requirement whose id is in the given list."""
        pass

    @abstractmethod
    async def find_by_state_and_license_type(
        self, state: str, license_type_name: str
    ) -> Optional[Requirement]:
        """
        Find a requirement by its unique (state, license type name) pair.

        Args:
            state: State
            license_type_name: License type name

        Returns:
            Requirement entity or None if not found
        """
        pass

    @abstractmethod
    async def list_all(self) -> List[Requirement]:
        """List every requirement ordered by state, then license type name."""
        pass

    @abstractmethod
    async def count(self) -> int:
        """Count stored requirements."""
        pass
