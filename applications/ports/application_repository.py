"""
Application repository port (interface).
"""
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence
import uuid

from applications.domain.application import Application


class ApplicationRepository(ABC):
    """Abstract repository for Application entities."""

    @abstractmethod
    async def save(self, application: Application) -> Application:
        """
        Save an application entity.

        Args:
            application: Application entity to save

        Returns:
            Saved application entity
        """
        pass

    @abstractmethod
    async def find_by_id(self, application_id: uuid.UUID) -> Optional[Application]:
        """
        Find an application by ID.

        Args:
            application_id: Application UUID

        Returns:
            Application entity or None if not found
        """
        pass

    @abstractmethod
    async def find_by_ids(self, application_ids: Sequence[uuid.UUID]) -> List[Application]:
        """Find every application whose id is in the given list."""
        pass
