"""
Application step repository port (interface).
"""
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence
import uuid

from applications.domain.application_step import ApplicationStep


class ApplicationStepRepository(ABC):
    """
    Abstract repository for ApplicationStep entities.

    Every list query returns an empty list, never None, when nothing matches.
    """

    @abstractmethod
    async def save(self, step: ApplicationStep) -> ApplicationStep:
        """Insert or update a single step."""
        pass

    @abstractmethod
    async def save_many(self, steps: Sequence[ApplicationStep]) -> List[ApplicationStep]:
        """Insert several new steps as one statement."""
        pass

    @abstractmethod
    async def find_by_id(self, step_id: uuid.UUID) -> Optional[ApplicationStep]:
        pass

    @abstractmethod
    async def find_by_ids(
        self, step_ids: Sequence[uuid.UUID], is_expert_step: Optional[bool] = None
    ) -> List[ApplicationStep]:
        """Find steps by id ordered by step order."""
        pass

    @abstractmethod
    async def find_by_application(
        self, application_id: uuid.UUID, is_expert_step: Optional[bool] = None
    ) -> List[ApplicationStep]:
        """Find the steps of one application ordered by step order."""
        pass

    @abstractmethod
    async def list_expert_steps(self) -> List[ApplicationStep]:
        """List expert steps across all applications ordered by step order, then application."""
        pass

    @abstractmethod
    async def has_steps(self, application_id: uuid.UUID, is_expert_step: bool) -> bool:
        """Check whether an application already has steps in a partition."""
        pass

    @abstractmethod
    async def max_order(self, application_id: uuid.UUID, is_expert_step: bool) -> Optional[int]:
        """
        Read the highest step order within one partition.

        Returns:
            Highest order, or None if the partition is empty
        """
        pass

    @abstractmethod
    async def delete(self, step_id: uuid.UUID, is_expert_step: Optional[bool] = None) -> bool:
        pass
