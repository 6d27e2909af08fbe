"""
Requirement step repository port (interface).
"""
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Tuple
import uuid

from requirements.domain.requirement_step import RequirementStep


class RequirementStepRepository(ABC):
    """
    Abstract repository for RequirementStep entities.

    Every list query returns an empty list, never None, when nothing matches.
    """

    @abstractmethod
    async def save(self, step: RequirementStep) -> RequirementStep:
        """Insert or update a single step."""
        pass

    @abstractmethod
    async def save_many(self, steps: Sequence[RequirementStep]) -> List[RequirementStep]:
        """
        Insert several new steps as one statement.

        Args:
            steps: New step entities

        Returns:
            Inserted step entities, in the given order
        """
        pass

    @abstractmethod
    async def find_by_id(self, step_id: uuid.UUID) -> Optional[RequirementStep]:
        pass

    @abstractmethod
    async def find_by_ids(
        self,
        step_ids: Sequence[uuid.UUID],
        is_expert_step: Optional[bool] = None,
        requirement_id: Optional[uuid.UUID] = None,
    ) -> List[RequirementStep]:
        """
        Find steps by id, optionally restricted to one partition or requirement.

        Returns:
            Matching steps ordered by step order
        """
        pass

    @abstractmethod
    async def find_by_requirement(
        self, requirement_id: uuid.UUID, is_expert_step: Optional[bool] = None
    ) -> List[RequirementStep]:
        """
        Find the steps of one requirement ordered by step order.

        Args:
            requirement_id: Requirement UUID
            is_expert_step: Restrict to one partition (None for both)
        """
        pass

    @abstractmethod
    async def list_all(
        self,
        is_expert_step: Optional[bool] = None,
        exclude_requirement_id: Optional[uuid.UUID] = None,
    ) -> List[RequirementStep]:
        """List steps across requirements ordered by requirement, then step order."""
        pass

    @abstractmethod
    async def max_order(self, requirement_id: uuid.UUID, is_expert_step: bool) -> Optional[int]:
        """
        Read the highest step order within one partition.

        Returns:
            Highest order, or None if the partition is empty
        """
        pass

    @abstractmethod
    async def apply_order(
        self,
        requirement_id: uuid.UUID,
        assignments: Sequence[Tuple[uuid.UUID, int]],
        is_expert_step: bool = False,
    ) -> None:
        """
        Assign new orders to steps of one partition, all or nothing.

        Raises:
            StepNotFoundError: If any id is not in the partition
            ValidationError: If a step of the partition is left out

        Nothing is written when either error is raised.
        """
        pass

    @abstractmethod
    async def delete(self, step_id: uuid.UUID, is_expert_step: Optional[bool] = None) -> bool:
        """
        Delete a step.

        Returns:
            True if a row was deleted
        """
        pass

    @abstractmethod
    async def count_by_requirement(self, requirement_id: uuid.UUID) -> int:
        pass
