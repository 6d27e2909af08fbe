"""
Ordering sequencer.

Step orders are numbered 1..N within each (owner, is_expert_step)
partition, where the owner is a requirement or an application. Regular
and expert steps of the same owner never share a sequence.

``next_order`` reads the partition's maximum and adds one. It takes no
lock, so two concurrent appends to one partition can compute the same
order; callers that need strict ordering must serialize their writes.
"""
import logging
import uuid
from typing import List, Optional, Protocol, Sequence

from core.domain.exceptions import ValidationError

logger = logging.getLogger(__name__)


class OrderedStepStore(Protocol):
    """Any step repository that can report a partition's highest order."""

    async def max_order(self, owner_id: uuid.UUID, is_expert_step: bool) -> Optional[int]:
        ...


class OrderingSequencer:
    """Allocates and rewrites step orders within one partition at a time."""

    def __init__(self, repository: OrderedStepStore):
        self.repository = repository

    async def next_order(self, owner_id: uuid.UUID, is_expert_step: bool) -> int:
        """
        Compute the next order in a partition.

        Args:
            owner_id: Requirement or application UUID
            is_expert_step: Partition to read

        Returns:
            max + 1, or 1 if the partition is empty
        """
        highest = await self.repository.max_order(owner_id, is_expert_step)
        return (highest or 0) + 1

    async def allocate(self, owner_id: uuid.UUID, is_expert_step: bool, count: int) -> List[int]:
        """Reserve ``count`` consecutive orders after the partition's current maximum."""
        if count <= 0:
            return []
        start = await self.next_order(owner_id, is_expert_step)
        logger.debug(
            "Allocated orders %d..%d for %s (expert=%s)",
            start,
            start + count - 1,
            owner_id,
            is_expert_step,
        )
        return list(range(start, start + count))

    async def reorder(self, requirement_id: uuid.UUID, ordered_ids: Sequence[uuid.UUID]) -> None:
        """
        Renumber a requirement's regular steps to match the given sequence.

        The step at position i gets order i + 1. Every assignment is applied
        or none is.

        Raises:
            ValidationError: If the list is empty or repeats an id
            StepNotFoundError: If an id is not a regular step of the requirement
            ValidationError: If a regular step of the requirement is left out
        """
        if not ordered_ids:
            raise ValidationError("No steps to reorder")
        if len(set(ordered_ids)) != len(ordered_ids):
            raise ValidationError("Step order contains duplicate steps")

        assignments = [(step_id, index + 1) for index, step_id in enumerate(ordered_ids)]
        await self.repository.apply_order(requirement_id, assignments, is_expert_step=False)
        logger.info("Reordered %d steps of requirement %s", len(assignments), requirement_id)
