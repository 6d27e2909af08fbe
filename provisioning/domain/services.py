"""
Provisioning domain services.

Expert steps picked for copying may live in two disjoint tables: the
requirement templates or the steps already copied into applications. The
sources are tried in order and the first one that returns rows wins; the
results of different sources are never merged.
"""
import logging
import uuid
from abc import ABC, abstractmethod
from typing import Iterable, List, Sequence, TypeVar, Union

from applications.domain.application_step import ApplicationStep
from applications.ports.application_step_repository import ApplicationStepRepository
from requirements.domain.requirement_step import RequirementStep
from requirements.ports.requirement_step_repository import RequirementStepRepository

logger = logging.getLogger(__name__)

SourceStep = Union[RequirementStep, ApplicationStep]
S = TypeVar("S")


class ExpertStepSource(ABC):
    """One place expert steps can be copied from."""

    name = "source"

    @abstractmethod
    async def fetch(self, step_ids: Sequence[uuid.UUID]) -> List[SourceStep]:
        """Return the expert steps among ``step_ids`` found in this source."""
        pass


class TemplateExpertStepSource(ExpertStepSource):
    """Expert steps of requirement templates."""

    name = "template"

    def __init__(self, repository: RequirementStepRepository):
        self.repository = repository

    async def fetch(self, step_ids: Sequence[uuid.UUID]) -> List[SourceStep]:
        return list(await self.repository.find_by_ids(step_ids, is_expert_step=True))


class ApplicationExpertStepSource(ExpertStepSource):
    """Expert steps already copied into applications."""

    name = "application"

    def __init__(self, repository: ApplicationStepRepository):
        self.repository = repository

    async def fetch(self, step_ids: Sequence[uuid.UUID]) -> List[SourceStep]:
        return list(await self.repository.find_by_ids(step_ids, is_expert_step=True))


class FallbackStepSources:
    """Ordered chain of sources; the first non-empty result wins."""

    def __init__(self, sources: Iterable[ExpertStepSource]):
        self.sources = list(sources)

    async def fetch(self, step_ids: Sequence[uuid.UUID]) -> List[SourceStep]:
        for source in self.sources:
            steps = await source.fetch(step_ids)
            if steps:
                logger.debug("Resolved %d expert steps from %s", len(steps), source.name)
                return steps
        return []


def order_like(steps: Iterable[S], step_ids: Sequence[uuid.UUID]) -> List[S]:
    """Sort steps by the position of their id in ``step_ids``."""
    position = {step_id: index for index, step_id in enumerate(step_ids)}
    return sorted(steps, key=lambda step: position.get(step.id, len(position)))


def deduplicate_by_signature(steps: Iterable[S]) -> List[S]:
    """Keep the first step of each (name, description, phase) signature."""
    seen = set()
    unique = []
    for step in steps:
        if step.signature in seen:
            continue
        seen.add(step.signature)
        unique.append(step)
    return unique
