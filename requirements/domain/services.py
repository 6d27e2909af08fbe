"""
Requirement domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""
import logging
import uuid
from typing import Dict, Optional

from core.domain.exceptions import ConstraintError
from core.domain.value_objects import RequirementKey
from requirements.domain.requirement import Requirement
from requirements.ports.requirement_repository import RequirementRepository

logger = logging.getLogger(__name__)


class RequirementResolver:
    """
    Maps (state, license type name) to a requirement id.

    Requirements are created lazily: resolving a pair for the first time
    creates its requirement, and every later call returns the same id.
    """

    def __init__(self, repository: RequirementRepository):
        self.repository = repository

    async def lookup(self, state: str, license_type_name: str) -> Optional[uuid.UUID]:
        """
        Find the requirement id for a pair without creating it.

        Returns:
            Requirement UUID or None if the pair has no requirement yet
        """
        key = RequirementKey(state=state, license_type_name=license_type_name)
        existing = await self.repository.find_by_state_and_license_type(
            key.state, key.license_type_name
        )
        return existing.id if existing else None

    async def resolve(self, state: str, license_type_name: str) -> uuid.UUID:
        """
        Return the requirement id for a pair, creating the requirement if absent.

        Args:
            state: State
            license_type_name: License type name

        Returns:
            Requirement UUID

        Raises:
            ValueError: If state or license type name is blank
            ConstraintError: If creation fails and no concurrent row exists
        """
        key = RequirementKey(state=state, license_type_name=license_type_name)
        existing = await self.repository.find_by_state_and_license_type(
            key.state, key.license_type_name
        )
        if existing:
            return existing.id

        try:
            created = await self.repository.save(
                Requirement.create(state=key.state, license_type_name=key.license_type_name)
            )
        except ConstraintError:
            # Lost a creation race; the winner's row is the answer.
            existing = await self.repository.find_by_state_and_license_type(
                key.state, key.license_type_name
            )
            if existing is None:
                raise
            return existing.id

        logger.info("Created license requirement %s for %s", created.id, key)
        return created.id

    def batch(self) -> "BatchRequirementResolver":
        """Start a memoized resolver scoped to one batch operation."""
        return BatchRequirementResolver(self)


class BatchRequirementResolver:
    """
    Memoizes resolutions for the duration of one batch operation.

    Keyed by ``state + "\\n" + license_type_name``; discard it when the
    batch ends.
    """

    def __init__(self, resolver: RequirementResolver):
        self.resolver = resolver
        self._resolved: Dict[str, uuid.UUID] = {}
        self._looked_up: Dict[str, Optional[uuid.UUID]] = {}

    async def lookup(self, state: str, license_type_name: str) -> Optional[uuid.UUID]:
        cache_key = RequirementKey(state=state, license_type_name=license_type_name).cache_key
        if cache_key in self._resolved:
            return self._resolved[cache_key]
        if cache_key not in self._looked_up:
            self._looked_up[cache_key] = await self.resolver.lookup(state, license_type_name)
        return self._looked_up[cache_key]

    async def resolve(self, state: str, license_type_name: str) -> uuid.UUID:
        cache_key = RequirementKey(state=state, license_type_name=license_type_name).cache_key
        if self._looked_up.get(cache_key):
            return self._looked_up[cache_key]
        if cache_key not in self._resolved:
            self._resolved[cache_key] = await self.resolver.resolve(state, license_type_name)
        return self._resolved[cache_key]
