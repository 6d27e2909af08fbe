"""
Unit tests for RequirementResolver.
"""
import pytest

from core.domain.exceptions import ConstraintError
from requirements.domain.requirement import Requirement
from requirements.domain.services import RequirementResolver
from tests.fakes import InMemoryRequirementRepository


class _RacingRequirementRepository(InMemoryRequirementRepository):
    """Another writer inserts the same pair between our lookup and our insert."""

    def __init__(self, winner: Requirement):
        super().__init__()
        self.winner = winner

    async def save(self, requirement):
        self.rows[self.winner.id] = self.winner
        raise ConstraintError("duplicate key value violates unique constraint")


class _FailingRequirementRepository(InMemoryRequirementRepository):
    async def save(self, requirement):
        raise ConstraintError("insert failed")


@pytest.mark.asyncio
class TestRequirementResolver:
    """Tests for RequirementResolver."""

    async def test_resolve_creates_once(self):
        """Test resolving the same pair twice creates one requirement."""
        repository = InMemoryRequirementRepository()
        resolver = RequirementResolver(repository)

        first = await resolver.resolve("Texas", "Home Health Agency")
        second = await resolver.resolve("Texas", "Home Health Agency")

        assert first == second
        assert await repository.count() == 1

    async def test_lookup_never_creates(self):
        """Test lookup returns None for an unknown pair."""
        repository = InMemoryRequirementRepository()

        assert await RequirementResolver(repository).lookup("Texas", "Hospice") is None
        assert await repository.count() == 0

    async def test_blank_pair_rejected(self):
        """Test blank arguments raise before touching storage."""
        repository = InMemoryRequirementRepository()

        with pytest.raises(ValueError, match="State is required"):
            await RequirementResolver(repository).resolve("", "Hospice")
        assert repository.save_calls == 0

    async def test_creation_race_returns_winner(self):
        """Test a lost insert race resolves to the concurrent row."""
        winner = Requirement.create(state="Texas", license_type_name="Hospice")
        resolver = RequirementResolver(_RacingRequirementRepository(winner))

        assert await resolver.resolve("Texas", "Hospice") == winner.id

    async def test_creation_failure_propagates(self):
        """Test a failed insert with no concurrent row raises."""
        resolver = RequirementResolver(_FailingRequirementRepository())

        with pytest.raises(ConstraintError, match="insert failed"):
            await resolver.resolve("Texas", "Hospice")

    async def test_padded_pair_resolves_to_same_id(self):
        """Test surrounding whitespace does not split a pair into two lookups."""
        repository = InMemoryRequirementRepository()
        resolver = RequirementResolver(repository)

        first = await resolver.resolve("Texas ", "Home Health Agency")
        second = await resolver.resolve("Texas ", "Home Health Agency")
        plain = await resolver.resolve("Texas", " Home Health Agency ")

        assert first == second == plain
        assert await resolver.lookup("  Texas", "Home Health Agency") == first
        assert await repository.count() == 1


@pytest.mark.asyncio
class TestBatchRequirementResolver:
    """Tests for the memoized batch resolver."""

    async def test_resolve_memoized(self):
        """Test repeated pairs hit storage once."""
        repository = InMemoryRequirementRepository()
        batch = RequirementResolver(repository).batch()

        ids = {await batch.resolve("Texas", "Hospice") for _ in range(5)}

        assert len(ids) == 1
        assert repository.save_calls == 1

    async def test_lookup_then_resolve(self):
        """Test a pair looked up as missing is still created by resolve."""
        repository = InMemoryRequirementRepository()
        batch = RequirementResolver(repository).batch()

        assert await batch.lookup("Texas", "Hospice") is None
        created = await batch.resolve("Texas", "Hospice")

        assert created is not None
        assert await batch.lookup("Texas", "Hospice") == created
