"""
Cache abstraction (port).

The only consumer is view invalidation, which needs keyed reads, writes
with a timeout, and deletes.
"""
from abc import ABC, abstractmethod
from typing import Any, Optional


class CachePort(ABC):
    """Abstract cache port."""

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """Return the cached value, or None when the key is absent."""
        pass

    @abstractmethod
    async def set(self, key: str, value: Any, timeout: Optional[int] = None) -> None:
        """
        Store a value.

        Args:
            key: Cache key
            value: Value to cache
            timeout: Timeout in seconds (None for the backend default)
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        pass
