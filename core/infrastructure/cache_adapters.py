"""
Django cache implementation of CachePort.

Redis in production, local memory in development and tests. A cache
outage must never fail the write that triggered invalidation, so backend
errors are logged and dropped.
"""

import logging
from typing import Any, Optional

from asgiref.sync import sync_to_async
from django.core.cache import caches

from core.infrastructure.cache import CachePort

logger = logging.getLogger(__name__)


class DjangoCacheAdapter(CachePort):
    """CachePort over one of the configured Django cache aliases."""

    def __init__(self, alias: str = "default"):
        self.alias = alias

    @property
    def backend(self):
        return caches[self.alias]

    async def get(self, key: str) -> Optional[Any]:
        try:
            return await sync_to_async(self.backend.get)(key)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Cache read failed for %s: %s", key, e, exc_info=True)
            return None

    async def set(self, key: str, value: Any, timeout: Optional[int] = None) -> None:
        try:
            if timeout is None:
                await sync_to_async(self.backend.set)(key, value)
            else:
                await sync_to_async(self.backend.set)(key, value, timeout=timeout)
            logger.debug("Cache set: %s (timeout=%s)", key, timeout)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Cache write failed for %s: %s", key, e, exc_info=True)

    async def delete(self, key: str) -> None:
        try:
            await sync_to_async(self.backend.delete)(key)
            logger.debug("Cache delete: %s", key)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Cache delete failed for %s: %s", key, e, exc_info=True)


cache_adapter = DjangoCacheAdapter()
