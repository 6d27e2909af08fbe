"""
View invalidation.

Mutating operations mark the logical views that depend on their data as
stale, so whatever renders those views refetches. This module does not
cache view payloads itself; it only drops them and bumps a version token.
"""

import logging
import uuid
from abc import ABC, abstractmethod
from typing import Optional

from django.conf import settings

from core.infrastructure.cache import CachePort

logger = logging.getLogger(__name__)

LICENSE_REQUIREMENTS_VIEW = "admin/license-requirements"
APPLICATIONS_VIEW = "admin/licenses"


def application_view(application_id) -> str:
    """Logical view name for one application's detail page."""
    return f"admin/licenses/applications/{application_id}"


class ViewInvalidator(ABC):
    """Port for the view-invalidation collaborator."""

    @abstractmethod
    async def mark_stale(self, view: str) -> None:
        """
        Mark a logical view stale.

        Args:
            view: Logical view name
        """
        pass


class CacheViewInvalidator(ViewInvalidator):
    """ViewInvalidator backed by a CachePort."""

    def __init__(self, cache: CachePort, timeout: Optional[int] = None):
        self.cache = cache
        self.timeout = timeout

    @staticmethod
    def _payload_key(view: str) -> str:
        return f"view:payload:{view}"

    @staticmethod
    def _version_key(view: str) -> str:
        return f"view:version:{view}"

    async def mark_stale(self, view: str) -> None:
        """Drop the cached payload and issue a new version token."""
        timeout = self.timeout
        if timeout is None:
            timeout = getattr(settings, "VIEW_CACHE_TIMEOUT", None)
        await self.cache.delete(self._payload_key(view))
        await self.cache.set(self._version_key(view), uuid.uuid4().hex, timeout=timeout)
        logger.debug("Marked view stale: %s", view)

    async def current_version(self, view: str) -> Optional[str]:
        """
        Read the current version token of a view.

        Returns:
            Version token, or None if the view was never invalidated
        """
        return await self.cache.get(self._version_key(view))
