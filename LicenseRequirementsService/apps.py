"""
App configuration for License Requirements Service.
"""

import logging
import os
import sys

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class LicenseRequirementsServiceConfig(AppConfig):
    """App configuration for LicenseRequirementsService."""

    name = "LicenseRequirementsService"
    verbose_name = "License Requirements Service"

    def ready(self):
        """Called when Django starts."""
        # Skip for management commands that never publish events
        if len(sys.argv) > 1 and sys.argv[1] in [
            "migrate",
            "makemigrations",
            "collectstatic",
            "check",
        ]:
            return

        # Django's reloader imports the project twice
        if os.environ.get("RUN_MAIN") == "false":
            return

        # Only setup once (avoid duplicate registration)
        if not hasattr(self, "_initialized"):
            self.register_event_handlers()
            self._initialized = True

    def register_event_handlers(self):
        """Register event handlers after apps are ready."""
        from core.infrastructure.event_handlers import register_event_handlers as register

        register()
