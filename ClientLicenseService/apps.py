"""
App configuration for Client License Service.
"""

import logging
import os

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class ClientLicenseServiceConfig(AppConfig):
    """App configuration for ClientLicenseService."""

    name = "ClientLicenseService"
    verbose_name = "Client License Service"

    _initialized = False

    def ready(self):
        """Called when Django starts."""
        # The autoreloader's watcher process serves no requests.
        if os.environ.get("RUN_MAIN") == "false":
            return

        if not ClientLicenseServiceConfig._initialized:
            self.setup_observability()
            ClientLicenseServiceConfig._initialized = True

    def setup_observability(self):
        """Setup tracing after apps are ready."""
        from core.instrumentation import setup_opentelemetry

        logger.info("Setting up observability...")
        setup_opentelemetry()
