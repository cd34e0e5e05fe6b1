"""
App configuration for licenses.
"""
from django.apps import AppConfig


class LicensesConfig(AppConfig):
    """App configuration for the licenses module."""

    name = "licenses"
    verbose_name = "Licenses"
    default_auto_field = "django.db.models.BigAutoField"

    services = None

    def ready(self):
        """Build the services handle once the app registry is loaded."""
        from django.conf import settings

        from licenses.infrastructure.services import build_license_services

        self.services = build_license_services(settings)
