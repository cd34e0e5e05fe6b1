"""
Wiring of LicenseServices from Django settings.
"""
from django.apps import apps

from core.domain.admin_guard import AdminSecretGuard
from licenses.application.services.license_services import LicenseServices
from licenses.domain.license import PENDING_HORIZON_DAYS
from licenses.infrastructure.celery_last_seen_dispatcher import CeleryLastSeenDispatcher
from licenses.infrastructure.repositories.django_license_repository import (
    DjangoLicenseRepository,
)


def build_license_services(settings) -> LicenseServices:
    """
    Build the services handle once at startup.

    Args:
        settings: Django settings object

    Returns:
        LicenseServices backed by the Django ORM and Celery
    """
    return LicenseServices(
        license_repository=DjangoLicenseRepository(),
        last_seen_dispatcher=CeleryLastSeenDispatcher(
            inline=getattr(settings, "CELERY_TASK_ALWAYS_EAGER", False)
        ),
        admin_guard=AdminSecretGuard(getattr(settings, "ADMIN_SECRET_KEY", None)),
        pending_horizon_days=getattr(
            settings, "LICENSE_PENDING_HORIZON_DAYS", PENDING_HORIZON_DAYS
        ),
    )


def get_license_services() -> LicenseServices:
    """Return the handle built by LicensesConfig.ready()."""
    return apps.get_app_config("licenses").services
