"""
License services handle.

One immutable bundle of collaborators built at startup and passed to the
views and the admin middleware, so nothing reaches for process globals.
"""
from dataclasses import dataclass

from core.domain.admin_guard import AdminSecretGuard
from core.domain.clock import Clock, utc_now
from licenses.application.handlers.license_admin_handlers import (
    CreateLicenseHandler,
    DeleteLicenseHandler,
    ExtendLicenseHandler,
    SetLicenseStatusHandler,
)
from licenses.application.handlers.list_licenses_handler import ListLicensesHandler
from licenses.application.handlers.validate_license_handler import ValidateLicenseHandler
from licenses.domain.license import PENDING_HORIZON_DAYS
from licenses.ports.last_seen_dispatcher import LastSeenDispatcher
from licenses.ports.license_repository import LicenseRepository


@dataclass(frozen=True)
class LicenseServices:
    """Configured collaborators and handler factories."""

    license_repository: LicenseRepository
    last_seen_dispatcher: LastSeenDispatcher
    admin_guard: AdminSecretGuard
    clock: Clock = utc_now
    pending_horizon_days: int = PENDING_HORIZON_DAYS

    def validate_handler(self) -> ValidateLicenseHandler:
        return ValidateLicenseHandler(
            license_repository=self.license_repository,
            last_seen_dispatcher=self.last_seen_dispatcher,
            clock=self.clock,
            pending_horizon_days=self.pending_horizon_days,
        )

    def create_handler(self) -> CreateLicenseHandler:
        return CreateLicenseHandler(self.license_repository, clock=self.clock)

    def delete_handler(self) -> DeleteLicenseHandler:
        return DeleteLicenseHandler(self.license_repository)

    def extend_handler(self) -> ExtendLicenseHandler:
        return ExtendLicenseHandler(self.license_repository, clock=self.clock)

    def set_status_handler(self) -> SetLicenseStatusHandler:
        return SetLicenseStatusHandler(self.license_repository)

    def list_handler(self) -> ListLicensesHandler:
        return ListLicensesHandler(self.license_repository)
