"""
License domain entity.

This is the core domain entity representing a client's license.
It contains business logic and is independent of infrastructure.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from core.domain.value_objects import ClientId, LicenseStatus

PENDING_HORIZON_DAYS = 30


@dataclass(frozen=True)
class LicenseRecord:
    """
    License domain entity.

    One record exists per client id. The stored status is a cache of the
    last computed state; see licenses.domain.lifecycle for the effective one.
    """

    client_id: str
    status: LicenseStatus
    expiration_date: datetime
    created_at: Optional[datetime] = None
    last_seen: Optional[datetime] = None

    def __post_init__(self):
        """Validate license entity."""
        if not self.client_id:
            raise ValueError("Client ID is required")
        if not isinstance(self.status, LicenseStatus):
            raise ValueError(f"Invalid license status: {self.status!r}")
        if self.expiration_date is None:
            raise ValueError("Expiration date is required")

    @classmethod
    def issue(
        cls,
        client_id: ClientId,
        expiration_date: datetime,
        now: datetime,
    ) -> "LicenseRecord":
        """
        Create an ACTIVE license issued by an administrator.

        Args:
            client_id: Normalized client id
            expiration_date: Expiration datetime, must be after now
            now: Current time

        Returns:
            LicenseRecord entity instance
        """
        if expiration_date <= now:
            raise ValueError("Expiration date must be in the future")
        return cls(
            client_id=client_id.value,
            status=LicenseStatus.ACTIVE,
            expiration_date=expiration_date,
            created_at=now,
            last_seen=None,
        )

    @classmethod
    def register_pending(
        cls,
        client_id: ClientId,
        now: datetime,
        horizon_days: int = PENDING_HORIZON_DAYS,
    ) -> "LicenseRecord":
        """
        Create a PENDING license for a client seen for the first time.

        Args:
            client_id: Normalized client id
            now: Current time
            horizon_days: Days until the pending license lapses

        Returns:
            LicenseRecord entity instance
        """
        return cls(
            client_id=client_id.value,
            status=LicenseStatus.PENDING,
            expiration_date=now + timedelta(days=horizon_days),
            created_at=now,
            last_seen=None,
        )

    @staticmethod
    def extension_expiry(days: int, now: datetime) -> datetime:
        """Expiration date produced by extending `days` from now."""
        if days < 1:
            raise ValueError("Days must be a positive integer")
        try:
            return now + timedelta(days=days)
        except OverflowError:
            raise ValueError(f"Extending by {days} days is out of range") from None

    def toggled_status(self) -> LicenseStatus:
        """Return the status a toggle would produce."""
        if self.status == LicenseStatus.ACTIVE:
            return LicenseStatus.BLOCKED
        return LicenseStatus.ACTIVE

    def is_lapsed(self, now: datetime) -> bool:
        """True when the expiration date is at or before now."""
        return self.expiration_date <= now
