"""
Input normalization for license commands.

Every parser raises InvalidArgumentError so callers get a single error
type for malformed input.
"""
from datetime import datetime, time, timezone
from typing import Any, Optional

from django.utils.dateparse import parse_date, parse_datetime

from core.domain.exceptions import InvalidArgumentError, InvalidLicenseStatusError
from core.domain.value_objects import ClientId, LicenseStatus


def parse_client_id(raw: Any) -> ClientId:
    """Normalize a client id, rejecting non-strings and blank values."""
    try:
        return ClientId(raw)
    except ValueError as exc:
        raise InvalidArgumentError(f"A valid clientId is required: {exc}") from None


def parse_expiration_date(raw: Any) -> datetime:
    """
    Normalize an expiration date to an aware UTC datetime.

    Accepts datetimes and ISO-8601 strings (date or date-time). Naive
    values are taken as UTC.
    """
    if raw is None or raw == "":
        raise InvalidArgumentError("expirationDate is required")
    if isinstance(raw, datetime):
        value = raw
    elif isinstance(raw, str):
        value = _parse_iso_string(raw.strip())
    else:
        value = None
    if value is None:
        raise InvalidArgumentError(f"Invalid expirationDate: {raw!r}")

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    try:
        return value.astimezone(timezone.utc)
    except OverflowError:
        raise InvalidArgumentError(f"expirationDate out of range: {raw!r}") from None


def _parse_iso_string(raw: str) -> Optional[datetime]:
    try:
        parsed = parse_datetime(raw)
        if parsed is None:
            day = parse_date(raw)
            parsed = datetime.combine(day, time.min) if day is not None else None
    except ValueError:
        return None
    return parsed


def parse_days(raw: Any) -> int:
    """Require a positive integer number of days."""
    if isinstance(raw, bool) or not isinstance(raw, int) or raw <= 0:
        raise InvalidArgumentError("A positive integer for days is required")
    return raw


def parse_requested_status(raw: Any) -> Optional[LicenseStatus]:
    """
    Parse an admin-requested status.

    Returns None when no status was requested (toggle). Only ACTIVE and
    BLOCKED may be requested.
    """
    if raw is None or raw == "":
        return None
    try:
        status = LicenseStatus.parse(raw)
    except ValueError:
        raise InvalidLicenseStatusError(f"Invalid status provided: {raw!r}") from None
    if not status.admin_assignable:
        raise InvalidLicenseStatusError(
            f"Status {status.value} cannot be assigned by an administrator"
        )
    return status
