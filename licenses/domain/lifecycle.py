"""
License lifecycle engine.

Decides the effective status of a license at a point in time and the
write, if any, the caller must apply to keep storage consistent.
No I/O happens here.
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from core.domain.value_objects import LicenseStatus, RejectionReason
from licenses.domain.license import LicenseRecord


class MutationKind(Enum):
    """Kinds of write produced by reconciliation."""

    MARK_EXPIRED = "mark_expired"
    TOUCH_LAST_SEEN = "touch_last_seen"


@dataclass(frozen=True)
class LicenseMutation:
    """A single-document field update the caller should apply."""

    kind: MutationKind
    changes: Dict[str, Any] = field(default_factory=dict)

    @property
    def best_effort(self) -> bool:
        """Touch writes may fail without affecting the verdict."""
        return self.kind == MutationKind.TOUCH_LAST_SEEN


@dataclass(frozen=True)
class LicenseResolution:
    """
    Outcome of resolving a record.

    status is None when no record exists, which tells the caller to
    auto-register the client.
    """

    status: Optional[LicenseStatus]
    mutation: Optional[LicenseMutation] = None

    @property
    def registered(self) -> bool:
        return self.status is not None

    @property
    def valid(self) -> bool:
        return self.status == LicenseStatus.ACTIVE

    @property
    def reason(self) -> Optional[RejectionReason]:
        """Rejection reason for the client, None when valid."""
        if self.status is None:
            return RejectionReason.PENDING_APPROVAL
        return rejection_reason(self.status)


def rejection_reason(status: LicenseStatus) -> Optional[RejectionReason]:
    """Map an effective status to the reason shown to the client."""
    if status == LicenseStatus.ACTIVE:
        return None
    if status == LicenseStatus.BLOCKED:
        return RejectionReason.BLOCKED
    if status == LicenseStatus.PENDING:
        return RejectionReason.PENDING_APPROVAL
    if status == LicenseStatus.EXPIRED:
        return RejectionReason.EXPIRED
    raise AssertionError(f"Unhandled license status: {status!r}")


def resolve(record: Optional[LicenseRecord], now: datetime) -> LicenseResolution:
    """
    Resolve the effective status of a license.

    Blocked and pending licenses keep their status past the expiration date;
    only ACTIVE records are compared against the clock.

    Args:
        record: Stored license or None
        now: Current time

    Returns:
        LicenseResolution with the effective status and optional mutation
    """
    if record is None:
        return LicenseResolution(status=None)

    status = record.status
    if status == LicenseStatus.BLOCKED:
        return LicenseResolution(status=LicenseStatus.BLOCKED)
    if status == LicenseStatus.PENDING:
        return LicenseResolution(status=LicenseStatus.PENDING)
    if status == LicenseStatus.EXPIRED:
        return LicenseResolution(status=LicenseStatus.EXPIRED)
    if status == LicenseStatus.ACTIVE:
        if record.is_lapsed(now):
            return LicenseResolution(
                status=LicenseStatus.EXPIRED,
                mutation=LicenseMutation(
                    kind=MutationKind.MARK_EXPIRED,
                    changes={"status": LicenseStatus.EXPIRED},
                ),
            )
        return LicenseResolution(
            status=LicenseStatus.ACTIVE,
            mutation=LicenseMutation(
                kind=MutationKind.TOUCH_LAST_SEEN,
                changes={"last_seen": now},
            ),
        )
    raise AssertionError(f"Unhandled license status: {status!r}")
