"""
ValidateLicenseHandler.

Client-facing check-and-touch flow. Unknown clients are registered as
PENDING on first contact.
"""
import logging

from core.domain.clock import Clock, utc_now
from core.domain.exceptions import (
    CorruptLicenseRecordError,
    LicenseAlreadyExistsError,
    LicenseNotFoundError,
)
from core.domain.value_objects import RejectionReason
from core.metrics import (
    last_seen_touch_failures_total,
    license_auto_registrations_total,
    license_expirations_total,
)
from licenses.application.arguments import parse_client_id
from licenses.application.commands.validate_license import ValidateLicenseCommand
from licenses.application.dto.license_dto import ValidationResultDTO
from licenses.domain.license import PENDING_HORIZON_DAYS, LicenseRecord
from licenses.domain.lifecycle import MutationKind, resolve
from licenses.ports.last_seen_dispatcher import LastSeenDispatcher
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class ValidateLicenseHandler:
    """Handler for ValidateLicenseCommand."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        last_seen_dispatcher: LastSeenDispatcher,
        clock: Clock = utc_now,
        pending_horizon_days: int = PENDING_HORIZON_DAYS,
    ):
        """Initialize handler with its collaborators."""
        self.license_repository = license_repository
        self.last_seen_dispatcher = last_seen_dispatcher
        self.clock = clock
        self.pending_horizon_days = pending_horizon_days

    async def handle(self, command: ValidateLicenseCommand) -> ValidationResultDTO:
        """
        Handle validate license command.

        Args:
            command: ValidateLicenseCommand

        Returns:
            ValidationResultDTO with the verdict and a reason code

        Raises:
            InvalidArgumentError: If the client id is missing or blank
        """
        client_id = parse_client_id(command.client_id)
        now = self.clock()

        try:
            record = await self.license_repository.find_by_client_id(client_id.value)
        except CorruptLicenseRecordError as exc:
            logger.error("Refusing corrupt license %s: %s", client_id, exc.detail)
            return ValidationResultDTO(valid=False, reason=RejectionReason.NOT_ACTIVE.value)

        resolution = resolve(record, now)

        if not resolution.registered:
            await self._register_pending(client_id, now)
            return ValidationResultDTO(valid=False, reason=resolution.reason.value)

        mutation = resolution.mutation
        if mutation is not None and mutation.kind == MutationKind.MARK_EXPIRED:
            await self._expire(client_id.value, mutation.changes)
            license_expirations_total.labels(source="validation").inc()
            logger.info("License %s expired on %s", client_id, record.expiration_date.isoformat())
        elif mutation is not None and mutation.kind == MutationKind.TOUCH_LAST_SEEN:
            await self._touch(client_id.value, mutation.changes["last_seen"])

        if resolution.valid:
            return ValidationResultDTO(valid=True)
        return ValidationResultDTO(valid=False, reason=resolution.reason.value)

    async def _register_pending(self, client_id, now) -> None:
        """Provision a PENDING license for a first-contact client."""
        pending = LicenseRecord.register_pending(
            client_id, now, horizon_days=self.pending_horizon_days
        )
        try:
            await self.license_repository.create(pending)
        except LicenseAlreadyExistsError:
            # A concurrent first contact registered the same shape.
            logger.debug("License %s registered concurrently", client_id)
            return
        logger.info("Registered pending license for %s", client_id)
        license_auto_registrations_total.inc()

    async def _expire(self, client_id: str, changes) -> None:
        """Persist the lazy ACTIVE to EXPIRED transition."""
        try:
            await self.license_repository.update(client_id, **changes)
        except LicenseNotFoundError:
            logger.info("License %s was deleted before its expiry was recorded", client_id)

    async def _touch(self, client_id: str, seen_at) -> None:
        """Schedule the last_seen write; failures never reach the caller."""
        try:
            await self.last_seen_dispatcher.dispatch(client_id, seen_at)
        except Exception:  # pylint: disable=broad-exception-caught
            last_seen_touch_failures_total.labels(stage="dispatch").inc()
            logger.warning("Failed to update last_seen for %s", client_id, exc_info=True)
