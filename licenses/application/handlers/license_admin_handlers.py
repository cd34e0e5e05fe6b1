"""
License administration handlers.

Handlers for create, delete, extend and set-status commands. Callers
must have passed the admin guard before reaching these handlers.
"""
import logging

from core.domain.clock import Clock, utc_now
from core.domain.exceptions import (
    CorruptLicenseRecordError,
    InvalidArgumentError,
    LicenseNotFoundError,
)
from core.domain.value_objects import LicenseStatus
from licenses.application.arguments import (
    parse_client_id,
    parse_days,
    parse_expiration_date,
    parse_requested_status,
)
from licenses.application.commands.create_license import CreateLicenseCommand
from licenses.application.commands.delete_license import DeleteLicenseCommand
from licenses.application.commands.extend_license import ExtendLicenseCommand
from licenses.application.commands.set_license_status import SetLicenseStatusCommand
from licenses.application.dto.license_dto import (
    CreateLicenseResultDTO,
    DeleteLicenseResultDTO,
    ExtendLicenseResultDTO,
    SetLicenseStatusResultDTO,
)
from licenses.domain.license import LicenseRecord
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class CreateLicenseHandler:
    """Handler for CreateLicenseCommand."""

    def __init__(self, license_repository: LicenseRepository, clock: Clock = utc_now):
        """Initialize handler with repository."""
        self.license_repository = license_repository
        self.clock = clock

    async def handle(self, command: CreateLicenseCommand) -> CreateLicenseResultDTO:
        """
        Handle create license command.

        Args:
            command: CreateLicenseCommand

        Returns:
            CreateLicenseResultDTO with the created client id

        Raises:
            InvalidArgumentError: If client id or expiration date is invalid
            LicenseAlreadyExistsError: If the client id already has a license
        """
        client_id = parse_client_id(command.client_id)
        expiration_date = parse_expiration_date(command.expiration_date)
        now = self.clock()

        try:
            record = LicenseRecord.issue(client_id, expiration_date, now)
        except ValueError as exc:
            raise InvalidArgumentError(str(exc)) from None

        created = await self.license_repository.create(record)
        logger.info(
            "Created license %s expiring %s", created.client_id, expiration_date.isoformat()
        )

        return CreateLicenseResultDTO(
            client_id=created.client_id,
            message=f"License for {created.client_id} created successfully.",
        )


class DeleteLicenseHandler:
    """Handler for DeleteLicenseCommand."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repository."""
        self.license_repository = license_repository

    async def handle(self, command: DeleteLicenseCommand) -> DeleteLicenseResultDTO:
        """
        Handle delete license command.

        Args:
            command: DeleteLicenseCommand

        Returns:
            DeleteLicenseResultDTO

        Raises:
            InvalidArgumentError: If the client id is invalid
            LicenseNotFoundError: If license not found
        """
        client_id = parse_client_id(command.client_id)

        await self.license_repository.delete(client_id.value)
        logger.info("Deleted license %s", client_id)

        return DeleteLicenseResultDTO(
            client_id=client_id.value,
            message=f"License {client_id} deleted successfully.",
        )


class ExtendLicenseHandler:
    """Handler for ExtendLicenseCommand."""

    def __init__(self, license_repository: LicenseRepository, clock: Clock = utc_now):
        """Initialize handler with repository."""
        self.license_repository = license_repository
        self.clock = clock

    async def handle(self, command: ExtendLicenseCommand) -> ExtendLicenseResultDTO:
        """
        Handle extend license command.

        The license becomes ACTIVE whatever its previous status, so
        extension also unblocks and reactivates.

        Args:
            command: ExtendLicenseCommand

        Returns:
            ExtendLicenseResultDTO with the new expiration date

        Raises:
            InvalidArgumentError: If client id or days are invalid
            LicenseNotFoundError: If license not found
        """
        client_id = parse_client_id(command.client_id)
        days = parse_days(command.days)
        now = self.clock()

        try:
            new_expiration = LicenseRecord.extension_expiry(days, now)
        except ValueError as exc:
            raise InvalidArgumentError(str(exc)) from None

        await self.license_repository.update(
            client_id.value,
            status=LicenseStatus.ACTIVE,
            expiration_date=new_expiration,
        )
        logger.info(
            "Extended license %s by %d day(s) to %s",
            client_id,
            days,
            new_expiration.isoformat(),
        )

        return ExtendLicenseResultDTO(
            client_id=client_id.value,
            new_expiration_date=new_expiration,
        )


class SetLicenseStatusHandler:
    """Handler for SetLicenseStatusCommand."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repository."""
        self.license_repository = license_repository

    async def handle(self, command: SetLicenseStatusCommand) -> SetLicenseStatusResultDTO:
        """
        Handle set license status command.

        Without a requested status the license toggles: ACTIVE becomes
        BLOCKED and any other status becomes ACTIVE.

        Args:
            command: SetLicenseStatusCommand

        Returns:
            SetLicenseStatusResultDTO with the resulting status

        Raises:
            InvalidArgumentError: If the client id or requested status is invalid
            LicenseNotFoundError: If license not found
        """
        client_id = parse_client_id(command.client_id)
        requested = parse_requested_status(command.requested_status)

        try:
            record = await self.license_repository.find_by_client_id(client_id.value)
        except CorruptLicenseRecordError:
            record = None
        else:
            if record is None:
                raise LicenseNotFoundError(f"License {client_id} not found")

        if requested is not None:
            new_status = requested
        elif record is not None:
            new_status = record.toggled_status()
        else:
            new_status = LicenseStatus.ACTIVE

        await self.license_repository.update(client_id.value, status=new_status)
        logger.info("Set license %s status to %s", client_id, new_status.value)

        return SetLicenseStatusResultDTO(client_id=client_id.value, new_status=new_status.value)
