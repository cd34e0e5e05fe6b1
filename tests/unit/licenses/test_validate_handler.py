"""
Unit tests for ValidateLicenseHandler.
"""
from datetime import timedelta

import pytest

from core.domain.exceptions import InvalidArgumentError, LicenseAlreadyExistsError
from core.domain.value_objects import LicenseStatus
from licenses.application.commands.validate_license import ValidateLicenseCommand
from licenses.application.handlers.validate_license_handler import ValidateLicenseHandler


@pytest.fixture
def handler(services):
    """Handler over in-memory collaborators."""
    return services.validate_handler()


@pytest.mark.asyncio
class TestValidateLicenseHandler:
    """Tests for ValidateLicenseHandler."""

    async def test_unknown_client_is_registered_pending(self, handler, memory_repository, now):
        """First contact registers a pending license."""
        result = await handler.handle(ValidateLicenseCommand(client_id="new-client"))

        assert result.valid is False
        assert result.reason == "pending_approval"
        document = memory_repository.documents["new-client"]
        assert document["status"] == "PENDIENTE"
        assert document["expiration_date"] == now + timedelta(days=30)
        assert document["created_at"] == now
        assert document["last_seen"] is None

    async def test_second_contact_keeps_pending(self, handler, memory_repository):
        """A pending license stays pending without further writes."""
        await handler.handle(ValidateLicenseCommand(client_id="new-client"))
        snapshot = dict(memory_repository.documents["new-client"])

        result = await handler.handle(ValidateLicenseCommand(client_id="new-client"))

        assert result.reason == "pending_approval"
        assert memory_repository.documents["new-client"] == snapshot
        assert memory_repository.updates == []

    async def test_client_id_is_normalized(self, handler, memory_repository):
        """Surrounding whitespace is not part of the identity."""
        await handler.handle(ValidateLicenseCommand(client_id="  padded  "))
        assert list(memory_repository.documents) == ["padded"]

    async def test_concurrent_registration_is_benign(self, memory_repository, dispatcher, clock):
        """Losing the first-contact race still reports pending approval."""

        class RacingRepository(type(memory_repository)):
            async def create(self, record):
                raise LicenseAlreadyExistsError()

        handler = ValidateLicenseHandler(RacingRepository(), dispatcher, clock=clock)
        result = await handler.handle(ValidateLicenseCommand(client_id="racer"))

        assert result.valid is False
        assert result.reason == "pending_approval"

    async def test_active_license_is_valid_and_touched(
        self, handler, memory_repository, dispatcher, make_record, now
    ):
        """A valid license schedules a last_seen write."""
        memory_repository.put(make_record(client_id="c1"))

        result = await handler.handle(ValidateLicenseCommand(client_id="c1"))

        assert result.valid is True
        assert result.reason is None
        assert dispatcher.dispatched == [("c1", now)]
        assert memory_repository.updates == []

    async def test_lapsed_active_license_expires(
        self, handler, memory_repository, dispatcher, make_record
    ):
        """An active license past its date is persisted as expired."""
        memory_repository.put(make_record(client_id="c1", expires_in=timedelta(days=-1)))

        result = await handler.handle(ValidateLicenseCommand(client_id="c1"))

        assert result.valid is False
        assert result.reason == "expired"
        assert memory_repository.documents["c1"]["status"] == "EXPIRADA"
        assert dispatcher.dispatched == []

    async def test_expiry_is_idempotent(self, handler, memory_repository, make_record):
        """Repeated validation of an expired license writes once."""
        memory_repository.put(make_record(client_id="c1", expires_in=timedelta(days=-1)))

        first = await handler.handle(ValidateLicenseCommand(client_id="c1"))
        second = await handler.handle(ValidateLicenseCommand(client_id="c1"))

        assert first == second
        assert len(memory_repository.updates) == 1

    @pytest.mark.parametrize(
        "status,reason",
        [
            (LicenseStatus.BLOCKED, "blocked"),
            (LicenseStatus.PENDING, "pending_approval"),
            (LicenseStatus.EXPIRED, "expired"),
        ],
    )
    async def test_inactive_licenses_are_rejected_without_writes(
        self, handler, memory_repository, dispatcher, make_record, status, reason
    ):
        """Inactive licenses report their reason even past the expiration date."""
        memory_repository.put(
            make_record(client_id="c1", status=status, expires_in=timedelta(days=-10))
        )

        result = await handler.handle(ValidateLicenseCommand(client_id="c1"))

        assert result.valid is False
        assert result.reason == reason
        assert memory_repository.updates == []
        assert dispatcher.dispatched == []

    @pytest.mark.parametrize(
        "fields",
        [
            {"status": "SUSPENDIDA", "expiration_date": None},
            {"status": "ACTIVA", "expiration_date": None},
            {"expiration_date": None},
        ],
    )
    async def test_corrupt_record_is_not_active(self, handler, memory_repository, fields):
        """Documents that are not valid records are never valid."""
        memory_repository.put_raw("c1", **fields)

        result = await handler.handle(ValidateLicenseCommand(client_id="c1"))

        assert result.valid is False
        assert result.reason == "not_active"

    async def test_touch_failure_does_not_affect_verdict(
        self, memory_repository, failing_dispatcher, make_record, clock
    ):
        """A failed last_seen dispatch is absorbed."""
        memory_repository.put(make_record(client_id="c1"))
        handler = ValidateLicenseHandler(memory_repository, failing_dispatcher, clock=clock)

        result = await handler.handle(ValidateLicenseCommand(client_id="c1"))

        assert result.valid is True

    @pytest.mark.parametrize("client_id", ["", "   ", None, 123])
    async def test_invalid_client_id(self, handler, memory_repository, client_id):
        """Missing or blank client ids are rejected without writes."""
        with pytest.raises(InvalidArgumentError):
            await handler.handle(ValidateLicenseCommand(client_id=client_id))
        assert memory_repository.documents == {}
