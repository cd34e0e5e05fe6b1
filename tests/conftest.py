"""
Pytest configuration and shared fixtures.
"""

from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

import pytest
from django.apps import apps

from core.domain.admin_guard import AdminSecretGuard
from core.domain.exceptions import (
    CorruptLicenseRecordError,
    LicenseAlreadyExistsError,
    LicenseNotFoundError,
)
from core.domain.value_objects import LicenseStatus
from licenses.application.services.license_services import LicenseServices
from licenses.domain.license import LicenseRecord
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from licenses.ports.last_seen_dispatcher import LastSeenDispatcher
from licenses.ports.license_repository import LicenseRepository

FIXED_NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)
ADMIN_SECRET = "test-admin-secret"


class InMemoryLicenseRepository(LicenseRepository):
    """LicenseRepository over a dict of raw documents."""

    def __init__(self):
        self.documents: Dict[str, Dict[str, Any]] = {}
        self.updates: List[tuple] = []

    def put(self, record: LicenseRecord) -> None:
        """Store a record synchronously for test setup."""
        self.documents[record.client_id] = {
            "status": record.status.value,
            "expiration_date": record.expiration_date,
            "created_at": record.created_at,
            "last_seen": record.last_seen,
        }

    def put_raw(self, client_id: str, **fields: Any) -> None:
        """Store an arbitrary document, bypassing validation."""
        self.documents[client_id] = dict(fields)

    async def find_by_client_id(self, client_id: str) -> Optional[LicenseRecord]:
        document = self.documents.get(client_id)
        if document is None:
            return None
        try:
            status = LicenseStatus(document.get("status"))
        except ValueError:
            raise CorruptLicenseRecordError(client_id, "unrecognized status") from None
        if document.get("expiration_date") is None:
            raise CorruptLicenseRecordError(client_id, "missing expiration date")
        return LicenseRecord(
            client_id=client_id,
            status=status,
            expiration_date=document["expiration_date"],
            created_at=document.get("created_at"),
            last_seen=document.get("last_seen"),
        )

    async def save(self, record: LicenseRecord) -> LicenseRecord:
        self.put(record)
        return record

    async def create(self, record: LicenseRecord) -> LicenseRecord:
        if record.client_id in self.documents:
            raise LicenseAlreadyExistsError()
        self.put(record)
        return record

    async def update(self, client_id: str, **fields: Any) -> None:
        if client_id not in self.documents:
            raise LicenseNotFoundError()
        values = {
            name: value.value if isinstance(value, LicenseStatus) else value
            for name, value in fields.items()
        }
        self.documents[client_id].update(values)
        self.updates.append((client_id, values))

    async def delete(self, client_id: str) -> None:
        if self.documents.pop(client_id, None) is None:
            raise LicenseNotFoundError()

    async def list_documents(self):
        return [(client_id, dict(fields)) for client_id, fields in sorted(self.documents.items())]

    async def find_lapsed(self, now: datetime) -> List[LicenseRecord]:
        lapsed = []
        for client_id, document in sorted(self.documents.items()):
            expiration_date = document.get("expiration_date")
            if (
                document.get("status") == LicenseStatus.ACTIVE.value
                and expiration_date is not None
                and expiration_date <= now
            ):
                lapsed.append(await self.find_by_client_id(client_id))
        return lapsed


class RecordingLastSeenDispatcher(LastSeenDispatcher):
    """Dispatcher that records touches instead of publishing them."""

    def __init__(self):
        self.dispatched: List[tuple] = []

    async def dispatch(self, client_id: str, seen_at: datetime) -> None:
        self.dispatched.append((client_id, seen_at))


class FailingLastSeenDispatcher(LastSeenDispatcher):
    """Dispatcher whose broker is unreachable."""

    async def dispatch(self, client_id: str, seen_at: datetime) -> None:
        raise ConnectionError("broker unavailable")


@pytest.fixture
def now():
    """Fixed current time."""
    return FIXED_NOW


@pytest.fixture
def clock(now):
    """Clock returning the fixed current time."""
    return lambda: now


@pytest.fixture
def memory_repository():
    """Fixture for an in-memory LicenseRepository."""
    return InMemoryLicenseRepository()


@pytest.fixture
def dispatcher():
    """Fixture for a recording LastSeenDispatcher."""
    return RecordingLastSeenDispatcher()


@pytest.fixture
def failing_dispatcher():
    """Fixture for a LastSeenDispatcher that always fails."""
    return FailingLastSeenDispatcher()


@pytest.fixture
def services(memory_repository, dispatcher, clock):
    """LicenseServices over in-memory collaborators."""
    return LicenseServices(
        license_repository=memory_repository,
        last_seen_dispatcher=dispatcher,
        admin_guard=AdminSecretGuard(ADMIN_SECRET),
        clock=clock,
    )


@pytest.fixture
def make_record(now):
    """Factory for LicenseRecord entities relative to the fixed time."""

    def _make(client_id="client-1", status=LicenseStatus.ACTIVE, expires_in=timedelta(days=10)):
        return LicenseRecord(
            client_id=client_id,
            status=status,
            expiration_date=now + expires_in,
            created_at=now - timedelta(days=1),
        )

    return _make


@pytest.fixture
def license_repository():
    """Fixture for the Django LicenseRepository."""
    return DjangoLicenseRepository()


@pytest.fixture
def db_license(db):
    """Factory for License rows saved in the database."""
    from django.utils import timezone as django_timezone

    from licenses.infrastructure.models import License

    def _create(
        client_id="client-1", status=LicenseStatus.ACTIVE.value, expires_in=timedelta(days=10)
    ):
        expiration_date = None
        if expires_in is not None:
            expiration_date = django_timezone.now() + expires_in
        return License.objects.create(
            client_id=client_id,
            status=status,
            expiration_date=expiration_date,
            created_at=django_timezone.now(),
        )

    return _create


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()


@pytest.fixture
def admin_client(api_client):
    """API client presenting the admin secret."""
    api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {ADMIN_SECRET}")
    return api_client


@pytest.fixture
def unconfigured_admin_secret():
    """Swap in a guard without a secret for the duration of a test."""
    config = apps.get_app_config("licenses")
    original = config.services
    config.services = replace(original, admin_guard=AdminSecretGuard(None))
    yield
    config.services = original
