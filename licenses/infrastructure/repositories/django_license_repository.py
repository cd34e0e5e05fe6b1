"""
Django implementation of LicenseRepository port.

This adapter converts between domain entities and Django ORM models.
"""
from datetime import datetime
from typing import Any, List, Optional

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction

from core.domain.exceptions import (
    CorruptLicenseRecordError,
    LicenseAlreadyExistsError,
    LicenseNotFoundError,
)
from core.domain.value_objects import LicenseStatus
from licenses.domain.license import LicenseRecord
from licenses.infrastructure.models import License as LicenseModel
from licenses.ports.license_repository import LicenseDocument, LicenseRepository

UPDATABLE_FIELDS = ("status", "expiration_date", "last_seen")


class DjangoLicenseRepository(LicenseRepository):
    """
    Django ORM implementation of LicenseRepository.

    This adapter:
    1. Converts Django models to domain entities
    2. Converts domain entities to Django models
    3. Implements repository interface
    """

    def _to_domain(self, model: LicenseModel) -> LicenseRecord:
        """
        Convert Django model to domain entity.

        Args:
            model: Django License model

        Returns:
            LicenseRecord domain entity

        Raises:
            CorruptLicenseRecordError: If the row holds an unknown status
                or no expiration date
        """
        try:
            status = LicenseStatus(model.status)
        except ValueError:
            raise CorruptLicenseRecordError(
                model.client_id, f"unrecognized status {model.status!r}"
            ) from None
        if model.expiration_date is None:
            raise CorruptLicenseRecordError(model.client_id, "missing expiration date")

        return LicenseRecord(
            client_id=model.client_id,
            status=status,
            expiration_date=model.expiration_date,
            created_at=model.created_at,
            last_seen=model.last_seen,
        )

    def _to_model(self, record: LicenseRecord) -> LicenseModel:
        """
        Convert domain entity to Django model.

        Args:
            record: LicenseRecord domain entity

        Returns:
            Unsaved Django License model
        """
        return LicenseModel(
            client_id=record.client_id,
            status=record.status.value,
            expiration_date=record.expiration_date,
            created_at=record.created_at,
            last_seen=record.last_seen,
        )

    @sync_to_async
    def find_by_client_id(self, client_id: str) -> Optional[LicenseRecord]:
        """
        Find a license by client id.

        Args:
            client_id: Normalized client id

        Returns:
            LicenseRecord or None if not found
        """
        try:
            model = LicenseModel.objects.get(client_id=client_id)
        except LicenseModel.DoesNotExist:
            return None
        return self._to_domain(model)

    @sync_to_async
    def save(self, record: LicenseRecord) -> LicenseRecord:
        """
        Create or replace a license.

        Args:
            record: LicenseRecord to store

        Returns:
            Stored LicenseRecord
        """
        model = self._to_model(record)
        model.save()
        return self._to_domain(model)

    @sync_to_async
    def create(self, record: LicenseRecord) -> LicenseRecord:
        """
        Insert a license, failing if the client id is taken.

        Args:
            record: LicenseRecord to store

        Returns:
            Stored LicenseRecord
        """
        model = self._to_model(record)
        try:
            with transaction.atomic():
                model.save(force_insert=True)
        except IntegrityError:
            raise LicenseAlreadyExistsError(
                f"A license with Client ID {record.client_id} already exists"
            ) from None
        return self._to_domain(model)

    @sync_to_async
    def update(self, client_id: str, **fields: Any) -> None:
        """
        Apply a partial update.

        Args:
            client_id: Normalized client id
            **fields: Field values to set
        """
        unknown = set(fields) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot update license fields: {sorted(unknown)}")

        values = dict(fields)
        if isinstance(values.get("status"), LicenseStatus):
            values["status"] = values["status"].value

        updated = LicenseModel.objects.filter(client_id=client_id).update(**values)
        if not updated:
            raise LicenseNotFoundError(f"License {client_id} not found")

    @sync_to_async
    def delete(self, client_id: str) -> None:
        """
        Remove a license.

        Args:
            client_id: Normalized client id
        """
        deleted, _ = LicenseModel.objects.filter(client_id=client_id).delete()
        if not deleted:
            raise LicenseNotFoundError(f"License {client_id} not found")

    @sync_to_async
    def list_documents(self) -> List[LicenseDocument]:
        """
        Return every stored license as raw (client_id, fields) pairs.

        Returns:
            List of (client_id, fields) tuples ordered by client id
        """
        rows = LicenseModel.objects.order_by("client_id").values(
            "client_id", "status", "expiration_date", "created_at", "last_seen"
        )
        return [(row.pop("client_id"), row) for row in rows]

    @sync_to_async
    def find_lapsed(self, now: datetime) -> List[LicenseRecord]:
        """
        Find ACTIVE licenses whose expiration date is at or before now.

        Args:
            now: Current time

        Returns:
            List of LicenseRecord entities
        """
        models = LicenseModel.objects.filter(
            status=LicenseStatus.ACTIVE.value,
            expiration_date__lte=now,
        )
        return [self._to_domain(model) for model in models]
