"""
License repository port (interface).

This defines the contract for license persistence operations.
Implementations are in the infrastructure layer.

The store is treated as a collection of documents keyed by client id with
per-document atomic operations; no multi-document transactions are needed.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from licenses.domain.license import LicenseRecord

LicenseDocument = Tuple[str, Dict[str, Any]]


class LicenseRepository(ABC):
    """
    Abstract repository for LicenseRecord entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def find_by_client_id(self, client_id: str) -> Optional[LicenseRecord]:
        """
        Find a license by client id.

        Args:
            client_id: Normalized client id

        Returns:
            LicenseRecord or None if not found

        Raises:
            CorruptLicenseRecordError: If the stored document is not a valid record
        """
        pass

    @abstractmethod
    async def save(self, record: LicenseRecord) -> LicenseRecord:
        """
        Create or replace a license.

        The unconditional write of the document store contract. Handlers
        use the conditional `create` and partial `update` instead.

        Args:
            record: LicenseRecord to store

        Returns:
            Stored LicenseRecord
        """
        pass

    @abstractmethod
    async def create(self, record: LicenseRecord) -> LicenseRecord:
        """
        Store a license only if none exists for its client id.

        Args:
            record: LicenseRecord to store

        Returns:
            Stored LicenseRecord

        Raises:
            LicenseAlreadyExistsError: If a license already exists
        """
        pass

    @abstractmethod
    async def update(self, client_id: str, **fields: Any) -> None:
        """
        Apply a partial update.

        Accepted fields: status, expiration_date, last_seen.

        Args:
            client_id: Normalized client id
            **fields: Field values to set

        Raises:
            LicenseNotFoundError: If no license exists
        """
        pass

    @abstractmethod
    async def delete(self, client_id: str) -> None:
        """
        Remove a license.

        Args:
            client_id: Normalized client id

        Raises:
            LicenseNotFoundError: If no license exists
        """
        pass

    @abstractmethod
    async def list_documents(self) -> List[LicenseDocument]:
        """
        Return every stored license as raw (client_id, fields) pairs.

        Fields are returned as stored, without validation, so callers can
        report corrupt documents instead of failing on them.
        """
        pass

    @abstractmethod
    async def find_lapsed(self, now: datetime) -> List[LicenseRecord]:
        """
        Find ACTIVE licenses whose expiration date is at or before now.

        Args:
            now: Current time

        Returns:
            List of LicenseRecord entities
        """
        pass
