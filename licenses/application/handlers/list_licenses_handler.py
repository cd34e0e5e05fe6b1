"""
ListLicensesHandler.

Handler for the admin license listing.
"""
import logging
from datetime import datetime, timezone
from typing import Any, List

from licenses.application.dto.license_dto import LicenseListItemDTO
from licenses.application.queries.list_licenses import ListLicensesQuery
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
UNKNOWN_STATUS = "UNKNOWN"


def normalize_expiration_date(value: Any) -> datetime:
    """Coerce a stored expiration date, falling back to the epoch."""
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError:
            return EPOCH
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    return EPOCH


class ListLicensesHandler:
    """Handler for ListLicensesQuery."""

    def __init__(self, license_repository: LicenseRepository):
        """Initialize handler with repository."""
        self.license_repository = license_repository

    async def handle(self, query: ListLicensesQuery) -> List[LicenseListItemDTO]:
        """
        Handle list licenses query.

        Rows are reported as stored: statuses are not reconciled against
        the clock, and a corrupt row never fails the listing.

        Args:
            query: ListLicensesQuery

        Returns:
            List of LicenseListItemDTO ordered by client id
        """
        documents = await self.license_repository.list_documents()

        items = []
        for client_id, fields in documents:
            expiration_date = normalize_expiration_date(fields.get("expiration_date"))
            if expiration_date is EPOCH:
                logger.warning("License %s has no readable expiration date", client_id)
            items.append(
                LicenseListItemDTO(
                    id=client_id,
                    status=fields.get("status") or UNKNOWN_STATUS,
                    expiration_date=expiration_date,
                )
            )
        return items
