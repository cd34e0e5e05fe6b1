"""
Django management command to persist expiry of lapsed licenses.

Validation expires ACTIVE licenses lazily. This command applies the same
lifecycle rules to every ACTIVE license whose expiration date has passed,
so the stored statuses shown by the admin listing are current.
"""

import logging

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand

from core.domain.clock import utc_now
from core.domain.exceptions import LicenseNotFoundError
from core.metrics import license_expirations_total
from licenses.domain.lifecycle import MutationKind, resolve
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Command to mark lapsed ACTIVE licenses as EXPIRED."""

    help = "Mark ACTIVE licenses whose expiration date has passed as EXPIRED"

    def add_arguments(self, parser):
        """Add command arguments."""
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Dry run mode - don't actually update licenses",
        )

    def handle(self, *args, **options):
        """Execute the command."""
        dry_run = options["dry_run"]
        updated = async_to_sync(self._reconcile)(DjangoLicenseRepository(), dry_run)

        if dry_run:
            # pylint: disable=no-member
            self.stdout.write(self.style.WARNING("DRY RUN - No changes were made"))
            return
        # pylint: disable=no-member
        self.stdout.write(
            self.style.SUCCESS(f"Successfully marked {updated} license(s) as expired")
        )

    async def _reconcile(self, repository, dry_run: bool) -> int:
        now = utc_now()
        lapsed = await repository.find_lapsed(now)
        self.stdout.write(f"Found {len(lapsed)} lapsed license(s)")

        updated = 0
        for record in lapsed:
            mutation = resolve(record, now).mutation
            if mutation is None or mutation.kind != MutationKind.MARK_EXPIRED:
                continue

            if dry_run:
                expired_at = record.expiration_date.isoformat()
                self.stdout.write(f"  - License {record.client_id} expired at {expired_at}")
                continue

            try:
                await repository.update(record.client_id, **mutation.changes)
            except LicenseNotFoundError:
                logger.info("License %s was deleted during reconciliation", record.client_id)
                continue
            updated += 1
            license_expirations_total.labels(source="reconcile").inc()
            logger.info("Marked license %s as expired", record.client_id)
        return updated
