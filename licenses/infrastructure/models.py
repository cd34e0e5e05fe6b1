"""
License model.

One row per client id. The row is the document the repository port reads
and writes; status values are the wire strings of LicenseStatus.
"""
from django.db import models

from core.domain.value_objects import CLIENT_ID_MAX_LENGTH, LicenseStatus


class License(models.Model):
    """
    A license keyed by an opaque client identifier.

    The stored status is a cache; expiry of ACTIVE licenses is applied
    lazily when the license is next validated.
    """

    STATUS_CHOICES = [
        (LicenseStatus.PENDING.value, "Pending approval"),
        (LicenseStatus.ACTIVE.value, "Active"),
        (LicenseStatus.BLOCKED.value, "Blocked"),
        (LicenseStatus.EXPIRED.value, "Expired"),
    ]

    client_id = models.CharField(primary_key=True, max_length=CLIENT_ID_MAX_LENGTH)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, db_index=True)
    expiration_date = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(null=True, blank=True, editable=False)
    last_seen = models.DateTimeField(null=True, blank=True, editable=False)

    class Meta:
        db_table = "licenses"
        ordering = ["client_id"]
        indexes = [
            models.Index(fields=["status", "expiration_date"], name="licenses_status_a1e7c4_idx"),
        ]

    def __str__(self):
        return f"{self.client_id} ({self.status})"
