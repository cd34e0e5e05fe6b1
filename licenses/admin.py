"""
Django admin configuration for licenses app.
"""
from django.contrib import admin
from django.utils.html import format_html

from core.domain.value_objects import LicenseStatus
from licenses.infrastructure.models import License

STATUS_COLORS = {
    LicenseStatus.ACTIVE.value: "green",
    LicenseStatus.PENDING.value: "orange",
    LicenseStatus.BLOCKED.value: "red",
    LicenseStatus.EXPIRED.value: "gray",
}


@admin.register(License)
class LicenseAdmin(admin.ModelAdmin):
    """Admin interface for License model."""

    list_display = [
        "client_id",
        "status_display",
        "expiration_date",
        "created_at",
        "last_seen",
    ]
    list_filter = ["status", "expiration_date"]
    search_fields = ["client_id"]
    ordering = ["client_id"]
    fieldsets = (
        (
            "License",
            {
                "fields": ("client_id", "status", "expiration_date"),
            },
        ),
        (
            "Activity",
            {
                "fields": ("created_at", "last_seen"),
                "classes": ("collapse",),
            },
        ),
    )

    def get_readonly_fields(self, request, obj=None):
        """The client id is fixed once the license exists."""
        if obj is None:
            return ["created_at", "last_seen"]
        return ["client_id", "created_at", "last_seen"]

    def status_display(self, obj):
        """Display status with color coding."""
        color = STATUS_COLORS.get(obj.status, "black")
        return format_html(
            '<span style="color: {};">{}</span>',
            color,
            obj.get_status_display(),
        )

    status_display.short_description = "Status"
    status_display.admin_order_field = "status"
