"""
Serializers for the client-facing license API.
"""

from rest_framework import serializers

from api.v1.fields import ClientIdField


class ValidateLicenseRequestSerializer(serializers.Serializer):
    """Serializer for a license validation request."""

    client_id = ClientIdField(required=True)


class ValidateLicenseResponseSerializer(serializers.Serializer):
    """Serializer for a validation verdict; `reason` is omitted when valid."""

    valid = serializers.BooleanField()
    reason = serializers.ChoiceField(
        choices=["blocked", "pending_approval", "expired", "not_active"],
        required=False,
    )

    def to_representation(self, instance):
        data = super().to_representation(instance)
        if data.get("reason") is None:
            data.pop("reason", None)
        return data
