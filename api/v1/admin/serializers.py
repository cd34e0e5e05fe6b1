"""
Serializers for the admin license API.
"""

from rest_framework import ISO_8601, serializers

from api.v1.fields import ClientIdField


class CreateLicenseRequestSerializer(serializers.Serializer):
    """Serializer for a create license request."""

    client_id = ClientIdField(required=True)
    # Date-only values mean midnight UTC.
    expiration_date = serializers.DateTimeField(
        required=True, input_formats=[ISO_8601, "%Y-%m-%d"]
    )


class ClientIdRequestSerializer(serializers.Serializer):
    """Serializer for requests naming only a client id."""

    client_id = ClientIdField(required=True)


class ExtendLicenseRequestSerializer(serializers.Serializer):
    """Serializer for an extend license request."""

    client_id = ClientIdField(required=True)
    days = serializers.IntegerField(required=True, min_value=1)


class SetLicenseStatusRequestSerializer(serializers.Serializer):
    """Serializer for a status change; omit new_status to toggle."""

    client_id = ClientIdField(required=True)
    new_status = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class MessageResponseSerializer(serializers.Serializer):
    """Serializer for create and delete responses."""

    success = serializers.BooleanField(default=True)
    message = serializers.CharField()


class ExtendLicenseResponseSerializer(serializers.Serializer):
    """Serializer for an extend license response."""

    success = serializers.BooleanField(default=True)
    new_expiration_date = serializers.DateTimeField()


class SetLicenseStatusResponseSerializer(serializers.Serializer):
    """Serializer for a status change response."""

    success = serializers.BooleanField(default=True)
    newStatus = serializers.CharField(source="new_status")


class LicenseListItemSerializer(serializers.Serializer):
    """Serializer for a license row in the admin listing."""

    id = serializers.CharField()
    status = serializers.CharField()
    expiration_date = serializers.DateTimeField()
