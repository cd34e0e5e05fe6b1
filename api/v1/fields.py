"""
Shared serializer fields for the v1 API.
"""

from rest_framework import serializers

from core.domain.value_objects import CLIENT_ID_MAX_LENGTH


class ClientIdField(serializers.CharField):
    """Client id: a JSON string, non-empty once trimmed."""

    default_error_messages = {"invalid": "A valid clientId is required."}

    def __init__(self, **kwargs):
        kwargs.setdefault("max_length", CLIENT_ID_MAX_LENGTH)
        super().__init__(**kwargs)

    def to_internal_value(self, data):
        # CharField would coerce numbers; a client id must arrive as a string.
        if not isinstance(data, str):
            self.fail("invalid")
        return super().to_internal_value(data)
