"""
License API views.

The validation endpoint is called by client applications to check
whether they may run. It needs no authentication.
"""

from asgiref.sync import async_to_sync
from drf_spectacular.utils import OpenApiExample, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.licenses.serializers import (
    ValidateLicenseRequestSerializer,
    ValidateLicenseResponseSerializer,
)
from core.instrumentation import Status, StatusCode, get_tracer
from core.metrics import license_validations_total
from licenses.application.commands.validate_license import ValidateLicenseCommand
from licenses.infrastructure.services import get_license_services

tracer = get_tracer(__name__)


class ValidateLicenseView(APIView):
    """View for validating a client's license."""

    @extend_schema(
        operation_id="validate_license",
        summary="Validate License",
        description=(
            "Check whether a client may run. Unknown clients are registered "
            "as pending approval on first contact. A valid license records "
            "when the client was last seen."
        ),
        tags=["License API"],
        auth=[],
        request=ValidateLicenseRequestSerializer,
        responses={
            200: ValidateLicenseResponseSerializer,
            400: {"description": "Bad Request - missing or blank client_id"},
        },
        examples=[
            OpenApiExample("Valid", value={"valid": True}, response_only=True),
            OpenApiExample(
                "Blocked",
                value={"valid": False, "reason": "blocked"},
                response_only=True,
            ),
        ],
    )
    def post(self, request: Request) -> Response:
        """Validate a license."""
        return async_to_sync(self._handle_validate_license)(request)

    async def _handle_validate_license(self, request: Request) -> Response:
        """Async handler for validate license."""
        with tracer.start_as_current_span("validate_license") as span:
            span.set_attribute("operation", "validate_license")

            serializer = ValidateLicenseRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            client_id = serializer.validated_data["client_id"]
            span.set_attribute("client_id", client_id)

            handler = get_license_services().validate_handler()
            result = await handler.handle(ValidateLicenseCommand(client_id=client_id))

            verdict = "valid" if result.valid else result.reason
            license_validations_total.labels(result=verdict).inc()
            span.set_attribute("license.valid", result.valid)
            span.set_attribute("license.verdict", verdict)
            span.set_status(Status(StatusCode.OK))

            return Response(
                ValidateLicenseResponseSerializer(result).data,
                status=status.HTTP_200_OK,
            )
