"""
Admin license API views.

These endpoints are used by administrators to:
- Create and delete licenses
- Extend a license's expiration
- Block, unblock or toggle a license
- List every stored license

Requests reach these views only after AdminSecretAuthenticationMiddleware
has accepted the bearer secret.
"""

from contextlib import contextmanager

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.admin.serializers import (
    ClientIdRequestSerializer,
    CreateLicenseRequestSerializer,
    ExtendLicenseRequestSerializer,
    ExtendLicenseResponseSerializer,
    LicenseListItemSerializer,
    MessageResponseSerializer,
    SetLicenseStatusRequestSerializer,
    SetLicenseStatusResponseSerializer,
)
from core.domain.exceptions import DomainException
from core.instrumentation import Status, StatusCode, get_tracer
from core.metrics import licenses_admin_operations_total
from licenses.application.commands.create_license import CreateLicenseCommand
from licenses.application.commands.delete_license import DeleteLicenseCommand
from licenses.application.commands.extend_license import ExtendLicenseCommand
from licenses.application.commands.set_license_status import SetLicenseStatusCommand
from licenses.application.queries.list_licenses import ListLicensesQuery
from licenses.infrastructure.services import get_license_services

tracer = get_tracer(__name__)

ADMIN_ERROR_RESPONSES = {
    400: {"description": "Bad Request"},
    401: {"description": "Unauthorized - Missing or invalid admin secret"},
    500: {"description": "Server configuration error"},
}


@contextmanager
def admin_operation(operation: str):
    """Trace an admin operation and count it by outcome."""
    with tracer.start_as_current_span(operation) as span:
        span.set_attribute("operation", operation)
        try:
            yield span
        except DomainException as exc:
            span.set_attribute("error", exc.code)
            span.set_status(Status(StatusCode.ERROR, exc.message))
            licenses_admin_operations_total.labels(
                operation=operation, outcome=exc.code.lower()
            ).inc()
            raise
        except ValidationError:
            span.set_attribute("error", "INVALID_ARGUMENT")
            span.set_status(Status(StatusCode.ERROR, "Validation failed"))
            licenses_admin_operations_total.labels(
                operation=operation, outcome="invalid_argument"
            ).inc()
            raise
        span.set_status(Status(StatusCode.OK))
        licenses_admin_operations_total.labels(operation=operation, outcome="success").inc()


class CreateLicenseView(APIView):
    """View for creating licenses."""

    @extend_schema(
        operation_id="create_license",
        summary="Create License",
        description=(
            "Create an ACTIVE license for a client. The expiration date is an "
            "ISO-8601 date or date-time and must lie in the future."
        ),
        tags=["Admin API"],
        request=CreateLicenseRequestSerializer,
        responses={
            201: MessageResponseSerializer,
            409: {"description": "A license already exists for this client id"},
            **ADMIN_ERROR_RESPONSES,
        },
    )
    def post(self, request: Request) -> Response:
        """Create a license."""
        return async_to_sync(self._handle_create_license)(request)

    async def _handle_create_license(self, request: Request) -> Response:
        """Async handler for create license."""
        with admin_operation("create_license") as span:
            serializer = CreateLicenseRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            span.set_attribute("client_id", serializer.validated_data["client_id"])

            command = CreateLicenseCommand(
                client_id=serializer.validated_data["client_id"],
                expiration_date=serializer.validated_data["expiration_date"],
            )
            result = await get_license_services().create_handler().handle(command)

            return Response(
                MessageResponseSerializer(result).data,
                status=status.HTTP_201_CREATED,
            )


class DeleteLicenseView(APIView):
    """View for deleting licenses."""

    @extend_schema(
        operation_id="delete_license",
        summary="Delete License",
        tags=["Admin API"],
        request=ClientIdRequestSerializer,
        responses={
            200: MessageResponseSerializer,
            404: {"description": "License not found"},
            **ADMIN_ERROR_RESPONSES,
        },
    )
    def post(self, request: Request) -> Response:
        """Delete a license."""
        return async_to_sync(self._handle_delete_license)(request)

    async def _handle_delete_license(self, request: Request) -> Response:
        """Async handler for delete license."""
        with admin_operation("delete_license") as span:
            serializer = ClientIdRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            span.set_attribute("client_id", serializer.validated_data["client_id"])

            command = DeleteLicenseCommand(client_id=serializer.validated_data["client_id"])
            result = await get_license_services().delete_handler().handle(command)

            return Response(MessageResponseSerializer(result).data, status=status.HTTP_200_OK)


class ExtendLicenseView(APIView):
    """View for extending licenses."""

    @extend_schema(
        operation_id="extend_license",
        summary="Extend License",
        description=(
            "Set the expiration date to now plus the given number of days. "
            "The license becomes ACTIVE whatever its previous status."
        ),
        tags=["Admin API"],
        request=ExtendLicenseRequestSerializer,
        responses={
            200: ExtendLicenseResponseSerializer,
            404: {"description": "License not found"},
            **ADMIN_ERROR_RESPONSES,
        },
    )
    def post(self, request: Request) -> Response:
        """Extend a license."""
        return async_to_sync(self._handle_extend_license)(request)

    async def _handle_extend_license(self, request: Request) -> Response:
        """Async handler for extend license."""
        with admin_operation("extend_license") as span:
            serializer = ExtendLicenseRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            span.set_attribute("client_id", serializer.validated_data["client_id"])
            span.set_attribute("days", serializer.validated_data["days"])

            command = ExtendLicenseCommand(
                client_id=serializer.validated_data["client_id"],
                days=serializer.validated_data["days"],
            )
            result = await get_license_services().extend_handler().handle(command)

            return Response(
                ExtendLicenseResponseSerializer(result).data,
                status=status.HTTP_200_OK,
            )


class SetLicenseStatusView(APIView):
    """View for blocking, unblocking or toggling licenses."""

    @extend_schema(
        operation_id="set_license_status",
        summary="Set License Status",
        description=(
            "Set a license to ACTIVA or BLOQUEADA. Without new_status the "
            "license toggles: an active license is blocked and any other "
            "license becomes active."
        ),
        tags=["Admin API"],
        request=SetLicenseStatusRequestSerializer,
        responses={
            200: SetLicenseStatusResponseSerializer,
            404: {"description": "License not found"},
            **ADMIN_ERROR_RESPONSES,
        },
    )
    def post(self, request: Request) -> Response:
        """Change a license's status."""
        return async_to_sync(self._handle_set_license_status)(request)

    async def _handle_set_license_status(self, request: Request) -> Response:
        """Async handler for set license status."""
        with admin_operation("set_license_status") as span:
            serializer = SetLicenseStatusRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            span.set_attribute("client_id", serializer.validated_data["client_id"])

            command = SetLicenseStatusCommand(
                client_id=serializer.validated_data["client_id"],
                requested_status=serializer.validated_data.get("new_status"),
            )
            result = await get_license_services().set_status_handler().handle(command)
            span.set_attribute("license.status", result.new_status)

            return Response(
                SetLicenseStatusResponseSerializer(result).data,
                status=status.HTTP_200_OK,
            )


class ListLicensesView(APIView):
    """View for listing every license."""

    @extend_schema(
        operation_id="list_licenses",
        summary="List Licenses",
        description=(
            "Return every stored license ordered by client id. Statuses are "
            "reported as stored; unreadable expiration dates are reported as "
            "the Unix epoch."
        ),
        tags=["Admin API"],
        responses={200: LicenseListItemSerializer(many=True), **ADMIN_ERROR_RESPONSES},
    )
    def get(self, request: Request) -> Response:
        """List licenses."""
        return async_to_sync(self._handle_list_licenses)(request)

    async def _handle_list_licenses(self, _request: Request) -> Response:
        """Async handler for list licenses."""
        with admin_operation("list_licenses") as span:
            items = await get_license_services().list_handler().handle(ListLicensesQuery())
            span.set_attribute("licenses.count", len(items))

            return Response(
                LicenseListItemSerializer(items, many=True).data,
                status=status.HTTP_200_OK,
            )
