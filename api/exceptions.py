"""
API exception handlers.

This module provides custom exception handling for REST API responses.
"""

import logging
from typing import Any, Dict, Optional

from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.domain.exceptions import (
    AdminSecretNotConfiguredError,
    CorruptLicenseRecordError,
    DomainException,
    InvalidArgumentError,
    LicenseAlreadyExistsError,
    LicenseNotFoundError,
    UnauthorizedError,
)
from core.metrics import errors_total

logger = logging.getLogger(__name__)

# Checked in order; the first matching class wins.
DOMAIN_STATUS_CODES = (
    (InvalidArgumentError, status.HTTP_400_BAD_REQUEST),
    (UnauthorizedError, status.HTTP_401_UNAUTHORIZED),
    (LicenseNotFoundError, status.HTTP_404_NOT_FOUND),
    (LicenseAlreadyExistsError, status.HTTP_409_CONFLICT),
    (AdminSecretNotConfiguredError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (CorruptLicenseRecordError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def custom_exception_handler(exc: Exception, context: Dict[str, Any]) -> Response:
    """Custom exception handler for REST API."""
    trace_id = _get_trace_id(context)

    if isinstance(exc, DomainException):
        response = _handle_domain_exception(exc, context, trace_id)
    elif isinstance(exc, ValidationError):
        response = _handle_validation_error(exc, context, trace_id)
    elif isinstance(exc, APIException):
        response = exception_handler(exc, context)
        code = exc.default_code.upper().replace("-", "_")
        detail = response.data.get("detail", exc.default_detail)
        response.data = {"error": {"code": code, "message": str(detail)}}
    elif isinstance(exc, Http404):
        response = Response(
            {"error": {"code": "NOT_FOUND", "message": "Resource not found"}},
            status=status.HTTP_404_NOT_FOUND,
        )
    else:
        response = _handle_unexpected_exception(exc, context, trace_id)

    if trace_id:
        response["X-Trace-ID"] = trace_id
    return response


def _get_trace_id(context: Dict[str, Any]) -> Optional[str]:
    """Extract trace ID from request context."""
    request = context.get("request")
    if not request:
        return None
    return getattr(request, "trace_id", getattr(request, "correlation_id", None))


def _endpoint(context: Dict[str, Any]) -> str:
    request = context.get("request")
    match = getattr(request, "resolver_match", None) if request else None
    return match.view_name if match else "unmatched"


def domain_status_code(exc: DomainException) -> int:
    """HTTP status for a domain exception."""
    for exc_class, status_code in DOMAIN_STATUS_CODES:
        if isinstance(exc, exc_class):
            return status_code
    return status.HTTP_400_BAD_REQUEST


def _handle_domain_exception(
    exc: DomainException, context: Dict[str, Any], trace_id: Optional[str]
) -> Response:
    """Handle domain-specific exceptions."""
    status_code = domain_status_code(exc)

    if status_code >= 500:
        logger.error("Domain error: %s - %s", exc.code, exc.message, extra={"trace_id": trace_id})
        errors_total.labels(error_type=exc.code, endpoint=_endpoint(context)).inc()
    else:
        logger.warning(
            "Domain exception: %s - %s", exc.code, exc.message, extra={"trace_id": trace_id}
        )
    return Response({"error": {"code": exc.code, "message": exc.message}}, status=status_code)


def _handle_validation_error(
    exc: ValidationError, context: Dict[str, Any], trace_id: Optional[str]
) -> Response:
    """Report request validation failures as invalid arguments."""
    fields = exc.detail if isinstance(exc.detail, dict) else {"non_field_errors": exc.detail}
    message = "; ".join(
        f"{field}: {' '.join(str(error) for error in errors)}"
        if isinstance(errors, list)
        else f"{field}: {errors}"
        for field, errors in fields.items()
    )
    logger.warning(
        "Invalid request to %s: %s", _endpoint(context), message, extra={"trace_id": trace_id}
    )
    return Response(
        {"error": {"code": "INVALID_ARGUMENT", "message": message, "fields": fields}},
        status=status.HTTP_400_BAD_REQUEST,
    )


def _handle_unexpected_exception(
    exc: Exception, context: Dict[str, Any], trace_id: Optional[str]
) -> Response:
    """Handle unexpected or untracked exceptions."""
    logger.error("Unexpected error: %s", exc, extra={"trace_id": trace_id}, exc_info=True)
    errors_total.labels(error_type=type(exc).__name__, endpoint=_endpoint(context)).inc()
    return Response(
        {"error": {"code": "INTERNAL_ERROR", "message": "An internal error occurred"}},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
