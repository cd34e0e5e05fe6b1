"""
Admin secret authentication middleware.

This middleware gates the admin license API behind a pre-shared
bearer secret. The client-facing validation API is open.
"""

import logging
from typing import Optional

from django.http import HttpRequest, HttpResponse, JsonResponse

from core.domain.exceptions import AdminSecretNotConfiguredError, UnauthorizedError
from licenses.infrastructure.services import get_license_services

logger = logging.getLogger(__name__)

ADMIN_PATH_PREFIX = "/api/v1/admin/"
BEARER_PREFIX = "Bearer "


def _error_response(code: str, message: str, status: int) -> JsonResponse:
    return JsonResponse({"error": {"code": code, "message": message}}, status=status)


class AdminSecretAuthenticationMiddleware:
    """
    Middleware for admin API authentication.

    This middleware:
    1. Leaves every path outside /api/v1/admin/ untouched
    2. Compares the Authorization bearer token with the admin secret
    3. Returns 401 Unauthorized on mismatch, 500 when no secret is configured
    """

    def __init__(self, get_response):
        """Initialize middleware."""
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """Process request and validate authentication."""
        if request.path.startswith(ADMIN_PATH_PREFIX):
            rejection = self._authenticate_admin_api(request)
            if rejection is not None:
                return rejection
        return self.get_response(request)

    def _authenticate_admin_api(self, request: HttpRequest) -> Optional[HttpResponse]:
        """
        Authenticate admin API request.

        Args:
            request: HTTP request

        Returns:
            HttpResponse if auth fails, None if successful
        """
        guard = get_license_services().admin_guard
        presented = self._bearer_token(request)

        try:
            authorized = guard.authorized(presented)
        except AdminSecretNotConfiguredError as exc:
            logger.error("ADMIN_SECRET_KEY is not set.")
            return _error_response(exc.code, exc.message, 500)

        if not authorized:
            error = UnauthorizedError()
            logger.warning(
                "Rejected admin request to %s from %s",
                request.path,
                request.META.get("REMOTE_ADDR"),
            )
            return _error_response(error.code, error.message, 401)

        request.is_admin = True  # type: ignore
        return None

    def _bearer_token(self, request: HttpRequest) -> Optional[str]:
        header = request.headers.get("Authorization", "")
        if not header.startswith(BEARER_PREFIX):
            return None
        return header[len(BEARER_PREFIX):]
