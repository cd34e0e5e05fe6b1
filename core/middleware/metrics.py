"""
Metrics middleware for Prometheus.

Records HTTP request metrics for monitoring.
"""

import time
from typing import Callable

from django.http import HttpRequest, HttpResponse

from core.metrics import (
    http_request_duration_seconds,
    http_requests_total,
)


class MetricsMiddleware:
    """
    Middleware to record HTTP metrics for Prometheus.

    Records:
    - Request count by method, endpoint, status
    - Request duration histogram

    Endpoints are labelled with the resolved URL name so client ids in
    paths or bodies never become label values.
    """

    def __init__(self, get_response: Callable):
        """Initialize middleware."""
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """Process request and record metrics."""
        start_time = time.time()

        try:
            response = self.get_response(request)
        except Exception:
            self._record(request, 500, time.time() - start_time)
            raise

        self._record(request, response.status_code, time.time() - start_time)
        return response

    def _record(self, request: HttpRequest, status_code: int, duration: float) -> None:
        endpoint = self._endpoint(request)
        http_requests_total.labels(
            method=request.method,
            endpoint=endpoint,
            status_code=status_code,
        ).inc()
        http_request_duration_seconds.labels(
            method=request.method,
            endpoint=endpoint,
        ).observe(duration)

    def _endpoint(self, request: HttpRequest) -> str:
        match = getattr(request, "resolver_match", None)
        if match is not None and match.view_name:
            return match.view_name
        return "unmatched"
