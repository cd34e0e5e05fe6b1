"""
Prometheus metrics for the license service.

Custom metrics for business logic and performance monitoring.
"""

from prometheus_client import Counter, Histogram

# HTTP metrics
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0],
)

# License metrics
license_validations_total = Counter(
    "license_validations_total",
    "Total license validations by verdict",
    ["result"],
)

license_auto_registrations_total = Counter(
    "license_auto_registrations_total",
    "Total licenses registered as pending on first contact",
)

license_expirations_total = Counter(
    "license_expirations_total",
    "Total ACTIVE licenses transitioned to EXPIRED",
    ["source"],
)

licenses_admin_operations_total = Counter(
    "licenses_admin_operations_total",
    "Total admin license operations",
    ["operation", "outcome"],
)

last_seen_touch_failures_total = Counter(
    "last_seen_touch_failures_total",
    "Total last_seen touches that failed to dispatch, publish or persist",
    ["stage"],
)

# Error metrics
errors_total = Counter(
    "errors_total",
    "Total errors",
    ["error_type", "endpoint"],
)
