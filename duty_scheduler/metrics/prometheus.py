# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Prometheus metrics — single source of truth for all metric objects.
Imported by services and middleware. Never instantiated in controllers.
"""

from prometheus_client import Counter, Gauge, Histogram

# ── HTTP Metrics (used by middleware) ──
REQUEST_COUNT = Counter(
    "duty_requests_total",
    "Total HTTP requests to the duty scheduler",
    ["method", "endpoint", "status"],
)
REQUEST_LATENCY = Histogram(
    "duty_request_duration_seconds",
    "Request latency in seconds",
    ["method", "endpoint"],
)
HTTP_ERRORS = Counter(
    "duty_http_errors_total",
    "Total HTTP error responses",
    ["method", "endpoint", "status"],
)

# ── Business Metrics (updated by service layer only) ──
BOOKINGS_REQUESTED = Counter(
    "duty_bookings_requested_total",
    "Booking requests by outcome",
    ["outcome"],
)
BOOKINGS_CANCELLED = Counter(
    "duty_bookings_cancelled_total",
    "Total bookings cancelled",
)
CONFLICTS_DETECTED = Counter(
    "duty_conflicts_detected_total",
    "Contested dates found by resolver runs",
)
RESOLVER_RUNS = Counter(
    "duty_resolver_runs_total",
    "Total full-month conflict resolution runs",
)
RESOLVER_DURATION = Histogram(
    "duty_resolver_duration_seconds",
    "Time to resolve and project one month",
    buckets=[0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25],
)
ASSIGNED_DATES = Gauge(
    "duty_assigned_dates",
    "Dates with an assignee in the final schedule",
)
TICKETS_CREATED = Counter(
    "duty_tickets_created_total",
    "Total duty tickets logged",
    ["priority"],
)
