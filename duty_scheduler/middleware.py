# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
HTTP Middleware — request ID propagation and Prometheus metrics.
Path parameters are folded into ``{month}``, ``{date}``, ``{id}`` or
``{user}`` so the endpoint label stays low-cardinality.
"""

import re
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from duty_scheduler.metrics.prometheus import REQUEST_COUNT, REQUEST_LATENCY, HTTP_ERRORS

ROUTE_SEGMENTS: set[str] = {
    "api", "access-keys", "auth", "validate", "team-members", "schedule",
    "bookings", "export", "tickets", "health", "ready", "metrics",
}

SKIP_PATHS: tuple[str, ...] = (
    "/health", "/health/ready", "/metrics", "/openapi.json", "/docs", "/redoc",
)

_MONTH = re.compile(r"^\d{4}-\d{2}$")
_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def normalize_segment(segment: str) -> str:
    if segment in ROUTE_SEGMENTS:
        return segment
    if _DATE.match(segment):
        return "{date}"
    if _MONTH.match(segment):
        return "{month}"
    if segment.isdigit():
        return "{id}"
    return "{user}"


def endpoint_label(path: str) -> str:
    """``/api/bookings/Aakash/2025-06-07`` -> ``/api/bookings/{user}/{date}``."""
    parts = path.strip("/").split("/")
    if parts == [""]:
        return path
    return "/" + "/".join(normalize_segment(p) for p in parts)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Reuse the caller's X-Request-ID or mint one, and echo it back."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response


class MetricsMiddleware(BaseHTTPMiddleware):
    """Count and time every API request; health and docs routes are skipped."""

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        duration = time.perf_counter() - start

        path = request.url.path
        if path in SKIP_PATHS:
            return response

        endpoint = endpoint_label(path)
        status = str(response.status_code)
        REQUEST_COUNT.labels(method=request.method, endpoint=endpoint, status=status).inc()
        REQUEST_LATENCY.labels(method=request.method, endpoint=endpoint).observe(duration)
        if response.status_code >= 400:
            HTTP_ERRORS.labels(method=request.method, endpoint=endpoint, status=status).inc()
        return response
