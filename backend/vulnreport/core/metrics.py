"""
Prometheus Metrics Collection for the Vulnerability Report backend

Each process keeps its own registry; metrics are scraped from /metrics.
"""

import logging
import re
import time
from typing import Callable

from fastapi import Request, Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

# =============================================================================
# HTTP Request Metrics
# =============================================================================

http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests by method, endpoint and status",
    ["method", "endpoint", "status"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
)

# =============================================================================
# Report Metrics
# =============================================================================

report_findings_total = Counter(
    "report_findings_total",
    "Total findings normalized by scanner job and severity",
    ["job", "severity"],
)

report_duplicates_removed_total = Counter(
    "report_duplicates_removed_total",
    "Total findings dropped by CVE deduplication",
)

report_aggregation_duration_seconds = Histogram(
    "report_aggregation_duration_seconds",
    "Time spent fetching and normalizing all reports of a project",
    buckets=(0.5, 1, 2, 5, 10, 20, 30, 60, 120),
)

# =============================================================================
# External API Metrics
# =============================================================================

external_api_requests_total = Counter(
    "external_api_requests_total",
    "Total external API requests by service",
    ["service"],
)

external_api_errors_total = Counter(
    "external_api_errors_total",
    "Total external API errors by service",
    ["service"],
)

external_api_duration_seconds = Histogram(
    "external_api_duration_seconds",
    "External API request duration in seconds",
    ["service"],
    buckets=(0.1, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0),
)


# =============================================================================
# Middleware for HTTP Metrics
# =============================================================================


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Middleware to automatically collect HTTP request metrics."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        # Skip metrics for the /metrics endpoint itself to avoid recursion
        if request.url.path == "/metrics":
            return await call_next(request)

        method = request.method
        start_time = time.time()
        status = 500

        try:
            response = await call_next(request)
            status = response.status_code
        except Exception as e:
            logger.error(f"Error in PrometheusMiddleware: {e}")
            raise
        finally:
            duration = time.time() - start_time
            endpoint = self._endpoint_label(request)
            http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(duration)
            http_requests_total.labels(method=method, endpoint=endpoint, status=status).inc()

        return response

    def _endpoint_label(self, request: Request) -> str:
        """Route template of the matched endpoint, or the normalized path when no route matched."""
        route = request.scope.get("route")
        path = getattr(route, "path", None)
        if path:
            return path
        return self._normalize_path(request.url.path)

    def _normalize_path(self, path: str) -> str:
        """
        Normalize URL paths to prevent cardinality explosion.

        Examples:
          /api/v1/projects/123/findings -> /api/v1/projects/{id}/findings
        """
        return re.sub(r"/\d+", "/{id}", path)


def metrics_response() -> Response:
    """Render the default registry in the Prometheus text format."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
