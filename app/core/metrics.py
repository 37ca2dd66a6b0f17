"""
Prometheus metrics configuration.
"""

import time
from typing import Any, Callable, cast

from fastapi import FastAPI, Request, Response
from loguru import logger
from prometheus_client import REGISTRY, Counter, Gauge, Histogram
from prometheus_client.openmetrics.exposition import CONTENT_TYPE_LATEST, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware

METRICS_PATH = "/metrics"
PROMETHEUS_PATH = METRICS_PATH + "/prometheus"

REQUEST_COUNT = Counter("http_requests_total", "Total HTTP requests count", ["method", "endpoint", "status_code"])

REQUEST_TIME = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.075, 0.1, 0.25, 0.5, 0.75, 1.0, 2.5, 5.0, float("inf")),
)

REQUEST_IN_PROGRESS = Gauge("http_requests_in_progress", "Number of HTTP requests in progress", ["method", "endpoint"])

CATEGORY_OPERATIONS = Counter("category_operations_total", "Completed category operations", ["operation"])


def normalize_path(path: str) -> str:
    """Collapse numeric path segments so each route is one label value."""
    return "/".join("{id}" if part.isdigit() else part for part in path.split("/"))


def is_metrics_path(path: str) -> bool:
    """True for /metrics and anything below it, but not for /metricsfoo."""
    return path == METRICS_PATH or path.startswith(METRICS_PATH + "/")


class PrometheusMiddleware(BaseHTTPMiddleware):
    """
    Middleware that collects Prometheus metrics for HTTP requests.
    """

    async def dispatch(self, request: Request, call_next: Callable[[Request], Any]) -> Response:
        if is_metrics_path(request.url.path):
            return cast(Response, await call_next(request))

        method = request.method
        path = normalize_path(request.url.path)
        start_time = time.perf_counter()

        REQUEST_IN_PROGRESS.labels(method=method, endpoint=path).inc()
        try:
            response = cast(Response, await call_next(request))
            REQUEST_COUNT.labels(method=method, endpoint=path, status_code=response.status_code).inc()
            REQUEST_TIME.labels(method=method, endpoint=path).observe(time.perf_counter() - start_time)
            return response
        finally:
            REQUEST_IN_PROGRESS.labels(method=method, endpoint=path).dec()


async def metrics_endpoint(request: Request) -> Response:
    """
    Endpoint for exposing Prometheus metrics.
    """
    return Response(content=generate_latest(REGISTRY), headers={"Content-Type": CONTENT_TYPE_LATEST})


def setup_metrics(app: FastAPI) -> None:
    """
    Set up Prometheus metrics and middleware for FastAPI application.
    """
    app.add_middleware(PrometheusMiddleware)
    app.add_route(PROMETHEUS_PATH, metrics_endpoint, include_in_schema=False)

    logger.info("Prometheus metrics configured")


def record_category_operation(operation: str) -> None:
    """Count a completed category operation."""
    CATEGORY_OPERATIONS.labels(operation=operation).inc()
