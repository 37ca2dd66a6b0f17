"""
API middleware components.

Access logging with request ids and recovery from unhandled exceptions.
"""

import contextvars
import time
import uuid
from typing import Optional

from fastapi import Request, Response, status
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from app.api.errors import error_response
from app.core.metrics import is_metrics_path

request_id_var = contextvars.ContextVar[Optional[str]]("request_id", default=None)


class AccessLogMiddleware(BaseHTTPMiddleware):
    """
    Log one line per request and tag the response with a request ID.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request_id_var.set(request_id)
        start_time = time.perf_counter()

        with logger.contextualize(request_id=request_id):
            response = await call_next(request)

            path = request.url.path
            # Polled endpoints are kept out of the access log
            if not is_metrics_path(path):
                latency_ms = (time.perf_counter() - start_time) * 1000
                client_host = request.client.host if request.client else "-"
                logger.info(
                    f"[HTTP] {response.status_code:3d} | {latency_ms:10.2f}ms | {client_host:>15} | "
                    f"{request.method:<7} {path}"
                )

        response.headers["X-Request-ID"] = request_id
        return response


class RecoveryMiddleware(BaseHTTPMiddleware):
    """
    Turn any exception that escapes the routes into a 500 response.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            logger.exception(f"Unhandled exception on {request.method} {request.url.path}: {e}")
            return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def get_request_id() -> str:
    """
    Get the request ID for the current request.

    Returns:
        The current request ID or an empty string outside a request
    """
    request_id = request_id_var.get()
    return request_id if request_id is not None else ""
