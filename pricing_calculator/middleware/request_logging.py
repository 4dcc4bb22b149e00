"""
Request logging middleware for FastAPI.
Logs one line per request with method, path, status and duration.
"""
import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs every request; failing API calls are logged at ERROR."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            duration_ms = (time.perf_counter() - started) * 1000
            logger.exception(
                "%s %s failed after %.1fms", request.method, request.url.path, duration_ms
            )
            raise

        duration_ms = (time.perf_counter() - started) * 1000
        if response.status_code >= 500:
            logger.error(
                "%s %s -> %d (%.1fms)",
                request.method, request.url.path, response.status_code, duration_ms
            )
        else:
            logger.info(
                "%s %s -> %d (%.1fms)",
                request.method, request.url.path, response.status_code, duration_ms
            )
        return response
