"""Middleware that logs one line per handled request."""
from __future__ import annotations

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger("technotes.requests")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and duration for every request."""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        origin = request.headers.get("Origin", "-")
        logger.info(
            "%s %s -> %d (%.1f ms, origin=%s)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            origin,
        )
        return response
