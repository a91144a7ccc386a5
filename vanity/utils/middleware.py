"""
Request logging middleware.

Logs one line per request on the `vanity.access` logger:
method, host, path, status, and duration.

Usage:
    from vanity.utils.middleware import RequestLoggingMiddleware

    app.add_middleware(RequestLoggingMiddleware)
"""

from __future__ import annotations

import time
from collections.abc import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from vanity.utils.logging import get_logger

log = get_logger("vanity.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, *, exclude_paths: list[str] | None = None):
        super().__init__(app)
        self.exclude_paths = set(exclude_paths or [])
        self.exclude_paths.add("/healthz")

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        path = request.url.path
        if path in self.exclude_paths:
            return await call_next(request)

        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000.0

        log.info(
            f"{request.method} {request.headers.get('host', '')}{path} {response.status_code}",
            extra={
                "method": request.method,
                "host": request.headers.get("host", ""),
                "path": path,
                "status": response.status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )
        return response


__all__ = ["RequestLoggingMiddleware"]
