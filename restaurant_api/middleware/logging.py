"""
Restaurant API - Access Log Middleware
=======================================

What:  One access log line per restaurant request.
How:   Times the downstream call and logs method, path, status and duration
       at a level chosen from the status class. Calls on
       /restaurant/{id} also record the restaurant id they addressed, so
       every request touching one restaurant can be found by grepping
       `restaurant=<id>`. The request ID comes from the log format
       (see RequestIDLogFilter).

What we log vs what we DON'T log:
    ✅ Log: method, path, restaurant id, status, duration, IP
    ❌ Don't log: request bodies
"""

import logging
import re
import time
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("restaurant_api.access")

_RESTAURANT_PATH = re.compile(r"^/restaurant/(?P<restaurant_id>[^/]+)/?$")

# Polled by probes every few seconds
SKIPPED_PATHS = frozenset({"/health"})


def restaurant_id_from_path(path: str) -> Optional[str]:
    """The raw id segment of /restaurant/{id}, or None for other paths."""
    match = _RESTAURANT_PATH.match(path)
    return match.group("restaurant_id") if match else None


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in SKIPPED_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        restaurant_id = restaurant_id_from_path(path)
        client_ip = request.client.host if request.client else "unknown"
        target = f" restaurant={restaurant_id}" if restaurant_id else ""

        logger.log(
            level_for_status(response.status_code),
            "%s %s%s %d %.1fms from %s",
            request.method,
            path,
            target,
            response.status_code,
            duration_ms,
            client_ip,
            extra={
                "method": request.method,
                "path": path,
                "restaurant_id": restaurant_id,
                "status": response.status_code,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )
        return response
