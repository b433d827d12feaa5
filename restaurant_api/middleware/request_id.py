"""
Restaurant API - Request ID Middleware
=======================================

What:  Assigns an ID to each incoming request, echoes it in the response,
       and stamps it on every log record emitted while the request runs.
Why:   A client can quote the ID from an error body, and the store error
       logged by the service for that request carries the same ID.
How:   Reuses a client-supplied X-Request-ID or generates a short UUID and
       stores it in a ContextVar. RequestIDLogFilter, installed on the root
       handler by setup_logging(), copies it onto each LogRecord as
       `request_id` ("-" outside a request).
"""

import logging
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


class RequestIDLogFilter(logging.Filter):
    """Adds `record.request_id` so formats can use %(request_id)s."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "request_id", ""):
            record.request_id = request_id_var.get("") or "-"
        return True


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Binds the request ID for the duration of one request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER) or new_request_id()
        # Not reset afterwards: the catch-all 500 handler runs outside this
        # middleware and still reads it
        request_id_var.set(rid)
        request.state.request_id = rid
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
