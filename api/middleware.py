"""Request context middleware using ContextVar.

Takes the request id from the X-Request-ID header (or generates one) and
stores it in a ContextVar so any downstream code can call
get_request_id() without explicit parameter passing. Every log record
emitted while the request is in flight carries the id, and one access
line is logged when the response is ready.
"""

import time
import uuid
from contextvars import ContextVar

from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# ---------------------------------------------------------------------------
# Context variable — task-safe request state
# ---------------------------------------------------------------------------

_request_id: ContextVar[str] = ContextVar("request_id", default="-")


def get_request_id() -> str:
    """Return the id of the request being handled, or "-" outside a request."""
    return _request_id.get()


# ---------------------------------------------------------------------------
# Middleware
# ---------------------------------------------------------------------------

class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind a request id and log one line per request."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        token = _request_id.set(request_id)
        started = time.perf_counter()

        try:
            with logger.contextualize(request_id=request_id):
                try:
                    response = await call_next(request)
                except Exception:
                    logger.exception(
                        "{} {} failed", request.method, request.url.path
                    )
                    raise

                elapsed_ms = (time.perf_counter() - started) * 1000
                logger.info(
                    "{} {} -> {} ({:.1f} ms)",
                    request.method,
                    request.url.path,
                    response.status_code,
                    elapsed_ms,
                )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            _request_id.reset(token)
