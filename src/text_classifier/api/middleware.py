"""Request tracing: one id per request, bound into every log event."""

import re
import time
import uuid

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

logger = structlog.get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
PROCESS_TIME_HEADER = "X-Process-Time-Ms"

_VALID_REQUEST_ID = re.compile(r"[A-Za-z0-9._:-]{1,128}")


def resolve_request_id(request: Request) -> str:
    """Reuse the caller's X-Request-ID when it is well formed, else mint a UUID4."""
    incoming = request.headers.get(REQUEST_ID_HEADER, "")
    if _VALID_REQUEST_ID.fullmatch(incoming):
        return incoming
    return str(uuid.uuid4())


class RequestTracingMiddleware(BaseHTTPMiddleware):
    """Bind ``request_id`` to the structlog context for the request's lifetime.

    The id and the handling time are returned as response headers. Errors
    raised past the exception handlers are logged and re-raised.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = resolve_request_id(request)
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            route=f"{request.method} {request.url.path}",
        )
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            logger.exception("Unhandled error", elapsed_ms=_elapsed_ms(started))
            raise
        else:
            elapsed = _elapsed_ms(started)
            response.headers[REQUEST_ID_HEADER] = request_id
            response.headers[PROCESS_TIME_HEADER] = f"{elapsed:.2f}"
            log = logger.warning if response.status_code >= 500 else logger.info
            log("Request handled", status_code=response.status_code, elapsed_ms=elapsed)
            return response
        finally:
            structlog.contextvars.unbind_contextvars("request_id", "route")


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)
