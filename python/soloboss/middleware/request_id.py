"""Request correlation and access logging.

RequestIDMiddleware has to be the outermost middleware (added last) so the
X-Request-ID header lands on every response, auth rejections included.
"""

import re
import time
import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from soloboss.logging import clear_request_context, get_logger, set_request_context

REQUEST_ID_HEADER = "X-Request-ID"

# Client IDs are kept only when short and made of URL-safe characters
_CLIENT_ID = re.compile(r"[A-Za-z0-9._-]{1,128}")

logger = get_logger(__name__)


def resolve_request_id(incoming: str | None) -> str:
    """Pick the id for this request: the client's if acceptable, else a new UUID4.

    Client ids that are UUIDs are lowercased so log searches match either case.
    """
    if not incoming or not _CLIENT_ID.fullmatch(incoming):
        return str(uuid.uuid4())
    try:
        as_uuid = uuid.UUID(incoming)
    except ValueError:
        return incoming
    canonical = str(as_uuid)
    return canonical if canonical == incoming.lower() else incoming


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Bind a request id to the log context, echo it back, and log the outcome."""

    def __init__(self, app: ASGIApp, log_requests: bool = True):
        super().__init__(app)
        self.log_requests = log_requests

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.monotonic()
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = request_id
        set_request_context(request_id, path=request.url.path, method=request.method)

        try:
            response = await call_next(request)
        except Exception:
            logger.exception("request_failed")
            raise
        else:
            # AuthMiddleware runs in a child context; copy the caller back for the access entry
            caller = getattr(request.state, "caller", None)
            if caller is not None:
                set_request_context(request_id, user_id=str(caller.user_id))

            response.headers[REQUEST_ID_HEADER] = request_id
            if self.log_requests:
                logger.info(
                    "request_completed",
                    status_code=response.status_code,
                    duration_ms=round((time.monotonic() - started) * 1000, 2),
                )
            return response
        finally:
            clear_request_context()
