"""Request authentication.

AuthMiddleware admits a request only when it carries a valid Supabase bearer
token, plus the shared internal secret when the deployment demands it. Route
handlers read the result through the get_caller dependency.
"""

import hmac
from dataclasses import dataclass
from uuid import UUID

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp

from soloboss.auth.verifier import TokenVerifier
from soloboss.errors import ApiError, ApiErrorCode, ForbiddenError, UnauthenticatedError
from soloboss.logging import get_logger, user_id_var
from soloboss.responses import error_response

logger = get_logger(__name__)

INTERNAL_HEADER = "x-soloboss-internal"

PUBLIC_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}

_BEARER = "bearer "


@dataclass(frozen=True)
class Caller:
    """Identity of the user behind an authenticated request (the token's sub)."""

    user_id: UUID


def _internal_only() -> ForbiddenError:
    return ForbiddenError(ApiErrorCode.E_INTERNAL_ONLY, "Internal API access required")


def _bad_header_format() -> UnauthenticatedError:
    return UnauthenticatedError(message="Invalid authorization header format")


class AuthMiddleware(BaseHTTPMiddleware):
    """Reject unauthenticated requests before they reach a route.

    Public paths and CORS preflights pass straight through. For everything
    else the internal header is checked first (when required), then the
    bearer token. A request that survives both gets request.state.caller.

    The middleware never touches the database; a verified caller with no
    user row is reported as E_USER_NOT_FOUND by the services that need one.
    """

    def __init__(
        self,
        app: ASGIApp,
        verifier: TokenVerifier,
        requires_internal_header: bool = False,
        internal_secret: str | None = None,
    ):
        super().__init__(app)
        self.verifier = verifier
        self.requires_internal_header = requires_internal_header
        self.internal_secret = internal_secret

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.url.path in PUBLIC_PATHS or request.method == "OPTIONS":
            return await call_next(request)

        try:
            if self.requires_internal_header:
                self._check_internal_header(request.headers.get(INTERNAL_HEADER))
            token = self._bearer_token(request.headers.get("authorization"))
            claims = self.verifier.verify(token)
        except ApiError as exc:
            return JSONResponse(
                status_code=exc.status_code,
                content=error_response(exc.code, exc.message),
            )

        caller = Caller(user_id=UUID(claims["sub"]))
        request.state.caller = caller
        user_id_var.set(str(caller.user_id))
        return await call_next(request)

    def _check_internal_header(self, supplied: str | None) -> None:
        if supplied is None:
            logger.warning("auth_failure", reason="internal_header_missing")
            raise _internal_only()

        if not self.internal_secret:
            # Settings validation requires the secret wherever the header is enforced
            logger.error("internal_secret_not_configured")
            raise ApiError(ApiErrorCode.E_INTERNAL, "Internal server error")

        if not hmac.compare_digest(supplied.encode(), self.internal_secret.encode()):
            logger.warning("auth_failure", reason="internal_header_mismatch")
            raise _internal_only()

    @staticmethod
    def _bearer_token(header: str | None) -> str:
        """Return the token from an Authorization header value.

        The scheme name is matched case-insensitively.
        """
        if not header:
            logger.warning("auth_failure", reason="missing_header")
            raise UnauthenticatedError()

        if not header.lower().startswith(_BEARER):
            logger.warning("auth_failure", reason="invalid_header_format")
            raise _bad_header_format()

        token = header[len(_BEARER):].strip()
        if not token:
            logger.warning("auth_failure", reason="invalid_header_format")
            raise _bad_header_format()
        return token


def get_caller(request: Request) -> Caller:
    """FastAPI dependency returning the caller attached by AuthMiddleware.

    Raises:
        UnauthenticatedError: On routes the middleware let through without a
            token (public paths).
    """
    caller = getattr(request.state, "caller", None)
    if caller is None:
        raise UnauthenticatedError()
    return caller
