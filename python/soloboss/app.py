"""Application factory.

Starlette runs middleware in the reverse of the order it was added, so the
stack a request passes through is:

    RequestIDMiddleware   added last by add_request_id_middleware()
    CORSMiddleware        only when CORS_ALLOWED_ORIGINS is set
    AuthMiddleware        unless skipped for tests
    routes

CORS sits outside auth so preflights and 401s still carry CORS headers.
"""

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from soloboss.api.routes import create_api_router
from soloboss.auth.middleware import AuthMiddleware
from soloboss.auth.verifier import SupabaseJwksVerifier, TokenVerifier
from soloboss.config import Settings, get_settings
from soloboss.errors import ApiError
from soloboss.logging import configure_logging, get_logger
from soloboss.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware
from soloboss.responses import (
    api_error_handler,
    http_exception_handler,
    unhandled_exception_handler,
    validation_error_handler,
)
from soloboss.services.responders import CannedResponseStrategy, ResponseStrategy

logger = get_logger(__name__)


def create_token_verifier(settings: Settings | None = None) -> SupabaseJwksVerifier:
    """JWKS verifier for the configured Supabase project."""
    settings = settings or get_settings()
    return SupabaseJwksVerifier(
        jwks_url=settings.supabase_jwks_url,  # type: ignore[arg-type]
        issuer=settings.normalized_issuer,  # type: ignore[arg-type]
        audiences=settings.audience_list,
    )


def _install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


def _install_cors(app: FastAPI, origins: list[str]) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE"],
        allow_headers=["Authorization", "Content-Type", REQUEST_ID_HEADER],
        expose_headers=[REQUEST_ID_HEADER],
    )
    logger.info("cors_middleware_enabled", origins=origins)


def create_app(
    skip_auth_middleware: bool = False,
    token_verifier: TokenVerifier | None = None,
    response_strategy: ResponseStrategy | None = None,
) -> FastAPI:
    """Build the SoloBoss API.

    Args:
        skip_auth_middleware: Leave AuthMiddleware out; tests that exercise
            routes without tokens use this.
        token_verifier: Verifier to use instead of the Supabase JWKS one.
        response_strategy: How agents answer chat messages. Canned by default.

    add_request_id_middleware() must still be called on the result.
    """
    settings = get_settings()
    configure_logging(json_format=settings.log_json)

    app = FastAPI(
        title="SoloBoss API",
        description="Backend API for SoloBoss AI - tasks, documents and AI agents for solopreneurs",
        version="0.1.0",
    )
    app.state.response_strategy = response_strategy or CannedResponseStrategy()

    _install_exception_handlers(app)
    app.include_router(create_api_router())

    if not skip_auth_middleware:
        app.add_middleware(
            AuthMiddleware,
            verifier=token_verifier or create_token_verifier(settings),
            requires_internal_header=settings.requires_internal_header,
            internal_secret=settings.soloboss_internal_secret,
        )
        logger.info(
            "auth_middleware_enabled",
            env=settings.soloboss_env.value,
            internal_header_required=settings.requires_internal_header,
        )

    if settings.cors_origin_list:
        _install_cors(app, settings.cors_origin_list)

    return app


def add_request_id_middleware(app: FastAPI, log_requests: bool = True) -> None:
    """Wrap app in RequestIDMiddleware; call after every other middleware is added."""
    app.add_middleware(RequestIDMiddleware, log_requests=log_requests)
    logger.info("request_id_middleware_enabled")
