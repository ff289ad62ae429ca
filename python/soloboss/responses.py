"""Response envelopes and the exception handlers that produce them.

Every body the API returns is one of:
- { "data": ... }
- { "error": { "code": "E_...", "message": "...", "request_id": "..." } }
"""

from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from soloboss.errors import ApiError, ApiErrorCode
from soloboss.logging import get_logger, get_request_id

logger = get_logger(__name__)

# Framework-raised HTTP errors (unknown route, wrong method) mapped onto our codes
_HTTP_STATUS_CODES: dict[int, ApiErrorCode] = {
    400: ApiErrorCode.E_INVALID_REQUEST,
    401: ApiErrorCode.E_UNAUTHENTICATED,
    403: ApiErrorCode.E_FORBIDDEN,
    404: ApiErrorCode.E_NOT_FOUND,
    405: ApiErrorCode.E_INVALID_REQUEST,
    422: ApiErrorCode.E_INVALID_REQUEST,
}


def success_response(data: Any) -> dict[str, Any]:
    return {"data": data}


def error_response(
    code: ApiErrorCode, message: str, request_id: str | None = None
) -> dict[str, Any]:
    """Build the error envelope.

    request_id falls back to the id bound for the current request and is
    left out entirely when neither is available.
    """
    body: dict[str, Any] = {"code": code.value, "message": message}
    request_id = request_id or get_request_id()
    if request_id:
        body["request_id"] = request_id
    return {"error": body}


def _envelope(status_code: int, code: ApiErrorCode, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=error_response(code, message))


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return _envelope(exc.status_code, exc.code, exc.message)


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    detail = first.get("msg", "")
    return f"Invalid request: {field}: {detail}" if field else f"Invalid request: {detail}"


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report the first failing field as E_INVALID_REQUEST with status 400."""
    return _envelope(400, ApiErrorCode.E_INVALID_REQUEST, _describe_validation_error(exc))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    code = _HTTP_STATUS_CODES.get(exc.status_code, ApiErrorCode.E_INTERNAL)
    return _envelope(exc.status_code, code, str(exc.detail) if exc.detail else "An error occurred")


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log anything unexpected (store failures included) and answer 500 E_INTERNAL.

    The client only ever sees the generic message.
    """
    logger.exception("unhandled_exception", error_type=type(exc).__name__)
    return _envelope(500, ApiErrorCode.E_INTERNAL, "Internal server error")
