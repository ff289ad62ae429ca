"""Error codes and the exceptions that carry them to the client.

A code fixes the HTTP status. The message travels to the client unchanged,
so it must never include internals such as SQL or stack details.
"""

from enum import Enum
from uuid import UUID


class ApiErrorCode(str, Enum):
    """Machine-readable error codes, spelled E_<WHAT>."""

    E_UNAUTHENTICATED = "E_UNAUTHENTICATED"
    E_FORBIDDEN = "E_FORBIDDEN"
    E_INTERNAL_ONLY = "E_INTERNAL_ONLY"
    E_NOT_FOUND = "E_NOT_FOUND"
    E_USER_NOT_FOUND = "E_USER_NOT_FOUND"
    E_TASK_NOT_FOUND = "E_TASK_NOT_FOUND"
    E_DOCUMENT_NOT_FOUND = "E_DOCUMENT_NOT_FOUND"
    E_AGENT_NOT_FOUND = "E_AGENT_NOT_FOUND"
    E_INVALID_REQUEST = "E_INVALID_REQUEST"
    E_AGENT_INACTIVE = "E_AGENT_INACTIVE"
    E_AUTH_UNAVAILABLE = "E_AUTH_UNAVAILABLE"
    E_INTERNAL = "E_INTERNAL"


_CODES_BY_STATUS: dict[int, tuple[ApiErrorCode, ...]] = {
    400: (ApiErrorCode.E_INVALID_REQUEST, ApiErrorCode.E_AGENT_INACTIVE),
    401: (ApiErrorCode.E_UNAUTHENTICATED,),
    403: (ApiErrorCode.E_FORBIDDEN, ApiErrorCode.E_INTERNAL_ONLY),
    404: (
        ApiErrorCode.E_NOT_FOUND,
        ApiErrorCode.E_USER_NOT_FOUND,
        ApiErrorCode.E_TASK_NOT_FOUND,
        ApiErrorCode.E_DOCUMENT_NOT_FOUND,
        ApiErrorCode.E_AGENT_NOT_FOUND,
    ),
    500: (ApiErrorCode.E_INTERNAL,),
    503: (ApiErrorCode.E_AUTH_UNAVAILABLE,),
}

ERROR_CODE_TO_STATUS: dict[ApiErrorCode, int] = {
    code: status for status, codes in _CODES_BY_STATUS.items() for code in codes
}


class ApiError(Exception):
    """An error the API reports to the client as an envelope.

    Subclasses pick a default code and message; both can be overridden per
    raise site. status_code follows from the code.
    """

    default_code = ApiErrorCode.E_INTERNAL
    default_message = "Internal server error"

    def __init__(self, code: ApiErrorCode | None = None, message: str | None = None):
        self.code = code or self.default_code
        self.message = message or self.default_message
        self.status_code = ERROR_CODE_TO_STATUS.get(self.code, 500)
        super().__init__(self.message)


class UnauthenticatedError(ApiError):
    default_code = ApiErrorCode.E_UNAUTHENTICATED
    default_message = "Authentication required"


class NotFoundError(ApiError):
    default_code = ApiErrorCode.E_NOT_FOUND
    default_message = "Not found"


class ForbiddenError(ApiError):
    default_code = ApiErrorCode.E_FORBIDDEN
    default_message = "Forbidden"


class InvalidRequestError(ApiError):
    default_code = ApiErrorCode.E_INVALID_REQUEST
    default_message = "Invalid request"


def user_not_found(user_id: UUID) -> NotFoundError:
    """Error for a caller whose user row does not exist."""
    return NotFoundError(ApiErrorCode.E_USER_NOT_FOUND, f"User with id {user_id} not found")
