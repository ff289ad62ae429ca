"""Current user profile endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from soloboss.api.deps import get_db
from soloboss.auth.middleware import Caller, get_caller
from soloboss.errors import user_not_found
from soloboss.responses import success_response
from soloboss.schemas.user import UpdateUserProfileRequest
from soloboss.services import profile as profile_service

router = APIRouter()


@router.get("/me")
def get_me(
    caller: Annotated[Caller, Depends(get_caller)],
    db: Annotated[Session, Depends(get_db)],
) -> dict:
    """Get the caller's profile.

    Errors:
        - 404 E_USER_NOT_FOUND: Caller has no user row
    """
    result = profile_service.get_user_profile(db, caller.user_id)
    if result is None:
        raise user_not_found(caller.user_id)
    return success_response(result.model_dump(mode="json"))


@router.patch("/me")
def update_me(
    body: UpdateUserProfileRequest,
    caller: Annotated[Caller, Depends(get_caller)],
    db: Annotated[Session, Depends(get_db)],
) -> dict:
    """Partially update the caller's profile.

    Errors:
        - 400 E_INVALID_REQUEST: Invalid body or null name
        - 404 E_USER_NOT_FOUND: Caller has no user row
    """
    result = profile_service.update_user_profile(db, caller.user_id, body)
    return success_response(result.model_dump(mode="json"))
