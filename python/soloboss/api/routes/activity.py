"""Activity log routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from soloboss.api.deps import get_db
from soloboss.auth.middleware import Caller, get_caller
from soloboss.responses import success_response
from soloboss.schemas.activity import LogActivityRequest
from soloboss.services import activity as activity_service
from soloboss.services.ownership import MAX_LIST_LIMIT

router = APIRouter()


@router.get("/activity")
def get_recent_activity(
    caller: Annotated[Caller, Depends(get_caller)],
    db: Annotated[Session, Depends(get_db)],
    limit: int = Query(
        default=activity_service.DEFAULT_ACTIVITY_LIMIT,
        ge=1,
        le=MAX_LIST_LIMIT,
        description="Maximum results",
    ),
) -> dict:
    """Get the caller's most recent activity, newest first."""
    result = activity_service.get_recent_activity(db, caller.user_id, limit=limit)
    return success_response([entry.model_dump(mode="json") for entry in result])


@router.post("/activity", status_code=201)
def log_activity(
    body: LogActivityRequest,
    caller: Annotated[Caller, Depends(get_caller)],
    db: Annotated[Session, Depends(get_db)],
) -> dict:
    """Record an activity entry for the caller.

    Errors:
        - 400 E_INVALID_REQUEST: Invalid body or unknown entity_type
        - 404 E_USER_NOT_FOUND: Caller has no user row
    """
    result = activity_service.log_activity(
        db,
        caller.user_id,
        body.action,
        body.description,
        entity_type=body.entity_type,
        entity_id=body.entity_id,
    )
    return success_response(result.model_dump(mode="json"))
