"""Dashboard route."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from soloboss.api.deps import get_db
from soloboss.auth.middleware import Caller, get_caller
from soloboss.responses import success_response
from soloboss.services import dashboard as dashboard_service

router = APIRouter()


@router.get("/dashboard/stats")
def get_dashboard_stats(
    caller: Annotated[Caller, Depends(get_caller)],
    db: Annotated[Session, Depends(get_db)],
) -> dict:
    """Get task, document and recent activity counts for the caller.

    Recent activity covers the last RECENT_ACTIVITY_WINDOW_DAYS days.
    """
    result = dashboard_service.get_dashboard_stats(db, caller.user_id)
    return success_response(result.model_dump(mode="json"))
