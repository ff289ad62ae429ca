"""Activity log service layer.

Entries are written explicitly by clients (POST /activity); other services
do not log activity on their own.
"""

from uuid import UUID, uuid4

from sqlalchemy.orm import Session

from soloboss.db.models import ActivityLog
from soloboss.logging import get_logger
from soloboss.schemas.activity import ActivityLogOut
from soloboss.services.ownership import insert_owned, owned_select

logger = get_logger(__name__)

DEFAULT_ACTIVITY_LIMIT = 20


def log_activity(
    db: Session,
    caller_id: UUID,
    action: str,
    description: str,
    entity_type: str | None = None,
    entity_id: str | None = None,
) -> ActivityLogOut:
    """Append an activity entry for the caller.

    Raises:
        NotFoundError(E_USER_NOT_FOUND): If the caller has no user row.
    """
    entry = ActivityLog(
        id=uuid4(),
        user_id=caller_id,
        action=action,
        description=description,
        entity_type=entity_type,
        entity_id=entity_id,
    )
    insert_owned(db, entry)

    logger.info("activity_logged", activity_id=str(entry.id), action=action)
    return ActivityLogOut.model_validate(entry)


def get_recent_activity(
    db: Session, caller_id: UUID, limit: int = DEFAULT_ACTIVITY_LIMIT
) -> list[ActivityLogOut]:
    """Return up to limit of the caller's activity entries, newest first."""
    entries = db.execute(owned_select(ActivityLog, caller_id).limit(limit)).scalars().all()
    return [ActivityLogOut.model_validate(entry) for entry in entries]
