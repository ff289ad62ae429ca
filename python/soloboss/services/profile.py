"""User profile service layer."""

from uuid import UUID

from sqlalchemy.orm import Session

from soloboss.db.models import User
from soloboss.errors import user_not_found
from soloboss.logging import get_logger
from soloboss.schemas.user import UpdateUserProfileRequest, UserOut
from soloboss.services.ownership import update_returning

logger = get_logger(__name__)


def get_user_profile(db: Session, caller_id: UUID) -> UserOut | None:
    """Return the caller's profile, or None if no user row exists."""
    user = db.get(User, caller_id)
    if user is None:
        return None
    return UserOut.model_validate(user)


def update_user_profile(db: Session, caller_id: UUID, req: UpdateUserProfileRequest) -> UserOut:
    """Apply the fields present in req to the caller's profile.

    Raises:
        NotFoundError(E_USER_NOT_FOUND): If the caller has no user row.
    """
    changes = req.changes()
    user = update_returning(db, User, (User.id == caller_id,), changes, user_not_found(caller_id))

    logger.info("profile_updated", fields=sorted(changes))
    return UserOut.model_validate(user)
