"""Owner-scoped persistence helpers shared by every mutating service.

Every user-owned row carries user_id. The helpers here make that column part
of every statement so a caller can only see or touch its own rows:

- Inserts surface a missing owner as E_USER_NOT_FOUND.
- Updates run as a single UPDATE ... WHERE id AND user_id ... RETURNING.
  A missing row and a row owned by someone else produce the same error.
- Deletes report absence as False rather than raising.
- List queries are scoped to the owner and ordered newest first.

Store failures other than a missing owner propagate unchanged.
"""

from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any, TypeVar
from uuid import UUID

from sqlalchemy import ColumnElement, Select, delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from soloboss.db.models import Base, User
from soloboss.db.session import transaction
from soloboss.db.types import utcnow
from soloboss.errors import ApiError, user_not_found

ModelT = TypeVar("ModelT", bound=Base)

# Upper bound for caller-supplied list limits
MAX_LIST_LIMIT = 100


class Unset(Enum):
    """Marker type for a filter the caller did not supply."""

    UNSET = "UNSET"

    def __repr__(self) -> str:
        return "UNSET"


# Distinguishes "no filter" from an explicit None (IS NULL) filter
UNSET = Unset.UNSET


# =============================================================================
# Create
# =============================================================================


def insert_owned(db: Session, row: ModelT) -> ModelT:
    """Insert a user-owned row and return it with store defaults loaded.

    Raises:
        NotFoundError(E_USER_NOT_FOUND): If row.user_id has no user.
        IntegrityError: For any other constraint violation.
    """
    owner_id = row.user_id
    try:
        db.add(row)
        db.flush()
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if db.get(User, owner_id) is None:
            raise user_not_found(owner_id) from e
        raise

    db.refresh(row)
    return row


# =============================================================================
# Update
# =============================================================================


def update_returning(
    db: Session,
    model: type[ModelT],
    criteria: Iterable[ColumnElement[bool]],
    changes: Mapping[str, Any],
    not_found: ApiError,
) -> ModelT:
    """Apply a partial update to the single row matching all criteria.

    Only keys present in changes are written; a None value writes NULL.
    updated_at is always set to the current time, so an empty changes
    mapping still touches the row. The stamp comes from the application
    clock while insert defaults come from the database clock; the two are
    assumed to be synchronized.

    Raises:
        not_found: If no row matches.
    """
    values = dict(changes)
    values["updated_at"] = utcnow()

    stmt = (
        update(model)
        .where(*criteria)
        .values(**values)
        .returning(model)
        .execution_options(populate_existing=True)
    )

    with transaction(db):
        row = db.execute(stmt).scalars().one_or_none()
        if row is None:
            raise not_found

    return row


def update_owned(
    db: Session,
    model: type[ModelT],
    owner_id: UUID,
    entity_id: UUID,
    changes: Mapping[str, Any],
    not_found: ApiError,
) -> ModelT:
    """Partially update one row matched on both id and owner."""
    return update_returning(
        db,
        model,
        (model.id == entity_id, model.user_id == owner_id),
        changes,
        not_found,
    )


# =============================================================================
# Delete
# =============================================================================


def delete_owned(db: Session, model: type[Base], owner_id: UUID, entity_id: UUID) -> bool:
    """Delete one row matched on both id and owner.

    Returns:
        True if a row was removed, False if nothing matched.
    """
    stmt = delete(model).where(model.id == entity_id, model.user_id == owner_id)
    with transaction(db):
        result = db.execute(stmt)
    return result.rowcount > 0


# =============================================================================
# Read
# =============================================================================


def owned_select(model: type[ModelT], owner_id: UUID, *criteria: ColumnElement[bool]) -> Select:
    """Build a newest-first SELECT over the owner's rows, ANDed with criteria.

    Ties on created_at come back in no particular order.
    """
    return (
        select(model)
        .where(model.user_id == owner_id, *criteria)
        .order_by(model.created_at.desc())
    )
