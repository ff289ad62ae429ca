"""Dashboard aggregation service.

Each figure is its own COUNT query with no cross-count invariant:
in_progress tasks are neither completed nor pending.
"""

from datetime import datetime, timedelta
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

from soloboss.config import get_settings
from soloboss.db.models import ActivityLog, Document, Task, TaskStatus
from soloboss.db.types import utcnow
from soloboss.schemas.dashboard import DashboardStatsOut


def _count(db: Session, stmt: Select) -> int:
    return db.execute(stmt).scalar_one()


def get_dashboard_stats(
    db: Session,
    caller_id: UUID,
    now: datetime | None = None,
    window_days: int | None = None,
) -> DashboardStatsOut:
    """Compute the caller's dashboard counts.

    Args:
        now: Reference time for the recent activity window. Defaults to the
            current UTC time.
        window_days: Recent activity lookback. Defaults to
            RECENT_ACTIVITY_WINDOW_DAYS.
    """
    if now is None:
        now = utcnow()
    if window_days is None:
        window_days = get_settings().recent_activity_window_days
    since = now - timedelta(days=window_days)

    tasks = select(func.count()).select_from(Task).where(Task.user_id == caller_id)

    return DashboardStatsOut(
        total_tasks=_count(db, tasks),
        completed_tasks=_count(db, tasks.where(Task.status == TaskStatus.completed.value)),
        pending_tasks=_count(db, tasks.where(Task.status == TaskStatus.pending.value)),
        total_documents=_count(
            db, select(func.count()).select_from(Document).where(Document.user_id == caller_id)
        ),
        recent_activity_count=_count(
            db,
            select(func.count())
            .select_from(ActivityLog)
            .where(ActivityLog.user_id == caller_id, ActivityLog.created_at >= since),
        ),
    )
