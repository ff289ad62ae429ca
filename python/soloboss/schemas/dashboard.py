"""Dashboard Pydantic schemas."""

from pydantic import BaseModel, Field


class DashboardStatsOut(BaseModel):
    """Aggregated counts for the caller's dashboard.

    in_progress tasks are counted in total_tasks only, so
    completed_tasks + pending_tasks may be less than total_tasks.
    """

    total_tasks: int = Field(..., ge=0)
    completed_tasks: int = Field(..., ge=0)
    pending_tasks: int = Field(..., ge=0)
    total_documents: int = Field(..., ge=0)
    recent_activity_count: int = Field(..., ge=0)
