"""Task (SlayList) Pydantic schemas."""

from datetime import datetime
from typing import ClassVar, Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from soloboss.schemas.common import PartialUpdateRequest

# Must match the CHECK constraints on tasks
TaskStatusValue = Literal["pending", "in_progress", "completed"]
TaskPriorityValue = Literal["low", "medium", "high"]


# =============================================================================
# Request Schemas
# =============================================================================


class CreateTaskRequest(BaseModel):
    """Request body for creating a task.

    Status is not accepted here: every task starts as pending.
    """

    title: str = Field(..., min_length=1, description="Task title")
    description: str | None = Field(default=None, description="Optional details")
    priority: TaskPriorityValue = Field(default="medium", description="Task priority")
    due_date: datetime | None = Field(default=None, description="Optional due date")


class UpdateTaskRequest(PartialUpdateRequest):
    """Request body for a partial task update."""

    non_nullable_fields: ClassVar[frozenset[str]] = frozenset({"title", "status", "priority"})

    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    status: TaskStatusValue | None = None
    priority: TaskPriorityValue | None = None
    due_date: datetime | None = None


# =============================================================================
# Response Schemas
# =============================================================================


class TaskOut(BaseModel):
    """Response schema for a task."""

    id: UUID
    user_id: UUID
    title: str
    description: str | None
    status: TaskStatusValue
    priority: TaskPriorityValue
    due_date: datetime | None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
