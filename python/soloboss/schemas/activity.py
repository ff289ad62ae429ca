"""Activity log Pydantic schemas."""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

# Must match ck_activity_log_entity_type
ActivityEntityTypeValue = Literal["task", "document", "chat", "profile"]


class LogActivityRequest(BaseModel):
    """Request body for recording an activity entry."""

    action: str = Field(..., min_length=1, description="Short action key, e.g. task_created")
    description: str = Field(..., min_length=1, description="Human-readable summary")
    entity_type: ActivityEntityTypeValue | None = Field(
        default=None, description="Kind of entity the action touched"
    )
    entity_id: str | None = Field(default=None, description="ID of the entity the action touched")


class ActivityLogOut(BaseModel):
    """Response schema for an activity log entry."""

    id: UUID
    user_id: UUID
    action: str
    description: str
    entity_type: ActivityEntityTypeValue | None
    entity_id: str | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
