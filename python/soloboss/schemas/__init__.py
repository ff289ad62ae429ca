"""Pydantic schemas for request/response models.

All schemas are re-exported here for convenient imports.
"""

from soloboss.schemas.activity import ActivityEntityTypeValue, ActivityLogOut, LogActivityRequest
from soloboss.schemas.chat import AIAgentOut, ChatMessageOut, SendMessageRequest
from soloboss.schemas.common import PartialUpdateRequest
from soloboss.schemas.dashboard import DashboardStatsOut
from soloboss.schemas.document import CreateDocumentRequest, DocumentOut, UpdateDocumentRequest
from soloboss.schemas.task import (
    CreateTaskRequest,
    TaskOut,
    TaskPriorityValue,
    TaskStatusValue,
    UpdateTaskRequest,
)
from soloboss.schemas.user import UpdateUserProfileRequest, UserOut

__all__ = [
    "PartialUpdateRequest",
    # Tasks
    "CreateTaskRequest",
    "UpdateTaskRequest",
    "TaskOut",
    "TaskStatusValue",
    "TaskPriorityValue",
    # Documents
    "CreateDocumentRequest",
    "UpdateDocumentRequest",
    "DocumentOut",
    # Chat
    "SendMessageRequest",
    "AIAgentOut",
    "ChatMessageOut",
    # Profile
    "UpdateUserProfileRequest",
    "UserOut",
    # Activity
    "LogActivityRequest",
    "ActivityLogOut",
    "ActivityEntityTypeValue",
    # Dashboard
    "DashboardStatsOut",
]
