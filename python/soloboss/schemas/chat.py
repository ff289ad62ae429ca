"""AI agent and chat message Pydantic schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class SendMessageRequest(BaseModel):
    """Request body for sending a message to an AI agent."""

    agent_id: UUID = Field(..., description="ID of the agent to talk to")
    message: str = Field(..., min_length=1, description="Message text")


class AIAgentOut(BaseModel):
    """Response schema for a catalog agent."""

    id: UUID
    name: str
    description: str
    avatar_url: str | None
    specialization: str
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ChatMessageOut(BaseModel):
    """Response schema for a chat message.

    User-authored messages have is_user_message=True and response=None.
    Agent rows echo the user's message and carry the response.
    """

    id: UUID
    user_id: UUID
    agent_id: UUID
    message: str
    response: str | None
    is_user_message: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
