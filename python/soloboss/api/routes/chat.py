"""AI agent and chat routes."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from soloboss.api.deps import get_db, get_response_strategy
from soloboss.auth.middleware import Caller, get_caller
from soloboss.responses import success_response
from soloboss.schemas.chat import SendMessageRequest
from soloboss.services import chat as chat_service
from soloboss.services.ownership import MAX_LIST_LIMIT
from soloboss.services.responders import ResponseStrategy

router = APIRouter()


@router.get("/agents")
def list_agents(
    caller: Annotated[Caller, Depends(get_caller)],
    db: Annotated[Session, Depends(get_db)],
) -> dict:
    """List active AI agents ordered by name."""
    result = chat_service.get_ai_agents(db)
    return success_response([agent.model_dump(mode="json") for agent in result])


@router.get("/agents/{agent_id}/messages")
def get_chat_history(
    agent_id: UUID,
    caller: Annotated[Caller, Depends(get_caller)],
    db: Annotated[Session, Depends(get_db)],
    limit: int = Query(
        default=chat_service.DEFAULT_HISTORY_LIMIT, ge=1, le=MAX_LIST_LIMIT, description="Maximum results"
    ),
) -> dict:
    """Get the caller's conversation with one agent, newest first."""
    result = chat_service.get_chat_history(db, caller.user_id, agent_id, limit=limit)
    return success_response([message.model_dump(mode="json") for message in result])


@router.post("/chat/messages")
def send_message(
    body: SendMessageRequest,
    caller: Annotated[Caller, Depends(get_caller)],
    db: Annotated[Session, Depends(get_db)],
    strategy: Annotated[ResponseStrategy, Depends(get_response_strategy)],
) -> dict:
    """Send a message to an agent and return the agent's reply.

    Errors:
        - 400 E_AGENT_INACTIVE: Agent is deactivated
        - 404 E_USER_NOT_FOUND: Caller has no user row
        - 404 E_AGENT_NOT_FOUND: Agent does not exist
    """
    result = chat_service.send_message(db, caller.user_id, body.agent_id, body.message, strategy)
    return success_response(result.model_dump(mode="json"))
