"""AI agent chat service layer.

send_message validates everything up front, then persists the exchange as two
rows committed separately:

1. The user's row (is_user_message=True, response=None).
2. The agent's row (is_user_message=False), carrying a reply picked from the
   response strategy's candidates for the agent's specialization.

If the process dies between the two commits the user's row stays without a
reply. Failed validation persists nothing.
"""

import random
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.orm import Session

from soloboss.db.models import AIAgent, ChatMessage, User
from soloboss.errors import ApiErrorCode, InvalidRequestError, NotFoundError, user_not_found
from soloboss.logging import get_logger
from soloboss.schemas.chat import AIAgentOut, ChatMessageOut
from soloboss.services.ownership import owned_select
from soloboss.services.responders import ResponseStrategy

logger = get_logger(__name__)

DEFAULT_HISTORY_LIMIT = 50


def get_ai_agents(db: Session) -> list[AIAgentOut]:
    """List active agents ordered by name. The catalog is shared by all users."""
    agents = (
        db.execute(select(AIAgent).where(AIAgent.is_active.is_(True)).order_by(AIAgent.name))
        .scalars()
        .all()
    )
    return [AIAgentOut.model_validate(agent) for agent in agents]


def get_active_agent_or_error(db: Session, agent_id: UUID) -> AIAgent:
    """Load an agent that can accept messages.

    Raises:
        NotFoundError(E_AGENT_NOT_FOUND): If the agent does not exist.
        InvalidRequestError(E_AGENT_INACTIVE): If the agent is deactivated.
    """
    agent = db.get(AIAgent, agent_id)
    if agent is None:
        raise NotFoundError(ApiErrorCode.E_AGENT_NOT_FOUND, f"AI agent with id {agent_id} not found")
    if not agent.is_active:
        raise InvalidRequestError(
            ApiErrorCode.E_AGENT_INACTIVE, f"AI agent with id {agent_id} is not active"
        )
    return agent


def send_message(
    db: Session,
    caller_id: UUID,
    agent_id: UUID,
    message: str,
    strategy: ResponseStrategy,
    rng: random.Random | None = None,
) -> ChatMessageOut:
    """Send a message to an agent and return the agent's reply row.

    Raises:
        NotFoundError(E_USER_NOT_FOUND): If the caller has no user row.
        NotFoundError(E_AGENT_NOT_FOUND): If the agent does not exist.
        InvalidRequestError(E_AGENT_INACTIVE): If the agent is deactivated.
    """
    if db.get(User, caller_id) is None:
        raise user_not_found(caller_id)
    agent = get_active_agent_or_error(db, agent_id)

    user_row = ChatMessage(
        id=uuid4(),
        user_id=caller_id,
        agent_id=agent_id,
        message=message,
        response=None,
        is_user_message=True,
    )
    db.add(user_row)
    db.commit()

    reply = (rng or random).choice(strategy.candidates(agent.specialization))

    agent_row = ChatMessage(
        id=uuid4(),
        user_id=caller_id,
        agent_id=agent_id,
        message=message,
        response=reply,
        is_user_message=False,
    )
    db.add(agent_row)
    db.commit()
    db.refresh(agent_row)

    logger.info(
        "chat_message_sent",
        agent_id=str(agent_id),
        user_message_id=str(user_row.id),
        agent_message_id=str(agent_row.id),
    )
    return ChatMessageOut.model_validate(agent_row)


def get_chat_history(
    db: Session, caller_id: UUID, agent_id: UUID, limit: int = DEFAULT_HISTORY_LIMIT
) -> list[ChatMessageOut]:
    """Return up to limit messages between the caller and one agent, newest first."""
    stmt = owned_select(ChatMessage, caller_id, ChatMessage.agent_id == agent_id).limit(limit)
    messages = db.execute(stmt).scalars().all()
    return [ChatMessageOut.model_validate(message) for message in messages]
