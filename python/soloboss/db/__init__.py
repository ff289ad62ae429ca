"""Database module for SoloBoss.

Provides engine creation, session management, transaction helpers, and ORM models.
"""

from soloboss.db.engine import create_db_engine, get_engine
from soloboss.db.models import (
    ActivityEntityType,
    ActivityLog,
    AIAgent,
    Base,
    ChatMessage,
    Document,
    Task,
    TaskPriority,
    TaskStatus,
    User,
)
from soloboss.db.session import get_db, transaction

__all__ = [
    # Engine and session
    "create_db_engine",
    "get_engine",
    "get_db",
    "transaction",
    # Base
    "Base",
    # Enums
    "TaskStatus",
    "TaskPriority",
    "ActivityEntityType",
    # Models
    "User",
    "Task",
    "Document",
    "AIAgent",
    "ChatMessage",
    "ActivityLog",
]
