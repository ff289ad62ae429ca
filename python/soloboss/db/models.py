"""SQLAlchemy ORM models for SoloBoss.

Defines all database tables using SQLAlchemy 2.x declarative patterns.
Enumerated columns are stored as text guarded by CHECK constraints; the
matching Python enums live alongside the models.

Primary keys are generated by the service layer (uuid4) rather than by the
database. created_at/updated_at are assigned by the database at insert time.
"""

from datetime import datetime
from enum import Enum as PyEnum
from uuid import UUID

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    ForeignKey,
    Index,
    Integer,
    Text,
    Uuid,
    func,
    true,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from soloboss.db.types import UTCDateTime


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


# =============================================================================
# Enums
# =============================================================================


class TaskStatus(str, PyEnum):
    """Task lifecycle states.

    New tasks always start as pending; only updates move them along.
    """

    pending = "pending"
    in_progress = "in_progress"
    completed = "completed"


class TaskPriority(str, PyEnum):
    """Task priority levels."""

    low = "low"
    medium = "medium"
    high = "high"


class ActivityEntityType(str, PyEnum):
    """Kinds of entity an activity log entry may point at."""

    task = "task"
    document = "document"
    chat = "chat"
    profile = "profile"


def _created_at() -> Mapped[datetime]:
    return mapped_column(UTCDateTime(), server_default=func.now(), nullable=False)


def _owner_fk() -> Mapped[UUID]:
    return mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)


# =============================================================================
# Models
# =============================================================================


class User(Base):
    """User account model.

    Rows are provisioned by the identity provider; the ID matches the
    Supabase auth user ID (sub claim).
    """

    __tablename__ = "users"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    email: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    first_name: Mapped[str] = mapped_column(Text, nullable=False)
    last_name: Mapped[str] = mapped_column(Text, nullable=False)
    profile_picture_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = _created_at()
    updated_at: Mapped[datetime] = _created_at()

    # Relationships
    tasks: Mapped[list["Task"]] = relationship(
        "Task", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )
    documents: Mapped[list["Document"]] = relationship(
        "Document", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )
    chat_messages: Mapped[list["ChatMessage"]] = relationship(
        "ChatMessage", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )
    activity_logs: Mapped[list["ActivityLog"]] = relationship(
        "ActivityLog", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )


class Task(Base):
    """Task model - one SlayList entry owned by a user."""

    __tablename__ = "tasks"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    user_id: Mapped[UUID] = _owner_fk()
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        Text, nullable=False, server_default=TaskStatus.pending.value
    )
    priority: Mapped[str] = mapped_column(
        Text, nullable=False, server_default=TaskPriority.medium.value
    )
    due_date: Mapped[datetime | None] = mapped_column(UTCDateTime(), nullable=True)
    created_at: Mapped[datetime] = _created_at()
    updated_at: Mapped[datetime] = _created_at()

    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'in_progress', 'completed')",
            name="ck_tasks_status",
        ),
        CheckConstraint(
            "priority IN ('low', 'medium', 'high')",
            name="ck_tasks_priority",
        ),
        Index("ix_tasks_user_created", "user_id", "created_at"),
    )

    user: Mapped["User"] = relationship("User", back_populates="tasks")


class Document(Base):
    """Document model - metadata for a file stored outside SoloBoss."""

    __tablename__ = "documents"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    user_id: Mapped[UUID] = _owner_fk()
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    file_url: Mapped[str] = mapped_column(Text, nullable=False)
    file_type: Mapped[str] = mapped_column(Text, nullable=False)
    file_size: Mapped[int] = mapped_column(Integer, nullable=False)
    folder_path: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = _created_at()
    updated_at: Mapped[datetime] = _created_at()

    __table_args__ = (
        CheckConstraint("file_size > 0", name="ck_documents_file_size_positive"),
        Index("ix_documents_user_created", "user_id", "created_at"),
    )

    user: Mapped["User"] = relationship("User", back_populates="documents")


class AIAgent(Base):
    """AIAgent model - shared catalog of chat agents (not user-owned)."""

    __tablename__ = "ai_agents"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    avatar_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    specialization: Mapped[str] = mapped_column(Text, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=true())
    created_at: Mapped[datetime] = _created_at()

    chat_messages: Mapped[list["ChatMessage"]] = relationship(
        "ChatMessage", back_populates="agent", cascade="all, delete-orphan", passive_deletes=True
    )


class ChatMessage(Base):
    """ChatMessage model - one side of a user/agent exchange.

    User-authored rows have is_user_message=true and no response; agent rows
    repeat the user's message and carry the generated response.
    """

    __tablename__ = "chat_messages"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    user_id: Mapped[UUID] = _owner_fk()
    agent_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("ai_agents.id", ondelete="CASCADE"), nullable=False
    )
    message: Mapped[str] = mapped_column(Text, nullable=False)
    response: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_user_message: Mapped[bool] = mapped_column(Boolean, nullable=False)
    created_at: Mapped[datetime] = _created_at()

    __table_args__ = (
        CheckConstraint(
            "(is_user_message AND response IS NULL) OR (NOT is_user_message)",
            name="ck_chat_messages_user_message_has_no_response",
        ),
        Index("ix_chat_messages_user_agent_created", "user_id", "agent_id", "created_at"),
    )

    user: Mapped["User"] = relationship("User", back_populates="chat_messages")
    agent: Mapped["AIAgent"] = relationship("AIAgent", back_populates="chat_messages")


class ActivityLog(Base):
    """ActivityLog model - an append-only record of something a user did."""

    __tablename__ = "activity_log"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    user_id: Mapped[UUID] = _owner_fk()
    action: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    entity_type: Mapped[str | None] = mapped_column(Text, nullable=True)
    entity_id: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = _created_at()

    __table_args__ = (
        CheckConstraint(
            "entity_type IS NULL OR entity_type IN ('task', 'document', 'chat', 'profile')",
            name="ck_activity_log_entity_type",
        ),
        Index("ix_activity_log_user_created", "user_id", "created_at"),
    )

    user: Mapped["User"] = relationship("User", back_populates="activity_logs")
