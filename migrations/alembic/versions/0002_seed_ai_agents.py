"""Seed the default AI agent catalog

Revision ID: 0002
Revises: 0001
Create Date: 2026-10-17

One agent per specialization the canned response strategy knows about.
Agent IDs are derived from the specialization so the seed is stable
across environments.
"""

import uuid
from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0002"
down_revision: str | None = "0001"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

AGENT_NAMESPACE = uuid.UUID("6f1c2a3e-5b0d-4c8e-9a47-2d3b5e8f0a11")

# (specialization, name, description)
AGENTS = [
    ("general", "Boss Buddy", "Your all-round sidekick for running a one-person business."),
    ("productivity", "Flow Coach", "Helps you plan your day, batch work and protect focus time."),
    ("document", "File Fairy", "Keeps your Briefcase organized and easy to search."),
    ("marketing", "Marketing Maven", "Ideas for finding clients and telling your story."),
    ("finance", "Finance Guru", "Cash flow, pricing and tax-season sanity checks."),
    ("strategy", "Strategy Sage", "Big-picture planning and deciding what to say no to."),
    ("legal", "Legal Eagle", "General pointers on contracts and paperwork. Not legal advice."),
    ("operations", "Ops Wizard", "Systems, templates and automation for repeatable work."),
    ("hr", "People Pro", "Hiring contractors and working well with others."),
    ("creative", "Creative Muse", "Unstick your ideas and ship creative work."),
    ("wellness", "Wellness Warrior", "Sustainable pace, breaks and avoiding burnout."),
]


def agent_id(specialization: str) -> uuid.UUID:
    return uuid.uuid5(AGENT_NAMESPACE, specialization)


ai_agents = sa.table(
    "ai_agents",
    sa.column("id", sa.Uuid()),
    sa.column("name", sa.Text()),
    sa.column("description", sa.Text()),
    sa.column("avatar_url", sa.Text()),
    sa.column("specialization", sa.Text()),
    sa.column("is_active", sa.Boolean()),
)


def upgrade() -> None:
    op.bulk_insert(
        ai_agents,
        [
            {
                "id": agent_id(specialization),
                "name": name,
                "description": description,
                "avatar_url": None,
                "specialization": specialization,
                "is_active": True,
            }
            for specialization, name, description in AGENTS
        ],
    )


def downgrade() -> None:
    op.execute(
        ai_agents.delete().where(
            ai_agents.c.id.in_([agent_id(specialization) for specialization, _, _ in AGENTS])
        )
    )
