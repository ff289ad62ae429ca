#!/usr/bin/env python
"""Seed development database with a demo user and sample data.

Users are normally provisioned by Supabase; this creates a local user row
whose ID matches your Supabase local user so the API has someone to serve.
The agent catalog is seeded by migration 0002, not here.

Constraints:
- Refuses to run in staging or prod (SOLOBOSS_ENV check)
- Idempotent: rows that already exist are left alone
- Never runs automatically (manual invocation only)

Usage:
    cd python && DATABASE_URL=... SEED_USER_ID=<supabase user uuid> \\
        python ../scripts/seed_dev.py
"""

import os
import sys
from datetime import timedelta
from uuid import UUID

# Fixed IDs so reruns find the same rows
DEFAULT_SEED_USER_ID = "00000000-0000-4000-8000-000000000001"
SAMPLE_TASK_IDS = (
    "00000000-0000-4000-8000-000000000101",
    "00000000-0000-4000-8000-000000000102",
    "00000000-0000-4000-8000-000000000103",
)
SAMPLE_DOCUMENT_ID = "00000000-0000-4000-8000-000000000201"


def main():
    # 1. Environment check (hard fail in staging/prod)
    soloboss_env = os.getenv("SOLOBOSS_ENV", "local")
    if soloboss_env not in ("local", "test"):
        print(f"ERROR: seed_dev.py refuses to run in SOLOBOSS_ENV={soloboss_env}")
        sys.exit(1)

    # 2. Check DATABASE_URL
    database_url = os.getenv("DATABASE_URL")
    if not database_url:
        print("ERROR: DATABASE_URL environment variable must be set")
        sys.exit(1)

    user_id = UUID(os.getenv("SEED_USER_ID", DEFAULT_SEED_USER_ID))
    email = os.getenv("SEED_USER_EMAIL", "boss@soloboss.local")

    from sqlalchemy.orm import Session

    from soloboss.db.engine import create_db_engine
    from soloboss.db.models import Document, Task, TaskStatus, User
    from soloboss.db.types import utcnow

    engine = create_db_engine(database_url)
    created: list[str] = []

    with Session(engine) as db:
        if db.get(User, user_id) is None:
            db.add(User(id=user_id, email=email, first_name="Solo", last_name="Boss"))
            created.append(f"user {user_id}")

        now = utcnow()
        samples = [
            ("Send invoices", TaskStatus.pending, "high", now + timedelta(days=2)),
            ("Draft newsletter", TaskStatus.in_progress, "medium", None),
            ("Renew domain", TaskStatus.completed, "low", None),
        ]
        for task_id, (title, status, priority, due_date) in zip(SAMPLE_TASK_IDS, samples):
            if db.get(Task, UUID(task_id)) is None:
                db.add(
                    Task(
                        id=UUID(task_id),
                        user_id=user_id,
                        title=title,
                        status=status.value,
                        priority=priority,
                        due_date=due_date,
                    )
                )
                created.append(f"task {task_id}")

        if db.get(Document, UUID(SAMPLE_DOCUMENT_ID)) is None:
            db.add(
                Document(
                    id=UUID(SAMPLE_DOCUMENT_ID),
                    user_id=user_id,
                    name="Client contract template",
                    file_url="https://example.com/files/contract-template.pdf",
                    file_type="application/pdf",
                    file_size=48213,
                    folder_path="contracts",
                )
            )
            created.append(f"document {SAMPLE_DOCUMENT_ID}")

        db.commit()

    # 3. Report
    db_display = database_url.split("@")[1] if "@" in database_url else database_url
    print(f"Database: {db_display}")
    print(f"SOLOBOSS_ENV: {soloboss_env}")
    print()
    if created:
        for item in created:
            print(f"✓ Created: {item}")
    else:
        print("• Everything already exists")


if __name__ == "__main__":
    main()
