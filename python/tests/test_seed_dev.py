"""Tests for the development seed script."""

from uuid import UUID

import pytest
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from scripts.seed_dev import DEFAULT_SEED_USER_ID, main
from soloboss.db.models import Document, Task, User


@pytest.fixture
def seed_env(engine, monkeypatch):
    monkeypatch.setenv("SOLOBOSS_ENV", "local")
    monkeypatch.setenv("DATABASE_URL", engine.url.render_as_string(hide_password=False))
    monkeypatch.delenv("SEED_USER_ID", raising=False)


def _count(session: Session, model) -> int:
    return session.execute(select(func.count()).select_from(model)).scalar_one()


def test_seeds_user_tasks_and_document(seed_env, db_session: Session, capsys):
    main()

    user = db_session.get(User, UUID(DEFAULT_SEED_USER_ID))
    assert user is not None
    assert _count(db_session, Task) == 3
    assert _count(db_session, Document) == 1
    assert "Created: user" in capsys.readouterr().out


def test_rerun_is_idempotent(seed_env, db_session: Session, capsys):
    main()
    capsys.readouterr()

    main()

    assert _count(db_session, Task) == 3
    assert "Everything already exists" in capsys.readouterr().out


@pytest.mark.parametrize("env", ["staging", "prod"])
def test_refuses_deployed_envs(env, monkeypatch):
    monkeypatch.setenv("SOLOBOSS_ENV", env)

    with pytest.raises(SystemExit) as exc_info:
        main()

    assert exc_info.value.code == 1
