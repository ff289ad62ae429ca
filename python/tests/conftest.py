"""Pytest configuration and fixtures for SoloBoss tests.

Test isolation strategy:
- Every test gets its own database: TEST_DATABASE_URL if set, otherwise a
  SQLite file in the test's tmp_path (foreign keys enabled)
- The schema is built from the ORM metadata and dropped afterwards
- Request sessions come from the same engine via a get_db override
- Auth runs for real with StaticKeyVerifier and test JWTs
"""

import os
import sys
from collections.abc import Generator
from pathlib import Path
from uuid import UUID

# Settings are validated on first use; give tests a complete environment
os.environ.setdefault("SOLOBOSS_ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("SUPABASE_JWKS_URL", "http://localhost:54321/auth/v1/.well-known/jwks.json")
os.environ.setdefault("SUPABASE_ISSUER", "test-issuer")
os.environ.setdefault("SUPABASE_AUDIENCES", "test-audience")

# Add repo root to sys.path for importing top-level packages (e.g., apps)
_repo_root = Path(__file__).parent.parent.parent
if str(_repo_root) not in sys.path:
    sys.path.insert(0, str(_repo_root))

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import Engine
from sqlalchemy.orm import Session, sessionmaker

from soloboss.app import add_request_id_middleware, create_app
from soloboss.config import clear_settings_cache
from soloboss.db.engine import create_db_engine
from soloboss.db.models import Base
from soloboss.db.session import create_session_factory, get_db
from tests.factories import create_test_user
from tests.support.static_verifier import StaticKeyVerifier


def get_test_database_url(tmp_path: Path) -> str:
    """TEST_DATABASE_URL, or a throwaway SQLite file for this test."""
    return os.environ.get("TEST_DATABASE_URL") or f"sqlite+pysqlite:///{tmp_path / 'test.db'}"


@pytest.fixture
def engine(tmp_path: Path) -> Generator[Engine, None, None]:
    """Create a database engine with a fresh schema for one test."""
    engine = create_db_engine(get_test_database_url(tmp_path))
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine: Engine) -> sessionmaker[Session]:
    return create_session_factory(engine)


@pytest.fixture
def db_session(session_factory: sessionmaker[Session]) -> Generator[Session, None, None]:
    """Provide a database session for arranging and inspecting data.

    Rows written through the API are committed by other sessions; call
    db_session.expire_all() before re-reading objects this session loaded.
    """
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def app(session_factory: sessionmaker[Session]) -> FastAPI:
    """Provide a FastAPI app with auth middleware using the test verifier."""
    app = create_app(token_verifier=StaticKeyVerifier())

    def override_get_db() -> Generator[Session, None, None]:
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    add_request_id_middleware(app)
    return app


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """Provide a test client. Use auth_headers() for authenticated requests."""
    with TestClient(app) as client:
        yield client


@pytest.fixture
def user_id(db_session: Session) -> UUID:
    """A persisted user acting as the caller."""
    return create_test_user(db_session, first_name="Ada", last_name="Owner")


@pytest.fixture
def other_user_id(db_session: Session) -> UUID:
    """A second persisted user, for cross-owner checks."""
    return create_test_user(db_session, first_name="Bob", last_name="Other")


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Reset the settings cache before each test."""
    clear_settings_cache()
    yield
    clear_settings_cache()
