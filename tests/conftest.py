# /tests/conftest.py

import os

# Cheap hashes and a fixed policy for the whole test session. These must be
# set before `eduguru.core.config` is imported.
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ["INVALID_CLASS_POLICY"] = "confirm"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from eduguru.core.state import AppState
from eduguru.db.base import Base
from eduguru.db.database import build_engine, get_db
from eduguru.main import app
from eduguru.services.database_service import DatabaseService


@pytest.fixture
def engine():
    """A private in-memory SQLite database with foreign keys switched on."""
    engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    """A DatabaseService bound to a fresh session."""
    session = session_factory()
    try:
        yield DatabaseService(db_session=session)
    finally:
        session.close()


def _add_user(db: DatabaseService, user_id: str, username: str) -> str:
    db.add_user({"id": user_id, "username": username, "password": "x", "name": username, "role": "GURU"})
    return user_id


@pytest.fixture
def owner(db):
    return _add_user(db, "user_owner", "owner")


@pytest.fixture
def other_owner(db):
    return _add_user(db, "user_other", "other")


@pytest.fixture
def client(session_factory):
    """
    A TestClient wired to the in-memory database. The lifespan is not run,
    so the runtime state is set by hand.
    """
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.state.runtime = AppState(db_connected=True, ai_enabled=True)
    yield TestClient(app)
    app.dependency_overrides.clear()
    app.state.runtime = AppState()


def _register(client: TestClient, username: str, password: str = "rahasia123") -> dict:
    response = client.post("/api/auth/register", json={"username": username, "password": password, "name": username.title()})
    assert response.status_code == 200, response.text
    body = response.json()
    return {"Authorization": f"Bearer {body['token']}"}


@pytest.fixture
def register_user(client):
    """Registers an account through the API and returns its auth headers."""
    return lambda username, password="rahasia123": _register(client, username, password)


@pytest.fixture
def auth_headers(register_user):
    return register_user("bu_sari")


@pytest.fixture
def other_auth_headers(register_user):
    return register_user("pak_budi")
