"""Shared test fixtures for the CarHub API."""

import os

# Settings are read on import, so the environment is fixed first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTH_MODE"] = "local"
os.environ["JWT_SECRET_KEY"] = "test-secret"
os.environ["GOOGLE_CLIENT_ID"] = "carhub-test-client"
os.environ["ENABLE_TEST_TOKENS"] = "true"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from carhub import models  # noqa: F401
from carhub.core.config import settings
from carhub.core.security import build_token_verifier, create_access_token, get_token_verifier
from carhub.db.session import Base, get_db
from carhub.main import app


@pytest.fixture
def engine():
    """Fresh in-memory database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    """TestClient wired to the in-memory database."""

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    verifier = build_token_verifier(settings)
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_token_verifier] = lambda: verifier
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_token():
    def _make(subject="alice", email="alice@example.com"):
        return create_access_token(subject, email=email)
    return _make


@pytest.fixture
def alice(make_token):
    return {"Authorization": f"Bearer {make_token('alice', 'alice@example.com')}"}


@pytest.fixture
def bob(make_token):
    return {"Authorization": f"Bearer {make_token('bob', 'bob@example.com')}"}
