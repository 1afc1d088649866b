"""Pytest configuration and fixtures."""

import os

os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.models.task import Task  # noqa: F401
from app.models.user import User  # noqa: F401
from app.services.auth import AuthService
from app.services.jwt import get_jwt_service

TEST_PASSWORD = "Passw0rd!"


@pytest.fixture(name="db_session")
def db_session_fixture():
    """Create an in-memory SQLite database for tests."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    testing_session_local = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = testing_session_local()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(name="client")
def client_fixture(db_session: Session):
    """Create a test client with overridden DB dependency and disabled rate limiting."""
    from app.rate_limit import limiter
    from main import app

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    limiter.enabled = False
    with TestClient(app) as c:
        yield c
    limiter.enabled = True
    app.dependency_overrides.clear()


def _make_user(db_session: Session, email: str, name: str) -> dict:
    result = AuthService().register(db_session, email, TEST_PASSWORD, name)
    token = get_jwt_service().create_user_token(user_id=result.user_id, email=result.email, name=result.name)
    return {
        "user_id": result.user_id,
        "email": result.email,
        "name": result.name,
        "password": TEST_PASSWORD,
        "token": token,
        "headers": {"Authorization": f"Bearer {token}"},
    }


@pytest.fixture(name="test_user")
def test_user_fixture(db_session: Session):
    """Create a test user and return its data, token and auth headers."""
    return _make_user(db_session, "test@example.com", "Test User")


@pytest.fixture(name="other_user")
def other_user_fixture(db_session: Session):
    """A second user, for ownership checks."""
    return _make_user(db_session, "other@example.com", "Other User")
