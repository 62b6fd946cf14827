"""Pytest configuration and fixtures."""

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from src.database import Base, build_engine, get_db
from src.main import app


class AuthHeaders(dict):
    """Dict subclass that also stores the signed-up user's id and email."""

    def __init__(self, *args, user_id: str | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace(
        "/task_manager", "/task_manager_test"
    )
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

engine = build_engine(SQLALCHEMY_DATABASE_URL)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        # Create test database if it doesn't exist
        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    from src import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def signup(client, email: str, name: str = "Test User", password: str = "testpass123"):
    """Sign a user up and return auth headers for them."""
    response = client.post(
        "/api/users/signup",
        json={"email": email, "password": password, "name": name},
    )
    assert response.status_code == 201
    data = response.json()
    return AuthHeaders(
        {"Authorization": f"Bearer {data['token']}"},
        user_id=data["user"]["id"],
        email=data["user"]["email"],
    )


@pytest.fixture
def auth_headers(client):
    """Create a user and return auth headers with user info."""
    return signup(client, "test@example.com")


@pytest.fixture
def other_auth_headers(client):
    """A second, unrelated user."""
    return signup(client, "other@example.com", name="Other User")


@pytest.fixture
def task(client, auth_headers):
    """A task owned by the auth_headers user."""
    response = client.post(
        "/api/tasks",
        headers=auth_headers,
        json={"title": "Test Task", "description": "Test Description", "priority": "high"},
    )
    assert response.status_code == 201
    return response.json()
