"""Pytest configuration and fixtures."""

import os

# Must be set before taskmanager reads its settings
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from taskmanager import models  # noqa: F401
from taskmanager.database import Base, get_db
from taskmanager.main import app

TEST_PASSWORD = "Testpass1!"

SQLALCHEMY_DATABASE_URL = os.environ["DATABASE_URL"]
connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
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
def override_db(db):
    """Route the app's database dependency to the test session."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    yield
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def client(override_db):
    """Create a test client with database override."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(scope="function")
def other_client(override_db):
    """A second, independent client (its own cookie jar)."""
    with TestClient(app) as test_client:
        yield test_client


def _signup(client, username="Test User", email="test@example.com", password=TEST_PASSWORD):
    """Sign up through the API and return the public user fields."""
    response = client.post(
        "/user/signup",
        json={"username": username, "email": email, "password": password},
    )
    assert response.status_code == 201, response.json()
    return response.json()["user"]


@pytest.fixture
def signup():
    """Helper that signs up through a given client."""
    return _signup


@pytest.fixture
def auth_user(client):
    """Sign up a user on ``client``; the session cookie stays in its jar."""
    return _signup(client)


@pytest.fixture
def other_user(other_client):
    """Sign up a second user on ``other_client``."""
    return _signup(other_client, username="Other User", email="other@example.com")
