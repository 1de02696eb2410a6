"""
Pytest configuration and fixtures for Mailmaster API tests.
"""
import os

# Keep the app's own engine off the filesystem; must run before mailmaster is imported
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from mailmaster.database import Base, get_db
from mailmaster.main import app
from mailmaster.models import Newsletter, Subscriber, User
from mailmaster.auth import get_password_hash, create_access_token

# Use in-memory SQLite for tests with shared connection
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Global session for sharing across requests
_test_session = None


def get_test_db():
    """Get the shared test database session."""
    yield _test_session


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test."""
    global _test_session

    Base.metadata.create_all(bind=engine)
    _test_session = TestingSessionLocal()
    app.dependency_overrides[get_db] = get_test_db

    yield _test_session

    app.dependency_overrides.clear()
    _test_session.close()
    _test_session = None
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    """Create a test client."""
    with TestClient(app) as c:
        yield c


def make_user(db, name, email, password="testpassword123"):
    user = User(name=name, email=email, hashed_password=get_password_hash(password))
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def headers_for(db, user):
    token = create_access_token(db, user)
    db.commit()
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(scope="function")
def test_user(db):
    """Create a test user."""
    return make_user(db, "Test User", "test@example.com")


@pytest.fixture(scope="function")
def other_user(db):
    """A second account that must never see the first one's data."""
    return make_user(db, "Other User", "other@example.com")


@pytest.fixture(scope="function")
def auth_headers(db, test_user):
    """Get auth headers for the test user."""
    return headers_for(db, test_user)


@pytest.fixture(scope="function")
def other_headers(db, other_user):
    return headers_for(db, other_user)


@pytest.fixture(scope="function")
def newsletter(db, test_user):
    newsletter = Newsletter(user_id=test_user.id, title="Tech Updates", content="Latest news in tech.")
    db.add(newsletter)
    db.commit()
    db.refresh(newsletter)
    return newsletter


@pytest.fixture(scope="function")
def subscribers(db, test_user):
    """Three subscribers owned by the test user."""
    rows = [
        Subscriber(user_id=test_user.id, email=f"reader{i}@example.com", name=f"Reader {i}")
        for i in range(1, 4)
    ]
    db.add_all(rows)
    db.commit()
    for row in rows:
        db.refresh(row)
    return rows
