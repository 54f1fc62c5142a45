# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up test environment variables before any app imports
# - A fresh in-memory SQLite Database per test
# - A TestClient bound to an app built around that Database
# - A factory creating users through the real service
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-secret-key-0123456789abcdef")
os.environ.setdefault("RATE_LIMIT_MAX_REQUESTS", "0")
os.environ.setdefault("DB_CONNECT_RETRY_DELAY", "0")

from collections.abc import Callable, Iterator
from typing import Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app.config import Settings
from app.main import create_application
from core.models import UserCreate, UserRole
from core.services import UserService
from lib.database import Database
from lib.tables import User
from tests.helpers import TEST_DATABASE_URL, TEST_PASSWORD, build_settings


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest.fixture
def database() -> Iterator[Database]:
    """Fresh in-memory database with all tables created."""
    db = Database(TEST_DATABASE_URL)
    db.create_all()
    yield db
    db.drop_all()
    db.dispose()


@pytest.fixture
def db_session(database: Database) -> Iterator[Session]:
    session = database.session_factory()
    yield session
    session.close()


# =============================================================================
# Application Fixtures
# =============================================================================

@pytest.fixture
def test_settings() -> Settings:
    return build_settings()


@pytest.fixture
def app(test_settings: Settings, database: Database):
    return create_application(test_settings, database)


@pytest.fixture
def client(app) -> Iterator[TestClient]:
    """TestClient with the lifespan running (connect, create tables)."""
    with TestClient(app) as test_client:
        yield test_client


# =============================================================================
# User Fixtures
# =============================================================================

@pytest.fixture
def make_user(db_session: Session) -> Callable[..., User]:
    """
    Factory creating users directly through the service.

    Usage:
        carol = make_user("carol")
        root = make_user("root", role=UserRole.ADMIN)
    """

    def factory(name: str, role: UserRole = UserRole.USER, password: Optional[str] = None) -> User:
        payload = UserCreate(
            email=f"{name}@example.com",
            user_name=name,
            first_name=name.capitalize(),
            last_name="Tester",
            password=password or TEST_PASSWORD,
        )
        return UserService(db_session).create(payload, role=role)

    return factory


@pytest.fixture
def alice(make_user) -> User:
    return make_user("alice")


@pytest.fixture
def bob(make_user) -> User:
    return make_user("bobby")


@pytest.fixture
def admin(make_user) -> User:
    return make_user("admin", role=UserRole.ADMIN)
