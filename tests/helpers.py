# =============================================================================
# tests/helpers.py - Shared Test Helpers
# =============================================================================

from app.auth.models import Identity
from app.auth.security import issue_token
from app.config import Settings
from lib.tables import User

TEST_DATABASE_URL = "sqlite+pysqlite:///:memory:"
TEST_PASSWORD = "secret123"


def build_settings(**overrides) -> Settings:
    """Settings for an isolated test app; the rate limiter is off by default."""
    values = {
        "ENVIRONMENT": "test",
        "DATABASE_URL": TEST_DATABASE_URL,
        "RATE_LIMIT_MAX_REQUESTS": 0,
        "DB_CONNECT_MAX_RETRIES": 1,
        "DB_CONNECT_RETRY_DELAY": 0,
    }
    values.update(overrides)
    return Settings(**values)


def identity_of(user: User) -> Identity:
    return Identity(id=user.id, email=user.email, role=user.role)


def auth_headers(user: User) -> dict[str, str]:
    """Authorization header carrying a fresh token for `user`."""
    return {"Authorization": f"Bearer {issue_token(identity_of(user))}"}
