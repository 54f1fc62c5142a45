# =============================================================================
# tests/test_security.py - Credential and Token Service Tests
# =============================================================================
# Unit tests for password hashing, token issuing/verification and bearer
# header parsing.
#
# Run with: pytest tests/test_security.py -v
# =============================================================================

from datetime import timedelta
from uuid import uuid4

import pytest
from jose import jwt

from app.auth.models import Identity
from app.auth.security import (
    extract_bearer,
    hash_password,
    issue_token,
    verify_password,
    verify_token,
)
from app.config import settings
from app.exceptions import ErrorKind, TokenExpiredError, TokenInvalidError
from core.models import UserRole


@pytest.fixture
def identity() -> Identity:
    return Identity(id=uuid4(), email="jane@example.com", role=UserRole.USER)


# =============================================================================
# Password Tests
# =============================================================================

class TestPasswords:
    """Tests for hash_password / verify_password."""

    def test_hash_then_verify(self):
        hashed = hash_password("secret123")

        assert hashed != "secret123"
        assert verify_password("secret123", hashed) is True

    def test_wrong_password_is_rejected(self):
        hashed = hash_password("secret123")

        assert verify_password("secret124", hashed) is False

    def test_hashes_are_salted(self):
        """Same password hashed twice gives two different strings."""
        first = hash_password("secret123")
        second = hash_password("secret123")

        assert first != second
        assert verify_password("secret123", first)
        assert verify_password("secret123", second)

    def test_uses_ten_rounds(self):
        hashed = hash_password("secret123")

        # bcrypt format: $2b$<cost>$<salt+hash>
        assert hashed.split("$")[2] == "10"

    def test_malformed_hash_is_a_mismatch(self):
        assert verify_password("secret123", "not-a-bcrypt-hash") is False


# =============================================================================
# Token Tests
# =============================================================================

class TestTokens:
    """Tests for issue_token / verify_token."""

    def test_round_trip_preserves_claims(self, identity):
        token = issue_token(identity)

        claims = verify_token(token)

        assert claims.sub == identity.id
        assert claims.email == identity.email
        assert claims.role is UserRole.USER
        assert claims.to_identity() == identity

    def test_payload_contains_iat_and_exp(self, identity):
        token = issue_token(identity, expires_delta=timedelta(minutes=5))

        payload = jwt.get_unverified_claims(token)

        assert payload["sub"] == str(identity.id)
        assert payload["exp"] - payload["iat"] == 300

    def test_default_expiry_comes_from_settings(self, identity):
        payload = jwt.get_unverified_claims(issue_token(identity))

        assert payload["exp"] - payload["iat"] == settings.JWT_EXPIRES_MINUTES * 60

    def test_expired_token(self, identity):
        token = issue_token(identity, expires_delta=timedelta(seconds=-10))

        with pytest.raises(TokenExpiredError) as exc_info:
            verify_token(token)

        assert exc_info.value.code == "TOKEN_EXPIRED"
        assert exc_info.value.kind is ErrorKind.UNAUTHORIZED

    def test_tampered_token(self, identity):
        token = issue_token(identity)
        header, payload, signature = token.split(".")
        tampered = ".".join([header, payload, signature[::-1]])

        with pytest.raises(TokenInvalidError) as exc_info:
            verify_token(tampered)

        assert exc_info.value.code == "TOKEN_INVALID"

    def test_token_signed_with_other_secret(self, identity):
        token = issue_token(identity, secret="another-secret-0123456789")

        with pytest.raises(TokenInvalidError):
            verify_token(token)

    def test_garbage_token(self):
        with pytest.raises(TokenInvalidError):
            verify_token("definitely.not.a-token")

    def test_missing_claims(self):
        """A correctly signed token without a role is still invalid."""
        token = jwt.encode(
            {"sub": str(uuid4()), "email": "jane@example.com"},
            settings.JWT_SECRET,
            algorithm=settings.JWT_ALGORITHM,
        )

        with pytest.raises(TokenInvalidError):
            verify_token(token)


# =============================================================================
# Bearer Header Tests
# =============================================================================

class TestExtractBearer:
    """Tests for extract_bearer."""

    def test_valid_header(self):
        assert extract_bearer("Bearer abc.def.ghi") == "abc.def.ghi"

    def test_scheme_is_case_insensitive(self):
        assert extract_bearer("bearer abc") == "abc"

    @pytest.mark.parametrize(
        "header",
        [None, "", "Bearer", "Bearer ", "Basic dXNlcjpwYXNz", "Bearer a b", "Token abc"],
    )
    def test_invalid_headers(self, header):
        assert extract_bearer(header) is None
