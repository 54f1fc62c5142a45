# =============================================================================
# app/auth/security.py - Credential and Token Service
# =============================================================================
# Password hashing (bcrypt via passlib) and session tokens (HS256 JWT via
# python-jose).
#
# Token claims: {sub: user id, email, role, iat, exp}
# There is no revocation list: expiry is the only way a token stops working.
#
# Usage:
#   hashed = hash_password("secret1")
#   verify_password("secret1", hashed)          # True
#   token = issue_token(identity)
#   claims = verify_token(token)                # TokenClaims
# =============================================================================

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext
from pydantic import ValidationError

from app.auth.models import Identity, TokenClaims
from app.config import settings
from app.exceptions import TokenExpiredError, TokenInvalidError

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = 10

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)


# =============================================================================
# Passwords
# =============================================================================

def hash_password(plain: str) -> str:
    """One-way salted hash; hashing the same password twice gives different strings."""
    return pwd_context.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    """
    Check a password against a stored hash.

    The comparison is done by bcrypt itself (constant time). A malformed
    or unknown hash is a mismatch, not an error.
    """
    try:
        return pwd_context.verify(plain, hashed)
    except (ValueError, TypeError) as e:
        logger.warning(f"Password verification against an unusable hash: {e}")
        return False


def dummy_verify() -> None:
    """Spend the time of a real check, so unknown emails are not told apart by timing."""
    pwd_context.dummy_verify()


# =============================================================================
# Tokens
# =============================================================================

def issue_token(
    identity: Identity,
    expires_delta: Optional[timedelta] = None,
    *,
    secret: Optional[str] = None,
    algorithm: Optional[str] = None,
) -> str:
    """
    Sign a session token for an identity.

    Args:
        identity: User id, email and role to embed
        expires_delta: Lifetime, defaults to JWT_EXPIRES_MINUTES
        secret: Signing secret, defaults to JWT_SECRET
        algorithm: Signing algorithm, defaults to JWT_ALGORITHM

    Returns:
        The encoded JWT string
    """
    issued_at = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.JWT_EXPIRES_MINUTES)

    payload = {
        "sub": str(identity.id),
        "email": identity.email,
        "role": identity.role.value,
        "iat": int(issued_at.timestamp()),
        "exp": int((issued_at + expires_delta).timestamp()),
    }
    return jwt.encode(
        payload,
        secret or settings.JWT_SECRET,
        algorithm=algorithm or settings.JWT_ALGORITHM,
    )


def verify_token(
    token: str,
    *,
    secret: Optional[str] = None,
    algorithm: Optional[str] = None,
) -> TokenClaims:
    """
    Verify signature and expiry, then parse the claims.

    Raises:
        TokenExpiredError: Token is past its expiry
        TokenInvalidError: Bad signature, malformed token or missing claims
    """
    try:
        payload = jwt.decode(
            token,
            secret or settings.JWT_SECRET,
            algorithms=[algorithm or settings.JWT_ALGORITHM],
        )
    except ExpiredSignatureError:
        raise TokenExpiredError()
    except JWTError as e:
        raise TokenInvalidError(f"Invalid token: {e}")

    try:
        return TokenClaims.model_validate(payload)
    except ValidationError as e:
        raise TokenInvalidError(f"Invalid token claims: {e.error_count()} error(s)")


def extract_bearer(header: Optional[str]) -> Optional[str]:
    """
    Pull the token out of an Authorization header.

    Accepts exactly "Bearer <token>" (scheme is case-insensitive).
    Anything else returns None.

    Example:
        extract_bearer("Bearer abc.def.ghi")  # "abc.def.ghi"
        extract_bearer("Basic dXNlcg==")      # None
    """
    if not header:
        return None

    parts = header.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1]
