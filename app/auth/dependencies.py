# =============================================================================
# app/auth/dependencies.py - Authorization Checker and FastAPI Dependencies
# =============================================================================
# Every protected route declares the roles it accepts:
#
#   @router.get("/diary")
#   def list_diaries(identity: Identity = Depends(require_user)): ...
#
# The check runs once per request, before any service:
#   1. Bearer token missing or malformed     -> UnauthorizedError (401)
#   2. Token expired or invalid              -> UnauthorizedError (401)
#   3. Role not among the accepted roles     -> ForbiddenError (403)
#   4. Otherwise the Identity is returned and stored on request.state
#
# Ownership (is this MY diary?) is checked later by the services.
# =============================================================================

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Optional

from fastapi import Request

from app.auth.models import Identity
from app.auth.security import extract_bearer, verify_token
from app.exceptions import ForbiddenError, UnauthorizedError
from core.models import UserRole

logger = logging.getLogger(__name__)


def authorize(headers: Mapping[str, str], required_roles: Iterable[UserRole] = ()) -> Identity:
    """
    Authenticate the request headers and check the role.

    Args:
        headers: Request headers (case-insensitive mapping, or a plain dict)
        required_roles: Accepted roles; empty means any authenticated user

    Returns:
        Identity: id, email and role of the requester

    Raises:
        UnauthorizedError: Missing, malformed, expired or invalid token
        ForbiddenError: Authenticated, but the role is not accepted
    """
    header: Optional[str] = headers.get("authorization") or headers.get("Authorization")
    token = extract_bearer(header)
    if token is None:
        raise UnauthorizedError("Missing or malformed Authorization header")

    try:
        claims = verify_token(token)
    except UnauthorizedError as e:
        logger.warning(f"Token rejected ({e.code}): {e.message}")
        raise

    identity = claims.to_identity()

    roles = set(required_roles)
    if roles and identity.role not in roles:
        accepted = ", ".join(sorted(role.value for role in roles))
        raise ForbiddenError(f"Role {identity.role.value} is not allowed here (requires {accepted})")

    return identity


def require_roles(*roles: UserRole) -> Callable:
    """
    Build a FastAPI dependency that authorizes the request for `roles`.

    Usage:
        @router.post("/article")
        def create(identity: Identity = Depends(require_roles(UserRole.ADMIN))): ...
    """

    async def dependency(request: Request) -> Identity:
        identity = authorize(request.headers, roles)
        request.state.identity = identity
        return identity

    return dependency


# Ready-made dependencies for the common cases
get_current_identity = require_roles()
require_user = require_roles(UserRole.USER, UserRole.ADMIN)
require_admin = require_roles(UserRole.ADMIN)
