# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Provides bcrypt password hashing, HS256 session tokens and the per-route
# authorization dependencies.
#
# Usage:
#   from app.auth import Identity, require_user
#
#   @router.get("/protected")
#   def protected(identity: Identity = Depends(require_user)):
#       return {"user_id": identity.id}
# =============================================================================

from app.auth.dependencies import (
    authorize,
    get_current_identity,
    require_admin,
    require_roles,
    require_user,
)
from app.auth.models import Identity, TokenClaims
from app.auth.security import (
    extract_bearer,
    hash_password,
    issue_token,
    verify_password,
    verify_token,
)

__all__ = [
    "authorize",
    "get_current_identity",
    "require_admin",
    "require_roles",
    "require_user",
    "Identity",
    "TokenClaims",
    "extract_bearer",
    "hash_password",
    "issue_token",
    "verify_password",
    "verify_token",
]
