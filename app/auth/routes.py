# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# API endpoints for registration, login and token refresh.
#
# - POST /auth/register   public, always creates a USER account
# - POST /auth/login      public, returns {accessToken, user}
# - POST /auth/refresh    public, trades a still-valid token for a new one
# - GET  /auth/me         current user's profile
# =============================================================================

import logging

from fastapi import APIRouter, Depends

from app.auth.dependencies import get_current_identity
from app.auth.models import AuthResponse, Identity, LoginRequest, RefreshRequest, RegisterRequest
from app.auth.security import issue_token, verify_token
from app.dependencies import UserServiceDep
from app.exceptions import NotFoundError, UnauthorizedError
from app.responses import created, ok
from core.models import UserResponse, UserRole
from lib.tables import User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


def _session_for(user: User) -> AuthResponse:
    identity = Identity(id=user.id, email=user.email, role=user.role)
    return AuthResponse(
        access_token=issue_token(identity),
        user=UserResponse.model_validate(user),
    )


@router.post("/register", status_code=201)
def register(payload: RegisterRequest, service: UserServiceDep):
    """
    Create an account.

    Any `role` in the body is ignored; admins are created through POST /user.

    Raises:
        409: Email or user name already taken
    """
    user = service.create(payload, role=UserRole.USER)
    logger.info(f"Registered user {user.id}")
    return created(UserResponse.model_validate(user), "User registered successfully")


@router.post("/login")
def login(payload: LoginRequest, service: UserServiceDep):
    """
    Exchange credentials for a session token.

    Raises:
        401: Unknown email or wrong password
    """
    user = service.authenticate(payload.email, payload.password)
    logger.info(f"User {user.id} logged in")
    return ok(_session_for(user), "Login successful")


@router.post("/refresh")
def refresh(payload: RefreshRequest, service: UserServiceDep):
    """
    Issue a fresh token for a valid one.

    The new token carries the user's current role from the database.

    Raises:
        401: Token expired or invalid, or its user no longer exists
    """
    claims = verify_token(payload.token)
    try:
        user = service.get_by_id(claims.sub, claims.to_identity())
    except NotFoundError:
        raise UnauthorizedError("Token subject no longer exists")
    return ok(_session_for(user), "Token refreshed successfully")


@router.get("/me")
def get_current_user_info(
    service: UserServiceDep,
    identity: Identity = Depends(get_current_identity),
):
    """
    Get the current authenticated user's profile.

    Raises:
        401: If not authenticated
        404: If the account was deleted after the token was issued
    """
    user = service.get_by_id(identity.id, identity)
    return ok(UserResponse.model_validate(user))
