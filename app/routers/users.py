# =============================================================================
# app/routers/users.py - User Endpoints
# =============================================================================
# - GET/POST /user            ADMIN only (list, create with any role)
# - GET/PUT  /user/me         the current user's own profile
# - GET/PUT  /user/{id}       self or ADMIN; only ADMIN may change a role
# - DELETE   /user/{id}       ADMIN only; owned rows are deleted with the user
#
# Responses never include the password hash.
# =============================================================================

from typing import Annotated, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query

from app.auth import Identity, get_current_identity, require_admin
from app.dependencies import UserServiceDep
from app.responses import created, deleted, ok, paginated, updated
from core.models import PageRequest, UserCreate, UserResponse, UserRole, UserUpdate
from core.services import ListFilters

router = APIRouter()


@router.get("")
def list_users(
    service: UserServiceDep,
    identity: Identity = Depends(require_admin),
    page: Optional[int] = Query(default=None),
    limit: Optional[int] = Query(default=None),
    search: Optional[str] = Query(default=None, description="Matches first name, last name or email"),
    role: Optional[UserRole] = Query(default=None),
):
    """List all users, newest first."""
    filters = ListFilters(page=PageRequest.clamp(page, limit), search=search, category=role)
    result = service.list(filters, identity)
    return paginated(
        [UserResponse.model_validate(user) for user in result.items],
        result.page,
        result.total,
    )


@router.post("", status_code=201)
def create_user(
    payload: UserCreate,
    service: UserServiceDep,
    identity: Identity = Depends(require_admin),
):
    """Create a user; unlike public registration the role may be set."""
    user = service.create(payload)
    return created(UserResponse.model_validate(user), "User created successfully")


@router.get("/me")
def get_my_profile(
    service: UserServiceDep,
    identity: Identity = Depends(get_current_identity),
):
    user = service.get_by_id(identity.id, identity)
    return ok(UserResponse.model_validate(user))


@router.put("/me")
def update_my_profile(
    payload: UserUpdate,
    service: UserServiceDep,
    identity: Identity = Depends(get_current_identity),
):
    user = service.update(identity.id, payload, identity)
    return updated(UserResponse.model_validate(user), "Profile updated successfully")


@router.get("/{user_id}")
def get_user(
    user_id: Annotated[UUID, Path(description="User UUID")],
    service: UserServiceDep,
    identity: Identity = Depends(get_current_identity),
):
    user = service.get_by_id(user_id, identity)
    return ok(UserResponse.model_validate(user))


@router.put("/{user_id}")
def update_user(
    user_id: Annotated[UUID, Path(description="User UUID")],
    payload: UserUpdate,
    service: UserServiceDep,
    identity: Identity = Depends(get_current_identity),
):
    user = service.update(user_id, payload, identity)
    return updated(UserResponse.model_validate(user), "User updated successfully")


@router.delete("/{user_id}")
def delete_user(
    user_id: Annotated[UUID, Path(description="User UUID")],
    service: UserServiceDep,
    identity: Identity = Depends(require_admin),
):
    service.delete(user_id, identity)
    return deleted("User deleted successfully")
