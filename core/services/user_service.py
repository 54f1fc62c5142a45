# =============================================================================
# core/services/user_service.py - User Operations
# =============================================================================
# Users are not "owned" rows; access is "self or ADMIN":
#   - a USER may view and update only their own record
#   - only an ADMIN may change a role (route dependencies restrict list,
#     create and delete to ADMIN)
#
# Uniqueness of email and user name is checked up front to give precise
# messages; the database constraints catch the remaining races.
# Passwords are hashed before they reach the session.
# =============================================================================

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import func, select

from app.auth.models import Identity
from app.auth.security import dummy_verify, hash_password, verify_password
from app.exceptions import ConflictError, ForbiddenError, UnauthorizedError
from core.models.enums import UserRole
from core.models.user import UserCreate, UserUpdate
from core.services.base import ResourceService
from lib.tables import User

logger = logging.getLogger(__name__)


class UserService(ResourceService[User]):
    """
    Service for user accounts.

    Usage:
        service = UserService(session)
        user = service.create(payload)                 # role from payload or USER
        user = service.authenticate(email, password)   # login
    """

    model = User
    label = "User"
    date_field = "created_at"
    search_fields = ("first_name", "last_name", "email")
    category_field = "role"
    writable_fields = frozenset({
        "email", "user_name", "first_name", "last_name", "password", "phone", "role",
    })
    owned = False

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def get_by_email(self, email: str) -> Optional[User]:
        return self.session.scalar(
            select(User).where(func.lower(User.email) == email.strip().lower())
        )

    def get_by_user_name(self, user_name: str) -> Optional[User]:
        return self.session.scalar(select(User).where(User.user_name == user_name))

    def authenticate(self, email: str, password: str) -> User:
        """
        Check login credentials.

        Raises:
            UnauthorizedError: Unknown email or wrong password (same message)
        """
        user = self.get_by_email(email)
        if user is None:
            dummy_verify()
            logger.info("Login attempt for unknown email")
            raise UnauthorizedError("Invalid credentials")

        if not verify_password(password, user.password):
            logger.info(f"Wrong password for user {user.id}")
            raise UnauthorizedError("Invalid credentials")

        return user

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def create(self, data: UserCreate, owner: Optional[Identity] = None, role: Optional[UserRole] = None) -> User:
        """
        Create a user with a hashed password.

        Args:
            data: Validated payload
            owner: Unused (users are not owned rows)
            role: Forced role; when None the payload role (or USER) is used

        Raises:
            ConflictError: "User already exists" / "Username already exists"
        """
        if self.get_by_email(data.email) is not None:
            raise ConflictError("User already exists")
        if self.get_by_user_name(data.user_name) is not None:
            raise ConflictError("Username already exists")

        user = User(
            email=data.email.strip().lower(),
            user_name=data.user_name,
            first_name=data.first_name,
            last_name=data.last_name,
            phone=data.phone,
            password=hash_password(data.password),
            role=role or data.role or UserRole.USER,
            recent_body_measurements=[],
        )
        self.session.add(user)
        self._commit("creating")

        logger.info(f"Created user {user.id} with role {user.role.value}")
        return user

    def update(self, resource_id: UUID, patch: UserUpdate, requester: Optional[Identity] = None) -> User:
        """
        Update a profile.

        Raises:
            NotFoundError: No such user
            ForbiddenError: Not self and not ADMIN, or a non-ADMIN role change
            ConflictError: Email or user name taken by another user
        """
        user = self._load(resource_id)
        self._check_access(user, requester, "update")

        changes = self._changes(patch)

        if "role" in changes and changes["role"] != user.role and not requester.is_admin:
            raise ForbiddenError("Only administrators can change a user's role")

        if "email" in changes:
            changes["email"] = changes["email"].strip().lower()
            other = self.get_by_email(changes["email"])
            if other is not None and other.id != user.id:
                raise ConflictError("Email already exists")

        if "user_name" in changes:
            other = self.get_by_user_name(changes["user_name"])
            if other is not None and other.id != user.id:
                raise ConflictError("Username already exists")

        if "password" in changes:
            changes["password"] = hash_password(changes["password"])

        for name, value in changes.items():
            setattr(user, name, value)

        self._commit("updating")
        logger.info(f"Updated user {user.id} ({', '.join(sorted(changes)) or 'no changes'})")
        return user

    # -------------------------------------------------------------------------
    # Access
    # -------------------------------------------------------------------------

    def _check_access(self, row: User, requester: Optional[Identity], action: str) -> None:
        if requester is None or (not requester.is_admin and row.id != requester.id):
            raise ForbiddenError(f"You are not authorized to {action} this user")
