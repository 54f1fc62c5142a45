# =============================================================================
# core/services/base.py - Generic Resource Service
# =============================================================================
# Every resource (diary, meal, ...) is served by a subclass of
# ResourceService configured through class attributes:
#
#   model            ORM table class
#   label            Human name used in messages ("Diary entry")
#   date_field       Column lists are ordered by (descending)
#   search_fields    Columns searched with a case-insensitive substring match
#   category_field   Enum column filtered by ListFilters.category
#   writable_fields  Columns a create/update payload may set
#   owned            Rows belong to a user through user_id
#   admin_override   ADMIN may read/modify rows of other users
#
# Access rules for owned resources:
#   - a missing row is NotFoundError, checked BEFORE ownership
#   - a row of another user is ForbiddenError (unless admin_override + ADMIN)
#   - lists are always scoped to the requester's own rows, except for ADMIN
#     on admin_override services (optionally filtered by user_id)
#
# There is no transaction around check-then-act. A row deleted by another
# request between the check and the write surfaces as NotFoundError.
# =============================================================================

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Generic, Optional, TypeVar
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy import ColumnElement, delete, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.auth.models import Identity
from app.exceptions import ForbiddenError, NotFoundError, from_store_error
from core.models.pagination import PageRequest
from lib.tables import Base
from lib.utils import LIKE_ESCAPE, contains_pattern

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


@dataclass
class ListFilters:
    """
    Query options for ResourceService.list().

    Example:
        ListFilters(page=PageRequest.clamp(2, 20), search="salad", category=MealType.LUNCH)
    """

    page: PageRequest = field(default_factory=PageRequest)
    search: Optional[str] = None
    category: Optional[Enum] = None
    user_id: Optional[UUID] = None


@dataclass
class ListResult(Generic[ModelT]):
    """One page of rows plus the total matching the same filters."""

    items: list[ModelT]
    total: int
    page: PageRequest


class ResourceService(Generic[ModelT]):
    """
    CRUD with ownership checks for one ORM model.

    The session is injected per request; the service never opens or
    closes it.
    """

    model: ClassVar[type[Base]]
    label: ClassVar[str] = "Resource"
    date_field: ClassVar[str] = "created_at"
    search_fields: ClassVar[tuple[str, ...]] = ()
    category_field: ClassVar[Optional[str]] = None
    writable_fields: ClassVar[frozenset[str]] = frozenset()
    owned: ClassVar[bool] = True
    admin_override: ClassVar[bool] = False

    def __init__(self, session: Session):
        self.session = session

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def list(self, filters: ListFilters, requester: Optional[Identity] = None) -> ListResult[ModelT]:
        """
        Filtered, paginated rows ordered by date_field, most recent first.

        `total` counts every row matching the filters, ignoring the page.
        """
        conditions = self._list_conditions(filters, requester)

        total = self.session.scalar(
            select(func.count()).select_from(self.model).where(*conditions)
        ) or 0

        order_column = getattr(self.model, self.date_field)
        stmt = (
            select(self.model)
            .where(*conditions)
            .order_by(order_column.desc(), self.model.id)
            .offset(filters.page.skip)
            .limit(filters.page.take)
        )
        items = list(self.session.scalars(stmt).all())

        logger.debug(f"Listed {len(items)}/{total} {self.label} row(s), page {filters.page.page}")
        return ListResult(items=items, total=total, page=filters.page)

    def get_by_id(self, resource_id: UUID, requester: Optional[Identity] = None) -> ModelT:
        """
        Raises:
            NotFoundError: No row with this id
            ForbiddenError: The requester may not see the row
        """
        row = self._load(resource_id)
        self._check_access(row, requester, "view")
        return row

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def create(self, data: BaseModel, owner: Optional[Identity] = None) -> ModelT:
        """
        Persist a validated create payload.

        For owned resources the row is assigned to `owner`.
        """
        row = self._build(data, owner)
        self.session.add(row)
        self._commit("creating")

        logger.info(f"Created {self.label} {row.id}")
        return row

    def update(self, resource_id: UUID, patch: BaseModel, requester: Optional[Identity] = None) -> ModelT:
        """Apply only the fields the client actually sent."""
        row = self._load(resource_id)
        self._check_access(row, requester, "update")

        for name, value in self._changes(patch).items():
            setattr(row, name, value)

        self._commit("updating")
        logger.info(f"Updated {self.label} {row.id}")
        return row

    def delete(self, resource_id: UUID, requester: Optional[Identity] = None) -> None:
        """
        Raises:
            NotFoundError: No row with this id, including one removed by
                another request after the access check
            ForbiddenError: The requester may not delete the row
        """
        row = self._load(resource_id)
        self._check_access(row, requester, "delete")

        # Owned child rows go with ON DELETE CASCADE
        result = self.session.execute(delete(self.model).where(self.model.id == resource_id))
        if result.rowcount == 0:
            self.session.rollback()
            raise NotFoundError(f"{self.label} not found")

        self._commit("deleting")
        logger.info(f"Deleted {self.label} {resource_id}")

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _load(self, resource_id: UUID) -> ModelT:
        row = self.session.get(self.model, resource_id)
        if row is None:
            raise NotFoundError(f"{self.label} not found")
        return row

    def _build(self, data: BaseModel, owner: Optional[Identity]) -> ModelT:
        """Unsaved row from a create payload, assigned to `owner` when owned."""
        values = self._writable(data.model_dump())
        if self.owned:
            if owner is None:
                raise ValueError(f"{self.label} rows need an owner")
            values["user_id"] = owner.id
        return self.model(**values)

    def _check_access(self, row: ModelT, requester: Optional[Identity], action: str) -> None:
        if not self.owned:
            return
        if requester is None:
            raise ForbiddenError(f"You are not authorized to {action} this {self.label.lower()}")
        if self.admin_override and requester.is_admin:
            return
        if row.user_id != requester.id:
            raise ForbiddenError(f"You are not authorized to {action} this {self.label.lower()}")

    def _owner_scope(self, filters: ListFilters, requester: Optional[Identity]) -> Optional[UUID]:
        """User id the list is restricted to, or None for every user."""
        if not self.owned:
            return None
        if requester is None:
            raise ForbiddenError(f"You are not authorized to list {self.label.lower()} rows")
        if self.admin_override and requester.is_admin:
            return filters.user_id
        return requester.id

    def _list_conditions(self, filters: ListFilters, requester: Optional[Identity]) -> list[ColumnElement[bool]]:
        conditions: list[ColumnElement[bool]] = []

        owner_id = self._owner_scope(filters, requester)
        if owner_id is not None:
            conditions.append(self.model.user_id == owner_id)

        term = (filters.search or "").strip()
        if term and self.search_fields:
            pattern = contains_pattern(term)
            conditions.append(or_(*(
                getattr(self.model, name).ilike(pattern, escape=LIKE_ESCAPE)
                for name in self.search_fields
            )))

        if filters.category is not None and self.category_field:
            conditions.append(getattr(self.model, self.category_field) == filters.category)

        return conditions

    def _writable(self, values: dict[str, Any]) -> dict[str, Any]:
        return {name: value for name, value in values.items() if name in self.writable_fields}

    def _changes(self, patch: BaseModel) -> dict[str, Any]:
        return self._writable(patch.model_dump(exclude_unset=True))

    def _commit(self, action: str, label: Optional[str] = None) -> None:
        """
        Commit the unit of work, translating store failures.

        Raises:
            ConflictError: Unique constraint violated
            NotFoundError: Row vanished mid-request
            BadRequestError: Foreign key violated
            InternalServerError: Anything else (logged with the cause)
        """
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            error = from_store_error(e, label or self.label, action)
            if not error.is_operational:
                logger.error(f"Error {action} {(label or self.label).lower()}: {e}")
            raise error from e
