# =============================================================================
# app/routers/meals.py - Meal Endpoints
# =============================================================================
# Meal log. Users manage their own meals; an ADMIN may manage anyone's and
# filter the list with ?userId=.
# =============================================================================

from typing import Annotated, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query

from app.auth import Identity, require_user
from app.dependencies import MealServiceDep
from app.responses import created, deleted, ok, paginated, updated
from core.models import MealCreate, MealResponse, MealSummary, MealType, MealUpdate, PageRequest
from core.services import ListFilters

router = APIRouter()


@router.post("", status_code=201)
def create_meal(
    payload: MealCreate,
    service: MealServiceDep,
    identity: Identity = Depends(require_user),
):
    meal = service.create(payload, owner=identity)
    return created(MealResponse.model_validate(meal), "Meal created successfully")


@router.get("")
def list_meals(
    service: MealServiceDep,
    identity: Identity = Depends(require_user),
    page: Optional[int] = Query(default=None),
    limit: Optional[int] = Query(default=None),
    search: Optional[str] = Query(default=None, description="Matches the description"),
    meal_type: Optional[MealType] = Query(default=None, alias="mealType"),
    user_id: Optional[UUID] = Query(default=None, alias="userId", description="ADMIN only"),
):
    """
    List meals, most recent first.

    Non-admin requests are always limited to the requester's own meals;
    `userId` is only honored for ADMIN.
    """
    filters = ListFilters(
        page=PageRequest.clamp(page, limit),
        search=search,
        category=meal_type,
        user_id=user_id,
    )
    result = service.list(filters, identity)
    return paginated(
        [MealSummary.model_validate(meal) for meal in result.items],
        result.page,
        result.total,
    )


@router.get("/{meal_id}")
def get_meal(
    meal_id: Annotated[UUID, Path(description="Meal UUID")],
    service: MealServiceDep,
    identity: Identity = Depends(require_user),
):
    meal = service.get_by_id(meal_id, identity)
    return ok(MealResponse.model_validate(meal))


@router.put("/{meal_id}")
def update_meal(
    meal_id: Annotated[UUID, Path(description="Meal UUID")],
    payload: MealUpdate,
    service: MealServiceDep,
    identity: Identity = Depends(require_user),
):
    meal = service.update(meal_id, payload, identity)
    return updated(MealResponse.model_validate(meal), "Meal updated successfully")


@router.delete("/{meal_id}")
def delete_meal(
    meal_id: Annotated[UUID, Path(description="Meal UUID")],
    service: MealServiceDep,
    identity: Identity = Depends(require_user),
):
    service.delete(meal_id, identity)
    return deleted("Meal deleted successfully")
