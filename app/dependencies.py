# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
#
# The Database handle lives on app.state (built by create_application);
# each request gets its own session, closed when the response is sent.
# =============================================================================

from collections.abc import Iterator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from core.services import (
    ArticleService,
    BodyMeasurementService,
    DiaryService,
    ExerciseRecordService,
    MealService,
    UserService,
)
from lib.database import Database


def get_database(request: Request) -> Database:
    """The Database handle owned by the running application."""
    return request.app.state.database


def get_db(database: Database = Depends(get_database)) -> Iterator[Session]:
    """
    Per-request SQLAlchemy session.

    Usage:
        @router.get("/items")
        def list_items(db: Session = Depends(get_db)): ...
    """
    yield from database.session()


SessionDep = Annotated[Session, Depends(get_db)]


# =============================================================================
# Services
# =============================================================================

def get_user_service(db: SessionDep) -> UserService:
    return UserService(db)


def get_article_service(db: SessionDep) -> ArticleService:
    return ArticleService(db)


def get_diary_service(db: SessionDep) -> DiaryService:
    return DiaryService(db)


def get_meal_service(db: SessionDep) -> MealService:
    return MealService(db)


def get_exercise_record_service(db: SessionDep) -> ExerciseRecordService:
    return ExerciseRecordService(db)


def get_body_measurement_service(db: SessionDep) -> BodyMeasurementService:
    return BodyMeasurementService(db)


# Type aliases for dependency injection
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
ArticleServiceDep = Annotated[ArticleService, Depends(get_article_service)]
DiaryServiceDep = Annotated[DiaryService, Depends(get_diary_service)]
MealServiceDep = Annotated[MealService, Depends(get_meal_service)]
ExerciseRecordServiceDep = Annotated[ExerciseRecordService, Depends(get_exercise_record_service)]
BodyMeasurementServiceDep = Annotated[BodyMeasurementService, Depends(get_body_measurement_service)]
