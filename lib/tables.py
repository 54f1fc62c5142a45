# =============================================================================
# lib/tables.py - ORM Table Definitions
# =============================================================================
# SQLAlchemy 2.0 declarative models for every persisted entity.
#
# Ownership: Diary, Meal, ExerciseRecord and BodyMeasurement rows belong to
# exactly one User through user_id. Deleting a user deletes what it owns
# (ON DELETE CASCADE at the database level).
# =============================================================================

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, Boolean, DateTime, Enum, Float, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from core.models.enums import ArticleCategory, ExerciseType, MealType, UserRole


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


class TimestampMixin:
    """Primary key plus created/updated timestamps shared by every table."""

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )


def _owner_fk() -> Mapped[uuid.UUID]:
    return mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )


class User(TimestampMixin, Base):
    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    user_name: Mapped[str] = mapped_column(String(30), unique=True, index=True, nullable=False)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    first_name: Mapped[str] = mapped_column(String(50), nullable=False)
    last_name: Mapped[str] = mapped_column(String(50), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(30), nullable=True)
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole, name="user_role", native_enum=False, length=20),
        default=UserRole.USER,
        nullable=False,
    )
    is_verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    email_verification_token: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Bounded window of measurement summaries, see lib/recent_window.py
    recent_body_measurements: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON, default=list, nullable=False
    )

    diaries: Mapped[list[Diary]] = relationship(
        back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )
    meals: Mapped[list[Meal]] = relationship(
        back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )
    exercise_records: Mapped[list[ExerciseRecord]] = relationship(
        back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )
    body_measurements: Mapped[list[BodyMeasurement]] = relationship(
        back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"


class Article(TimestampMixin, Base):
    __tablename__ = "articles"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    category: Mapped[ArticleCategory | None] = mapped_column(
        Enum(ArticleCategory, name="article_category", native_enum=False, length=30),
        nullable=True,
        index=True,
    )
    publish_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    image_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    author: Mapped[str | None] = mapped_column(String(100), nullable=True)
    views_count: Mapped[int] = mapped_column(default=0, nullable=False)


class Diary(TimestampMixin, Base):
    __tablename__ = "diaries"

    user_id: Mapped[uuid.UUID] = _owner_fk()
    entry_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    title: Mapped[str | None] = mapped_column(String(200), nullable=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    user: Mapped[User] = relationship(back_populates="diaries")


class Meal(TimestampMixin, Base):
    __tablename__ = "meals"

    user_id: Mapped[uuid.UUID] = _owner_fk()
    meal_type: Mapped[MealType] = mapped_column(
        Enum(MealType, name="meal_type", native_enum=False, length=20), nullable=False
    )
    meal_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    image_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    calories: Mapped[float | None] = mapped_column(Float, nullable=True)
    protein: Mapped[float | None] = mapped_column(Float, nullable=True)
    carbohydrates: Mapped[float | None] = mapped_column(Float, nullable=True)
    fats: Mapped[float | None] = mapped_column(Float, nullable=True)

    user: Mapped[User] = relationship(back_populates="meals")


class ExerciseRecord(TimestampMixin, Base):
    __tablename__ = "exercise_records"

    user_id: Mapped[uuid.UUID] = _owner_fk()
    exercise_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    exercise_type: Mapped[ExerciseType | None] = mapped_column(
        Enum(ExerciseType, name="exercise_type", native_enum=False, length=20), nullable=True
    )
    duration_minutes: Mapped[float | None] = mapped_column(Float, nullable=True)
    calories_burned: Mapped[float | None] = mapped_column(Float, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    user: Mapped[User] = relationship(back_populates="exercise_records")


class BodyMeasurement(TimestampMixin, Base):
    __tablename__ = "body_measurements"

    user_id: Mapped[uuid.UUID] = _owner_fk()
    measurement_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    weight_kg: Mapped[float] = mapped_column(Float, nullable=False)
    body_fat_percentage: Mapped[float] = mapped_column(Float, nullable=False)

    user: Mapped[User] = relationship(back_populates="body_measurements")
