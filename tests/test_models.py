# =============================================================================
# tests/test_models.py - Pydantic Model Tests
# =============================================================================
# Unit tests for the request/response schemas to ensure:
# - camelCase input is accepted and parsed correctly
# - Invalid data raises ValidationError
# - Unknown fields are rejected
# - Update schemas reject explicit nulls but allow omission
# - Responses serialize in camelCase and never leak passwords
#
# Run with: pytest tests/test_models.py -v
# =============================================================================

from datetime import datetime, timezone
from uuid import uuid4

import pytest
from pydantic import ValidationError

from core.models import (
    ArticleCreate,
    ArticleUpdate,
    BodyMeasurementCreate,
    BodyMeasurementUpdate,
    DiaryCreate,
    DiaryUpdate,
    ExerciseRecordCreate,
    MealCreate,
    MealType,
    MealUpdate,
    UserCreate,
    UserResponse,
    UserRole,
    UserUpdate,
)


def valid_user(**overrides) -> dict:
    data = {
        "email": "jane@example.com",
        "userName": "jane",
        "firstName": "Jane",
        "lastName": "Doe",
        "password": "secret1",
    }
    data.update(overrides)
    return data


# =============================================================================
# User Model Tests
# =============================================================================

class TestUserCreate:
    """Tests for UserCreate model."""

    def test_valid_user(self):
        user = UserCreate(**valid_user())

        assert user.user_name == "jane"
        assert user.first_name == "Jane"
        assert user.role is None

    def test_populate_by_field_name(self):
        user = UserCreate(
            email="jane@example.com",
            user_name="jane",
            first_name="Jane",
            last_name="Doe",
            password="secret1",
        )

        assert user.last_name == "Doe"

    def test_invalid_email(self):
        with pytest.raises(ValidationError):
            UserCreate(**valid_user(email="not-an-email"))

    @pytest.mark.parametrize(
        "field,value",
        [
            ("userName", "ab"),
            ("userName", "x" * 31),
            ("firstName", ""),
            ("lastName", "D" * 51),
            ("password", "12345"),
        ],
    )
    def test_length_bounds(self, field, value):
        with pytest.raises(ValidationError):
            UserCreate(**valid_user(**{field: value}))

    def test_phone_pattern(self):
        assert UserCreate(**valid_user(phone="+1 (555) 010-2030")).phone == "+1 (555) 010-2030"

        with pytest.raises(ValidationError):
            UserCreate(**valid_user(phone="call me"))

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            UserCreate(**valid_user(nickname="jj"))

        assert exc_info.value.errors()[0]["type"] == "extra_forbidden"

    def test_role_must_be_known(self):
        with pytest.raises(ValidationError):
            UserCreate(**valid_user(role="SUPERUSER"))


class TestUserUpdate:

    def test_empty_update_is_valid(self):
        assert UserUpdate().model_dump(exclude_unset=True) == {}

    def test_only_sent_fields_are_set(self):
        patch = UserUpdate(firstName="Janet")

        assert patch.model_dump(exclude_unset=True) == {"first_name": "Janet"}

    @pytest.mark.parametrize("field", ["email", "userName", "firstName", "password", "role"])
    def test_null_is_rejected(self, field):
        with pytest.raises(ValidationError) as exc_info:
            UserUpdate(**{field: None})

        assert "may not be null" in str(exc_info.value)

    def test_phone_may_be_cleared(self):
        assert UserUpdate(phone=None).model_dump(exclude_unset=True) == {"phone": None}


class TestUserResponse:

    def test_serializes_camel_case_without_password(self):
        # Arrange: an object shaped like an ORM row, password included
        class Row:
            id = uuid4()
            email = "jane@example.com"
            user_name = "jane"
            first_name = "Jane"
            last_name = "Doe"
            phone = None
            role = UserRole.USER
            is_verified = False
            password = "$2b$10$hash"
            created_at = datetime(2024, 1, 15, tzinfo=timezone.utc)
            updated_at = None

        # Act
        data = UserResponse.model_validate(Row()).model_dump(mode="json", by_alias=True)

        # Assert
        assert data["userName"] == "jane"
        assert data["role"] == "USER"
        assert "password" not in data
        assert "user_name" not in data


# =============================================================================
# Resource Model Tests
# =============================================================================

class TestArticleModels:

    def test_valid_article(self):
        article = ArticleCreate(
            title="Five habits for better sleep",
            publishDate="2024-03-01T08:00:00Z",
            content="Keep a consistent schedule.",
            category="LIFESTYLE",
        )

        assert article.publish_date.tzinfo is not None
        assert article.category.value == "LIFESTYLE"

    def test_short_title(self):
        with pytest.raises(ValidationError):
            ArticleCreate(title="Tips", publishDate="2024-03-01T08:00:00Z", content="Long enough body")

    def test_image_url_must_be_http(self):
        with pytest.raises(ValidationError):
            ArticleCreate(
                title="Five habits",
                publishDate="2024-03-01T08:00:00Z",
                content="Long enough body",
                imageUrl="ftp://example.com/a.png",
            )

    def test_views_count_not_negative(self):
        with pytest.raises(ValidationError):
            ArticleUpdate(viewsCount=-1)


class TestDiaryModels:

    def test_content_minimum_length(self):
        with pytest.raises(ValidationError):
            DiaryCreate(entryDate="2024-02-10T21:00:00Z", content="too short")

    def test_title_optional(self):
        entry = DiaryCreate(entryDate="2024-02-10T21:00:00Z", content="Ran 12km today.")

        assert entry.title is None

    def test_content_may_not_be_nulled(self):
        with pytest.raises(ValidationError):
            DiaryUpdate(content=None)

    def test_title_may_be_cleared(self):
        assert DiaryUpdate(title=None).model_dump(exclude_unset=True) == {"title": None}


class TestMealModels:

    def test_valid_meal(self):
        meal = MealCreate(mealType="LUNCH", mealDate="2024-02-10T12:30:00Z", calories=450)

        assert meal.meal_type is MealType.LUNCH
        assert meal.calories == 450

    @pytest.mark.parametrize("field", ["calories", "protein", "carbohydrates", "fats"])
    def test_negative_nutrients(self, field):
        with pytest.raises(ValidationError):
            MealCreate(mealType="LUNCH", mealDate="2024-02-10T12:30:00Z", **{field: -1})

    def test_unknown_meal_type(self):
        with pytest.raises(ValidationError):
            MealCreate(mealType="BRUNCH", mealDate="2024-02-10T12:30:00Z")

    def test_meal_type_may_not_be_nulled(self):
        with pytest.raises(ValidationError):
            MealUpdate(mealType=None)


class TestExerciseRecordModels:

    def test_negative_duration(self):
        with pytest.raises(ValidationError):
            ExerciseRecordCreate(exerciseDate="2024-02-10T07:00:00Z", durationMinutes=-5)

    def test_only_date_required(self):
        record = ExerciseRecordCreate(exerciseDate="2024-02-10T07:00:00Z")

        assert record.exercise_type is None


class TestBodyMeasurementModels:

    def test_valid_measurement(self):
        measurement = BodyMeasurementCreate(
            measurementDate="2024-02-10T07:00:00Z", weightKg=72.4, bodyFatPercentage=18.1
        )

        assert measurement.weight_kg == 72.4

    @pytest.mark.parametrize(
        "weight,fat",
        [(-0.1, 18.0), (70.0, -1.0), (70.0, 100.5)],
    )
    def test_out_of_range(self, weight, fat):
        with pytest.raises(ValidationError):
            BodyMeasurementCreate(
                measurementDate="2024-02-10T07:00:00Z", weightKg=weight, bodyFatPercentage=fat
            )

    def test_update_rejects_null_weight(self):
        with pytest.raises(ValidationError):
            BodyMeasurementUpdate(weightKg=None)
