# =============================================================================
# tests/test_exceptions.py - Error Hierarchy and Handler Tests
# =============================================================================
# Covers:
# - ErrorKind statuses and the operational flag
# - Store error translation (services and boundary table)
# - Error envelopes in production vs. non-production
# =============================================================================

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.exc import IntegrityError, NoResultFound, OperationalError

from app.exceptions import (
    BadRequestError,
    ConflictError,
    ErrorKind,
    ExternalServiceError,
    ForbiddenError,
    HealthTrackError,
    InternalServerError,
    NotFoundError,
    UnauthorizedError,
    ValidationFailedError,
    format_validation_errors,
    from_store_error,
    register_exception_handlers,
)
from lib.database import StoreErrorKind, classify_store_error
from tests.helpers import build_settings


def integrity_error(message: str) -> IntegrityError:
    return IntegrityError("INSERT INTO users ...", {}, Exception(message))


# =============================================================================
# Error Kind Tests
# =============================================================================

class TestErrorKind:

    @pytest.mark.parametrize(
        "kind,status",
        [
            (ErrorKind.BAD_REQUEST, 400),
            (ErrorKind.UNAUTHORIZED, 401),
            (ErrorKind.FORBIDDEN, 403),
            (ErrorKind.NOT_FOUND, 404),
            (ErrorKind.CONFLICT, 409),
            (ErrorKind.VALIDATION_FAILED, 422),
            (ErrorKind.EXTERNAL_SERVICE_UNAVAILABLE, 502),
            (ErrorKind.INTERNAL_SERVER_ERROR, 500),
        ],
    )
    def test_status_codes(self, kind, status):
        assert kind.status_code == status

    def test_only_internal_is_non_operational(self):
        non_operational = [kind for kind in ErrorKind if not kind.is_operational]

        assert non_operational == [ErrorKind.INTERNAL_SERVER_ERROR]

    def test_subclasses_pick_their_kind(self):
        assert BadRequestError().kind is ErrorKind.BAD_REQUEST
        assert UnauthorizedError().status_code == 401
        assert ForbiddenError().status_code == 403
        assert NotFoundError("Meal not found").message == "Meal not found"
        assert ConflictError().status_code == 409
        assert ValidationFailedError().status_code == 422
        assert InternalServerError().is_operational is False

    def test_external_service_error_names_the_service(self):
        error = ExternalServiceError("mailer", "timeout")

        assert error.status_code == 502
        assert error.message == "mailer: timeout"

    def test_kind_can_be_given_explicitly(self):
        error = HealthTrackError("gone", kind=ErrorKind.NOT_FOUND)

        assert error.status_code == 404
        assert error.code == "NOT_FOUND"
        assert error.to_dict()["isOperational"] is True


# =============================================================================
# Store Error Translation Tests
# =============================================================================

class TestStoreErrors:

    def test_classify_sqlite_messages(self):
        assert classify_store_error(integrity_error("UNIQUE constraint failed: users.email")) \
            is StoreErrorKind.UNIQUE_VIOLATION
        assert classify_store_error(integrity_error("FOREIGN KEY constraint failed")) \
            is StoreErrorKind.FOREIGN_KEY_VIOLATION
        assert classify_store_error(integrity_error("NOT NULL constraint failed: meals.meal_date")) \
            is StoreErrorKind.NOT_NULL_VIOLATION

    def test_classify_postgres_sqlstate(self):
        class DriverError(Exception):
            sqlstate = "23505"

        error = IntegrityError("INSERT ...", {}, DriverError("duplicate key value"))

        assert classify_store_error(error) is StoreErrorKind.UNIQUE_VIOLATION

    def test_classify_missing_row(self):
        assert classify_store_error(NoResultFound()) is StoreErrorKind.ROW_NOT_FOUND

    def test_unique_violation_becomes_conflict(self):
        error = from_store_error(integrity_error("UNIQUE constraint failed: users.email"), "User", "creating")

        assert isinstance(error, ConflictError)
        assert error.message == "User already exists"

    def test_missing_row_becomes_not_found(self):
        error = from_store_error(NoResultFound(), "Meal", "updating")

        assert error.kind is ErrorKind.NOT_FOUND
        assert error.message == "Meal not found"

    def test_unknown_failure_is_masked(self):
        error = from_store_error(
            OperationalError("SELECT 1", {}, Exception("disk I/O error")),
            "Diary entry",
            "creating",
        )

        assert error.kind is ErrorKind.INTERNAL_SERVER_ERROR
        assert error.message == "Error creating diary entry"


# =============================================================================
# Validation Formatting Tests
# =============================================================================

class TestFormatValidationErrors:

    def test_strips_request_section_from_field(self):
        errors = [
            {"loc": ("body", "weightKg"), "type": "greater_than_equal", "msg": "Input should be >= 0"},
            {"loc": ("query", "period"), "type": "enum", "msg": "Input should be 'week'"},
        ]

        assert format_validation_errors(errors) == [
            {"field": "weightKg", "constraint": "greater_than_equal", "message": "Input should be >= 0"},
            {"field": "period", "constraint": "enum", "message": "Input should be 'week'"},
        ]

    def test_whole_body_error(self):
        errors = [{"loc": ("body",), "type": "missing", "msg": "Field required"}]

        assert format_validation_errors(errors)[0]["field"] == "body"


# =============================================================================
# Handler Tests
# =============================================================================

def build_app(environment: str) -> FastAPI:
    app = FastAPI()
    app.state.settings = build_settings(ENVIRONMENT=environment)
    register_exception_handlers(app)

    @app.get("/forbidden")
    async def forbidden():
        raise ForbiddenError("You are not authorized to view this diary entry")

    @app.get("/unauthorized")
    async def unauthorized():
        raise UnauthorizedError("Token expired", code="TOKEN_EXPIRED")

    @app.get("/conflict")
    async def conflict():
        raise ConflictError("User already exists")

    @app.get("/internal")
    async def internal():
        raise InternalServerError("Error creating meal")

    @app.get("/store")
    async def store():
        raise integrity_error("UNIQUE constraint failed: users.user_name")

    @app.get("/crash")
    async def crash():
        raise RuntimeError("boom")

    return app


@pytest.fixture
def dev_client():
    return TestClient(build_app("development"), raise_server_exceptions=False)


@pytest.fixture
def prod_client():
    return TestClient(build_app("production"), raise_server_exceptions=False)


class TestHandlers:

    def test_forbidden_uses_generic_message(self, dev_client):
        response = dev_client.get("/forbidden")
        body = response.json()

        assert response.status_code == 403
        assert body["success"] is False
        assert body["message"] == "Access denied"
        assert body["details"]["reason"] == "You are not authorized to view this diary entry"

    def test_unauthorized_uses_generic_message(self, dev_client):
        response = dev_client.get("/unauthorized")

        assert response.status_code == 401
        assert response.json()["message"] == "Unauthorized access"
        assert response.headers["www-authenticate"] == "Bearer"

    def test_operational_error_keeps_its_message(self, dev_client):
        response = dev_client.get("/conflict")

        assert response.status_code == 409
        assert response.json()["message"] == "User already exists"
        assert "stack" in response.json()

    def test_internal_error_is_generic(self, dev_client):
        response = dev_client.get("/internal")

        assert response.status_code == 500
        assert response.json()["message"] == "Internal Server Error"
        assert response.json()["details"]["reason"] == "Error creating meal"

    def test_store_error_table(self, dev_client):
        response = dev_client.get("/store")

        assert response.status_code == 409
        assert response.json()["message"] == "A record with this value already exists"
        assert response.json()["details"]["kind"] == "unique_violation"

    def test_unexpected_exception(self, dev_client):
        response = dev_client.get("/crash")

        assert response.status_code == 500
        assert response.json()["message"] == "Internal Server Error"
        assert "RuntimeError" in response.json()["stack"]

    def test_unknown_route(self, dev_client):
        response = dev_client.get("/nope")

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Resource not found"}

    @pytest.mark.parametrize("path", ["/forbidden", "/unauthorized", "/internal", "/store", "/crash"])
    def test_production_hides_internals(self, prod_client, path):
        body = prod_client.get(path).json()

        assert body["success"] is False
        assert "details" not in body
        assert "stack" not in body

    def test_production_messages_stay_generic(self, prod_client):
        assert prod_client.get("/forbidden").json()["message"] == "Access denied"
        assert prod_client.get("/crash").json()["message"] == "Internal Server Error"
