# =============================================================================
# tests/test_api_auth.py - Authentication Endpoint Tests
# =============================================================================
# Register, login, refresh and "who am I" through the HTTP surface.
# =============================================================================

from datetime import timedelta

from app.auth.security import issue_token
from tests.helpers import TEST_PASSWORD, auth_headers, identity_of

AUTH = "/api/v1/auth"


def registration(**overrides) -> dict:
    body = {
        "email": "jane@example.com",
        "userName": "jane",
        "firstName": "Jane",
        "lastName": "Doe",
        "password": "secret1",
    }
    body.update(overrides)
    return body


class TestRegister:

    def test_register_creates_user(self, client):
        response = client.post(f"{AUTH}/register", json=registration())
        body = response.json()

        assert response.status_code == 201
        assert body["success"] is True
        assert body["data"]["email"] == "jane@example.com"
        assert body["data"]["role"] == "USER"
        assert "password" not in body["data"]

    def test_minimal_registration_then_repeat(self, client):
        body = {
            "email": "a@b.com",
            "userName": "abc",
            "firstName": "A",
            "lastName": "B",
            "password": "123456",
        }

        first = client.post(f"{AUTH}/register", json=body)
        second = client.post(f"{AUTH}/register", json=body)

        assert first.status_code == 201
        assert first.json()["data"]["id"]
        assert first.json()["data"]["email"] == "a@b.com"
        assert "password" not in first.json()["data"]
        assert second.status_code == 409
        assert second.json()["message"] == "User already exists"

    def test_role_in_body_is_ignored(self, client):
        response = client.post(f"{AUTH}/register", json=registration(role="ADMIN"))

        assert response.status_code == 201
        assert response.json()["data"]["role"] == "USER"

    def test_duplicate_email_conflicts(self, client):
        client.post(f"{AUTH}/register", json=registration())

        response = client.post(f"{AUTH}/register", json=registration(userName="jane2"))

        assert response.status_code == 409
        assert response.json()["success"] is False
        assert response.json()["message"] == "User already exists"

    def test_duplicate_user_name_conflicts(self, client):
        client.post(f"{AUTH}/register", json=registration())

        response = client.post(f"{AUTH}/register", json=registration(email="other@example.com"))

        assert response.status_code == 409
        assert response.json()["message"] == "Username already exists"

    def test_invalid_body(self, client):
        response = client.post(f"{AUTH}/register", json=registration(email="nope", password="1"))
        body = response.json()

        assert response.status_code == 400
        assert body["message"] == "Validation failed"
        assert {error["field"] for error in body["errors"]} >= {"email", "password"}


class TestLogin:

    def test_login_returns_token_and_profile(self, client, alice):
        response = client.post(
            f"{AUTH}/login", json={"email": "alice@example.com", "password": TEST_PASSWORD}
        )
        body = response.json()

        assert response.status_code == 200
        assert body["message"] == "Login successful"
        assert body["data"]["accessToken"]
        assert body["data"]["user"]["id"] == str(alice.id)

    def test_token_from_login_works(self, client, alice):
        login = client.post(
            f"{AUTH}/login", json={"email": "alice@example.com", "password": TEST_PASSWORD}
        )
        token = login.json()["data"]["accessToken"]

        response = client.get(f"{AUTH}/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.json()["data"]["userName"] == "alice"

    def test_wrong_password(self, client, alice):
        response = client.post(
            f"{AUTH}/login", json={"email": "alice@example.com", "password": "wrong-password"}
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Unauthorized access"

    def test_unknown_email_looks_the_same(self, client):
        response = client.post(
            f"{AUTH}/login", json={"email": "ghost@example.com", "password": TEST_PASSWORD}
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Unauthorized access"


class TestMeAndRefresh:

    def test_me_requires_token(self, client):
        response = client.get(f"{AUTH}/me")

        assert response.status_code == 401
        assert response.json()["success"] is False

    def test_expired_token(self, client, alice):
        token = issue_token(identity_of(alice), expires_delta=timedelta(seconds=-5))

        response = client.get(f"{AUTH}/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["details"]["code"] == "TOKEN_EXPIRED"

    def test_refresh_issues_new_token(self, client, alice):
        token = issue_token(identity_of(alice))

        response = client.post(f"{AUTH}/refresh", json={"token": token})

        assert response.status_code == 200
        assert response.json()["data"]["user"]["email"] == "alice@example.com"
        assert response.json()["data"]["accessToken"]

    def test_refresh_rejects_garbage(self, client):
        response = client.post(f"{AUTH}/refresh", json={"token": "garbage"})

        assert response.status_code == 401

    def test_token_of_deleted_user(self, client, alice, admin):
        headers = auth_headers(alice)
        client.delete(f"/api/v1/user/{alice.id}", headers=auth_headers(admin))

        assert client.get(f"{AUTH}/me", headers=headers).status_code == 404
        assert client.post(
            f"{AUTH}/refresh", json={"token": headers["Authorization"].split()[1]}
        ).status_code == 401
