from __future__ import annotations

from fastapi.testclient import TestClient

from app.api.dependencies import user_repo
from app.models.user import ROLE_ADMIN, ROLE_USER
from app.services import token_service
from tests.conftest import mint_token, seed_user

NEW_USER = {"email": "new@example.com", "password": "pw-123", "name": "New User"}

# ---- register ----


def test_register(client: TestClient) -> None:
    resp = client.post("/api/register", json=NEW_USER)
    assert resp.status_code == 201
    assert resp.json() == {
        "message": "User registered successfully",
        "user": {
            "id": 1,
            "email": "new@example.com",
            "name": "New User",
            "roles": [ROLE_USER],
        },
    }
    stored = user_repo.get_by_email("new@example.com")
    assert stored is not None
    assert stored.password.startswith("$argon2")


def test_register_normalizes_email(client: TestClient) -> None:
    resp = client.post("/api/register", json={**NEW_USER, "email": " New@Example.COM "})
    assert resp.json()["user"]["email"] == "new@example.com"


def test_register_duplicate_400(client: TestClient) -> None:
    client.post("/api/register", json=NEW_USER)
    resp = client.post("/api/register", json={**NEW_USER, "email": "NEW@example.com"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "User with this email already exists"}


def test_register_missing_password_400(client: TestClient) -> None:
    resp = client.post("/api/register", json={"email": "a@example.com", "name": "A"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Password cannot be empty"}


def test_register_invalid_json_400(client: TestClient) -> None:
    resp = client.post(
        "/api/register", content=b"nope", headers={"Content-Type": "application/json"}
    )
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid JSON"}


# ---- login ----


def test_login_returns_token_with_roles(client: TestClient) -> None:
    user = seed_user(roles=[ROLE_ADMIN])
    resp = client.post(
        "/api/login", json={"email": "jane@example.com", "password": "secret-pass"}
    )
    assert resp.status_code == 200
    claims = token_service.decode_access_token(resp.json()["token"])
    assert claims["sub"] == str(user.id)
    assert claims["email"] == "jane@example.com"
    assert claims["roles"] == [ROLE_ADMIN, ROLE_USER]


def test_login_email_case_insensitive(client: TestClient) -> None:
    seed_user()
    resp = client.post(
        "/api/login", json={"email": "JANE@example.com", "password": "secret-pass"}
    )
    assert resp.status_code == 200


def test_login_wrong_password_401(client: TestClient) -> None:
    seed_user()
    resp = client.post("/api/login", json={"email": "jane@example.com", "password": "nope"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "Invalid credentials"}


def test_login_unknown_user_401(client: TestClient) -> None:
    resp = client.post("/api/login", json={"email": "ghost@example.com", "password": "x"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "Invalid credentials"}


def test_login_disabled_user_401(client: TestClient) -> None:
    seed_user(enabled=False)
    resp = client.post(
        "/api/login", json={"email": "jane@example.com", "password": "secret-pass"}
    )
    assert resp.status_code == 401


def test_login_token_opens_admin_routes(client: TestClient) -> None:
    seed_user(roles=[ROLE_ADMIN])
    token = client.post(
        "/api/login", json={"email": "jane@example.com", "password": "secret-pass"}
    ).json()["token"]
    resp = client.get("/api/users", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 200


# ---- token handling ----


def test_expired_token_401(client: TestClient) -> None:
    token = token_service.create_access_token(sub="1", roles=[ROLE_ADMIN], ttl_min=-1)
    resp = client.get("/api/users", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "Token expired"}
    assert resp.headers.get("www-authenticate") == "Bearer"


def test_token_defaults_to_user_role() -> None:
    claims = token_service.decode_access_token(mint_token())
    assert claims["roles"] == [ROLE_USER]
    assert claims["iss"] == token_service.ISSUER
    assert claims["aud"] == token_service.AUDIENCE
