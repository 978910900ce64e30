"""Unit tests for user API endpoints."""

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from practicehub.db.models import User


def _payload(**overrides) -> dict:
    payload = {
        "name": "Test User",
        "profile_name": "test_user",
        "email": "u1@ex.com",
        "password": "pwd1",
        "user_type": "student",
    }
    payload.update(overrides)
    return payload


def test_register_user(client: TestClient):
    response = client.post("/api/register", json=_payload())
    assert response.status_code == 201
    data = response.json()
    assert data["success"] is True
    assert data["message"] == "User registered successfully"
    assert data["user"]["email"] == "u1@ex.com"
    assert data["user"]["profile_name"] == "test_user"
    assert "password" not in data["user"]


def test_register_stores_hashed_password(client: TestClient, db: Session):
    client.post("/api/register", json=_payload())
    user = db.query(User).filter(User.email == "u1@ex.com").one()
    assert user.password != "pwd1"
    assert user.password.startswith("$2")


def test_register_duplicate_email(client: TestClient):
    client.post("/api/register", json=_payload())
    response = client.post("/api/register", json=_payload(profile_name="other_name"))
    assert response.status_code == 409
    body = response.json()
    assert body["success"] is False
    assert "already registered" in body["message"].lower()


def test_register_duplicate_profile_name(client: TestClient):
    client.post("/api/register", json=_payload())
    response = client.post("/api/register", json=_payload(email="u2@ex.com"))
    assert response.status_code == 409
    assert response.json()["message"] == "Profile name already taken"


def test_register_rejects_bad_profile_name_without_writing(client: TestClient, db: Session):
    response = client.post("/api/register", json=_payload(profile_name="bad name!"))
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Profile name must contain only letters, numbers, and underscores"
    assert db.query(User).count() == 0


def test_register_missing_fields(client: TestClient, db: Session):
    payload = _payload()
    del payload["user_type"]
    del payload["name"]
    response = client.post("/api/register", json=payload)
    assert response.status_code == 400
    message = response.json()["message"]
    assert message.startswith("Missing required fields")
    assert "user_type" in message and "name" in message
    assert db.query(User).count() == 0


def test_register_invalid_email(client: TestClient):
    response = client.post("/api/register", json=_payload(email="not-an-email"))
    assert response.status_code == 400
    assert response.json()["success"] is False


def test_register_overlong_password(client: TestClient):
    response = client.post("/api/register", json=_payload(password="x" * 80))
    assert response.status_code == 400
    assert "72-byte" in response.json()["message"]


def test_login_user(client: TestClient):
    client.post("/api/register", json=_payload(email="u3@ex.com"))
    response = client.post("/api/login", json={"email": "u3@ex.com", "password": "pwd1"})
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["message"] == "Login successful"
    assert data["user"]["email"] == "u3@ex.com"


def test_login_wrong_password_is_generic(client: TestClient):
    client.post("/api/register", json=_payload(email="u4@ex.com"))
    wrong_password = client.post("/api/login", json={"email": "u4@ex.com", "password": "nope"})
    unknown_email = client.post(
        "/api/login", json={"email": "nonexistent@example.com", "password": "nope"}
    )
    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json() == {
        "success": False,
        "message": "Invalid email or password",
    }


def test_login_missing_password(client: TestClient):
    response = client.post("/api/login", json={"email": "u5@ex.com"})
    assert response.status_code == 400
    assert "password" in response.json()["message"]
