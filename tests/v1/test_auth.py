# mypy: ignore-errors
"""Tests for registration, login and the bearer-token dependency."""

from datetime import timedelta

from fastapi import status

from content_portal.core.security import decode_access_token
from content_portal.db.time import utcnow
from content_portal.models import PostVisibility


def test_register_returns_token(client) -> None:
    response = client.post(
        "/api/v1/auth/register",
        json={"email": "Carol@Example.com", "password": "carol-pw", "name": "Carol"},
    )
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["token_type"] == "bearer"
    assert data["user"]["email"] == "carol@example.com"
    assert data["user"]["role"] == "client"

    claims = decode_access_token(data["access_token"])
    assert claims["sub"] == data["user"]["id"]
    assert claims["email"] == "carol@example.com"
    assert claims["role"] == "client"


def test_register_duplicate_email(client, alice) -> None:
    response = client.post(
        "/api/v1/auth/register",
        json={"email": alice.email, "password": "another"},
    )
    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["detail"] == "Email already registered"


def test_register_validates_payload(client) -> None:
    response = client.post("/api/v1/auth/register", json={"email": "not-an-email", "password": "1"})
    assert response.status_code == 422


def test_login(client, alice) -> None:
    response = client.post(
        "/api/v1/auth/login",
        json={"email": alice.email, "password": "secret123"},
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["user"]["id"] == alice.id

    wrong = client.post("/api/v1/auth/login", json={"email": alice.email, "password": "nope"})
    assert wrong.status_code == status.HTTP_401_UNAUTHORIZED
    assert wrong.json()["detail"] == "Invalid credentials"


def test_profile(client, alice, alice_headers) -> None:
    response = client.get("/api/v1/auth/profile", headers=alice_headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["email"] == alice.email


def test_profile_requires_token(client) -> None:
    response = client.get("/api/v1/auth/profile")
    assert response.status_code in {status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN}


def test_invalid_token_rejected(client) -> None:
    response = client.get(
        "/api/v1/auth/profile",
        headers={"Authorization": "Bearer not-a-jwt"},
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["detail"] == "Could not validate credentials"


def test_token_for_deleted_user_rejected(client, db_session, alice, alice_headers) -> None:
    db_session.delete(alice)
    db_session.commit()

    response = client.get("/api/v1/auth/profile", headers=alice_headers)
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["detail"] == "User not found"


def test_blocked_user_rejected(client, db_session, alice, alice_headers) -> None:
    alice.blocked_until = utcnow() + timedelta(minutes=10)
    db_session.commit()

    response = client.get("/api/v1/auth/profile", headers=alice_headers)
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["detail"] == "User is temporarily blocked"


def test_register_ignores_requested_role(client, alice, make_post) -> None:
    private = make_post(visibility=PostVisibility.USER, owner=alice)

    response = client.post(
        "/api/v1/auth/register",
        json={"email": "mallory@example.com", "password": "mallory-pw", "role": "admin"},
    )
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["user"]["role"] == "client"
    assert decode_access_token(data["access_token"])["role"] == "client"

    headers = {"Authorization": f"Bearer {data['access_token']}"}
    denied = client.get(f"/api/v1/posts/{private.id}", headers=headers)
    assert denied.status_code == status.HTTP_403_FORBIDDEN
    assert client.get("/api/v1/admin/users/", headers=headers).status_code == 403
