# mypy: ignore-errors
"""Tests for admin user management endpoints."""

from fastapi import status


def test_list_users_requires_admin(client, alice_headers) -> None:
    response = client.get("/api/v1/admin/users/", headers=alice_headers)
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_list_users(client, admin_headers, alice, bob) -> None:
    response = client.get("/api/v1/admin/users/", headers=admin_headers)
    assert response.status_code == status.HTTP_200_OK
    emails = {user["email"] for user in response.json()}
    assert emails == {"admin@example.com", alice.email, bob.email}
    assert all(user["is_blocked"] is False for user in response.json())


def test_block_user_then_login_fails(client, admin_headers, alice, alice_headers) -> None:
    response = client.patch(
        f"/api/v1/admin/users/{alice.id}/block",
        json={"durationMinutes": 15},
        headers=admin_headers,
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["is_blocked"] is True

    login = client.post("/api/v1/auth/login", json={"email": alice.email, "password": "secret123"})
    assert login.status_code == status.HTTP_403_FORBIDDEN
    assert client.get("/api/v1/auth/profile", headers=alice_headers).status_code == 403


def test_block_requires_duration_or_date(client, admin, admin_headers, alice) -> None:
    response = client.patch(f"/api/v1/admin/users/{alice.id}/block", json={}, headers=admin_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST

    self_block = client.patch(
        f"/api/v1/admin/users/{admin.id}/block",
        json={"durationMinutes": 5},
        headers=admin_headers,
    )
    assert self_block.status_code == status.HTTP_400_BAD_REQUEST
    assert self_block.json()["detail"] == "Cannot block the current user"


def test_update_password(client, admin_headers, alice) -> None:
    response = client.patch(
        f"/api/v1/admin/users/{alice.id}/password",
        json={"password": "brand-new"},
        headers=admin_headers,
    )
    assert response.status_code == status.HTTP_200_OK

    login = client.post("/api/v1/auth/login", json={"email": alice.email, "password": "brand-new"})
    assert login.status_code == status.HTTP_200_OK


def test_remove_user(client, admin, admin_headers, alice) -> None:
    assert client.delete(f"/api/v1/admin/users/{alice.id}", headers=admin_headers).status_code == 204
    assert client.delete(f"/api/v1/admin/users/{alice.id}", headers=admin_headers).status_code == 404

    own = client.delete(f"/api/v1/admin/users/{admin.id}", headers=admin_headers)
    assert own.status_code == status.HTTP_400_BAD_REQUEST


def test_block_rejects_invalid_values_as_bad_request(client, admin_headers, alice) -> None:
    bad_date = client.patch(
        f"/api/v1/admin/users/{alice.id}/block",
        json={"blockedUntil": "next tuesday"},
        headers=admin_headers,
    )
    assert bad_date.status_code == status.HTTP_400_BAD_REQUEST
    assert bad_date.json()["detail"] == "blockedUntil must be a valid date"

    bad_duration = client.patch(
        f"/api/v1/admin/users/{alice.id}/block",
        json={"durationMinutes": 0},
        headers=admin_headers,
    )
    assert bad_duration.status_code == status.HTTP_400_BAD_REQUEST
    assert bad_duration.json()["detail"] == "durationMinutes must be a positive integer"
