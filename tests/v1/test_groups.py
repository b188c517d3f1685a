# mypy: ignore-errors
"""Tests for group endpoints."""

from fastapi import status

from content_portal.models import PostVisibility


def test_create_and_get_group(client, admin_headers) -> None:
    response = client.post(
        "/api/v1/groups/",
        json={"name": "Field staff", "description": "On-site team"},
        headers=admin_headers,
    )
    assert response.status_code == status.HTTP_201_CREATED
    group = response.json()
    assert group["members"] == []

    fetched = client.get(f"/api/v1/groups/{group['id']}", headers=admin_headers)
    assert fetched.json()["name"] == "Field staff"


def test_create_duplicate_group(client, admin_headers, make_group) -> None:
    make_group(name="Field staff")
    response = client.post("/api/v1/groups/", json={"name": "Field staff"}, headers=admin_headers)
    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["detail"] == "Group name already exists"


def test_non_admin_cannot_manage_groups(client, alice_headers, make_group) -> None:
    group = make_group()
    assert client.post("/api/v1/groups/", json={"name": "Mine"}, headers=alice_headers).status_code == 403
    assert client.delete(f"/api/v1/groups/{group.id}", headers=alice_headers).status_code == 403


def test_add_single_member(client, admin_headers, alice, make_group) -> None:
    group = make_group()
    response = client.post(
        f"/api/v1/groups/{group.id}/members",
        json={"userId": alice.id},
        headers=admin_headers,
    )
    assert response.status_code == status.HTTP_201_CREATED
    rows = response.json()
    assert [row["user_id"] for row in rows] == [alice.id]
    assert rows[0]["user"]["email"] == alice.email


def test_add_members_batch_and_conflict(client, admin_headers, alice, bob, make_group) -> None:
    group = make_group(members=(alice,))

    response = client.post(
        f"/api/v1/groups/{group.id}/members",
        json={"userIds": [bob.id, alice.id]},
        headers=admin_headers,
    )
    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["detail"] == "User already in group"

    detail = client.get(f"/api/v1/groups/{group.id}", headers=admin_headers).json()
    assert [member["user_id"] for member in detail["members"]] == [alice.id]


def test_add_members_requires_ids(client, admin_headers, make_group) -> None:
    group = make_group()
    response = client.post(f"/api/v1/groups/{group.id}/members", json={}, headers=admin_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "userIds is required"


def test_removing_member_revokes_group_posts(
    client, admin_headers, alice, alice_headers, make_group, make_post
) -> None:
    group = make_group(members=(alice,))
    post = make_post(visibility=PostVisibility.GROUP, group=group)
    assert client.get(f"/api/v1/posts/{post.id}", headers=alice_headers).status_code == 200

    response = client.delete(
        f"/api/v1/groups/{group.id}/members/{alice.id}",
        headers=admin_headers,
    )
    assert response.status_code == status.HTTP_204_NO_CONTENT

    assert client.get(f"/api/v1/posts/{post.id}", headers=alice_headers).status_code == 403
    listing = client.get("/api/v1/posts/", headers=alice_headers).json()
    assert post.id not in [item["id"] for item in listing["items"]]


def test_member_views(client, alice, alice_headers, bob_headers, admin_headers, make_group) -> None:
    group = make_group(name="Crew", members=(alice,))
    make_group(name="Others")

    assert [g["id"] for g in client.get("/api/v1/groups/", headers=alice_headers).json()] == [group.id]
    assert client.get(f"/api/v1/groups/{group.id}", headers=alice_headers).status_code == 200

    forbidden = client.get(f"/api/v1/groups/{group.id}", headers=bob_headers)
    assert forbidden.status_code == status.HTTP_403_FORBIDDEN
    assert forbidden.json()["detail"] == "You are not a member of this group"

    mine = client.get("/api/v1/groups/mine", headers=alice_headers).json()
    assert mine == [
        {
            "id": group.id,
            "name": "Crew",
            "description": None,
            "members_count": 1,
            "created_at": mine[0]["created_at"],
            "updated_at": mine[0]["updated_at"],
        }
    ]
    of_user = client.get(f"/api/v1/groups/members/{alice.id}", headers=admin_headers).json()
    assert [g["name"] for g in of_user] == ["Crew"]


def test_update_and_delete_group(client, admin_headers, make_group, make_post) -> None:
    group = make_group(name="Temp")
    post = make_post(visibility=PostVisibility.GROUP, group=group)

    updated = client.patch(
        f"/api/v1/groups/{group.id}",
        json={"description": "Short lived"},
        headers=admin_headers,
    )
    assert updated.json()["description"] == "Short lived"

    assert client.delete(f"/api/v1/groups/{group.id}", headers=admin_headers).status_code == 204
    assert client.get(f"/api/v1/groups/{group.id}", headers=admin_headers).status_code == 404
    assert client.get(f"/api/v1/posts/{post.id}", headers=admin_headers).status_code == 404
