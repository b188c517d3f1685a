# mypy: ignore-errors
"""Tests for group management."""

import pytest
from sqlalchemy import func, select

from content_portal.core.errors import ConflictError, ForbiddenError, NotFoundError
from content_portal.models import GroupMember, Post, PostVisibility
from content_portal.schemas.group import GroupCreate, GroupUpdate
from content_portal.services.group_service import GroupService


@pytest.fixture()
def service(db_session):
    return GroupService(db_session)


def test_create_group_rejects_duplicate_name(service) -> None:
    service.create_group(GroupCreate(name="Sales"))
    with pytest.raises(ConflictError) as excinfo:
        service.create_group(GroupCreate(name="Sales"))
    assert excinfo.value.detail == "Group name already exists"


def test_update_group(service, make_group) -> None:
    group = make_group(name="Old name")
    updated = service.update_group(group.id, GroupUpdate(description="About us"))
    assert updated.name == "Old name"
    assert updated.description == "About us"

    make_group(name="Taken")
    with pytest.raises(ConflictError):
        service.update_group(group.id, GroupUpdate(name="Taken"))


def test_delete_group_cascades(service, db_session, alice, make_group, make_post) -> None:
    group = make_group(members=(alice,))
    make_post(visibility=PostVisibility.GROUP, group=group)
    survivor = make_post()

    service.delete_group(group.id)

    assert db_session.scalar(select(func.count(GroupMember.id))) == 0
    assert [post.id for post in db_session.scalars(select(Post))] == [survivor.id]
    with pytest.raises(NotFoundError):
        service.delete_group(group.id)


def test_get_group_requires_membership(service, admin, alice, bob, make_group) -> None:
    group = make_group(members=(alice,))

    assert [m.user_id for m in service.get_group_for_user(group.id, alice).members] == [alice.id]
    assert service.get_group_for_user(group.id, admin).id == group.id
    with pytest.raises(ForbiddenError) as excinfo:
        service.get_group_for_user(group.id, bob)
    assert excinfo.value.detail == "You are not a member of this group"
    with pytest.raises(NotFoundError):
        service.get_group_for_user("no-such-group", admin)


def test_list_groups_for_user(service, admin, alice, make_group) -> None:
    mine = make_group(name="A team", members=(alice,))
    make_group(name="B team")

    assert [group.id for group in service.list_groups_for_user(alice)] == [mine.id]
    assert [group.name for group in service.list_groups_for_user(admin)] == ["A team", "B team"]


def test_list_groups_for_member_counts_members(service, alice, bob, make_group) -> None:
    make_group(name="Pair", members=(alice, bob))
    make_group(name="Solo", members=(alice,))
    make_group(name="Other", members=(bob,))

    summaries = service.list_groups_for_member(alice.id)

    assert [(s.name, s.members_count) for s in summaries] == [("Pair", 2), ("Solo", 1)]


def test_add_and_remove_group_member(service, admin, alice, make_group) -> None:
    group = make_group()

    rows = service.add_group_member(group.id, [alice.id], admin)
    assert [row.user_id for row in rows] == [alice.id]

    service.remove_group_member(group.id, alice.id)
    assert service.memberships.is_member(group.id, alice.id) is False
