# mypy: ignore-errors
"""Tests for audience target validation."""

import pytest

from content_portal.core.errors import BadRequestError, NotFoundError
from content_portal.models import GroupAudience, PostVisibility, PublicAudience, UserAudience
from content_portal.services.targets import VisibilityTargetValidator


@pytest.fixture()
def validator(db_session):
    return VisibilityTargetValidator(db_session)


def test_public_drops_both_targets(validator, alice, make_group) -> None:
    group = make_group()
    audience = validator.resolve_targets(PostVisibility.PUBLIC, alice.id, group.id)
    assert audience == PublicAudience()


def test_user_audience_keeps_only_owner(validator, alice, make_group) -> None:
    group = make_group()
    audience = validator.resolve_targets(PostVisibility.USER, alice.id, group.id)
    assert audience == UserAudience(owner_user_id=alice.id)


def test_group_audience_keeps_only_group(validator, alice, make_group) -> None:
    group = make_group()
    audience = validator.resolve_targets(PostVisibility.GROUP, alice.id, group.id)
    assert audience == GroupAudience(group_id=group.id)


def test_group_requires_group_id(validator) -> None:
    with pytest.raises(BadRequestError) as excinfo:
        validator.resolve_targets(PostVisibility.GROUP)
    assert excinfo.value.detail == "groupId is required for GROUP posts"


def test_group_must_exist(validator) -> None:
    with pytest.raises(NotFoundError) as excinfo:
        validator.resolve_targets(PostVisibility.GROUP, group_id="no-such-group")
    assert excinfo.value.detail == "Group not found"


def test_user_requires_owner(validator) -> None:
    with pytest.raises(BadRequestError) as excinfo:
        validator.resolve_targets(PostVisibility.USER)
    assert excinfo.value.detail == "ownerUserId is required for USER posts"


def test_owner_must_exist(validator) -> None:
    with pytest.raises(NotFoundError) as excinfo:
        validator.resolve_targets(PostVisibility.USER, owner_user_id="no-such-user")
    assert excinfo.value.detail == "Owner user not found"


def test_audience_values_reject_empty_targets() -> None:
    with pytest.raises(ValueError):
        UserAudience(owner_user_id="")
    with pytest.raises(ValueError):
        GroupAudience(group_id="")
