"""Group-related endpoints for the portal API."""

from __future__ import annotations

from fastapi import APIRouter, Response, status

from content_portal.api.v1.dependencies import AdminUserDep, CurrentUserDep, SessionDep
from content_portal.schemas.group import (
    GroupCreate,
    GroupMemberAdd,
    GroupMemberResponse,
    GroupResponse,
    GroupSummary,
    GroupUpdate,
)
from content_portal.services.group_service import GroupService

router = APIRouter(prefix="/groups", tags=["groups"])


@router.get("/", response_model=list[GroupResponse])
async def list_groups(db: SessionDep, current_user: CurrentUserDep) -> list[GroupResponse]:
    """List all groups for admins, or the caller's own groups."""
    groups = GroupService(db).list_groups_for_user(current_user)
    return [GroupResponse.model_validate(group) for group in groups]


@router.get("/mine", response_model=list[GroupSummary])
async def list_my_groups(db: SessionDep, current_user: CurrentUserDep) -> list[GroupSummary]:
    """List the caller's groups with member counts."""
    return GroupService(db).list_groups_for_member(current_user.id)


@router.get("/members/{user_id}", response_model=list[GroupSummary])
async def list_groups_of_user(
    user_id: str,
    db: SessionDep,
    _admin: AdminUserDep,
) -> list[GroupSummary]:
    """List the groups a given user belongs to (admin only)."""
    return GroupService(db).list_groups_for_member(user_id)


@router.get("/{group_id}", response_model=GroupResponse)
async def get_group(group_id: str, db: SessionDep, current_user: CurrentUserDep) -> GroupResponse:
    """Get a group with its members; non-admins must belong to it."""
    group = GroupService(db).get_group_for_user(group_id, current_user)
    return GroupResponse.model_validate(group)


@router.post("/", response_model=GroupResponse, status_code=status.HTTP_201_CREATED)
async def create_group(
    group_data: GroupCreate,
    db: SessionDep,
    _admin: AdminUserDep,
) -> GroupResponse:
    """Create a new group (admin only)."""
    group = GroupService(db).create_group(group_data)
    return GroupResponse.model_validate(group)


@router.patch("/{group_id}", response_model=GroupResponse)
async def update_group(
    group_id: str,
    group_data: GroupUpdate,
    db: SessionDep,
    _admin: AdminUserDep,
) -> GroupResponse:
    """Update a group (admin only)."""
    group = GroupService(db).update_group(group_id, group_data)
    return GroupResponse.model_validate(group)


@router.delete(
    "/{group_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_group(group_id: str, db: SessionDep, _admin: AdminUserDep) -> Response:
    """Delete a group, its memberships and its posts (admin only)."""
    GroupService(db).delete_group(group_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{group_id}/members",
    response_model=list[GroupMemberResponse],
    status_code=status.HTTP_201_CREATED,
)
async def add_group_members(
    group_id: str,
    payload: GroupMemberAdd,
    db: SessionDep,
    admin: AdminUserDep,
) -> list[GroupMemberResponse]:
    """Add one or several users to a group (admin only)."""
    memberships = GroupService(db).add_group_member(group_id, payload.requested_ids(), admin)
    return [GroupMemberResponse.model_validate(membership) for membership in memberships]


@router.delete(
    "/{group_id}/members/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def remove_group_member(
    group_id: str,
    user_id: str,
    db: SessionDep,
    _admin: AdminUserDep,
) -> Response:
    """Remove a user from a group (admin only)."""
    GroupService(db).remove_group_member(group_id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
