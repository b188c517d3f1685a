"""Admin user management endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Response, status

from content_portal.api.v1.dependencies import AdminUserDep, SessionDep
from content_portal.schemas.user import AdminUserResponse, UpdatePasswordRequest
from content_portal.services.admin_service import AdminUserService, parse_block_request

router = APIRouter(prefix="/admin/users", tags=["admin"])


@router.get("/", response_model=list[AdminUserResponse])
async def list_users(db: SessionDep, _admin: AdminUserDep) -> list[AdminUserResponse]:
    """List every account, newest first."""
    return AdminUserService(db).list_users()


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def remove_user(user_id: str, db: SessionDep, admin: AdminUserDep) -> Response:
    """Delete an account."""
    AdminUserService(db).remove_user(user_id, admin.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{user_id}/password", response_model=AdminUserResponse)
async def update_password(
    user_id: str,
    payload: UpdatePasswordRequest,
    db: SessionDep,
    _admin: AdminUserDep,
) -> AdminUserResponse:
    """Reset an account's password."""
    return AdminUserService(db).update_password(user_id, payload.password)


@router.patch("/{user_id}/block", response_model=AdminUserResponse)
async def block_user(
    user_id: str,
    db: SessionDep,
    admin: AdminUserDep,
    payload: dict[str, Any] = Body(..., description="blockedUntil or durationMinutes"),
) -> AdminUserResponse:
    """Temporarily block an account."""
    request = parse_block_request(payload)
    return AdminUserService(db).block_user(user_id, request, admin.id)
