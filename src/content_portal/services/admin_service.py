"""Administrative operations on user accounts."""
from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime, timedelta
from typing import Any

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.orm import Session

from content_portal.core import security
from content_portal.core.errors import BadRequestError, NotFoundError
from content_portal.db.time import as_utc, utcnow
from content_portal.models import Post, User
from content_portal.schemas.user import AdminUserResponse, BlockUserRequest
from content_portal.services.uploads import discard_files, media_urls

logger = logging.getLogger(__name__)

__all__ = ["AdminUserService", "parse_block_request", "to_admin_view"]


def parse_block_request(payload: Mapping[str, Any]) -> BlockUserRequest:
    """Validate a block request body, reporting bad values as a 400.

    Raises:
        BadRequestError: If ``blockedUntil`` is not a date or
            ``durationMinutes`` is not a positive integer.
    """
    try:
        return BlockUserRequest.model_validate(payload)
    except ValidationError as err:
        fields = {str(error["loc"][0]) for error in err.errors() if error["loc"]}
        if fields & {"blockedUntil", "blocked_until"}:
            raise BadRequestError("blockedUntil must be a valid date") from err
        raise BadRequestError("durationMinutes must be a positive integer") from err


def to_admin_view(user: User) -> AdminUserResponse:
    """Convert a User ORM instance to the admin schema."""
    return AdminUserResponse(
        id=user.id,
        email=user.email,
        name=user.name,
        role=user.role,
        blocked_until=user.blocked_until,
        is_blocked=user.is_blocked(),
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


class AdminUserService:
    """List, remove, re-password and block accounts."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def list_users(self) -> list[AdminUserResponse]:
        """Return every account, newest first."""
        users = self.db.scalars(select(User).order_by(User.created_at.desc()))
        return [to_admin_view(user) for user in users]

    def remove_user(self, user_id: str, actor_id: str) -> None:
        """Delete an account with its memberships and the posts scoped to it."""
        if user_id == actor_id:
            raise BadRequestError("Cannot delete the current user")
        user = self._get_or_404(user_id)
        urls = media_urls(self.db, Post.owner_user_id == user_id)
        self.db.delete(user)
        self.db.commit()
        discard_files(urls)
        logger.info("Admin %s removed user %s", actor_id, user_id)

    def update_password(self, user_id: str, password: str) -> AdminUserResponse:
        """Replace the password of ``user_id``."""
        user = self._get_or_404(user_id)
        user.password_hash = security.hash_password(password)
        self.db.commit()
        self.db.refresh(user)
        return to_admin_view(user)

    def block_user(
        self,
        user_id: str,
        request: BlockUserRequest,
        actor_id: str,
    ) -> AdminUserResponse:
        """Block ``user_id`` until a date or for a number of minutes."""
        if user_id == actor_id:
            raise BadRequestError("Cannot block the current user")
        user = self._get_or_404(user_id)
        user.blocked_until = self._resolve_blocked_until(request)
        self.db.commit()
        self.db.refresh(user)
        logger.info("Admin %s blocked user %s until %s", actor_id, user_id, user.blocked_until)
        return to_admin_view(user)

    @staticmethod
    def _resolve_blocked_until(request: BlockUserRequest) -> datetime:
        if request.blocked_until is not None:
            return as_utc(request.blocked_until)
        if request.duration_minutes is not None:
            return utcnow() + timedelta(minutes=request.duration_minutes)
        raise BadRequestError("Either blockedUntil or durationMinutes is required")

    def _get_or_404(self, user_id: str) -> User:
        user = self.db.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user
