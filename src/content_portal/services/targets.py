"""Validation of the user or group a post is scoped to."""
from __future__ import annotations

from sqlalchemy.orm import Session

from content_portal.core.errors import BadRequestError, NotFoundError
from content_portal.models import (
    Audience,
    Group,
    GroupAudience,
    PostVisibility,
    PublicAudience,
    User,
    UserAudience,
)

__all__ = ["VisibilityTargetValidator"]


class VisibilityTargetValidator:
    """Turns a visibility kind plus optional targets into a checked :data:`Audience`."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def resolve_targets(
        self,
        visibility: PostVisibility,
        owner_user_id: str | None = None,
        group_id: str | None = None,
    ) -> Audience:
        """Return the audience for ``visibility`` after checking its target exists.

        The target that does not belong to ``visibility`` is dropped; PUBLIC
        drops both without complaint.

        Raises:
            BadRequestError: If USER has no owner or GROUP has no group.
            NotFoundError: If the referenced user or group does not exist.
        """
        if visibility == PostVisibility.USER:
            if not owner_user_id:
                raise BadRequestError("ownerUserId is required for USER posts")
            if self.db.get(User, owner_user_id) is None:
                raise NotFoundError("Owner user not found")
            return UserAudience(owner_user_id=owner_user_id)

        if visibility == PostVisibility.GROUP:
            if not group_id:
                raise BadRequestError("groupId is required for GROUP posts")
            if self.db.get(Group, group_id) is None:
                raise NotFoundError("Group not found")
            return GroupAudience(group_id=group_id)

        return PublicAudience()
