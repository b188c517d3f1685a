"""Group membership lookups and mutations."""
from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy import ColumnElement, exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from content_portal.core.errors import BadRequestError, ConflictError, NotFoundError
from content_portal.models import Group, GroupMember, User

logger = logging.getLogger(__name__)

__all__ = ["MembershipIndex"]


class MembershipIndex:
    """Answers "is this user in that group?" straight from storage.

    Nothing is cached, so a removal is visible to the very next check.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def is_member(self, group_id: str, user_id: str) -> bool:
        """Return True if a ``(group_id, user_id)`` membership row exists."""
        stmt = select(
            exists().where(
                GroupMember.group_id == group_id,
                GroupMember.user_id == user_id,
            )
        )
        return bool(self.db.scalar(stmt))

    @staticmethod
    def exists_clause(
        group_id_column: ColumnElement[str | None],
        user_id: str,
    ) -> ColumnElement[bool]:
        """Return the membership test as a correlated ``EXISTS`` for bulk queries."""
        return exists().where(
            GroupMember.group_id == group_id_column,
            GroupMember.user_id == user_id,
        )

    def add_members(self, group_id: str, user_ids: Sequence[str]) -> list[GroupMember]:
        """Add every user in ``user_ids`` to the group, or none of them.

        Args:
            group_id: Target group.
            user_ids: Users to add; duplicates are ignored.

        Returns:
            The created membership rows, in request order.

        Raises:
            NotFoundError: If the group or any of the users does not exist.
            BadRequestError: If no user id was supplied.
            ConflictError: If any user is already a member, including when a
                concurrent writer inserted the same pair first.
        """
        group = self.db.get(Group, group_id)
        if group is None:
            raise NotFoundError("Group not found")

        requested = list(dict.fromkeys(user_ids))
        if not requested:
            raise BadRequestError("userIds is required")

        found = set(self.db.scalars(select(User.id).where(User.id.in_(requested))))
        if len(found) != len(requested):
            raise NotFoundError("User not found")

        if self._existing_member_ids(group_id, requested):
            raise ConflictError("User already in group")

        memberships = [GroupMember(group_id=group_id, user_id=user_id) for user_id in requested]
        self.db.add_all(memberships)
        try:
            self.db.commit()
        except IntegrityError as err:
            self.db.rollback()
            raise ConflictError("User already in group") from err

        for membership in memberships:
            self.db.refresh(membership)
        logger.info("Added %d member(s) to group %s", len(memberships), group_id)
        return memberships

    def remove_member(self, group_id: str, user_id: str) -> None:
        """Delete the membership row for ``(group_id, user_id)``.

        Raises:
            NotFoundError: If the user is not a member of the group.
        """
        membership = self.db.scalars(
            select(GroupMember).where(
                GroupMember.group_id == group_id,
                GroupMember.user_id == user_id,
            )
        ).first()
        if membership is None:
            raise NotFoundError("Membership not found")
        self.db.delete(membership)
        self.db.commit()
        logger.info("Removed user %s from group %s", user_id, group_id)

    def _existing_member_ids(self, group_id: str, user_ids: Sequence[str]) -> list[str]:
        return list(
            self.db.scalars(
                select(GroupMember.user_id).where(
                    GroupMember.group_id == group_id,
                    GroupMember.user_id.in_(user_ids),
                )
            )
        )
