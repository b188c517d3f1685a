"""Group management and group-scoped reads."""
from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from content_portal.core.errors import ConflictError, ForbiddenError, NotFoundError
from content_portal.models import Group, GroupMember, Post, UserRole
from content_portal.schemas.group import GroupCreate, GroupSummary, GroupUpdate
from content_portal.services.membership import MembershipIndex
from content_portal.services.uploads import discard_files, media_urls
from content_portal.services.visibility import Actor

logger = logging.getLogger(__name__)

__all__ = ["GroupService"]


class GroupService:
    """CRUD for groups plus membership management."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.memberships = MembershipIndex(db)

    def create_group(self, data: GroupCreate) -> Group:
        """Create a group with a unique name."""
        if self._find_by_name(data.name) is not None:
            raise ConflictError("Group name already exists")
        group = Group(name=data.name, description=data.description)
        self.db.add(group)
        self.db.commit()
        self.db.refresh(group)
        logger.info("Created group %s (%s)", group.id, group.name)
        return group

    def update_group(self, group_id: str, data: GroupUpdate) -> Group:
        """Rename and/or re-describe a group."""
        group = self._get_or_404(group_id)
        if data.name and data.name != group.name:
            existing = self._find_by_name(data.name)
            if existing is not None and existing.id != group_id:
                raise ConflictError("Group name already exists")

        for key, value in data.model_dump(exclude_unset=True).items():
            if key == "name" and not value:
                continue
            setattr(group, key, value)
        self.db.commit()
        self.db.refresh(group)
        return group

    def delete_group(self, group_id: str) -> None:
        """Delete a group, its memberships and every post scoped to it."""
        group = self._get_or_404(group_id)
        urls = media_urls(self.db, Post.group_id == group_id)
        self.db.delete(group)
        self.db.commit()
        discard_files(urls)
        logger.info("Deleted group %s", group_id)

    def add_group_member(
        self,
        group_id: str,
        user_ids: Sequence[str],
        actor: Actor | None = None,
    ) -> list[GroupMember]:
        """Add one or more users to a group; the whole batch succeeds or fails."""
        memberships = self.memberships.add_members(group_id, user_ids)
        if actor is not None:
            logger.info("Actor %s added %s to group %s", actor.id, list(user_ids), group_id)
        return memberships

    def remove_group_member(self, group_id: str, user_id: str) -> None:
        """Remove ``user_id`` from the group."""
        self.memberships.remove_member(group_id, user_id)

    def get_group_for_user(self, group_id: str, actor: Actor) -> Group:
        """Return a group with its members; non-admins must belong to it."""
        group = self.db.scalars(
            select(Group)
            .where(Group.id == group_id)
            .options(selectinload(Group.members).selectinload(GroupMember.user))
        ).first()
        if group is None:
            raise NotFoundError("Group not found")
        if actor.role != UserRole.ADMIN and not self.memberships.is_member(group_id, actor.id):
            raise ForbiddenError("You are not a member of this group")
        return group

    def list_groups_for_user(self, actor: Actor) -> list[Group]:
        """Return every group for admins, otherwise the groups the actor belongs to."""
        stmt = (
            select(Group)
            .options(selectinload(Group.members).selectinload(GroupMember.user))
            .order_by(Group.name.asc())
        )
        if actor.role != UserRole.ADMIN:
            stmt = stmt.where(MembershipIndex.exists_clause(Group.id, actor.id))
        return list(self.db.scalars(stmt))

    def list_groups_for_member(self, user_id: str) -> list[GroupSummary]:
        """Return the groups ``user_id`` belongs to, each with its member count."""
        member_count = (
            select(func.count(GroupMember.id))
            .where(GroupMember.group_id == Group.id)
            .correlate(Group)
            .scalar_subquery()
        )
        rows = self.db.execute(
            select(Group, member_count.label("members_count"))
            .where(MembershipIndex.exists_clause(Group.id, user_id))
            .order_by(Group.name.asc())
        ).all()
        return [
            GroupSummary(
                id=group.id,
                name=group.name,
                description=group.description,
                members_count=count,
                created_at=group.created_at,
                updated_at=group.updated_at,
            )
            for group, count in rows
        ]

    def _find_by_name(self, name: str) -> Group | None:
        return self.db.scalars(select(Group).where(Group.name == name)).first()

    def _get_or_404(self, group_id: str) -> Group:
        group = self.db.get(Group, group_id)
        if group is None:
            raise NotFoundError("Group not found")
        return group
