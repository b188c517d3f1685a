"""SQLAlchemy models for groups and their membership links."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from content_portal.db.session import Base
from content_portal.db.time import utcnow
from content_portal.models.ids import UUID_LENGTH, new_id

if TYPE_CHECKING:
    from content_portal.models.post import Post
    from content_portal.models.user import User


class Group(Base):
    """Named audience that GROUP posts are scoped to."""

    __tablename__ = "groups"

    id: Mapped[str] = mapped_column(String(UUID_LENGTH), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    members: Mapped[list[GroupMember]] = relationship(
        "GroupMember",
        back_populates="group",
        cascade="all, delete-orphan",
    )
    posts: Mapped[list[Post]] = relationship(
        "Post",
        back_populates="group",
        cascade="all, delete-orphan",
    )


class GroupMember(Base):
    """Join row recording that a user belongs to a group.

    The unique constraint is what settles two concurrent adds of the same
    pair; the losing writer gets an ``IntegrityError`` on flush.
    """

    __tablename__ = "group_members"
    __table_args__ = (
        UniqueConstraint("group_id", "user_id", name="uq_group_members_group_user"),
    )

    id: Mapped[str] = mapped_column(String(UUID_LENGTH), primary_key=True, default=new_id)
    group_id: Mapped[str] = mapped_column(
        String(UUID_LENGTH),
        ForeignKey("groups.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[str] = mapped_column(
        String(UUID_LENGTH),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    group: Mapped[Group] = relationship("Group", back_populates="members")
    user: Mapped[User] = relationship("User", back_populates="memberships")
