"""SQLAlchemy models for portal accounts."""

from __future__ import annotations

import enum
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Enum, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from content_portal.db.session import Base
from content_portal.db.time import as_utc, utcnow
from content_portal.models.ids import UUID_LENGTH, new_id

if TYPE_CHECKING:
    from content_portal.models.group import GroupMember
    from content_portal.models.post import Post


class UserRole(enum.StrEnum):
    """Account roles. Only ``ADMIN`` changes what a user may see."""

    ADMIN = "admin"
    CLIENT = "client"
    EMPLOYEE = "employee"


class User(Base):
    """Authenticated account; the actor every visibility decision is made for."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(UUID_LENGTH), primary_key=True, default=new_id)
    # Always stored lower-case so uniqueness is case-insensitive.
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False)
    name: Mapped[str | None] = mapped_column(Text, nullable=True)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    role: Mapped[UserRole] = mapped_column(
        Enum(
            UserRole,
            native_enum=False,
            length=16,
            values_callable=lambda roles: [role.value for role in roles],
        ),
        nullable=False,
        default=UserRole.CLIENT,
    )
    blocked_until: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    memberships: Mapped[list[GroupMember]] = relationship(
        "GroupMember",
        back_populates="user",
        cascade="all, delete-orphan",
    )
    # Posts scoped to this user disappear with the user.
    targeted_posts: Mapped[list[Post]] = relationship(
        "Post",
        foreign_keys="Post.owner_user_id",
        back_populates="owner_user",
        cascade="all, delete-orphan",
    )
    posts_created: Mapped[list[Post]] = relationship(
        "Post",
        foreign_keys="Post.created_by_id",
        back_populates="created_by",
    )

    def is_blocked(self, now: datetime | None = None) -> bool:
        """Return True while a temporary block is in effect."""
        if self.blocked_until is None:
            return False
        return as_utc(self.blocked_until) > (now or utcnow())
