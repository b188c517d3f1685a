"""SQLAlchemy models for posts and the audience they are scoped to."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, DateTime, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from content_portal.db.session import Base
from content_portal.db.time import utcnow
from content_portal.models.ids import UUID_LENGTH, new_id

if TYPE_CHECKING:
    from content_portal.models.group import Group
    from content_portal.models.media import MediaFile
    from content_portal.models.user import User


class PostVisibility(enum.StrEnum):
    """Persisted visibility tag of a post."""

    PUBLIC = "PUBLIC"
    USER = "USER"
    GROUP = "GROUP"


@dataclass(frozen=True)
class PublicAudience:
    """Everyone may see the post."""

    visibility = PostVisibility.PUBLIC


@dataclass(frozen=True)
class UserAudience:
    """Only ``owner_user_id`` may see the post."""

    owner_user_id: str
    visibility = PostVisibility.USER

    def __post_init__(self) -> None:
        if not self.owner_user_id:
            raise ValueError("UserAudience requires an owner_user_id")


@dataclass(frozen=True)
class GroupAudience:
    """Only members of ``group_id`` may see the post."""

    group_id: str
    visibility = PostVisibility.GROUP

    def __post_init__(self) -> None:
        if not self.group_id:
            raise ValueError("GroupAudience requires a group_id")


Audience = PublicAudience | UserAudience | GroupAudience


class Post(Base):
    """Content entry shown to the audience selected by ``visibility``.

    The audience is persisted as three columns (``visibility``,
    ``owner_user_id``, ``group_id``). The CHECK constraint keeps exactly one
    of them meaningful; write paths go through :meth:`apply_audience`.
    """

    __tablename__ = "posts"
    __table_args__ = (
        CheckConstraint(
            "(visibility = 'PUBLIC' AND owner_user_id IS NULL AND group_id IS NULL)"
            " OR (visibility = 'USER' AND owner_user_id IS NOT NULL AND group_id IS NULL)"
            " OR (visibility = 'GROUP' AND group_id IS NOT NULL AND owner_user_id IS NULL)",
            name="ck_posts_visibility_target",
        ),
    )

    id: Mapped[str] = mapped_column(String(UUID_LENGTH), primary_key=True, default=new_id)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    type: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str | None] = mapped_column(Text, nullable=True, index=True)
    visibility: Mapped[PostVisibility] = mapped_column(
        Enum(PostVisibility, native_enum=False, length=16),
        nullable=False,
        default=PostVisibility.PUBLIC,
    )
    owner_user_id: Mapped[str | None] = mapped_column(
        String(UUID_LENGTH),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    group_id: Mapped[str | None] = mapped_column(
        String(UUID_LENGTH),
        ForeignKey("groups.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    # Provenance only; never consulted for access decisions.
    created_by_id: Mapped[str | None] = mapped_column(
        String(UUID_LENGTH),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    tag_rows: Mapped[list[PostTag]] = relationship(
        "PostTag",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="PostTag.position",
        lazy="selectin",
    )
    owner_user: Mapped[User | None] = relationship(
        "User",
        foreign_keys=[owner_user_id],
        back_populates="targeted_posts",
    )
    group: Mapped[Group | None] = relationship("Group", back_populates="posts")
    created_by: Mapped[User | None] = relationship(
        "User",
        foreign_keys=[created_by_id],
        back_populates="posts_created",
    )
    media_files: Mapped[list[MediaFile]] = relationship(
        "MediaFile",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="MediaFile.created_at.desc()",
    )

    @property
    def tags(self) -> list[str]:
        """Tags in insertion order."""
        return [row.value for row in self.tag_rows]

    @tags.setter
    def tags(self, values: list[str]) -> None:
        unique = list(dict.fromkeys(values))
        self.tag_rows = [PostTag(position=index, value=value) for index, value in enumerate(unique)]

    def apply_audience(self, audience: Audience) -> None:
        """Write ``audience`` to the persisted columns, clearing the unused target."""
        self.visibility = audience.visibility
        self.owner_user_id = audience.owner_user_id if isinstance(audience, UserAudience) else None
        self.group_id = audience.group_id if isinstance(audience, GroupAudience) else None


class PostTag(Base):
    """One tag of a post; ``position`` keeps the caller's ordering."""

    __tablename__ = "post_tags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    post_id: Mapped[str] = mapped_column(
        String(UUID_LENGTH),
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    value: Mapped[str] = mapped_column(Text, nullable=False, index=True)

    post: Mapped[Post] = relationship("Post", back_populates="tag_rows")
