"""SQLAlchemy models for the content portal."""

from .group import Group, GroupMember
from .media import MediaFile
from .post import (
    Audience,
    GroupAudience,
    Post,
    PostTag,
    PostVisibility,
    PublicAudience,
    UserAudience,
)
from .user import User, UserRole

__all__ = [
    "Audience", "GroupAudience", "PublicAudience", "UserAudience",
    "Group", "GroupMember",
    "MediaFile",
    "Post", "PostTag", "PostVisibility",
    "User", "UserRole",
]
