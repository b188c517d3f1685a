"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .group import (
    GroupCreate,
    GroupMemberAdd,
    GroupMemberResponse,
    GroupResponse,
    GroupSummary,
    GroupUpdate,
)
from .media import MediaResponse
from .post import PostCreate, PostFilters, PostPage, PostResponse, PostUpdate
from .user import (
    AdminUserResponse,
    AuthResponse,
    BlockUserRequest,
    LoginRequest,
    UpdatePasswordRequest,
    UserCreate,
    UserProfile,
)

__all__ = [
    "GroupCreate", "GroupMemberAdd", "GroupMemberResponse", "GroupResponse",
    "GroupSummary", "GroupUpdate",
    "MediaResponse",
    "PostCreate", "PostFilters", "PostPage", "PostResponse", "PostUpdate",
    "AdminUserResponse", "AuthResponse", "BlockUserRequest", "LoginRequest",
    "UpdatePasswordRequest", "UserCreate", "UserProfile",
]
