"""Post-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from content_portal.models.post import PostVisibility
from content_portal.schemas.media import MediaResponse


class PostCreate(BaseModel):
    """Schema for creating a new post."""

    title: str = Field(..., min_length=3)
    description: str | None = Field(None, description="Rich text body")
    type: str | None = None
    category: str | None = None
    tags: list[str] = Field(default_factory=list)
    visibility: PostVisibility = PostVisibility.PUBLIC
    owner_user_id: str | None = Field(None, description="Target user for USER posts")
    group_id: str | None = Field(None, description="Target group for GROUP posts")


class PostUpdate(BaseModel):
    """Schema for partially updating a post.

    Omitted (or null) audience fields keep the post's current values.
    """

    title: str | None = Field(None, min_length=3)
    description: str | None = None
    type: str | None = None
    category: str | None = None
    tags: list[str] | None = None
    visibility: PostVisibility | None = None
    owner_user_id: str | None = None
    group_id: str | None = None


class PostFilters(BaseModel):
    """Optional exact-match filters for post listings."""

    visibility: PostVisibility | None = None
    category: str | None = None
    type: str | None = None
    tags: list[str] | None = Field(None, description="Match posts sharing any of these tags")


class PostResponse(BaseModel):
    """Schema for post information returned by the API."""

    id: str
    title: str
    description: str | None
    type: str | None
    category: str | None
    tags: list[str]
    visibility: PostVisibility
    owner_user_id: str | None
    group_id: str | None
    created_by_id: str | None
    created_at: datetime
    updated_at: datetime
    media_files: list[MediaResponse] = []

    model_config = ConfigDict(from_attributes=True)


class PostPage(BaseModel):
    """One page of a post listing."""

    items: list[PostResponse]
    total: int
    page: int
    limit: int
