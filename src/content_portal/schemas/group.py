"""Group-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from content_portal.schemas.user import UserProfile


class GroupCreate(BaseModel):
    """Schema for creating a new group."""

    name: str = Field(..., min_length=2, max_length=100)
    description: str | None = Field(None, max_length=500)


class GroupUpdate(BaseModel):
    """Schema for partially updating a group."""

    name: str | None = Field(None, min_length=2, max_length=100)
    description: str | None = Field(None, max_length=500)


class GroupMemberAdd(BaseModel):
    """Add one member (``user_id``) or several (``user_ids``) to a group."""

    user_id: str | None = Field(None, alias="userId")
    user_ids: list[str] | None = Field(None, alias="userIds")

    model_config = ConfigDict(populate_by_name=True)

    def requested_ids(self) -> list[str]:
        """Return the requested ids, preferring the batch form, without duplicates."""
        if self.user_ids:
            ids = self.user_ids
        elif self.user_id:
            ids = [self.user_id]
        else:
            ids = []
        return list(dict.fromkeys(ids))


class GroupMemberResponse(BaseModel):
    """Membership link as returned by the API."""

    id: str
    group_id: str
    user_id: str
    created_at: datetime
    user: UserProfile | None = None

    model_config = ConfigDict(from_attributes=True)


class GroupResponse(BaseModel):
    """Schema for group information returned by the API."""

    id: str
    name: str
    description: str | None
    created_at: datetime
    updated_at: datetime
    members: list[GroupMemberResponse] = []

    model_config = ConfigDict(from_attributes=True)


class GroupSummary(BaseModel):
    """Group with a member count instead of the member list."""

    id: str
    name: str
    description: str | None
    members_count: int
    created_at: datetime
    updated_at: datetime
