"""Media-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class MediaResponse(BaseModel):
    """Schema for an uploaded media file."""

    id: str
    post_id: str
    title: str
    description: str | None
    category: str | None
    tags: list[str]
    url: str
    mime_type: str
    size: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
