"""User, authentication and admin Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from content_portal.models.user import UserRole

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class UserCreate(BaseModel):
    """Schema for registering a new account."""

    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=320)
    password: str = Field(..., min_length=6)
    name: str | None = None


class LoginRequest(BaseModel):
    """Credentials submitted to the login endpoint."""

    email: str
    password: str


class UserProfile(BaseModel):
    """Public view of an account."""

    id: str
    email: str
    name: str | None
    role: UserRole

    model_config = ConfigDict(from_attributes=True)


class AuthResponse(BaseModel):
    """Token issued after registration or login."""

    access_token: str
    token_type: str = "bearer"
    user: UserProfile


class AdminUserResponse(UserProfile):
    """Account view used by the admin user management screens."""

    blocked_until: datetime | None
    is_blocked: bool
    created_at: datetime
    updated_at: datetime


class UpdatePasswordRequest(BaseModel):
    """Schema for an admin resetting a user's password."""

    password: str = Field(..., min_length=6)


class BlockUserRequest(BaseModel):
    """Temporary block request; one of the two fields is required."""

    blocked_until: datetime | None = Field(
        None,
        alias="blockedUntil",
        description="Block the user until this instant.",
    )
    duration_minutes: int | None = Field(
        None,
        alias="durationMinutes",
        ge=1,
        description="Block duration in minutes.",
    )

    model_config = ConfigDict(populate_by_name=True)
