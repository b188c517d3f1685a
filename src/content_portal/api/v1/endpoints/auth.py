"""Authentication endpoints for the portal API."""

from __future__ import annotations

from fastapi import APIRouter, status

from content_portal.api.v1.dependencies import CurrentUserDep, SessionDep
from content_portal.core.security import create_access_token
from content_portal.models import User
from content_portal.schemas.user import AuthResponse, LoginRequest, UserCreate, UserProfile
from content_portal.services.user_service import UserService

router = APIRouter(prefix="/auth", tags=["authentication"])


def _issue_token(user: User) -> AuthResponse:
    token = create_access_token(user.id, {"email": user.email, "role": user.role.value})
    return AuthResponse(access_token=token, user=UserProfile.model_validate(user))


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(payload: UserCreate, db: SessionDep) -> AuthResponse:
    """Create an account and return an access token for it."""
    user = UserService(db).register(payload)
    return _issue_token(user)


@router.post("/login", response_model=AuthResponse)
async def login(payload: LoginRequest, db: SessionDep) -> AuthResponse:
    """Exchange email and password for an access token."""
    user = UserService(db).authenticate(payload.email, payload.password)
    return _issue_token(user)


@router.get("/profile", response_model=UserProfile)
async def profile(current_user: CurrentUserDep) -> UserProfile:
    """Return the authenticated user's profile."""
    return UserProfile.model_validate(current_user)
