"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from content_portal.core.security import decode_access_token
from content_portal.db.session import get_db
from content_portal.models import User, UserRole

# HTTP Bearer scheme for JWT authentication
bearer_scheme = HTTPBearer()

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
    db: SessionDep,
) -> User:
    """Get the current authenticated user from JWT token.

    Args:
        credentials: HTTP Bearer token credentials
        db: Database session

    Returns:
        User object for the authenticated user

    Raises:
        HTTPException: If the token is invalid, the user is gone or blocked
    """
    try:
        payload = decode_access_token(credentials.credentials)
    except JWTError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        ) from err

    user = db.get(User, payload["sub"])
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )
    if user.is_blocked():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User is temporarily blocked",
        )
    return user


# Type alias for current user dependency
CurrentUserDep = Annotated[User, Depends(get_current_user)]


def require_admin(current_user: CurrentUserDep) -> User:
    """Allow only administrators through."""
    if current_user.role != UserRole.ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin privileges required",
        )
    return current_user


AdminUserDep = Annotated[User, Depends(require_admin)]
