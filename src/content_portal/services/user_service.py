"""Account registration and authentication."""
from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from content_portal.core import security
from content_portal.core.errors import ConflictError, ForbiddenError, UnauthorizedError
from content_portal.models import User, UserRole
from content_portal.schemas.user import UserCreate

logger = logging.getLogger(__name__)

__all__ = ["UserService"]


class UserService:
    """Creates accounts and checks credentials."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def find_by_email(self, email: str) -> User | None:
        """Return the user registered under ``email`` (case-insensitive)."""
        return self.db.scalars(select(User).where(User.email == email.lower())).first()

    def register(self, data: UserCreate) -> User:
        """Persist a new account with a hashed password.

        Raises:
            ConflictError: If the email is already registered.
        """
        if self.find_by_email(data.email) is not None:
            raise ConflictError("Email already registered")
        user = User(
            email=data.email.lower(),
            name=data.name,
            password_hash=security.hash_password(data.password),
            role=UserRole.CLIENT,
        )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        logger.info("Registered user %s with role %s", user.id, user.role)
        return user

    def authenticate(self, email: str, password: str) -> User:
        """Return the user owning these credentials.

        Raises:
            UnauthorizedError: If the email is unknown or the password is wrong.
            ForbiddenError: If the account is temporarily blocked.
        """
        user = self.find_by_email(email)
        if user is None:
            raise UnauthorizedError("Invalid credentials")
        if user.is_blocked():
            raise ForbiddenError("User is temporarily blocked")
        if not security.verify_password(user.password_hash, password):
            raise UnauthorizedError("Invalid credentials")
        return user
