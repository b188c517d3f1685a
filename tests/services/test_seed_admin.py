# mypy: ignore-errors
"""Tests for the admin seeding script."""

from content_portal.core.security import verify_password
from content_portal.models import UserRole
from content_portal.scripts.seed_admin import seed_admin


def test_seed_admin_creates_account(db_session) -> None:
    user, created = seed_admin(db_session, "Root@Example.com", "s3cret!", "Root")

    assert created is True
    assert user.email == "root@example.com"
    assert user.role == UserRole.ADMIN
    assert verify_password(user.password_hash, "s3cret!")


def test_seed_admin_promotes_existing_account(db_session, alice) -> None:
    user, created = seed_admin(db_session, alice.email, "new-password", "Alice Admin")

    assert created is False
    assert user.id == alice.id
    assert user.role == UserRole.ADMIN
    assert user.name == "Alice Admin"
