"""Create the first administrator, or promote an existing account to admin."""
from __future__ import annotations

import argparse
import sys

from sqlalchemy import select
from sqlalchemy.orm import Session

from content_portal.core import security
from content_portal.core.settings import settings
from content_portal.db.session import SessionLocal
from content_portal.models import User, UserRole


def seed_admin(db: Session, email: str, password: str, name: str) -> tuple[User, bool]:
    """Create or update the admin account for ``email``.

    Returns:
        The admin user and ``True`` if it was newly created.
    """
    normalized_email = email.lower()
    user = db.scalars(select(User).where(User.email == normalized_email)).first()
    created = user is None
    if user is None:
        user = User(email=normalized_email)
        db.add(user)
    user.name = name
    user.role = UserRole.ADMIN
    user.password_hash = security.hash_password(password)
    db.commit()
    db.refresh(user)
    return user, created


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Create or promote the portal administrator")
    parser.add_argument("--email", default=settings.admin_email, help="Admin email (ADMIN_EMAIL)")
    parser.add_argument(
        "--password",
        default=settings.admin_password,
        help="Admin password (ADMIN_PASSWORD)",
    )
    parser.add_argument("--name", default=settings.admin_name, help="Display name (ADMIN_NAME)")
    args = parser.parse_args(argv)

    db = SessionLocal()
    try:
        user, created = seed_admin(db, args.email, args.password, args.name)
    except Exception as exc:
        print(f"[seed_admin] ERROR: {exc}", file=sys.stderr)
        sys.exit(1)
    finally:
        db.close()

    action = "Created" if created else "Updated"
    print(f"[seed_admin] {action} admin user: {user.email}")


if __name__ == "__main__":
    main()
