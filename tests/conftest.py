# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from datetime import datetime, timedelta
from itertools import count
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from content_portal.core.security import create_access_token, hash_password
from content_portal.db.session import Base
from content_portal.db.session import get_db as app_get_session
from content_portal.db.time import utcnow
from content_portal.main import app as fastapi_app
from content_portal.models import Group, GroupMember, Post, PostVisibility, User, UserRole

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "secret123"

_EMAIL_COUNTER = count(1)
_GROUP_COUNTER = count(1)
# Hashing is slow; every fixture user shares one hash.
_PASSWORD_HASH = hash_password(TEST_PASSWORD)


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


def auth_headers(user: User) -> dict[str, str]:
    """Return bearer headers for ``user``."""
    token = create_access_token(user.id, {"email": user.email, "role": user.role.value})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Factory persisting users with the shared test password."""

    def _make_user(
        email: str | None = None,
        role: UserRole = UserRole.CLIENT,
        name: str | None = None,
        blocked_until: datetime | None = None,
    ) -> User:
        user = User(
            email=email or f"user{next(_EMAIL_COUNTER)}@example.com",
            name=name,
            password_hash=_PASSWORD_HASH,
            role=role,
            blocked_until=blocked_until,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture()
def admin(make_user: Callable[..., User]) -> User:
    return make_user(email="admin@example.com", role=UserRole.ADMIN, name="Admin")


@pytest.fixture()
def alice(make_user: Callable[..., User]) -> User:
    return make_user(email="alice@example.com", name="Alice")


@pytest.fixture()
def bob(make_user: Callable[..., User]) -> User:
    return make_user(email="bob@example.com", role=UserRole.EMPLOYEE, name="Bob")


@pytest.fixture()
def admin_headers(admin: User) -> dict[str, str]:
    return auth_headers(admin)


@pytest.fixture()
def alice_headers(alice: User) -> dict[str, str]:
    return auth_headers(alice)


@pytest.fixture()
def bob_headers(bob: User) -> dict[str, str]:
    return auth_headers(bob)


@pytest.fixture()
def make_group(db_session: Session) -> Callable[..., Group]:
    """Factory persisting a group, optionally with members."""

    def _make_group(name: str | None = None, members: tuple[User, ...] = ()) -> Group:
        group = Group(name=name or f"Group {next(_GROUP_COUNTER)}")
        group.members = [GroupMember(user_id=member.id) for member in members]
        db_session.add(group)
        db_session.commit()
        db_session.refresh(group)
        return group

    return _make_group


@pytest.fixture()
def make_post(db_session: Session) -> Callable[..., Post]:
    """Factory persisting a post; later calls are newer unless ``created_at`` is given."""
    base_time = utcnow() - timedelta(days=1)
    offsets = count(1)

    def _make_post(
        title: str = "Post",
        visibility: PostVisibility = PostVisibility.PUBLIC,
        owner: User | None = None,
        group: Group | None = None,
        created_at: datetime | None = None,
        tags: list[str] | None = None,
        **fields: Any,
    ) -> Post:
        post = Post(
            title=title,
            visibility=visibility,
            owner_user_id=owner.id if owner else None,
            group_id=group.id if group else None,
            created_at=created_at or base_time + timedelta(minutes=next(offsets)),
            **fields,
        )
        post.tags = tags or []
        db_session.add(post)
        db_session.commit()
        db_session.refresh(post)
        return post

    return _make_post
