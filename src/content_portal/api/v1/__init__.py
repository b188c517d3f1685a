"""Version 1 API endpoints."""

from .endpoints import (
    admin_users_router,
    auth_router,
    groups_router,
    media_router,
    posts_router,
)

__all__ = [
    "auth_router",
    "posts_router",
    "groups_router",
    "media_router",
    "admin_users_router",
]
