"""API endpoint modules for version 1."""

from .admin_users import router as admin_users_router
from .auth import router as auth_router
from .groups import router as groups_router
from .media import router as media_router
from .posts import router as posts_router

__all__ = [
    "admin_users_router",
    "auth_router",
    "groups_router",
    "media_router",
    "posts_router",
]
