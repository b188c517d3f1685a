"""Business logic services for the content portal."""

from .admin_service import AdminUserService
from .group_service import GroupService
from .media_service import MediaService
from .membership import MembershipIndex
from .post_query import PostQueryPlanner
from .post_service import PostService
from .targets import VisibilityTargetValidator
from .user_service import UserService
from .visibility import Allow, Deny, VisibilityResolver

__all__ = [
    "AdminUserService",
    "GroupService",
    "MediaService",
    "MembershipIndex",
    "PostQueryPlanner",
    "PostService",
    "VisibilityTargetValidator",
    "UserService",
    "Allow",
    "Deny",
    "VisibilityResolver",
]
