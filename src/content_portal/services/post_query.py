"""Bulk, access-filtered post retrieval."""
from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import ColumnElement, func, select
from sqlalchemy.orm import Session, selectinload

from content_portal.core.settings import settings
from content_portal.models import Post, PostTag
from content_portal.schemas.post import PostFilters
from content_portal.services.visibility import CATEGORY_VISIBILITIES, Actor, VisibilityResolver

__all__ = ["PostQueryPlanner", "PostListing", "clamp_page", "clamp_limit"]


@dataclass
class PostListing:
    """One page of posts plus the total number of matching rows."""

    items: list[Post]
    total: int
    page: int
    limit: int


def clamp_page(page: int | None) -> int:
    """Return a 1-indexed page number."""
    return max(1, page or 1)


def clamp_limit(limit: int | None) -> int:
    """Clamp ``limit`` to ``[1, POSTS_MAX_PAGE_SIZE]``; ``None`` means the default size."""
    if limit is None:
        limit = settings.posts_default_page_size
    return min(max(1, limit), settings.posts_max_page_size)


class PostQueryPlanner:
    """Translates filters plus the visibility rules into one SQL query.

    For a non-admin actor a post is listed exactly when
    :meth:`VisibilityResolver.can_view` would allow it, because both use the
    same per-kind rules.
    """

    def __init__(self, db: Session, resolver: VisibilityResolver) -> None:
        self.db = db
        self.resolver = resolver

    def list_posts(
        self,
        filters: PostFilters,
        actor: Actor,
        page: int | None = 1,
        limit: int | None = None,
    ) -> PostListing:
        """Return the page of posts ``actor`` may see that match ``filters``.

        Ordered newest first, ties broken by id.
        """
        page = clamp_page(page)
        limit = clamp_limit(limit)
        conditions = self._filter_conditions(filters)
        access = self.resolver.visibility_clause(actor)
        if access is not None:
            conditions.append(access)

        total = self.db.scalar(select(func.count()).select_from(Post).where(*conditions)) or 0
        stmt = (
            select(Post)
            .where(*conditions)
            .options(selectinload(Post.media_files))
            .order_by(Post.created_at.desc(), Post.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        items = list(self.db.scalars(stmt))
        return PostListing(items=items, total=total, page=page, limit=limit)

    def list_categories(self, actor: Actor) -> list[str]:
        """Return the distinct, non-empty categories ``actor`` may see, sorted."""
        stmt = (
            select(Post.category)
            .distinct()
            .where(Post.category.is_not(None), Post.category != "")
            .order_by(Post.category.asc())
        )
        access = self.resolver.visibility_clause(actor, kinds=CATEGORY_VISIBILITIES)
        if access is not None:
            stmt = stmt.where(access)
        return [category for category in self.db.scalars(stmt) if category]

    @staticmethod
    def _filter_conditions(filters: PostFilters) -> list[ColumnElement[bool]]:
        conditions: list[ColumnElement[bool]] = []
        if filters.visibility:
            conditions.append(Post.visibility == filters.visibility)
        if filters.category:
            conditions.append(Post.category == filters.category)
        if filters.type:
            conditions.append(Post.type == filters.type)
        if filters.tags:
            # Overlap: any shared tag is enough.
            conditions.append(Post.tag_rows.any(PostTag.value.in_(filters.tags)))
        return conditions
