"""Post operations exposed to the API layer."""
from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from content_portal.core.errors import NotFoundError
from content_portal.models import MediaFile, Post, PostVisibility
from content_portal.schemas.post import PostCreate, PostFilters, PostUpdate
from content_portal.services.membership import MembershipIndex
from content_portal.services.post_query import PostListing, PostQueryPlanner
from content_portal.services.targets import VisibilityTargetValidator
from content_portal.services.uploads import discard_files, media_urls
from content_portal.services.visibility import Actor, VisibilityResolver

logger = logging.getLogger(__name__)

__all__ = ["PostService"]

_CONTENT_FIELDS = ("title", "description", "type", "category", "tags")


class PostService:
    """Create, read, update and delete posts on behalf of an actor."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.memberships = MembershipIndex(db)
        self.resolver = VisibilityResolver(self.memberships)
        self.planner = PostQueryPlanner(db, self.resolver)
        self.targets = VisibilityTargetValidator(db)

    def list_posts(
        self,
        filters: PostFilters,
        actor: Actor,
        page: int | None = 1,
        limit: int | None = None,
    ) -> PostListing:
        """Return one page of the posts ``actor`` may see."""
        return self.planner.list_posts(filters, actor, page=page, limit=limit)

    def list_categories(self, actor: Actor) -> list[str]:
        """Return the categories shown in the listing filter for ``actor``."""
        return self.planner.list_categories(actor)

    def get_post(self, post_id: str, actor: Actor) -> Post:
        """Return a post after checking ``actor`` may view it.

        Raises:
            NotFoundError: If the post does not exist.
            ForbiddenError: If the post is not visible to ``actor``.
        """
        post = self.db.scalars(
            select(Post).where(Post.id == post_id).options(selectinload(Post.media_files))
        ).first()
        if post is None:
            raise NotFoundError("Post not found")
        self.resolver.ensure_can_view(post, actor)
        return post

    def get_post_media(self, post_id: str, actor: Actor) -> list[MediaFile]:
        """Return the media of a post the actor may view, newest first."""
        post = self.get_post(post_id, actor)
        return list(
            self.db.scalars(
                select(MediaFile)
                .where(MediaFile.post_id == post.id)
                .order_by(MediaFile.created_at.desc())
            )
        )

    def create_post(self, data: PostCreate, actor: Actor) -> Post:
        """Persist a new post scoped to a validated audience."""
        visibility = data.visibility or PostVisibility.PUBLIC
        audience = self.targets.resolve_targets(visibility, data.owner_user_id, data.group_id)

        post = Post(
            title=data.title,
            description=data.description,
            type=data.type,
            category=data.category,
            created_by_id=actor.id,
        )
        post.tags = data.tags
        post.apply_audience(audience)
        self.db.add(post)
        self.db.commit()
        self.db.refresh(post)
        logger.info("Created %s post %s", post.visibility, post.id)
        return post

    def update_post(self, post_id: str, data: PostUpdate) -> Post:
        """Apply a partial update; the audience is re-validated every time.

        Audience fields that are not supplied fall back to the stored values
        before validation, so switching to PUBLIC clears both targets.
        """
        post = self.db.get(Post, post_id)
        if post is None:
            raise NotFoundError("Post not found")

        visibility = data.visibility or post.visibility
        audience = self.targets.resolve_targets(
            visibility,
            data.owner_user_id or post.owner_user_id,
            data.group_id or post.group_id,
        )

        changes = data.model_dump(include=set(_CONTENT_FIELDS), exclude_unset=True)
        for key, value in changes.items():
            if key == "title" and value is None:
                continue
            if key == "tags":
                post.tags = value or []
                continue
            setattr(post, key, value)
        post.apply_audience(audience)

        self.db.commit()
        self.db.refresh(post)
        logger.info("Updated post %s (visibility=%s)", post.id, post.visibility)
        return post

    def delete_post(self, post_id: str) -> None:
        """Delete a post together with its media.

        Raises:
            NotFoundError: If the post does not exist.
        """
        post = self.db.get(Post, post_id)
        if post is None:
            raise NotFoundError("Post not found")
        urls = media_urls(self.db, Post.id == post_id)
        self.db.delete(post)
        self.db.commit()
        discard_files(urls)
        logger.info("Deleted post %s", post_id)
