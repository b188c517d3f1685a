"""Media files attached to posts."""
from __future__ import annotations

import logging
from pathlib import Path

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from content_portal.core.errors import BadRequestError, NotFoundError
from content_portal.core.settings import settings
from content_portal.models import MediaFile
from content_portal.services.post_service import PostService
from content_portal.services.uploads import discard_files, stored_name
from content_portal.services.visibility import Actor

logger = logging.getLogger(__name__)

__all__ = ["MediaService"]


class MediaService:
    """Stores uploads and serves them through the parent post's access check."""

    def __init__(self, db: Session, upload_dir: str | Path | None = None) -> None:
        self.db = db
        self.posts = PostService(db)
        self.upload_dir = Path(upload_dir or settings.upload_dir)

    def upload(
        self,
        *,
        post_id: str,
        title: str,
        filename: str | None,
        content_type: str | None,
        content: bytes,
        actor: Actor,
        description: str | None = None,
        category: str | None = None,
        tags: list[str] | None = None,
    ) -> MediaFile:
        """Write ``content`` to the upload directory and attach it to a post.

        Raises:
            BadRequestError: If no file was sent.
            NotFoundError: If the post does not exist.
            ForbiddenError: If ``actor`` cannot view the post.
        """
        if not filename:
            raise BadRequestError("File is required")
        post = self.posts.get_post(post_id, actor)

        self.upload_dir.mkdir(parents=True, exist_ok=True)
        target = self.upload_dir / stored_name(filename)

        media = MediaFile(
            post_id=post.id,
            title=title,
            description=description,
            category=category,
            tags=tags or [],
            url=target.as_posix(),
            mime_type=content_type or "application/octet-stream",
            size=len(content),
        )
        self.db.add(media)
        # A stored file exists only for a committed row.
        try:
            self.db.flush()
            target.write_bytes(content)
            self.db.commit()
        except Exception:
            self.db.rollback()
            discard_files([target.as_posix()])
            raise
        self.db.refresh(media)
        logger.info("Stored media %s (%d bytes) for post %s", media.id, media.size, post.id)
        return media

    def get_media(self, media_id: str, actor: Actor) -> MediaFile:
        """Return a media file if ``actor`` may view its parent post."""
        media = self.db.scalars(
            select(MediaFile).where(MediaFile.id == media_id).options(selectinload(MediaFile.post))
        ).first()
        if media is None:
            raise NotFoundError("Media not found")
        self.posts.resolver.ensure_can_view(media.post, actor)
        return media

    def list_for_post(self, post_id: str, actor: Actor) -> list[MediaFile]:
        """Return the media of a post, newest first."""
        return self.posts.get_post_media(post_id, actor)

    def delete_media(self, media_id: str) -> None:
        """Delete the media record and its stored file."""
        media = self.db.get(MediaFile, media_id)
        if media is None:
            raise NotFoundError("Media not found")
        url = media.url
        self.db.delete(media)
        self.db.commit()
        discard_files([url])
