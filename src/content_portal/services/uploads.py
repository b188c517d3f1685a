"""Files kept under the upload directory."""
from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Iterable
from pathlib import Path

from sqlalchemy import ColumnElement, select
from sqlalchemy.orm import Session

from content_portal.models import MediaFile, Post

logger = logging.getLogger(__name__)

__all__ = ["stored_name", "media_urls", "discard_files"]


def stored_name(filename: str) -> str:
    """Return a collision-free file name that keeps ``filename``'s suffix."""
    return f"{int(time.time() * 1000)}-{uuid.uuid4()}{Path(filename).suffix}"


def media_urls(db: Session, *post_conditions: ColumnElement[bool]) -> list[str]:
    """Return the stored paths of media attached to posts matching ``post_conditions``."""
    stmt = select(MediaFile.url).join(Post, MediaFile.post_id == Post.id).where(*post_conditions)
    return list(db.scalars(stmt))


def discard_files(urls: Iterable[str]) -> None:
    """Remove stored files; files that are already gone are skipped."""
    for url in urls:
        try:
            Path(url).unlink(missing_ok=True)
        except OSError as err:
            logger.warning("Could not remove stored file %s: %s", url, err)
