"""Media upload and retrieval endpoints."""

from __future__ import annotations

from fastapi import APIRouter, File, Form, Response, UploadFile, status

from content_portal.api.v1.dependencies import AdminUserDep, CurrentUserDep, SessionDep
from content_portal.schemas.media import MediaResponse
from content_portal.services.media_service import MediaService

router = APIRouter(prefix="/media", tags=["media"])


@router.post("/upload", response_model=MediaResponse, status_code=status.HTTP_201_CREATED)
async def upload_media(
    db: SessionDep,
    admin: AdminUserDep,
    file: UploadFile = File(...),
    post_id: str = Form(...),
    title: str = Form(...),
    description: str | None = Form(None),
    category: str | None = Form(None),
    tags: list[str] | None = Form(None),
) -> MediaResponse:
    """Attach an uploaded file to a post (admin only)."""
    content = await file.read()
    media = MediaService(db).upload(
        post_id=post_id,
        title=title,
        filename=file.filename,
        content_type=file.content_type,
        content=content,
        actor=admin,
        description=description,
        category=category,
        tags=tags,
    )
    return MediaResponse.model_validate(media)


@router.get("/{media_id}", response_model=MediaResponse)
async def get_media(media_id: str, db: SessionDep, current_user: CurrentUserDep) -> MediaResponse:
    """Get a media file; access follows the parent post."""
    media = MediaService(db).get_media(media_id, current_user)
    return MediaResponse.model_validate(media)


@router.delete(
    "/{media_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_media(media_id: str, db: SessionDep, _admin: AdminUserDep) -> Response:
    """Delete a media file (admin only)."""
    MediaService(db).delete_media(media_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
