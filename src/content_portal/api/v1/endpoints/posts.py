"""Post-related endpoints for the portal API."""

from fastapi import APIRouter, Query, Response, status

from content_portal.api.v1.dependencies import AdminUserDep, CurrentUserDep, SessionDep
from content_portal.models import PostVisibility
from content_portal.schemas.media import MediaResponse
from content_portal.schemas.post import PostCreate, PostFilters, PostPage, PostResponse, PostUpdate
from content_portal.services.post_service import PostService

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("/", response_model=PostPage)
async def list_posts(
    db: SessionDep,
    current_user: CurrentUserDep,
    page: int = Query(1, description="1-indexed page number"),
    limit: int | None = Query(None, description="Page size, clamped to 1..100"),
    visibility: PostVisibility | None = Query(None),
    category: str | None = Query(None),
    type: str | None = Query(None),
    tags: list[str] | None = Query(None, description="Posts sharing any of these tags"),
) -> PostPage:
    """List the posts visible to the current user, newest first."""
    filters = PostFilters(visibility=visibility, category=category, type=type, tags=tags)
    listing = PostService(db).list_posts(filters, current_user, page=page, limit=limit)
    return PostPage(
        items=[PostResponse.model_validate(post) for post in listing.items],
        total=listing.total,
        page=listing.page,
        limit=listing.limit,
    )


@router.get("/categories", response_model=list[str])
async def list_categories(db: SessionDep, current_user: CurrentUserDep) -> list[str]:
    """List the categories available in the post filter."""
    return PostService(db).list_categories(current_user)


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(post_id: str, db: SessionDep, current_user: CurrentUserDep) -> PostResponse:
    """Get a single post the current user may view."""
    post = PostService(db).get_post(post_id, current_user)
    return PostResponse.model_validate(post)


@router.get("/{post_id}/media", response_model=list[MediaResponse])
async def get_post_media(
    post_id: str,
    db: SessionDep,
    current_user: CurrentUserDep,
) -> list[MediaResponse]:
    """List the media attached to a post the current user may view."""
    media = PostService(db).get_post_media(post_id, current_user)
    return [MediaResponse.model_validate(item) for item in media]


@router.post("/", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    db: SessionDep,
    admin: AdminUserDep,
) -> PostResponse:
    """Create a post (admin only)."""
    post = PostService(db).create_post(post_data, admin)
    return PostResponse.model_validate(post)


@router.patch("/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: str,
    post_data: PostUpdate,
    db: SessionDep,
    _admin: AdminUserDep,
) -> PostResponse:
    """Update a post (admin only)."""
    post = PostService(db).update_post(post_id, post_data)
    return PostResponse.model_validate(post)


@router.delete(
    "/{post_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_post(post_id: str, db: SessionDep, _admin: AdminUserDep) -> Response:
    """Delete a post and its media (admin only)."""
    PostService(db).delete_post(post_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
