"""Posts, comments and cover image routes. Mutations are owner-or-admin."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Query, UploadFile, status

from app.api.v1.auth import get_current_user
from app.api.v1.deps import get_post_service
from app.schemas.auth import CurrentUser, MessageResponse
from app.schemas.posts import (
    CommentCreate,
    CommentUpdate,
    CommentView,
    CoverResponse,
    PostCreate,
    PostFilter,
    PostListResponse,
    PostUpdate,
    PostView,
)
from app.services.posts import PostService

router = APIRouter()

Service = Annotated[PostService, Depends(get_post_service)]
Caller = Annotated[CurrentUser, Depends(get_current_user)]


@router.post("", response_model=PostView, status_code=status.HTTP_201_CREATED)
def create_post(body: PostCreate, service: Service, caller: Caller) -> PostView:
    """Create a post authored by the caller. The slug is derived from the title."""
    return service.create_post(body, caller)


@router.get("", response_model=PostListResponse)
def list_posts(
    filters: Annotated[PostFilter, Query()],
    service: Service,
) -> PostListResponse:
    """List posts newest first with page/limit and optional filters."""
    return service.list_posts(filters)


@router.get("/slug/{slug}", response_model=PostView)
def get_post_by_slug(slug: str, service: Service) -> PostView:
    return service.get_post_by_slug(slug)


@router.get("/{post_id}", response_model=PostView)
def get_post(post_id: int, service: Service) -> PostView:
    return service.get_post(post_id)


@router.put("/{post_id}", response_model=PostView)
def update_post(post_id: int, body: PostUpdate, service: Service, caller: Caller) -> PostView:
    """Update a post (author or ADMIN). A changed title re-derives the slug."""
    return service.update_post(post_id, body, caller)


@router.delete("/{post_id}", response_model=MessageResponse)
def delete_post(post_id: int, service: Service, caller: Caller) -> MessageResponse:
    return service.delete_post(post_id, caller)


@router.post("/{post_id}/cover", response_model=CoverResponse)
def upload_cover(
    post_id: int,
    file: Annotated[UploadFile, File(description="JPEG, PNG or WebP, max 10 MB")],
    service: Service,
    caller: Caller,
) -> CoverResponse:
    """Replace the post's cover image (author or ADMIN)."""
    return service.set_cover(post_id, file.file.read(), file.content_type, caller)


@router.delete("/{post_id}/cover", response_model=MessageResponse)
def delete_cover(post_id: int, service: Service, caller: Caller) -> MessageResponse:
    return service.delete_cover(post_id, caller)


@router.post(
    "/{post_id}/comments",
    response_model=CommentView,
    status_code=status.HTTP_201_CREATED,
)
def create_comment(
    post_id: int, body: CommentCreate, service: Service, caller: Caller
) -> CommentView:
    return service.create_comment(post_id, body, caller)


@router.get("/{post_id}/comments", response_model=list[CommentView])
def list_comments(post_id: int, service: Service) -> list[CommentView]:
    """Comments of a post, newest first."""
    return service.list_comments(post_id)


@router.patch("/{post_id}/comments/{comment_id}", response_model=CommentView)
def update_comment(
    post_id: int,
    comment_id: int,
    body: CommentUpdate,
    service: Service,
    caller: Caller,
) -> CommentView:
    return service.update_comment(post_id, comment_id, body, caller)


@router.delete("/{post_id}/comments/{comment_id}", response_model=MessageResponse)
def delete_comment(
    post_id: int, comment_id: int, service: Service, caller: Caller
) -> MessageResponse:
    return service.delete_comment(post_id, comment_id, caller)
