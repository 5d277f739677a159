"""Request/response schemas for posts, comments and cover images."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class PostCreate(BaseModel):
    """New post. The author is always the caller; the cover is set through the upload route."""

    title: str = Field(..., min_length=3, max_length=255, description="Post title")
    content: str = Field(..., min_length=10, description="Post body")
    published: bool = Field(default=False, description="Whether the post is published")
    category_id: int | None = Field(default=None, description="Category ID")


class PostUpdate(BaseModel):
    """Partial update. A new title re-derives the slug."""

    title: str | None = Field(default=None, min_length=3, max_length=255)
    content: str | None = Field(default=None, min_length=10)
    published: bool | None = None
    category_id: int | None = None


class PostFilter(BaseModel):
    """Query parameters for listing posts."""

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=100)
    search: str | None = Field(default=None, description="Case-insensitive match on title or content")
    published: bool | None = None
    category_id: int | None = None
    author_id: int | None = None


class PostView(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    slug: str
    content: str
    published: bool
    cover_image: str | None = None
    author_id: int
    category_id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PageMeta(BaseModel):
    total: int = Field(..., ge=0)
    page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1)
    total_pages: int = Field(..., ge=0)


class PostListResponse(BaseModel):
    data: list[PostView]
    meta: PageMeta


class CommentCreate(BaseModel):
    content: str = Field(..., min_length=1, description="Comment body")


class CommentUpdate(BaseModel):
    content: str = Field(..., min_length=1, description="Comment body")


class CommentView(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    content: str
    post_id: int
    author_id: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CoverResponse(BaseModel):
    """Returned after replacing a post's cover image."""

    message: str
    cover_image: str | None = None
