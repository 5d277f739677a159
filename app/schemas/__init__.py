"""Pydantic request/response schemas."""

from app.schemas.auth import (
    AdminProbeResponse,
    AuthResponse,
    CurrentUser,
    LoginRequest,
    MessageResponse,
    RefreshRequest,
    RegisterRequest,
    TokenClaims,
    TokenPair,
    UserView,
)
from app.schemas.categories import CategoryCreate, CategoryUpdate, CategoryView
from app.schemas.health import HealthResponse
from app.schemas.posts import (
    CommentCreate,
    CommentUpdate,
    CommentView,
    CoverResponse,
    PageMeta,
    PostCreate,
    PostFilter,
    PostListResponse,
    PostUpdate,
    PostView,
)
from app.schemas.users import AvatarResponse

__all__ = [
    "AdminProbeResponse",
    "AuthResponse",
    "AvatarResponse",
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryView",
    "CommentCreate",
    "CommentUpdate",
    "CommentView",
    "CoverResponse",
    "CurrentUser",
    "HealthResponse",
    "LoginRequest",
    "MessageResponse",
    "PageMeta",
    "PostCreate",
    "PostFilter",
    "PostListResponse",
    "PostUpdate",
    "PostView",
    "RefreshRequest",
    "RegisterRequest",
    "TokenClaims",
    "TokenPair",
    "UserView",
]
