"""Service providers for route dependencies (one gateway set per request session)."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from app.core.config import Settings, get_settings
from app.core.database import get_db
from app.repositories import CategoryGateway, CommentGateway, PostGateway, UserGateway
from app.services.auth import AuthService
from app.services.categories import CategoryService
from app.services.posts import PostService
from app.services.uploads import LocalImageStore
from app.services.users import UserService


def get_image_store(
    settings: Annotated[Settings, Depends(get_settings)],
) -> LocalImageStore:
    return LocalImageStore(settings.UPLOAD_DIR)


def get_auth_service(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> AuthService:
    return AuthService(UserGateway(db), settings)


def get_post_service(
    db: Annotated[Session, Depends(get_db)],
    images: Annotated[LocalImageStore, Depends(get_image_store)],
) -> PostService:
    return PostService(PostGateway(db), CommentGateway(db), CategoryGateway(db), images)


def get_user_service(
    db: Annotated[Session, Depends(get_db)],
    images: Annotated[LocalImageStore, Depends(get_image_store)],
) -> UserService:
    return UserService(UserGateway(db), images)


def get_category_service(
    db: Annotated[Session, Depends(get_db)],
) -> CategoryService:
    return CategoryService(CategoryGateway(db))
