"""Storage gateways injected into the services."""

from app.repositories.base import SqlAlchemyGateway, StorageGateway
from app.repositories.categories import CategoryGateway
from app.repositories.posts import CommentGateway, PostGateway
from app.repositories.users import UserGateway

__all__ = [
    "CategoryGateway",
    "CommentGateway",
    "PostGateway",
    "SqlAlchemyGateway",
    "StorageGateway",
    "UserGateway",
]
