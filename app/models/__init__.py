"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.category import Category
from app.models.post import Comment, Post
from app.models.user import Role, User

__all__ = ["Base", "Category", "Comment", "Post", "Role", "User"]
