"""ORM models for posts and their comments."""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Text

from app.models.base import Base, TimestampMixin


class Post(TimestampMixin, Base):
    """
    A post owned by its author. author_id is set at creation and never reassigned.

    slug is derived from title and unique across posts.
    """

    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    slug = Column(String(300), nullable=False, unique=True, index=True)
    content = Column(Text, nullable=False)
    published = Column(Boolean, nullable=False, default=False)
    cover_image = Column(String(1024), nullable=True)
    author_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    category_id = Column(
        Integer,
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )


class Comment(TimestampMixin, Base):
    """A comment on a post, owned by its author."""

    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    content = Column(Text, nullable=False)
    post_id = Column(
        Integer,
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    author_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
