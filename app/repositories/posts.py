"""Post and comment stores."""

from sqlalchemy import delete, func, or_, select

from app.models.post import Comment, Post
from app.repositories.base import SqlAlchemyGateway
from app.schemas.posts import PostFilter


class PostGateway(SqlAlchemyGateway[Post]):
    model = Post
    label = "Post"

    def find_by_slug(self, slug: str) -> Post | None:
        return self.find_by(slug=slug)

    def slug_taken(self, slug: str, exclude_id: int | None = None) -> bool:
        stmt = select(Post.id).where(Post.slug == slug)
        if exclude_id is not None:
            stmt = stmt.where(Post.id != exclude_id)
        return self.session.scalars(stmt.limit(1)).first() is not None

    def list_page(self, filters: PostFilter) -> tuple[list[Post], int]:
        """Return one page of posts (newest first) and the total matching count."""
        conditions = []
        if filters.search:
            pattern = f"%{filters.search}%"
            conditions.append(or_(Post.title.ilike(pattern), Post.content.ilike(pattern)))
        if filters.category_id is not None:
            conditions.append(Post.category_id == filters.category_id)
        if filters.author_id is not None:
            conditions.append(Post.author_id == filters.author_id)
        if filters.published is not None:
            conditions.append(Post.published == filters.published)

        total = self.session.scalar(
            select(func.count()).select_from(Post).where(*conditions)
        ) or 0
        rows = self.session.scalars(
            select(Post)
            .where(*conditions)
            .order_by(Post.created_at.desc(), Post.id.desc())
            .offset((filters.page - 1) * filters.limit)
            .limit(filters.limit)
        )
        return list(rows), total

    def delete(self, entity_id: int) -> None:
        # Comments go with their post even where the backend does not enforce FK cascades.
        self.session.execute(
            delete(Comment)
            .where(Comment.post_id == entity_id)
            .execution_options(synchronize_session=False)
        )
        super().delete(entity_id)


class CommentGateway(SqlAlchemyGateway[Comment]):
    model = Comment
    label = "Comment"

    def list_for_post(self, post_id: int) -> list[Comment]:
        return list(
            self.session.scalars(
                select(Comment)
                .where(Comment.post_id == post_id)
                .order_by(Comment.created_at.desc(), Comment.id.desc())
            )
        )
