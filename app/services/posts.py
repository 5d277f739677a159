"""Posts, comments and cover images: creation, reads and owner-or-admin mutations."""

import logging
import math
from collections.abc import Callable

from app.core.errors import ErrorKind, ServiceError, not_found
from app.core.slug import slugify
from app.models.post import Post
from app.repositories.categories import CategoryGateway
from app.repositories.posts import CommentGateway, PostGateway
from app.schemas.auth import CurrentUser, MessageResponse
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
from app.services.mutation import load_for_mutation, owned_by_author
from app.services.uploads import LocalImageStore

logger = logging.getLogger(__name__)

POST_NOT_FOUND = "Post not found"
COMMENT_NOT_FOUND = "Comment not found"
CATEGORY_NOT_FOUND = "Category not found"
FALLBACK_SLUG = "post"
SLUG_ATTEMPTS = 5


class PostService:
    def __init__(
        self,
        posts: PostGateway,
        comments: CommentGateway,
        categories: CategoryGateway,
        images: LocalImageStore | None = None,
    ) -> None:
        self.posts = posts
        self.comments = comments
        self.categories = categories
        self.images = images

    # -- slugs -------------------------------------------------------------

    def unique_slug(self, title: str, exclude_id: int | None = None) -> str:
        """slugify(title), suffixed -2, -3, ... while another post holds it."""
        base = slugify(title) or FALLBACK_SLUG
        candidate = base
        suffix = 2
        while self.posts.slug_taken(candidate, exclude_id=exclude_id):
            candidate = f"{base}-{suffix}"
            suffix += 1
        return candidate

    def _write_with_slug(
        self,
        title: str,
        write: Callable[[str], Post],
        exclude_id: int | None = None,
    ) -> Post:
        """Run write(slug) with a free slug; a slug taken by a concurrent writer moves on to the next one."""
        attempt = 1
        while True:
            slug = self.unique_slug(title, exclude_id=exclude_id)
            try:
                return write(slug)
            except ServiceError as exc:
                if exc.kind is not ErrorKind.CONFLICT or attempt >= SLUG_ATTEMPTS:
                    raise
                logger.info("Slug %s taken concurrently, retrying", slug)
            attempt += 1

    # -- reads -------------------------------------------------------------

    def list_posts(self, filters: PostFilter) -> PostListResponse:
        rows, total = self.posts.list_page(filters)
        return PostListResponse(
            data=[PostView.model_validate(r) for r in rows],
            meta=PageMeta(
                total=total,
                page=filters.page,
                limit=filters.limit,
                total_pages=math.ceil(total / filters.limit),
            ),
        )

    def get_post(self, post_id: int) -> PostView:
        post = self.posts.get(post_id)
        if post is None:
            raise not_found(POST_NOT_FOUND)
        return PostView.model_validate(post)

    def get_post_by_slug(self, slug: str) -> PostView:
        post = self.posts.find_by_slug(slug)
        if post is None:
            raise not_found(POST_NOT_FOUND)
        return PostView.model_validate(post)

    def list_comments(self, post_id: int) -> list[CommentView]:
        if self.posts.get(post_id) is None:
            raise not_found(POST_NOT_FOUND)
        return [CommentView.model_validate(c) for c in self.comments.list_for_post(post_id)]

    # -- creation ----------------------------------------------------------

    def create_post(self, body: PostCreate, caller: CurrentUser) -> PostView:
        self._require_category(body.category_id)
        post = self._write_with_slug(
            body.title,
            lambda slug: self.posts.create(
                title=body.title,
                slug=slug,
                content=body.content,
                published=body.published,
                category_id=body.category_id,
                author_id=caller.id,
            ),
        )
        logger.info("Post created id=%s author_id=%s slug=%s", post.id, caller.id, post.slug)
        return PostView.model_validate(post)

    def create_comment(self, post_id: int, body: CommentCreate, caller: CurrentUser) -> CommentView:
        if self.posts.get(post_id) is None:
            raise not_found(POST_NOT_FOUND)
        comment = self.comments.create(content=body.content, post_id=post_id, author_id=caller.id)
        return CommentView.model_validate(comment)

    # -- owner-or-admin mutations -----------------------------------------

    def update_post(self, post_id: int, body: PostUpdate, caller: CurrentUser) -> PostView:
        post = load_for_mutation(
            self.posts,
            post_id,
            caller,
            owned_by_author,
            POST_NOT_FOUND,
            "You do not have permission to edit this post",
        )
        changes = body.model_dump(exclude_unset=True)
        # Explicit nulls are only meaningful for nullable columns.
        for field in ("title", "content", "published"):
            if field in changes and changes[field] is None:
                del changes[field]
        self._require_category(changes.get("category_id"))
        if not changes:
            return PostView.model_validate(post)
        if "title" in changes and changes["title"] != post.title:
            updated = self._write_with_slug(
                changes["title"],
                lambda slug: self.posts.update(post_id, slug=slug, **changes),
                exclude_id=post_id,
            )
        else:
            updated = self.posts.update(post_id, **changes)
        return PostView.model_validate(updated)

    def delete_post(self, post_id: int, caller: CurrentUser) -> MessageResponse:
        post = load_for_mutation(
            self.posts,
            post_id,
            caller,
            owned_by_author,
            POST_NOT_FOUND,
            "You do not have permission to delete this post",
        )
        cover = post.cover_image
        self.posts.delete(post_id)
        if self.images is not None:
            self.images.delete(cover)
        logger.info("Post deleted id=%s by caller_id=%s", post_id, caller.id)
        return MessageResponse(message="Post deleted.")

    def set_cover(
        self,
        post_id: int,
        data: bytes,
        content_type: str | None,
        caller: CurrentUser,
    ) -> CoverResponse:
        post = load_for_mutation(
            self.posts,
            post_id,
            caller,
            owned_by_author,
            POST_NOT_FOUND,
            "You do not have permission to edit this post",
        )
        previous = post.cover_image
        path = self._images().save("covers", data, content_type)
        try:
            updated = self.posts.update(post_id, cover_image=path)
        except ServiceError:
            self._images().delete(path)
            raise
        self._images().delete(previous)
        return CoverResponse(message="Cover image updated.", cover_image=updated.cover_image)

    def delete_cover(self, post_id: int, caller: CurrentUser) -> MessageResponse:
        post = load_for_mutation(
            self.posts,
            post_id,
            caller,
            owned_by_author,
            POST_NOT_FOUND,
            "You do not have permission to delete this post's cover",
        )
        previous = post.cover_image
        self.posts.update(post_id, cover_image=None)
        if self.images is not None:
            self.images.delete(previous)
        return MessageResponse(message="Cover image deleted.")

    def update_comment(
        self,
        post_id: int,
        comment_id: int,
        body: CommentUpdate,
        caller: CurrentUser,
    ) -> CommentView:
        self._require_post(post_id)
        load_for_mutation(
            self.comments,
            comment_id,
            caller,
            owned_by_author,
            COMMENT_NOT_FOUND,
            "You do not have permission to edit this comment",
            scope=lambda c: c.post_id == post_id,
        )
        return CommentView.model_validate(self.comments.update(comment_id, content=body.content))

    def delete_comment(self, post_id: int, comment_id: int, caller: CurrentUser) -> MessageResponse:
        self._require_post(post_id)
        load_for_mutation(
            self.comments,
            comment_id,
            caller,
            owned_by_author,
            COMMENT_NOT_FOUND,
            "You do not have permission to delete this comment",
            scope=lambda c: c.post_id == post_id,
        )
        self.comments.delete(comment_id)
        logger.info("Comment deleted id=%s post_id=%s by caller_id=%s", comment_id, post_id, caller.id)
        return MessageResponse(message="Comment deleted.")

    def _require_post(self, post_id: int) -> None:
        if self.posts.get(post_id) is None:
            raise not_found(POST_NOT_FOUND)

    def _require_category(self, category_id: int | None) -> None:
        if category_id is not None and self.categories.get(category_id) is None:
            raise not_found(CATEGORY_NOT_FOUND)

    def _images(self) -> LocalImageStore:
        if self.images is None:
            raise RuntimeError("PostService was built without an image store")
        return self.images
