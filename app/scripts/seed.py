"""
Seed demo data: an admin, a client, two categories, three posts and two comments.
Idempotent for accounts and categories. Run from project root:
  python -m app.scripts.seed
"""

import logging
import sys

from sqlalchemy.orm import Session

from app.core.database import SessionLocal
from app.core.logging import configure_logging
from app.core.security import hash_password
from app.models import Category, User
from app.models.user import Role
from app.repositories import CategoryGateway, CommentGateway, PostGateway, UserGateway
from app.schemas.auth import CurrentUser
from app.schemas.posts import CommentCreate, PostCreate
from app.services.posts import PostService

logger = logging.getLogger(__name__)

SEED_ACCOUNTS = (
    ("admin@example.com", "admin123", "Administrator", Role.ADMIN),
    ("user@example.com", "user123", "Regular User", Role.CLIENT),
)
SEED_CATEGORIES = (
    ("Technology", "technology", "Articles about technology and programming"),
    ("Lifestyle", "lifestyle", "Lifestyle and wellbeing tips"),
)


def _account(users: UserGateway, email: str, password: str, name: str, role: Role) -> User:
    existing = users.find_by_email(email)
    if existing is not None:
        return existing
    return users.create(email=email, password_hash=hash_password(password), name=name, role=role.value)


def _category(categories: CategoryGateway, name: str, slug: str, description: str) -> Category:
    existing = categories.find_by(slug=slug)
    if existing is not None:
        return existing
    return categories.create(name=name, slug=slug, description=description)


def seed(db: Session) -> None:
    users = UserGateway(db)
    categories = CategoryGateway(db)
    posts = PostService(PostGateway(db), CommentGateway(db), categories)

    admin, client = (_account(users, *row) for row in SEED_ACCOUNTS)
    tech, lifestyle = (_category(categories, *row) for row in SEED_CATEGORIES)
    as_admin = CurrentUser(id=admin.id, role=Role.ADMIN)
    as_client = CurrentUser(id=client.id, role=Role.CLIENT)

    intro = posts.create_post(
        PostCreate(
            title="Introduction to FastAPI",
            content="FastAPI is a modern web framework for building APIs with Python type hints.",
            published=True,
            category_id=tech.id,
        ),
        as_admin,
    )
    orm = posts.create_post(
        PostCreate(
            title="SQLAlchemy ORM: A Complete Guide",
            content="Learn how to configure SQLAlchemy, run Alembic migrations and write queries.",
            published=True,
            category_id=tech.id,
        ),
        as_client,
    )
    posts.create_post(
        PostCreate(
            title="Productivity Tips for Developers",
            content="Being productive is about working smarter, not longer. A few practical tips.",
            published=False,
            category_id=lifestyle.id,
        ),
        as_admin,
    )
    posts.create_comment(intro.id, CommentCreate(content="Great article, very clear."), as_client)
    posts.create_comment(orm.id, CommentCreate(content="Thanks, this is what I was looking for."), as_admin)
    logger.info("Seed completed. Admin: admin@example.com / admin123, User: user@example.com / user123")


def main() -> int:
    configure_logging()
    db = SessionLocal()
    try:
        seed(db)
        return 0
    except Exception as e:
        logger.exception("Seed failed: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
