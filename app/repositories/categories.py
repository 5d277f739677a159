"""Category store."""

from sqlalchemy import select

from app.models.category import Category
from app.repositories.base import SqlAlchemyGateway


class CategoryGateway(SqlAlchemyGateway[Category]):
    model = Category
    label = "Category"

    def list_all(self) -> list[Category]:
        return list(self.session.scalars(select(Category).order_by(Category.name)))
