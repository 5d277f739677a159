"""Category management. Writes are admin-only at the route level."""

import logging

from app.core.errors import bad_request, conflict, not_found
from app.core.slug import slugify
from app.repositories.categories import CategoryGateway
from app.schemas.auth import MessageResponse
from app.schemas.categories import CategoryCreate, CategoryUpdate, CategoryView

logger = logging.getLogger(__name__)

CATEGORY_NOT_FOUND = "Category not found"


class CategoryService:
    def __init__(self, categories: CategoryGateway) -> None:
        self.categories = categories

    def _slug_for(self, name: str, exclude_id: int | None = None) -> str:
        slug = slugify(name)
        if not slug:
            raise bad_request("Category name must contain letters or digits.")
        existing = self.categories.find_by(slug=slug)
        if existing is not None and existing.id != exclude_id:
            raise conflict("Category already exists.")
        return slug

    def list_categories(self) -> list[CategoryView]:
        return [CategoryView.model_validate(c) for c in self.categories.list_all()]

    def get_category(self, category_id: int) -> CategoryView:
        category = self.categories.get(category_id)
        if category is None:
            raise not_found(CATEGORY_NOT_FOUND)
        return CategoryView.model_validate(category)

    def create_category(self, body: CategoryCreate) -> CategoryView:
        category = self.categories.create(
            name=body.name,
            slug=self._slug_for(body.name),
            description=body.description,
        )
        logger.info("Category created id=%s slug=%s", category.id, category.slug)
        return CategoryView.model_validate(category)

    def update_category(self, category_id: int, body: CategoryUpdate) -> CategoryView:
        self.get_category(category_id)
        changes = body.model_dump(exclude_unset=True)
        if changes.get("name"):
            changes["slug"] = self._slug_for(changes["name"], exclude_id=category_id)
        elif "name" in changes:
            del changes["name"]
        if not changes:
            return self.get_category(category_id)
        return CategoryView.model_validate(self.categories.update(category_id, **changes))

    def delete_category(self, category_id: int) -> MessageResponse:
        self.get_category(category_id)
        self.categories.delete(category_id)
        logger.info("Category deleted id=%s", category_id)
        return MessageResponse(message="Category deleted.")
