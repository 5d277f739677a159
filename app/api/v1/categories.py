"""Category routes: public reads, admin-only writes."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.api.v1.auth import require_admin
from app.api.v1.deps import get_category_service
from app.schemas.auth import CurrentUser, MessageResponse
from app.schemas.categories import CategoryCreate, CategoryUpdate, CategoryView
from app.services.categories import CategoryService

router = APIRouter()

Service = Annotated[CategoryService, Depends(get_category_service)]
Admin = Annotated[CurrentUser, Depends(require_admin)]


@router.get("", response_model=list[CategoryView])
def list_categories(service: Service) -> list[CategoryView]:
    return service.list_categories()


@router.get("/{category_id}", response_model=CategoryView)
def get_category(category_id: int, service: Service) -> CategoryView:
    return service.get_category(category_id)


@router.post("", response_model=CategoryView, status_code=status.HTTP_201_CREATED)
def create_category(body: CategoryCreate, service: Service, _admin: Admin) -> CategoryView:
    """Create a category (ADMIN). A name whose slug already exists is rejected with 409."""
    return service.create_category(body)


@router.put("/{category_id}", response_model=CategoryView)
def update_category(
    category_id: int, body: CategoryUpdate, service: Service, _admin: Admin
) -> CategoryView:
    return service.update_category(category_id, body)


@router.delete("/{category_id}", response_model=MessageResponse)
def delete_category(category_id: int, service: Service, _admin: Admin) -> MessageResponse:
    return service.delete_category(category_id)
