"""Item category API routes."""

from fastapi import APIRouter, status

from jobcost.infrastructure.database.service_dependencies import CategoryServiceDep
from jobcost.models import (
    ItemCategoryCreate,
    ItemCategoryRead,
    ItemCategoryUpdate,
    Message,
)

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("/", response_model=list[ItemCategoryRead], summary="List categories")
def list_categories(service: CategoryServiceDep):
    return service.list_categories()


@router.post(
    "/",
    response_model=ItemCategoryRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create category",
)
def create_category(request: ItemCategoryCreate, service: CategoryServiceDep):
    return service.create_category(request)


@router.patch(
    "/{category_id}", response_model=ItemCategoryRead, summary="Update category"
)
def update_category(
    category_id: int, request: ItemCategoryUpdate, service: CategoryServiceDep
):
    return service.update_category(category_id, request)


@router.delete(
    "/{category_id}",
    response_model=Message,
    summary="Delete category",
    description=(
        "Deletes a category that no item references. "
        "Returns 409 with the referencing item count otherwise."
    ),
    responses={409: {"description": "Category still referenced by items"}},
)
def delete_category(category_id: int, service: CategoryServiceDep) -> Message:
    service.delete_category(category_id)
    return Message(message="Category deleted successfully")
