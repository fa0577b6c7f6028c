"""Item API routes."""

from fastapi import APIRouter, status

from jobcost.infrastructure.database.service_dependencies import ItemServiceDep
from jobcost.models import ItemCreate, ItemRead, ItemUpdate, Message

router = APIRouter(prefix="/items", tags=["items"])


@router.get("/", response_model=list[ItemRead], summary="List items")
def list_items(service: ItemServiceDep):
    """All items with their category name."""
    return service.list_items()


@router.get(
    "/by-category/{category_id}",
    response_model=list[ItemRead],
    summary="List items in a category",
)
def list_items_by_category(category_id: int, service: ItemServiceDep):
    return service.list_by_category(category_id)


@router.get("/{item_id}", response_model=ItemRead, summary="Get item")
def get_item(item_id: int, service: ItemServiceDep):
    return service.get_item(item_id)


@router.post(
    "/",
    response_model=ItemRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create item",
)
def create_item(request: ItemCreate, service: ItemServiceDep):
    return service.create_item(request)


@router.patch("/{item_id}", response_model=ItemRead, summary="Update item")
def update_item(item_id: int, request: ItemUpdate, service: ItemServiceDep):
    return service.update_item(item_id, request)


@router.delete("/{item_id}", response_model=Message, summary="Delete item")
def delete_item(item_id: int, service: ItemServiceDep) -> Message:
    service.delete_item(item_id)
    return Message(message="Item deleted successfully")
