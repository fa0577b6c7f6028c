"""
Item category and item application services.

A category can only be deleted once no item references it; the check runs
before the delete so the caller gets a descriptive error and both rows stay.
"""

from jobcost.core.exceptions import CategoryInUseError, ValidationError
from jobcost.core.observability import get_logger
from jobcost.infrastructure.database.repositories import (
    ItemCategoryRepository,
    ItemRepository,
)
from jobcost.models import (
    ItemCategory,
    ItemCategoryCreate,
    ItemCategoryUpdate,
    ItemCreate,
    ItemRead,
    ItemUpdate,
)

from .base_service import ApplicationServiceBase

logger = get_logger(__name__)


class CategoryService(ApplicationServiceBase):
    def __init__(self, category_repository: ItemCategoryRepository):
        self._categories = category_repository

    def list_categories(self) -> list[ItemCategory]:
        return self._categories.list_by_name()

    def create_category(self, request: ItemCategoryCreate) -> ItemCategory:
        name = self.validate_non_empty_string(request.name, "name")
        return self._categories.create({"name": name})

    def update_category(
        self, category_id: int, request: ItemCategoryUpdate
    ) -> ItemCategory:
        changes = request.model_dump(exclude_unset=True)
        if "name" in changes:
            changes["name"] = self.validate_non_empty_string(changes["name"], "name")
        return self._categories.update(category_id, changes)

    def delete_category(self, category_id: int) -> None:
        """
        Delete a category that no item references.

        Raises:
            EntityNotFoundError: If the category does not exist
            CategoryInUseError: If one or more items still reference it
        """
        self._categories.get_by_id_required(category_id)

        item_count = self._categories.count_items(category_id)
        if item_count > 0:
            logger.warning(
                "Category delete refused",
                category_id=category_id,
                item_count=item_count,
            )
            raise CategoryInUseError(category_id, item_count)

        self._categories.delete(category_id)
        logger.info("Category deleted", category_id=category_id)


class ItemService(ApplicationServiceBase):
    def __init__(
        self,
        item_repository: ItemRepository,
        category_repository: ItemCategoryRepository,
    ):
        self._items = item_repository
        self._categories = category_repository

    def list_items(self) -> list[ItemRead]:
        return self._items.list_with_category()

    def list_by_category(self, category_id: int) -> list[ItemRead]:
        return self._items.list_by_category(category_id)

    def get_item(self, item_id: int) -> ItemRead:
        return self._items.get_read(item_id)

    def create_item(self, request: ItemCreate) -> ItemRead:
        self.validate_reference(self._categories, request.category_id, "category_id")
        item = self._items.create(request)
        return self._items.get_read(item.id)

    def update_item(self, item_id: int, request: ItemUpdate) -> ItemRead:
        changes = request.model_dump(exclude_unset=True)
        for field in ("name", "size"):
            if field in changes:
                changes[field] = self.validate_non_empty_string(changes[field], field)
        if "category_id" in changes:
            if changes["category_id"] is None:
                raise ValidationError(
                    "category_id", None, "category_id cannot be cleared"
                )
            self.validate_reference(
                self._categories, changes["category_id"], "category_id"
            )
        self._items.update(item_id, changes)
        return self._items.get_read(item_id)

    def delete_item(self, item_id: int) -> None:
        if not self._items.delete(item_id):
            raise self.entity_not_found_error("Item", item_id)
