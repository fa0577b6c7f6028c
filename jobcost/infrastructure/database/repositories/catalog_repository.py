"""
Item category and item repositories.

Items are listed together with their category name; the category repository
can count the items that still reference a category.
"""

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select

from jobcost.models import (
    Item,
    ItemCategory,
    ItemCategoryCreate,
    ItemCategoryUpdate,
    ItemCreate,
    ItemRead,
    ItemUpdate,
)

from .base import BaseRepository, DatabaseError


class ItemCategoryRepository(
    BaseRepository[ItemCategory, ItemCategoryCreate, ItemCategoryUpdate]
):
    @property
    def entity_class(self) -> type[ItemCategory]:
        return ItemCategory

    def list_by_name(self) -> list[ItemCategory]:
        return self.get_all(order_by=(ItemCategory.name, ItemCategory.id))

    def count_items(self, category_id: int) -> int:
        """Number of items that reference the category."""
        try:
            statement = (
                select(func.count())
                .select_from(Item)
                .where(Item.category_id == category_id)
            )
            return self.session.exec(statement).one()
        except SQLAlchemyError as e:
            raise DatabaseError(f"Database error during count_items: {str(e)}") from e


class ItemRepository(BaseRepository[Item, ItemCreate, ItemUpdate]):
    @property
    def entity_class(self) -> type[Item]:
        return Item

    def _read_rows(self, category_id: int | None = None) -> list[ItemRead]:
        try:
            statement = select(Item, ItemCategory.name).join(
                ItemCategory, Item.category_id == ItemCategory.id
            )
            if category_id is not None:
                statement = statement.where(Item.category_id == category_id)
            statement = statement.order_by(Item.name, Item.id)
            rows = self.session.exec(statement).all()
        except SQLAlchemyError as e:
            raise DatabaseError(f"Database error during item listing: {str(e)}") from e

        return [
            ItemRead.model_validate(item, update={"category_name": category_name})
            for item, category_name in rows
        ]

    def list_with_category(self) -> list[ItemRead]:
        return self._read_rows()

    def list_by_category(self, category_id: int) -> list[ItemRead]:
        return self._read_rows(category_id)

    def get_read(self, item_id: int) -> ItemRead:
        item = self.get_by_id_required(item_id)
        category = self.session.get(ItemCategory, item.category_id)
        return ItemRead.model_validate(
            item, update={"category_name": category.name if category else None}
        )
