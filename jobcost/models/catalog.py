"""Item category and item SQLModels."""

from sqlmodel import Field, SQLModel


class ItemCategoryBase(SQLModel):
    name: str = Field(min_length=1, max_length=100)


class ItemCategory(ItemCategoryBase, table=True):
    """ItemCategory table model."""

    __tablename__ = "item_categories"

    id: int | None = Field(default=None, primary_key=True)


class ItemCategoryCreate(ItemCategoryBase):
    pass


class ItemCategoryUpdate(SQLModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)


class ItemCategoryRead(ItemCategoryBase):
    id: int


class ItemBase(SQLModel):
    """Base item fields."""

    name: str = Field(min_length=1, max_length=200)
    category_id: int = Field(foreign_key="item_categories.id", index=True)
    size: str = Field(min_length=1, max_length=50)


class Item(ItemBase, table=True):
    """
    Item table model.

    Every item belongs to exactly one category.
    """

    __tablename__ = "items"

    id: int | None = Field(default=None, primary_key=True)


class ItemCreate(ItemBase):
    pass


class ItemUpdate(SQLModel):
    name: str | None = Field(default=None, min_length=1, max_length=200)
    category_id: int | None = None
    size: str | None = Field(default=None, min_length=1, max_length=50)


class ItemRead(ItemBase):
    id: int
    category_name: str | None = None
