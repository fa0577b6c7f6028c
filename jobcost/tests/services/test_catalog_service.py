import pytest
from sqlmodel import Session

from jobcost.application.services import CategoryService, ItemService
from jobcost.core.exceptions import (
    CategoryInUseError,
    EntityNotFoundError,
    ValidationError,
)
from jobcost.infrastructure.database.repositories import (
    ItemCategoryRepository,
    ItemRepository,
)
from jobcost.models import ItemCategoryCreate, ItemCategoryUpdate, ItemCreate
from jobcost.tests.utils.factories import CategoryFactory, ItemFactory


@pytest.fixture
def category_service(db: Session) -> CategoryService:
    return CategoryService(ItemCategoryRepository(db))


@pytest.fixture
def item_service(db: Session) -> ItemService:
    return ItemService(ItemRepository(db), ItemCategoryRepository(db))


def test_create_category_trims_name(category_service: CategoryService):
    category = category_service.create_category(ItemCategoryCreate(name="  PP Bags "))
    assert category.name == "PP Bags"


def test_rename_to_blank_is_rejected(db: Session, category_service: CategoryService):
    category = CategoryFactory.create(db)
    with pytest.raises(ValidationError):
        category_service.update_category(category.id, ItemCategoryUpdate(name="   "))


def test_delete_unused_category(db: Session, category_service: CategoryService):
    category = CategoryFactory.create(db)
    category_service.delete_category(category.id)
    assert ItemCategoryRepository(db).get_by_id(category.id) is None


def test_delete_category_in_use_is_refused(
    db: Session, category_service: CategoryService
):
    category = CategoryFactory.create(db)
    item = ItemFactory.create(db, category=category)
    ItemFactory.create(db, category=category)

    with pytest.raises(CategoryInUseError) as exc_info:
        category_service.delete_category(category.id)

    assert exc_info.value.item_count == 2
    assert exc_info.value.message == (
        "Cannot delete category: 2 item(s) still reference it. "
        "Reassign or delete those items first."
    )
    assert ItemCategoryRepository(db).exists(category.id)
    assert ItemRepository(db).exists(item.id)


def test_delete_missing_category(category_service: CategoryService):
    with pytest.raises(EntityNotFoundError):
        category_service.delete_category(404)


def test_item_needs_existing_category(item_service: ItemService):
    with pytest.raises(ValidationError) as exc_info:
        item_service.create_item(ItemCreate(name="Bag", category_id=77, size="10x12"))
    assert exc_info.value.field_name == "category_id"


def test_create_item_returns_category_name(db: Session, item_service: ItemService):
    category = CategoryFactory.create(db, name="HM Bags")
    item = item_service.create_item(
        ItemCreate(name="Grocery Bag", category_id=category.id, size="16x20")
    )
    assert item.category_name == "HM Bags"
    assert [i.id for i in item_service.list_by_category(category.id)] == [item.id]
