from fastapi.testclient import TestClient
from sqlmodel import Session

from jobcost.core.config import settings
from jobcost.tests.utils.factories import CategoryFactory, ItemFactory

CATEGORIES = f"{settings.API_V1_STR}/categories"
ITEMS = f"{settings.API_V1_STR}/items"


def test_category_crud(client: TestClient) -> None:
    response = client.post(f"{CATEGORIES}/", json={"name": "PP Bags"})
    assert response.status_code == 201
    category_id = response.json()["id"]

    response = client.patch(f"{CATEGORIES}/{category_id}", json={"name": "BOPP Bags"})
    assert response.status_code == 200
    assert response.json()["name"] == "BOPP Bags"

    assert [c["name"] for c in client.get(f"{CATEGORIES}/").json()] == ["BOPP Bags"]

    response = client.delete(f"{CATEGORIES}/{category_id}")
    assert response.status_code == 200
    assert client.get(f"{CATEGORIES}/").json() == []


def test_delete_category_in_use(client: TestClient, db: Session) -> None:
    category = CategoryFactory.create(db)
    ItemFactory.create(db, category=category)

    response = client.delete(f"{CATEGORIES}/{category.id}")

    assert response.status_code == 409
    content = response.json()
    assert "1 item(s)" in content["detail"]
    assert content["error"]["details"] == {"category_id": category.id, "item_count": 1}


def test_create_item_with_category_name(client: TestClient, db: Session) -> None:
    category = CategoryFactory.create(db, name="HM Bags")
    response = client.post(
        f"{ITEMS}/",
        json={"name": "Grocery Bag", "category_id": category.id, "size": "16x20"},
    )
    assert response.status_code == 201
    content = response.json()
    assert content["category_name"] == "HM Bags"
    assert client.get(f"{ITEMS}/{content['id']}").json() == content


def test_create_item_unknown_category(client: TestClient) -> None:
    response = client.post(
        f"{ITEMS}/", json={"name": "Bag", "category_id": 404, "size": "A4"}
    )
    assert response.status_code == 400
    assert response.json()["error"]["details"]["field"] == "category_id"


def test_items_by_category(client: TestClient, db: Session) -> None:
    first = CategoryFactory.create(db)
    second = CategoryFactory.create(db)
    item = ItemFactory.create(db, category=first)
    ItemFactory.create(db, category=second)

    response = client.get(f"{ITEMS}/by-category/{first.id}")
    assert response.status_code == 200
    assert [i["id"] for i in response.json()] == [item.id]


def test_update_and_delete_item(client: TestClient, db: Session) -> None:
    item = ItemFactory.create(db, size="A4")
    response = client.patch(f"{ITEMS}/{item.id}", json={"size": "A3"})
    assert response.status_code == 200
    assert response.json()["size"] == "A3"

    assert client.delete(f"{ITEMS}/{item.id}").status_code == 200
    assert client.get(f"{ITEMS}/{item.id}").status_code == 404


def test_update_item_cannot_clear_required_fields(
    client: TestClient, db: Session
) -> None:
    item = ItemFactory.create(db, size="A4")
    for field in ("category_id", "name", "size"):
        response = client.patch(f"{ITEMS}/{item.id}", json={field: None})
        assert response.status_code == 400, field
        assert response.json()["error"]["details"]["field"] == field

    assert client.get(f"{ITEMS}/{item.id}").json()["size"] == "A4"
