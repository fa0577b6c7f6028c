from fastapi.testclient import TestClient
from sqlmodel import Session

from jobcost.core.config import settings
from jobcost.tests.utils.factories import (
    CUTTER_FIELDS,
    EmployeeFactory,
    MachineTypeFactory,
)

MACHINES = f"{settings.API_V1_STR}/machines"
EMPLOYEES = f"{settings.API_V1_STR}/employees"


def test_create_machine_type_with_schema(client: TestClient) -> None:
    response = client.post(
        f"{MACHINES}/",
        json={
            "name": "Harish",
            "model": "Printing Machine",
            "custom_fields_schema": CUTTER_FIELDS,
        },
    )
    assert response.status_code == 201
    content = response.json()
    assert [f["name"] for f in content["custom_fields_schema"]] == [
        "size",
        "sheets",
        "finish",
    ]

    schema = client.get(f"{MACHINES}/{content['id']}/schema").json()
    assert schema[2]["options"] == ["matt", "gloss"]


def test_select_field_needs_options(client: TestClient) -> None:
    response = client.post(
        f"{MACHINES}/",
        json={
            "name": "Broken",
            "custom_fields_schema": [
                {"name": "colour", "label": "Colour", "type": "select"}
            ],
        },
    )
    assert response.status_code == 422


def test_validate_custom_data(client: TestClient, db: Session) -> None:
    machine = MachineTypeFactory.create(db)
    url = f"{MACHINES}/{machine.id}/validate-custom-data"

    ok = client.post(url, json={"size": "A4", "sheets": "250", "note": "rush"})
    assert ok.status_code == 200
    assert ok.json() == {"size": "A4", "sheets": "250", "note": "rush"}

    missing = client.post(url, json={"sheets": 5})
    assert missing.status_code == 400
    assert missing.json()["error"]["details"]["field"] == "machine_custom_data.size"

    bad_option = client.post(url, json={"size": "A4", "finish": "satin"})
    assert bad_option.status_code == 400


def test_update_machine_schema(client: TestClient, db: Session) -> None:
    machine = MachineTypeFactory.create(db)
    response = client.patch(
        f"{MACHINES}/{machine.id}",
        json={"custom_fields_schema": [{"name": "gsm", "label": "GSM", "type": "number"}]},
    )
    assert response.status_code == 200
    assert response.json()["custom_fields_schema"][0]["name"] == "gsm"
    assert response.json()["name"] == machine.name


def test_machine_type_not_found(client: TestClient) -> None:
    assert client.get(f"{MACHINES}/999").status_code == 404
    assert client.get(f"{MACHINES}/999/schema").status_code == 404


def test_employee_crud(client: TestClient, db: Session) -> None:
    machine = MachineTypeFactory.create(db, name="Jaquar")
    response = client.post(
        f"{EMPLOYEES}/", json={"name": "Dinesh", "machine_type_id": machine.id}
    )
    assert response.status_code == 201
    employee_id = response.json()["id"]
    assert response.json()["machine_type_name"] == "Jaquar"

    response = client.patch(f"{EMPLOYEES}/{employee_id}", json={"phone": "98400 11111"})
    assert response.status_code == 200
    assert response.json()["phone"] == "98400 11111"

    assert client.delete(f"{EMPLOYEES}/{employee_id}").status_code == 200
    assert client.get(f"{EMPLOYEES}/{employee_id}").status_code == 404


def test_employee_unknown_machine_type(client: TestClient) -> None:
    response = client.post(f"{EMPLOYEES}/", json={"name": "Ravi", "machine_type_id": 9})
    assert response.status_code == 400


def test_deleting_machine_type_detaches_employees(client: TestClient, db: Session) -> None:
    machine = MachineTypeFactory.create(db)
    employee = EmployeeFactory.create(db, machine_type=machine)

    assert client.delete(f"{MACHINES}/{machine.id}").status_code == 200

    content = client.get(f"{EMPLOYEES}/{employee.id}").json()
    assert content["machine_type_id"] is None
