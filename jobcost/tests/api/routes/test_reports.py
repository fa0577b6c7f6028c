from datetime import date
from pathlib import Path

from fastapi.testclient import TestClient
from sqlmodel import Session

from jobcost.core.config import settings
from jobcost.tests.utils.factories import JobFactory

REPORTS = f"{settings.API_V1_STR}/reports"


def test_generate_job_detail(client: TestClient, db: Session, tmp_path: Path) -> None:
    job = JobFactory.create(db, job_date=date(2024, 3, 2), notes="Urgent")
    output = tmp_path / "job.pdf"

    response = client.post(
        f"{REPORTS}/job-detail", json={"job_id": job.id, "output_path": str(output)}
    )

    assert response.status_code == 200
    assert response.json() == {"report_type": "job-detail", "path": str(output)}
    assert output.read_bytes().startswith(b"%PDF")


def test_generate_waste_report(client: TestClient, db: Session, tmp_path: Path) -> None:
    JobFactory.create(db, job_date=date(2024, 3, 2), waste_percentage="2")
    output = tmp_path / "waste.pdf"
    response = client.post(
        f"{REPORTS}/waste-report",
        json={"date_from": "2024-03-01", "date_to": "2024-03-31", "output_path": str(output)},
    )
    assert response.status_code == 200
    assert output.exists()


def test_unknown_report_type(client: TestClient) -> None:
    response = client.post(f"{REPORTS}/forecast", json={})
    assert response.status_code == 400
    assert "Unknown report type" in response.json()["detail"]


def test_missing_parameter(client: TestClient) -> None:
    response = client.post(f"{REPORTS}/cost-summary", json={"date_from": "2024-03-01"})
    assert response.status_code == 400
    assert response.json()["error"]["details"]["field"] == "date_to"


def test_missing_customer(client: TestClient) -> None:
    response = client.post(f"{REPORTS}/customer-wise", json={"customer_id": 42})
    assert response.status_code == 404
