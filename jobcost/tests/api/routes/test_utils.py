from fastapi.testclient import TestClient

from jobcost.core.config import settings


def test_health_check(client: TestClient) -> None:
    response = client.get(f"{settings.API_V1_STR}/utils/health-check/")
    assert response.status_code == 200
    content = response.json()
    assert content["status"] == "healthy"
    assert content["environment"] == settings.ENVIRONMENT
    assert {s["name"]: s["status"] for s in content["services"]} == {
        "database": "healthy",
        "reports_dir": "healthy",
    }


def test_correlation_id_is_echoed(client: TestClient) -> None:
    response = client.get(
        f"{settings.API_V1_STR}/utils/health-check/",
        headers={"X-Correlation-ID": "test-123"},
    )
    assert response.headers["X-Correlation-ID"] == "test-123"
