import time
from datetime import datetime, timezone
from pathlib import Path

from fastapi import APIRouter
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from jobcost.core.config import settings
from jobcost.core.observability import get_logger
from jobcost.infrastructure.database.dependencies import SessionDep

logger = get_logger(__name__)

router = APIRouter(prefix="/utils", tags=["utils"])


class ServiceHealth(BaseModel):
    name: str
    status: str
    response_time_ms: float | None = None
    error: str | None = None


class HealthCheckResponse(BaseModel):
    status: str
    timestamp: datetime
    environment: str
    services: list[ServiceHealth]


def check_database_health(session: Session) -> ServiceHealth:
    start_time = time.time()
    try:
        session.execute(text("SELECT 1")).scalar_one()
        return ServiceHealth(
            name="database",
            status="healthy",
            response_time_ms=(time.time() - start_time) * 1000,
        )
    except SQLAlchemyError as e:
        logger.error("Database health check failed", error=str(e))
        return ServiceHealth(name="database", status="unhealthy", error=str(e))


def check_reports_dir_health() -> ServiceHealth:
    """The reports directory must exist (or be creatable) and be writable."""
    reports_dir = Path(settings.REPORTS_DIR)
    try:
        reports_dir.mkdir(parents=True, exist_ok=True)
        probe = reports_dir / ".health_check"
        probe.write_text("ok")
        probe.unlink()
        return ServiceHealth(name="reports_dir", status="healthy")
    except OSError as e:
        logger.error("Reports directory health check failed", error=str(e))
        return ServiceHealth(name="reports_dir", status="unhealthy", error=str(e))


@router.get("/health-check/", response_model=HealthCheckResponse)
def health_check(session: SessionDep) -> HealthCheckResponse:
    """Verify the database connection and the reports output directory."""
    services = [check_database_health(session), check_reports_dir_health()]
    overall = (
        "healthy" if all(s.status == "healthy" for s in services) else "unhealthy"
    )
    return HealthCheckResponse(
        status=overall,
        timestamp=datetime.now(timezone.utc),
        environment=settings.ENVIRONMENT,
        services=services,
    )
