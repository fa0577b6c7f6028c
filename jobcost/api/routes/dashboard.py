"""Dashboard statistics and date range presets."""

from datetime import date

from fastapi import APIRouter, Query

from jobcost.infrastructure.database.service_dependencies import DashboardServiceDep
from jobcost.models import DashboardStats, DateRangeRead

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get(
    "/stats",
    response_model=DashboardStats,
    summary="Dashboard statistics",
    description=(
        "Job count, revenue, cooly and waste totals over the period "
        "(current month by default) plus the most recent jobs."
    ),
)
def get_stats(
    service: DashboardServiceDep,
    date_from: date | None = Query(None),
    date_to: date | None = Query(None),
):
    return service.get_stats(date_from, date_to)


@router.get(
    "/date-ranges/{key}",
    response_model=DateRangeRead,
    summary="Resolve a date range preset",
    description="today, this-week, this-month, last-week or last-month.",
)
def get_date_range(key: str, service: DashboardServiceDep):
    return service.date_range(key)
