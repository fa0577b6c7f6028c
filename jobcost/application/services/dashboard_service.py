"""Dashboard statistics over a period, defaulting to the current month."""

from datetime import date

from jobcost.core.config import settings
from jobcost.core.exceptions import ValidationError
from jobcost.domain.date_ranges import DateRangeKey, get_date_range
from jobcost.infrastructure.database.repositories import JobRepository
from jobcost.models import DashboardStats, DateRangeRead

from .base_service import ApplicationServiceBase


class DashboardService(ApplicationServiceBase):
    def __init__(self, job_repository: JobRepository):
        self._jobs = job_repository

    def date_range(self, key: str, today: date | None = None) -> DateRangeRead:
        try:
            preset = DateRangeKey(key)
        except ValueError as e:
            raise ValidationError(
                "range",
                key,
                f"Unknown date range. Expected one of: "
                f"{', '.join(k.value for k in DateRangeKey)}",
            ) from e
        resolved = get_date_range(preset, today)
        return DateRangeRead(
            date_from=resolved.date_from, date_to=resolved.date_to, label=resolved.label
        )

    def get_stats(
        self,
        date_from: date | None = None,
        date_to: date | None = None,
        today: date | None = None,
    ) -> DashboardStats:
        """
        Totals over jobs dated within the period plus the most recent jobs.

        Either bound left out falls back to the current month's bound.
        """
        month = get_date_range(DateRangeKey.THIS_MONTH, today)
        date_from = date_from or month.date_from
        date_to = date_to or month.date_to
        if date_from > date_to:
            raise ValidationError(
                "date_to", date_to.isoformat(), "date_to must not be before date_from"
            )

        totals = self._jobs.totals(date_from, date_to)
        return DashboardStats(
            date_from=date_from,
            date_to=date_to,
            total_jobs=totals.total_jobs,
            total_revenue=totals.total_revenue,
            total_cooly=totals.total_cooly,
            total_waste=totals.total_waste,
            recent_jobs=self._jobs.recent(settings.DASHBOARD_RECENT_JOBS),
        )
