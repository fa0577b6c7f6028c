"""Dashboard, date range and report request/response models."""

import datetime as dt
from decimal import Decimal
from pathlib import Path

from sqlmodel import Field, SQLModel

from .job import JobRead


class DateRangeRead(SQLModel):
    date_from: dt.date
    date_to: dt.date
    label: str


class DashboardStats(SQLModel):
    date_from: dt.date
    date_to: dt.date
    total_jobs: int
    total_revenue: Decimal
    total_cooly: Decimal
    total_waste: Decimal
    recent_jobs: list[JobRead] = Field(default_factory=list)


class ReportRequest(SQLModel):
    """
    Parameters of a report run.

    Which fields are required depends on the report type; output_path
    defaults to the configured reports directory.
    """

    date_from: dt.date | None = None
    date_to: dt.date | None = None
    customer_id: int | None = None
    employee_id: int | None = None
    machine_type_id: int | None = None
    job_id: int | None = None
    output_path: Path | None = None


class ReportResult(SQLModel):
    report_type: str
    path: str
