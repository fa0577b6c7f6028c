"""Job and job machine entry SQLModels."""

import datetime as dt
from decimal import Decimal
from typing import Any

from pydantic import field_validator
from sqlmodel import Field, Relationship, SQLModel

from .base import MAX_QUANTITY, MONEY_DIGITS, PERCENT_DIGITS, JobStatus, utcnow


class JobMachineEntryBase(SQLModel):
    """Machine line item fields shared by create payloads and the table."""

    machine_type_id: int = Field(foreign_key="machine_types.id", index=True)
    cost: Decimal = Field(
        default=Decimal("0"), ge=0, max_digits=MONEY_DIGITS, decimal_places=2
    )
    waste_percentage: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        le=100,
        max_digits=PERCENT_DIGITS,
        decimal_places=2,
    )


class JobMachineEntry(JobMachineEntryBase, table=True):
    """
    JobMachineEntry table model.

    One machine or process used on a job, with the values of the machine
    type's custom fields stored as a JSON object.
    """

    __tablename__ = "job_machine_entries"

    id: int | None = Field(default=None, primary_key=True)
    job_id: int = Field(foreign_key="jobs.id", ondelete="CASCADE", index=True)
    machine_custom_data: str = Field(default="{}")
    waste_amount: Decimal = Field(
        default=Decimal("0"), ge=0, max_digits=MONEY_DIGITS, decimal_places=2
    )

    job: "Job" = Relationship(back_populates="machine_entries")


class JobMachineEntryIn(JobMachineEntryBase):
    """
    Machine entry as submitted with a job.

    When waste_amount is omitted it is derived from waste_percentage of the
    job's base amount.
    """

    machine_custom_data: dict[str, Any] = Field(default_factory=dict)
    waste_amount: Decimal | None = Field(
        default=None, ge=0, max_digits=MONEY_DIGITS, decimal_places=2
    )


class JobMachineEntryCreate(JobMachineEntryIn):
    job_id: int


class JobMachineEntryRead(JobMachineEntryBase):
    id: int
    job_id: int
    machine_type_name: str | None = None
    machine_custom_data: dict[str, Any]
    waste_amount: Decimal


class JobInputs(SQLModel):
    """Form inputs that drive the cost calculation."""

    quantity: int = Field(gt=0, le=MAX_QUANTITY)
    rate: Decimal = Field(gt=0, max_digits=MONEY_DIGITS, decimal_places=2)
    cooly: Decimal = Field(
        default=Decimal("0"), ge=0, max_digits=MONEY_DIGITS, decimal_places=2
    )
    waste_percentage: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        le=100,
        max_digits=PERCENT_DIGITS,
        decimal_places=2,
    )


class JobBase(JobInputs):
    """Base job fields."""

    date: dt.date = Field(index=True)
    customer_id: int = Field(foreign_key="customers.id", index=True)
    employee_id: int | None = Field(
        default=None, foreign_key="employees.id", ondelete="SET NULL"
    )
    item_id: int = Field(foreign_key="items.id", index=True)
    notes: str | None = Field(default=None, max_length=2000)
    status: JobStatus = Field(default=JobStatus.DRAFT)


class Job(JobBase, table=True):
    """
    Job table model.

    amount, waste_amount and total_amount are derived by the cost calculator
    and rewritten on every save.
    """

    __tablename__ = "jobs"

    id: int | None = Field(default=None, primary_key=True)
    job_number: str = Field(max_length=30, unique=True, index=True)
    amount: Decimal = Field(
        default=Decimal("0"), max_digits=MONEY_DIGITS, decimal_places=2
    )
    waste_amount: Decimal = Field(
        default=Decimal("0"), max_digits=MONEY_DIGITS, decimal_places=2
    )
    total_amount: Decimal = Field(
        default=Decimal("0"), max_digits=MONEY_DIGITS, decimal_places=2
    )
    created_at: dt.datetime = Field(default_factory=utcnow)
    updated_at: dt.datetime = Field(
        default_factory=utcnow, sa_column_kwargs={"onupdate": utcnow}
    )

    machine_entries: list["JobMachineEntry"] = Relationship(
        back_populates="job", cascade_delete=True
    )


class JobCreate(JobBase):
    """Job creation payload. Derived amounts are never accepted from callers."""

    machine_entries: list[JobMachineEntryIn] = Field(default_factory=list)

    @field_validator("notes")
    @classmethod
    def _blank_notes_to_none(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            return None
        return v


class JobUpdate(SQLModel):
    """
    Partial job update.

    machine_entries, when given, replaces the job's entries wholesale.
    """

    date: dt.date | None = None
    customer_id: int | None = None
    employee_id: int | None = None
    item_id: int | None = None
    quantity: int | None = Field(default=None, gt=0, le=MAX_QUANTITY)
    rate: Decimal | None = Field(
        default=None, gt=0, max_digits=MONEY_DIGITS, decimal_places=2
    )
    cooly: Decimal | None = Field(
        default=None, ge=0, max_digits=MONEY_DIGITS, decimal_places=2
    )
    waste_percentage: Decimal | None = Field(
        default=None, ge=0, le=100, max_digits=PERCENT_DIGITS, decimal_places=2
    )
    notes: str | None = Field(default=None, max_length=2000)
    status: JobStatus | None = None
    machine_entries: list[JobMachineEntryIn] | None = None


class JobCostRequest(JobInputs):
    machine_entries: list[JobMachineEntryIn] = Field(default_factory=list)


class JobRead(JobBase):
    id: int
    job_number: str
    amount: Decimal
    waste_amount: Decimal
    total_amount: Decimal
    created_at: dt.datetime
    updated_at: dt.datetime

    # Joined fields
    customer_name: str | None = None
    employee_name: str | None = None
    item_name: str | None = None
    item_size: str | None = None
    category_name: str | None = None
    machine_entries: list[JobMachineEntryRead] = Field(default_factory=list)


class JobFilters(SQLModel):
    search: str | None = None
    status: JobStatus | None = None
    date_from: dt.date | None = None
    date_to: dt.date | None = None
    customer_id: int | None = None


class Meta(SQLModel, table=True):
    """Single key/value rows, e.g. the one-time seed flag."""

    __tablename__ = "meta"

    key: str = Field(primary_key=True, max_length=50)
    value: str | None = None


class MachineEntryCost(SQLModel):
    cost: Decimal
    waste_percentage: Decimal
    waste_amount: Decimal


class JobCostBreakdown(SQLModel):
    """Cost preview returned for a job form."""

    base_amount: Decimal
    cooly_amount: Decimal
    waste_amount: Decimal
    machine_cost: Decimal
    machine_waste_amount: Decimal
    grand_total: Decimal
    entries: list[MachineEntryCost] = Field(default_factory=list)
