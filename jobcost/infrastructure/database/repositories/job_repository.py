"""
Job and job machine entry repositories.

Jobs are read through one joined select (customer, employee, item and
category names) and their machine entries are attached in a second query.
Writes that touch a job together with its entries commit once, so a failure
leaves neither half behind.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import select

from jobcost.domain.cost_calculator import to_money
from jobcost.domain.job_numbers import (
    format_job_number,
    job_number_prefix,
    next_sequence,
    parse_job_number,
)
from jobcost.models import (
    Customer,
    Employee,
    Item,
    ItemCategory,
    Job,
    JobCreate,
    JobFilters,
    JobMachineEntry,
    JobMachineEntryCreate,
    JobMachineEntryRead,
    JobRead,
    JobUpdate,
    MachineType,
)

from .base import (
    BaseRepository,
    DatabaseError,
    EntityAlreadyExistsError,
)
from .mappers import JobMapper


def _escape_like(text: str) -> str:
    """Make LIKE wildcards in user text match literally."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


@dataclass(frozen=True)
class JobTotals:
    """Aggregates over the jobs of a period."""

    total_jobs: int
    total_revenue: Decimal
    total_cooly: Decimal
    total_waste: Decimal


class JobRepository(BaseRepository[Job, JobCreate, JobUpdate]):
    """Repository for jobs, their machine entries and job lookups."""

    @property
    def entity_class(self) -> type[Job]:
        return Job

    # Joined reads

    def _joined_select(self):
        return (
            select(
                Job,
                Customer.name,
                Employee.name,
                Item.name,
                Item.size,
                ItemCategory.name,
            )
            .outerjoin(Customer, Job.customer_id == Customer.id)
            .outerjoin(Employee, Job.employee_id == Employee.id)
            .outerjoin(Item, Job.item_id == Item.id)
            .outerjoin(ItemCategory, Item.category_id == ItemCategory.id)
        )

    def _entries_for(self, job_ids: list[int]) -> dict[int, list[JobMachineEntryRead]]:
        if not job_ids:
            return {}
        statement = (
            select(JobMachineEntry, MachineType.name)
            .outerjoin(MachineType, JobMachineEntry.machine_type_id == MachineType.id)
            .where(JobMachineEntry.job_id.in_(job_ids))
            .order_by(JobMachineEntry.id)
        )
        grouped: dict[int, list[JobMachineEntryRead]] = {}
        for entry, machine_type_name in self.session.exec(statement).all():
            grouped.setdefault(entry.job_id, []).append(
                JobMapper.entry_to_read(entry, machine_type_name)
            )
        return grouped

    def _read(self, statement, operation: str) -> list[JobRead]:
        try:
            rows = self.session.exec(statement).all()
            entries = self._entries_for([row[0].id for row in rows])
        except SQLAlchemyError as e:
            raise DatabaseError(f"Database error during {operation}: {str(e)}") from e

        return [
            JobMapper.job_to_read(*row, entries=entries.get(row[0].id, []))
            for row in rows
        ]

    @staticmethod
    def _newest_first(statement):
        return statement.order_by(Job.date.desc(), Job.id.desc())

    def find_with_filters(self, filters: JobFilters | None = None) -> list[JobRead]:
        """
        List jobs newest first.

        search matches job number, customer name or item name (substring,
        case-insensitive); the other filters are exact or inclusive bounds.
        """
        filters = filters or JobFilters()
        statement = self._joined_select()
        if filters.status:
            statement = statement.where(Job.status == filters.status)
        if filters.date_from:
            statement = statement.where(Job.date >= filters.date_from)
        if filters.date_to:
            statement = statement.where(Job.date <= filters.date_to)
        if filters.customer_id:
            statement = statement.where(Job.customer_id == filters.customer_id)
        if filters.search:
            pattern = f"%{_escape_like(filters.search.strip())}%"
            statement = statement.where(
                or_(
                    Job.job_number.ilike(pattern, escape="\\"),
                    Customer.name.ilike(pattern, escape="\\"),
                    Item.name.ilike(pattern, escape="\\"),
                )
            )
        return self._read(self._newest_first(statement), "find_with_filters")

    def get_read(self, job_id: int) -> JobRead | None:
        rows = self._read(self._joined_select().where(Job.id == job_id), "get_read")
        return rows[0] if rows else None

    def find_latest_for(self, customer_id: int, item_id: int) -> JobRead | None:
        """Most recent job for a customer and item, or None."""
        statement = self._newest_first(
            self._joined_select().where(
                Job.customer_id == customer_id, Job.item_id == item_id
            )
        ).limit(1)
        rows = self._read(statement, "find_latest_for")
        return rows[0] if rows else None

    def find_for_period(
        self,
        date_from: date | None = None,
        date_to: date | None = None,
        customer_id: int | None = None,
        employee_id: int | None = None,
        machine_type_id: int | None = None,
    ) -> list[JobRead]:
        """Jobs in an inclusive date range, optionally narrowed, newest first."""
        statement = self._joined_select()
        if date_from:
            statement = statement.where(Job.date >= date_from)
        if date_to:
            statement = statement.where(Job.date <= date_to)
        if customer_id is not None:
            statement = statement.where(Job.customer_id == customer_id)
        if employee_id is not None:
            statement = statement.where(Job.employee_id == employee_id)
        if machine_type_id is not None:
            used_on_machine = select(JobMachineEntry.job_id).where(
                JobMachineEntry.machine_type_id == machine_type_id
            )
            statement = statement.where(Job.id.in_(used_on_machine))
        return self._read(self._newest_first(statement), "find_for_period")

    def recent(self, limit: int) -> list[JobRead]:
        return self._read(
            self._newest_first(self._joined_select()).limit(limit), "recent"
        )

    def totals(self, date_from: date, date_to: date) -> JobTotals:
        try:
            statement = select(
                func.count(Job.id),
                func.sum(Job.total_amount),
                func.sum(Job.cooly),
                func.sum(Job.waste_amount),
            ).where(Job.date >= date_from, Job.date <= date_to)
            count, revenue, cooly, waste = self.session.exec(statement).one()
        except SQLAlchemyError as e:
            raise DatabaseError(f"Database error during totals: {str(e)}") from e

        return JobTotals(
            total_jobs=count or 0,
            total_revenue=to_money(revenue or 0),
            total_cooly=to_money(cooly or 0),
            total_waste=to_money(waste or 0),
        )

    # Job numbers

    def next_job_number(self, job_date: date) -> str:
        """
        Number for a new job on job_date.

        Runs in the caller's transaction so the count and the insert that
        follows see the same rows.
        """
        try:
            count = self.session.exec(
                select(func.count()).select_from(Job).where(Job.date == job_date)
            ).one()
            numbers = self.session.exec(
                select(Job.job_number).where(
                    Job.job_number.startswith(job_number_prefix(job_date))
                )
            ).all()
        except SQLAlchemyError as e:
            raise DatabaseError(f"Database error during next_job_number: {str(e)}") from e

        taken = {parse_job_number(number)[1] for number in numbers}
        return format_job_number(job_date, next_sequence(count, taken))

    # Writes

    def _commit(self, job: Job, operation: str) -> Job:
        try:
            self.session.add(job)
            self.session.commit()
            self.session.refresh(job)
            return job
        except IntegrityError as e:
            self.session.rollback()
            raise EntityAlreadyExistsError(
                f"Job violates a constraint during {operation}: {str(e.orig)}"
            ) from e
        except SQLAlchemyError as e:
            self.session.rollback()
            raise DatabaseError(f"Database error during {operation}: {str(e)}") from e

    def create_with_entries(self, job: Job, entries: list[JobMachineEntry]) -> Job:
        """Insert a job and its machine entries in one transaction."""
        job.machine_entries = list(entries)
        return self._commit(job, "create_with_entries")

    def update_with_entries(
        self, job: Job, entries: list[JobMachineEntry] | None = None
    ) -> Job:
        """
        Persist changes to a job, replacing its machine entries when given.

        The delete of the old entries, the inserts of the new ones and the job
        update share one transaction.
        """
        try:
            if entries is not None:
                for old_entry in list(job.machine_entries):
                    self.session.delete(old_entry)
                self.session.flush()
                self.session.expire(job, ["machine_entries"])
                for entry in entries:
                    entry.job_id = job.id
                    self.session.add(entry)
        except SQLAlchemyError as e:
            self.session.rollback()
            raise DatabaseError(f"Database error during update_with_entries: {str(e)}") from e
        return self._commit(job, "update_with_entries")

    def save_entry_change(
        self,
        job: Job,
        added: JobMachineEntry | None = None,
        removed: JobMachineEntry | None = None,
    ) -> Job:
        """Add or remove a single entry together with the job's recomputed totals."""
        if added is not None:
            added.job_id = job.id
            self.session.add(added)
        if removed is not None:
            self.session.delete(removed)
        return self._commit(job, "save_entry_change")


class JobMachineEntryRepository(
    BaseRepository[JobMachineEntry, JobMachineEntryCreate, JobMachineEntryCreate]
):
    @property
    def entity_class(self) -> type[JobMachineEntry]:
        return JobMachineEntry

    def list_by_job(self, job_id: int) -> list[JobMachineEntryRead]:
        try:
            statement = (
                select(JobMachineEntry, MachineType.name)
                .outerjoin(
                    MachineType, JobMachineEntry.machine_type_id == MachineType.id
                )
                .where(JobMachineEntry.job_id == job_id)
                .order_by(JobMachineEntry.id)
            )
            rows = self.session.exec(statement).all()
        except SQLAlchemyError as e:
            raise DatabaseError(f"Database error during list_by_job: {str(e)}") from e
        return [JobMapper.entry_to_read(entry, name) for entry, name in rows]

    def get_read(self, entry_id: int) -> JobMachineEntryRead:
        entry = self.get_by_id_required(entry_id)
        machine_type = self.session.get(MachineType, entry.machine_type_id)
        return JobMapper.entry_to_read(
            entry, machine_type.name if machine_type else None
        )
