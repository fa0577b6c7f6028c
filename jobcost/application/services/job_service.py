"""
Job application service for coordinating job-related use cases.

Derived amounts (amount, waste_amount, total_amount and each entry's
waste_amount) are always recomputed here with the cost calculator before a
job is written; callers cannot set them.
"""

import json
from dataclasses import asdict
from datetime import date

from jobcost.core.exceptions import EntityNotFoundError, ValidationError
from jobcost.core.observability import get_logger
from jobcost.domain.cost_calculator import CostBreakdown, calculate_job_cost
from jobcost.infrastructure.database.repositories import (
    CustomerRepository,
    EmployeeRepository,
    ItemRepository,
    JobMachineEntryRepository,
    JobRepository,
)
from jobcost.models import (
    Job,
    JobCostBreakdown,
    JobCostRequest,
    JobCreate,
    JobFilters,
    JobInputs,
    JobMachineEntry,
    JobMachineEntryCreate,
    JobMachineEntryIn,
    JobMachineEntryRead,
    JobRead,
    JobUpdate,
)
from jobcost.models.base import MAX_MONEY, utcnow

from .base_service import ApplicationServiceBase
from .machine_service import MachineService

logger = get_logger(__name__)


def _within_money_limit(breakdown: CostBreakdown) -> None:
    if breakdown.grand_total > MAX_MONEY:
        raise ValidationError(
            "total_amount",
            str(breakdown.grand_total),
            f"total amount cannot exceed {MAX_MONEY}",
        )


def _apply_breakdown(job: Job, breakdown: CostBreakdown) -> None:
    _within_money_limit(breakdown)
    job.amount = breakdown.base_amount
    job.waste_amount = breakdown.waste_amount
    job.total_amount = breakdown.grand_total


class JobService(ApplicationServiceBase):
    """
    Application service for job-related operations.

    Coordinates cost calculation, job numbering, machine entry validation and
    the joined lookups used by the job list, auto-fill and reports.
    """

    def __init__(
        self,
        job_repository: JobRepository,
        entry_repository: JobMachineEntryRepository,
        customer_repository: CustomerRepository,
        item_repository: ItemRepository,
        employee_repository: EmployeeRepository,
        machine_service: MachineService,
    ):
        self._jobs = job_repository
        self._entries = entry_repository
        self._customers = customer_repository
        self._items = item_repository
        self._employees = employee_repository
        self._machines = machine_service

    # Calculation

    def calculate(self, request: JobCostRequest) -> JobCostBreakdown:
        """Preview the cost breakdown for unsaved form inputs."""
        breakdown = calculate_job_cost(
            request.quantity,
            request.rate,
            request.cooly,
            request.waste_percentage,
            request.machine_entries,
        )
        _within_money_limit(breakdown)
        return JobCostBreakdown.model_validate(asdict(breakdown))

    def _build_entries(
        self, entries_in: list[JobMachineEntryIn], inputs: JobInputs
    ) -> tuple[list[JobMachineEntry], CostBreakdown]:
        for index, entry in enumerate(entries_in):
            self._check_entry_data(entry, index)

        breakdown = calculate_job_cost(
            inputs.quantity,
            inputs.rate,
            inputs.cooly,
            inputs.waste_percentage,
            entries_in,
        )
        entries = [
            JobMachineEntry(
                machine_type_id=entry_in.machine_type_id,
                machine_custom_data=json.dumps(entry_in.machine_custom_data),
                cost=cost.cost,
                waste_percentage=cost.waste_percentage,
                waste_amount=cost.waste_amount,
            )
            for entry_in, cost in zip(entries_in, breakdown.entries, strict=True)
        ]
        return entries, breakdown

    def _check_entry_data(self, entry: JobMachineEntryIn, index: int = 0) -> None:
        try:
            self._machines.validate_custom_data(
                entry.machine_type_id, entry.machine_custom_data
            )
        except EntityNotFoundError as e:
            raise ValidationError(
                "machine_type_id", entry.machine_type_id, e.message
            ) from e
        except ValidationError as e:
            e.details["entry_index"] = index
            raise

    def _validate_references(
        self,
        customer_id: int | None = None,
        item_id: int | None = None,
        employee_id: int | None = None,
    ) -> None:
        self.validate_reference(self._customers, customer_id, "customer_id")
        self.validate_reference(self._items, item_id, "item_id")
        self.validate_reference(self._employees, employee_id, "employee_id")

    # Jobs

    def list_jobs(self, filters: JobFilters | None = None) -> list[JobRead]:
        return self._jobs.find_with_filters(filters)

    def get_job(self, job_id: int) -> JobRead:
        job = self._jobs.get_read(job_id)
        if job is None:
            raise self.entity_not_found_error("Job", job_id)
        return job

    def create_job(self, request: JobCreate) -> JobRead:
        """
        Create a job with its machine entries.

        The job number is allocated and the rows inserted in one transaction.

        Raises:
            ValidationError: If a reference or machine entry is invalid
            EntityAlreadyExistsError: If the job number was taken concurrently
            DatabaseError: If database operation fails
        """
        self._validate_references(
            request.customer_id, request.item_id, request.employee_id
        )
        entries, breakdown = self._build_entries(request.machine_entries, request)

        job_data = request.model_dump(exclude={"machine_entries"})
        job_data["job_number"] = self._jobs.next_job_number(request.date)
        job = Job.model_validate(job_data)
        _apply_breakdown(job, breakdown)
        job = self._jobs.create_with_entries(job, entries)

        logger.info(
            "Job created",
            job_id=job.id,
            job_number=job.job_number,
            entry_count=len(entries),
            total_amount=str(job.total_amount),
        )
        return self.get_job(job.id)

    def update_job(self, job_id: int, request: JobUpdate) -> JobRead:
        """
        Apply a partial update and recompute the job's derived amounts.

        When machine_entries is given it replaces the job's entries; otherwise
        the stored entries are kept with their recorded waste amounts.
        """
        job = self._jobs.get_by_id_required(job_id)
        changes = request.model_dump(exclude_unset=True, exclude={"machine_entries"})
        for field in ("date", "customer_id", "item_id", "quantity", "rate", "status"):
            if field in changes and changes[field] is None:
                raise ValidationError(field, None, f"{field} cannot be cleared")
        if "notes" in changes and changes["notes"] is not None:
            changes["notes"] = changes["notes"].strip() or None
        for field in ("cooly", "waste_percentage"):
            if field in changes and changes[field] is None:
                changes.pop(field)

        self._validate_references(
            changes.get("customer_id"), changes.get("item_id"), changes.get("employee_id")
        )

        job.sqlmodel_update(changes)
        inputs = JobInputs(
            quantity=job.quantity,
            rate=job.rate,
            cooly=job.cooly,
            waste_percentage=job.waste_percentage,
        )

        new_entries = None
        if request.machine_entries is not None:
            new_entries, breakdown = self._build_entries(request.machine_entries, inputs)
        else:
            breakdown = calculate_job_cost(
                inputs.quantity,
                inputs.rate,
                inputs.cooly,
                inputs.waste_percentage,
                job.machine_entries,
            )

        _apply_breakdown(job, breakdown)
        job.updated_at = utcnow()
        self._jobs.update_with_entries(job, new_entries)

        logger.info(
            "Job updated",
            job_id=job_id,
            fields=sorted(changes),
            entries_replaced=new_entries is not None,
        )
        return self.get_job(job_id)

    def delete_job(self, job_id: int) -> None:
        if not self._jobs.delete(job_id):
            raise self.entity_not_found_error("Job", job_id)
        logger.info("Job deleted", job_id=job_id)

    # Lookups

    def get_autofill(self, customer_id: int, item_id: int) -> JobRead | None:
        """Most recent job for the customer and item, used to prefill a new job."""
        return self._jobs.find_latest_for(customer_id, item_id)

    def jobs_for_report(
        self, date_from: date, date_to: date, customer_id: int | None = None
    ) -> list[JobRead]:
        return self._jobs.find_for_period(date_from, date_to, customer_id=customer_id)

    def jobs_by_customer(
        self,
        customer_id: int,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[JobRead]:
        return self._jobs.find_for_period(date_from, date_to, customer_id=customer_id)

    def jobs_by_machine_type(
        self,
        machine_type_id: int,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[JobRead]:
        return self._jobs.find_for_period(
            date_from, date_to, machine_type_id=machine_type_id
        )

    def jobs_by_employee(
        self,
        employee_id: int,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[JobRead]:
        return self._jobs.find_for_period(date_from, date_to, employee_id=employee_id)

    # Machine entries

    def list_entries(self, job_id: int) -> list[JobMachineEntryRead]:
        self._jobs.get_by_id_required(job_id)
        return self._entries.list_by_job(job_id)

    def _recalculate(self, job: Job, entries: list[JobMachineEntry]) -> CostBreakdown:
        breakdown = calculate_job_cost(
            job.quantity, job.rate, job.cooly, job.waste_percentage, entries
        )
        _apply_breakdown(job, breakdown)
        job.updated_at = utcnow()
        return breakdown

    def add_entry(self, request: JobMachineEntryCreate) -> JobMachineEntryRead:
        """Add one machine entry to a job and recompute the job's totals."""
        job = self._jobs.get_by_id_required(request.job_id)
        self._check_entry_data(request)

        # The new entry's waste is resolved against the job's base amount.
        pending = {
            "cost": request.cost,
            "waste_percentage": request.waste_percentage,
            "waste_amount": request.waste_amount,
        }
        breakdown = self._recalculate(job, [*job.machine_entries, pending])
        cost = breakdown.entries[-1]
        entry = JobMachineEntry(
            job_id=job.id,
            machine_type_id=request.machine_type_id,
            machine_custom_data=json.dumps(request.machine_custom_data),
            cost=cost.cost,
            waste_percentage=cost.waste_percentage,
            waste_amount=cost.waste_amount,
        )
        self._jobs.save_entry_change(job, added=entry)
        logger.info("Machine entry added", job_id=job.id, entry_id=entry.id)
        return self._entries.get_read(entry.id)

    def delete_entry(self, entry_id: int) -> None:
        """Remove one machine entry and recompute its job's totals."""
        entry = self._entries.get_by_id_required(entry_id)
        job = self._jobs.get_by_id_required(entry.job_id)
        remaining = [e for e in job.machine_entries if e.id != entry_id]
        self._recalculate(job, remaining)
        self._jobs.save_entry_change(job, removed=entry)
        logger.info("Machine entry deleted", job_id=job.id, entry_id=entry_id)
