"""
Job API routes.

Create and update accept the job's machine entries in the same request and
store them in one transaction. Derived amounts are computed server side.
"""

from datetime import date

from fastapi import APIRouter, Query, status

from jobcost.infrastructure.database.service_dependencies import JobServiceDep
from jobcost.models import (
    JobCostBreakdown,
    JobCostRequest,
    JobCreate,
    JobFilters,
    JobRead,
    JobStatus,
    JobUpdate,
    Message,
)

router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.get(
    "/",
    response_model=list[JobRead],
    summary="List jobs",
    description=(
        "Jobs ordered newest first. `search` matches the job number, "
        "customer name or item name."
    ),
)
def list_jobs(
    service: JobServiceDep,
    search: str | None = Query(None, description="Job number, customer or item"),
    status_filter: JobStatus | None = Query(None, alias="status"),
    date_from: date | None = Query(None),
    date_to: date | None = Query(None),
    customer_id: int | None = Query(None),
):
    filters = JobFilters(
        search=search,
        status=status_filter,
        date_from=date_from,
        date_to=date_to,
        customer_id=customer_id,
    )
    return service.list_jobs(filters)


@router.post(
    "/calculate",
    response_model=JobCostBreakdown,
    summary="Preview job cost",
    description="Cost breakdown for unsaved job inputs; nothing is stored.",
)
def calculate_job_cost(request: JobCostRequest, service: JobServiceDep):
    return service.calculate(request)


@router.get(
    "/autofill",
    response_model=JobRead | None,
    summary="Most recent job for a customer and item",
    description="Returns null when the customer has no job for the item yet.",
)
def get_autofill(
    service: JobServiceDep,
    customer_id: int = Query(...),
    item_id: int = Query(...),
):
    return service.get_autofill(customer_id, item_id)


@router.get("/for-report", response_model=list[JobRead], summary="Jobs in a period")
def jobs_for_report(
    service: JobServiceDep,
    date_from: date = Query(...),
    date_to: date = Query(...),
    customer_id: int | None = Query(None),
):
    return service.jobs_for_report(date_from, date_to, customer_id)


@router.get(
    "/by-customer/{customer_id}",
    response_model=list[JobRead],
    summary="Jobs for a customer",
)
def jobs_by_customer(
    customer_id: int,
    service: JobServiceDep,
    date_from: date | None = Query(None),
    date_to: date | None = Query(None),
):
    return service.jobs_by_customer(customer_id, date_from, date_to)


@router.get(
    "/by-machine-type/{machine_type_id}",
    response_model=list[JobRead],
    summary="Jobs with an entry on a machine type",
)
def jobs_by_machine_type(
    machine_type_id: int,
    service: JobServiceDep,
    date_from: date | None = Query(None),
    date_to: date | None = Query(None),
):
    return service.jobs_by_machine_type(machine_type_id, date_from, date_to)


@router.get(
    "/by-employee/{employee_id}",
    response_model=list[JobRead],
    summary="Jobs assigned to an employee",
)
def jobs_by_employee(
    employee_id: int,
    service: JobServiceDep,
    date_from: date | None = Query(None),
    date_to: date | None = Query(None),
):
    return service.jobs_by_employee(employee_id, date_from, date_to)


@router.get("/{job_id}", response_model=JobRead, summary="Get job")
def get_job(job_id: int, service: JobServiceDep):
    return service.get_job(job_id)


@router.post(
    "/",
    response_model=JobRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create job",
    description="Assigns the next job number for the job date.",
    responses={400: {"description": "Invalid reference or machine entry data"}},
)
def create_job(request: JobCreate, service: JobServiceDep):
    return service.create_job(request)


@router.patch(
    "/{job_id}",
    response_model=JobRead,
    summary="Update job",
    description="When machine_entries is given it replaces the job's entries.",
)
def update_job(job_id: int, request: JobUpdate, service: JobServiceDep):
    return service.update_job(job_id, request)


@router.delete("/{job_id}", response_model=Message, summary="Delete job")
def delete_job(job_id: int, service: JobServiceDep) -> Message:
    service.delete_job(job_id)
    return Message(message="Job deleted successfully")
