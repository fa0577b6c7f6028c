"""Routes for adding and removing single machine entries on a job."""

from fastapi import APIRouter, status

from jobcost.infrastructure.database.service_dependencies import JobServiceDep
from jobcost.models import JobMachineEntryCreate, JobMachineEntryRead, Message

router = APIRouter(tags=["machine-entries"])


@router.get(
    "/jobs/{job_id}/machine-entries",
    response_model=list[JobMachineEntryRead],
    summary="List a job's machine entries",
)
def list_entries(job_id: int, service: JobServiceDep):
    return service.list_entries(job_id)


@router.post(
    "/machine-entries",
    response_model=JobMachineEntryRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add machine entry",
    description="Adds an entry and recomputes the parent job's totals.",
)
def create_entry(request: JobMachineEntryCreate, service: JobServiceDep):
    return service.add_entry(request)


@router.delete(
    "/machine-entries/{entry_id}",
    response_model=Message,
    summary="Delete machine entry",
    description="Removes an entry and recomputes the parent job's totals.",
)
def delete_entry(entry_id: int, service: JobServiceDep) -> Message:
    service.delete_entry(entry_id)
    return Message(message="Machine entry deleted successfully")
