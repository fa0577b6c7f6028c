"""
Machine type API routes.

Besides CRUD, exposes each machine type's custom field schema and a check of
entry data against it, used by job forms before submitting.
"""

from typing import Any

from fastapi import APIRouter, Body, status

from jobcost.infrastructure.database.service_dependencies import MachineServiceDep
from jobcost.models import (
    MachineFieldSchema,
    MachineTypeCreate,
    MachineTypeRead,
    MachineTypeUpdate,
    Message,
)

router = APIRouter(prefix="/machines", tags=["machines"])


@router.get("/", response_model=list[MachineTypeRead], summary="List machine types")
def list_machine_types(service: MachineServiceDep):
    return service.list_machine_types()


@router.get(
    "/{machine_type_id}", response_model=MachineTypeRead, summary="Get machine type"
)
def get_machine_type(machine_type_id: int, service: MachineServiceDep):
    return service.get_machine_type(machine_type_id)


@router.post(
    "/",
    response_model=MachineTypeRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create machine type",
)
def create_machine_type(request: MachineTypeCreate, service: MachineServiceDep):
    return service.create_machine_type(request)


@router.patch(
    "/{machine_type_id}",
    response_model=MachineTypeRead,
    summary="Update machine type",
)
def update_machine_type(
    machine_type_id: int, request: MachineTypeUpdate, service: MachineServiceDep
):
    return service.update_machine_type(machine_type_id, request)


@router.delete(
    "/{machine_type_id}",
    response_model=Message,
    summary="Delete machine type",
    description="Fails with 409 while machine entries still reference it.",
)
def delete_machine_type(machine_type_id: int, service: MachineServiceDep) -> Message:
    service.delete_machine_type(machine_type_id)
    return Message(message="Machine type deleted successfully")


@router.get(
    "/{machine_type_id}/schema",
    response_model=list[MachineFieldSchema],
    summary="Get custom field schema",
)
def get_schema(machine_type_id: int, service: MachineServiceDep):
    return service.get_schema(machine_type_id)


@router.post(
    "/{machine_type_id}/validate-custom-data",
    response_model=dict[str, Any],
    summary="Validate machine entry data",
    description=(
        "Checks required fields are present, number fields are numeric and "
        "select values are among the options. Returns the data when valid."
    ),
    responses={400: {"description": "Data does not satisfy the schema"}},
)
def validate_custom_data(
    machine_type_id: int,
    service: MachineServiceDep,
    data: dict[str, Any] = Body(...),
):
    return service.validate_custom_data(machine_type_id, data)
