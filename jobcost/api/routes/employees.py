"""Employee API routes."""

from fastapi import APIRouter, status

from jobcost.infrastructure.database.service_dependencies import EmployeeServiceDep
from jobcost.models import EmployeeCreate, EmployeeRead, EmployeeUpdate, Message

router = APIRouter(prefix="/employees", tags=["employees"])


@router.get("/", response_model=list[EmployeeRead], summary="List employees")
def list_employees(service: EmployeeServiceDep):
    """All employees ordered by name, with their machine type name."""
    return service.list_employees()


@router.get("/{employee_id}", response_model=EmployeeRead, summary="Get employee")
def get_employee(employee_id: int, service: EmployeeServiceDep):
    return service.get_employee(employee_id)


@router.post(
    "/",
    response_model=EmployeeRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create employee",
)
def create_employee(request: EmployeeCreate, service: EmployeeServiceDep):
    return service.create_employee(request)


@router.patch("/{employee_id}", response_model=EmployeeRead, summary="Update employee")
def update_employee(
    employee_id: int, request: EmployeeUpdate, service: EmployeeServiceDep
):
    return service.update_employee(employee_id, request)


@router.delete("/{employee_id}", response_model=Message, summary="Delete employee")
def delete_employee(employee_id: int, service: EmployeeServiceDep) -> Message:
    service.delete_employee(employee_id)
    return Message(message="Employee deleted successfully")
