"""Customer API routes."""

from fastapi import APIRouter, status

from jobcost.infrastructure.database.service_dependencies import CustomerServiceDep
from jobcost.models import CustomerCreate, CustomerRead, CustomerUpdate, Message

router = APIRouter(prefix="/customers", tags=["customers"])


@router.get("/", response_model=list[CustomerRead], summary="List customers")
def list_customers(service: CustomerServiceDep):
    """All customers ordered by name."""
    return service.list_customers()


@router.get("/{customer_id}", response_model=CustomerRead, summary="Get customer")
def get_customer(customer_id: int, service: CustomerServiceDep):
    return service.get_customer(customer_id)


@router.post(
    "/",
    response_model=CustomerRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create customer",
)
def create_customer(request: CustomerCreate, service: CustomerServiceDep):
    return service.create_customer(request)


@router.patch("/{customer_id}", response_model=CustomerRead, summary="Update customer")
def update_customer(
    customer_id: int, request: CustomerUpdate, service: CustomerServiceDep
):
    return service.update_customer(customer_id, request)


@router.delete(
    "/{customer_id}",
    response_model=Message,
    summary="Delete customer",
    description="Fails with 409 while jobs still reference the customer.",
)
def delete_customer(customer_id: int, service: CustomerServiceDep) -> Message:
    service.delete_customer(customer_id)
    return Message(message="Customer deleted successfully")
