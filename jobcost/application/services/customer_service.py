"""Customer application service."""

from jobcost.core.observability import get_logger
from jobcost.infrastructure.database.repositories import CustomerRepository
from jobcost.models import Customer, CustomerCreate, CustomerUpdate

from .base_service import ApplicationServiceBase

logger = get_logger(__name__)


class CustomerService(ApplicationServiceBase):
    def __init__(self, customer_repository: CustomerRepository):
        self._customers = customer_repository

    def list_customers(self) -> list[Customer]:
        return self._customers.list_by_name()

    def get_customer(self, customer_id: int) -> Customer:
        return self._customers.get_by_id_required(customer_id)

    def create_customer(self, request: CustomerCreate) -> Customer:
        customer = self._customers.create(request)
        logger.info("Customer created", customer_id=customer.id, name=customer.name)
        return customer

    def update_customer(self, customer_id: int, request: CustomerUpdate) -> Customer:
        changes = request.model_dump(exclude_unset=True)
        if "name" in changes:
            changes["name"] = self.validate_non_empty_string(changes["name"], "name")
        return self._customers.update(customer_id, changes)

    def delete_customer(self, customer_id: int) -> None:
        """
        Delete a customer.

        Raises:
            EntityNotFoundError: If the customer does not exist
            EntityInUseError: If jobs still reference the customer
        """
        if not self._customers.delete(customer_id):
            raise self.entity_not_found_error("Customer", customer_id)
        logger.info("Customer deleted", customer_id=customer_id)
