"""Customer repository."""

from jobcost.models import Customer, CustomerCreate, CustomerUpdate

from .base import BaseRepository


class CustomerRepository(BaseRepository[Customer, CustomerCreate, CustomerUpdate]):
    @property
    def entity_class(self) -> type[Customer]:
        return Customer

    def list_by_name(self) -> list[Customer]:
        return self.get_all(order_by=(Customer.name, Customer.id))
