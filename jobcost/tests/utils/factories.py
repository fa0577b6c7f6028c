"""
Test Data Factories

Factory classes that insert rows through the repositories and services, so
derived job amounts come from the same code paths the API uses.
"""

from datetime import date
from decimal import Decimal
from typing import Any

from sqlmodel import Session

from jobcost.application.services import JobService, MachineService
from jobcost.infrastructure.database.repositories import (
    CustomerRepository,
    EmployeeRepository,
    ItemCategoryRepository,
    ItemRepository,
    JobMachineEntryRepository,
    JobRepository,
    MachineTypeRepository,
)
from jobcost.models import (
    Customer,
    Employee,
    Item,
    ItemCategory,
    JobCreate,
    JobMachineEntryIn,
    JobRead,
    JobStatus,
    MachineType,
    MachineTypeCreate,
)

from .utils import random_lower_string

CUTTER_FIELDS: list[dict[str, Any]] = [
    {"name": "size", "label": "Size", "type": "text", "required": True},
    {"name": "sheets", "label": "Sheets", "type": "number", "required": False},
    {
        "name": "finish",
        "label": "Finish",
        "type": "select",
        "required": False,
        "options": ["matt", "gloss"],
    },
]


def make_job_service(session: Session) -> JobService:
    machine_service = MachineService(MachineTypeRepository(session))
    return JobService(
        job_repository=JobRepository(session),
        entry_repository=JobMachineEntryRepository(session),
        customer_repository=CustomerRepository(session),
        item_repository=ItemRepository(session),
        employee_repository=EmployeeRepository(session),
        machine_service=machine_service,
    )


class CustomerFactory:
    @staticmethod
    def create(
        session: Session,
        name: str | None = None,
        phone: str | None = None,
        address: str | None = None,
    ) -> Customer:
        customer = Customer(
            name=name or f"Customer {random_lower_string(6)}",
            phone=phone,
            address=address,
        )
        return CustomerRepository(session).save(customer)


class CategoryFactory:
    @staticmethod
    def create(session: Session, name: str | None = None) -> ItemCategory:
        category = ItemCategory(name=name or f"Category {random_lower_string(6)}")
        return ItemCategoryRepository(session).save(category)


class ItemFactory:
    @staticmethod
    def create(
        session: Session,
        category: ItemCategory | None = None,
        name: str | None = None,
        size: str = "A4",
    ) -> Item:
        category = category or CategoryFactory.create(session)
        item = Item(
            name=name or f"Item {random_lower_string(6)}",
            category_id=category.id,
            size=size,
        )
        return ItemRepository(session).save(item)


class MachineTypeFactory:
    @staticmethod
    def create(
        session: Session,
        name: str | None = None,
        fields: list[dict[str, Any]] | None = None,
    ) -> MachineType:
        request = MachineTypeCreate(
            name=name or f"Machine {random_lower_string(6)}",
            model="Cutting Machine",
            custom_fields_schema=CUTTER_FIELDS if fields is None else fields,
        )
        read = MachineService(MachineTypeRepository(session)).create_machine_type(
            request
        )
        return MachineTypeRepository(session).get_by_id_required(read.id)


class EmployeeFactory:
    @staticmethod
    def create(
        session: Session,
        machine_type: MachineType | None = None,
        name: str | None = None,
    ) -> Employee:
        employee = Employee(
            name=name or f"Employee {random_lower_string(6)}",
            machine_type_id=machine_type.id if machine_type else None,
        )
        return EmployeeRepository(session).save(employee)


class JobFactory:
    """Creates jobs through JobService so numbering and totals are real."""

    @staticmethod
    def create(
        session: Session,
        customer: Customer | None = None,
        item: Item | None = None,
        job_date: date | None = None,
        quantity: int = 1000,
        rate: str = "5",
        cooly: str = "0",
        waste_percentage: str = "0",
        employee: Employee | None = None,
        entries: list[dict[str, Any]] | None = None,
        status: JobStatus = JobStatus.DRAFT,
        notes: str | None = None,
    ) -> JobRead:
        customer = customer or CustomerFactory.create(session)
        item = item or ItemFactory.create(session)
        request = JobCreate(
            date=job_date or date(2024, 3, 15),
            customer_id=customer.id,
            item_id=item.id,
            employee_id=employee.id if employee else None,
            quantity=quantity,
            rate=Decimal(rate),
            cooly=Decimal(cooly),
            waste_percentage=Decimal(waste_percentage),
            status=status,
            notes=notes,
            machine_entries=[JobMachineEntryIn(**entry) for entry in entries or []],
        )
        return make_job_service(session).create_job(request)
