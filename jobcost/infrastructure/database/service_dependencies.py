"""
Service Dependencies for application service injection.

This module wires repositories into application services for FastAPI
endpoints. Every repository resolved within one request shares that
request's session.
"""

from typing import Annotated

from fastapi import Depends

from jobcost.application.services import (
    CategoryService,
    CustomerService,
    DashboardService,
    EmployeeService,
    ItemService,
    JobService,
    MachineService,
    ReportService,
)
from jobcost.infrastructure.database.dependencies import (
    CategoryRepositoryDep,
    CustomerRepositoryDep,
    EmployeeRepositoryDep,
    EntryRepositoryDep,
    ItemRepositoryDep,
    JobRepositoryDep,
    MachineTypeRepositoryDep,
)


def get_customer_service(customer_repo: CustomerRepositoryDep) -> CustomerService:
    return CustomerService(customer_repository=customer_repo)


def get_category_service(category_repo: CategoryRepositoryDep) -> CategoryService:
    return CategoryService(category_repository=category_repo)


def get_item_service(
    item_repo: ItemRepositoryDep, category_repo: CategoryRepositoryDep
) -> ItemService:
    return ItemService(item_repository=item_repo, category_repository=category_repo)


def get_machine_service(machine_repo: MachineTypeRepositoryDep) -> MachineService:
    return MachineService(machine_type_repository=machine_repo)


def get_employee_service(
    employee_repo: EmployeeRepositoryDep, machine_repo: MachineTypeRepositoryDep
) -> EmployeeService:
    return EmployeeService(
        employee_repository=employee_repo, machine_type_repository=machine_repo
    )


MachineServiceDep = Annotated[MachineService, Depends(get_machine_service)]
EmployeeServiceDep = Annotated[EmployeeService, Depends(get_employee_service)]


def get_job_service(
    job_repo: JobRepositoryDep,
    entry_repo: EntryRepositoryDep,
    customer_repo: CustomerRepositoryDep,
    item_repo: ItemRepositoryDep,
    employee_repo: EmployeeRepositoryDep,
    machine_service: MachineServiceDep,
) -> JobService:
    """Get Job Service with proper repository injection."""
    return JobService(
        job_repository=job_repo,
        entry_repository=entry_repo,
        customer_repository=customer_repo,
        item_repository=item_repo,
        employee_repository=employee_repo,
        machine_service=machine_service,
    )


JobServiceDep = Annotated[JobService, Depends(get_job_service)]


def get_dashboard_service(job_repo: JobRepositoryDep) -> DashboardService:
    return DashboardService(job_repository=job_repo)


def get_report_service(
    job_service: JobServiceDep,
    customer_repo: CustomerRepositoryDep,
    employee_service: EmployeeServiceDep,
    machine_service: MachineServiceDep,
) -> ReportService:
    """Get Report Service; reports read jobs through the job service."""
    return ReportService(
        job_service=job_service,
        customer_repository=customer_repo,
        employee_service=employee_service,
        machine_service=machine_service,
    )


# Type annotations for dependency injection
CustomerServiceDep = Annotated[CustomerService, Depends(get_customer_service)]
CategoryServiceDep = Annotated[CategoryService, Depends(get_category_service)]
ItemServiceDep = Annotated[ItemService, Depends(get_item_service)]
DashboardServiceDep = Annotated[DashboardService, Depends(get_dashboard_service)]
ReportServiceDep = Annotated[ReportService, Depends(get_report_service)]
