"""
Database dependency injection for FastAPI.

This module provides dependency injection functions for database sessions
and repository instances to be used in FastAPI route handlers.
"""

from collections.abc import Generator
from typing import Annotated

from fastapi import Depends
from sqlmodel import Session

from jobcost.core.db import engine

from .repositories import (
    CustomerRepository,
    EmployeeRepository,
    ItemCategoryRepository,
    ItemRepository,
    JobMachineEntryRepository,
    JobRepository,
    MachineTypeRepository,
)


def get_session() -> Generator[Session, None, None]:
    """
    Create a database session for dependency injection.

    The session is closed when the request is complete. Tests override this
    dependency to bind the app to an in-memory engine.

    Yields:
        Session: SQLModel database session
    """
    with Session(engine) as session:
        yield session


# Type aliases for dependency injection
SessionDep = Annotated[Session, Depends(get_session)]


def get_customer_repository(session: SessionDep) -> CustomerRepository:
    return CustomerRepository(session)


def get_category_repository(session: SessionDep) -> ItemCategoryRepository:
    return ItemCategoryRepository(session)


def get_item_repository(session: SessionDep) -> ItemRepository:
    return ItemRepository(session)


def get_machine_type_repository(session: SessionDep) -> MachineTypeRepository:
    return MachineTypeRepository(session)


def get_employee_repository(session: SessionDep) -> EmployeeRepository:
    return EmployeeRepository(session)


def get_job_repository(session: SessionDep) -> JobRepository:
    """
    Get JobRepository instance for dependency injection.

    Args:
        session: Database session from dependency injection

    Returns:
        JobRepository: Repository instance
    """
    return JobRepository(session)


def get_entry_repository(session: SessionDep) -> JobMachineEntryRepository:
    return JobMachineEntryRepository(session)


# Repository dependency type annotations
CustomerRepositoryDep = Annotated[CustomerRepository, Depends(get_customer_repository)]
CategoryRepositoryDep = Annotated[
    ItemCategoryRepository, Depends(get_category_repository)
]
ItemRepositoryDep = Annotated[ItemRepository, Depends(get_item_repository)]
MachineTypeRepositoryDep = Annotated[
    MachineTypeRepository, Depends(get_machine_type_repository)
]
EmployeeRepositoryDep = Annotated[EmployeeRepository, Depends(get_employee_repository)]
JobRepositoryDep = Annotated[JobRepository, Depends(get_job_repository)]
EntryRepositoryDep = Annotated[
    JobMachineEntryRepository, Depends(get_entry_repository)
]
