"""
Repository implementations over the SQLModel tables.

Each repository wraps one table (plus the joins its read models need) and
translates SQLAlchemy failures into repository exceptions.
"""

from .base import (
    BaseRepository,
    DatabaseError,
    EntityAlreadyExistsError,
    EntityInUseError,
    RepositoryException,
)
from .catalog_repository import ItemCategoryRepository, ItemRepository
from .customer_repository import CustomerRepository
from .job_repository import JobMachineEntryRepository, JobRepository, JobTotals
from .machine_repository import EmployeeRepository, MachineTypeRepository

__all__ = [
    "BaseRepository",
    "CustomerRepository",
    "DatabaseError",
    "EmployeeRepository",
    "EntityAlreadyExistsError",
    "EntityInUseError",
    "ItemCategoryRepository",
    "ItemRepository",
    "JobMachineEntryRepository",
    "JobRepository",
    "JobTotals",
    "MachineTypeRepository",
    "RepositoryException",
]
