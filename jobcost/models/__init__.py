"""SQLModel classes exports (explicit, no star imports)."""

from sqlmodel import SQLModel

from .base import FieldType, JobStatus
from .catalog import (
    Item,
    ItemCategory,
    ItemCategoryCreate,
    ItemCategoryRead,
    ItemCategoryUpdate,
    ItemCreate,
    ItemRead,
    ItemUpdate,
)
from .customer import Customer, CustomerCreate, CustomerRead, CustomerUpdate
from .dashboard import DashboardStats, DateRangeRead, ReportRequest, ReportResult
from .job import (
    Job,
    JobCostBreakdown,
    JobCostRequest,
    JobCreate,
    JobFilters,
    JobInputs,
    JobMachineEntry,
    JobMachineEntryCreate,
    JobMachineEntryIn,
    JobMachineEntryRead,
    JobRead,
    JobUpdate,
    MachineEntryCost,
    Meta,
)
from .machine import (
    Employee,
    EmployeeCreate,
    EmployeeRead,
    EmployeeUpdate,
    MachineFieldSchema,
    MachineType,
    MachineTypeCreate,
    MachineTypeRead,
    MachineTypeUpdate,
)


class Message(SQLModel):
    message: str


__all__ = [
    # Base enums
    "FieldType",
    "JobStatus",
    # Tables
    "Customer",
    "Employee",
    "Item",
    "ItemCategory",
    "Job",
    "JobMachineEntry",
    "MachineType",
    "Meta",
    # API models
    "CustomerCreate",
    "CustomerRead",
    "CustomerUpdate",
    "EmployeeCreate",
    "EmployeeRead",
    "EmployeeUpdate",
    "ItemCategoryCreate",
    "ItemCategoryRead",
    "ItemCategoryUpdate",
    "ItemCreate",
    "ItemRead",
    "ItemUpdate",
    "DashboardStats",
    "DateRangeRead",
    "JobCostBreakdown",
    "JobCostRequest",
    "JobCreate",
    "JobFilters",
    "JobInputs",
    "JobMachineEntryCreate",
    "JobMachineEntryIn",
    "JobMachineEntryRead",
    "JobRead",
    "JobUpdate",
    "MachineEntryCost",
    "MachineFieldSchema",
    "MachineTypeCreate",
    "MachineTypeRead",
    "MachineTypeUpdate",
    "Message",
    "ReportRequest",
    "ReportResult",
]
