"""Application services: one per entity group, each coordinating repositories."""

from .catalog_service import CategoryService, ItemService
from .customer_service import CustomerService
from .dashboard_service import DashboardService
from .job_service import JobService
from .machine_service import EmployeeService, MachineService
from .report_service import ReportService

__all__ = [
    "CategoryService",
    "CustomerService",
    "DashboardService",
    "EmployeeService",
    "ItemService",
    "JobService",
    "MachineService",
    "ReportService",
]
