"""
Report application service.

Loads the jobs a report needs through the job service, aggregates them into
a ReportDocument and renders it to a PDF file.
"""

from collections.abc import Callable
from datetime import date
from pathlib import Path

from jobcost.core.config import settings
from jobcost.core.exceptions import ValidationError
from jobcost.core.observability import get_logger
from jobcost.infrastructure.database.repositories import CustomerRepository
from jobcost.models import ReportRequest
from jobcost.reports.data import (
    ReportDocument,
    build_cost_summary,
    build_customer_wise,
    build_employee_wise,
    build_job_detail,
    build_machine_wise,
    build_waste_report,
)
from jobcost.reports.pdf import render_report

from .base_service import ApplicationServiceBase
from .job_service import JobService
from .machine_service import EmployeeService, MachineService

logger = get_logger(__name__)


class ReportService(ApplicationServiceBase):
    def __init__(
        self,
        job_service: JobService,
        customer_repository: CustomerRepository,
        employee_service: EmployeeService,
        machine_service: MachineService,
    ):
        self._jobs = job_service
        self._customers = customer_repository
        self._employees = employee_service
        self._machines = machine_service
        self._builders: dict[str, Callable[[ReportRequest], ReportDocument]] = {
            "cost-summary": self.cost_summary,
            "customer-wise": self.customer_wise,
            "job-detail": self.job_detail,
            "waste-report": self.waste_report,
            "employee-wise": self.employee_wise,
            "machine-wise": self.machine_wise,
        }

    @property
    def report_types(self) -> list[str]:
        return list(self._builders)

    @staticmethod
    def _require(request: ReportRequest, *names: str) -> None:
        for name in names:
            if getattr(request, name) is None:
                raise ValidationError(name, None, f"{name} is required for this report")

    @staticmethod
    def _check_range(request: ReportRequest) -> None:
        if request.date_from and request.date_to and request.date_from > request.date_to:
            raise ValidationError(
                "date_to",
                request.date_to.isoformat(),
                "date_to must not be before date_from",
            )

    # Aggregation

    def cost_summary(self, request: ReportRequest) -> ReportDocument:
        self._require(request, "date_from", "date_to")
        customer = (
            self._customers.get_by_id_required(request.customer_id)
            if request.customer_id is not None
            else None
        )
        jobs = self._jobs.jobs_for_report(
            request.date_from, request.date_to, request.customer_id
        )
        return build_cost_summary(jobs, request.date_from, request.date_to, customer)

    def customer_wise(self, request: ReportRequest) -> ReportDocument:
        self._require(request, "customer_id")
        customer = self._customers.get_by_id_required(request.customer_id)
        jobs = self._jobs.jobs_by_customer(
            customer.id, request.date_from, request.date_to
        )
        return build_customer_wise(customer, jobs, request.date_from, request.date_to)

    def job_detail(self, request: ReportRequest) -> ReportDocument:
        self._require(request, "job_id")
        job = self._jobs.get_job(request.job_id)
        customer = self._customers.get_by_id(job.customer_id)
        return build_job_detail(job, customer)

    def waste_report(self, request: ReportRequest) -> ReportDocument:
        self._require(request, "date_from", "date_to")
        jobs = self._jobs.jobs_for_report(request.date_from, request.date_to)
        return build_waste_report(jobs, request.date_from, request.date_to)

    def employee_wise(self, request: ReportRequest) -> ReportDocument:
        self._require(request, "employee_id")
        employee = self._employees.get_employee(request.employee_id)
        jobs = self._jobs.jobs_by_employee(
            employee.id, request.date_from, request.date_to
        )
        return build_employee_wise(employee, jobs, request.date_from, request.date_to)

    def machine_wise(self, request: ReportRequest) -> ReportDocument:
        self._require(request, "machine_type_id")
        machine_type = self._machines.get_machine_type(request.machine_type_id)
        jobs = self._jobs.jobs_by_machine_type(
            machine_type.id, request.date_from, request.date_to
        )
        return build_machine_wise(
            machine_type, jobs, request.date_from, request.date_to
        )

    # Rendering

    def build(self, report_type: str, request: ReportRequest) -> ReportDocument:
        """
        Aggregate the data for a report type.

        Raises:
            ValidationError: If the report type is unknown or a parameter is missing
            EntityNotFoundError: If a referenced customer, job, employee or machine
                type does not exist
        """
        builder = self._builders.get(report_type)
        if builder is None:
            raise ValidationError(
                "report_type",
                report_type,
                f"Unknown report type: {report_type}. "
                f"Expected one of: {', '.join(self.report_types)}",
            )
        self._check_range(request)
        return builder(request)

    def default_path(self, report_type: str, today: date | None = None) -> Path:
        today = today or date.today()
        return Path(settings.REPORTS_DIR) / f"{report_type}-{today.isoformat()}.pdf"

    def generate(self, report_type: str, request: ReportRequest) -> Path:
        """Build a report and write it as a PDF; returns the written path."""
        document = self.build(report_type, request)
        output_path = request.output_path or self.default_path(report_type)
        path = render_report(document, output_path)
        logger.info(
            "Report generated",
            report_type=report_type,
            path=str(path),
            sections=len(document.sections),
        )
        return path
