"""Report generation routes."""

from fastapi import APIRouter

from jobcost.infrastructure.database.service_dependencies import ReportServiceDep
from jobcost.models import ReportRequest, ReportResult

router = APIRouter(prefix="/reports", tags=["reports"])


@router.post(
    "/{report_type}",
    response_model=ReportResult,
    summary="Generate a PDF report",
    description=(
        "Report types: cost-summary, customer-wise, job-detail, waste-report, "
        "employee-wise and machine-wise. Writes the PDF to output_path or the "
        "reports directory and returns the path."
    ),
    responses={400: {"description": "Unknown report type or missing parameter"}},
)
def generate_report(
    report_type: str, request: ReportRequest, service: ReportServiceDep
) -> ReportResult:
    path = service.generate(report_type, request)
    return ReportResult(report_type=report_type, path=str(path))
