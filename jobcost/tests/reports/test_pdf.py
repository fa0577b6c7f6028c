from datetime import date, datetime
from decimal import Decimal
from pathlib import Path

import pytest

from jobcost.reports.data import ReportDocument, ReportSection
from jobcost.reports.pdf import format_inr, render_report


@pytest.mark.parametrize(
    ("amount", "expected"),
    [
        (Decimal("123456.78"), "Rs. 1,23,456.78"),
        (Decimal("12345678.9"), "Rs. 1,23,45,678.90"),
        (Decimal("999"), "Rs. 999.00"),
        (Decimal("1000"), "Rs. 1,000.00"),
        (0, "Rs. 0.00"),
        (Decimal("-1500.5"), "-Rs. 1,500.50"),
        (Decimal("0.005"), "Rs. 0.01"),
    ],
)
def test_format_inr(amount, expected):
    assert format_inr(amount) == expected


def test_format_inr_custom_symbol():
    assert format_inr(Decimal("100000"), symbol="₹") == "₹1,00,000.00"
    assert format_inr(Decimal("42"), symbol="") == "42.00"


def _document(rows: int, landscape: bool = False) -> ReportDocument:
    return ReportDocument(
        title="Cost Summary Report",
        date_from=date(2024, 3, 1),
        date_to=date(2024, 3, 31),
        info=[("Customer", "Ace & Sons <Chennai>")],
        sections=[
            ReportSection(
                columns=["Job #", "Customer", "Amount"],
                rows=[
                    [f"JOB-20240301-{n:03d}", "A very long customer name " * 3, Decimal(n)]
                    for n in range(rows)
                ],
                totals=["", "TOTALS", Decimal(sum(range(rows)))],
            ),
            ReportSection(title="Empty", columns=["Machine"]),
        ],
        notes="Checked",
        landscape=landscape,
    )


def test_render_writes_pdf(tmp_path: Path):
    output = tmp_path / "nested" / "report.pdf"
    path = render_report(_document(5), output, generated_at=datetime(2024, 3, 31, 18, 0))
    assert path == output
    assert output.read_bytes().startswith(b"%PDF")


def test_render_multi_page_landscape(tmp_path: Path):
    small = render_report(_document(1, landscape=True), tmp_path / "small.pdf")
    large = render_report(_document(200, landscape=True), tmp_path / "large.pdf")
    assert large.stat().st_size > small.stat().st_size
