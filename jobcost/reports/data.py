"""
Report aggregation.

Each builder turns already-loaded read models into a ReportDocument: plain
sections of rows with an optional totals row. Money cells stay Decimal so the
renderer can format them and tests can check the arithmetic.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from jobcost.domain.cost_calculator import ZERO
from jobcost.models import (
    Customer,
    EmployeeRead,
    JobRead,
    MachineFieldSchema,
    MachineTypeRead,
)

Cell = str | int | Decimal

JOB_LEVEL = "Job-level"


@dataclass
class ReportSection:
    columns: list[str]
    rows: list[list[Cell]] = field(default_factory=list)
    totals: list[Cell] | None = None
    title: str | None = None


@dataclass
class ReportDocument:
    title: str
    date_from: date | None = None
    date_to: date | None = None
    info: list[tuple[str, str]] = field(default_factory=list)
    sections: list[ReportSection] = field(default_factory=list)
    notes: str | None = None
    landscape: bool = False

    @property
    def period(self) -> str | None:
        if self.date_from and self.date_to:
            return f"Period: {self.date_from.isoformat()} to {self.date_to.isoformat()}"
        return None


def percent(value: Decimal) -> str:
    return f"{value.normalize():f}%"


def _dash(value: str | None) -> str:
    return value or "-"


@dataclass
class _Totals:
    """Running sums over job rows."""

    jobs: int = 0
    quantity: int = 0
    amount: Decimal = ZERO
    cooly: Decimal = ZERO
    waste: Decimal = ZERO
    total: Decimal = ZERO

    def add(self, job: JobRead) -> None:
        self.jobs += 1
        self.quantity += job.quantity
        self.amount += job.amount
        self.cooly += job.cooly
        self.waste += job.waste_amount
        self.total += job.total_amount


def machine_costs(job: JobRead) -> dict[str, Decimal]:
    """Sum of entry costs per machine type name for one job."""
    costs: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for entry in job.machine_entries:
        costs[entry.machine_type_name or "Unknown"] += entry.cost
    return dict(costs)


def build_cost_summary(
    jobs: list[JobRead],
    date_from: date,
    date_to: date,
    customer: Customer | None = None,
) -> ReportDocument:
    """
    Per-job cost rows with one machine cost column per machine type seen and
    the machine waste, so each row adds up to its total; followed by
    customer-wise sub-totals.
    """
    per_job = [machine_costs(job) for job in jobs]
    machine_names = sorted({name for costs in per_job for name in costs})

    totals = _Totals()
    machine_totals = {name: ZERO for name in machine_names}
    machine_waste_total = ZERO
    rows: list[list[Cell]] = []
    for job, costs in zip(jobs, per_job, strict=True):
        totals.add(job)
        for name in machine_names:
            machine_totals[name] += costs.get(name, ZERO)
        machine_waste = sum((e.waste_amount for e in job.machine_entries), ZERO)
        machine_waste_total += machine_waste
        rows.append(
            [
                job.date.isoformat(),
                job.job_number,
                _dash(job.customer_name),
                _dash(job.item_name),
                job.quantity,
                job.rate,
                job.amount,
                job.cooly,
                job.waste_amount,
                *(costs.get(name, ZERO) for name in machine_names),
                machine_waste,
                job.total_amount,
            ]
        )

    main = ReportSection(
        columns=[
            "Date",
            "Job #",
            "Customer",
            "Item",
            "Qty",
            "Rate",
            "Amount",
            "Cooly",
            "Waste",
            *machine_names,
            "Machine Waste",
            "Total",
        ],
        rows=rows,
        totals=[
            "",
            "",
            "",
            "TOTALS",
            totals.quantity,
            "",
            totals.amount,
            totals.cooly,
            totals.waste,
            *(machine_totals[name] for name in machine_names),
            machine_waste_total,
            totals.total,
        ],
    )

    by_customer: dict[str, _Totals] = {}
    for job in jobs:
        by_customer.setdefault(_dash(job.customer_name), _Totals()).add(job)
    subtotals = ReportSection(
        title="Customer-wise Sub-Totals",
        columns=["Customer", "Jobs", "Amount", "Cooly", "Waste", "Total"],
        rows=[
            [name, t.jobs, t.amount, t.cooly, t.waste, t.total]
            for name, t in by_customer.items()
        ],
    )

    info = [("Customer", customer.name)] if customer else []
    return ReportDocument(
        title="Cost Summary Report",
        date_from=date_from,
        date_to=date_to,
        info=info,
        sections=[main, subtotals],
        landscape=True,
    )


def _job_rows_section(jobs: list[JobRead], include_customer: bool) -> ReportSection:
    totals = _Totals()
    rows: list[list[Cell]] = []
    for job in jobs:
        totals.add(job)
        rows.append(
            [
                job.date.isoformat(),
                job.job_number,
                *([_dash(job.customer_name)] if include_customer else []),
                _dash(job.item_name),
                job.quantity,
                job.rate,
                job.amount,
                job.cooly,
                job.waste_amount,
                job.total_amount,
                job.status.value,
            ]
        )
    lead = [""] * (3 if include_customer else 2)
    return ReportSection(
        columns=[
            "Date",
            "Job #",
            *(["Customer"] if include_customer else []),
            "Item",
            "Qty",
            "Rate",
            "Amount",
            "Cooly",
            "Waste",
            "Total",
            "Status",
        ],
        rows=rows,
        totals=[
            *lead,
            "TOTALS",
            totals.quantity,
            "",
            totals.amount,
            totals.cooly,
            totals.waste,
            totals.total,
            "",
        ],
    )


def build_customer_wise(
    customer: Customer,
    jobs: list[JobRead],
    date_from: date | None = None,
    date_to: date | None = None,
) -> ReportDocument:
    info = [("Customer", customer.name)]
    if customer.phone:
        info.append(("Phone", customer.phone))
    if customer.address:
        info.append(("Address", customer.address))
    return ReportDocument(
        title="Customer-wise Report",
        date_from=date_from,
        date_to=date_to,
        info=info,
        sections=[_job_rows_section(jobs, include_customer=False)],
    )


def build_employee_wise(
    employee: EmployeeRead,
    jobs: list[JobRead],
    date_from: date | None = None,
    date_to: date | None = None,
) -> ReportDocument:
    info = [("Employee", employee.name)]
    if employee.machine_type_name:
        info.append(("Machine", employee.machine_type_name))
    return ReportDocument(
        title="Employee-wise Report",
        date_from=date_from,
        date_to=date_to,
        info=info,
        sections=[_job_rows_section(jobs, include_customer=True)],
        landscape=True,
    )


def build_machine_wise(
    machine_type: MachineTypeRead,
    jobs: list[JobRead],
    date_from: date | None = None,
    date_to: date | None = None,
) -> ReportDocument:
    """One row per entry on the machine type, with its custom fields as columns."""
    schema: list[MachineFieldSchema] = machine_type.custom_fields_schema
    rows: list[list[Cell]] = []
    total_cost = ZERO
    total_waste = ZERO
    for job in jobs:
        for entry in job.machine_entries:
            if entry.machine_type_id != machine_type.id:
                continue
            total_cost += entry.cost
            total_waste += entry.waste_amount
            rows.append(
                [
                    job.date.isoformat(),
                    job.job_number,
                    _dash(job.customer_name),
                    _dash(job.item_name),
                    *(
                        str(entry.machine_custom_data.get(spec.name, "-"))
                        for spec in schema
                    ),
                    entry.cost,
                    entry.waste_amount,
                ]
            )

    blanks = [""] * (len(schema) + 3)
    return ReportDocument(
        title="Machine-wise Report",
        date_from=date_from,
        date_to=date_to,
        info=[("Machine", machine_type.name)]
        + ([("Model", machine_type.model)] if machine_type.model else []),
        sections=[
            ReportSection(
                columns=[
                    "Date",
                    "Job #",
                    "Customer",
                    "Item",
                    *(spec.label for spec in schema),
                    "Cost",
                    "Waste Amt",
                ],
                rows=rows,
                totals=[*blanks, "TOTALS", total_cost, total_waste],
            )
        ],
        landscape=True,
    )


def build_job_detail(job: JobRead, customer: Customer | None = None) -> ReportDocument:
    info = [
        ("Job #", job.job_number),
        ("Status", job.status.value),
        ("Date", job.date.isoformat()),
        ("Customer", _dash(job.customer_name)),
    ]
    if customer and customer.phone:
        info.append(("Phone", customer.phone))
    if customer and customer.address:
        info.append(("Address", customer.address))
    info += [
        ("Item", _dash(job.item_name)),
        ("Size", _dash(job.item_size)),
        ("Category", _dash(job.category_name)),
    ]
    if job.employee_name:
        info.append(("Employee", job.employee_name))

    breakdown = ReportSection(
        title="Cost Breakdown",
        columns=["Description", "Value"],
        rows=[
            ["Quantity", job.quantity],
            ["Rate", job.rate],
            ["Amount (Qty x Rate)", job.amount],
            ["Cooly", job.cooly],
            ["Waste %", percent(job.waste_percentage)],
            ["Waste Amount", job.waste_amount],
        ],
        totals=["Total Amount", job.total_amount],
    )
    sections = [breakdown]

    if job.machine_entries:
        machine_cost = sum((e.cost for e in job.machine_entries), ZERO)
        machine_waste = sum((e.waste_amount for e in job.machine_entries), ZERO)
        sections.append(
            ReportSection(
                title="Machine Entries",
                columns=["Machine", "Cost", "Waste %", "Waste Amt", "Custom Fields"],
                rows=[
                    [
                        _dash(e.machine_type_name),
                        e.cost,
                        percent(e.waste_percentage),
                        e.waste_amount,
                        ", ".join(f"{k}: {v}" for k, v in e.machine_custom_data.items())
                        or "-",
                    ]
                    for e in job.machine_entries
                ],
                totals=["TOTAL", machine_cost, "", machine_waste, ""],
            )
        )

    return ReportDocument(
        title="Job Detail Report", info=info, sections=sections, notes=job.notes
    )


def build_waste_report(
    jobs: list[JobRead], date_from: date, date_to: date
) -> ReportDocument:
    """
    One row per machine entry; a job without entries but with job-level
    waste contributes a single Job-level row. Ends with a per-machine summary.
    """
    rows: list[list[Cell]] = []
    total_waste = ZERO
    machine_totals: dict[str, list] = {}

    for job in jobs:
        for entry in job.machine_entries:
            name = entry.machine_type_name or "Unknown"
            rows.append(
                [
                    job.job_number,
                    _dash(job.customer_name),
                    _dash(job.item_name),
                    name,
                    job.quantity,
                    percent(entry.waste_percentage),
                    entry.waste_amount,
                ]
            )
            total_waste += entry.waste_amount
            summary = machine_totals.setdefault(name, [0, ZERO])
            summary[0] += 1
            summary[1] += entry.waste_amount

        if not job.machine_entries and job.waste_amount > 0:
            rows.append(
                [
                    job.job_number,
                    _dash(job.customer_name),
                    _dash(job.item_name),
                    JOB_LEVEL,
                    job.quantity,
                    percent(job.waste_percentage),
                    job.waste_amount,
                ]
            )
            total_waste += job.waste_amount

    return ReportDocument(
        title="Waste Report",
        date_from=date_from,
        date_to=date_to,
        sections=[
            ReportSection(
                columns=[
                    "Job #",
                    "Customer",
                    "Item",
                    "Machine",
                    "Qty",
                    "Waste %",
                    "Waste Amt",
                ],
                rows=rows,
                totals=["", "", "", "", "TOTAL", "", total_waste],
            ),
            ReportSection(
                title="Summary by Machine Type",
                columns=["Machine Type", "Entries", "Total Waste Amount"],
                rows=[
                    [name, count, amount]
                    for name, (count, amount) in machine_totals.items()
                ],
            ),
        ],
    )

