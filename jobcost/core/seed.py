"""
Demo data inserted on first start.

Jobs are spread over the last three weeks relative to the seeding day, so
the dashboard and the date-range presets have something to show.
"""

import json
from collections import Counter
from datetime import date, timedelta
from decimal import Decimal

from sqlmodel import Session

from jobcost.domain.cost_calculator import calculate_job_cost
from jobcost.domain.job_numbers import format_job_number
from jobcost.models import (
    Customer,
    Employee,
    Item,
    ItemCategory,
    Job,
    JobMachineEntry,
    JobStatus,
    MachineType,
)

CUTTING_FIELDS = [
    {"name": "items", "label": "Items", "type": "text", "required": True},
    {"name": "size", "label": "Size", "type": "text", "required": True},
    {"name": "quantity", "label": "Quantity", "type": "number", "required": True},
    {"name": "rate", "label": "Rate", "type": "number", "required": True},
    {"name": "amount", "label": "Amount", "type": "number", "required": True},
    {"name": "waste", "label": "Waste", "type": "number", "required": False},
]


def _bag_fields(prefix: str, label: str) -> list[dict]:
    return [
        {"name": f"{prefix}RollNo", "label": f"{label} Roll No.", "type": "text", "required": True},
        {"name": "rollSize", "label": "Roll Size", "type": "text", "required": True},
        {"name": "rollWeight", "label": "Roll Weight (kg)", "type": "number", "required": True},
        {"name": "waste", "label": "Waste", "type": "number", "required": False},
    ]


MACHINE_TYPES = [
    (
        "Printing",
        "Printing Machine",
        "Multi-color printing on various materials",
        [
            {"name": "matter", "label": "Matter", "type": "text", "required": True},
            {"name": "rollNo", "label": "Roll No.", "type": "text", "required": True},
            {"name": "size", "label": "Size", "type": "text", "required": True},
            {"name": "weight", "label": "Weight", "type": "number", "required": False},
            {"name": "noOfColours", "label": "No. of Colours", "type": "number", "required": True},
            {"name": "ptgCooly", "label": "Ptg Cooly", "type": "number", "required": True},
            {"name": "mCost", "label": "M Cost", "type": "number", "required": True},
        ],
    ),
    ("Harish", "Cutting Machine", "Cutting machine - Harish", CUTTING_FIELDS),
    ("Mathan", "Cutting Machine", "Cutting machine - Mathan", CUTTING_FIELDS),
    ("Jaquar", "Cutting Machine", "Cutting machine - Jaquar", CUTTING_FIELDS),
    ("Excel", "Cutting Machine", "Cutting machine - Excel", CUTTING_FIELDS),
    ("PP", "PP Bag Making Machine", "Polypropylene bag manufacturing", _bag_fields("pp", "PP")),
    ("HM", "HM Bag Making Machine", "HDPE bag manufacturing", _bag_fields("hm", "HM")),
]

CATEGORIES = ["PP Bags", "HM Bags", "Printed Material", "Cut Sheets"]

CUSTOMERS = [
    ("Lakshmi Traders", "9876543210", "12 Anna Nagar, Chennai"),
    ("Sri Balaji Enterprises", "9876543211", "45 T Nagar, Chennai"),
    ("Murugan Stores", "9876543212", "78 Mylapore, Chennai"),
    ("KVR Packaging", "9876543213", "23 Ambattur, Chennai"),
    ("New India Plastics", "9876543214", "56 Guindy, Chennai"),
    ("Anand Paper House", "9876543215", "89 Perambur, Chennai"),
]

# (name, phone, machine type number)
EMPLOYEES = [
    ("Ravi", "9000000001", 1),
    ("Suresh", "9000000002", 2),
    ("Kumar", "9000000003", 6),
    ("Prakash", "9000000004", 7),
    ("Manoj", "9000000005", 3),
    ("Dinesh", "9000000006", 4),
    ("Vijay", "9000000007", 5),
    ("Sathish", "9000000008", 1),
]

# (name, category number, size)
ITEMS = [
    ("PP Carry Bag 10x12", 1, "10x12"),
    ("HM Grocery Bag 16x20", 2, "16x20"),
    ("Letterhead A4", 3, "A4"),
    ("Cut Sheet A3", 4, "A3"),
    ("PP Carry Bag 14x18", 1, "14x18"),
    ("HM D-Cut Bag 12x16", 2, "12x16"),
    ("Bill Book A5", 3, "A5"),
    ("Visiting Card", 3, "3.5x2"),
    ("PP Shopping Bag 16x22", 1, "16x22"),
    ("Cut Sheet B4", 4, "B4"),
]


def _cut(items: str, size: str, quantity: int, rate: str, waste: int) -> dict:
    return {
        "items": items,
        "size": size,
        "quantity": quantity,
        "rate": float(rate),
        "amount": float(Decimal(rate) * quantity),
        "waste": waste,
    }


def _print(matter, roll_no, size, weight, colours, ptg_cooly, m_cost) -> dict:
    return {
        "matter": matter,
        "rollNo": roll_no,
        "size": size,
        "weight": weight,
        "noOfColours": colours,
        "ptgCooly": ptg_cooly,
        "mCost": m_cost,
    }


def _roll(prefix: str, roll_no: str, size: str, weight: int, waste: float) -> dict:
    return {f"{prefix}RollNo": roll_no, "rollSize": size, "rollWeight": weight, "waste": waste}


# (days ago, customer, employee, item, quantity, rate, waste %, cooly,
#  machine type, custom data, machine cost, machine waste %, status, notes)
JOBS = [
    (0, 1, 2, 4, 1000, "5", "3", 500, 2, _cut("Card sheets", "23x36", 1000, "5", 30), 500, "3", JobStatus.COMPLETED, "Cutting job - card sheets"),
    (0, 2, 3, 2, 500, "8", "2", 400, 7, _roll("hm", "HM-201", "16x20", 30, 2), 400, "1.5", JobStatus.IN_PROGRESS, "HM grocery bags"),
    (0, 1, 1, 3, 2000, "3", "1", 600, 1, _print("Company Letterhead", "R-301", "A4", 50, 4, 800, 400), 1200, "0.5", JobStatus.COMPLETED, "Letterhead printing"),
    (1, 3, 5, 10, 800, "4", "2.5", 350, 3, _cut("Invoice sheets", "B4", 800, "4", 20), 350, "2", JobStatus.COMPLETED, "B4 invoice cut"),
    (1, 4, 3, 1, 3000, "2", "1.5", 450, 6, _roll("pp", "PP-105", "10x12", 25, 1.5), 300, "1", JobStatus.COMPLETED, "PP carry bags small"),
    (1, 5, 8, 8, 5000, "1.5", "0.5", 700, 1, _print("Visiting Cards", "R-302", "3.5x2", 15, 2, 500, 200), 700, "0.3", JobStatus.COMPLETED, "Visiting card print run"),
    (2, 6, 6, 4, 1500, "4.5", "2", 550, 4, _cut("Flyer sheets", "A3", 1500, "4.5", 30), 450, "2", JobStatus.COMPLETED, "A3 flyers cut on Jaquar"),
    (2, 2, 4, 6, 2000, "3.5", "1", 500, 7, _roll("hm", "HM-202", "12x16", 22, 1), 350, "1", JobStatus.COMPLETED, "HM D-cut bags"),
    (3, 1, 1, 7, 1000, "6", "1", 800, 1, _print("Bill Book Cover", "R-303", "A5", 35, 3, 600, 300), 900, "0.5", JobStatus.COMPLETED, "Bill book printing"),
    (3, 3, 7, 4, 2000, "5", "3", 600, 5, _cut("Label sheets", "A3", 2000, "5", 60), 550, "3", JobStatus.COMPLETED, "Label sheets cut on Excel"),
    (5, 4, 2, 10, 600, "4", "2", 300, 2, _cut("Pamphlet sheets", "B4", 600, "4", 12), 250, "2", JobStatus.COMPLETED, "Pamphlet cutting"),
    (5, 5, 3, 5, 4000, "2.5", "1.5", 500, 6, _roll("pp", "PP-106", "14x18", 35, 1.5), 400, "1", JobStatus.COMPLETED, "PP carry bags medium"),
    (7, 6, 8, 3, 3000, "3", "1", 750, 1, _print("Invoice Pads", "R-304", "A4", 60, 2, 550, 250), 800, "0.5", JobStatus.COMPLETED, "Invoice pad printing"),
    (7, 1, 5, 4, 1200, "5", "2.5", 400, 3, _cut("Poster sheets", "A3", 1200, "5", 30), 400, "2", JobStatus.COMPLETED, "Poster cutting on Mathan"),
    (8, 2, 4, 2, 1000, "8", "2", 600, 7, _roll("hm", "HM-203", "16x20", 40, 2), 500, "1.5", JobStatus.COMPLETED, "HM grocery bags bulk"),
    (8, 3, 6, 10, 900, "4", "2", 350, 4, _cut("Brochure sheets", "B4", 900, "4", 18), 350, "2", JobStatus.COMPLETED, "Brochure cut on Jaquar"),
    (10, 4, 1, 7, 1500, "6", "1", 900, 1, _print("Receipt Books", "R-305", "A5", 40, 1, 400, 200), 600, "0.5", JobStatus.COMPLETED, "Receipt book printing"),
    (10, 5, 7, 4, 2500, "5", "3", 700, 5, _cut("Wrapper sheets", "A3", 2500, "5", 75), 600, "3", JobStatus.COMPLETED, "Wrapper sheets on Excel"),
    (12, 6, 2, 4, 800, "5", "2", 400, 2, _cut("Menu cards", "23x36", 800, "5", 16), 350, "2", JobStatus.COMPLETED, "Menu card cutting"),
    (12, 1, 3, 9, 5000, "2", "1", 500, 6, _roll("pp", "PP-107", "16x22", 45, 1), 450, "0.5", JobStatus.COMPLETED, "PP shopping bags large"),
    (14, 2, 8, 8, 10000, "1.5", "0.5", 1000, 1, _print("Business Cards", "R-306", "3.5x2", 25, 4, 800, 500), 1300, "0.3", JobStatus.COMPLETED, "Bulk business cards"),
    (14, 3, 5, 10, 1100, "4", "2", 400, 3, _cut("Catalog sheets", "B4", 1100, "4", 22), 380, "2", JobStatus.COMPLETED, "Catalog sheets on Mathan"),
    (16, 4, 4, 6, 3000, "3.5", "1", 600, 7, _roll("hm", "HM-204", "12x16", 28, 1), 400, "1", JobStatus.COMPLETED, "HM D-cut bags order"),
    (16, 5, 6, 4, 1800, "4.5", "2", 500, 4, _cut("Envelope sheets", "A3", 1800, "4.5", 36), 450, "2", JobStatus.COMPLETED, "Envelope cutting on Jaquar"),
    (18, 6, 1, 3, 4000, "3", "1", 900, 1, _print("Stationery Headers", "R-307", "A4", 70, 3, 700, 350), 1050, "0.5", JobStatus.COMPLETED, "Stationery header printing"),
    (18, 1, 7, 4, 3000, "5", "3", 800, 5, _cut("Box wraps", "A3", 3000, "5", 90), 700, "3", JobStatus.COMPLETED, "Box wrap cutting on Excel"),
    (20, 2, 2, 4, 500, "5", "2", 250, 2, _cut("Tag sheets", "23x36", 500, "5", 10), 200, "2", JobStatus.COMPLETED, "Tag cutting"),
    (20, 3, 3, 5, 6000, "2.5", "1.5", 700, 6, _roll("pp", "PP-108", "14x18", 50, 1.5), 500, "1", JobStatus.COMPLETED, "PP bags bulk order"),
]


def seed_demo_data(session: Session, today: date | None = None) -> None:
    """
    Add the demo rows to the session and flush them.

    The caller owns the transaction and commits together with the seed flag.
    """
    today = today or date.today()

    machine_types = [
        MachineType(
            name=name,
            model=model,
            description=description,
            custom_fields_schema=json.dumps(fields),
        )
        for name, model, description, fields in MACHINE_TYPES
    ]
    categories = [ItemCategory(name=name) for name in CATEGORIES]
    customers = [
        Customer(name=name, phone=phone, address=address)
        for name, phone, address in CUSTOMERS
    ]
    session.add_all(machine_types + categories + customers)
    session.flush()

    items = [
        Item(name=name, category_id=categories[cat - 1].id, size=size)
        for name, cat, size in ITEMS
    ]
    employees = [
        Employee(name=name, phone=phone, machine_type_id=machine_types[mt - 1].id)
        for name, phone, mt in EMPLOYEES
    ]
    session.add_all(items + employees)
    session.flush()

    per_date: Counter[date] = Counter()
    for (
        days_ago,
        customer,
        employee,
        item,
        quantity,
        rate,
        waste_pct,
        cooly,
        machine,
        custom_data,
        machine_cost,
        machine_waste_pct,
        status,
        notes,
    ) in JOBS:
        job_date = today - timedelta(days=days_ago)
        per_date[job_date] += 1

        entry = {"cost": Decimal(machine_cost), "waste_percentage": Decimal(machine_waste_pct)}
        breakdown = calculate_job_cost(
            quantity, Decimal(rate), Decimal(cooly), Decimal(waste_pct), [entry]
        )
        entry_cost = breakdown.entries[0]

        job = Job(
            job_number=format_job_number(job_date, per_date[job_date]),
            date=job_date,
            customer_id=customers[customer - 1].id,
            employee_id=employees[employee - 1].id,
            item_id=items[item - 1].id,
            quantity=quantity,
            rate=Decimal(rate),
            cooly=Decimal(cooly),
            waste_percentage=Decimal(waste_pct),
            amount=breakdown.base_amount,
            waste_amount=breakdown.waste_amount,
            total_amount=breakdown.grand_total,
            status=status,
            notes=notes,
        )
        job.machine_entries.append(
            JobMachineEntry(
                machine_type_id=machine_types[machine - 1].id,
                machine_custom_data=json.dumps(custom_data),
                cost=entry_cost.cost,
                waste_percentage=entry_cost.waste_percentage,
                waste_amount=entry_cost.waste_amount,
            )
        )
        session.add(job)

    session.flush()
