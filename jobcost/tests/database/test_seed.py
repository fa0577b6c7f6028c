from collections import defaultdict
from datetime import date

from sqlalchemy import func
from sqlmodel import Session, select

from jobcost.core.db import init_db, is_seeded
from jobcost.core.seed import JOBS, MACHINE_TYPES
from jobcost.domain.cost_calculator import calculate_job_cost
from jobcost.domain.custom_fields import parse_schema
from jobcost.domain.job_numbers import parse_job_number
from jobcost.models import Customer, Job, JobMachineEntry, MachineType, Meta


def _count(db: Session, model) -> int:
    return db.exec(select(func.count()).select_from(model)).one()


def test_init_db_seeds_once(db: Session):
    init_db(db, seed=True)
    assert is_seeded(db)
    assert db.get(Meta, "seeded").value == "true"
    jobs_after_first = _count(db, Job)

    init_db(db, seed=True)

    assert jobs_after_first == len(JOBS)
    assert _count(db, Job) == len(JOBS)
    assert _count(db, MachineType) == len(MACHINE_TYPES)


def test_init_db_respects_disabled_seed(db: Session):
    init_db(db, seed=False)
    assert not is_seeded(db)
    assert _count(db, Customer) == 0


def test_seeded_schemas_parse(db: Session):
    init_db(db, seed=True)
    for machine_type in db.exec(select(MachineType)).all():
        assert parse_schema(machine_type.custom_fields_schema)


def test_seeded_jobs_are_numbered_per_date(db: Session):
    init_db(db, seed=True)
    sequences: dict[date, list[int]] = defaultdict(list)
    for job in db.exec(select(Job)).all():
        job_date, sequence = parse_job_number(job.job_number)
        assert job_date == job.date
        sequences[job_date].append(sequence)

    for numbers in sequences.values():
        assert sorted(numbers) == list(range(1, len(numbers) + 1))


def test_seeded_totals_match_calculator(db: Session):
    init_db(db, seed=True)
    for job in db.exec(select(Job)).all():
        entries = db.exec(
            select(JobMachineEntry).where(JobMachineEntry.job_id == job.id)
        ).all()
        assert len(entries) == 1
        breakdown = calculate_job_cost(
            job.quantity, job.rate, job.cooly, job.waste_percentage, entries
        )
        assert job.amount == breakdown.base_amount
        assert job.waste_amount == breakdown.waste_amount
        assert job.total_amount == breakdown.grand_total
