"""Repository tests against an in-memory SQLite database."""

from datetime import date
from decimal import Decimal

import pytest
from sqlmodel import Session

from jobcost.core.exceptions import EntityNotFoundError
from jobcost.infrastructure.database.repositories import (
    CustomerRepository,
    EmployeeRepository,
    EntityAlreadyExistsError,
    EntityInUseError,
    ItemCategoryRepository,
    ItemRepository,
    JobMachineEntryRepository,
    JobRepository,
)
from jobcost.models import Job, JobFilters, JobMachineEntry, JobStatus
from jobcost.tests.utils.factories import (
    CategoryFactory,
    CustomerFactory,
    EmployeeFactory,
    ItemFactory,
    JobFactory,
    MachineTypeFactory,
)


class TestBaseRepository:
    def test_create_get_update_delete(self, db: Session):
        repo = CustomerRepository(db)
        customer = repo.create({"name": "Lakshmi Traders", "phone": "98765"})
        assert customer.id is not None

        updated = repo.update(customer.id, {"phone": "12345"})
        assert updated.phone == "12345"
        assert updated.name == "Lakshmi Traders"

        assert repo.delete(customer.id) is True
        assert repo.get_by_id(customer.id) is None
        assert repo.delete(customer.id) is False

    def test_get_by_id_required(self, db: Session):
        with pytest.raises(EntityNotFoundError) as exc_info:
            CustomerRepository(db).get_by_id_required(999)
        assert exc_info.value.entity_type == "Customer"

    def test_update_missing_entity(self, db: Session):
        with pytest.raises(EntityNotFoundError):
            CustomerRepository(db).update(999, {"name": "x"})

    def test_list_by_name(self, db: Session):
        CustomerFactory.create(db, name="Zeta")
        CustomerFactory.create(db, name="Alpha")
        names = [c.name for c in CustomerRepository(db).list_by_name()]
        assert names == ["Alpha", "Zeta"]

    def test_delete_referenced_row_is_refused(self, db: Session):
        job = JobFactory.create(db)
        repo = CustomerRepository(db)

        with pytest.raises(EntityInUseError):
            repo.delete(job.customer_id)
        assert repo.exists(job.customer_id)

    def test_save_with_missing_foreign_key(self, db: Session):
        repo = ItemRepository(db)
        with pytest.raises(EntityAlreadyExistsError):
            repo.create({"name": "Orphan", "category_id": 999, "size": "A4"})


class TestCatalogRepositories:
    def test_count_items(self, db: Session):
        category = CategoryFactory.create(db)
        ItemFactory.create(db, category=category)
        ItemFactory.create(db, category=category)
        assert ItemCategoryRepository(db).count_items(category.id) == 2

    def test_items_carry_category_name(self, db: Session):
        category = CategoryFactory.create(db, name="PP Bags")
        item = ItemFactory.create(db, category=category, name="Carry Bag")
        other = ItemFactory.create(db)

        repo = ItemRepository(db)
        assert repo.get_read(item.id).category_name == "PP Bags"
        by_category = repo.list_by_category(category.id)
        assert [i.id for i in by_category] == [item.id]
        assert {i.id for i in repo.list_with_category()} == {item.id, other.id}


class TestEmployeeRepository:
    def test_listing_joins_machine_type_name(self, db: Session):
        machine = MachineTypeFactory.create(db, name="Harish")
        EmployeeFactory.create(db, machine_type=machine, name="Suresh")
        EmployeeFactory.create(db, name="Arun")

        employees = EmployeeRepository(db).list_with_machine_type()
        assert [(e.name, e.machine_type_name) for e in employees] == [
            ("Arun", None),
            ("Suresh", "Harish"),
        ]


class TestJobRepository:
    def test_joined_read(self, db: Session):
        customer = CustomerFactory.create(db, name="Murugan Stores")
        category = CategoryFactory.create(db, name="Cut Sheets")
        item = ItemFactory.create(db, category=category, name="Cut Sheet A3", size="A3")
        machine = MachineTypeFactory.create(db, name="Mathan")
        job = JobFactory.create(
            db,
            customer=customer,
            item=item,
            entries=[
                {
                    "machine_type_id": machine.id,
                    "cost": Decimal("100"),
                    "machine_custom_data": {"size": "A3"},
                }
            ],
        )

        read = JobRepository(db).get_read(job.id)
        assert read.customer_name == "Murugan Stores"
        assert read.item_name == "Cut Sheet A3"
        assert read.item_size == "A3"
        assert read.category_name == "Cut Sheets"
        assert read.employee_name is None
        assert len(read.machine_entries) == 1
        assert read.machine_entries[0].machine_type_name == "Mathan"
        assert read.machine_entries[0].machine_custom_data == {"size": "A3"}

    def test_get_read_missing(self, db: Session):
        assert JobRepository(db).get_read(42) is None

    def test_filters_and_order(self, db: Session):
        alpha = CustomerFactory.create(db, name="Alpha Prints")
        beta = CustomerFactory.create(db, name="Beta Packaging")
        bag = ItemFactory.create(db, name="PP Carry Bag")
        sheet = ItemFactory.create(db, name="Letterhead")
        first = JobFactory.create(db, customer=alpha, item=bag, job_date=date(2024, 3, 1))
        second = JobFactory.create(
            db,
            customer=beta,
            item=sheet,
            job_date=date(2024, 3, 5),
            status=JobStatus.COMPLETED,
        )
        third = JobFactory.create(db, customer=alpha, item=sheet, job_date=date(2024, 3, 5))

        repo = JobRepository(db)
        assert [j.id for j in repo.find_with_filters()] == [third.id, second.id, first.id]
        assert [j.id for j in repo.find_with_filters(JobFilters(search="beta"))] == [
            second.id
        ]
        assert [j.id for j in repo.find_with_filters(JobFilters(search="carry"))] == [
            first.id
        ]
        assert [
            j.id for j in repo.find_with_filters(JobFilters(search="20240301"))
        ] == [first.id]
        assert [
            j.id for j in repo.find_with_filters(JobFilters(status=JobStatus.COMPLETED))
        ] == [second.id]
        assert [
            j.id
            for j in repo.find_with_filters(
                JobFilters(date_from=date(2024, 3, 2), customer_id=alpha.id)
            )
        ] == [third.id]

    def test_search_treats_wildcards_literally(self, db: Session):
        plain = JobFactory.create(
            db, customer=CustomerFactory.create(db, name="Ganesh Prints")
        )
        marked = JobFactory.create(
            db, customer=CustomerFactory.create(db, name="100% Cotton_Bags")
        )

        repo = JobRepository(db)
        assert [j.id for j in repo.find_with_filters(JobFilters(search="%"))] == [
            marked.id
        ]
        assert [j.id for j in repo.find_with_filters(JobFilters(search="n_b"))] == [
            marked.id
        ]
        assert repo.find_with_filters(JobFilters(search="h_P")) == []
        assert [
            j.id for j in repo.find_with_filters(JobFilters(search="ganesh"))
        ] == [plain.id]

    def test_find_for_period_by_machine_and_employee(self, db: Session):
        printing = MachineTypeFactory.create(db, name="Printing", fields=[])
        cutter = MachineTypeFactory.create(db, name="Excel", fields=[])
        employee = EmployeeFactory.create(db, machine_type=printing)
        printed = JobFactory.create(
            db,
            job_date=date(2024, 3, 2),
            employee=employee,
            entries=[{"machine_type_id": printing.id, "cost": Decimal("10")}],
        )
        cut = JobFactory.create(
            db,
            job_date=date(2024, 3, 3),
            entries=[{"machine_type_id": cutter.id, "cost": Decimal("10")}],
        )
        JobFactory.create(db, job_date=date(2024, 4, 1))

        repo = JobRepository(db)
        assert [j.id for j in repo.find_for_period(machine_type_id=printing.id)] == [
            printed.id
        ]
        assert [j.id for j in repo.find_for_period(employee_id=employee.id)] == [
            printed.id
        ]
        in_march = repo.find_for_period(date(2024, 3, 1), date(2024, 3, 31))
        assert [j.id for j in in_march] == [cut.id, printed.id]

    def test_totals(self, db: Session):
        JobFactory.create(db, job_date=date(2024, 3, 1), quantity=10, rate="10", cooly="5")
        JobFactory.create(
            db, job_date=date(2024, 3, 2), quantity=10, rate="10", waste_percentage="10"
        )
        JobFactory.create(db, job_date=date(2024, 4, 1), quantity=10, rate="10")

        totals = JobRepository(db).totals(date(2024, 3, 1), date(2024, 3, 31))
        assert totals.total_jobs == 2
        assert totals.total_revenue == Decimal("215.00")
        assert totals.total_cooly == Decimal("5.00")
        assert totals.total_waste == Decimal("10.00")

    def test_totals_for_empty_period(self, db: Session):
        totals = JobRepository(db).totals(date(2030, 1, 1), date(2030, 1, 31))
        assert totals.total_jobs == 0
        assert totals.total_revenue == Decimal("0")

    def test_next_job_number_skips_taken(self, db: Session):
        job_date = date(2024, 3, 15)
        first = JobFactory.create(db, job_date=job_date)
        second = JobFactory.create(db, job_date=job_date)
        assert first.job_number == "JOB-20240315-001"
        assert second.job_number == "JOB-20240315-002"

        repo = JobRepository(db)
        repo.delete(first.id)
        assert repo.next_job_number(job_date) == "JOB-20240315-003"
        assert repo.next_job_number(date(2024, 3, 16)) == "JOB-20240316-001"

    def test_delete_job_cascades_to_entries(self, db: Session):
        machine = MachineTypeFactory.create(db, fields=[])
        job = JobFactory.create(
            db, entries=[{"machine_type_id": machine.id, "cost": Decimal("1")}]
        )
        entry_id = job.machine_entries[0].id

        assert JobRepository(db).delete(job.id)
        assert JobMachineEntryRepository(db).get_by_id(entry_id) is None

    def test_failed_create_leaves_no_rows(self, db: Session):
        machine = MachineTypeFactory.create(db, fields=[])
        existing = JobFactory.create(db)
        jobs = JobRepository(db)
        entries = JobMachineEntryRepository(db)
        job_count, entry_count = jobs.count(), entries.count()

        duplicate = Job(
            job_number=existing.job_number,
            date=existing.date,
            customer_id=existing.customer_id,
            item_id=existing.item_id,
            quantity=10,
            rate=Decimal("1"),
        )
        entry = JobMachineEntry(machine_type_id=machine.id, cost=Decimal("5"))
        with pytest.raises(EntityAlreadyExistsError):
            jobs.create_with_entries(duplicate, [entry])

        assert jobs.count() == job_count
        assert entries.count() == entry_count

    def test_failed_entry_replacement_keeps_old_entries(self, db: Session):
        machine = MachineTypeFactory.create(db, fields=[])
        created = JobFactory.create(
            db, entries=[{"machine_type_id": machine.id, "cost": Decimal("5")}]
        )
        jobs = JobRepository(db)
        job = jobs.get_by_id_required(created.id)
        job.notes = "Reprint"

        unknown_machine = JobMachineEntry(machine_type_id=999, cost=Decimal("1"))
        with pytest.raises(EntityAlreadyExistsError):
            jobs.update_with_entries(job, [unknown_machine])

        kept = JobMachineEntryRepository(db).list_by_job(created.id)
        assert [e.id for e in kept] == [e.id for e in created.machine_entries]
        assert jobs.get_by_id_required(created.id).notes is None
