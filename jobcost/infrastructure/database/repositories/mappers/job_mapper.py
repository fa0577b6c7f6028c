"""
Mapper for converting joined job rows into read models.

Rows come from the job repository's joined selects; machine custom data is
stored as JSON text and decoded here.
"""

from jobcost.domain.custom_fields import parse_custom_data
from jobcost.models import Job, JobMachineEntry, JobMachineEntryRead, JobRead


class JobMapper:
    """Build JobRead and JobMachineEntryRead models from joined rows."""

    @staticmethod
    def entry_to_read(
        entry: JobMachineEntry, machine_type_name: str | None
    ) -> JobMachineEntryRead:
        return JobMachineEntryRead.model_validate(
            entry,
            update={
                "machine_type_name": machine_type_name,
                "machine_custom_data": parse_custom_data(entry.machine_custom_data),
            },
        )

    @staticmethod
    def job_to_read(
        job: Job,
        customer_name: str | None,
        employee_name: str | None,
        item_name: str | None,
        item_size: str | None,
        category_name: str | None,
        entries: list[JobMachineEntryRead] | None = None,
    ) -> JobRead:
        """
        Convert a job row and its joined display names to a JobRead.

        Args:
            job: Job table row
            customer_name, employee_name, item_name, item_size, category_name:
                joined columns, None when the referenced row is missing
            entries: machine entries already mapped for this job

        Returns:
            JobRead
        """
        return JobRead.model_validate(
            job,
            update={
                "customer_name": customer_name,
                "employee_name": employee_name,
                "item_name": item_name,
                "item_size": item_size,
                "category_name": category_name,
                "machine_entries": entries or [],
            },
        )
