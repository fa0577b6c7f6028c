"""Human-readable job numbers: JOB-YYYYMMDD-NNN, sequenced per job date."""

import re
from collections.abc import Collection
from datetime import date, datetime

JOB_NUMBER_RE = re.compile(r"^JOB-(\d{8})-(\d{3,})$")


def format_job_number(job_date: date, sequence: int) -> str:
    if sequence < 1:
        raise ValueError("Job number sequence starts at 1")
    return f"JOB-{job_date:%Y%m%d}-{sequence:03d}"


def job_number_prefix(job_date: date) -> str:
    return f"JOB-{job_date:%Y%m%d}-"


def parse_job_number(job_number: str) -> tuple[date, int]:
    match = JOB_NUMBER_RE.match(job_number)
    if not match:
        raise ValueError(f"Not a job number: {job_number!r}")
    job_date = datetime.strptime(match.group(1), "%Y%m%d").date()
    return job_date, int(match.group(2))


def next_sequence(existing_count: int, taken: Collection[int] = ()) -> int:
    """
    Sequence for the next job on a date.

    One past the number of jobs already on that date, skipping numbers
    still held by other jobs (only possible after a deletion).
    """
    sequence = existing_count + 1
    while sequence in taken:
        sequence += 1
    return sequence
