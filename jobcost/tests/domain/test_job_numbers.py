from datetime import date

import pytest

from jobcost.domain.job_numbers import (
    JOB_NUMBER_RE,
    format_job_number,
    next_sequence,
    parse_job_number,
)


def test_format_job_number():
    assert format_job_number(date(2024, 3, 5), 7) == "JOB-20240305-007"


def test_format_allows_more_than_three_digits():
    number = format_job_number(date(2024, 3, 5), 1234)
    assert number == "JOB-20240305-1234"
    assert JOB_NUMBER_RE.match(number)


def test_sequence_must_be_positive():
    with pytest.raises(ValueError):
        format_job_number(date(2024, 3, 5), 0)


def test_parse_job_number_round_trip():
    assert parse_job_number("JOB-20231231-042") == (date(2023, 12, 31), 42)


@pytest.mark.parametrize("bad", ["JOB-2024035-001", "job-20240305-001", "JOB-20240305-1"])
def test_parse_rejects_malformed(bad):
    with pytest.raises(ValueError):
        parse_job_number(bad)


def test_next_sequence_counts_existing_jobs():
    assert next_sequence(0) == 1
    assert next_sequence(4) == 5


def test_next_sequence_skips_taken_numbers():
    # Jobs 1 and 2 existed, 1 was deleted: one job left, 2 is still taken.
    assert next_sequence(1, taken={2}) == 3
    assert next_sequence(2, taken={1, 3, 4}) == 5
