from datetime import date

import pytest

from jobcost.domain.date_ranges import DateRangeKey, get_date_range

# A Wednesday
TODAY = date(2024, 3, 13)


@pytest.mark.parametrize(
    ("key", "expected_from", "expected_to", "label"),
    [
        ("today", date(2024, 3, 13), date(2024, 3, 13), "Today"),
        ("this-week", date(2024, 3, 11), date(2024, 3, 17), "This Week"),
        ("last-week", date(2024, 3, 4), date(2024, 3, 10), "Last Week"),
        ("this-month", date(2024, 3, 1), date(2024, 3, 31), "This Month"),
        ("last-month", date(2024, 2, 1), date(2024, 2, 29), "Last Month"),
    ],
)
def test_presets(key, expected_from, expected_to, label):
    resolved = get_date_range(key, TODAY)
    assert (resolved.date_from, resolved.date_to, resolved.label) == (
        expected_from,
        expected_to,
        label,
    )


def test_week_starts_on_monday_even_on_sunday():
    resolved = get_date_range(DateRangeKey.THIS_WEEK, date(2024, 3, 17))
    assert resolved.date_from == date(2024, 3, 11)


def test_last_month_in_january():
    resolved = get_date_range(DateRangeKey.LAST_MONTH, date(2024, 1, 10))
    assert (resolved.date_from, resolved.date_to) == (date(2023, 12, 1), date(2023, 12, 31))


def test_unknown_key():
    with pytest.raises(ValueError):
        get_date_range("next-year", TODAY)
