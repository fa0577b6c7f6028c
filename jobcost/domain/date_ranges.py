"""Named reporting periods (weeks run Monday to Sunday)."""

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum


class DateRangeKey(str, Enum):
    TODAY = "today"
    THIS_WEEK = "this-week"
    THIS_MONTH = "this-month"
    LAST_WEEK = "last-week"
    LAST_MONTH = "last-month"


@dataclass(frozen=True)
class DateRange:
    date_from: date
    date_to: date
    label: str


def _month_bounds(year: int, month: int) -> tuple[date, date]:
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def get_date_range(key: DateRangeKey | str, today: date | None = None) -> DateRange:
    key = DateRangeKey(key)
    today = today or date.today()
    monday = today - timedelta(days=today.weekday())

    if key == DateRangeKey.TODAY:
        return DateRange(today, today, "Today")
    if key == DateRangeKey.THIS_WEEK:
        return DateRange(monday, monday + timedelta(days=6), "This Week")
    if key == DateRangeKey.LAST_WEEK:
        last_monday = monday - timedelta(days=7)
        return DateRange(last_monday, last_monday + timedelta(days=6), "Last Week")
    if key == DateRangeKey.THIS_MONTH:
        first, last = _month_bounds(today.year, today.month)
        return DateRange(first, last, "This Month")

    previous = today.replace(day=1) - timedelta(days=1)
    first, last = _month_bounds(previous.year, previous.month)
    return DateRange(first, last, "Last Month")
