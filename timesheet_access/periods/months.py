"""Period-month arithmetic. A period is identified by the first day of its calendar month."""

import calendar
import re
from datetime import date, datetime
from typing import Union

from timesheet_access.domain.exceptions import InvalidPeriodError

_MONTH_OR_DAY = re.compile(r"^(\d{4})-(\d{2})(?:-(\d{2}))?$")

PeriodInput = Union[str, date, datetime]


def normalize_period_month(value: PeriodInput) -> date:
    """
    Accept 'YYYY-MM', 'YYYY-MM-DD', a date or a datetime; return the first day of that month.
    Raises InvalidPeriodError for anything else, including impossible days.
    """
    if isinstance(value, datetime):
        return date(value.year, value.month, 1)
    if isinstance(value, date):
        return value.replace(day=1)
    if not isinstance(value, str):
        raise InvalidPeriodError(f"period_month must be a date or ISO string, got {type(value).__name__}")

    match = _MONTH_OR_DAY.match(value.strip())
    if not match:
        raise InvalidPeriodError(f"period_month '{value}' is not YYYY-MM or YYYY-MM-DD")
    year, month, day = int(match.group(1)), int(match.group(2)), match.group(3)
    try:
        parsed = date(year, month, int(day) if day else 1)
    except ValueError as e:
        raise InvalidPeriodError(f"period_month '{value}' is not a calendar date") from e
    return parsed.replace(day=1)


def previous_month(period_month: date) -> date:
    if period_month.month == 1:
        return date(period_month.year - 1, 12, 1)
    return date(period_month.year, period_month.month - 1, 1)


def deadline_in_month(year: int, month: int, deadline_day: int) -> date:
    """Deadline date inside the given month. deadline_day 0 means the last day of the month."""
    last_day = calendar.monthrange(year, month)[1]
    if deadline_day <= 0:
        return date(year, month, last_day)
    return date(year, month, min(deadline_day, last_day))
