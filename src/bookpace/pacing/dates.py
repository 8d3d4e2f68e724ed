"""Day-granularity calendar helpers.

Every helper works on whole calendar days in the local time zone, so the
time of day at which it is called never changes the result. Pass ``today``
explicitly to evaluate against a fixed day; otherwise the local clock is
read once per call.
"""

import calendar
from datetime import date, datetime
from typing import Optional, Union

DateLike = Union[date, datetime]


def _as_date(value: DateLike) -> date:
    """Drop the time-of-day part of a datetime."""
    if isinstance(value, datetime):
        return value.date()
    return value


def today() -> date:
    """Return the current local calendar date."""
    return date.today()


def _resolve(day: Optional[DateLike]) -> date:
    return _as_date(day) if day is not None else today()


def end_of_current_month(today: Optional[DateLike] = None) -> date:
    """Return the last calendar day of the current month.

    Used as the default target date for newly created books.
    """
    current = _resolve(today)
    last_day = calendar.monthrange(current.year, current.month)[1]
    return current.replace(day=last_day)


def days_remaining(target_date: DateLike, today: Optional[DateLike] = None) -> int:
    """Whole days from today until the target date, never negative.

    Returns 0 both when the target is today and when it has passed; use
    :func:`is_past` to tell the two apart.
    """
    diff = (_as_date(target_date) - _resolve(today)).days
    return max(0, diff)


def is_past(target_date: DateLike, today: Optional[DateLike] = None) -> bool:
    """True if the target date is strictly before today."""
    return _as_date(target_date) < _resolve(today)


def parse_date(value: Union[str, DateLike]) -> date:
    """Parse a date from an ISO ``YYYY-MM-DD`` string, date or datetime.

    Raises:
        ValueError: If the value is not a recognisable date
    """
    if isinstance(value, (date, datetime)):
        return _as_date(value)
    if not isinstance(value, str):
        raise ValueError(f"Not a date: {value!r}")
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValueError(f"Invalid date (expected YYYY-MM-DD): {value!r}")
