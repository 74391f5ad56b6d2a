"""Calendar helpers: month arithmetic, day clamping and month keys.

Month keys are ``"YYYY-MM"`` strings. Month arithmetic goes through
``dateutil.relativedelta`` so adding months to the 31st lands on the last
valid day of the target month instead of overflowing.
"""

import calendar
from datetime import date, datetime

from dateutil.relativedelta import relativedelta

from future_ledger.exceptions import InvalidDateError

MONTH_NAMES = (
    "janeiro",
    "fevereiro",
    "março",
    "abril",
    "maio",
    "junho",
    "julho",
    "agosto",
    "setembro",
    "outubro",
    "novembro",
    "dezembro",
)


def parse_date(value: str | date) -> date:
    """Parse an ISO date, ISO datetime or month key into a ``date``.

    Month keys resolve to the first day of that month.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    try:
        if len(text) == 7:
            return parse_month(text)
        return date.fromisoformat(text[:10])
    except ValueError as exc:
        raise InvalidDateError(f"Invalid date: {value!r}") from exc


def parse_month(key: str) -> date:
    """Parse a ``"YYYY-MM"`` key into the first day of that month."""
    try:
        year, month = key.split("-")
        return date(int(year), int(month), 1)
    except ValueError as exc:
        raise InvalidDateError(f"Invalid month key: {key!r}") from exc


def month_key(value: date) -> str:
    """Format a date as its ``"YYYY-MM"`` month key."""
    return f"{value.year:04d}-{value.month:02d}"


def format_date(value: date) -> str:
    return value.isoformat()


def month_name(value: date) -> str:
    """Human month label, e.g. ``"janeiro"``."""
    return MONTH_NAMES[value.month - 1]


def days_in_month(value: date) -> int:
    return calendar.monthrange(value.year, value.month)[1]


def start_of_month(value: date) -> date:
    return value.replace(day=1)


def with_day(value: date, day: int) -> date:
    """Return the same month at ``day``, clamped to 1..days_in_month."""
    return value.replace(day=max(1, min(day, days_in_month(value))))


def add_months(value: date, months: int) -> date:
    """Shift by whole months, clamping the day to the target month."""
    return value + relativedelta(months=months)


def shift_key(key: str, months: int) -> str:
    """Shift a month key by whole months."""
    return month_key(add_months(parse_month(key), months))


def month_diff(later: date, earlier: date) -> int:
    """Whole calendar months between two dates, ignoring the day."""
    return (later.year - earlier.year) * 12 + (later.month - earlier.month)


def is_before_month(value: date, other: date) -> bool:
    return month_diff(value, other) < 0


def is_same_or_after_month(value: date, other: date) -> bool:
    return month_diff(value, other) >= 0


def clamp_iso_date(text: str) -> tuple[str, bool]:
    """Clamp an overflowing ``YYYY-MM-DD`` string to the month's last day.

    Returns the (possibly corrected) string and whether it was changed.
    Strings that are not three dash-separated integers are returned as-is.
    """
    parts = text[:10].split("-")
    if len(parts) != 3:
        return text, False
    try:
        year, month, day = (int(p) for p in parts)
        last_day = calendar.monthrange(year, month)[1]
    except ValueError:
        return text, False
    if day <= last_day:
        return text, False
    return f"{year:04d}-{month:02d}-{last_day:02d}", True
