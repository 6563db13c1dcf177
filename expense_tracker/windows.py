# expense_tracker/windows.py
from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from enum import Enum
from typing import Iterable, List, Tuple

from expense_tracker.errors import ValidationError

MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY, SUNDAY = range(7)

_WEEKDAY_NAMES = {
    "monday": MONDAY,
    "tuesday": TUESDAY,
    "wednesday": WEDNESDAY,
    "thursday": THURSDAY,
    "friday": FRIDAY,
    "saturday": SATURDAY,
    "sunday": SUNDAY,
}


class Window(str, Enum):
    ALL = "all"
    WEEK = "week"
    MONTH = "month"


def parse_window(value) -> Window:
    if isinstance(value, Window):
        return value
    try:
        return Window(str(value).strip().lower())
    except ValueError as exc:
        choices = ", ".join(w.value for w in Window)
        raise ValidationError(
            f"Unknown window '{value}'. Expected one of: {choices}"
        ) from exc


def parse_week_start(value) -> int:
    """Resolve a weekday name ('monday', 'sun') or index (Monday=0) to an index."""
    if isinstance(value, bool):
        raise ValidationError(f"Invalid week start: {value!r}")
    if isinstance(value, int):
        if 0 <= value <= 6:
            return value
        raise ValidationError(f"Week start must be between 0 and 6, got {value}")
    text = str(value).strip().lower()
    if text.isdigit():
        return parse_week_start(int(text))
    for name, index in _WEEKDAY_NAMES.items():
        if len(text) >= 3 and name.startswith(text):
            return index
    raise ValidationError(f"Invalid week start: {value!r}")


def parse_timestamp(text: str) -> datetime:
    """Parse an ISO-8601 timestamp into an aware datetime.

    A trailing ``Z`` is accepted. Naive values are taken as local time.
    Raises ``ValueError`` when the text is not ISO-8601.
    """
    value = text.strip()
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    return parsed.astimezone()


def _midnight(day: date, now: datetime) -> datetime:
    """Midnight starting *day*, in the same zone as *now*.

    A fixed offset that matches local time is treated as local time, so the
    offset is looked up again for *day* when a DST change lies in between.
    """
    if now.tzinfo is None:
        return datetime.combine(day, time())
    if isinstance(now.tzinfo, timezone) and now.utcoffset() == now.astimezone().utcoffset():
        return datetime.combine(day, time()).astimezone()
    return datetime.combine(day, time(), tzinfo=now.tzinfo)


def compute_window_bounds(
    window,
    now: datetime,
    week_start: int = SUNDAY,
) -> Tuple[datetime | None, datetime | None]:
    """Return the inclusive ``(start, end)`` range for *window* at *now*.

    ``all`` is unbounded and yields ``(None, None)``. ``week`` starts at
    midnight of the most recent *week_start* weekday (today included) and
    ``month`` at midnight of the first day of the month. Both end at *now*.
    """
    window = parse_window(window)
    if window is Window.ALL:
        return None, None
    if window is Window.WEEK:
        days_back = (now.weekday() - week_start) % 7
        return _midnight(now.date() - timedelta(days=days_back), now), now
    return _midnight(now.date().replace(day=1), now), now


def _in_range(expense, start: datetime, end: datetime) -> bool:
    if not expense.date:
        # Rows migrated from before the date column existed are always shown.
        return True
    try:
        moment = parse_timestamp(expense.date)
    except ValueError:
        return False
    if start.tzinfo is None:
        start = start.astimezone()
        end = end.astimezone()
    return start <= moment <= end


def filter_by_window(
    expenses: Iterable,
    window,
    now: datetime,
    week_start: int = SUNDAY,
) -> List:
    """Keep the expenses whose date falls inside *window*, preserving order."""
    start, end = compute_window_bounds(window, now, week_start)
    if start is None:
        return list(expenses)
    return [e for e in expenses if _in_range(e, start, end)]
