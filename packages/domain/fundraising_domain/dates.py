"""Date calculations for round deadlines and invitation windows.

Every function takes an explicit ``now`` so results are reproducible;
``None`` means the current UTC time. Inputs may be ``datetime``, ``date`` or
ISO-8601 strings. Naive datetimes are treated as UTC.
"""

import math
from datetime import date, datetime, timezone
from typing import Optional, Union

DateLike = Union[str, date, datetime]

MS_PER_DAY = 1000 * 60 * 60 * 24


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_datetime(value: DateLike) -> datetime:
    """Coerce a date-like value to a timezone-aware UTC datetime.

    Args:
        value: datetime, date (midnight UTC) or ISO-8601 string

    Returns:
        Aware datetime in UTC

    Raises:
        ValueError: If a string is not valid ISO-8601
    """
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    elif not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _now(now: Optional[DateLike]) -> datetime:
    return to_datetime(now) if now is not None else utcnow()


def calculate_days_remaining(end_date: DateLike, now: Optional[DateLike] = None) -> int:
    """Whole days until ``end_date``, rounded up, never negative."""
    diff_ms = (to_datetime(end_date) - _now(now)).total_seconds() * 1000
    return max(0, math.ceil(diff_ms / MS_PER_DAY))


def is_date_in_past(value: DateLike, now: Optional[DateLike] = None) -> bool:
    return to_datetime(value) < _now(now)


def is_date_in_future(value: DateLike, now: Optional[DateLike] = None) -> bool:
    return to_datetime(value) > _now(now)


def is_date_range_active(
    start_date: DateLike,
    end_date: DateLike,
    now: Optional[DateLike] = None,
) -> bool:
    """True when ``now`` falls inside [start_date, end_date]."""
    current = _now(now)
    return to_datetime(start_date) <= current <= to_datetime(end_date)


def get_time_remaining_text(end_date: DateLike, now: Optional[DateLike] = None) -> str:
    """Human-readable time left in a round.

    Examples:
        "Ending today", "1 day remaining", "5 days remaining",
        "2 weeks remaining", "3 months remaining"
    """
    days_remaining = calculate_days_remaining(end_date, now)

    if days_remaining == 0:
        return "Ending today"
    if days_remaining == 1:
        return "1 day remaining"
    if days_remaining <= 7:
        return f"{days_remaining} days remaining"

    weeks_remaining = days_remaining // 7
    if weeks_remaining == 1:
        return "1 week remaining"
    if weeks_remaining < 4:
        return f"{weeks_remaining} weeks remaining"

    months_remaining = days_remaining // 30
    if months_remaining == 1:
        return "1 month remaining"
    return f"{months_remaining} months remaining"


def is_ending_soon(end_date: DateLike, now: Optional[DateLike] = None) -> bool:
    """True when the round ends within the next 7 days."""
    days_remaining = calculate_days_remaining(end_date, now)
    return 0 < days_remaining <= 7
