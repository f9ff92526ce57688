"""
Date utilities for REPTrack.

Transactions and leases carry instants. Records coming from different sources
mix naive and timezone-aware datetimes (and ISO strings), so everything is
normalized to timezone-aware UTC before comparison.

Key Features:
- Universal instant parsing (datetime, date, pd.Timestamp, ISO string)
- Day-granularity differences rounded up, the way lease countdowns are shown
- Calendar month windows for performance series
"""

import math
from datetime import datetime, date, timedelta, timezone
from typing import List, Tuple, Union

import pandas as pd
from dateutil.relativedelta import relativedelta


SECONDS_PER_DAY = 24 * 60 * 60

DateInput = Union[str, datetime, date, pd.Timestamp]


def to_utc(value: DateInput) -> datetime:
    """
    Normalize a date-like value to a timezone-aware UTC datetime.

    Naive values are interpreted as UTC. Plain dates map to midnight UTC.

    Examples:
        >>> to_utc("2024-01-15T10:00:00")
        datetime.datetime(2024, 1, 15, 10, 0, tzinfo=datetime.timezone.utc)
    """
    if value is None:
        raise ValueError("Date input cannot be None")

    if isinstance(value, pd.Timestamp):
        result = value.to_pydatetime()
    elif isinstance(value, datetime):
        result = value
    elif isinstance(value, date):
        result = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        if not value.strip():
            raise ValueError("Date string cannot be empty")
        result = pd.Timestamp(value.strip()).to_pydatetime()
    else:
        raise TypeError(f"Unsupported date input type: {type(value)}")

    if result.tzinfo is None:
        return result.replace(tzinfo=timezone.utc)
    return result.astimezone(timezone.utc)


def utc_now() -> datetime:
    """Current instant as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def days_until(target: DateInput, as_of: DateInput) -> int:
    """
    Whole days from ``as_of`` to ``target``, rounded up.

    A lease ending two hours from now is 1 day away; one that ended two hours
    ago is 0 days away; one that ended yesterday is -1.

    Examples:
        >>> days_until("2024-03-01", "2024-01-31")
        30
    """
    delta = to_utc(target) - to_utc(as_of)
    return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)


def in_window(value: DateInput, start: DateInput, end: DateInput) -> bool:
    """True when ``start <= value < end``."""
    instant = to_utc(value)
    return to_utc(start) <= instant < to_utc(end)


def trailing_window(as_of: DateInput, days: int) -> Tuple[datetime, datetime]:
    """
    Window covering the ``days`` days up to and including ``as_of``.

    The end bound is exclusive, so it is pushed one microsecond past ``as_of``.
    """
    end = to_utc(as_of)
    return end - timedelta(days=days), end + timedelta(microseconds=1)


def month_starts(as_of: DateInput, months: int) -> List[datetime]:
    """
    First instant of each of the last ``months`` calendar months, oldest first.

    The month containing ``as_of`` is the last entry.

    Examples:
        >>> [d.month for d in month_starts("2024-03-15", 3)]
        [1, 2, 3]
    """
    if months <= 0:
        raise ValueError(f"months must be positive, got {months}")
    anchor = to_utc(as_of).replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    return [anchor - relativedelta(months=offset) for offset in range(months - 1, -1, -1)]
