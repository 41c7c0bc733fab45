"""Booking price calculation"""

import math
from datetime import date, datetime, time
from typing import Union

from ..exceptions import ValidationError

DateLike = Union[date, datetime]

SECONDS_PER_DAY = 86400


def _as_datetime(value: DateLike) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def days_between_inclusive(start: DateLike, end: DateLike) -> int:
    """Number of worked days in the span, counting both ends (same day -> 1)"""
    elapsed = (_as_datetime(end) - _as_datetime(start)).total_seconds()
    return math.ceil(elapsed / SECONDS_PER_DAY) + 1


def compute_total(daily_rate: int, start: DateLike, end: DateLike) -> int:
    """
    Total charge for a booking, in cents.

    Args:
        daily_rate: Rate per day in cents (>= 0)
        start: First day of service
        end: Last day of service (inclusive, >= start)

    Raises:
        ValidationError: On a negative rate or an inverted range
    """
    if daily_rate < 0:
        raise ValidationError("Daily rate must be zero or greater")
    if _as_datetime(end) < _as_datetime(start):
        raise ValidationError("End date must be on or after start date")

    return daily_rate * days_between_inclusive(start, end)
