"""Date helpers for relationship intervals."""

from datetime import date, datetime
from typing import Optional, Union

DateLike = Union[date, datetime]


def clear_time_component(value: DateLike) -> date:
    """Drop the time of day, keeping the calendar date."""
    if isinstance(value, datetime):
        return value.date()
    return value


def resolve_date(value: Optional[DateLike] = None) -> date:
    """Return ``value`` without its time component, defaulting to today."""
    if value is None:
        value = datetime.now()
    return clear_time_component(value)
