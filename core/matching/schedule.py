"""
Schedule helpers shared by the availability scorer and the slot repository.

Conventions:
- day_of_week is 0=Sunday .. 6=Saturday (as stored in the availability table)
- times are compared at minute resolution, inclusive at both ends
"""

import datetime
from typing import Union

TimeLike = Union[datetime.time, str]


def parse_hhmm(value: TimeLike) -> datetime.time:
    """Parse "HH:MM" (or "HH:MM:SS") into a time. Raises ValueError when malformed."""
    if isinstance(value, datetime.time):
        return value
    text = (value or "").strip()
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            return datetime.datetime.strptime(text, fmt).time()
        except ValueError:
            continue
    raise ValueError(f"Invalid time string: {value!r}")


def day_of_week(date: datetime.date) -> int:
    """Sunday-first weekday index: Sunday=0, Monday=1, ..., Saturday=6."""
    return date.isoweekday() % 7


def minutes_of_day(t: datetime.time) -> int:
    return t.hour * 60 + t.minute


def time_in_range(check: datetime.time, start: datetime.time, end: datetime.time) -> bool:
    return minutes_of_day(start) <= minutes_of_day(check) <= minutes_of_day(end)
