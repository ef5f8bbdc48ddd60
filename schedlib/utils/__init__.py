"""Utility exports."""

from schedlib.utils.date import DateLike, days_between, to_date
from schedlib.utils.errors import (
    DegenerateAdjustmentError,
    InvalidConventionError,
    InvalidFrequencyError,
    InvalidRangeError,
    ScheduleError,
)

__all__ = [
    "DateLike",
    "days_between",
    "to_date",
    "ScheduleError",
    "InvalidRangeError",
    "InvalidFrequencyError",
    "InvalidConventionError",
    "DegenerateAdjustmentError",
]
