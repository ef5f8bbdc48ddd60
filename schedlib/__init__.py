"""Financial date schedules.

This package builds periodic accrual and payment schedules, adjusting every
boundary for weekends and holidays under a business day convention.

Key modules:
- schedule: Frequency, SchedulePeriod, Schedule and business day adjustment
- conventions: holiday calendars, day counts and shared enumerations
- config: library-wide defaults
"""

__version__ = "1.0.0"

from schedlib.conventions import (
    BusinessDayConvention,
    HolidayCalendar,
    HolidayCalendarId,
    PeriodUnit,
    StubConvention,
    Weekday,
    get_calendar,
)
from schedlib.schedule import (
    BusinessDayAdjustment,
    Frequency,
    Schedule,
    SchedulePeriod,
    adjust_date,
)
from schedlib.utils.errors import (
    DegenerateAdjustmentError,
    InvalidConventionError,
    InvalidFrequencyError,
    InvalidRangeError,
    ScheduleError,
)

__all__ = [
    "__version__",
    "BusinessDayAdjustment",
    "BusinessDayConvention",
    "DegenerateAdjustmentError",
    "Frequency",
    "HolidayCalendar",
    "HolidayCalendarId",
    "InvalidConventionError",
    "InvalidFrequencyError",
    "InvalidRangeError",
    "PeriodUnit",
    "Schedule",
    "ScheduleError",
    "SchedulePeriod",
    "StubConvention",
    "Weekday",
    "adjust_date",
    "get_calendar",
]
