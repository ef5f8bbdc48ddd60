"""Calendars, day counts and the enumerations shared by the scheduler."""

from .calendars import HolidayCalendar, clear_calendar_cache, get_calendar
from .daycount import DayCountConvention, get_day_count_convention
from .types import (
    BusinessDayConvention,
    HolidayCalendarId,
    PeriodUnit,
    StubConvention,
    Weekday,
)

__all__ = [
    "BusinessDayConvention",
    "DayCountConvention",
    "HolidayCalendar",
    "HolidayCalendarId",
    "PeriodUnit",
    "StubConvention",
    "Weekday",
    "clear_calendar_cache",
    "get_calendar",
    "get_day_count_convention",
]
