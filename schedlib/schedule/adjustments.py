"""
Business day adjustment of schedule dates.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Union

import logging

from schedlib import config
from schedlib.conventions.calendars import HolidayCalendar, get_calendar
from schedlib.conventions.types import BusinessDayConvention
from schedlib.utils.date import DateLike, same_month, to_date
from schedlib.utils.errors import DegenerateAdjustmentError

logger = logging.getLogger(__name__)


def _following(dt: date, calendar: HolidayCalendar) -> date:
    if calendar.is_business_day(dt):
        return dt
    return calendar.next_business_day(dt)


def _preceding(dt: date, calendar: HolidayCalendar) -> date:
    if calendar.is_business_day(dt):
        return dt
    return calendar.previous_business_day(dt)


def _within_month(roll, dt: date, calendar: HolidayCalendar) -> Optional[date]:
    """Roll ``dt`` one way, or None when the result leaves its month."""
    try:
        adjusted = roll(dt, calendar)
    except DegenerateAdjustmentError:
        # Running out of search days counts as leaving the month
        return None
    return adjusted if same_month(adjusted, dt) else None


def adjust_date(
    dt: DateLike,
    calendar: HolidayCalendar,
    convention: Union[BusinessDayConvention, str],
) -> date:
    """Apply business day adjustment to a date.

    Raises:
        InvalidConventionError: if ``convention`` is not recognized.
        DegenerateAdjustmentError: if no business day is reachable, or a
            modified rule finds no business day in the whole month of ``dt``.
    """
    convention = BusinessDayConvention.parse(convention)
    dt = to_date(dt)

    if convention == BusinessDayConvention.UNADJUSTED:
        return dt

    elif convention == BusinessDayConvention.FOLLOWING:
        return _following(dt, calendar)

    elif convention == BusinessDayConvention.PRECEDING:
        return _preceding(dt, calendar)

    elif convention == BusinessDayConvention.MODIFIED_FOLLOWING:
        # If month changed, use preceding instead
        adjusted = _within_month(_following, dt, calendar)
        if adjusted is None:
            adjusted = _within_month(_preceding, dt, calendar)
        if adjusted is not None:
            return adjusted

    elif convention == BusinessDayConvention.MODIFIED_PRECEDING:
        # If month changed, use following instead
        adjusted = _within_month(_preceding, dt, calendar)
        if adjusted is None:
            adjusted = _within_month(_following, dt, calendar)
        if adjusted is not None:
            return adjusted

    logger.debug("%s found no business day in the month of %s", convention.name, dt)
    raise DegenerateAdjustmentError(
        f"{convention.name} cannot adjust {dt}: "
        f"no business day in {dt:%Y-%m} for calendar {calendar.calendar_id.value}"
    )


@dataclass(frozen=True)
class BusinessDayAdjustment:
    """A business day convention bound to the calendar it is applied against.

    The convention is validated here, before any date arithmetic happens.
    Without an explicit calendar the configured default calendar is used.
    """

    convention: BusinessDayConvention = field(default_factory=config.default_convention)
    calendar: Optional[HolidayCalendar] = None

    def __post_init__(self):
        object.__setattr__(self, "convention", BusinessDayConvention.parse(self.convention))
        if self.calendar is None:
            object.__setattr__(self, "calendar", get_calendar())
        elif not isinstance(self.calendar, HolidayCalendar):
            object.__setattr__(self, "calendar", get_calendar(self.calendar))

    def adjust(self, dt: DateLike, calendar: Optional[HolidayCalendar] = None) -> date:
        """Adjust ``dt``; an explicit calendar overrides the bound one."""
        return adjust_date(dt, self.calendar if calendar is None else calendar, self.convention)

    def is_adjusting(self) -> bool:
        return self.convention != BusinessDayConvention.UNADJUSTED


NO_ADJUSTMENT = BusinessDayAdjustment(BusinessDayConvention.UNADJUSTED, HolidayCalendar())
