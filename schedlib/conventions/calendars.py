"""
Holiday calendars.

A holiday calendar keeps track of which dates are holidays and which weekdays
form the weekend. Different countries, exchanges and payment systems have
different calendars.

The London calendar is generated from rules; the NYSE and TARGET calendars
are materialised from QuantLib's implementations over the configured span
of years. Any other set of holidays can be wrapped directly in a
``HolidayCalendar``.
"""

from datetime import date, timedelta
from typing import Dict, FrozenSet, Iterable, Tuple, Union

import logging

import QuantLib as ql

from schedlib import config
from schedlib.conventions.holidays import gblo_holidays
from schedlib.conventions.types import HolidayCalendarId, Weekday
from schedlib.utils.date import DateLike, to_date
from schedlib.utils.errors import DegenerateAdjustmentError

logger = logging.getLogger(__name__)


def _to_py_date(ql_date: ql.Date) -> date:
    """Convert QuantLib Date to Python date."""
    return date(ql_date.year(), ql_date.month(), ql_date.dayOfMonth())


class HolidayCalendar:
    """Business day calendar built from a set of holidays and a weekend pair.

    A date is a business day when it is neither a weekend day nor listed
    as a holiday. Instances are immutable and safe to share.
    """

    __slots__ = ("_holidays", "_first_weekend_day", "_second_weekend_day", "_calendar_id")

    def __init__(
        self,
        holidays: Iterable[DateLike] = (),
        first_weekend_day=None,
        second_weekend_day=None,
        calendar_id: HolidayCalendarId = HolidayCalendarId.CUST,
    ):
        default_first, default_second = config.default_weekend()
        self._holidays: FrozenSet[date] = frozenset(to_date(dt) for dt in holidays)
        self._first_weekend_day = Weekday.parse(
            default_first if first_weekend_day is None else first_weekend_day
        )
        self._second_weekend_day = Weekday.parse(
            default_second if second_weekend_day is None else second_weekend_day
        )
        if not isinstance(calendar_id, HolidayCalendarId):
            calendar_id = HolidayCalendarId(calendar_id)
        self._calendar_id = calendar_id

    @property
    def holidays(self) -> Tuple[date, ...]:
        """Holiday dates in ascending order."""
        return tuple(sorted(self._holidays))

    @property
    def first_weekend_day(self) -> Weekday:
        return self._first_weekend_day

    @property
    def second_weekend_day(self) -> Weekday:
        return self._second_weekend_day

    @property
    def weekend_days(self) -> FrozenSet[Weekday]:
        return frozenset((self._first_weekend_day, self._second_weekend_day))

    @property
    def calendar_id(self) -> HolidayCalendarId:
        return self._calendar_id

    def is_holiday(self, dt: DateLike) -> bool:
        """Check if date is a listed holiday."""
        return to_date(dt) in self._holidays

    def is_weekend(self, dt: DateLike) -> bool:
        weekday = to_date(dt).weekday()
        return weekday == self._first_weekend_day or weekday == self._second_weekend_day

    def is_business_day(self, dt: DateLike) -> bool:
        """Check if date is a business day (not weekend or holiday)."""
        dt = to_date(dt)
        return not self.is_weekend(dt) and dt not in self._holidays

    def next_business_day(self, dt: DateLike) -> date:
        """First business day strictly after ``dt``."""
        return self._step_to_business_day(to_date(dt), 1)

    def previous_business_day(self, dt: DateLike) -> date:
        """Last business day strictly before ``dt``."""
        return self._step_to_business_day(to_date(dt), -1)

    def _step_to_business_day(self, dt: date, step: int) -> date:
        limit = config.max_adjustment_days()
        current = dt
        for _ in range(limit):
            current += timedelta(days=step)
            if self.is_business_day(current):
                return current
        logger.debug(
            "No business day within %s days %s %s in %r",
            limit,
            "after" if step > 0 else "before",
            dt,
            self,
        )
        raise DegenerateAdjustmentError(
            f"No business day within {limit} days "
            f"{'after' if step > 0 else 'before'} {dt} in calendar {self._calendar_id.value}"
        )

    def add_business_days(self, start_date: DateLike, days: int) -> date:
        """Add business days to a date; a negative count moves backward.

        A zero count rolls a non-business day to the following business day.
        """
        current = to_date(start_date)
        if days == 0 and not self.is_business_day(current):
            return self._step_to_business_day(current, 1)
        step = 1 if days >= 0 else -1
        for _ in range(abs(days)):
            current = self._step_to_business_day(current, step)
        return current

    def business_days_between(self, start: DateLike, end: DateLike) -> int:
        """Count business days between two dates (exclusive of start, inclusive of end)."""
        current = to_date(start)
        end = to_date(end)
        count = 0
        while current < end:
            current += timedelta(days=1)
            if self.is_business_day(current):
                count += 1
        return count

    def with_holidays(self, holidays: Iterable[DateLike]) -> "HolidayCalendar":
        """A new calendar with extra holidays added."""
        return HolidayCalendar(
            self._holidays | {to_date(dt) for dt in holidays},
            self._first_weekend_day,
            self._second_weekend_day,
            self._calendar_id,
        )

    def remove_weekend_holidays(self) -> "HolidayCalendar":
        """A new calendar without the holidays that fall on a weekend day."""
        return HolidayCalendar(
            (dt for dt in self._holidays if not self.is_weekend(dt)),
            self._first_weekend_day,
            self._second_weekend_day,
            self._calendar_id,
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, HolidayCalendar):
            return NotImplemented
        return (
            self._holidays == other._holidays
            and self.weekend_days == other.weekend_days
            and self._calendar_id == other._calendar_id
        )

    def __hash__(self) -> int:
        return hash((self._holidays, self.weekend_days, self._calendar_id))

    def __repr__(self) -> str:
        return (
            f"HolidayCalendar(id={self._calendar_id.value}, "
            f"holidays={len(self._holidays)}, "
            f"weekend=({self._first_weekend_day.name}, {self._second_weekend_day.name}))"
        )


def _quantlib_holidays(ql_calendar: ql.Calendar, first_year: int, last_year: int) -> FrozenSet[date]:
    """Non-weekend holidays of a QuantLib calendar over a span of years."""
    holidays = set()
    current = ql.Date(1, 1, first_year)
    end_date = ql.Date(31, 12, last_year)
    while current <= end_date:
        if ql_calendar.isHoliday(current) and not ql_calendar.isWeekend(current.weekday()):
            holidays.add(_to_py_date(current))
        current += 1
    return frozenset(holidays)


def _build_gblo(first_year: int, last_year: int) -> HolidayCalendar:
    return HolidayCalendar(
        gblo_holidays(first_year, last_year),
        Weekday.SATURDAY,
        Weekday.SUNDAY,
        HolidayCalendarId.GBLO,
    )


def _build_nyse(first_year: int, last_year: int) -> HolidayCalendar:
    return HolidayCalendar(
        _quantlib_holidays(ql.UnitedStates(ql.UnitedStates.NYSE), first_year, last_year),
        Weekday.SATURDAY,
        Weekday.SUNDAY,
        HolidayCalendarId.NYSE,
    )


def _build_euta(first_year: int, last_year: int) -> HolidayCalendar:
    return HolidayCalendar(
        _quantlib_holidays(ql.TARGET(), first_year, last_year),
        Weekday.SATURDAY,
        Weekday.SUNDAY,
        HolidayCalendarId.EUTA,
    )


_BUILDERS = {
    HolidayCalendarId.GBLO: _build_gblo,
    HolidayCalendarId.NYSE: _build_nyse,
    HolidayCalendarId.EUTA: _build_euta,
}

# Calendar registry
CALENDAR_ALIASES: Dict[str, HolidayCalendarId] = {
    "GBLO": HolidayCalendarId.GBLO,
    "UK": HolidayCalendarId.GBLO,
    "LONDON": HolidayCalendarId.GBLO,
    "NYSE": HolidayCalendarId.NYSE,
    "USNY": HolidayCalendarId.NYSE,
    "EUTA": HolidayCalendarId.EUTA,
    "TARGET": HolidayCalendarId.EUTA,
    "EUR": HolidayCalendarId.EUTA,  # Alias
    "CUST": HolidayCalendarId.CUST,
    "WEEKEND": HolidayCalendarId.CUST,
}

_CACHE: Dict[HolidayCalendarId, HolidayCalendar] = {}


def clear_calendar_cache() -> None:
    """Forget generated calendars so they are rebuilt on next use."""
    _CACHE.clear()


def get_calendar(name: Union[str, HolidayCalendarId, None] = None) -> HolidayCalendar:
    """
    Get a calendar by name.

    Args:
        name: Calendar id or alias ("GBLO", "NYSE", "TARGET", "WEEKEND", ...).
            ``None`` resolves to the configured default calendar.

    Note: "CUST"/"WEEKEND" is a weekends-only calendar using the configured
    default weekend days.
    """
    if name is None:
        name = config.default_calendar_name()
    if isinstance(name, HolidayCalendarId):
        calendar_id = name
    else:
        calendar_id = CALENDAR_ALIASES.get(str(name).strip().upper())
        if calendar_id is None:
            raise ValueError(
                f"Unknown calendar: {name}. Available: {list(CALENDAR_ALIASES.keys())}"
            )

    if calendar_id == HolidayCalendarId.CUST:
        return HolidayCalendar()

    calendar = _CACHE.get(calendar_id)
    if calendar is None:
        first_year, last_year = config.holiday_years()
        logger.debug("Building %s calendar for %s-%s", calendar_id.value, first_year, last_year)
        calendar = _BUILDERS[calendar_id](first_year, last_year)
        _CACHE[calendar_id] = calendar
    return calendar
