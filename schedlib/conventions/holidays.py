"""Holiday rules used to generate the built-in calendars.

The London (GBLO) rules follow OpenGamma Strata's GlobalHolidayCalendars:
https://github.com/OpenGamma/Strata/blob/main/modules/basics/src/main/java/com/opengamma/strata/basics/date/GlobalHolidayCalendars.java
"""

from __future__ import annotations

import calendar
from datetime import date, timedelta
from typing import FrozenSet, Iterable, Set

import logging

from dateutil.easter import easter

from schedlib.conventions.types import Weekday

logger = logging.getLogger(__name__)

_WEEKEND = (Weekday.SATURDAY, Weekday.SUNDAY)


def first_in_month(year: int, month: int, day_of_week: Weekday) -> date:
    """The first date in a month that falls on ``day_of_week``."""
    result = date(year, month, 1)
    while result.weekday() != day_of_week:
        result += timedelta(days=1)
    return result


def last_in_month(year: int, month: int, day_of_week: Weekday) -> date:
    """The last date in a month that falls on ``day_of_week``."""
    result = date(year, month, calendar.monthrange(year, month)[1])
    while result.weekday() != day_of_week:
        result -= timedelta(days=1)
    return result


def bump_to_monday(dt: date) -> date:
    """Move a Saturday or Sunday to the following Monday."""
    if dt.weekday() == Weekday.SATURDAY:
        return dt + timedelta(days=2)
    if dt.weekday() == Weekday.SUNDAY:
        return dt + timedelta(days=1)
    return dt


def christmas_bumped_sat_sun(year: int) -> date:
    """Christmas holiday; if 25th December is a weekend day, 27th December."""
    christmas = date(year, 12, 25)
    if christmas.weekday() in _WEEKEND:
        return date(year, 12, 27)
    return christmas


def boxing_day_bumped_sat_sun(year: int) -> date:
    """Boxing Day holiday; if 26th December is a weekend day, 28th December."""
    boxing_day = date(year, 12, 26)
    if boxing_day.weekday() in _WEEKEND:
        return date(year, 12, 28)
    return boxing_day


def remove_sat_sun(holidays: Iterable[date]) -> Set[date]:
    """Drop any Saturday or Sunday from a collection of holidays."""
    return {dt for dt in holidays if dt.weekday() not in _WEEKEND}


def _gblo_year(year: int) -> Set[date]:
    holidays: Set[date] = set()

    # New Year
    if year >= 1974:
        holidays.add(bump_to_monday(date(year, 1, 1)))

    # Easter
    easter_sunday = easter(year)
    holidays.add(easter_sunday - timedelta(days=2))
    holidays.add(easter_sunday + timedelta(days=1))

    # Early May
    if year in (1995, 2020):
        holidays.add(date(year, 5, 8))
    elif year >= 1978:
        holidays.add(first_in_month(year, 5, Weekday.MONDAY))

    # Spring, moved for the golden, diamond and platinum jubilees
    if year == 2002:
        holidays.update({date(2002, 6, 3), date(2002, 6, 4)})
    elif year == 2012:
        holidays.update({date(2012, 6, 4), date(2012, 6, 5)})
    elif year == 2022:
        holidays.update({date(2022, 6, 2), date(2022, 6, 3)})
    elif year in (1967, 1970):
        holidays.add(last_in_month(year, 5, Weekday.MONDAY))
    elif year < 1971:
        # Whit Monday
        holidays.add(easter_sunday + timedelta(days=50))
    else:
        holidays.add(last_in_month(year, 5, Weekday.MONDAY))

    # Summer
    if year < 1965:
        holidays.add(first_in_month(year, 8, Weekday.MONDAY))
    elif year < 1971:
        holidays.add(last_in_month(year, 8, Weekday.SATURDAY) + timedelta(days=2))
    else:
        holidays.add(last_in_month(year, 8, Weekday.MONDAY))

    # Christmas
    holidays.add(christmas_bumped_sat_sun(year))
    holidays.add(boxing_day_bumped_sat_sun(year))
    return holidays


_GBLO_ONE_OFF = (
    date(1999, 12, 31),  # millennium
    date(2011, 4, 29),  # royal wedding
    date(2022, 9, 19),  # state funeral
    date(2023, 5, 8),  # coronation
)


def gblo_holidays(first_year: int, last_year: int) -> FrozenSet[date]:
    """London bank holidays for every year in ``[first_year, last_year]``."""
    holidays: Set[date] = set()
    for year in range(first_year, last_year + 1):
        holidays |= _gblo_year(year)
    holidays.update(
        dt for dt in _GBLO_ONE_OFF if first_year <= dt.year <= last_year
    )
    result = frozenset(remove_sat_sun(holidays))
    logger.debug(
        "Generated %s GBLO holidays for %s-%s", len(result), first_year, last_year
    )
    return result
