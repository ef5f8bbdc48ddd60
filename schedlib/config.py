"""
Library-wide defaults for calendars and business day adjustment.

Values are read at call time, so changing them affects subsequent builds only.
"""

from typing import Tuple

from schedlib.conventions.types import BusinessDayConvention, Weekday

# Default market settings
_DEFAULT_WEEKEND: Tuple[Weekday, Weekday] = (Weekday.SATURDAY, Weekday.SUNDAY)
_DEFAULT_CONVENTION = BusinessDayConvention.MODIFIED_FOLLOWING
_DEFAULT_CALENDAR_NAME = "CUST"
_DEFAULT_HOLIDAY_YEARS: Tuple[int, int] = (1950, 2099)
_DEFAULT_MAX_ADJUSTMENT_DAYS = 366

_weekend = _DEFAULT_WEEKEND
_convention = _DEFAULT_CONVENTION
_calendar_name = _DEFAULT_CALENDAR_NAME
_holiday_years = _DEFAULT_HOLIDAY_YEARS
_max_adjustment_days = _DEFAULT_MAX_ADJUSTMENT_DAYS


def default_weekend() -> Tuple[Weekday, Weekday]:
    return _weekend


def set_default_weekend(first, second) -> None:
    """Set the weekend days used by calendars built without explicit ones."""
    global _weekend
    _weekend = (Weekday.parse(first), Weekday.parse(second))


def default_convention() -> BusinessDayConvention:
    return _convention


def set_default_convention(convention) -> None:
    """Set the convention used when an adjustment is built without one."""
    global _convention
    _convention = BusinessDayConvention.parse(convention)


def default_calendar_name() -> str:
    return _calendar_name


def set_default_calendar(calendar_name: str) -> None:
    """Set the default calendar for date calculations."""
    global _calendar_name
    # Imported here to avoid a circular import at module load time
    from schedlib.conventions.calendars import get_calendar

    get_calendar(calendar_name)
    _calendar_name = calendar_name


def holiday_years() -> Tuple[int, int]:
    return _holiday_years


def set_holiday_years(first_year: int, last_year: int) -> None:
    """Set the inclusive year span used to generate named calendars."""
    global _holiday_years
    for year in (first_year, last_year):
        if isinstance(year, bool) or not isinstance(year, int):
            raise ValueError(f"Holiday years must be integers: {year!r}")
    if first_year > last_year:
        raise ValueError(
            f"first_year must not exceed last_year: {first_year} > {last_year}"
        )
    if first_year < 1901 or last_year > 2199:
        # QuantLib calendars only cover 1901-2199
        raise ValueError(f"Holiday years must lie within 1901-2199: {first_year}-{last_year}")
    _holiday_years = (first_year, last_year)
    from schedlib.conventions.calendars import clear_calendar_cache

    clear_calendar_cache()


def max_adjustment_days() -> int:
    return _max_adjustment_days


def set_max_adjustment_days(days: int) -> None:
    """Bound the day-by-day search for a business day."""
    global _max_adjustment_days
    if isinstance(days, bool) or not isinstance(days, int) or days <= 0:
        raise ValueError(f"max_adjustment_days must be a positive integer: {days!r}")
    _max_adjustment_days = days


def reset_defaults() -> None:
    """Restore every default to its initial value."""
    global _weekend, _convention, _calendar_name, _holiday_years, _max_adjustment_days
    _weekend = _DEFAULT_WEEKEND
    _convention = _DEFAULT_CONVENTION
    _calendar_name = _DEFAULT_CALENDAR_NAME
    _max_adjustment_days = _DEFAULT_MAX_ADJUSTMENT_DAYS
    if _holiday_years != _DEFAULT_HOLIDAY_YEARS:
        _holiday_years = _DEFAULT_HOLIDAY_YEARS
        from schedlib.conventions.calendars import clear_calendar_cache

        clear_calendar_cache()
