"""Shared fixtures for the schedule tests."""

from datetime import date

import pytest

from schedlib import config
from schedlib.conventions.calendars import HolidayCalendar


@pytest.fixture(autouse=True)
def reset_config():
    """Restore library defaults after every test."""
    yield
    config.reset_defaults()


@pytest.fixture
def weekend_calendar():
    """Weekends-only calendar (Saturday/Sunday, no holidays)."""
    return HolidayCalendar()


@pytest.fixture
def short_holiday_span():
    """Generate named calendars over a few years only, to keep tests fast."""
    config.set_holiday_years(2019, 2023)


@pytest.fixture
def dense_calendar():
    """A calendar with a holiday on every 5th, 10th, ... of each month in 2021."""
    holidays = [
        date(2021, month, day)
        for month in range(1, 13)
        for day in range(5, 29, 5)
    ]
    return HolidayCalendar(holidays)
