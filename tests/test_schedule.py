"""Unit tests for schedule generation and validation."""

import copy
from datetime import date

import pandas as pd
import pytest

from schedlib.conventions.calendars import HolidayCalendar
from schedlib.conventions.types import BusinessDayConvention, PeriodUnit, StubConvention
from schedlib.schedule.adjustments import NO_ADJUSTMENT, BusinessDayAdjustment
from schedlib.schedule.core import SchedulePeriod
from schedlib.schedule.frequency import Frequency
from schedlib.schedule.generator import Schedule
from schedlib.utils.errors import (
    DegenerateAdjustmentError,
    InvalidConventionError,
    InvalidFrequencyError,
    InvalidRangeError,
)


@pytest.fixture
def modified_following(weekend_calendar):
    return BusinessDayAdjustment(BusinessDayConvention.MODIFIED_FOLLOWING, weekend_calendar)


class TestGenerate:
    """Test Schedule.generate against worked examples."""

    def test_monthly_modified_following(self, modified_following):
        schedule = Schedule.generate(
            date(2021, 1, 1), date(2021, 4, 1), Frequency(PeriodUnit.MONTHS, 1), modified_following
        )
        assert len(schedule) == 3
        assert [(p.unadjusted_start, p.unadjusted_end) for p in schedule] == [
            (date(2021, 1, 1), date(2021, 2, 1)),
            (date(2021, 2, 1), date(2021, 3, 1)),
            (date(2021, 3, 1), date(2021, 4, 1)),
        ]
        # None of the boundaries falls on a weekend
        assert schedule.adjusted_dates == schedule.unadjusted_dates

    def test_weekend_boundaries_are_adjusted(self, modified_following):
        schedule = Schedule.generate(
            date(2021, 5, 1), date(2021, 8, 1), "1M", modified_following
        )
        assert schedule.unadjusted_dates == [
            date(2021, 5, 1),
            date(2021, 6, 1),
            date(2021, 7, 1),
            date(2021, 8, 1),
        ]
        assert schedule.adjusted_dates == [
            date(2021, 5, 3),
            date(2021, 6, 1),
            date(2021, 7, 1),
            date(2021, 8, 2),
        ]
        assert schedule.start_date == date(2021, 5, 1)
        assert schedule.end_date == date(2021, 8, 1)
        assert schedule.start_date_bus_day_adj == date(2021, 5, 3)
        assert schedule.end_date_bus_day_adj == date(2021, 8, 2)

    def test_month_end_rolls_back(self, modified_following):
        schedule = Schedule.generate(
            date(2021, 1, 31), date(2021, 4, 30), "1M", modified_following
        )
        assert schedule.unadjusted_dates == [
            date(2021, 1, 31),
            date(2021, 2, 28),
            date(2021, 3, 31),
            date(2021, 4, 30),
        ]
        assert schedule.adjusted_dates == [
            date(2021, 1, 29),
            date(2021, 2, 26),
            date(2021, 3, 31),
            date(2021, 4, 30),
        ]

    def test_weekly_final_stub(self):
        schedule = Schedule.generate(
            date(2021, 1, 1), date(2021, 1, 10), "7D", BusinessDayAdjustment("No Adjustment")
        )
        assert schedule.unadjusted_dates == [date(2021, 1, 1), date(2021, 1, 8), date(2021, 1, 10)]
        assert [p.length_in_days for p in schedule] == [7, 2]

    def test_long_initial_stub(self):
        schedule = Schedule.generate(
            date(2021, 1, 1),
            date(2021, 10, 15),
            "3M",
            NO_ADJUSTMENT,
            stub=StubConvention.LONG_INITIAL,
        )
        assert schedule.unadjusted_dates == [
            date(2021, 1, 1),
            date(2021, 4, 15),
            date(2021, 7, 15),
            date(2021, 10, 15),
        ]

    def test_stub_none_requires_even_division(self):
        with pytest.raises(InvalidFrequencyError):
            Schedule.generate(
                date(2021, 1, 1), date(2021, 1, 10), "7D", NO_ADJUSTMENT, stub=StubConvention.NONE
            )

    def test_string_inputs(self):
        schedule = Schedule.generate("2021-01-01", "2021-04-01", "1M", "MF")
        assert schedule.business_day_adjustment.convention == BusinessDayConvention.MODIFIED_FOLLOWING
        assert schedule.frequency == Frequency.parse("1M")
        assert len(schedule) == 3

    def test_default_adjustment(self):
        schedule = Schedule.generate(date(2021, 5, 1), date(2021, 8, 1), "1M")
        assert schedule.business_day_adjustment.convention == BusinessDayConvention.MODIFIED_FOLLOWING
        assert schedule.start_date_bus_day_adj == date(2021, 5, 3)

    def test_unadjusted_schedule_round_trips(self):
        schedule = Schedule.generate(date(2021, 1, 2), date(2021, 7, 3), "2M", NO_ADJUSTMENT)
        for period in schedule:
            assert period.adjusted_start == period.unadjusted_start
            assert period.adjusted_end == period.unadjusted_end

    @pytest.mark.parametrize(
        "start,end",
        [
            (date(2021, 5, 1), date(2021, 1, 1)),
            (date(2021, 1, 1), date(2021, 1, 1)),
        ],
    )
    def test_invalid_range(self, modified_following, start, end):
        with pytest.raises(InvalidRangeError):
            Schedule.generate(start, end, "1M", modified_following)

    def test_invalid_frequency(self, modified_following):
        with pytest.raises(InvalidFrequencyError):
            Schedule.generate(date(2021, 1, 1), date(2021, 4, 1), "0D", modified_following)

    def test_invalid_convention(self):
        with pytest.raises(InvalidConventionError):
            Schedule.generate(date(2021, 1, 1), date(2021, 4, 1), "1M", "Sideways")

    def test_adjacent_boundaries_collapse(self, weekend_calendar):
        """Saturday and Sunday both roll to Monday, leaving an empty period."""
        with pytest.raises(DegenerateAdjustmentError):
            Schedule.generate(
                date(2021, 1, 1),
                date(2021, 1, 5),
                "1D",
                BusinessDayAdjustment("Following", weekend_calendar),
            )

    def test_contiguous_periods(self, modified_following):
        schedule = Schedule.generate(date(2020, 1, 31), date(2022, 11, 17), "3M", modified_following)
        periods = schedule.schedule_periods
        for previous, current in zip(periods, periods[1:]):
            assert previous.unadjusted_end == current.unadjusted_start
            assert previous.adjusted_end == current.adjusted_start
        assert periods[0].unadjusted_start == date(2020, 1, 31)
        assert periods[-1].unadjusted_end == date(2022, 11, 17)

    def test_london_calendar(self, short_holiday_span):
        """Christmas substitute days push the final date to 29 December."""
        schedule = Schedule.generate(
            date(2021, 9, 27), date(2021, 12, 27), "3M", BusinessDayAdjustment("MF", "GBLO")
        )
        assert len(schedule) == 1
        assert schedule.end_date_bus_day_adj == date(2021, 12, 29)


class TestDateOverrides:
    """Test start and end date adjustment overrides."""

    def test_start_date_left_unadjusted(self, modified_following):
        schedule = Schedule.generate(
            date(2021, 5, 1),
            date(2021, 8, 1),
            "1M",
            modified_following,
            start_date_adjustment=NO_ADJUSTMENT,
        )
        assert schedule.start_date_bus_day_adj == date(2021, 5, 1)
        assert schedule.end_date_bus_day_adj == date(2021, 8, 2)

    def test_end_date_preceding(self, modified_following, weekend_calendar):
        schedule = Schedule.generate(
            date(2021, 5, 1),
            date(2021, 8, 1),
            "1M",
            modified_following,
            end_date_adjustment=BusinessDayAdjustment("Preceding", weekend_calendar),
        )
        assert schedule.start_date_bus_day_adj == date(2021, 5, 3)
        assert schedule.end_date_bus_day_adj == date(2021, 7, 30)


class TestScheduleFromPeriods:
    """Test wrapping precomputed periods."""

    def test_valid_periods(self):
        periods = [
            SchedulePeriod.unadjusted(date(2021, 1, 1), date(2021, 2, 1)),
            SchedulePeriod(date(2021, 2, 1), date(2021, 5, 1), date(2021, 2, 1), date(2021, 5, 3)),
        ]
        schedule = Schedule(periods, "1M")
        assert len(schedule) == 2
        assert schedule[1] == periods[1]
        assert schedule.business_day_adjustment is None
        assert schedule.end_date_bus_day_adj == date(2021, 5, 3)

    def test_input_list_is_not_shared(self):
        periods = [SchedulePeriod.unadjusted(date(2021, 1, 1), date(2021, 2, 1))]
        schedule = Schedule(periods, "1M")
        periods.append(SchedulePeriod.unadjusted(date(2021, 2, 1), date(2021, 3, 1)))
        assert len(schedule) == 1

    def test_gap(self):
        periods = [
            SchedulePeriod.unadjusted(date(2021, 1, 1), date(2021, 2, 1)),
            SchedulePeriod.unadjusted(date(2021, 2, 2), date(2021, 3, 1)),
        ]
        with pytest.raises(InvalidRangeError, match="Gap"):
            Schedule(periods, "1M")

    def test_overlap(self):
        periods = [
            SchedulePeriod.unadjusted(date(2021, 1, 1), date(2021, 2, 15)),
            SchedulePeriod.unadjusted(date(2021, 2, 1), date(2021, 3, 1)),
        ]
        with pytest.raises(InvalidRangeError, match="Overlapping"):
            Schedule(periods, "1M")

    def test_empty(self):
        with pytest.raises(InvalidRangeError):
            Schedule([], "1M")

    def test_adjusted_inversion(self):
        periods = [
            SchedulePeriod(date(2021, 1, 1), date(2021, 2, 1), date(2021, 1, 1), date(2021, 2, 3)),
            SchedulePeriod(date(2021, 2, 1), date(2021, 3, 1), date(2021, 2, 2), date(2021, 3, 1)),
        ]
        with pytest.raises(DegenerateAdjustmentError):
            Schedule(periods, "1M")

    def test_rejects_non_periods(self):
        with pytest.raises(TypeError):
            Schedule([(date(2021, 1, 1), date(2021, 2, 1))], "1M")


class TestScheduleValueSemantics:
    """Test snapshots, copies and accessors."""

    def test_frequency_is_a_snapshot(self, modified_following):
        frequency = Frequency.parse("1M")
        schedule = Schedule.generate(date(2021, 1, 1), date(2021, 4, 1), frequency, modified_following)
        frequency.set_period(PeriodUnit.YEARS, 1)
        assert schedule.frequency == Frequency.parse("1M")

        returned = schedule.frequency
        returned.set_period(PeriodUnit.DAYS, 7)
        assert schedule.frequency == Frequency.parse("1M")

    def test_copies_are_independent(self, modified_following):
        schedule = Schedule.generate(date(2021, 1, 1), date(2021, 4, 1), "1M", modified_following)
        for duplicate in (schedule.copy(), copy.copy(schedule), copy.deepcopy(schedule)):
            assert duplicate == schedule
            assert duplicate is not schedule
            assert duplicate.schedule_periods == schedule.schedule_periods
            assert duplicate.business_day_adjustment == schedule.business_day_adjustment

    def test_equality(self, modified_following):
        first = Schedule.generate(date(2021, 1, 1), date(2021, 4, 1), "1M", modified_following)
        second = Schedule.generate(date(2021, 1, 1), date(2021, 4, 1), "1M", modified_following)
        other_tag = Schedule(first.schedule_periods, "3M")
        assert first == second
        assert first != other_tag
        with pytest.raises(TypeError):
            hash(first)

    def test_immutable_periods(self, modified_following):
        schedule = Schedule.generate(date(2021, 1, 1), date(2021, 4, 1), "1M", modified_following)
        assert isinstance(schedule.schedule_periods, tuple)
        with pytest.raises(AttributeError):
            schedule.extra = 1

    def test_period_containing(self, modified_following):
        schedule = Schedule.generate(date(2021, 5, 1), date(2021, 8, 1), "1M", modified_following)
        assert schedule.period_containing(date(2021, 5, 1)) is None
        assert schedule.period_containing(date(2021, 5, 3)) == schedule[0]
        assert schedule.period_containing("2021-06-15") == schedule[1]
        assert schedule.period_containing(date(2021, 8, 1)) == schedule[2]
        assert schedule.period_containing(date(2021, 8, 2)) is None

    def test_to_frame(self, modified_following):
        schedule = Schedule.generate(date(2021, 5, 1), date(2021, 8, 1), "1M", modified_following)
        frame = schedule.to_frame()
        assert isinstance(frame, pd.DataFrame)
        assert list(frame.columns) == [
            "unadjusted_start",
            "unadjusted_end",
            "adjusted_start",
            "adjusted_end",
            "days",
        ]
        assert list(frame.index) == [1, 2, 3]
        assert frame.index.name == "period"
        assert list(frame["days"]) == [29, 30, 32]
        assert frame.loc[1, "adjusted_start"] == date(2021, 5, 3)

    def test_repr(self, modified_following):
        schedule = Schedule.generate(date(2021, 1, 1), date(2021, 4, 1), "1M", modified_following)
        assert repr(schedule) == "Schedule(2021-01-01 to 2021-04-01, every 1M, 3 periods)"

    def test_holiday_calendar_in_adjustment(self):
        calendar = HolidayCalendar([date(2021, 3, 1)])
        schedule = Schedule.generate(
            date(2021, 1, 1), date(2021, 4, 1), "1M", BusinessDayAdjustment("Following", calendar)
        )
        assert schedule.adjusted_dates[2] == date(2021, 3, 2)


class TestRegularStartDates:
    """Test explicit initial and final stubs."""

    def test_both_stubs(self):
        schedule = Schedule.generate(
            date(2021, 1, 15),
            date(2021, 12, 15),
            "3M",
            NO_ADJUSTMENT,
            first_regular_start_date=date(2021, 2, 1),
            last_regular_start_date=date(2021, 11, 1),
        )
        assert schedule.unadjusted_dates == [
            date(2021, 1, 15),
            date(2021, 2, 1),
            date(2021, 5, 1),
            date(2021, 8, 1),
            date(2021, 11, 1),
            date(2021, 12, 15),
        ]

    def test_initial_stub_only(self):
        schedule = Schedule.generate(
            date(2021, 1, 15),
            date(2021, 8, 1),
            "3M",
            NO_ADJUSTMENT,
            first_regular_start_date="2021-02-01",
        )
        assert schedule.unadjusted_dates == [
            date(2021, 1, 15),
            date(2021, 2, 1),
            date(2021, 5, 1),
            date(2021, 8, 1),
        ]

    def test_final_stub_only(self):
        schedule = Schedule.generate(
            date(2021, 1, 1),
            date(2021, 8, 15),
            "3M",
            NO_ADJUSTMENT,
            last_regular_start_date=date(2021, 7, 1),
        )
        assert schedule.unadjusted_dates == [
            date(2021, 1, 1),
            date(2021, 4, 1),
            date(2021, 7, 1),
            date(2021, 8, 15),
        ]

    def test_same_regular_start_dates(self):
        schedule = Schedule.generate(
            date(2021, 1, 1),
            date(2021, 3, 1),
            "1M",
            NO_ADJUSTMENT,
            first_regular_start_date=date(2021, 2, 10),
            last_regular_start_date=date(2021, 2, 10),
        )
        assert schedule.unadjusted_dates == [date(2021, 1, 1), date(2021, 2, 10), date(2021, 3, 1)]

    def test_stub_dates_are_adjusted(self, modified_following):
        schedule = Schedule.generate(
            date(2021, 1, 15),
            date(2021, 8, 1),
            "3M",
            modified_following,
            first_regular_start_date=date(2021, 5, 1),
        )
        assert schedule.adjusted_dates == [
            date(2021, 1, 15),
            date(2021, 5, 3),
            date(2021, 8, 2),
        ]

    @pytest.mark.parametrize(
        "first_regular,last_regular",
        [
            (date(2021, 1, 1), None),
            (date(2021, 12, 1), None),
            (date(2020, 12, 1), None),
            (None, date(2021, 1, 1)),
            (None, date(2021, 12, 1)),
            (date(2021, 6, 1), date(2021, 3, 1)),
        ],
    )
    def test_invalid_regular_start_dates(self, first_regular, last_regular):
        with pytest.raises(InvalidRangeError):
            Schedule.generate(
                date(2021, 1, 1),
                date(2021, 12, 1),
                "1M",
                NO_ADJUSTMENT,
                first_regular_start_date=first_regular,
                last_regular_start_date=last_regular,
            )


class TestEndOfMonthSchedule:
    """Test the end-of-month rule through schedule generation."""

    def test_month_end_anchor(self):
        schedule = Schedule.generate(
            date(2021, 2, 28), date(2021, 6, 30), "1M", NO_ADJUSTMENT, end_of_month=True
        )
        assert schedule.unadjusted_dates == [
            date(2021, 2, 28),
            date(2021, 3, 31),
            date(2021, 4, 30),
            date(2021, 5, 31),
            date(2021, 6, 30),
        ]
