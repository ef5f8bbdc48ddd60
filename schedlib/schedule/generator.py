"""
Main schedule generation logic.

A schedule is an ordered sequence of ``SchedulePeriod`` values covering an
overall date range without gaps or overlaps on the unadjusted timeline.
Building a schedule is conceptually simple, however the devil is in the
details: what happens when a boundary falls on a holiday, or when 22 months
are divided into 3 month units?

Schedules are built in one of two ways:

- ``Schedule.generate`` derives the periods from a start date, an end date,
  a ``Frequency`` and a ``BusinessDayAdjustment``.
- ``Schedule(periods, frequency)`` wraps periods computed elsewhere (custom
  stubs, manual overrides); they are validated but not adjusted again.

Either way construction succeeds completely or raises; a schedule is
immutable once returned.
"""

from bisect import bisect_right
from datetime import date
from typing import Iterable, Iterator, List, Optional, Tuple, Union

import logging

import pandas as pd

from schedlib.conventions.types import BusinessDayConvention, StubConvention
from schedlib.utils.date import DateLike, to_date
from schedlib.utils.errors import DegenerateAdjustmentError, InvalidRangeError

from .adjustments import BusinessDayAdjustment
from .core import SchedulePeriod
from .frequency import Frequency

logger = logging.getLogger(__name__)

AdjustmentLike = Union[BusinessDayAdjustment, BusinessDayConvention, str, None]


def _to_adjustment(adjustment: AdjustmentLike) -> BusinessDayAdjustment:
    if isinstance(adjustment, BusinessDayAdjustment):
        return adjustment
    if adjustment is None:
        return BusinessDayAdjustment()
    return BusinessDayAdjustment(adjustment)


def _to_frequency(frequency: Union[Frequency, str]) -> Frequency:
    # Always a private copy, so later set_period calls on the caller's
    # instance cannot reach into a schedule
    if isinstance(frequency, Frequency):
        return frequency.copy()
    return Frequency.parse(frequency)


def _stubbed_boundaries(
    frequency: Frequency,
    start: date,
    end: date,
    stub: StubConvention,
    first_regular: Optional[DateLike],
    last_regular: Optional[DateLike],
    end_of_month: bool,
) -> List[date]:
    """Boundaries with explicit stubs outside the regular range, if given.

    ``stub`` still places any odd period inside the regular range.
    """
    regular_start = start if first_regular is None else to_date(first_regular)
    regular_end = end if last_regular is None else to_date(last_regular)
    if first_regular is not None and not start < regular_start < end:
        raise InvalidRangeError(
            f"First regular start date {regular_start} must lie strictly within {start} to {end}"
        )
    if last_regular is not None and not start < regular_end < end:
        raise InvalidRangeError(
            f"Last regular start date {regular_end} must lie strictly within {start} to {end}"
        )
    if regular_start > regular_end:
        raise InvalidRangeError(
            f"First regular start date {regular_start} is after last regular start date {regular_end}"
        )

    if regular_start < regular_end:
        boundaries = frequency.generate_boundaries(regular_start, regular_end, stub, end_of_month)
    else:
        boundaries = [regular_start]
    if first_regular is not None:
        boundaries.insert(0, start)
    if last_regular is not None:
        boundaries.append(end)
    return boundaries


class Schedule:
    """An immutable, ordered sequence of schedule periods.

    Attributes exposed as read-only properties:
        schedule_periods: the periods, earliest first
        frequency: the periodic frequency the schedule is tagged with
        business_day_adjustment: the adjustment used by ``generate``
            (None for schedules assembled from explicit periods)
    """

    __slots__ = ("_periods", "_frequency", "_business_day_adjustment")

    def __init__(
        self,
        periods: Iterable[SchedulePeriod],
        frequency: Union[Frequency, str],
        business_day_adjustment: Optional[BusinessDayAdjustment] = None,
    ):
        periods = tuple(periods)
        _validate_periods(periods)
        self._periods: Tuple[SchedulePeriod, ...] = periods
        self._frequency = _to_frequency(frequency)
        self._business_day_adjustment = business_day_adjustment

    @classmethod
    def generate(
        cls,
        start_date: DateLike,
        end_date: DateLike,
        frequency: Union[Frequency, str],
        business_day_adjustment: AdjustmentLike = None,
        stub: StubConvention = StubConvention.SHORT_FINAL,
        start_date_adjustment: AdjustmentLike = None,
        end_date_adjustment: AdjustmentLike = None,
        first_regular_start_date: Optional[DateLike] = None,
        last_regular_start_date: Optional[DateLike] = None,
        end_of_month: bool = False,
    ) -> "Schedule":
        """
        Generate a schedule between two dates.

        Args:
            start_date: Start of the first period (unadjusted)
            end_date: End of the last period (unadjusted)
            frequency: Regular periodic frequency, or a tenor such as '3M'
            business_day_adjustment: Adjustment applied to every boundary;
                a bare convention is bound to the default calendar
            stub: Where the odd period goes when the range does not divide
            start_date_adjustment: Overrides the adjustment of the start date
            end_date_adjustment: Overrides the adjustment of the end date
            first_regular_start_date: End of an explicit initial stub; regular
                periods start here
            last_regular_start_date: Start of an explicit final stub; regular
                periods end here
            end_of_month: Keep month-end anchors on month ends when stepping
                by months or years

        Returns:
            The fully built schedule

        Raises:
            InvalidRangeError: if ``start_date`` is not before ``end_date``, or
                the regular start dates are out of order or outside the range
            InvalidFrequencyError: for an invalid frequency or a range that
                does not divide with ``StubConvention.NONE``
            InvalidConventionError: for an unknown convention
            DegenerateAdjustmentError: if two boundaries adjust onto the same
                date or out of order, or no business day can be found

        Examples:
            >>> schedule = Schedule.generate(
            ...     date(2021, 1, 1), date(2021, 4, 1), "1M",
            ...     BusinessDayAdjustment(BusinessDayConvention.MODIFIED_FOLLOWING),
            ... )
            >>> len(schedule)
            3
        """
        start = to_date(start_date)
        end = to_date(end_date)
        if start >= end:
            raise InvalidRangeError(f"Start date {start} must be before end date {end}")

        stub = StubConvention(stub)
        frequency = _to_frequency(frequency)
        adjustment = _to_adjustment(business_day_adjustment)
        first_adjustment = (
            adjustment if start_date_adjustment is None else _to_adjustment(start_date_adjustment)
        )
        last_adjustment = (
            adjustment if end_date_adjustment is None else _to_adjustment(end_date_adjustment)
        )

        unadjusted = _stubbed_boundaries(
            frequency,
            start,
            end,
            stub,
            first_regular_start_date,
            last_regular_start_date,
            end_of_month,
        )
        adjusted = [adjustment.adjust(dt) for dt in unadjusted[1:-1]]
        adjusted.insert(0, first_adjustment.adjust(unadjusted[0]))
        adjusted.append(last_adjustment.adjust(unadjusted[-1]))

        for i in range(len(adjusted) - 1):
            if adjusted[i] >= adjusted[i + 1]:
                logger.debug(
                    "Boundaries %s and %s adjust to %s and %s",
                    unadjusted[i],
                    unadjusted[i + 1],
                    adjusted[i],
                    adjusted[i + 1],
                )
                raise DegenerateAdjustmentError(
                    f"Boundaries {unadjusted[i]} and {unadjusted[i + 1]} adjust to "
                    f"{adjusted[i]} and {adjusted[i + 1]} under {adjustment.convention.name}"
                )

        periods = [
            SchedulePeriod(
                unadjusted_start=unadjusted[i],
                unadjusted_end=unadjusted[i + 1],
                adjusted_start=adjusted[i],
                adjusted_end=adjusted[i + 1],
            )
            for i in range(len(unadjusted) - 1)
        ]
        logger.debug(
            "Built schedule %s to %s every %s: %s periods (%s, %s)",
            start,
            end,
            frequency,
            len(periods),
            adjustment.convention.name,
            stub.name,
        )
        return cls(periods, frequency, adjustment)

    @property
    def schedule_periods(self) -> Tuple[SchedulePeriod, ...]:
        return self._periods

    @property
    def frequency(self) -> Frequency:
        """A copy of the frequency the schedule is tagged with."""
        return self._frequency.copy()

    @property
    def business_day_adjustment(self) -> Optional[BusinessDayAdjustment]:
        return self._business_day_adjustment

    @property
    def start_date(self) -> date:
        return self._periods[0].unadjusted_start

    @property
    def end_date(self) -> date:
        return self._periods[-1].unadjusted_end

    @property
    def start_date_bus_day_adj(self) -> date:
        """The adjusted first date of the schedule."""
        return self._periods[0].adjusted_start

    @property
    def end_date_bus_day_adj(self) -> date:
        return self._periods[-1].adjusted_end

    @property
    def unadjusted_dates(self) -> List[date]:
        return [self.start_date] + [p.unadjusted_end for p in self._periods]

    @property
    def adjusted_dates(self) -> List[date]:
        return [self.start_date_bus_day_adj] + [p.adjusted_end for p in self._periods]

    def period_containing(self, dt: DateLike) -> Optional[SchedulePeriod]:
        """The period whose adjusted range holds ``dt``, if any."""
        dt = to_date(dt)
        starts = [p.adjusted_start for p in self._periods]
        index = bisect_right(starts, dt) - 1
        if index < 0:
            return None
        period = self._periods[index]
        return period if period.contains(dt) else None

    def to_frame(self) -> pd.DataFrame:
        """One row per period, for reporting."""
        return pd.DataFrame(
            [
                {
                    "unadjusted_start": p.unadjusted_start,
                    "unadjusted_end": p.unadjusted_end,
                    "adjusted_start": p.adjusted_start,
                    "adjusted_end": p.adjusted_end,
                    "days": p.length_in_days,
                }
                for p in self._periods
            ],
            index=pd.RangeIndex(1, len(self._periods) + 1, name="period"),
        )

    def copy(self) -> "Schedule":
        """An independent duplicate with its own period container and frequency."""
        return Schedule(list(self._periods), self._frequency, self._business_day_adjustment)

    def __copy__(self) -> "Schedule":
        return self.copy()

    def __deepcopy__(self, memo) -> "Schedule":
        return self.copy()

    def __len__(self) -> int:
        return len(self._periods)

    def __iter__(self) -> Iterator[SchedulePeriod]:
        return iter(self._periods)

    def __getitem__(self, index):
        return self._periods[index]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Schedule):
            return NotImplemented
        return self._periods == other._periods and self._frequency == other._frequency

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"Schedule({self.start_date} to {self.end_date}, every {self._frequency}, "
            f"{len(self._periods)} periods)"
        )


def _validate_periods(periods: Tuple[SchedulePeriod, ...]) -> None:
    """Check periods are contiguous on the unadjusted timeline and ordered once adjusted."""
    if not periods:
        raise InvalidRangeError("A schedule needs at least one period")
    for period in periods:
        if not isinstance(period, SchedulePeriod):
            raise TypeError(f"Expected SchedulePeriod, got {type(period).__name__}")

    for previous, current in zip(periods, periods[1:]):
        if previous.unadjusted_end < current.unadjusted_start:
            raise InvalidRangeError(
                f"Gap between periods: {previous.unadjusted_end} to {current.unadjusted_start}"
            )
        if previous.unadjusted_end > current.unadjusted_start:
            raise InvalidRangeError(
                f"Overlapping periods: {previous.unadjusted_start}-{previous.unadjusted_end} "
                f"and {current.unadjusted_start}-{current.unadjusted_end}"
            )
        if previous.adjusted_end > current.adjusted_start:
            raise DegenerateAdjustmentError(
                f"Adjusted dates invert order: period ending {previous.adjusted_end} "
                f"is followed by a period starting {current.adjusted_start}"
            )
