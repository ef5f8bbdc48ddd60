"""
Core data structures for schedule generation.
"""

from dataclasses import dataclass
from datetime import date
from typing import Union

from schedlib.conventions.daycount import DayCountConvention, get_day_count_convention
from schedlib.utils.date import DateLike, days_between, to_date
from schedlib.utils.errors import DegenerateAdjustmentError, InvalidRangeError


@dataclass(frozen=True)
class SchedulePeriod:
    """A single period (date range) within a schedule.

    The period runs from ``adjusted_start`` to ``adjusted_end``; these are
    the dates used for financial calculations such as interest accrual.
    ``unadjusted_start`` and ``unadjusted_end`` are the theoretical
    boundaries the adjusted dates were derived from. For a schedule paying
    on the 10th every three months, a 10th falling on a weekend stays the
    unadjusted date while the adjusted date is the related business day.
    """

    unadjusted_start: date
    unadjusted_end: date
    adjusted_start: date
    adjusted_end: date

    def __post_init__(self):
        for name in ("unadjusted_start", "unadjusted_end", "adjusted_start", "adjusted_end"):
            object.__setattr__(self, name, to_date(getattr(self, name)))
        if self.unadjusted_start >= self.unadjusted_end:
            raise InvalidRangeError(
                f"Unadjusted start {self.unadjusted_start} must be before "
                f"unadjusted end {self.unadjusted_end}"
            )
        if self.adjusted_start >= self.adjusted_end:
            raise DegenerateAdjustmentError(
                f"Adjusted start {self.adjusted_start} must be before adjusted end "
                f"{self.adjusted_end} (unadjusted {self.unadjusted_start} to {self.unadjusted_end})"
            )

    @classmethod
    def unadjusted(cls, start: DateLike, end: DateLike) -> "SchedulePeriod":
        """A period whose adjusted dates equal its unadjusted ones."""
        return cls(start, end, start, end)

    @property
    def length_in_days(self) -> int:
        """Actual days in the period, start included, end excluded.

        Uses the adjusted dates; no day count or holiday calendar is involved.
        """
        return days_between(self.adjusted_start, self.adjusted_end)

    @property
    def unadjusted_length_in_days(self) -> int:
        return days_between(self.unadjusted_start, self.unadjusted_end)

    @property
    def is_adjusted(self) -> bool:
        """Whether either boundary was moved by business day adjustment."""
        return (
            self.adjusted_start != self.unadjusted_start
            or self.adjusted_end != self.unadjusted_end
        )

    def contains(self, dt: DateLike) -> bool:
        dt = to_date(dt)
        return self.adjusted_start <= dt < self.adjusted_end

    def year_fraction(self, day_count: Union[DayCountConvention, str]) -> float:
        """Year fraction of the adjusted period under a day count convention."""
        return get_day_count_convention(day_count).year_fraction(
            self.adjusted_start, self.adjusted_end
        )
