"""
Periodic frequencies and the unadjusted boundaries they generate.
"""

import re
from datetime import date
from typing import List, Optional, Tuple, Union

import logging

from dateutil.relativedelta import relativedelta

from schedlib.conventions.types import PeriodUnit, StubConvention
from schedlib.utils.date import DateLike, to_date
from schedlib.utils.errors import InvalidFrequencyError, InvalidRangeError

logger = logging.getLogger(__name__)

_TENOR_PATTERN = re.compile(r"^\s*(\d+)\s*([A-Za-z])\s*$")


def _is_month_end(dt: date) -> bool:
    return dt + relativedelta(day=31) == dt


def _validate(unit, multiplier) -> Tuple[PeriodUnit, int]:
    unit = PeriodUnit.parse(unit)
    if isinstance(multiplier, bool) or not isinstance(multiplier, int):
        raise InvalidFrequencyError(f"Frequency multiplier must be an integer: {multiplier!r}")
    if multiplier <= 0:
        raise InvalidFrequencyError(f"Frequency multiplier must be positive: {multiplier}")
    return unit, multiplier


class Frequency:
    """A periodic tenor such as every 3 months.

    Boundaries are always measured from an anchor date (anchor + k periods)
    rather than by repeatedly stepping, so a schedule anchored on the 31st
    returns to the 31st after passing through shorter months.

    ``set_period`` mutates the instance. It must not race with a schedule
    build reading the same instance; ``Schedule`` keeps its own copy.
    """

    def __init__(self, unit: Union[PeriodUnit, str], multiplier: int = 1):
        self._unit, self._multiplier = _validate(unit, multiplier)

    @classmethod
    def parse(cls, tenor: str) -> "Frequency":
        """Build a frequency from a tenor string such as '7D', '3M' or '1Y'."""
        if isinstance(tenor, Frequency):
            return tenor.copy()
        if not isinstance(tenor, str):
            raise InvalidFrequencyError(f"Unsupported tenor: {tenor!r}")
        match = _TENOR_PATTERN.match(tenor)
        if match is None:
            raise InvalidFrequencyError(f"Unsupported tenor: {tenor!r}")
        return cls(match.group(2), int(match.group(1)))

    @property
    def unit(self) -> PeriodUnit:
        return self._unit

    @property
    def multiplier(self) -> int:
        return self._multiplier

    @property
    def period(self) -> Tuple[PeriodUnit, int]:
        return self._unit, self._multiplier

    def set_period(self, unit: Union[PeriodUnit, str], multiplier: int) -> None:
        """Replace the unit/multiplier pair; nothing changes if validation fails."""
        self._unit, self._multiplier = _validate(unit, multiplier)

    def offset(self, periods: int = 1) -> relativedelta:
        """The calendar offset spanning ``periods`` whole periods."""
        count = self._multiplier * periods
        if self._unit == PeriodUnit.DAYS:
            return relativedelta(days=count)
        if self._unit == PeriodUnit.WEEKS:
            return relativedelta(weeks=count)
        if self._unit == PeriodUnit.MONTHS:
            return relativedelta(months=count)
        return relativedelta(years=count)

    def advance(self, dt: DateLike, periods: int = 1) -> date:
        """Move ``dt`` by a number of periods (negative moves backward)."""
        return to_date(dt) + self.offset(periods)

    def generate_boundaries(
        self,
        start: DateLike,
        end: DateLike,
        stub: StubConvention = StubConvention.SHORT_FINAL,
        end_of_month: bool = False,
    ) -> List[date]:
        """
        Generate the unadjusted period boundaries spanning ``[start, end]``.

        The result is strictly increasing, begins with ``start`` and ends with
        ``end``. When the range does not divide evenly, ``stub`` decides where
        the odd period goes:

        - SHORT_FINAL: regular periods from start, short stub at the end
        - LONG_FINAL: regular periods from start, the stub merged into the last period
        - SHORT_INITIAL: regular periods back from end, short stub at the start
        - LONG_INITIAL: regular periods back from end, the stub merged into the first period
        - NONE: the range must divide evenly

        With ``end_of_month`` set, a month or year frequency anchored on the
        last day of a month keeps every boundary on a month end
        (28 Feb steps to 31 Mar rather than 28 Mar).

        Raises:
            InvalidRangeError: if ``start`` is not before ``end``.
            InvalidFrequencyError: if ``stub`` is NONE and the range does not divide.
        """
        start = to_date(start)
        end = to_date(end)
        if start >= end:
            raise InvalidRangeError(f"Start date {start} must be before end date {end}")
        stub = StubConvention(stub)

        if stub in (StubConvention.SHORT_INITIAL, StubConvention.LONG_INITIAL):
            boundaries = self._roll_backward(start, end, end_of_month)
        else:
            boundaries = self._roll_forward(start, end, end_of_month)

        has_stub = self._has_stub(boundaries, stub, end_of_month)
        if stub == StubConvention.NONE and has_stub:
            raise InvalidFrequencyError(
                f"Cannot create a schedule without stub: {self} does not divide {start} to {end}"
            )
        if has_stub and len(boundaries) > 2:
            if stub == StubConvention.LONG_FINAL:
                del boundaries[-2]
            elif stub == StubConvention.LONG_INITIAL:
                del boundaries[1]

        logger.debug(
            "Generated %s boundaries from %s to %s every %s (%s)",
            len(boundaries),
            start,
            end,
            self,
            stub.name,
        )
        return boundaries

    def _shift(self, anchor: date, periods: int, end_of_month: bool) -> Optional[date]:
        """``anchor`` moved by whole periods, or None outside the representable dates."""
        try:
            shifted = anchor + self.offset(periods)
            if (
                end_of_month
                and self._unit in (PeriodUnit.MONTHS, PeriodUnit.YEARS)
                and _is_month_end(anchor)
            ):
                shifted += relativedelta(day=31)
        except (ValueError, OverflowError):
            return None
        return shifted

    def _roll_forward(self, start: date, end: date, end_of_month: bool) -> List[date]:
        boundaries = [start]
        k = 1
        current = self._shift(start, k, end_of_month)
        while current is not None and current < end:
            boundaries.append(current)
            k += 1
            current = self._shift(start, k, end_of_month)
        boundaries.append(end)
        return boundaries

    def _roll_backward(self, start: date, end: date, end_of_month: bool) -> List[date]:
        boundaries = [end]
        k = 1
        current = self._shift(end, -k, end_of_month)
        while current is not None and current > start:
            boundaries.append(current)
            k += 1
            current = self._shift(end, -k, end_of_month)
        boundaries.append(start)
        boundaries.reverse()
        return boundaries

    def _has_stub(self, boundaries: List[date], stub: StubConvention, end_of_month: bool) -> bool:
        """Whether the far boundary is off the regular grid of the anchor."""
        periods = len(boundaries) - 1
        if stub in (StubConvention.SHORT_INITIAL, StubConvention.LONG_INITIAL):
            return self._shift(boundaries[-1], -periods, end_of_month) != boundaries[0]
        return self._shift(boundaries[0], periods, end_of_month) != boundaries[-1]

    def copy(self) -> "Frequency":
        return Frequency(self._unit, self._multiplier)

    def __copy__(self) -> "Frequency":
        return self.copy()

    def __deepcopy__(self, memo) -> "Frequency":
        return self.copy()

    def __eq__(self, other) -> bool:
        if not isinstance(other, Frequency):
            return NotImplemented
        return self.period == other.period

    __hash__ = None

    def __repr__(self) -> str:
        return f"Frequency({self._unit.name}, {self._multiplier})"

    def __str__(self) -> str:
        return f"{self._multiplier}{self._unit.value}"
