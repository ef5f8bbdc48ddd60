"""
Day count conventions for measuring schedule periods, backed by QuantLib.
"""

from typing import Callable, Dict, Union

import QuantLib as ql

from schedlib.utils.date import DateLike, to_date


def _to_ql_date(dt: DateLike) -> ql.Date:
    py_date = to_date(dt)
    return ql.Date(py_date.day, py_date.month, py_date.year)


class DayCountConvention:
    """A named QuantLib day counter."""

    def __init__(self, name: str, ql_daycount: ql.DayCounter):
        self.name = name
        self._ql_daycount = ql_daycount

    def year_fraction(self, start: DateLike, end: DateLike) -> float:
        """Year fraction between two dates."""
        return self._ql_daycount.yearFraction(_to_ql_date(start), _to_ql_date(end))

    def day_count(self, start: DateLike, end: DateLike) -> int:
        """Number of days between two dates under this convention."""
        return self._ql_daycount.dayCount(_to_ql_date(start), _to_ql_date(end))

    def __eq__(self, other) -> bool:
        if not isinstance(other, DayCountConvention):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self) -> str:
        return f"DayCountConvention({self.name!r})"

    def __str__(self) -> str:
        return self.name


_FACTORIES: Dict[str, Callable[[], ql.DayCounter]] = {
    "ACT/360": ql.Actual360,
    "ACT/365F": ql.Actual365Fixed,
    "30E/360": lambda: ql.Thirty360(ql.Thirty360.European),
    "30U/360": lambda: ql.Thirty360(ql.Thirty360.BondBasis),
    "ACT/ACT": lambda: ql.ActualActual(ql.ActualActual.ISDA),
}

_ALIASES = {
    "ACTUAL/360": "ACT/360",
    "ACT/365": "ACT/365F",
    "ACTUAL/365F": "ACT/365F",
    "30/360E": "30E/360",
    "30/360 EUROPEAN": "30E/360",
    "30/360": "30U/360",
    "30/360 US": "30U/360",
    "ACTUAL/ACTUAL": "ACT/ACT",
    "ACT/ACT ISDA": "ACT/ACT",
}

DAY_COUNT_CONVENTIONS: Dict[str, DayCountConvention] = {
    name: DayCountConvention(name, factory()) for name, factory in _FACTORIES.items()
}

ACT_360 = DAY_COUNT_CONVENTIONS["ACT/360"]
ACT_365F = DAY_COUNT_CONVENTIONS["ACT/365F"]
THIRTY_360E = DAY_COUNT_CONVENTIONS["30E/360"]
THIRTY_360U = DAY_COUNT_CONVENTIONS["30U/360"]
ACT_ACT = DAY_COUNT_CONVENTIONS["ACT/ACT"]


def get_day_count_convention(name: Union[str, DayCountConvention]) -> DayCountConvention:
    """Get a day count convention by name."""
    if isinstance(name, DayCountConvention):
        return name
    key = str(name).strip().upper()
    key = _ALIASES.get(key, key)
    try:
        return DAY_COUNT_CONVENTIONS[key]
    except KeyError as exc:
        raise ValueError(
            f"Unknown day count convention: {name}. "
            f"Available: {list(DAY_COUNT_CONVENTIONS) + list(_ALIASES)}"
        ) from exc
