from typing import Union
from datetime import datetime, date
from pandas import Timestamp

DATE_FMT = "%Y-%m-%d"
COMPACT_FMT = "%Y%m%d"

DateLike = Union[str, date, datetime, Timestamp]


def to_date(date_like: DateLike) -> date:
    """
    Normalize a date-like value to a plain ``date``.
    Accepts 'YYYY-MM-DD' and 'YYYYMMDD' string formats.
    """
    if isinstance(date_like, Timestamp):
        return date_like.date()
    if isinstance(date_like, datetime):
        return date_like.date()
    if isinstance(date_like, date):
        return date_like
    if isinstance(date_like, str):
        for fmt in (DATE_FMT, COMPACT_FMT):
            try:
                return datetime.strptime(date_like.strip(), fmt).date()
            except ValueError:
                continue
        raise ValueError(f"Unsupported date string format: {date_like!r}")
    raise TypeError(f"Unsupported type for date: {type(date_like)}")


def days_between(start: DateLike, end: DateLike) -> int:
    """Signed number of calendar days from start to end."""
    return (to_date(end) - to_date(start)).days


def same_month(first: date, second: date) -> bool:
    return (first.year, first.month) == (second.year, second.month)
