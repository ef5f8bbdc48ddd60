"""
Basic types and enums used across the scheduling system.
"""

from enum import Enum, IntEnum

from schedlib.utils.errors import InvalidConventionError, InvalidFrequencyError


class Weekday(IntEnum):
    """Days of the week, numbered like ``date.weekday()``."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @classmethod
    def parse(cls, value) -> "Weekday":
        """Accept a Weekday, an int 0..6 or a (possibly abbreviated) day name."""
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise ValueError(f"Invalid weekday: {value!r}")
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                raise ValueError(f"Invalid weekday: {value!r}") from None
        if isinstance(value, str):
            key = value.strip().upper()
            for member in cls:
                if key and member.name.startswith(key) and len(key) >= 3:
                    return member
        raise ValueError(f"Invalid weekday: {value!r}")


class PeriodUnit(Enum):
    """Units a Frequency can step in."""

    DAYS = "D"
    WEEKS = "W"
    MONTHS = "M"
    YEARS = "Y"

    @classmethod
    def parse(cls, value) -> "PeriodUnit":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper()
            for member in cls:
                if key in (member.value, member.name, member.name[:-1]):
                    return member
        raise InvalidFrequencyError(
            f"Unknown period unit: {value!r}. "
            f"Available: {[member.value for member in cls]}"
        )


class BusinessDayConvention(Enum):
    """Business day adjustment rules.

    - UNADJUSTED : Make no adjustment.
    - FOLLOWING : Move to the next valid business day.
    - MODIFIED_FOLLOWING : Move to the next valid business day, unless that is
      in the next month, in which case move to the previous valid business day.
    - PRECEDING : Move to the previous valid business day.
    - MODIFIED_PRECEDING : Move to the previous valid business day, unless that
      is in the previous month, in which case move to the next valid business day.
    """

    UNADJUSTED = "UNADJUSTED"
    FOLLOWING = "FOLLOWING"
    MODIFIED_FOLLOWING = "MODIFIED_FOLLOWING"
    PRECEDING = "PRECEDING"
    MODIFIED_PRECEDING = "MODIFIED_PRECEDING"

    @classmethod
    def parse(cls, value) -> "BusinessDayConvention":
        """Resolve a convention from a member, its name or a display name."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper().replace("-", " ").replace("_", " ")
            key = " ".join(key.split())
            convention = _CONVENTION_ALIASES.get(key)
            if convention is not None:
                return convention
        raise InvalidConventionError(
            f"Unknown business day convention: {value!r}. "
            f"Available: {[member.name for member in cls]}"
        )


_CONVENTION_ALIASES = {
    "UNADJUSTED": BusinessDayConvention.UNADJUSTED,
    "NO ADJUSTMENT": BusinessDayConvention.UNADJUSTED,
    "NO ADJUST": BusinessDayConvention.UNADJUSTED,
    "NONE": BusinessDayConvention.UNADJUSTED,
    "FOLLOWING": BusinessDayConvention.FOLLOWING,
    "F": BusinessDayConvention.FOLLOWING,
    "MODIFIED FOLLOWING": BusinessDayConvention.MODIFIED_FOLLOWING,
    "MODFOLLOW": BusinessDayConvention.MODIFIED_FOLLOWING,
    "MF": BusinessDayConvention.MODIFIED_FOLLOWING,
    "PRECEDING": BusinessDayConvention.PRECEDING,
    "P": BusinessDayConvention.PRECEDING,
    "MODIFIED PRECEDING": BusinessDayConvention.MODIFIED_PRECEDING,
    "MP": BusinessDayConvention.MODIFIED_PRECEDING,
}


class StubConvention(Enum):
    """Where the odd period goes when the range does not divide evenly."""

    NONE = "NONE"
    SHORT_INITIAL = "SHORT_INITIAL"
    LONG_INITIAL = "LONG_INITIAL"
    SHORT_FINAL = "SHORT_FINAL"
    LONG_FINAL = "LONG_FINAL"


class HolidayCalendarId(Enum):
    """Predefined calendars."""

    GBLO = "GBLO"  # London (UK) holidays
    NYSE = "NYSE"  # New York Stock Exchange holidays
    EUTA = "EUTA"  # TARGET interbank payment holidays
    CUST = "CUST"  # Custom holiday calendar
