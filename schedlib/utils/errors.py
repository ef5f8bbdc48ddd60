"""Errors raised while building calendars, frequencies and schedules.

Every error here stems from invalid input and is raised at construction
time. None of them is retried.
"""


class ScheduleError(ValueError):
    """Base class for schedule construction failures."""

    pass


class InvalidRangeError(ScheduleError):
    """Raised when a start date is not strictly before its end date, or when
    a list of periods leaves a gap or overlaps on the unadjusted timeline."""

    pass


class InvalidFrequencyError(ScheduleError):
    """Raised for a non-positive multiplier, an unknown period unit or a
    tenor string that cannot be parsed."""

    pass


class InvalidConventionError(ScheduleError):
    """Raised for an unrecognized business day convention."""

    pass


class DegenerateAdjustmentError(ScheduleError):
    """Raised when no business day can be found for an adjustment, or when
    adjusted boundaries collapse onto each other or invert order."""

    pass
