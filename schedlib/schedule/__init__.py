# Re-export types from conventions
from schedlib.conventions.types import BusinessDayConvention, PeriodUnit, StubConvention

from .adjustments import NO_ADJUSTMENT, BusinessDayAdjustment, adjust_date
from .core import SchedulePeriod
from .frequency import Frequency
from .generator import Schedule
