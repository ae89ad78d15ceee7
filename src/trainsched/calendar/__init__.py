"""
trainsched.calendar
~~~~~~~~~~~~~~~~~~~

Synthetic scheduling calendar.  The domain is not a real calendar but a
fixed grid of 12 months × 30 days (360 days), 1-indexed.  Weekday status
is derived from the day offset; weekends are excluded or not according to a
``WeekendPolicy``.

Basic usage::

    from trainsched.calendar import SyntheticCalendar, WeekendPolicy

    cal = SyntheticCalendar()                        # day % 7 weekday rule
    cal.month(31), cal.day_of_month(31)              # → (2, 1)
    cal.is_working_day(6, WeekendPolicy(False, False))   # → False (Saturday)
    cal.next_working_day(6, WeekendPolicy(False, False)) # → 8

NumPy arrays are accepted by the day arithmetic helpers::

    import numpy as np
    cal.weekday(np.arange(1, 8))                     # → [0 1 2 3 4 5 6]

Public API
----------
SyntheticCalendar  The calendar class.
WeekendPolicy      Saturday/Sunday work flags.
WeekdayRule        How the weekday of a day offset is derived.
CalendarError      Raised on calendar misuse.
"""

from __future__ import annotations

from trainsched.calendar._exceptions import CalendarError
from trainsched.calendar.calendar import (
    DAYS_PER_MONTH,
    DAYS_PER_YEAR,
    MONTHS_PER_YEAR,
    SATURDAY,
    SUNDAY,
    SyntheticCalendar,
    WeekdayRule,
    WeekendPolicy,
)

__all__ = [
    "CalendarError",
    "DAYS_PER_MONTH",
    "DAYS_PER_YEAR",
    "MONTHS_PER_YEAR",
    "SATURDAY",
    "SUNDAY",
    "SyntheticCalendar",
    "WeekdayRule",
    "WeekendPolicy",
]
