from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional, Union

import numpy as np

from trainsched.diagnostics import ContractError

from ._exceptions import CalendarError

DAYS_PER_MONTH: int = 30
MONTHS_PER_YEAR: int = 12
DAYS_PER_YEAR: int = DAYS_PER_MONTH * MONTHS_PER_YEAR

# Weekday indices: 0=Mon ... 5=Sat, 6=Sun.
SATURDAY: int = 5
SUNDAY: int = 6

DayLike = Union[int, "np.ndarray"]


class WeekdayRule(str, enum.Enum):
    """
    CONTINUOUS  weekday from the unbroken day offset (day 1 is a Monday,
                ``day % 7 == 6`` Saturday, ``day % 7 == 0`` Sunday).
    MONTH       weekday restarts with every 30-day month, so day-of-month
                6/13/20/27 are Saturdays and 7/14/21/28 Sundays.
    """

    CONTINUOUS = "continuous"
    MONTH = "month"


@dataclass(frozen=True, slots=True)
class WeekendPolicy:
    """
    Saturday/Sunday work flags.  ``None`` means "not specified"; a policy is
    only usable once ``resolved()`` has turned it into two booleans.
    """

    work_saturday: Optional[bool] = False
    work_sunday: Optional[bool] = False

    @property
    def is_resolved(self) -> bool:
        return self.work_saturday is not None and self.work_sunday is not None

    def resolved(self) -> "WeekendPolicy":
        if self.work_saturday is None and self.work_sunday is None:
            raise ContractError(
                "Weekend policy is malformed: both work_saturday and work_sunday are undefined."
            )
        if self.is_resolved:
            return self
        return WeekendPolicy(bool(self.work_saturday), bool(self.work_sunday))

    def overlay(self, base: "WeekendPolicy") -> "WeekendPolicy":
        """Flags set on ``self`` win; undefined flags fall back to ``base``."""
        return WeekendPolicy(
            base.work_saturday if self.work_saturday is None else self.work_saturday,
            base.work_sunday if self.work_sunday is None else self.work_sunday,
        )

    def works_on(self, weekday: int) -> bool:
        if weekday == SATURDAY:
            return bool(self.work_saturday)
        if weekday == SUNDAY:
            return bool(self.work_sunday)
        return True


class SyntheticCalendar:
    """
    12 × 30-day scheduling grid with a precomputed weekday table.

    Days past the 360-day year continue the same grid (month 13, 14, ...);
    the weekday table grows on demand the way a horizon-bound calendar
    extends its weights.
    """

    _DEFAULT_BUFFER: int = DAYS_PER_YEAR

    def __init__(
        self,
        weekday_rule: Union[WeekdayRule, str] = WeekdayRule.CONTINUOUS,
        horizon: Optional[int] = None,
    ) -> None:
        try:
            self._rule: WeekdayRule = WeekdayRule(weekday_rule)
        except ValueError:
            raise CalendarError(f"Unknown weekday rule {weekday_rule!r}.") from None

        self._weekdays: np.ndarray = self._build_table(max(horizon or 0, DAYS_PER_YEAR))

    # ── weekday table ────────────────────────────────────────────────────

    def _compute_weekdays(self, days: np.ndarray) -> np.ndarray:
        if self._rule is WeekdayRule.MONTH:
            dom = (days - 1) % DAYS_PER_MONTH + 1
            return (dom - 1) % 7
        return (days - 1) % 7

    def _build_table(self, horizon: int) -> np.ndarray:
        # Index 0 is padding so that the table is addressed by 1-based day.
        return self._compute_weekdays(np.arange(0, horizon + 1, dtype=np.int64))

    def _table_for(self, last_day: int) -> np.ndarray:
        """
        Weekday table covering ``last_day``.

        The table is the only mutable state and the horizon is derived from
        its length, so growing it is a single attribute swap and a calendar
        may be shared between threads.  Index the returned table, never
        ``self._weekdays``, since another thread may swap it meanwhile.
        """
        table = self._weekdays
        if last_day >= len(table):
            table = self._build_table(last_day + self._DEFAULT_BUFFER)
            self._weekdays = table
        return table

    @staticmethod
    def _check_days(days: np.ndarray) -> None:
        if days.size and int(days.min()) < 1:
            raise CalendarError(f"Synthetic days are 1-indexed; got {int(days.min())}.")

    # ── day arithmetic ───────────────────────────────────────────────────

    def weekday(self, day: DayLike) -> DayLike:
        scalar = np.ndim(day) == 0
        d = np.atleast_1d(np.asarray(day, dtype=np.int64))
        self._check_days(d)
        result = self._table_for(int(d.max()) if d.size else 0)[d]
        return int(result[0]) if scalar else result

    @staticmethod
    def month(day: DayLike) -> DayLike:
        m = (np.asarray(day, dtype=np.int64) - 1) // DAYS_PER_MONTH + 1
        return int(m) if np.ndim(m) == 0 else m

    @staticmethod
    def day_of_month(day: DayLike) -> DayLike:
        dom = (np.asarray(day, dtype=np.int64) - 1) % DAYS_PER_MONTH + 1
        return int(dom) if np.ndim(dom) == 0 else dom

    def is_weekend(self, day: DayLike) -> Union[bool, np.ndarray]:
        wd = self.weekday(day)
        if np.ndim(wd) == 0:
            return wd in (SATURDAY, SUNDAY)
        return (wd == SATURDAY) | (wd == SUNDAY)

    # ── policy-aware queries ─────────────────────────────────────────────

    def working_mask(self, start: int, stop: int, policy: WeekendPolicy) -> np.ndarray:
        """Boolean mask for days ``start .. stop`` (inclusive)."""
        if stop < start:
            return np.zeros(0, dtype=bool)
        policy = policy.resolved()
        wd = self.weekday(np.arange(start, stop + 1, dtype=np.int64))
        mask = np.ones(wd.shape, dtype=bool)
        if not policy.work_saturday:
            mask &= wd != SATURDAY
        if not policy.work_sunday:
            mask &= wd != SUNDAY
        return mask

    def is_working_day(self, day: int, policy: WeekendPolicy) -> bool:
        return policy.works_on(self.weekday(day))

    def next_working_day(self, day: int, policy: WeekendPolicy) -> int:
        """First day >= ``day`` that is workable under ``policy``."""
        policy = policy.resolved()
        # Monday to Friday always work, so a week ahead is always enough.
        while not self.is_working_day(day, policy):
            day += 1
        return day

    def working_days_between(self, start: int, stop: int, policy: WeekendPolicy) -> int:
        return int(self.working_mask(start, stop, policy).sum())

    # ── properties / repr ────────────────────────────────────────────────

    @property
    def weekday_rule(self) -> WeekdayRule:
        return self._rule

    @property
    def horizon(self) -> int:
        return len(self._weekdays) - 1

    def __repr__(self) -> str:
        return (
            f"SyntheticCalendar(weekday_rule={self._rule.value!r}, "
            f"horizon={self.horizon})"
        )
