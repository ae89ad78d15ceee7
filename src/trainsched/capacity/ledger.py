from typing import Optional

import numpy as np

from trainsched.diagnostics import ContractError

# Hours closer than this are considered equal.
EPS: float = 1e-9


class HourLedger:

    _DEFAULT_BUFFER: int = 360

    def __init__(self, ceiling: float, horizon: Optional[int] = None) -> None:
        if not ceiling > 0.0:
            raise ContractError(f"Daily hour ceiling must be positive; got {ceiling}.")
        self._ceiling: float = float(ceiling)
        self._horizon: int = horizon if horizon is not None else self._DEFAULT_BUFFER
        # Index 0 is padding; days are 1-based.
        self._booked: np.ndarray = np.zeros(self._horizon + 1, dtype=float)

    def _extend_to(self, new_horizon: int) -> None:
        extra = np.zeros(new_horizon - self._horizon, dtype=float)
        self._booked = np.concatenate([self._booked, extra])
        self._horizon = new_horizon

    def _slot(self, day: int) -> int:
        if day < 1:
            raise ContractError(f"Synthetic days are 1-indexed; got {day}.")
        if day > self._horizon:
            self._extend_to(day + self._DEFAULT_BUFFER)
        return day

    def booked(self, day: int) -> float:
        if day > self._horizon:
            return 0.0
        return float(self._booked[self._slot(day)])

    def free(self, day: int) -> float:
        return max(self._ceiling - self.booked(day), 0.0)

    def is_full(self, day: int) -> bool:
        return self.free(day) <= EPS

    def book(self, day: int, hours: float) -> float:
        """
        Book ``hours`` on ``day``; returns the hours already booked on that
        day before this booking (the segment's start-hour offset).
        """
        if hours <= 0.0:
            raise ContractError(f"Booked hours must be positive; got {hours}.")
        slot = self._slot(day)
        offset = float(self._booked[slot])
        if offset + hours > self._ceiling + EPS:
            raise ContractError(
                f"Booking {hours}h on day {day} exceeds the daily ceiling "
                f"({offset}h of {self._ceiling}h already booked)."
            )
        self._booked[slot] = offset + hours
        return offset

    @property
    def ceiling(self) -> float:
        return self._ceiling

    @property
    def horizon(self) -> int:
        return self._horizon

    @property
    def total_hours(self) -> float:
        return float(self._booked.sum())

    @property
    def busy_days(self) -> np.ndarray:
        return np.nonzero(self._booked > 0.0)[0]

    def __repr__(self) -> str:
        return (
            f"HourLedger(ceiling={self._ceiling}, "
            f"horizon={self._horizon}, "
            f"busy_days={len(self.busy_days)}, "
            f"total_hours={self.total_hours})"
        )
