from __future__ import annotations

import logging
import math
import numbers
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml

from trainsched.calendar import WeekdayRule
from trainsched.diagnostics import ContractError

logger = logging.getLogger(__name__)

STAGGER_POLICIES: tuple[str, ...] = ("default", "none")


def _is_number(value: Any) -> bool:
    # bool is an int subclass; ``true`` in YAML is not a number of hours.
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _as_int(value: Any) -> Optional[int]:
    """``value`` as an int if it is a whole number (``3`` or ``3.0``), else None."""
    if not _is_number(value):
        return None
    if isinstance(value, numbers.Integral):
        return int(value)
    if math.isfinite(value) and float(value).is_integer():
        return int(value)
    return None


@dataclass(frozen=True, slots=True)
class PlannerConfig:
    daily_hour_ceiling: float = 8.0
    start_day: int = 1
    travel_buffer_days: int = 1
    weekday_rule: str = WeekdayRule.CONTINUOUS.value
    stagger: str = "default"

    def __post_init__(self) -> None:
        ceiling = self.daily_hour_ceiling
        if not _is_number(ceiling) or not math.isfinite(ceiling) or ceiling <= 0:
            raise ContractError(f"daily_hour_ceiling must be a positive number; got {ceiling!r}.")
        object.__setattr__(self, "daily_hour_ceiling", float(ceiling))

        start_day = _as_int(self.start_day)
        if start_day is None or start_day < 1:
            raise ContractError(f"start_day must be an integer >= 1; got {self.start_day!r}.")
        object.__setattr__(self, "start_day", start_day)

        buffer_days = _as_int(self.travel_buffer_days)
        if buffer_days is None or buffer_days < 0:
            raise ContractError(
                f"travel_buffer_days must be a non-negative integer; got {self.travel_buffer_days!r}."
            )
        object.__setattr__(self, "travel_buffer_days", buffer_days)

        if not isinstance(self.weekday_rule, str) or self.weekday_rule not in {
            r.value for r in WeekdayRule
        }:
            raise ContractError(f"Unknown weekday_rule {self.weekday_rule!r}.")
        if not isinstance(self.stagger, str) or self.stagger not in STAGGER_POLICIES:
            raise ContractError(
                f"Unknown stagger policy {self.stagger!r}; expected one of {STAGGER_POLICIES}."
            )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "PlannerConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ContractError(f"Unknown planner config keys: {sorted(unknown)}.")
        return cls(**dict(data))

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def load_config(path: Union[str, Path]) -> PlannerConfig:
    """Load a ``PlannerConfig`` from a YAML file."""
    path = Path(path)
    if not path.exists():
        raise ContractError(f"Config file not found: {path}")

    try:
        with open(path, "r") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ContractError(f"Invalid YAML in config file {path}: {e}") from e

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ContractError("Config file must contain a YAML mapping")

    section = raw.get("planner", raw)
    if not isinstance(section, dict):
        raise ContractError("The 'planner' section must be a YAML mapping")

    config = PlannerConfig.from_mapping(section)
    logger.debug("Loaded planner config from %s: %s", path, config)
    return config
