from __future__ import annotations

import logging
import math
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Iterable, Optional, Union

from trainsched.calendar import SyntheticCalendar
from trainsched.capacity import HourLedger
from trainsched.capacity.ledger import EPS
from trainsched.config import PlannerConfig
from trainsched.diagnostics import ContractError, DiagnosticCode, Diagnostics
from trainsched.requirements import ItemRef, TrainingRequirement

from .segments import ScheduledTaskSegment
from .stagger import StaggerPolicy, resolve_stagger

logger = logging.getLogger(__name__)


@dataclass
class Schedule:
    segments: list[ScheduledTaskSegment] = field(default_factory=list)
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    def for_resource(self, resource_id: int) -> list[ScheduledTaskSegment]:
        return [s for s in self.segments if s.resource_id == resource_id]

    @property
    def resource_ids(self) -> list[int]:
        return sorted({s.resource_id for s in self.segments})


class DayScheduler:
    """
    Greedy day-by-day allocator.

    All requirements of a resource share one ``HourLedger``, so no resource
    is booked beyond the daily hour ceiling on any day however many items
    it trains.  Each requirement starts at a staggered cursor and fills the
    first days that are workable under its own weekend policy and still
    have free hours.  The scheduler holds no state between calls.
    """

    def __init__(
        self,
        config: Optional[PlannerConfig] = None,
        *,
        calendar: Optional[SyntheticCalendar] = None,
        stagger: Optional[Union[str, StaggerPolicy]] = None,
    ) -> None:
        self._config = config if config is not None else PlannerConfig()
        self._calendar = (
            calendar if calendar is not None else SyntheticCalendar(self._config.weekday_rule)
        )
        self._stagger = resolve_stagger(stagger if stagger is not None else self._config.stagger)

    # ── public ───────────────────────────────────────────────────────────

    def schedule(self, requirements: Iterable[TrainingRequirement]) -> Schedule:
        result = Schedule()
        by_resource: dict[int, list[TrainingRequirement]] = defaultdict(list)

        for req in requirements:
            # Contract check first: a malformed policy stops everything.
            req.policy.resolved()
            hours = req.required_hours
            if hours is None or not math.isfinite(hours) or hours < 0.0:
                result.diagnostics.add(
                    DiagnosticCode.NON_POSITIVE_HOURS,
                    f"Requirement {req.key} has hours {hours!r}; treated as zero",
                    resource_id=req.resource_id,
                    item=str(req.item),
                )
                continue
            if hours == 0.0:
                continue
            by_resource[req.resource_id].append(req)

        for resource_id in sorted(by_resource):
            result.segments.extend(self._schedule_resource(resource_id, by_resource[resource_id]))

        logger.debug(
            "Scheduled %d segment(s) for %d resource(s)",
            len(result.segments), len(by_resource),
        )
        return result

    # ── per resource ─────────────────────────────────────────────────────

    def _start_day(self, rank: int, resource_id: int) -> int:
        start = self._config.start_day + int(self._stagger(rank, resource_id))
        if start < 1:
            raise ContractError(
                f"Stagger policy moved resource {resource_id} to day {start}; days are 1-indexed."
            )
        return start

    def _schedule_resource(
        self,
        resource_id: int,
        requirements: list[TrainingRequirement],
    ) -> list[ScheduledTaskSegment]:
        ledger = HourLedger(self._config.daily_hour_ceiling)
        ranks: dict[ItemRef, int] = defaultdict(int)
        segments: list[ScheduledTaskSegment] = []

        for req in sorted(requirements, key=lambda r: r.sort_key):
            rank = ranks[req.item]
            ranks[req.item] += 1
            segments.extend(self._allocate(req, ledger, self._start_day(rank, resource_id)))
        return segments

    def _allocate(
        self,
        req: TrainingRequirement,
        ledger: HourLedger,
        day: int,
    ) -> list[ScheduledTaskSegment]:
        policy = req.policy.resolved()
        total = float(req.required_hours)
        remaining = total
        out: list[ScheduledTaskSegment] = []

        while remaining > EPS:
            if not self._calendar.is_working_day(day, policy) or ledger.is_full(day):
                day += 1
                continue

            free = ledger.free(day)
            # The last slice takes exactly what is left so hours are conserved.
            hours = remaining if remaining <= free + EPS else free
            offset = ledger.book(day, hours)
            out.append(
                ScheduledTaskSegment(
                    resource_id=req.resource_id,
                    resource_name=req.resource_name,
                    item_name=req.item_name,
                    start_day=day,
                    segment_hours=hours,
                    total_requirement_hours=total,
                    requirement=req,
                    segment_index=len(out),
                    start_hour_offset=offset,
                )
            )
            remaining = 0.0 if hours == remaining else remaining - hours
            if ledger.is_full(day):
                day += 1

        return out

    # ── properties / repr ────────────────────────────────────────────────

    @property
    def config(self) -> PlannerConfig:
        return self._config

    @property
    def calendar(self) -> SyntheticCalendar:
        return self._calendar

    def __repr__(self) -> str:
        return (
            f"DayScheduler(ceiling={self._config.daily_hour_ceiling}, "
            f"start_day={self._config.start_day}, "
            f"weekday_rule={self._calendar.weekday_rule.value!r}, "
            f"stagger={getattr(self._stagger, '__name__', repr(self._stagger))})"
        )


def schedule_requirements(
    requirements: Iterable[TrainingRequirement],
    config: Optional[PlannerConfig] = None,
    *,
    calendar: Optional[SyntheticCalendar] = None,
    stagger: Optional[Union[str, StaggerPolicy]] = None,
) -> Schedule:
    return DayScheduler(config, calendar=calendar, stagger=stagger).schedule(requirements)
