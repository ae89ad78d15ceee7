from __future__ import annotations

import logging
import math
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Optional

import numpy as np

from trainsched.capacity.ledger import EPS
from trainsched.config import PlannerConfig
from trainsched.diagnostics import DiagnosticCode, Diagnostics
from trainsched.requirements import AreaCost, Resource
from trainsched.requirements.normalizer import ResourcesLike, resource_index
from trainsched.scheduling import ScheduledTaskSegment

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CostSummary:
    resource_id: int
    resource_name: str
    training_hours: float
    training_days: int
    earliest_day: int
    latest_day: int
    business_trip_days: int
    hourly_rate: float
    training_cost: float
    trip_cost: float
    trip_cost_complete: bool = True

    @property
    def total_cost(self) -> float:
        return self.training_cost + self.trip_cost


@dataclass(frozen=True, slots=True)
class PlanCostTotals:
    plan_id: Optional[int]
    training_cost: float
    trip_cost: float
    complete: bool = True

    @property
    def total_cost(self) -> float:
        return self.training_cost + self.trip_cost


@dataclass(frozen=True, slots=True)
class QuoteCostTotals:
    training_cost: float
    trip_cost: float
    complete: bool = True
    plans: tuple[PlanCostTotals, ...] = ()

    @property
    def total_cost(self) -> float:
        return self.training_cost + self.trip_cost


@dataclass
class CostProjection:
    summaries: list[CostSummary] = field(default_factory=list)
    totals: PlanCostTotals = field(default_factory=lambda: PlanCostTotals(None, 0.0, 0.0))
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    def for_resource(self, resource_id: int) -> Optional[CostSummary]:
        for s in self.summaries:
            if s.resource_id == resource_id:
                return s
        return None


def business_trip_days(earliest_day: int, latest_day: int, buffer_days: int = 1) -> int:
    """Training span plus ``buffer_days`` of travel before and after."""
    return (latest_day + buffer_days) - (earliest_day - buffer_days) + 1


def training_days(hours: float, ceiling: float) -> int:
    # Float noise below EPS must not add a whole day.
    return int(math.ceil(hours / ceiling - EPS)) if hours > EPS else 0


class CostProjector:
    """
    Collapse each resource's segments into a trip window and a cost figure.

    Training cost is ``hourly_rate × hours``; trip cost is the area's daily
    total times the business trip days.  Without an area the trip cost is
    zero and flagged incomplete.
    """

    def __init__(self, config: Optional[PlannerConfig] = None) -> None:
        self._config = config if config is not None else PlannerConfig()

    def project(
        self,
        segments: Iterable[ScheduledTaskSegment],
        *,
        resources: ResourcesLike,
        area: Optional[AreaCost] = None,
        plan_id: Optional[int] = None,
    ) -> CostProjection:
        catalog = resource_index(resources)
        diagnostics = Diagnostics()

        grouped: dict[int, list[ScheduledTaskSegment]] = defaultdict(list)
        for seg in segments:
            grouped[seg.resource_id].append(seg)

        if area is None and grouped:
            diagnostics.add(
                DiagnosticCode.NO_AREA_SELECTED,
                "No geographic area selected; trip costs are reported as 0 and incomplete",
                plan_id=plan_id,
            )

        summaries = [
            self._summarize(rid, grouped[rid], catalog.get(rid), area, diagnostics)
            for rid in sorted(grouped)
        ]

        totals = PlanCostTotals(
            plan_id=plan_id,
            training_cost=float(sum(s.training_cost for s in summaries)),
            trip_cost=float(sum(s.trip_cost for s in summaries)),
            complete=all(s.trip_cost_complete for s in summaries),
        )
        logger.debug(
            "Projected costs for %d resource(s) in plan %s: training=%.2f trip=%.2f",
            len(summaries), plan_id, totals.training_cost, totals.trip_cost,
        )
        return CostProjection(summaries, totals, diagnostics)

    def _summarize(
        self,
        resource_id: int,
        segments: list[ScheduledTaskSegment],
        resource: Optional[Resource],
        area: Optional[AreaCost],
        diagnostics: Diagnostics,
    ) -> CostSummary:
        days = np.fromiter((s.start_day for s in segments), dtype=np.int64, count=len(segments))
        hours = float(np.sum([s.segment_hours for s in segments]))
        earliest, latest = int(days.min()), int(days.max())
        trip_days = business_trip_days(earliest, latest, self._config.travel_buffer_days)

        if resource is None:
            diagnostics.add(
                DiagnosticCode.UNKNOWN_RESOURCE,
                f"Resource {resource_id} has no rate; training cost reported as 0",
                resource_id=resource_id,
            )
            rate = 0.0
            name = segments[0].resource_name
        else:
            rate = resource.hourly_rate
            name = resource.name or segments[0].resource_name

        return CostSummary(
            resource_id=resource_id,
            resource_name=name,
            training_hours=hours,
            training_days=training_days(hours, self._config.daily_hour_ceiling),
            earliest_day=earliest,
            latest_day=latest,
            business_trip_days=trip_days,
            hourly_rate=rate,
            training_cost=rate * hours,
            trip_cost=area.daily_total * trip_days if area is not None else 0.0,
            trip_cost_complete=area is not None,
        )


def project_costs(
    segments: Iterable[ScheduledTaskSegment],
    *,
    resources: ResourcesLike,
    area: Optional[AreaCost] = None,
    config: Optional[PlannerConfig] = None,
    plan_id: Optional[int] = None,
) -> CostProjection:
    return CostProjector(config).project(segments, resources=resources, area=area, plan_id=plan_id)


def total_quote_costs(plans: Iterable[PlanCostTotals]) -> QuoteCostTotals:
    plans = tuple(plans)
    return QuoteCostTotals(
        training_cost=float(sum(p.training_cost for p in plans)),
        trip_cost=float(sum(p.trip_cost for p in plans)),
        complete=all(p.complete for p in plans),
        plans=plans,
    )


def costs_by_plan(projections: Mapping[int, CostProjection]) -> QuoteCostTotals:
    return total_quote_costs(projections[pid].totals for pid in sorted(projections))
