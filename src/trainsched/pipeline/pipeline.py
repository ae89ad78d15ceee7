from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Optional

from trainsched.calendar import SyntheticCalendar, WeekendPolicy
from trainsched.config import PlannerConfig
from trainsched.costing import (
    CostProjection,
    CostProjector,
    QuoteCostTotals,
    total_quote_costs,
)
from trainsched.diagnostics import Diagnostics
from trainsched.requirements import AreaCost, ItemRef, TrainingRequirement, normalize_requirements
from trainsched.requirements.normalizer import (
    ItemsLike,
    ResourcesLike,
    RowLike,
    item_names,
    resource_index,
)
from trainsched.scheduling import (
    DayScheduler,
    ScheduledTaskSegment,
    TimelineBar,
    consolidate_segments,
    plan_span,
)

logger = logging.getLogger(__name__)


@dataclass
class PlanResult:
    plan_id: Optional[int]
    requirements: list[TrainingRequirement] = field(default_factory=list)
    segments: list[ScheduledTaskSegment] = field(default_factory=list)
    costs: CostProjection = field(default_factory=CostProjection)
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    @property
    def bars(self) -> list[TimelineBar]:
        return consolidate_segments(self.segments)

    @property
    def total_days(self) -> int:
        return plan_span(self.segments)


@dataclass
class QuoteResult:
    plans: dict[int, PlanResult] = field(default_factory=dict)
    totals: QuoteCostTotals = field(default_factory=lambda: QuoteCostTotals(0.0, 0.0))
    diagnostics: Diagnostics = field(default_factory=Diagnostics)


def plan_training(
    rows: Iterable[RowLike],
    *,
    resources: ResourcesLike,
    items: ItemsLike,
    quote_policy: WeekendPolicy,
    plan_id: Optional[int] = None,
    area: Optional[AreaCost] = None,
    item_overrides: Optional[Mapping[ItemRef, WeekendPolicy]] = None,
    config: Optional[PlannerConfig] = None,
    calendar: Optional[SyntheticCalendar] = None,
) -> PlanResult:
    """Normalize, schedule and cost the requirements of one (quote, plan)."""
    config = config if config is not None else PlannerConfig()
    catalog = resource_index(resources)

    requirements, diagnostics = normalize_requirements(
        rows,
        resources=catalog,
        items=items,
        quote_policy=quote_policy,
        item_overrides=item_overrides,
        plan_id=plan_id,
    )
    schedule = DayScheduler(config, calendar=calendar).schedule(requirements)
    diagnostics.extend(schedule.diagnostics)

    costs = CostProjector(config).project(
        schedule.segments, resources=catalog, area=area, plan_id=plan_id
    )
    diagnostics.extend(costs.diagnostics)

    logger.info(
        "Plan %s: %d requirement(s), %d segment(s), total cost %.2f, %d diagnostic(s)",
        plan_id, len(requirements), len(schedule.segments),
        costs.totals.total_cost, len(diagnostics),
    )
    return PlanResult(plan_id, requirements, schedule.segments, costs, diagnostics)


def plan_quote(
    rows: Iterable[RowLike],
    *,
    plan_ids: Iterable[int],
    resources: ResourcesLike,
    items: ItemsLike,
    quote_policy: WeekendPolicy,
    area: Optional[AreaCost] = None,
    item_overrides: Optional[Mapping[ItemRef, WeekendPolicy]] = None,
    config: Optional[PlannerConfig] = None,
) -> QuoteResult:
    """
    Run ``plan_training`` for every plan of a quote and sum the costs.

    Plans are computed independently; nothing is shared between them except
    the read-only inputs.
    """
    rows = list(rows)
    catalog = resource_index(resources)
    names = item_names(items)
    result = QuoteResult()

    for pid in sorted(set(plan_ids)):
        plan = plan_training(
            rows,
            resources=catalog,
            items=names,
            quote_policy=quote_policy,
            plan_id=pid,
            area=area,
            item_overrides=item_overrides,
            config=config,
        )
        result.plans[pid] = plan
        result.diagnostics.extend(plan.diagnostics)

    result.totals = total_quote_costs(p.costs.totals for p in result.plans.values())
    return result

