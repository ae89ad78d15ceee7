"""
trainsched.costing
~~~~~~~~~~~~~~~~~~

Trip & cost projection.  Segments are grouped per resource; the span from
the first to the last training day, plus one travel day either side, is the
business trip.  Training cost comes from the resource's hourly rate, trip
cost from the selected geographic area's daily rates.

Basic usage::

    from trainsched.costing import project_costs

    projection = project_costs(schedule.segments, resources=resources, area=area)
    for s in projection.summaries:
        print(s.resource_name, s.training_days, s.business_trip_days, s.total_cost)
    projection.totals.total_cost

Public API
----------
CostProjector      The projector class.
project_costs      One-shot convenience wrapper.
CostSummary        Per-resource result.
PlanCostTotals     Per-plan sums.
QuoteCostTotals    Per-quote sums.
total_quote_costs  Sum plan totals into quote totals.
"""

from trainsched.costing.projector import (
    CostProjection,
    CostProjector,
    CostSummary,
    PlanCostTotals,
    QuoteCostTotals,
    business_trip_days,
    costs_by_plan,
    project_costs,
    total_quote_costs,
    training_days,
)

__all__ = [
    "CostProjection",
    "CostProjector",
    "CostSummary",
    "PlanCostTotals",
    "QuoteCostTotals",
    "business_trip_days",
    "costs_by_plan",
    "project_costs",
    "total_quote_costs",
    "training_days",
]
