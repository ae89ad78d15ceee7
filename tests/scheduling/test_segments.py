"""
tests/scheduling/test_segments.py

Covers:
  - Consolidating consecutive segments into timeline bars
  - Bars broken by weekends and by other requirements
  - Plan span and visible-month helpers
  - Per-resource per-day hour totals
"""

import pytest

from trainsched.calendar import WeekendPolicy
from trainsched.config import PlannerConfig
from trainsched.requirements import ItemRef, TrainingRequirement
from trainsched.scheduling import (
    DayScheduler,
    consolidate_segments,
    plan_span,
    resource_hours_by_day,
    visible_months,
)


def req(resource_id, item_id, hours, policy=WeekendPolicy(False, False)):
    return TrainingRequirement(
        resource_id=resource_id,
        item=ItemRef.machine(item_id),
        required_hours=hours,
        policy=policy,
        resource_name=f"R{resource_id}",
        item_name=f"M{item_id}",
    )


@pytest.fixture
def scheduler():
    return DayScheduler(PlannerConfig(stagger="none"))


class TestConsolidate:

    def test_single_run(self, scheduler):
        segs = scheduler.schedule([req(1, 1, 20)]).segments
        (bar,) = consolidate_segments(segs)
        assert bar.start_day == 1
        assert bar.duration_days == 3
        assert bar.end_day == 3
        assert bar.hours_per_day == (8.0, 8.0, 4.0)
        assert bar.hours == pytest.approx(20.0)

    def test_weekend_splits_bar(self):
        sched = DayScheduler(PlannerConfig(start_day=4, stagger="none"))
        segs = sched.schedule([req(1, 1, 24)]).segments
        bars = consolidate_segments(segs)
        assert [(b.start_day, b.duration_days) for b in bars] == [(4, 2), (8, 1)]

    def test_weekend_work_keeps_single_bar(self):
        sched = DayScheduler(PlannerConfig(start_day=4, stagger="none"))
        segs = sched.schedule([req(1, 1, 32, WeekendPolicy(True, True))]).segments
        bars = consolidate_segments(segs)
        assert [(b.start_day, b.duration_days) for b in bars] == [(4, 4)]

    def test_bars_per_requirement(self, scheduler):
        segs = scheduler.schedule([req(1, 1, 12), req(1, 2, 12)]).segments
        bars = consolidate_segments(segs)
        assert len(bars) == 2
        assert {b.requirement.item for b in bars} == {ItemRef.machine(1), ItemRef.machine(2)}
        assert sum(b.hours for b in bars) == pytest.approx(24.0)

    def test_input_order_irrelevant(self, scheduler):
        segs = scheduler.schedule([req(1, 1, 20), req(2, 1, 9)]).segments
        assert consolidate_segments(segs) == consolidate_segments(list(reversed(segs)))

    def test_empty(self):
        assert consolidate_segments([]) == []


class TestSpanHelpers:

    def test_plan_span(self, scheduler):
        segs = scheduler.schedule([req(1, 1, 20), req(2, 1, 48)]).segments
        assert plan_span(segs) == 8

    def test_plan_span_empty(self):
        assert plan_span([]) == 0

    @pytest.mark.parametrize(
        "days, months",
        [(0, 3), (30, 3), (90, 3), (91, 4), (200, 7), (360, 12)],
    )
    def test_visible_months(self, days, months):
        assert visible_months(days) == months

    def test_visible_months_custom_minimum(self):
        assert visible_months(10, minimum=1) == 1


class TestHoursByDay:

    def test_sums_across_requirements(self, scheduler):
        segs = scheduler.schedule([req(1, 1, 6), req(1, 2, 6), req(2, 1, 3)]).segments
        assert resource_hours_by_day(segs) == {
            1: {1: 8.0, 2: 4.0},
            2: {1: 3.0},
        }
