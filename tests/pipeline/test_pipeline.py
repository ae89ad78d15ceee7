"""
tests/pipeline/test_pipeline.py

Covers:
  - Single-plan run: normalize → schedule → cost
  - Multi-plan quote: independent plans, summed totals, merged diagnostics
  - Bad rows degrade to diagnostics, bad policies raise
  - Catalog expansion feeding the pipeline
"""

import pytest

from trainsched.calendar import WeekendPolicy
from trainsched.config import PlannerConfig
from trainsched.diagnostics import ContractError, DiagnosticCode
from trainsched.pipeline import plan_quote, plan_training
from trainsched.requirements import (
    AreaCost,
    CatalogItem,
    ItemRef,
    Resource,
    ResourceAssignment,
    TrainingOffer,
    requirements_from_catalog,
)


# ── Fixtures ──────────────────────────────────────────────────────────────────

NO_WEEKENDS = WeekendPolicy(False, False)


@pytest.fixture
def resources():
    return [Resource(5, "Alice", 50.0), Resource(7, "Bob", 40.0)]


@pytest.fixture
def items():
    return [
        CatalogItem(ItemRef.machine(1), "Lathe"),
        CatalogItem(ItemRef.machine(2), "Mill"),
        CatalogItem(ItemRef.software(3), "CAM", always_included=True),
    ]


@pytest.fixture
def area():
    return AreaCost(1, "EU", accommodation_food=100.0, allowance=20.0, pocket_money=10.0)


@pytest.fixture
def rows():
    return [
        {"resource_id": 5, "machine_type_id": 1, "training_hours": 20, "plan_id": 1},
        {"resource_id": 7, "machine_type_id": 2, "training_hours": 8, "plan_id": 2},
        {"resource_id": 5, "machine_type_id": 1, "training_hours": 0, "plan_id": 2},
        # Both item ids set: rejected at the boundary.
        {"resource_id": 5, "machine_type_id": 1, "software_type_id": 3, "training_hours": 4},
    ]


# ── plan_training ─────────────────────────────────────────────────────────────

class TestPlanTraining:

    def test_single_plan(self, rows, resources, items, area):
        result = plan_training(
            rows, resources=resources, items=items,
            quote_policy=NO_WEEKENDS, plan_id=1, area=area,
        )
        assert result.plan_id == 1
        assert len(result.requirements) == 1
        assert [(s.start_day, s.segment_hours) for s in result.segments] == [
            (1, 8.0), (2, 8.0), (3, 4.0),
        ]
        assert result.total_days == 3
        assert len(result.bars) == 1
        assert result.costs.totals.total_cost == pytest.approx(1650.0)
        assert result.diagnostics.codes() == [DiagnosticCode.INVALID_ROW]

    def test_invalid_row_does_not_block_others(self, rows, resources, items, area):
        result = plan_training(
            rows, resources=resources, items=items,
            quote_policy=NO_WEEKENDS, plan_id=2, area=area,
        )
        assert [r.resource_id for r in result.requirements] == [7]
        assert set(result.diagnostics.codes()) == {
            DiagnosticCode.INVALID_ROW,
            DiagnosticCode.NON_POSITIVE_HOURS,
        }

    def test_missing_area_flows_through(self, rows, resources, items):
        result = plan_training(
            rows, resources=resources, items=items,
            quote_policy=NO_WEEKENDS, plan_id=1,
        )
        assert result.diagnostics.has(DiagnosticCode.NO_AREA_SELECTED)
        assert not result.costs.totals.complete
        assert result.costs.totals.trip_cost == 0.0

    def test_config_applies_to_all_stages(self, rows, resources, items, area):
        config = PlannerConfig(daily_hour_ceiling=10.0, travel_buffer_days=0)
        result = plan_training(
            rows, resources=resources, items=items,
            quote_policy=NO_WEEKENDS, plan_id=1, area=area, config=config,
        )
        assert [s.segment_hours for s in result.segments] == [10.0, 10.0]
        summary = result.costs.for_resource(5)
        assert summary.training_days == 2
        assert summary.business_trip_days == 2

    def test_malformed_quote_policy_raises(self, rows, resources, items):
        with pytest.raises(ContractError):
            plan_training(
                rows, resources=resources, items=items,
                quote_policy=WeekendPolicy(None, None), plan_id=1,
            )

    def test_no_rows(self, resources, items, area):
        result = plan_training(
            [], resources=resources, items=items, quote_policy=NO_WEEKENDS, area=area,
        )
        assert result.segments == []
        assert result.total_days == 0
        assert not result.diagnostics


# ── plan_quote ────────────────────────────────────────────────────────────────

class TestPlanQuote:

    def test_two_plans(self, rows, resources, items, area):
        quote = plan_quote(
            rows, plan_ids=[2, 1, 2], resources=resources, items=items,
            quote_policy=NO_WEEKENDS, area=area,
        )
        assert list(quote.plans) == [1, 2]
        # Bob (7) is staggered by 2 × (7 mod 5) = 4 days.
        assert [s.start_day for s in quote.plans[2].segments] == [5]
        assert quote.plans[2].costs.totals.total_cost == pytest.approx(320.0 + 390.0)
        assert quote.totals.training_cost == pytest.approx(1000.0 + 320.0)
        assert quote.totals.trip_cost == pytest.approx(650.0 + 390.0)
        assert quote.totals.total_cost == pytest.approx(2360.0)
        assert quote.totals.complete

    def test_diagnostics_merged(self, rows, resources, items, area):
        quote = plan_quote(
            rows, plan_ids=[1, 2], resources=resources, items=items,
            quote_policy=NO_WEEKENDS, area=area,
        )
        assert len(quote.diagnostics) == sum(len(p.diagnostics) for p in quote.plans.values())
        assert len(quote.diagnostics.of(DiagnosticCode.INVALID_ROW)) == 2
        assert len(quote.diagnostics.of(DiagnosticCode.NON_POSITIVE_HOURS)) == 1

    def test_row_without_plan_in_every_plan(self, resources, items, area):
        rows = [{"resource_id": 5, "machine_type_id": 2, "training_hours": 8}]
        quote = plan_quote(
            rows, plan_ids=[1, 2], resources=resources, items=items,
            quote_policy=NO_WEEKENDS, area=area,
        )
        for pid in (1, 2):
            (req,) = quote.plans[pid].requirements
            assert req.plan_id == pid

    def test_plans_do_not_share_capacity(self, resources, items, area):
        rows = [
            {"resource_id": 5, "machine_type_id": 1, "training_hours": 8, "plan_id": 1},
            {"resource_id": 5, "machine_type_id": 1, "training_hours": 8, "plan_id": 2},
        ]
        quote = plan_quote(
            rows, plan_ids=[1, 2], resources=resources, items=items,
            quote_policy=NO_WEEKENDS, area=area,
        )
        assert quote.plans[1].segments[0].start_day == 1
        assert quote.plans[2].segments[0].start_day == 1

    def test_generator_rows(self, rows, resources, items, area):
        quote = plan_quote(
            (r for r in rows), plan_ids=[1, 2], resources=resources, items=items,
            quote_policy=NO_WEEKENDS, area=area,
        )
        assert all(p.segments for p in quote.plans.values())

    def test_no_plans(self, rows, resources, items):
        quote = plan_quote(
            rows, plan_ids=[], resources=resources, items=items, quote_policy=NO_WEEKENDS,
        )
        assert quote.plans == {}
        assert quote.totals.total_cost == 0.0


# ── From catalog ──────────────────────────────────────────────────────────────

class TestFromCatalog:

    def test_catalog_rows_feed_the_pipeline(self, resources, items, area):
        rows, diags = requirements_from_catalog(
            machine_ids=[1],
            software_ids=[],
            offers=[
                TrainingOffer(ItemRef.machine(1), plan_id=1, hours_required=16),
                TrainingOffer(ItemRef.software(3), plan_id=1, hours_required=4),
            ],
            assignments=[ResourceAssignment(ItemRef.machine(1), plan_id=1, resource_id=5)],
            items=items,
        )
        assert not diags
        result = plan_training(
            rows, resources=resources, items=items,
            quote_policy=NO_WEEKENDS, plan_id=1, area=area,
        )
        # The always-included software has no assigned resource.
        assert result.diagnostics.codes() == [DiagnosticCode.MISSING_RESOURCE]
        assert sum(s.segment_hours for s in result.segments) == pytest.approx(16.0)
