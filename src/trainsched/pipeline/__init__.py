"""
trainsched.pipeline
~~~~~~~~~~~~~~~~~~~

End-to-end planning: Requirement Normalizer → Day-Based Scheduler →
Trip & Cost Projector, for one plan or for every plan of a quote.

Basic usage::

    from trainsched.calendar import WeekendPolicy
    from trainsched.pipeline import plan_quote

    result = plan_quote(
        rows,
        plan_ids=[1, 2],
        resources=resources,
        items=items,
        quote_policy=WeekendPolicy(False, False),
        area=area,
    )
    result.plans[1].segments       # schedule for plan 1
    result.totals.total_cost       # quote total
    list(result.diagnostics)       # skipped rows, incomplete costs
"""

from trainsched.pipeline.pipeline import PlanResult, QuoteResult, plan_quote, plan_training

__all__ = ["PlanResult", "QuoteResult", "plan_quote", "plan_training"]
