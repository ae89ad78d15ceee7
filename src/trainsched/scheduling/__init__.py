"""
trainsched.scheduling
~~~~~~~~~~~~~~~~~~~~~

Day-based training scheduler.  Requirements are grouped per resource and
laid out on the synthetic calendar as single-day segments of at most the
daily hour ceiling, skipping non-working days under each requirement's
weekend policy.

Basic usage::

    from trainsched.scheduling import schedule_requirements

    schedule = schedule_requirements(requirements)        # default config
    for seg in schedule.segments:
        print(seg.resource_name, seg.item_name, seg.start_day, seg.segment_hours)

Timeline helpers::

    from trainsched.scheduling import consolidate_segments, plan_span

    bars = consolidate_segments(schedule.segments)   # consecutive days merged
    last = plan_span(schedule.segments)

Public API
----------
DayScheduler            The scheduler class.
schedule_requirements   One-shot convenience wrapper.
Schedule                Segments plus diagnostics.
ScheduledTaskSegment    One day of one requirement's work.
TimelineBar             Consecutive segments of one requirement.
default_stagger, no_stagger
                        Built-in staggering policies.
"""

from trainsched.scheduling.scheduler import DayScheduler, Schedule, schedule_requirements
from trainsched.scheduling.segments import (
    ScheduledTaskSegment,
    TimelineBar,
    consolidate_segments,
    hours_by_requirement,
    plan_span,
    resource_hours_by_day,
    visible_months,
)
from trainsched.scheduling.stagger import StaggerPolicy, default_stagger, no_stagger, resolve_stagger

__all__ = [
    "DayScheduler",
    "Schedule",
    "ScheduledTaskSegment",
    "StaggerPolicy",
    "TimelineBar",
    "consolidate_segments",
    "default_stagger",
    "hours_by_requirement",
    "no_stagger",
    "plan_span",
    "resolve_stagger",
    "resource_hours_by_day",
    "schedule_requirements",
    "visible_months",
]
