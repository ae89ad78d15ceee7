"""
trainsched.config
~~~~~~~~~~~~~~~~~

Planner policy knobs.  Defaults reproduce the standard quote behaviour:
an 8-hour day, scheduling from synthetic day 1, one travel day either side
of a trip, the continuous ``day % 7`` weekday rule and default staggering.

Basic usage::

    from trainsched.config import PlannerConfig, load_config

    cfg = PlannerConfig()                               # defaults
    cfg = PlannerConfig(daily_hour_ceiling=6.0, stagger="none")
    cfg = load_config("planner.yaml")                   # YAML file

YAML layout (the ``planner:`` section is optional)::

    planner:
      daily_hour_ceiling: 8
      start_day: 1
      travel_buffer_days: 1
      weekday_rule: continuous
      stagger: default
"""

from trainsched.config.config import STAGGER_POLICIES, PlannerConfig, load_config

__all__ = ["PlannerConfig", "STAGGER_POLICIES", "load_config"]
