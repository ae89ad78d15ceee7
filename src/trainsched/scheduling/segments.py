from __future__ import annotations

import math
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from trainsched.calendar import DAYS_PER_MONTH
from trainsched.requirements import TrainingRequirement


@dataclass(frozen=True, slots=True)
class ScheduledTaskSegment:
    """
    One day's worth of one requirement's work.

    ``start_hour_offset`` is how many hours of the resource's day were
    already booked when this segment was placed.
    """

    resource_id: int
    resource_name: str
    item_name: str
    start_day: int
    segment_hours: float
    total_requirement_hours: float
    requirement: TrainingRequirement
    segment_index: int = 0
    start_hour_offset: float = 0.0
    duration_days: int = 1

    @property
    def id(self) -> str:
        return f"{self.requirement.key}-seg{self.segment_index}"

    @property
    def end_day(self) -> int:
        return self.start_day + self.duration_days - 1


@dataclass(frozen=True, slots=True)
class TimelineBar:
    """A run of consecutive-day segments of one requirement."""

    requirement: TrainingRequirement
    start_day: int
    duration_days: int
    hours_per_day: tuple[float, ...] = field(default_factory=tuple)

    @property
    def hours(self) -> float:
        return float(sum(self.hours_per_day))

    @property
    def end_day(self) -> int:
        return self.start_day + self.duration_days - 1


def consolidate_segments(segments: Iterable[ScheduledTaskSegment]) -> list[TimelineBar]:
    """
    Merge consecutive-day segments of the same requirement into bars.

    Segments separated by a skipped day (a weekend, or a day filled by
    another requirement) start a new bar.  Output is ordered by resource,
    requirement key and start day.
    """
    ordered = sorted(
        segments,
        key=lambda s: (s.resource_id, s.requirement.key, s.start_day),
    )
    bars: list[TimelineBar] = []
    current: list[ScheduledTaskSegment] = []

    def flush() -> None:
        if current:
            bars.append(
                TimelineBar(
                    requirement=current[0].requirement,
                    start_day=current[0].start_day,
                    duration_days=current[-1].start_day - current[0].start_day + 1,
                    hours_per_day=tuple(s.segment_hours for s in current),
                )
            )

    for seg in ordered:
        if (
            current
            and seg.requirement == current[-1].requirement
            and seg.start_day == current[-1].start_day + 1
        ):
            current.append(seg)
            continue
        flush()
        current = [seg]
    flush()
    return bars


def plan_span(segments: Iterable[ScheduledTaskSegment]) -> int:
    """Last synthetic day touched by any segment (0 when there are none)."""
    return max((s.end_day for s in segments), default=0)


def visible_months(total_days: int, minimum: int = 3) -> int:
    return max(math.ceil(total_days / DAYS_PER_MONTH), minimum)


def resource_hours_by_day(
    segments: Iterable[ScheduledTaskSegment],
) -> dict[int, dict[int, float]]:
    """``{resource_id: {day: hours}}`` summed over all requirements."""
    out: dict[int, dict[int, float]] = defaultdict(lambda: defaultdict(float))
    for s in segments:
        out[s.resource_id][s.start_day] += s.segment_hours
    return {rid: dict(days) for rid, days in out.items()}


def hours_by_requirement(segments: Sequence[ScheduledTaskSegment]) -> dict[str, float]:
    out: dict[str, float] = defaultdict(float)
    for s in segments:
        out[s.requirement.key] += s.segment_hours
    return dict(out)
