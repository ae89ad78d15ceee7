from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional

from trainsched.calendar import WeekendPolicy


class ItemKind(str, enum.Enum):
    MACHINE = "machine"
    SOFTWARE = "software"


@dataclass(frozen=True, slots=True, order=True)
class ItemRef:
    """Tagged reference to a trainable item: a machine type or a software type."""

    kind: ItemKind
    item_id: int

    @classmethod
    def machine(cls, item_id: int) -> "ItemRef":
        return cls(ItemKind.MACHINE, int(item_id))

    @classmethod
    def software(cls, item_id: int) -> "ItemRef":
        return cls(ItemKind.SOFTWARE, int(item_id))

    def __str__(self) -> str:
        return f"{self.kind.value}-{self.item_id}"


@dataclass(frozen=True, slots=True)
class CatalogItem:
    item: ItemRef
    name: str
    always_included: bool = False


@dataclass(frozen=True, slots=True)
class Resource:
    resource_id: int
    name: str = ""
    hourly_rate: float = 0.0


@dataclass(frozen=True, slots=True)
class AreaCost:
    area_id: int
    name: str = ""
    accommodation_food: float = 0.0
    allowance: float = 0.0
    pocket_money: float = 0.0

    @property
    def daily_total(self) -> float:
        return self.accommodation_food + self.allowance + self.pocket_money


@dataclass(frozen=True, slots=True)
class TrainingOffer:
    """Hours a plan prescribes for an item."""

    item: ItemRef
    plan_id: int
    hours_required: float


@dataclass(frozen=True, slots=True)
class ResourceAssignment:
    """Which resource trains an item under a plan."""

    item: ItemRef
    plan_id: int
    resource_id: int


@dataclass(frozen=True, slots=True)
class TrainingRequirement:
    """
    One row of demand: ``resource_id`` must receive ``required_hours`` of
    training on ``item`` under ``plan_id``.  ``policy`` is already resolved
    (quote default or item override).  ``sequence`` separates repeated rows
    for the same resource and item.
    """

    resource_id: int
    item: ItemRef
    required_hours: Optional[float]
    policy: WeekendPolicy
    resource_name: str = ""
    item_name: str = ""
    plan_id: Optional[int] = None
    sequence: int = 0

    @property
    def key(self) -> str:
        plan = "" if self.plan_id is None else self.plan_id
        return f"{self.item}-r{self.resource_id}-p{plan}-s{self.sequence}"

    @property
    def sort_key(self) -> tuple[int, str, int, int, float]:
        # Plan and hours break ties so mixed-plan input schedules the same in any order.
        plan = -1 if self.plan_id is None else self.plan_id
        hours = self.required_hours if self.required_hours is not None else 0.0
        return (self.item.item_id, self.item.kind.value, self.sequence, plan, hours)
