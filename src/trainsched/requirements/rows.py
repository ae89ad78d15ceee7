from __future__ import annotations

from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator

from trainsched.calendar import WeekendPolicy

from .models import AreaCost, CatalogItem, ItemKind, ItemRef, Resource


class RequirementRow(BaseModel):
    """
    Raw requirement row as delivered by the store.

    The item is given either as ``item_id`` + ``item_kind`` or through one of
    ``machine_type_id`` / ``software_type_id`` (never both).  Row-level
    ``work_on_saturday`` / ``work_on_sunday`` flags act as an item-level
    weekend override.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    resource_id: Optional[int] = None
    item_id: Optional[int] = None
    item_kind: Optional[ItemKind] = None
    machine_type_id: Optional[int] = Field(
        default=None, validation_alias=AliasChoices("machine_type_id", "machine_types_id")
    )
    software_type_id: Optional[int] = Field(
        default=None, validation_alias=AliasChoices("software_type_id", "software_types_id")
    )
    required_hours: Optional[float] = Field(
        default=None,
        validation_alias=AliasChoices("required_hours", "training_hours", "allocated_hours"),
    )
    plan_id: Optional[int] = None
    work_on_saturday: Optional[bool] = None
    work_on_sunday: Optional[bool] = None

    @model_validator(mode="after")
    def _one_item(self) -> "RequirementRow":
        given = [
            self.item_id is not None,
            self.machine_type_id is not None,
            self.software_type_id is not None,
        ]
        if sum(given) != 1:
            raise ValueError(
                "exactly one of item_id, machine_type_id or software_type_id must be set"
            )
        if self.item_id is not None and self.item_kind is None:
            raise ValueError("item_kind is required together with item_id")
        return self

    @property
    def item(self) -> ItemRef:
        if self.machine_type_id is not None:
            return ItemRef.machine(self.machine_type_id)
        if self.software_type_id is not None:
            return ItemRef.software(self.software_type_id)
        return ItemRef(self.item_kind, int(self.item_id))

    @property
    def weekend_override(self) -> Optional[WeekendPolicy]:
        if self.work_on_saturday is None and self.work_on_sunday is None:
            return None
        return WeekendPolicy(self.work_on_saturday, self.work_on_sunday)


class ResourceRow(BaseModel):
    model_config = ConfigDict(extra="ignore")

    resource_id: int
    name: str = ""
    hourly_rate: float = Field(default=0.0, ge=0)

    def to_resource(self) -> Resource:
        return Resource(self.resource_id, self.name, self.hourly_rate)


class AreaCostRow(BaseModel):
    model_config = ConfigDict(extra="ignore")

    area_id: int
    name: str = ""
    daily_accommodation_food_cost: float = Field(default=0.0, ge=0)
    daily_allowance: float = Field(default=0.0, ge=0)
    daily_pocket_money: float = Field(default=0.0, ge=0)

    def to_area_cost(self) -> AreaCost:
        return AreaCost(
            self.area_id,
            self.name,
            self.daily_accommodation_food_cost,
            self.daily_allowance,
            self.daily_pocket_money,
        )


class ItemRow(BaseModel):
    model_config = ConfigDict(extra="ignore")

    item_id: int
    item_kind: ItemKind
    name: str
    always_included: bool = False

    def to_catalog_item(self) -> CatalogItem:
        return CatalogItem(ItemRef(self.item_kind, self.item_id), self.name, self.always_included)


def row_context(row: Any) -> dict[str, Any]:
    """Small, log-friendly summary of a raw row."""
    if isinstance(row, BaseModel):
        return row.model_dump(exclude_none=True)
    if isinstance(row, dict):
        return {k: v for k, v in row.items() if v is not None}
    return {"row": repr(row)}
