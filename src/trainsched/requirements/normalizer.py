from __future__ import annotations

import logging
import math
from collections import defaultdict
from typing import Any, Iterable, Mapping, Optional, Union

from pydantic import BaseModel, ValidationError

from trainsched.calendar import WeekendPolicy
from trainsched.diagnostics import DiagnosticCode, Diagnostics

from .models import AreaCost, CatalogItem, ItemRef, Resource, TrainingRequirement
from .rows import AreaCostRow, ItemRow, RequirementRow, ResourceRow, row_context

logger = logging.getLogger(__name__)

ResourcesLike = Union[Mapping[int, Resource], Iterable[Resource]]
ItemsLike = Union[Mapping[ItemRef, str], Iterable[CatalogItem]]
RowLike = Union[RequirementRow, Mapping[str, Any]]


def resource_index(resources: ResourcesLike) -> dict[int, Resource]:
    if isinstance(resources, Mapping):
        return dict(resources)
    return {r.resource_id: r for r in resources}


def item_names(items: ItemsLike) -> dict[ItemRef, str]:
    if isinstance(items, Mapping):
        return dict(items)
    return {i.item: i.name for i in items}


def _validate(model: type[BaseModel], raw: Any, diagnostics: Diagnostics) -> Optional[Any]:
    if isinstance(raw, model):
        return raw
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        diagnostics.add(
            DiagnosticCode.INVALID_ROW,
            f"Rejected {model.__name__}: {e.error_count()} validation error(s)",
            row=row_context(raw),
            errors=[err["msg"] for err in e.errors()],
        )
        return None


def parse_resources(rows: Iterable[Any]) -> tuple[dict[int, Resource], Diagnostics]:
    diagnostics = Diagnostics()
    out: dict[int, Resource] = {}
    for raw in rows:
        row = _validate(ResourceRow, raw, diagnostics)
        if row is not None:
            out[row.resource_id] = row.to_resource()
    return out, diagnostics


def parse_items(rows: Iterable[Any]) -> tuple[list[CatalogItem], Diagnostics]:
    diagnostics = Diagnostics()
    out: list[CatalogItem] = []
    for raw in rows:
        row = _validate(ItemRow, raw, diagnostics)
        if row is not None:
            out.append(row.to_catalog_item())
    return out, diagnostics


def parse_area(raw: Any) -> tuple[Optional[AreaCost], Diagnostics]:
    diagnostics = Diagnostics()
    if raw is None:
        return None, diagnostics
    row = _validate(AreaCostRow, raw, diagnostics)
    return (row.to_area_cost() if row is not None else None), diagnostics


def _usable_hours(hours: Optional[float]) -> bool:
    return hours is not None and math.isfinite(hours) and hours > 0.0


def normalize_requirements(
    rows: Iterable[RowLike],
    *,
    resources: ResourcesLike,
    items: ItemsLike,
    quote_policy: WeekendPolicy,
    item_overrides: Optional[Mapping[ItemRef, WeekendPolicy]] = None,
    plan_id: Optional[int] = None,
) -> tuple[list[TrainingRequirement], Diagnostics]:
    """
    Validate raw requirement rows and turn them into ``TrainingRequirement``.

    Rows with non-positive hours, without a resource or with a resource
    missing from ``resources`` are dropped and reported.  The weekend policy
    of a requirement is the quote-level ``quote_policy`` unless an item-level
    override exists: ``item_overrides`` first, then flags on the row itself.
    Flags left undefined by an override fall back to the quote policy.

    The quote policy itself must define at least one flag; a policy with both
    flags undefined raises ``ContractError``.
    """
    default_policy = quote_policy.resolved()
    overrides = dict(item_overrides or {})
    catalog = resource_index(resources)
    names = item_names(items)
    diagnostics = Diagnostics()
    sequences: dict[tuple[int, ItemRef], int] = defaultdict(int)
    out: list[TrainingRequirement] = []

    for raw in rows:
        row = _validate(RequirementRow, raw, diagnostics)
        if row is None:
            continue
        if plan_id is not None and row.plan_id is not None and row.plan_id != plan_id:
            continue

        item = row.item
        context = {"item": str(item), "plan_id": row.plan_id}

        if not _usable_hours(row.required_hours):
            diagnostics.add(
                DiagnosticCode.NON_POSITIVE_HOURS,
                f"Dropped {item}: required hours {row.required_hours!r} is not positive",
                resource_id=row.resource_id,
                **context,
            )
            continue
        if row.resource_id is None:
            diagnostics.add(
                DiagnosticCode.MISSING_RESOURCE,
                f"Dropped {item}: no resource assigned",
                **context,
            )
            continue
        resource = catalog.get(row.resource_id)
        if resource is None:
            diagnostics.add(
                DiagnosticCode.UNKNOWN_RESOURCE,
                f"Dropped {item}: resource {row.resource_id} is not in the catalog",
                resource_id=row.resource_id,
                **context,
            )
            continue

        name = names.get(item)
        if name is None:
            name = f"{item.kind.value} {item.item_id}"
            diagnostics.add(
                DiagnosticCode.UNKNOWN_ITEM,
                f"{item} is not in the catalog; naming it {name!r}",
                resource_id=row.resource_id,
                **context,
            )

        override = overrides.get(item) or row.weekend_override
        policy = override.overlay(default_policy) if override is not None else default_policy

        seq_key = (resource.resource_id, item)
        sequence = sequences[seq_key]
        sequences[seq_key] += 1

        out.append(
            TrainingRequirement(
                resource_id=resource.resource_id,
                item=item,
                required_hours=float(row.required_hours),
                policy=policy,
                resource_name=resource.name,
                item_name=name,
                plan_id=row.plan_id if row.plan_id is not None else plan_id,
                sequence=sequence,
            )
        )

    logger.debug(
        "Normalized %d requirement(s) for plan %s with %d diagnostic(s)",
        len(out), plan_id, len(diagnostics),
    )
    return out, diagnostics
