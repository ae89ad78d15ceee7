"""
trainsched.requirements
~~~~~~~~~~~~~~~~~~~~~~~

Typed data model and the Requirement Normalizer.  Duck-typed rows coming
from the store are validated here (pydantic) and converted into immutable
``TrainingRequirement`` objects; nothing downstream trusts raw rows.

Basic usage::

    from trainsched.calendar import WeekendPolicy
    from trainsched.requirements import (
        CatalogItem, ItemRef, Resource, normalize_requirements,
    )

    rows = [{"resource_id": 5, "machine_type_id": 1, "training_hours": 20}]
    reqs, diags = normalize_requirements(
        rows,
        resources=[Resource(5, "Alice", 50.0)],
        items=[CatalogItem(ItemRef.machine(1), "Lathe")],
        quote_policy=WeekendPolicy(False, False),
    )

Public API
----------
ItemKind, ItemRef          Tagged machine/software reference.
TrainingRequirement        One normalized row of demand.
Resource, AreaCost         Read-only reference data.
CatalogItem, TrainingOffer, ResourceAssignment
                           Catalog inputs for requirements_from_catalog.
RequirementRow, ResourceRow, AreaCostRow, ItemRow
                           Boundary schemas for raw rows.
normalize_requirements     Rows → TrainingRequirement list + diagnostics.
requirements_from_catalog  Quote selection → RequirementRow list.
parse_resources, parse_items, parse_area
                           Raw reference rows → typed objects.
"""

from trainsched.requirements.catalog import requirements_from_catalog
from trainsched.requirements.models import (
    AreaCost,
    CatalogItem,
    ItemKind,
    ItemRef,
    Resource,
    ResourceAssignment,
    TrainingOffer,
    TrainingRequirement,
)
from trainsched.requirements.normalizer import (
    item_names,
    normalize_requirements,
    parse_area,
    parse_items,
    parse_resources,
    resource_index,
)
from trainsched.requirements.rows import AreaCostRow, ItemRow, RequirementRow, ResourceRow

__all__ = [
    "AreaCost",
    "AreaCostRow",
    "CatalogItem",
    "ItemKind",
    "ItemRef",
    "ItemRow",
    "RequirementRow",
    "Resource",
    "ResourceAssignment",
    "ResourceRow",
    "TrainingOffer",
    "TrainingRequirement",
    "item_names",
    "normalize_requirements",
    "parse_area",
    "parse_items",
    "parse_resources",
    "requirements_from_catalog",
    "resource_index",
]
