from __future__ import annotations

import logging
from typing import Iterable, Optional

from trainsched.diagnostics import DiagnosticCode, Diagnostics

from .models import CatalogItem, ItemRef, ResourceAssignment, TrainingOffer
from .rows import RequirementRow

logger = logging.getLogger(__name__)


def requirements_from_catalog(
    *,
    machine_ids: Iterable[int],
    software_ids: Iterable[int],
    offers: Iterable[TrainingOffer],
    assignments: Iterable[ResourceAssignment],
    items: Iterable[CatalogItem] = (),
    plan_ids: Optional[Iterable[int]] = None,
) -> tuple[list[RequirementRow], Diagnostics]:
    """
    Expand a quote's item selection into requirement rows, one per
    (item, plan) training offer.

    Software flagged ``always_included`` in ``items`` is added even when the
    quote did not select it.  Offers without a resource assignment produce a
    row with no resource (the normalizer reports and drops it); selected
    items with no offer at all are reported as ``MISSING_OFFER``.
    """
    selected: list[ItemRef] = [ItemRef.machine(i) for i in machine_ids]
    selected += [ItemRef.software(i) for i in software_ids]
    for entry in items:
        if entry.always_included and entry.item not in selected:
            selected.append(entry.item)

    wanted_plans = None if plan_ids is None else set(plan_ids)
    offers_by_item: dict[ItemRef, list[TrainingOffer]] = {}
    for offer in offers:
        if wanted_plans is None or offer.plan_id in wanted_plans:
            offers_by_item.setdefault(offer.item, []).append(offer)

    assigned = {(a.item, a.plan_id): a.resource_id for a in assignments}

    diagnostics = Diagnostics()
    rows: list[RequirementRow] = []
    for item in selected:
        item_offers = offers_by_item.get(item)
        if not item_offers:
            diagnostics.add(
                DiagnosticCode.MISSING_OFFER,
                f"No training offer for {item}",
                item=str(item),
            )
            continue
        for offer in sorted(item_offers, key=lambda o: o.plan_id):
            rows.append(
                RequirementRow(
                    resource_id=assigned.get((item, offer.plan_id)),
                    item_id=item.item_id,
                    item_kind=item.kind,
                    required_hours=offer.hours_required,
                    plan_id=offer.plan_id,
                )
            )

    logger.debug("Expanded %d selected item(s) into %d row(s)", len(selected), len(rows))
    return rows, diagnostics
