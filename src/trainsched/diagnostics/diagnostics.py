from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Mapping

logger = logging.getLogger(__name__)


class DiagnosticCode(str, enum.Enum):
    INVALID_ROW = "invalid_row"
    NON_POSITIVE_HOURS = "non_positive_hours"
    MISSING_RESOURCE = "missing_resource"
    UNKNOWN_RESOURCE = "unknown_resource"
    UNKNOWN_ITEM = "unknown_item"
    MISSING_OFFER = "missing_offer"
    NO_AREA_SELECTED = "no_area_selected"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    code: DiagnosticCode
    message: str
    context: Mapping[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"


class Diagnostics:
    """
    Ordered, append-only list of data-quality records.

    Every record added is also logged at WARNING on the ``trainsched``
    logger hierarchy so that callers who ignore the returned list still
    see the condition in their logs.
    """

    def __init__(self, items: Iterable[Diagnostic] = ()) -> None:
        self._items: list[Diagnostic] = list(items)

    def add(self, code: DiagnosticCode, message: str, **context: Any) -> Diagnostic:
        diag = Diagnostic(code, message, dict(context))
        logger.warning("%s", diag)
        self._items.append(diag)
        return diag

    def extend(self, other: Iterable[Diagnostic]) -> None:
        # Records from another stage were already logged when they were added.
        self._items.extend(other)

    def codes(self) -> list[DiagnosticCode]:
        return [d.code for d in self._items]

    def has(self, code: DiagnosticCode) -> bool:
        return any(d.code is code for d in self._items)

    def of(self, code: DiagnosticCode) -> list[Diagnostic]:
        return [d for d in self._items if d.code is code]

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __getitem__(self, index: int) -> Diagnostic:
        return self._items[index]

    def __repr__(self) -> str:
        return f"Diagnostics({[d.code.value for d in self._items]})"
