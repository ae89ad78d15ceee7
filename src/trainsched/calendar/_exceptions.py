from __future__ import annotations

from trainsched.diagnostics import ContractError


class CalendarError(ContractError):
    """Misuse of the synthetic calendar (day offsets below 1, bad rules)."""
