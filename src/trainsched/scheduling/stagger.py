from __future__ import annotations

from typing import Callable, Union

from trainsched.diagnostics import ContractError

# (rank among same-resource same-item requirements, resource_id) -> day offset
StaggerPolicy = Callable[[int, int], int]


def default_stagger(rank: int, resource_id: int) -> int:
    return 2 * rank + 2 * (resource_id % 5)


def no_stagger(rank: int, resource_id: int) -> int:
    return 0


_POLICIES: dict[str, StaggerPolicy] = {
    "default": default_stagger,
    "none": no_stagger,
}


def resolve_stagger(policy: Union[str, StaggerPolicy]) -> StaggerPolicy:
    if callable(policy):
        return policy
    try:
        return _POLICIES[policy]
    except KeyError:
        raise ContractError(f"Unknown stagger policy {policy!r}.") from None
