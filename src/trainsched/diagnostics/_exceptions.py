from __future__ import annotations


class TrainschedError(Exception):
    """Base exception for all trainsched errors."""


class ContractError(TrainschedError, ValueError):
    """
    A precondition of the computation was violated by the caller.

    Unlike data-quality conditions these are never collected; the whole
    invocation stops.
    """
