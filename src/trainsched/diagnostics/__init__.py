"""
trainsched.diagnostics
~~~~~~~~~~~~~~~~~~~~~~

Error taxonomy shared by every stage of the planner.

Two kinds of trouble are distinguished:

* *Contract errors* are programmer mistakes (a daily hour ceiling of zero, a
  weekend policy with both flags undefined).  They raise ``ContractError``
  and stop the invocation.
* *Data-quality conditions* (zero hours, an unknown resource, a quote with no
  area selected) are collected as ``Diagnostic`` records and returned next
  to the result.  A quote with one bad row still gets a schedule for the
  good ones.

Basic usage::

    from trainsched.diagnostics import Diagnostics, DiagnosticCode

    diags = Diagnostics()
    diags.add(DiagnosticCode.UNKNOWN_RESOURCE, "resource 7 is not in the catalog",
              resource_id=7)
    if diags:
        for d in diags:
            print(d.code.value, d.message)

Public API
----------
Diagnostic        One data-quality record.
DiagnosticCode    Enumeration of data-quality conditions.
Diagnostics       Ordered collection of Diagnostic records.
TrainschedError   Base exception for the package.
ContractError     Fatal precondition violation.
"""

from __future__ import annotations

from trainsched.diagnostics._exceptions import ContractError, TrainschedError
from trainsched.diagnostics.diagnostics import Diagnostic, DiagnosticCode, Diagnostics

__all__ = [
    "ContractError",
    "Diagnostic",
    "DiagnosticCode",
    "Diagnostics",
    "TrainschedError",
]
