"""
trainsched.capacity
~~~~~~~~~~~~~~~~~~~

Per-resource daily hour ledger.  A resource can be booked for at most
``ceiling`` hours on any synthetic day; every requirement scheduled on the
resource books against the same ledger, so independent assignments are
interleaved rather than stacked on top of each other.

Basic usage::

    from trainsched.capacity import HourLedger

    ledger = HourLedger(8.0)
    ledger.book(1, 5.0)         # → 0.0  (hour offset the booking starts at)
    ledger.free(1)              # → 3.0
    ledger.book(1, 3.0)         # → 5.0
    ledger.is_full(1)           # → True
"""

from trainsched.capacity.ledger import HourLedger

__all__ = ["HourLedger"]
