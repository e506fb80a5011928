"""
Ledger Core Projections
=========================
Entity tables derived from journal events.
"""

from core.projections.store import TableProjectionStore, UnknownProjectionEvent

__all__ = [
    "TableProjectionStore",
    "UnknownProjectionEvent",
]
