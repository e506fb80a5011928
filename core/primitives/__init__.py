"""
Ledger Core Primitives
========================
Engine-agnostic building blocks shared by every sub-ledger.

Primitives:
    table - counted id -> record table (monotonic ids, no delete)
"""

from core.primitives.table import CountedTable, TableIntegrityError

__all__ = [
    "CountedTable",
    "TableIntegrityError",
]
