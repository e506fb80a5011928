"""
Ledger Context - Public API
===========================
Caller identity and engine-wide authority context.
"""

from core.context.caller_context import CallerContext
from core.context.ledger_context import LedgerContext

__all__ = [
    "CallerContext",
    "LedgerContext",
]
