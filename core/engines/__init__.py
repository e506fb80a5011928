"""
Ledger Engines - Shared Service Layer
=======================================
Base class every sub-ledger service extends.
"""

from core.engines.service import EmissionViolation, LedgerEngineService

__all__ = [
    "EmissionViolation",
    "LedgerEngineService",
]
