"""
Ledger Replay - Public API
===========================
Journal -> projection rebuild.
"""

from core.replay.errors import (
    ReplayApplyError,
    ReplayChainBrokenError,
    ReplayError,
    ReplayIntegrityError,
    ReplayUnknownEngineError,
)
from core.replay.event_replayer import EventReplayer, ReplayResult

__all__ = [
    "EventReplayer",
    "ReplayResult",
    "ReplayError",
    "ReplayApplyError",
    "ReplayChainBrokenError",
    "ReplayIntegrityError",
    "ReplayUnknownEngineError",
]
