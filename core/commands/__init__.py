"""
Ledger Command Layer
=====================
Every mutation begins as a Command.
Every Command produces exactly one Outcome.
REJECTED commands leave the ledger untouched.
"""

from core.commands.base import (
    Command,
    build_command,
    derive_source_engine,
    require_int_field,
    require_str_field,
)
from core.commands.outcomes import (
    CommandOutcome,
    CommandStatus,
)
from core.commands.rejection import (
    ERR_NOT_AUTHORIZED,
    ReasonCode,
    RejectionReason,
)
from core.commands.dispatcher import (
    CommandDispatcher,
    PolicyEvaluator,
)
from core.commands.bus import (
    CommandBus,
    CommandBusError,
    NoHandlerRegistered,
)

__all__ = [
    # ── Base ──────────────────────────────────────────────────
    "Command",
    "build_command",
    "derive_source_engine",
    "require_int_field",
    "require_str_field",
    # ── Outcomes ──────────────────────────────────────────────
    "CommandOutcome",
    "CommandStatus",
    # ── Rejection ─────────────────────────────────────────────
    "ERR_NOT_AUTHORIZED",
    "RejectionReason",
    "ReasonCode",
    # ── Dispatcher ────────────────────────────────────────────
    "CommandDispatcher",
    "PolicyEvaluator",
    # ── Bus ────────────────────────────────────────────────────
    "CommandBus",
    "CommandBusError",
    "NoHandlerRegistered",
]
