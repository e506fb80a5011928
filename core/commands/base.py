"""
Ledger Command Layer - Command Base Contract
==============================================
Every ledger mutation begins as a Command.

A Command is a frozen declaration of intent. It carries identity,
caller context and payload, nothing else.

Rules:
- Immutable once created (frozen dataclass)
- No business logic inside
- command_type must end with '.request'
- command_type follows engine.domain.action.request format
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass

from core.context.caller_context import CallerContext


@dataclass(frozen=True)
class Command:
    """
    Canonical ledger Command.

    Fields:
        command_id:     Unique identifier (UUID).
        command_type:   Namespaced type ending in '.request'
                        (e.g. 'applicant.applicant.verify.request').
        caller:         CallerContext of the authenticated caller.
        payload:        Operation arguments (dict).
        source_engine:  Engine that owns this command.

    Example:
        Command(
            command_id=uuid.uuid4(),
            command_type="scholarship.scholarship.fund.request",
            caller=CallerContext(actor_id="authority"),
            payload={"scholarship_id": 1, "amount": 25000},
            source_engine="scholarship",
        )
    """

    command_id: uuid.UUID
    command_type: str
    caller: CallerContext
    payload: dict
    source_engine: str

    def __post_init__(self):
        if not isinstance(self.command_id, uuid.UUID):
            raise ValueError(
                f"command_id must be UUID, got {type(self.command_id).__name__}"
            )

        # ── command_type must end with .request ───────────────
        if not self.command_type or not isinstance(self.command_type, str):
            raise ValueError("command_type must be a non-empty string.")

        if not self.command_type.endswith(".request"):
            raise ValueError(
                f"command_type '{self.command_type}' must end with "
                f"'.request' (e.g. 'scholarship.scholarship.fund.request')."
            )

        # ── command_type minimum 4 segments ───────────────────
        parts = self.command_type.split(".")
        if len(parts) < 4:
            raise ValueError(
                f"command_type '{self.command_type}' must follow "
                f"engine.domain.action.request format (minimum 4 segments)."
            )

        # ── source_engine must match first segment ────────────
        if parts[0] != self.source_engine:
            raise ValueError(
                f"command_type namespace '{parts[0]}' does not match "
                f"source_engine '{self.source_engine}'."
            )

        if not isinstance(self.caller, CallerContext):
            raise ValueError("caller must be CallerContext.")

        if not isinstance(self.payload, dict):
            raise TypeError("payload must be a dict.")

    @property
    def actor_id(self) -> str:
        return self.caller.actor_id

    @property
    def block_height(self) -> int:
        return self.caller.block_height


def build_command(
    command_type: str, payload: dict, *, caller: CallerContext,
    command_id: uuid.UUID | None = None,
) -> Command:
    return Command(
        command_id=command_id or uuid.uuid4(),
        command_type=command_type,
        caller=caller,
        payload=payload,
        source_engine=derive_source_engine(command_type),
    )


def derive_source_engine(command_type: str) -> str:
    """
    Extract source engine from command type.

    disbursement.disbursement.process.request -> disbursement
    """
    return command_type.split(".")[0]


# ══════════════════════════════════════════════════════════════
# REQUEST FIELD CHECKS (structural, not ledger rules)
# ══════════════════════════════════════════════════════════════

def require_int_field(value, field_name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{field_name} must be an integer.")


def require_str_field(value, field_name: str) -> None:
    if not isinstance(value, str):
        raise ValueError(f"{field_name} must be a string.")
