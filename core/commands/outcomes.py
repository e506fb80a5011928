"""
Ledger Command Layer - Command Outcome Contract
=================================================
Every Command produces exactly one Outcome.

ACCEPTED -> command executed, `value` carries the result
            (new id for creations, True for mutations).
REJECTED -> command denied, reason is mandatory, ledger untouched.

Rules:
- Exactly one outcome per command
- Outcome is immutable (frozen dataclass)
- REJECTED must contain reason (RejectionReason)
- ACCEPTED must NOT contain reason
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional
import uuid

from core.commands.rejection import RejectionReason


class CommandStatus(Enum):
    """Binary command decision. No middle ground."""
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"


@dataclass(frozen=True)
class CommandOutcome:
    """
    Deterministic result of command handling.

    Fields:
        command_id:  The command this outcome belongs to.
        status:      ACCEPTED or REJECTED.
        value:       Execution result (only meaningful when ACCEPTED).
        reason:      RejectionReason (mandatory if REJECTED, None if ACCEPTED).
    """

    command_id: uuid.UUID
    status: CommandStatus
    value: Any = None
    reason: Optional[RejectionReason] = None

    def __post_init__(self):
        if not isinstance(self.command_id, uuid.UUID):
            raise ValueError("command_id must be UUID.")

        if not isinstance(self.status, CommandStatus):
            raise ValueError(
                f"status must be CommandStatus, got {type(self.status).__name__}."
            )

        if self.status == CommandStatus.REJECTED and self.reason is None:
            raise ValueError(
                "REJECTED outcome must include a RejectionReason. "
                "No silent rejections allowed."
            )

        if self.status == CommandStatus.ACCEPTED and self.reason is not None:
            raise ValueError(
                "ACCEPTED outcome must NOT include a RejectionReason."
            )

    @classmethod
    def accepted(cls, command_id: uuid.UUID, value: Any) -> "CommandOutcome":
        return cls(command_id=command_id, status=CommandStatus.ACCEPTED, value=value)

    @classmethod
    def rejected(
        cls, command_id: uuid.UUID, reason: RejectionReason
    ) -> "CommandOutcome":
        return cls(command_id=command_id, status=CommandStatus.REJECTED, reason=reason)

    @property
    def is_accepted(self) -> bool:
        return self.status == CommandStatus.ACCEPTED

    @property
    def is_rejected(self) -> bool:
        return self.status == CommandStatus.REJECTED

    @property
    def error_code(self) -> Optional[int]:
        return None if self.reason is None else self.reason.error_code

    def to_result(self) -> dict:
        """Tagged result handed to the host: ok/value or err/code."""
        if self.is_accepted:
            return {"type": "ok", "value": self.value}
        return {"type": "err", "value": self.reason.error_code}
