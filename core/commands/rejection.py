"""
Ledger Command Layer - Rejection Model
========================================
Structured rejection reasons for denied commands.

A rejection is returned to the caller as a value. It never mutates
ledger state and it is never raised.

Every rejection must be:
- Deterministic (same ledger state + same command -> same rejection)
- Machine-readable (code + integer error_code)
- Human-readable (message)
"""

from __future__ import annotations

from dataclasses import dataclass


# ══════════════════════════════════════════════════════════════
# REJECTION REASON (frozen explanation structure)
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class RejectionReason:
    """
    Structured reason for command rejection.

    Fields:
        code:        Symbolic rejection code (e.g. 'APPLICANT_NOT_FOUND').
        error_code:  Stable integer kind returned to the host.
        message:     Human-readable explanation.
        policy_name: Name of the policy that caused rejection.
    """

    code: str
    error_code: int
    message: str
    policy_name: str

    def __post_init__(self):
        if not self.code or not isinstance(self.code, str):
            raise ValueError("code must be a non-empty string.")

        if isinstance(self.error_code, bool) or not isinstance(self.error_code, int):
            raise ValueError("error_code must be an integer.")

        if not self.message or not isinstance(self.message, str):
            raise ValueError("message must be a non-empty string.")

        if not self.policy_name or not isinstance(self.policy_name, str):
            raise ValueError("policy_name must be a non-empty string.")

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "error_code": self.error_code,
            "message": self.message,
            "policy_name": self.policy_name,
        }


# ══════════════════════════════════════════════════════════════
# STANDARD REJECTION CODES
# ══════════════════════════════════════════════════════════════

class ReasonCode:
    """
    Rejection codes shared by every sub-ledger.

    Engine-specific NOT_FOUND kinds live with the engine policies;
    their integer values collide across engines on purpose, so the
    symbolic code is what tells them apart.
    """

    NOT_AUTHORIZED = "NOT_AUTHORIZED"


ERR_NOT_AUTHORIZED = 100
