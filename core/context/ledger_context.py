"""
Ledger Context - LedgerContext
==============================
Immutable engine-wide context handed to every policy.

The authority identity is fixed when the ledger is constructed.
There is no role list, no delegation and no reconfiguration.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LedgerContext:
    authority_id: str

    def __post_init__(self):
        if not self.authority_id or not isinstance(self.authority_id, str):
            raise ValueError("authority_id must be a non-empty string.")

    def is_authority(self, actor_id: str) -> bool:
        return actor_id == self.authority_id
