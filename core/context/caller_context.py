"""
Ledger Context - CallerContext
==============================
Immutable caller identity threaded explicitly through every call.

The host authenticates the caller; the ledger trusts what it is given.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CallerContext:
    """
    Canonical caller context.

    block_height is the logical timestamp supplied by the host. It is
    opaque to the ledger: stored on time-stamped records, never checked.

    is_authorized_institution is an externally asserted capability and
    is only consulted when adding academic records.
    """

    actor_id: str
    block_height: int = 0
    is_authorized_institution: bool = False

    def __post_init__(self):
        if not self.actor_id or not isinstance(self.actor_id, str):
            raise ValueError("actor_id must be a non-empty string.")

        if isinstance(self.block_height, bool) or not isinstance(
            self.block_height, int
        ):
            raise ValueError("block_height must be an integer.")

        if not isinstance(self.is_authorized_institution, bool):
            raise ValueError("is_authorized_institution must be a bool.")

    def at(self, block_height: int) -> "CallerContext":
        """Same caller at another logical timestamp."""
        return CallerContext(
            actor_id=self.actor_id,
            block_height=block_height,
            is_authorized_institution=self.is_authorized_institution,
        )
