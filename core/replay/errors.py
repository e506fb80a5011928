"""
Ledger Replay - Errors
=======================
Error types for rebuilding projections from a journal.
"""


class ReplayError(Exception):
    """Base error for all replay operations."""
    pass


class ReplayChainBrokenError(ReplayError):
    """Hash-chain integrity failed, replay refused."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Replay refused, hash-chain broken: {detail}")


class ReplayIntegrityError(ReplayError):
    """Re-recorded event does not reproduce the original hash."""

    def __init__(self, sequence: int, expected_hash: str, actual_hash: str):
        self.sequence = sequence
        self.expected_hash = expected_hash
        self.actual_hash = actual_hash
        super().__init__(
            f"Replay integrity failure at event #{sequence}: "
            f"expected {expected_hash}, got {actual_hash}."
        )


class ReplayUnknownEngineError(ReplayError):
    def __init__(self, source_engine: str):
        self.source_engine = source_engine
        super().__init__(f"No projection store for engine '{source_engine}'.")


class ReplayApplyError(ReplayError):
    """An event with an intact link could not be re-recorded or applied."""

    def __init__(self, sequence: int, event_type: str, detail: str):
        self.sequence = sequence
        self.event_type = event_type
        self.detail = detail
        super().__init__(
            f"Replay failed at event #{sequence} ({event_type}): {detail}"
        )
