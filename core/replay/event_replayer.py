"""
Ledger Replay - Event Replayer
================================
Rebuilds projection stores from a recorded journal.

Replay doctrine:
- Verify the hash chain before touching anything
- Deterministic order: journal sequence ASC
- Re-record every event into a scratch journal; the rebuilt chain
  must reproduce the original hashes exactly
- Apply through the same projection path as live commands, into
  fresh stores
- The target journal and stores take over the rebuilt state only
  after every event has applied; a failed replay leaves them as they were
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Mapping

from core.event_store.journal import EventJournal, LedgerEvent, verify_event_chain
from core.projections.store import TableProjectionStore
from core.replay.errors import (
    ReplayApplyError,
    ReplayChainBrokenError,
    ReplayIntegrityError,
    ReplayUnknownEngineError,
)

logger = logging.getLogger("ledger.replay")


@dataclass(frozen=True)
class ReplayResult:
    events_processed: int
    last_hash: str


class EventReplayer:
    """
    Usage:
        replayer = EventReplayer(journal=fresh_journal, stores={
            "applicant": applicant_store,
            "scholarship": scholarship_store,
        })
        result = replayer.replay(old_journal.all_events())
    """

    def __init__(
        self,
        *,
        journal: EventJournal,
        stores: Mapping[str, TableProjectionStore],
    ):
        self._journal = journal
        self._stores = dict(stores)

    def replay(self, events: Iterable[LedgerEvent]) -> ReplayResult:
        chain = tuple(events)
        if not verify_event_chain(chain):
            raise ReplayChainBrokenError(
                f"{len(chain)} events failed verification"
            )

        if len(self._journal) != 0:
            raise ValueError("Replay target journal must be empty.")

        scratch_journal = EventJournal(self._journal.registry)
        scratch_stores = {
            engine: type(store)() for engine, store in self._stores.items()
        }

        for event in chain:
            store = scratch_stores.get(event.source_engine)
            if store is None:
                raise ReplayUnknownEngineError(event.source_engine)

            try:
                rebuilt = scratch_journal.record(
                    event.event_type,
                    event.payload,
                    source_engine=event.source_engine,
                    actor_id=event.actor_id,
                    block_height=event.block_height,
                )
            except Exception as exc:
                logger.warning(
                    f"Replay aborted at event #{event.sequence}: {exc!r}"
                )
                raise ReplayApplyError(
                    event.sequence, event.event_type, repr(exc)
                ) from exc
            if rebuilt.event_hash != event.event_hash:
                raise ReplayIntegrityError(
                    event.sequence, event.event_hash, rebuilt.event_hash
                )
            try:
                store.apply(rebuilt.event_type, rebuilt.payload)
            except Exception as exc:
                logger.warning(
                    f"Replay aborted at event #{event.sequence}: {exc!r}"
                )
                raise ReplayApplyError(
                    event.sequence, event.event_type, repr(exc)
                ) from exc

        self._journal.adopt(scratch_journal)
        for engine, store in self._stores.items():
            store.adopt(scratch_stores[engine])

        logger.info(f"Replay complete: {len(chain)} events")
        return ReplayResult(
            events_processed=len(chain),
            last_hash=self._journal.last_hash,
        )
