"""
Ledger Event Store - Hash-Chained Journal
===========================================
Append-only, in-memory record of every accepted command's event.

Each event links to its predecessor:
    event_hash = SHA256(canonical_json(body) + previous_event_hash)

The journal never records rejections, never reorders and never
rewrites. verify_chain() recomputes every link; a mismatch means the
journal was tampered with or corrupted.
"""

from __future__ import annotations

import copy
import logging
import threading
from dataclasses import dataclass, replace
from typing import Any, Iterable, Optional

from core.event_store.hashing.hasher import (
    GENESIS_HASH,
    compute_event_hash,
    link_is_intact,
)
from core.event_store.registry import EventTypeRegistry

logger = logging.getLogger("ledger.events")


class EventStoreError(Exception):
    """Base error for journal operations."""
    pass


class UnregisteredEventType(EventStoreError):
    def __init__(self, event_type: str):
        self.event_type = event_type
        super().__init__(f"Event type '{event_type}' is not registered.")


class ForeignEventType(EventStoreError):
    def __init__(self, event_type: str, source_engine: str):
        self.event_type = event_type
        self.source_engine = source_engine
        super().__init__(
            f"Engine '{source_engine}' cannot record '{event_type}'."
        )


@dataclass(frozen=True)
class LedgerEvent:
    sequence: int
    event_type: str
    source_engine: str
    actor_id: str
    block_height: int
    payload: dict
    previous_event_hash: str
    event_hash: str

    def hash_body(self) -> dict:
        return _hash_body(
            sequence=self.sequence,
            event_type=self.event_type,
            source_engine=self.source_engine,
            actor_id=self.actor_id,
            block_height=self.block_height,
            payload=copy.deepcopy(self.payload),
        )

    def to_dict(self) -> dict:
        body = self.hash_body()
        body["previous_event_hash"] = self.previous_event_hash
        body["event_hash"] = self.event_hash
        return body


def _hash_body(*, sequence, event_type, source_engine, actor_id,
               block_height, payload) -> dict:
    return {
        "sequence": sequence,
        "event_type": event_type,
        "source_engine": source_engine,
        "actor_id": actor_id,
        "block_height": block_height,
        "payload": payload,
    }


class EventJournal:
    """
    Usage:
        journal = EventJournal(registry)
        event = journal.record(
            "scholarship.scholarship.funded.v1",
            {"scholarship_id": 1, "amount": 25000},
            source_engine="scholarship",
            actor_id="authority",
            block_height=7,
        )
        journal.verify_chain()  # True
    """

    def __init__(self, registry: EventTypeRegistry):
        self._registry = registry
        self._events: list[LedgerEvent] = []
        self._lock = threading.Lock()

    @property
    def registry(self) -> EventTypeRegistry:
        return self._registry

    def record(
        self,
        event_type: str,
        payload: dict,
        *,
        source_engine: str,
        actor_id: str,
        block_height: int,
    ) -> LedgerEvent:
        owner = self._registry.owner_of(event_type)
        if owner is None:
            raise UnregisteredEventType(event_type)
        if owner != source_engine:
            raise ForeignEventType(event_type, source_engine)

        with self._lock:
            previous = self._events[-1].event_hash if self._events else GENESIS_HASH
            sequence = len(self._events) + 1
            stored_payload = copy.deepcopy(payload)
            body = _hash_body(
                sequence=sequence,
                event_type=event_type,
                source_engine=source_engine,
                actor_id=actor_id,
                block_height=block_height,
                payload=stored_payload,
            )
            event = LedgerEvent(
                sequence=sequence,
                event_type=event_type,
                source_engine=source_engine,
                actor_id=actor_id,
                block_height=block_height,
                payload=stored_payload,
                previous_event_hash=previous,
                event_hash=compute_event_hash(body, previous),
            )
            self._events.append(event)

        logger.debug(f"Event #{sequence} recorded: {event_type}")
        return replace(event, payload=copy.deepcopy(stored_payload))

    def all_events(self) -> tuple[LedgerEvent, ...]:
        with self._lock:
            events = tuple(self._events)
        return tuple(
            replace(event, payload=copy.deepcopy(event.payload))
            for event in events
        )

    def adopt(self, other: EventJournal) -> None:
        """Take over the events of a journal built off to the side."""
        with other._lock:
            events = list(other._events)
        if not verify_event_chain(events):
            raise EventStoreError("Cannot adopt a broken chain.")
        with self._lock:
            if self._events:
                raise EventStoreError("Only an empty journal can adopt events.")
            self._events = events

    @property
    def last_hash(self) -> str:
        with self._lock:
            return self._events[-1].event_hash if self._events else GENESIS_HASH

    def verify_chain(self, events: Optional[Iterable[LedgerEvent]] = None) -> bool:
        """Recompute every link; False on the first broken one."""
        chain = self.all_events() if events is None else tuple(events)
        return verify_event_chain(chain)

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)


def verify_event_chain(events: Iterable[LedgerEvent]) -> bool:
    previous = GENESIS_HASH
    for expected_sequence, event in enumerate(events, start=1):
        if event.sequence != expected_sequence:
            logger.warning(
                f"Journal sequence gap: expected {expected_sequence}, "
                f"got {event.sequence}"
            )
            return False
        if event.previous_event_hash != previous:
            logger.warning(f"Journal chain broken at event #{event.sequence}")
            return False
        if not link_is_intact(event.hash_body(), previous, event.event_hash):
            logger.warning(f"Journal hash mismatch at event #{event.sequence}")
            return False
        previous = event.event_hash
    return True


def event_from_dict(data: dict[str, Any]) -> LedgerEvent:
    """Rebuild a LedgerEvent from LedgerEvent.to_dict() output."""
    return LedgerEvent(
        sequence=data["sequence"],
        event_type=data["event_type"],
        source_engine=data["source_engine"],
        actor_id=data["actor_id"],
        block_height=data["block_height"],
        payload=dict(data["payload"]),
        previous_event_hash=data["previous_event_hash"],
        event_hash=data["event_hash"],
    )
