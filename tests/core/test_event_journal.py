"""
Ledger Event Store - Journal Tests
====================================
Registry enforcement, hash chaining and tamper detection.
"""

from __future__ import annotations

import dataclasses

import pytest

from core.event_store.hashing.hasher import (
    GENESIS_HASH,
    canonical_serialize,
    compute_event_hash,
    link_is_intact,
)
from core.event_store.journal import (
    EventJournal,
    ForeignEventType,
    UnregisteredEventType,
    event_from_dict,
    verify_event_chain,
)
from core.event_store.registry import EventTypeError, EventTypeRegistry

FUNDED = "scholarship.scholarship.funded.v1"
CREATED = "scholarship.scholarship.created.v1"


def _journal() -> EventJournal:
    registry = EventTypeRegistry()
    registry.register(CREATED)
    registry.register(FUNDED)
    return EventJournal(registry)


def _record(journal: EventJournal, event_type: str = FUNDED, **payload):
    return journal.record(
        event_type,
        payload or {"scholarship_id": 1, "amount": 100},
        source_engine="scholarship",
        actor_id="authority",
        block_height=3,
    )


class TestHasher:
    def test_canonical_is_key_order_independent(self):
        assert canonical_serialize({"b": 1, "a": 2}) == canonical_serialize(
            {"a": 2, "b": 1}
        )

    def test_hash_depends_on_previous(self):
        payload = {"a": 1}
        assert compute_event_hash(payload, GENESIS_HASH) != compute_event_hash(
            payload, "other"
        )

    def test_hash_is_hex_sha256(self):
        digest = compute_event_hash({"a": 1}, GENESIS_HASH)
        assert len(digest) == 64
        int(digest, 16)


class TestRegistry:
    def test_starts_empty(self):
        assert EventTypeRegistry().count() == 0

    def test_register(self):
        registry = EventTypeRegistry()
        registry.register(FUNDED)
        assert registry.is_registered(FUNDED)
        assert registry.get_all_registered() == frozenset({FUNDED})

    def test_short_type_refused(self):
        with pytest.raises(ValueError, match="engine.domain.action"):
            EventTypeRegistry().register("scholarship.funded.v1")

    def test_version_required(self):
        with pytest.raises(EventTypeError, match="version"):
            EventTypeRegistry().register("scholarship.scholarship.funded")

    def test_owner_is_namespace(self):
        registry = EventTypeRegistry()
        registry.register_engine_types("scholarship", [CREATED, FUNDED])
        assert registry.owner_of(FUNDED) == "scholarship"
        assert registry.owner_of("outcome.record.added.v1") is None
        assert registry.types_for("scholarship") == frozenset({CREATED, FUNDED})

    def test_engine_cannot_claim_foreign_type(self):
        with pytest.raises(EventTypeError, match="cannot own"):
            EventTypeRegistry().register_engine_types("outcome", [FUNDED])


class TestJournal:
    def test_first_event_links_to_genesis(self):
        journal = _journal()
        event = _record(journal)
        assert event.sequence == 1
        assert event.previous_event_hash == GENESIS_HASH
        assert journal.last_hash == event.event_hash

    def test_events_are_chained(self):
        journal = _journal()
        first = _record(journal, CREATED, scholarship_id=1)
        second = _record(journal)
        assert second.sequence == 2
        assert second.previous_event_hash == first.event_hash
        assert len(journal) == 2
        assert journal.verify_chain()

    def test_empty_journal(self):
        journal = _journal()
        assert journal.last_hash == GENESIS_HASH
        assert journal.verify_chain()

    def test_unregistered_type_refused(self):
        journal = _journal()
        with pytest.raises(UnregisteredEventType):
            _record(journal, "scholarship.scholarship.deleted.v1")
        assert len(journal) == 0

    def test_foreign_engine_refused(self):
        journal = _journal()
        with pytest.raises(ForeignEventType):
            journal.record(
                FUNDED, {"scholarship_id": 1},
                source_engine="outcome", actor_id="authority", block_height=0,
            )
        assert len(journal) == 0

    def test_payload_is_copied(self):
        journal = _journal()
        payload = {"scholarship_id": 1, "amount": 100}
        event = journal.record(
            FUNDED, payload,
            source_engine="scholarship", actor_id="authority", block_height=0,
        )
        payload["amount"] = 999
        assert event.payload["amount"] == 100

    def test_returned_payloads_are_detached(self):
        journal = _journal()
        _record(journal)

        journal.all_events()[0].payload["amount"] = 1
        journal.all_events()[0].to_dict()["payload"]["amount"] = 2
        journal.all_events()[0].hash_body()["payload"]["amount"] = 3

        assert journal.all_events()[0].payload["amount"] == 100
        assert journal.verify_chain()

    def test_recorded_event_is_detached(self):
        journal = _journal()
        event = _record(journal)
        event.payload["amount"] = 1
        assert journal.all_events()[0].payload["amount"] == 100
        assert journal.verify_chain()

    def test_tampered_payload_detected(self):
        journal = _journal()
        _record(journal, CREATED, scholarship_id=1)
        _record(journal)
        events = list(journal.all_events())
        events[0] = dataclasses.replace(
            events[0], payload={"scholarship_id": 2},
        )
        assert not verify_event_chain(events)

    def test_reordered_events_detected(self):
        journal = _journal()
        _record(journal, CREATED, scholarship_id=1)
        _record(journal)
        events = list(journal.all_events())
        assert not journal.verify_chain(reversed(events))

    def test_tampered_actor_detected(self):
        journal = _journal()
        _record(journal)
        event = dataclasses.replace(journal.all_events()[0], actor_id="mallory")
        assert not verify_event_chain([event])

    def test_dict_round_trip_keeps_hash(self):
        journal = _journal()
        event = _record(journal)
        rebuilt = event_from_dict(event.to_dict())
        assert rebuilt == event
        assert verify_event_chain([rebuilt])


class TestLinkCheck:
    def test_intact_link(self):
        digest = compute_event_hash({"a": 1}, GENESIS_HASH)
        assert link_is_intact({"a": 1}, GENESIS_HASH, digest)

    def test_broken_link(self):
        digest = compute_event_hash({"a": 1}, GENESIS_HASH)
        assert not link_is_intact({"a": 2}, GENESIS_HASH, digest)
        assert not link_is_intact({"a": 1}, "other", digest)
