"""
Ledger Replay - EventReplayer Tests
"""

from __future__ import annotations

import dataclasses

import pytest

from core.event_store.journal import EventJournal, EventStoreError
from core.event_store.registry import EventTypeRegistry
from core.projections.store import TableProjectionStore, UnknownProjectionEvent
from core.replay import (
    EventReplayer,
    ReplayApplyError,
    ReplayChainBrokenError,
    ReplayUnknownEngineError,
)

ADDED = "outcome.milestone.added.v1"


class MilestoneCounterStore(TableProjectionStore):
    projection_name = "outcome"
    table_names = ("milestones",)

    def _appliers(self):
        return {ADDED: self._on_added}

    def _on_added(self, payload):
        self.table("milestones").insert(payload["milestone_id"], payload["text"])


def _journal() -> EventJournal:
    registry = EventTypeRegistry()
    registry.register(ADDED)
    return EventJournal(registry)


def _source_events(count: int = 3):
    journal = _journal()
    for milestone_id in range(1, count + 1):
        journal.record(
            ADDED,
            {"milestone_id": milestone_id, "text": f"m{milestone_id}"},
            source_engine="outcome",
            actor_id="authority",
            block_height=milestone_id,
        )
    return journal.all_events()


class TestProjectionStore:
    def test_unknown_event_raises(self):
        store = MilestoneCounterStore()
        with pytest.raises(UnknownProjectionEvent):
            store.apply("outcome.record.added.v1", {})

    def test_unknown_table_raises(self):
        with pytest.raises(KeyError, match="no table"):
            MilestoneCounterStore().table("records")


class TestEventReplayer:
    def test_rebuilds_store_and_chain(self):
        events = _source_events()
        store = MilestoneCounterStore()
        target = _journal()

        result = EventReplayer(journal=target, stores={"outcome": store}).replay(
            events
        )

        assert result.events_processed == 3
        assert result.last_hash == events[-1].event_hash
        assert store.counts() == {"milestones": 3}
        assert store.event_count == 3
        assert target.all_events() == events

    def test_broken_chain_refused(self):
        events = list(_source_events())
        events[1] = dataclasses.replace(
            events[1], payload={"milestone_id": 2, "text": "forged"},
        )
        store = MilestoneCounterStore()

        with pytest.raises(ReplayChainBrokenError):
            EventReplayer(journal=_journal(), stores={"outcome": store}).replay(
                events
            )
        assert store.counts() == {"milestones": 0}

    def test_unknown_engine(self):
        with pytest.raises(ReplayUnknownEngineError):
            EventReplayer(journal=_journal(), stores={}).replay(_source_events(1))

    def test_target_must_be_empty(self):
        target = _journal()
        target.record(
            ADDED, {"milestone_id": 1, "text": "x"},
            source_engine="outcome", actor_id="authority", block_height=0,
        )
        replayer = EventReplayer(
            journal=target, stores={"outcome": MilestoneCounterStore()},
        )
        with pytest.raises(ValueError, match="empty"):
            replayer.replay(_source_events())

    def test_failed_apply_leaves_target_untouched(self):
        source = _journal()
        for block_height in (1, 2):
            source.record(
                ADDED, {"milestone_id": 1, "text": "same id twice"},
                source_engine="outcome", actor_id="authority",
                block_height=block_height,
            )
        store = MilestoneCounterStore()
        target = _journal()

        with pytest.raises(ReplayApplyError) as excinfo:
            EventReplayer(journal=target, stores={"outcome": store}).replay(
                source.all_events()
            )

        assert excinfo.value.sequence == 2
        assert len(target) == 0
        assert store.counts() == {"milestones": 0}
        assert store.event_count == 0

    def test_target_can_replay_after_failure(self):
        bad = _journal()
        bad.record(
            ADDED, {"milestone_id": 5, "text": "out of order"},
            source_engine="outcome", actor_id="authority", block_height=0,
        )
        store = MilestoneCounterStore()
        target = _journal()
        replayer = EventReplayer(journal=target, stores={"outcome": store})

        with pytest.raises(ReplayApplyError):
            replayer.replay(bad.all_events())
        result = replayer.replay(_source_events())

        assert result.events_processed == 3
        assert store.counts() == {"milestones": 3}


class TestAdopt:
    def test_store_adopts_same_kind_only(self):
        class OtherStore(MilestoneCounterStore):
            pass

        with pytest.raises(TypeError):
            MilestoneCounterStore().adopt(OtherStore())

    def test_journal_adopt_requires_empty_target(self):
        source = _journal()
        source.record(
            ADDED, {"milestone_id": 1, "text": "x"},
            source_engine="outcome", actor_id="authority", block_height=0,
        )
        target = _journal()
        target.adopt(source)
        assert target.all_events() == source.all_events()

        with pytest.raises(EventStoreError, match="empty"):
            target.adopt(source)
