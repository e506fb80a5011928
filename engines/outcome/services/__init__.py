"""
Ledger Outcome Engine - Service Layer
=======================================
Tracks how recipients progress once funded: per-semester academic
records and free-form milestones.

Records may be filed by the authority or by a caller flagged as an
authorized institution. Marking a milestone achieved refreshes its
timestamp to the caller's block height, including on repeat calls.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from functools import partial
from typing import Any, Dict, Optional

from core.commands.dispatcher import CommandDispatcher
from core.engines.service import LedgerEngineService
from core.identity.policy import resolve_authorization_guard
from core.projections.store import TableProjectionStore
from engines.outcome.commands import (
    OUTCOME_COMMAND_TYPES,
    AUTHORIZATION_MODES,
    MILESTONE_ACHIEVE_REQUEST,
    MILESTONE_ADD_REQUEST,
    RECORD_ADD_REQUEST,
    RECORD_STATUS_UPDATE_REQUEST,
)
from engines.outcome.events import (
    OUTCOME_EVENT_TYPES,
    ACADEMIC_RECORD_ADDED_V1,
    ACADEMIC_RECORD_STATUS_UPDATED_V1,
    MILESTONE_ACHIEVED_V1,
    MILESTONE_ADDED_V1,
    build_milestone_achieved_payload,
    build_milestone_added_payload,
    build_record_added_payload,
    build_record_status_updated_payload,
)
from engines.outcome.policies import (
    milestone_must_exist_policy,
    record_must_exist_policy,
)


@dataclass(frozen=True)
class AcademicRecord:
    record_id: int
    applicant_id: int
    semester: str
    gpa: int
    credits_completed: int
    status: str
    timestamp: int

    def to_dict(self) -> dict:
        return dataclasses.asdict(self)


@dataclass(frozen=True)
class Milestone:
    milestone_id: int
    applicant_id: int
    description: str
    achieved: bool
    timestamp: int

    def to_dict(self) -> dict:
        return dataclasses.asdict(self)


class OutcomeProjectionStore(TableProjectionStore):
    projection_name = "outcome"
    table_names = ("academic_records", "milestones")

    def _appliers(self) -> Dict[str, Any]:
        return {
            ACADEMIC_RECORD_ADDED_V1: self._on_record_added,
            ACADEMIC_RECORD_STATUS_UPDATED_V1: self._on_record_status_updated,
            MILESTONE_ADDED_V1: self._on_milestone_added,
            MILESTONE_ACHIEVED_V1: self._on_milestone_achieved,
        }

    def _on_record_added(self, payload: dict) -> None:
        record_id = payload["record_id"]
        self.table("academic_records").insert(record_id, AcademicRecord(
            record_id=record_id,
            applicant_id=payload["applicant_id"],
            semester=payload["semester"],
            gpa=payload["gpa"],
            credits_completed=payload["credits_completed"],
            status=payload["status"],
            timestamp=payload["timestamp"],
        ))

    def _on_record_status_updated(self, payload: dict) -> None:
        table = self.table("academic_records")
        current = table.get(payload["record_id"])
        table.replace(
            current.record_id,
            dataclasses.replace(current, status=payload["status"]),
        )

    def _on_milestone_added(self, payload: dict) -> None:
        milestone_id = payload["milestone_id"]
        self.table("milestones").insert(milestone_id, Milestone(
            milestone_id=milestone_id,
            applicant_id=payload["applicant_id"],
            description=payload["description"],
            achieved=payload["achieved"],
            timestamp=payload["timestamp"],
        ))

    def _on_milestone_achieved(self, payload: dict) -> None:
        table = self.table("milestones")
        current = table.get(payload["milestone_id"])
        table.replace(
            current.milestone_id,
            dataclasses.replace(
                current, achieved=True, timestamp=payload["timestamp"],
            ),
        )

    def get_academic_record(self, record_id: int) -> Optional[AcademicRecord]:
        return self.table("academic_records").get(record_id)

    def get_milestone(self, milestone_id: int) -> Optional[Milestone]:
        return self.table("milestones").get(milestone_id)

    def get_record_count(self) -> int:
        return self.table("academic_records").count()

    def get_milestone_count(self) -> int:
        return self.table("milestones").count()


class OutcomeService(LedgerEngineService):
    engine_name = "outcome"
    command_types = OUTCOME_COMMAND_TYPES
    event_types = OUTCOME_EVENT_TYPES
    command_to_event = {
        RECORD_ADD_REQUEST: ACADEMIC_RECORD_ADDED_V1,
        RECORD_STATUS_UPDATE_REQUEST: ACADEMIC_RECORD_STATUS_UPDATED_V1,
        MILESTONE_ADD_REQUEST: MILESTONE_ADDED_V1,
        MILESTONE_ACHIEVE_REQUEST: MILESTONE_ACHIEVED_V1,
    }
    payload_builders = {
        RECORD_ADD_REQUEST: build_record_added_payload,
        RECORD_STATUS_UPDATE_REQUEST: build_record_status_updated_payload,
        MILESTONE_ADD_REQUEST: build_milestone_added_payload,
        MILESTONE_ACHIEVE_REQUEST: build_milestone_achieved_payload,
    }
    creation_tables = {
        RECORD_ADD_REQUEST: "academic_records",
        MILESTONE_ADD_REQUEST: "milestones",
    }

    def __init__(self, *, command_bus, journal,
                 projection_store: OutcomeProjectionStore | None = None):
        super().__init__(
            command_bus=command_bus,
            journal=journal,
            projection_store=projection_store or OutcomeProjectionStore(),
        )

    def _register_policies(self, dispatcher: CommandDispatcher) -> None:
        store = self._projection_store

        def guard(command_type):
            return resolve_authorization_guard(AUTHORIZATION_MODES[command_type])

        self._register_chain(
            dispatcher, RECORD_ADD_REQUEST,
            guard(RECORD_ADD_REQUEST),
        )
        self._register_chain(
            dispatcher, RECORD_STATUS_UPDATE_REQUEST,
            partial(record_must_exist_policy,
                    record_lookup=store.get_academic_record),
            guard(RECORD_STATUS_UPDATE_REQUEST),
        )
        self._register_chain(
            dispatcher, MILESTONE_ADD_REQUEST,
            guard(MILESTONE_ADD_REQUEST),
        )
        self._register_chain(
            dispatcher, MILESTONE_ACHIEVE_REQUEST,
            partial(milestone_must_exist_policy,
                    milestone_lookup=store.get_milestone),
            guard(MILESTONE_ACHIEVE_REQUEST),
        )

    @property
    def projection_store(self) -> OutcomeProjectionStore:
        return self._projection_store
