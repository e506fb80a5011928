"""
Ledger Scholarship Engine - Service Layer
===========================================
remaining_funds starts equal to total_amount and only ever grows
through funding. Disbursements reference applications, not
scholarships, so nothing in the ledger debits it.
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
from engines.scholarship.commands import (
    SCHOLARSHIP_COMMAND_TYPES,
    AUTHORIZATION_MODES,
    SCHOLARSHIP_ACTIVATE_REQUEST,
    SCHOLARSHIP_CREATE_REQUEST,
    SCHOLARSHIP_DEACTIVATE_REQUEST,
    SCHOLARSHIP_FUND_REQUEST,
)
from engines.scholarship.events import (
    SCHOLARSHIP_EVENT_TYPES,
    SCHOLARSHIP_ACTIVATED_V1,
    SCHOLARSHIP_CREATED_V1,
    SCHOLARSHIP_DEACTIVATED_V1,
    SCHOLARSHIP_FUNDED_V1,
    build_scholarship_activated_payload,
    build_scholarship_created_payload,
    build_scholarship_deactivated_payload,
    build_scholarship_funded_payload,
)
from engines.scholarship.policies import (
    award_must_not_exceed_total_policy,
    scholarship_must_exist_policy,
)


@dataclass(frozen=True)
class Scholarship:
    scholarship_id: int
    name: str
    description: str
    total_amount: int
    award_amount: int
    remaining_funds: int
    criteria_gpa: int
    criteria_field: str
    active: bool = True

    def to_dict(self) -> dict:
        return dataclasses.asdict(self)


class ScholarshipProjectionStore(TableProjectionStore):
    projection_name = "scholarship"
    table_names = ("scholarships",)

    def _appliers(self) -> Dict[str, Any]:
        return {
            SCHOLARSHIP_CREATED_V1: self._on_created,
            SCHOLARSHIP_FUNDED_V1: self._on_funded,
            SCHOLARSHIP_ACTIVATED_V1: self._on_active_changed,
            SCHOLARSHIP_DEACTIVATED_V1: self._on_active_changed,
        }

    def _on_created(self, payload: dict) -> None:
        scholarship_id = payload["scholarship_id"]
        self.table("scholarships").insert(scholarship_id, Scholarship(
            scholarship_id=scholarship_id,
            name=payload["name"],
            description=payload["description"],
            total_amount=payload["total_amount"],
            award_amount=payload["award_amount"],
            remaining_funds=payload["remaining_funds"],
            criteria_gpa=payload["criteria_gpa"],
            criteria_field=payload["criteria_field"],
        ))

    def _on_funded(self, payload: dict) -> None:
        table = self.table("scholarships")
        current = table.get(payload["scholarship_id"])
        amount = payload["amount"]
        table.replace(current.scholarship_id, dataclasses.replace(
            current,
            total_amount=current.total_amount + amount,
            remaining_funds=current.remaining_funds + amount,
        ))

    def _on_active_changed(self, payload: dict) -> None:
        table = self.table("scholarships")
        current = table.get(payload["scholarship_id"])
        table.replace(
            current.scholarship_id,
            dataclasses.replace(current, active=payload["active"]),
        )

    def get_scholarship(self, scholarship_id: int) -> Optional[Scholarship]:
        return self.table("scholarships").get(scholarship_id)

    def get_scholarship_count(self) -> int:
        return self.table("scholarships").count()


class ScholarshipService(LedgerEngineService):
    engine_name = "scholarship"
    command_types = SCHOLARSHIP_COMMAND_TYPES
    event_types = SCHOLARSHIP_EVENT_TYPES
    command_to_event = {
        SCHOLARSHIP_CREATE_REQUEST: SCHOLARSHIP_CREATED_V1,
        SCHOLARSHIP_FUND_REQUEST: SCHOLARSHIP_FUNDED_V1,
        SCHOLARSHIP_ACTIVATE_REQUEST: SCHOLARSHIP_ACTIVATED_V1,
        SCHOLARSHIP_DEACTIVATE_REQUEST: SCHOLARSHIP_DEACTIVATED_V1,
    }
    payload_builders = {
        SCHOLARSHIP_CREATE_REQUEST: build_scholarship_created_payload,
        SCHOLARSHIP_FUND_REQUEST: build_scholarship_funded_payload,
        SCHOLARSHIP_ACTIVATE_REQUEST: build_scholarship_activated_payload,
        SCHOLARSHIP_DEACTIVATE_REQUEST: build_scholarship_deactivated_payload,
    }
    creation_tables = {
        SCHOLARSHIP_CREATE_REQUEST: "scholarships",
    }

    def __init__(self, *, command_bus, journal,
                 projection_store: ScholarshipProjectionStore | None = None):
        super().__init__(
            command_bus=command_bus,
            journal=journal,
            projection_store=projection_store or ScholarshipProjectionStore(),
        )

    def _register_policies(self, dispatcher: CommandDispatcher) -> None:
        scholarship_exists = partial(
            scholarship_must_exist_policy,
            scholarship_lookup=self._projection_store.get_scholarship,
        )

        self._register_chain(
            dispatcher, SCHOLARSHIP_CREATE_REQUEST,
            resolve_authorization_guard(AUTHORIZATION_MODES[SCHOLARSHIP_CREATE_REQUEST]),
            award_must_not_exceed_total_policy,
        )
        for command_type in (
            SCHOLARSHIP_FUND_REQUEST,
            SCHOLARSHIP_ACTIVATE_REQUEST,
            SCHOLARSHIP_DEACTIVATE_REQUEST,
        ):
            self._register_chain(
                dispatcher, command_type,
                scholarship_exists,
                resolve_authorization_guard(AUTHORIZATION_MODES[command_type]),
            )

    @property
    def projection_store(self) -> ScholarshipProjectionStore:
        return self._projection_store
