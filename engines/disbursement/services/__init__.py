"""
Ledger Disbursement Engine - Service Layer
============================================
Institutions are registered verified. Disbursements start pending and
are flagged completed or cancelled by the authority. Neither flag is
guarded against repetition or against flipping a terminal status.
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
from engines.disbursement.commands import (
    DISBURSEMENT_COMMAND_TYPES,
    AUTHORIZATION_MODES,
    DISBURSEMENT_CANCEL_REQUEST,
    DISBURSEMENT_CREATE_REQUEST,
    DISBURSEMENT_PROCESS_REQUEST,
    INSTITUTION_REGISTER_REQUEST,
)
from engines.disbursement.events import (
    DISBURSEMENT_EVENT_TYPES,
    DISBURSEMENT_CANCELLED_V1,
    DISBURSEMENT_CREATED_V1,
    DISBURSEMENT_PROCESSED_V1,
    INSTITUTION_REGISTERED_V1,
    build_disbursement_cancelled_payload,
    build_disbursement_created_payload,
    build_disbursement_processed_payload,
    build_institution_registered_payload,
)
from engines.disbursement.policies import (
    disbursement_institution_must_exist_policy,
    disbursement_must_exist_policy,
    institution_must_exist_policy,
)


@dataclass(frozen=True)
class Institution:
    institution_id: int
    name: str
    principal: str
    verified: bool = True

    def to_dict(self) -> dict:
        return dataclasses.asdict(self)


@dataclass(frozen=True)
class Disbursement:
    disbursement_id: int
    application_id: int
    institution_id: int
    amount: int
    status: str
    timestamp: int

    def to_dict(self) -> dict:
        return dataclasses.asdict(self)


class DisbursementProjectionStore(TableProjectionStore):
    projection_name = "disbursement"
    table_names = ("institutions", "disbursements")

    def _appliers(self) -> Dict[str, Any]:
        return {
            INSTITUTION_REGISTERED_V1: self._on_institution_registered,
            DISBURSEMENT_CREATED_V1: self._on_disbursement_created,
            DISBURSEMENT_PROCESSED_V1: self._on_disbursement_status,
            DISBURSEMENT_CANCELLED_V1: self._on_disbursement_status,
        }

    def _on_institution_registered(self, payload: dict) -> None:
        institution_id = payload["institution_id"]
        self.table("institutions").insert(institution_id, Institution(
            institution_id=institution_id,
            name=payload["name"],
            principal=payload["principal"],
            verified=payload["verified"],
        ))

    def _on_disbursement_created(self, payload: dict) -> None:
        disbursement_id = payload["disbursement_id"]
        self.table("disbursements").insert(disbursement_id, Disbursement(
            disbursement_id=disbursement_id,
            application_id=payload["application_id"],
            institution_id=payload["institution_id"],
            amount=payload["amount"],
            status=payload["status"],
            timestamp=payload["timestamp"],
        ))

    def _on_disbursement_status(self, payload: dict) -> None:
        table = self.table("disbursements")
        current = table.get(payload["disbursement_id"])
        table.replace(
            current.disbursement_id,
            dataclasses.replace(current, status=payload["status"]),
        )

    def get_institution(self, institution_id: int) -> Optional[Institution]:
        return self.table("institutions").get(institution_id)

    def get_disbursement(self, disbursement_id: int) -> Optional[Disbursement]:
        return self.table("disbursements").get(disbursement_id)

    def get_institution_count(self) -> int:
        return self.table("institutions").count()

    def get_disbursement_count(self) -> int:
        return self.table("disbursements").count()


class DisbursementService(LedgerEngineService):
    engine_name = "disbursement"
    command_types = DISBURSEMENT_COMMAND_TYPES
    event_types = DISBURSEMENT_EVENT_TYPES
    command_to_event = {
        INSTITUTION_REGISTER_REQUEST: INSTITUTION_REGISTERED_V1,
        DISBURSEMENT_CREATE_REQUEST: DISBURSEMENT_CREATED_V1,
        DISBURSEMENT_PROCESS_REQUEST: DISBURSEMENT_PROCESSED_V1,
        DISBURSEMENT_CANCEL_REQUEST: DISBURSEMENT_CANCELLED_V1,
    }
    payload_builders = {
        INSTITUTION_REGISTER_REQUEST: build_institution_registered_payload,
        DISBURSEMENT_CREATE_REQUEST: build_disbursement_created_payload,
        DISBURSEMENT_PROCESS_REQUEST: build_disbursement_processed_payload,
        DISBURSEMENT_CANCEL_REQUEST: build_disbursement_cancelled_payload,
    }
    creation_tables = {
        INSTITUTION_REGISTER_REQUEST: "institutions",
        DISBURSEMENT_CREATE_REQUEST: "disbursements",
    }

    def __init__(self, *, command_bus, journal,
                 projection_store: DisbursementProjectionStore | None = None):
        super().__init__(
            command_bus=command_bus,
            journal=journal,
            projection_store=projection_store or DisbursementProjectionStore(),
        )

    def _register_policies(self, dispatcher: CommandDispatcher) -> None:
        store = self._projection_store
        disbursement_exists = partial(
            disbursement_must_exist_policy,
            disbursement_lookup=store.get_disbursement,
        )

        def guard(command_type):
            return resolve_authorization_guard(AUTHORIZATION_MODES[command_type])

        self._register_chain(
            dispatcher, INSTITUTION_REGISTER_REQUEST,
            guard(INSTITUTION_REGISTER_REQUEST),
        )
        self._register_chain(
            dispatcher, DISBURSEMENT_CREATE_REQUEST,
            partial(
                institution_must_exist_policy,
                institution_lookup=store.get_institution,
            ),
            guard(DISBURSEMENT_CREATE_REQUEST),
        )
        self._register_chain(
            dispatcher, DISBURSEMENT_PROCESS_REQUEST,
            disbursement_exists,
            partial(
                disbursement_institution_must_exist_policy,
                disbursement_lookup=store.get_disbursement,
                institution_lookup=store.get_institution,
            ),
            guard(DISBURSEMENT_PROCESS_REQUEST),
        )
        self._register_chain(
            dispatcher, DISBURSEMENT_CANCEL_REQUEST,
            disbursement_exists,
            guard(DISBURSEMENT_CANCEL_REQUEST),
        )

    @property
    def projection_store(self) -> DisbursementProjectionStore:
        return self._projection_store
