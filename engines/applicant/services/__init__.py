"""
Ledger Applicant Engine - Service Layer
=========================================
Applicants register themselves, apply to scholarships and are
verified by the authority. The authority alone moves application
status, to any value it chooses.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from functools import partial
from typing import Any, Dict, Optional

from core.commands.base import Command
from core.commands.dispatcher import CommandDispatcher
from core.engines.service import LedgerEngineService
from core.identity.policy import resolve_authorization_guard
from core.projections.store import TableProjectionStore
from engines.applicant.commands import (
    APPLICANT_COMMAND_TYPES,
    APPLICANT_REGISTER_REQUEST,
    APPLICANT_VERIFY_REQUEST,
    APPLICATION_STATUS_UPDATE_REQUEST,
    APPLICATION_SUBMIT_REQUEST,
    AUTHORIZATION_MODES,
)
from engines.applicant.events import (
    APPLICANT_EVENT_TYPES,
    APPLICANT_REGISTERED_V1,
    APPLICANT_VERIFIED_V1,
    APPLICATION_STATUS_UPDATED_V1,
    APPLICATION_SUBMITTED_V1,
    build_applicant_registered_payload,
    build_applicant_verified_payload,
    build_application_status_updated_payload,
    build_application_submitted_payload,
)
from engines.applicant.policies import (
    applicant_must_exist_policy,
    applicant_must_not_be_verified_policy,
    application_must_exist_policy,
)


# ── Data Records ──────────────────────────────────────────────

@dataclass(frozen=True)
class Applicant:
    applicant_id: int
    principal: str
    name: str
    institution: str
    gpa: int
    field_of_study: str
    verified: bool = False

    def to_dict(self) -> dict:
        return dataclasses.asdict(self)


@dataclass(frozen=True)
class Application:
    application_id: int
    applicant_id: int
    scholarship_id: int
    status: str
    timestamp: int

    def to_dict(self) -> dict:
        return dataclasses.asdict(self)


# ── Projection Store ──────────────────────────────────────────

class ApplicantProjectionStore(TableProjectionStore):
    projection_name = "applicant"
    table_names = ("applicants", "applications")

    def _appliers(self) -> Dict[str, Any]:
        return {
            APPLICANT_REGISTERED_V1: self._on_applicant_registered,
            APPLICANT_VERIFIED_V1: self._on_applicant_verified,
            APPLICATION_SUBMITTED_V1: self._on_application_submitted,
            APPLICATION_STATUS_UPDATED_V1: self._on_application_status_updated,
        }

    def _on_applicant_registered(self, payload: dict) -> None:
        applicant_id = payload["applicant_id"]
        self.table("applicants").insert(applicant_id, Applicant(
            applicant_id=applicant_id,
            principal=payload["principal"],
            name=payload["name"],
            institution=payload["institution"],
            gpa=payload["gpa"],
            field_of_study=payload["field_of_study"],
        ))

    def _on_applicant_verified(self, payload: dict) -> None:
        table = self.table("applicants")
        applicant_id = payload["applicant_id"]
        table.replace(
            applicant_id,
            dataclasses.replace(table.get(applicant_id), verified=True),
        )

    def _on_application_submitted(self, payload: dict) -> None:
        application_id = payload["application_id"]
        self.table("applications").insert(application_id, Application(
            application_id=application_id,
            applicant_id=payload["applicant_id"],
            scholarship_id=payload["scholarship_id"],
            status=payload["status"],
            timestamp=payload["timestamp"],
        ))

    def _on_application_status_updated(self, payload: dict) -> None:
        table = self.table("applications")
        application_id = payload["application_id"]
        table.replace(
            application_id,
            dataclasses.replace(table.get(application_id), status=payload["status"]),
        )

    # ── Queries ───────────────────────────────────────────────

    def get_applicant(self, applicant_id: int) -> Optional[Applicant]:
        return self.table("applicants").get(applicant_id)

    def get_application(self, application_id: int) -> Optional[Application]:
        return self.table("applications").get(application_id)

    def get_applicant_count(self) -> int:
        return self.table("applicants").count()

    def get_application_count(self) -> int:
        return self.table("applications").count()


# ── Service ───────────────────────────────────────────────────

class ApplicantService(LedgerEngineService):
    engine_name = "applicant"
    command_types = APPLICANT_COMMAND_TYPES
    event_types = APPLICANT_EVENT_TYPES
    command_to_event = {
        APPLICANT_REGISTER_REQUEST: APPLICANT_REGISTERED_V1,
        APPLICANT_VERIFY_REQUEST: APPLICANT_VERIFIED_V1,
        APPLICATION_SUBMIT_REQUEST: APPLICATION_SUBMITTED_V1,
        APPLICATION_STATUS_UPDATE_REQUEST: APPLICATION_STATUS_UPDATED_V1,
    }
    payload_builders = {
        APPLICANT_REGISTER_REQUEST: build_applicant_registered_payload,
        APPLICANT_VERIFY_REQUEST: build_applicant_verified_payload,
        APPLICATION_SUBMIT_REQUEST: build_application_submitted_payload,
        APPLICATION_STATUS_UPDATE_REQUEST: build_application_status_updated_payload,
    }
    creation_tables = {
        APPLICANT_REGISTER_REQUEST: "applicants",
        APPLICATION_SUBMIT_REQUEST: "applications",
    }

    def __init__(self, *, command_bus, journal,
                 projection_store: ApplicantProjectionStore | None = None):
        super().__init__(
            command_bus=command_bus,
            journal=journal,
            projection_store=projection_store or ApplicantProjectionStore(),
        )

    def _applicant_owner(self, command: Command) -> Optional[str]:
        applicant = self._projection_store.get_applicant(
            command.payload.get("applicant_id")
        )
        return None if applicant is None else applicant.principal

    def _register_policies(self, dispatcher: CommandDispatcher) -> None:
        store = self._projection_store
        applicant_exists = partial(
            applicant_must_exist_policy, applicant_lookup=store.get_applicant,
        )

        def guard(command_type):
            return resolve_authorization_guard(
                AUTHORIZATION_MODES[command_type],
                owner_lookup=self._applicant_owner,
            )

        self._register_chain(
            dispatcher, APPLICANT_REGISTER_REQUEST,
            guard(APPLICANT_REGISTER_REQUEST),
        )
        self._register_chain(
            dispatcher, APPLICATION_SUBMIT_REQUEST,
            applicant_exists,
            guard(APPLICATION_SUBMIT_REQUEST),
        )
        self._register_chain(
            dispatcher, APPLICANT_VERIFY_REQUEST,
            applicant_exists,
            guard(APPLICANT_VERIFY_REQUEST),
            partial(
                applicant_must_not_be_verified_policy,
                applicant_lookup=store.get_applicant,
            ),
        )
        self._register_chain(
            dispatcher, APPLICATION_STATUS_UPDATE_REQUEST,
            partial(
                application_must_exist_policy,
                application_lookup=store.get_application,
            ),
            guard(APPLICATION_STATUS_UPDATE_REQUEST),
        )

    @property
    def projection_store(self) -> ApplicantProjectionStore:
        return self._projection_store
