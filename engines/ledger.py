"""
Ledger - Scholarship Ledger Facade
====================================
One engine instance holding all four sub-ledgers.

Construction wires a single dispatcher, bus and journal shared by the
applicant, scholarship, disbursement and outcome services. Every
mutating method takes the caller explicitly and returns a
CommandOutcome; reads take no caller and never fail.

Usage:
    ledger = ScholarshipLedger("authority")
    student = CallerContext("alice", block_height=10)
    outcome = ledger.register_applicant(student, "Alice", "MIT", 380, "CS")
    outcome.to_result()   # {"type": "ok", "value": 1}
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from core.commands.bus import CommandBus
from core.commands.dispatcher import CommandDispatcher
from core.commands.outcomes import CommandOutcome
from core.context.caller_context import CallerContext
from core.context.ledger_context import LedgerContext
from core.event_store.journal import EventJournal, LedgerEvent
from core.event_store.registry import EventTypeRegistry
from core.replay.event_replayer import EventReplayer, ReplayResult
from engines.applicant.commands import (
    ApplyForScholarshipRequest,
    RegisterApplicantRequest,
    UpdateApplicationStatusRequest,
    VerifyApplicantRequest,
)
from engines.applicant.services import Applicant, ApplicantService, Application
from engines.disbursement.commands import (
    CancelDisbursementRequest,
    CreateDisbursementRequest,
    ProcessDisbursementRequest,
    RegisterInstitutionRequest,
)
from engines.disbursement.services import (
    Disbursement,
    DisbursementService,
    Institution,
)
from engines.outcome.commands import (
    AddAcademicRecordRequest,
    AddMilestoneRequest,
    MarkMilestoneAchievedRequest,
    UpdateRecordStatusRequest,
)
from engines.outcome.services import AcademicRecord, Milestone, OutcomeService
from engines.scholarship.commands import (
    CreateScholarshipRequest,
    FundScholarshipRequest,
    SetScholarshipActiveRequest,
)
from engines.scholarship.services import Scholarship, ScholarshipService

logger = logging.getLogger("ledger.engines")


class ScholarshipLedger:

    def __init__(self, authority_id: str):
        self._context = LedgerContext(authority_id=authority_id)
        self._dispatcher = CommandDispatcher(self._context)
        self._bus = CommandBus(self._dispatcher)
        self._journal = EventJournal(EventTypeRegistry())

        services = dict(
            command_bus=self._bus, journal=self._journal,
        )
        self._applicants = ApplicantService(**services)
        self._scholarships = ScholarshipService(**services)
        self._disbursements = DisbursementService(**services)
        self._outcomes = OutcomeService(**services)

        logger.info(f"Scholarship ledger ready (authority '{authority_id}')")

    @property
    def authority_id(self) -> str:
        return self._context.authority_id

    @property
    def journal(self) -> EventJournal:
        return self._journal

    def _submit(self, request, caller: CallerContext) -> CommandOutcome:
        return self._bus.handle(request.to_command(caller))

    # ── Applicants & applications ────────────────────────────

    def register_applicant(self, caller: CallerContext, name: str,
                           institution: str, gpa: int,
                           field_of_study: str) -> CommandOutcome:
        return self._submit(RegisterApplicantRequest(
            name=name, institution=institution,
            gpa=gpa, field_of_study=field_of_study,
        ), caller)

    def apply_for_scholarship(self, caller: CallerContext, applicant_id: int,
                              scholarship_id: int) -> CommandOutcome:
        return self._submit(ApplyForScholarshipRequest(
            applicant_id=applicant_id, scholarship_id=scholarship_id,
        ), caller)

    def verify_applicant(self, caller: CallerContext,
                         applicant_id: int) -> CommandOutcome:
        return self._submit(
            VerifyApplicantRequest(applicant_id=applicant_id), caller,
        )

    def update_application_status(self, caller: CallerContext,
                                  application_id: int,
                                  new_status: str) -> CommandOutcome:
        return self._submit(UpdateApplicationStatusRequest(
            application_id=application_id, new_status=new_status,
        ), caller)

    # ── Scholarships ─────────────────────────────────────────

    def create_scholarship(self, caller: CallerContext, name: str,
                           description: str, total_amount: int,
                           award_amount: int, criteria_gpa: int,
                           criteria_field: str) -> CommandOutcome:
        return self._submit(CreateScholarshipRequest(
            name=name,
            description=description,
            total_amount=total_amount,
            award_amount=award_amount,
            criteria_gpa=criteria_gpa,
            criteria_field=criteria_field,
        ), caller)

    def fund_scholarship(self, caller: CallerContext, scholarship_id: int,
                         amount: int) -> CommandOutcome:
        return self._submit(FundScholarshipRequest(
            scholarship_id=scholarship_id, amount=amount,
        ), caller)

    def activate_scholarship(self, caller: CallerContext,
                             scholarship_id: int) -> CommandOutcome:
        return self._submit(SetScholarshipActiveRequest(
            scholarship_id=scholarship_id, active=True,
        ), caller)

    def deactivate_scholarship(self, caller: CallerContext,
                               scholarship_id: int) -> CommandOutcome:
        return self._submit(SetScholarshipActiveRequest(
            scholarship_id=scholarship_id, active=False,
        ), caller)

    # ── Institutions & disbursements ─────────────────────────

    def register_institution(self, caller: CallerContext, name: str,
                             principal: str) -> CommandOutcome:
        return self._submit(
            RegisterInstitutionRequest(name=name, principal=principal), caller,
        )

    def create_disbursement(self, caller: CallerContext, application_id: int,
                            institution_id: int,
                            amount: int) -> CommandOutcome:
        return self._submit(CreateDisbursementRequest(
            application_id=application_id,
            institution_id=institution_id,
            amount=amount,
        ), caller)

    def process_disbursement(self, caller: CallerContext,
                             disbursement_id: int) -> CommandOutcome:
        return self._submit(
            ProcessDisbursementRequest(disbursement_id=disbursement_id), caller,
        )

    def cancel_disbursement(self, caller: CallerContext,
                            disbursement_id: int) -> CommandOutcome:
        return self._submit(
            CancelDisbursementRequest(disbursement_id=disbursement_id), caller,
        )

    # ── Academic outcomes ────────────────────────────────────

    def add_academic_record(self, caller: CallerContext, applicant_id: int,
                            semester: str, gpa: int,
                            credits_completed: int) -> CommandOutcome:
        return self._submit(AddAcademicRecordRequest(
            applicant_id=applicant_id,
            semester=semester,
            gpa=gpa,
            credits_completed=credits_completed,
        ), caller)

    def add_milestone(self, caller: CallerContext, applicant_id: int,
                      description: str) -> CommandOutcome:
        return self._submit(AddMilestoneRequest(
            applicant_id=applicant_id, description=description,
        ), caller)

    def mark_milestone_achieved(self, caller: CallerContext,
                                milestone_id: int) -> CommandOutcome:
        return self._submit(
            MarkMilestoneAchievedRequest(milestone_id=milestone_id), caller,
        )

    def update_record_status(self, caller: CallerContext, record_id: int,
                             new_status: str) -> CommandOutcome:
        return self._submit(UpdateRecordStatusRequest(
            record_id=record_id, new_status=new_status,
        ), caller)

    # ── Reads ────────────────────────────────────────────────

    def get_applicant(self, applicant_id: int) -> Optional[Applicant]:
        return self._applicants.projection_store.get_applicant(applicant_id)

    def get_application(self, application_id: int) -> Optional[Application]:
        return self._applicants.projection_store.get_application(application_id)

    def get_scholarship(self, scholarship_id: int) -> Optional[Scholarship]:
        return self._scholarships.projection_store.get_scholarship(scholarship_id)

    def get_institution(self, institution_id: int) -> Optional[Institution]:
        return self._disbursements.projection_store.get_institution(institution_id)

    def get_disbursement(self, disbursement_id: int) -> Optional[Disbursement]:
        return self._disbursements.projection_store.get_disbursement(
            disbursement_id
        )

    def get_academic_record(self, record_id: int) -> Optional[AcademicRecord]:
        return self._outcomes.projection_store.get_academic_record(record_id)

    def get_milestone(self, milestone_id: int) -> Optional[Milestone]:
        return self._outcomes.projection_store.get_milestone(milestone_id)

    def get_applicant_count(self) -> int:
        return self._applicants.projection_store.get_applicant_count()

    def get_application_count(self) -> int:
        return self._applicants.projection_store.get_application_count()

    def get_scholarship_count(self) -> int:
        return self._scholarships.projection_store.get_scholarship_count()

    def get_institution_count(self) -> int:
        return self._disbursements.projection_store.get_institution_count()

    def get_disbursement_count(self) -> int:
        return self._disbursements.projection_store.get_disbursement_count()

    def get_record_count(self) -> int:
        return self._outcomes.projection_store.get_record_count()

    def get_milestone_count(self) -> int:
        return self._outcomes.projection_store.get_milestone_count()

    # ── State ────────────────────────────────────────────────

    def _stores(self) -> dict:
        return {
            service.engine_name: service.projection_store
            for service in (
                self._applicants,
                self._scholarships,
                self._disbursements,
                self._outcomes,
            )
        }

    def snapshot(self) -> dict:
        """Every table's counter and records, taken between commands."""
        with self._bus.serialized():
            snapshot = {}
            for store in self._stores().values():
                snapshot.update(store.snapshot())
            return snapshot

    def verify_chain(self) -> bool:
        return self._journal.verify_chain()

    def replay(self, events: Iterable[LedgerEvent]) -> ReplayResult:
        """Rebuild this (empty) ledger's tables from another journal."""
        with self._bus.serialized():
            replayer = EventReplayer(journal=self._journal, stores=self._stores())
            return replayer.replay(events)

    @classmethod
    def from_events(cls, authority_id: str,
                    events: Iterable[LedgerEvent]) -> "ScholarshipLedger":
        ledger = cls(authority_id)
        ledger.replay(events)
        return ledger
