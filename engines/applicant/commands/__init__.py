"""
Ledger Applicant Engine - Commands
====================================
Request objects for the applicant sub-ledger.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass

from core.commands.base import (
    Command,
    build_command,
    require_int_field,
    require_str_field,
)
from core.context.caller_context import CallerContext
from core.identity.requirements import AUTHORITY_ONLY, OPEN, OWNER_ONLY

APPLICANT_REGISTER_REQUEST = "applicant.applicant.register.request"
APPLICANT_VERIFY_REQUEST = "applicant.applicant.verify.request"
APPLICATION_SUBMIT_REQUEST = "applicant.application.submit.request"
APPLICATION_STATUS_UPDATE_REQUEST = "applicant.application.status_update.request"

APPLICANT_COMMAND_TYPES = frozenset({
    APPLICANT_REGISTER_REQUEST,
    APPLICANT_VERIFY_REQUEST,
    APPLICATION_SUBMIT_REQUEST,
    APPLICATION_STATUS_UPDATE_REQUEST,
})

AUTHORIZATION_MODES = {
    APPLICANT_REGISTER_REQUEST: OPEN,
    APPLICATION_SUBMIT_REQUEST: OWNER_ONLY,
    APPLICANT_VERIFY_REQUEST: AUTHORITY_ONLY,
    APPLICATION_STATUS_UPDATE_REQUEST: AUTHORITY_ONLY,
}


@dataclass(frozen=True)
class RegisterApplicantRequest:
    """Any caller may self-register; the caller becomes the owner."""
    name: str
    institution: str
    gpa: int  # two implied decimals: 380 == 3.80
    field_of_study: str

    def __post_init__(self):
        require_str_field(self.name, "name")
        require_str_field(self.institution, "institution")
        require_int_field(self.gpa, "gpa")
        require_str_field(self.field_of_study, "field_of_study")

    def to_command(self, caller: CallerContext, *,
                   command_id: uuid.UUID | None = None) -> Command:
        return build_command(
            APPLICANT_REGISTER_REQUEST,
            {
                "name": self.name,
                "institution": self.institution,
                "gpa": self.gpa,
                "field_of_study": self.field_of_study,
            },
            caller=caller,
            command_id=command_id,
        )


@dataclass(frozen=True)
class ApplyForScholarshipRequest:
    """scholarship_id is stored as given; it is not checked against scholarships."""
    applicant_id: int
    scholarship_id: int

    def __post_init__(self):
        require_int_field(self.applicant_id, "applicant_id")
        require_int_field(self.scholarship_id, "scholarship_id")

    def to_command(self, caller: CallerContext, *,
                   command_id: uuid.UUID | None = None) -> Command:
        return build_command(
            APPLICATION_SUBMIT_REQUEST,
            {
                "applicant_id": self.applicant_id,
                "scholarship_id": self.scholarship_id,
            },
            caller=caller,
            command_id=command_id,
        )


@dataclass(frozen=True)
class VerifyApplicantRequest:
    applicant_id: int

    def __post_init__(self):
        require_int_field(self.applicant_id, "applicant_id")

    def to_command(self, caller: CallerContext, *,
                   command_id: uuid.UUID | None = None) -> Command:
        return build_command(
            APPLICANT_VERIFY_REQUEST,
            {"applicant_id": self.applicant_id},
            caller=caller,
            command_id=command_id,
        )


@dataclass(frozen=True)
class UpdateApplicationStatusRequest:
    """new_status is free-form; there is no transition graph."""
    application_id: int
    new_status: str

    def __post_init__(self):
        require_int_field(self.application_id, "application_id")
        require_str_field(self.new_status, "new_status")

    def to_command(self, caller: CallerContext, *,
                   command_id: uuid.UUID | None = None) -> Command:
        return build_command(
            APPLICATION_STATUS_UPDATE_REQUEST,
            {
                "application_id": self.application_id,
                "new_status": self.new_status,
            },
            caller=caller,
            command_id=command_id,
        )
