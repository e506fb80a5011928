"""
Ledger Outcome Engine - Commands
==================================
Request objects for academic records and milestones.
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
from core.identity.requirements import AUTHORITY_ONLY, AUTHORITY_OR_INSTITUTION

RECORD_ADD_REQUEST = "outcome.record.add.request"
RECORD_STATUS_UPDATE_REQUEST = "outcome.record.status_update.request"
MILESTONE_ADD_REQUEST = "outcome.milestone.add.request"
MILESTONE_ACHIEVE_REQUEST = "outcome.milestone.achieve.request"

OUTCOME_COMMAND_TYPES = frozenset({
    RECORD_ADD_REQUEST,
    RECORD_STATUS_UPDATE_REQUEST,
    MILESTONE_ADD_REQUEST,
    MILESTONE_ACHIEVE_REQUEST,
})

AUTHORIZATION_MODES = {
    RECORD_ADD_REQUEST: AUTHORITY_OR_INSTITUTION,
    RECORD_STATUS_UPDATE_REQUEST: AUTHORITY_ONLY,
    MILESTONE_ADD_REQUEST: AUTHORITY_ONLY,
    MILESTONE_ACHIEVE_REQUEST: AUTHORITY_ONLY,
}


@dataclass(frozen=True)
class AddAcademicRecordRequest:
    """applicant_id is stored as given; it is not checked against applicants."""
    applicant_id: int
    semester: str
    gpa: int
    credits_completed: int

    def __post_init__(self):
        require_int_field(self.applicant_id, "applicant_id")
        require_str_field(self.semester, "semester")
        require_int_field(self.gpa, "gpa")
        require_int_field(self.credits_completed, "credits_completed")

    def to_command(self, caller: CallerContext, *,
                   command_id: uuid.UUID | None = None) -> Command:
        return build_command(
            RECORD_ADD_REQUEST,
            {
                "applicant_id": self.applicant_id,
                "semester": self.semester,
                "gpa": self.gpa,
                "credits_completed": self.credits_completed,
            },
            caller=caller,
            command_id=command_id,
        )


@dataclass(frozen=True)
class UpdateRecordStatusRequest:
    record_id: int
    new_status: str

    def __post_init__(self):
        require_int_field(self.record_id, "record_id")
        require_str_field(self.new_status, "new_status")

    def to_command(self, caller: CallerContext, *,
                   command_id: uuid.UUID | None = None) -> Command:
        return build_command(
            RECORD_STATUS_UPDATE_REQUEST,
            {"record_id": self.record_id, "new_status": self.new_status},
            caller=caller,
            command_id=command_id,
        )


@dataclass(frozen=True)
class AddMilestoneRequest:
    applicant_id: int
    description: str

    def __post_init__(self):
        require_int_field(self.applicant_id, "applicant_id")
        require_str_field(self.description, "description")

    def to_command(self, caller: CallerContext, *,
                   command_id: uuid.UUID | None = None) -> Command:
        return build_command(
            MILESTONE_ADD_REQUEST,
            {"applicant_id": self.applicant_id, "description": self.description},
            caller=caller,
            command_id=command_id,
        )


@dataclass(frozen=True)
class MarkMilestoneAchievedRequest:
    milestone_id: int

    def __post_init__(self):
        require_int_field(self.milestone_id, "milestone_id")

    def to_command(self, caller: CallerContext, *,
                   command_id: uuid.UUID | None = None) -> Command:
        return build_command(
            MILESTONE_ACHIEVE_REQUEST,
            {"milestone_id": self.milestone_id},
            caller=caller,
            command_id=command_id,
        )
