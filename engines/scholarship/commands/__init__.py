"""
Ledger Scholarship Engine - Commands
======================================
Request objects for the scholarship sub-ledger. Every scholarship
operation is reserved to the authority.
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
from core.identity.requirements import AUTHORITY_ONLY

SCHOLARSHIP_CREATE_REQUEST = "scholarship.scholarship.create.request"
SCHOLARSHIP_FUND_REQUEST = "scholarship.scholarship.fund.request"
SCHOLARSHIP_ACTIVATE_REQUEST = "scholarship.scholarship.activate.request"
SCHOLARSHIP_DEACTIVATE_REQUEST = "scholarship.scholarship.deactivate.request"

SCHOLARSHIP_COMMAND_TYPES = frozenset({
    SCHOLARSHIP_CREATE_REQUEST,
    SCHOLARSHIP_FUND_REQUEST,
    SCHOLARSHIP_ACTIVATE_REQUEST,
    SCHOLARSHIP_DEACTIVATE_REQUEST,
})

AUTHORIZATION_MODES = {
    command_type: AUTHORITY_ONLY for command_type in SCHOLARSHIP_COMMAND_TYPES
}


@dataclass(frozen=True)
class CreateScholarshipRequest:
    name: str
    description: str
    total_amount: int
    award_amount: int
    criteria_gpa: int
    criteria_field: str

    def __post_init__(self):
        require_str_field(self.name, "name")
        require_str_field(self.description, "description")
        require_int_field(self.total_amount, "total_amount")
        require_int_field(self.award_amount, "award_amount")
        require_int_field(self.criteria_gpa, "criteria_gpa")
        require_str_field(self.criteria_field, "criteria_field")

    def to_command(self, caller: CallerContext, *,
                   command_id: uuid.UUID | None = None) -> Command:
        return build_command(
            SCHOLARSHIP_CREATE_REQUEST,
            {
                "name": self.name,
                "description": self.description,
                "total_amount": self.total_amount,
                "award_amount": self.award_amount,
                "criteria_gpa": self.criteria_gpa,
                "criteria_field": self.criteria_field,
            },
            caller=caller,
            command_id=command_id,
        )


@dataclass(frozen=True)
class FundScholarshipRequest:
    """The sign of amount is the caller's responsibility."""
    scholarship_id: int
    amount: int

    def __post_init__(self):
        require_int_field(self.scholarship_id, "scholarship_id")
        require_int_field(self.amount, "amount")

    def to_command(self, caller: CallerContext, *,
                   command_id: uuid.UUID | None = None) -> Command:
        return build_command(
            SCHOLARSHIP_FUND_REQUEST,
            {"scholarship_id": self.scholarship_id, "amount": self.amount},
            caller=caller,
            command_id=command_id,
        )


@dataclass(frozen=True)
class SetScholarshipActiveRequest:
    scholarship_id: int
    active: bool

    def __post_init__(self):
        require_int_field(self.scholarship_id, "scholarship_id")
        if not isinstance(self.active, bool):
            raise ValueError("active must be a bool.")

    def to_command(self, caller: CallerContext, *,
                   command_id: uuid.UUID | None = None) -> Command:
        command_type = (
            SCHOLARSHIP_ACTIVATE_REQUEST if self.active
            else SCHOLARSHIP_DEACTIVATE_REQUEST
        )
        return build_command(
            command_type,
            {"scholarship_id": self.scholarship_id},
            caller=caller,
            command_id=command_id,
        )
