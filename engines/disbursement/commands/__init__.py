"""
Ledger Disbursement Engine - Commands
=======================================
Request objects for institutions and disbursements. All of them are
reserved to the authority.
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

INSTITUTION_REGISTER_REQUEST = "disbursement.institution.register.request"
DISBURSEMENT_CREATE_REQUEST = "disbursement.disbursement.create.request"
DISBURSEMENT_PROCESS_REQUEST = "disbursement.disbursement.process.request"
DISBURSEMENT_CANCEL_REQUEST = "disbursement.disbursement.cancel.request"

DISBURSEMENT_COMMAND_TYPES = frozenset({
    INSTITUTION_REGISTER_REQUEST,
    DISBURSEMENT_CREATE_REQUEST,
    DISBURSEMENT_PROCESS_REQUEST,
    DISBURSEMENT_CANCEL_REQUEST,
})

AUTHORIZATION_MODES = {
    command_type: AUTHORITY_ONLY for command_type in DISBURSEMENT_COMMAND_TYPES
}


@dataclass(frozen=True)
class RegisterInstitutionRequest:
    name: str
    principal: str

    def __post_init__(self):
        require_str_field(self.name, "name")
        require_str_field(self.principal, "principal")

    def to_command(self, caller: CallerContext, *,
                   command_id: uuid.UUID | None = None) -> Command:
        return build_command(
            INSTITUTION_REGISTER_REQUEST,
            {"name": self.name, "principal": self.principal},
            caller=caller,
            command_id=command_id,
        )


@dataclass(frozen=True)
class CreateDisbursementRequest:
    """application_id is stored as given; only the institution must exist."""
    application_id: int
    institution_id: int
    amount: int

    def __post_init__(self):
        require_int_field(self.application_id, "application_id")
        require_int_field(self.institution_id, "institution_id")
        require_int_field(self.amount, "amount")

    def to_command(self, caller: CallerContext, *,
                   command_id: uuid.UUID | None = None) -> Command:
        return build_command(
            DISBURSEMENT_CREATE_REQUEST,
            {
                "application_id": self.application_id,
                "institution_id": self.institution_id,
                "amount": self.amount,
            },
            caller=caller,
            command_id=command_id,
        )


@dataclass(frozen=True)
class ProcessDisbursementRequest:
    disbursement_id: int

    def __post_init__(self):
        require_int_field(self.disbursement_id, "disbursement_id")

    def to_command(self, caller: CallerContext, *,
                   command_id: uuid.UUID | None = None) -> Command:
        return build_command(
            DISBURSEMENT_PROCESS_REQUEST,
            {"disbursement_id": self.disbursement_id},
            caller=caller,
            command_id=command_id,
        )


@dataclass(frozen=True)
class CancelDisbursementRequest:
    disbursement_id: int

    def __post_init__(self):
        require_int_field(self.disbursement_id, "disbursement_id")

    def to_command(self, caller: CallerContext, *,
                   command_id: uuid.UUID | None = None) -> Command:
        return build_command(
            DISBURSEMENT_CANCEL_REQUEST,
            {"disbursement_id": self.disbursement_id},
            caller=caller,
            command_id=command_id,
        )
