"""
Ledger Applicant Engine - Policies
====================================
Existence checks and the one-way verification guard.
"""

from __future__ import annotations

from typing import Optional

from core.commands.base import Command
from core.commands.rejection import RejectionReason

ERR_APPLICANT_NOT_FOUND = 101
ERR_APPLICATION_NOT_FOUND = 102
ERR_ALREADY_VERIFIED = 103


def applicant_must_exist_policy(
    command: Command,
    context=None,
    *,
    applicant_lookup,
) -> Optional[RejectionReason]:
    applicant_id = command.payload.get("applicant_id")
    if applicant_lookup(applicant_id) is None:
        return RejectionReason(
            code="APPLICANT_NOT_FOUND",
            error_code=ERR_APPLICANT_NOT_FOUND,
            message=f"Applicant {applicant_id} not found.",
            policy_name="applicant_must_exist_policy",
        )
    return None


def application_must_exist_policy(
    command: Command,
    context=None,
    *,
    application_lookup,
) -> Optional[RejectionReason]:
    application_id = command.payload.get("application_id")
    if application_lookup(application_id) is None:
        return RejectionReason(
            code="APPLICATION_NOT_FOUND",
            error_code=ERR_APPLICATION_NOT_FOUND,
            message=f"Application {application_id} not found.",
            policy_name="application_must_exist_policy",
        )
    return None


def applicant_must_not_be_verified_policy(
    command: Command,
    context=None,
    *,
    applicant_lookup,
) -> Optional[RejectionReason]:
    """Verification is one-way and may only happen once."""
    applicant_id = command.payload.get("applicant_id")
    applicant = applicant_lookup(applicant_id)
    if applicant is not None and applicant.verified:
        return RejectionReason(
            code="ALREADY_VERIFIED",
            error_code=ERR_ALREADY_VERIFIED,
            message=f"Applicant {applicant_id} is already verified.",
            policy_name="applicant_must_not_be_verified_policy",
        )
    return None
