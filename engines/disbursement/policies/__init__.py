"""
Ledger Disbursement Engine - Policies
=======================================
Existence checks. The institution behind a disbursement is looked up
again when the disbursement is processed, not only when created.
"""

from __future__ import annotations

from typing import Optional

from core.commands.base import Command
from core.commands.rejection import RejectionReason

ERR_INSTITUTION_NOT_FOUND = 101
ERR_DISBURSEMENT_NOT_FOUND = 102


def _institution_not_found(institution_id, policy_name: str) -> RejectionReason:
    return RejectionReason(
        code="INSTITUTION_NOT_FOUND",
        error_code=ERR_INSTITUTION_NOT_FOUND,
        message=f"Institution {institution_id} not found.",
        policy_name=policy_name,
    )


def institution_must_exist_policy(
    command: Command,
    context=None,
    *,
    institution_lookup,
) -> Optional[RejectionReason]:
    institution_id = command.payload.get("institution_id")
    if institution_lookup(institution_id) is None:
        return _institution_not_found(institution_id, "institution_must_exist_policy")
    return None


def disbursement_must_exist_policy(
    command: Command,
    context=None,
    *,
    disbursement_lookup,
) -> Optional[RejectionReason]:
    disbursement_id = command.payload.get("disbursement_id")
    if disbursement_lookup(disbursement_id) is None:
        return RejectionReason(
            code="DISBURSEMENT_NOT_FOUND",
            error_code=ERR_DISBURSEMENT_NOT_FOUND,
            message=f"Disbursement {disbursement_id} not found.",
            policy_name="disbursement_must_exist_policy",
        )
    return None


def disbursement_institution_must_exist_policy(
    command: Command,
    context=None,
    *,
    disbursement_lookup,
    institution_lookup,
) -> Optional[RejectionReason]:
    disbursement = disbursement_lookup(command.payload.get("disbursement_id"))
    if disbursement is None:
        return None
    if institution_lookup(disbursement.institution_id) is None:
        return _institution_not_found(
            disbursement.institution_id,
            "disbursement_institution_must_exist_policy",
        )
    return None
