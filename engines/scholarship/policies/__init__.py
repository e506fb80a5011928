"""
Ledger Scholarship Engine - Policies
======================================
Existence check and the total >= award rule at creation.
"""

from __future__ import annotations

from typing import Optional

from core.commands.base import Command
from core.commands.rejection import RejectionReason

ERR_INVALID_AMOUNT = 101
ERR_SCHOLARSHIP_NOT_FOUND = 102


def scholarship_must_exist_policy(
    command: Command,
    context=None,
    *,
    scholarship_lookup,
) -> Optional[RejectionReason]:
    scholarship_id = command.payload.get("scholarship_id")
    if scholarship_lookup(scholarship_id) is None:
        return RejectionReason(
            code="SCHOLARSHIP_NOT_FOUND",
            error_code=ERR_SCHOLARSHIP_NOT_FOUND,
            message=f"Scholarship {scholarship_id} not found.",
            policy_name="scholarship_must_exist_policy",
        )
    return None


def award_must_not_exceed_total_policy(
    command: Command,
    context=None,
) -> Optional[RejectionReason]:
    total = command.payload.get("total_amount", 0)
    award = command.payload.get("award_amount", 0)
    if total < award:
        return RejectionReason(
            code="INVALID_AMOUNT",
            error_code=ERR_INVALID_AMOUNT,
            message=f"Total amount {total} is less than award amount {award}.",
            policy_name="award_must_not_exceed_total_policy",
        )
    return None
