"""Ledger Outcome Engine - policies."""

from __future__ import annotations

from typing import Optional

from core.commands.base import Command
from core.commands.rejection import RejectionReason

ERR_RECORD_NOT_FOUND = 101
ERR_MILESTONE_NOT_FOUND = 102


def record_must_exist_policy(
    command: Command,
    context=None,
    *,
    record_lookup,
) -> Optional[RejectionReason]:
    record_id = command.payload.get("record_id")
    if record_lookup(record_id) is None:
        return RejectionReason(
            code="RECORD_NOT_FOUND",
            error_code=ERR_RECORD_NOT_FOUND,
            message=f"Academic record {record_id} not found.",
            policy_name="record_must_exist_policy",
        )
    return None


def milestone_must_exist_policy(
    command: Command,
    context=None,
    *,
    milestone_lookup,
) -> Optional[RejectionReason]:
    milestone_id = command.payload.get("milestone_id")
    if milestone_lookup(milestone_id) is None:
        return RejectionReason(
            code="MILESTONE_NOT_FOUND",
            error_code=ERR_MILESTONE_NOT_FOUND,
            message=f"Milestone {milestone_id} not found.",
            policy_name="milestone_must_exist_policy",
        )
    return None
