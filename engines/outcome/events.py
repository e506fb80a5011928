"""
Ledger Outcome Engine - Event Types
=====================================
Academic records and milestones for scholarship recipients.
"""

from __future__ import annotations

from core.commands.base import Command

ACADEMIC_RECORD_ADDED_V1 = "outcome.record.added.v1"
ACADEMIC_RECORD_STATUS_UPDATED_V1 = "outcome.record.status_updated.v1"
MILESTONE_ADDED_V1 = "outcome.milestone.added.v1"
MILESTONE_ACHIEVED_V1 = "outcome.milestone.achieved.v1"

OUTCOME_EVENT_TYPES = (
    ACADEMIC_RECORD_ADDED_V1,
    ACADEMIC_RECORD_STATUS_UPDATED_V1,
    MILESTONE_ADDED_V1,
    MILESTONE_ACHIEVED_V1,
)

RECORD_VERIFIED = "verified"


def build_record_added_payload(command: Command, *, record_id) -> dict:
    p = command.payload
    return {
        "record_id": record_id,
        "applicant_id": p["applicant_id"],
        "semester": p["semester"],
        "gpa": p["gpa"],
        "credits_completed": p["credits_completed"],
        "status": RECORD_VERIFIED,
        "timestamp": command.block_height,
    }


def build_record_status_updated_payload(command: Command, *, record_id=None) -> dict:
    return {
        "record_id": command.payload["record_id"],
        "status": command.payload["new_status"],
    }


def build_milestone_added_payload(command: Command, *, record_id) -> dict:
    return {
        "milestone_id": record_id,
        "applicant_id": command.payload["applicant_id"],
        "description": command.payload["description"],
        "achieved": False,
        "timestamp": command.block_height,
    }


def build_milestone_achieved_payload(command: Command, *, record_id=None) -> dict:
    return {
        "milestone_id": command.payload["milestone_id"],
        "timestamp": command.block_height,
    }
