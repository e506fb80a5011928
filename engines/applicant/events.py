"""
Ledger Applicant Engine - Event Types
=======================================
Applicant self-registration, verification and scholarship applications.
"""

from __future__ import annotations

from core.commands.base import Command

# ── Event Types ───────────────────────────────────────────────

APPLICANT_REGISTERED_V1 = "applicant.applicant.registered.v1"
APPLICANT_VERIFIED_V1 = "applicant.applicant.verified.v1"
APPLICATION_SUBMITTED_V1 = "applicant.application.submitted.v1"
APPLICATION_STATUS_UPDATED_V1 = "applicant.application.status_updated.v1"

APPLICANT_EVENT_TYPES = (
    APPLICANT_REGISTERED_V1,
    APPLICANT_VERIFIED_V1,
    APPLICATION_SUBMITTED_V1,
    APPLICATION_STATUS_UPDATED_V1,
)

# ── Application Statuses ──────────────────────────────────────
# Status is free-form once the authority updates it. Submissions start
# pending.

APPLICATION_PENDING = "pending"


# ── Payload Builders ──────────────────────────────────────────

def build_applicant_registered_payload(command: Command, *, record_id) -> dict:
    p = command.payload
    return {
        "applicant_id": record_id,
        "principal": command.actor_id,
        "name": p["name"],
        "institution": p["institution"],
        "gpa": p["gpa"],
        "field_of_study": p["field_of_study"],
    }


def build_applicant_verified_payload(command: Command, *, record_id=None) -> dict:
    return {"applicant_id": command.payload["applicant_id"]}


def build_application_submitted_payload(command: Command, *, record_id) -> dict:
    p = command.payload
    return {
        "application_id": record_id,
        "applicant_id": p["applicant_id"],
        "scholarship_id": p["scholarship_id"],
        "status": APPLICATION_PENDING,
        "timestamp": command.block_height,
    }


def build_application_status_updated_payload(command: Command, *, record_id=None) -> dict:
    p = command.payload
    return {
        "application_id": p["application_id"],
        "status": p["new_status"],
    }
