"""
Ledger Scholarship Engine - Event Types
=========================================
Scholarship creation, funding and activation toggles.
"""

from __future__ import annotations

from core.commands.base import Command

SCHOLARSHIP_CREATED_V1 = "scholarship.scholarship.created.v1"
SCHOLARSHIP_FUNDED_V1 = "scholarship.scholarship.funded.v1"
SCHOLARSHIP_ACTIVATED_V1 = "scholarship.scholarship.activated.v1"
SCHOLARSHIP_DEACTIVATED_V1 = "scholarship.scholarship.deactivated.v1"

SCHOLARSHIP_EVENT_TYPES = (
    SCHOLARSHIP_CREATED_V1,
    SCHOLARSHIP_FUNDED_V1,
    SCHOLARSHIP_ACTIVATED_V1,
    SCHOLARSHIP_DEACTIVATED_V1,
)


def build_scholarship_created_payload(command: Command, *, record_id) -> dict:
    p = command.payload
    return {
        "scholarship_id": record_id,
        "name": p["name"],
        "description": p["description"],
        "total_amount": p["total_amount"],
        "award_amount": p["award_amount"],
        "remaining_funds": p["total_amount"],
        "criteria_gpa": p["criteria_gpa"],
        "criteria_field": p["criteria_field"],
    }


def build_scholarship_funded_payload(command: Command, *, record_id=None) -> dict:
    return {
        "scholarship_id": command.payload["scholarship_id"],
        "amount": command.payload["amount"],
    }


def build_scholarship_activated_payload(command: Command, *, record_id=None) -> dict:
    return {"scholarship_id": command.payload["scholarship_id"], "active": True}


def build_scholarship_deactivated_payload(command: Command, *, record_id=None) -> dict:
    return {"scholarship_id": command.payload["scholarship_id"], "active": False}
