"""
Ledger Disbursement Engine - Event Types
==========================================
Institution registry and disbursement status flags. No money moves:
"processing" a disbursement only records that it completed.
"""

from __future__ import annotations

from core.commands.base import Command

INSTITUTION_REGISTERED_V1 = "disbursement.institution.registered.v1"
DISBURSEMENT_CREATED_V1 = "disbursement.disbursement.created.v1"
DISBURSEMENT_PROCESSED_V1 = "disbursement.disbursement.processed.v1"
DISBURSEMENT_CANCELLED_V1 = "disbursement.disbursement.cancelled.v1"

DISBURSEMENT_EVENT_TYPES = (
    INSTITUTION_REGISTERED_V1,
    DISBURSEMENT_CREATED_V1,
    DISBURSEMENT_PROCESSED_V1,
    DISBURSEMENT_CANCELLED_V1,
)

# ── Disbursement Statuses ─────────────────────────────────────

DISBURSEMENT_PENDING = "pending"
DISBURSEMENT_COMPLETED = "completed"
DISBURSEMENT_CANCELLED = "cancelled"


def build_institution_registered_payload(command: Command, *, record_id) -> dict:
    return {
        "institution_id": record_id,
        "name": command.payload["name"],
        "principal": command.payload["principal"],
        "verified": True,
    }


def build_disbursement_created_payload(command: Command, *, record_id) -> dict:
    p = command.payload
    return {
        "disbursement_id": record_id,
        "application_id": p["application_id"],
        "institution_id": p["institution_id"],
        "amount": p["amount"],
        "status": DISBURSEMENT_PENDING,
        "timestamp": command.block_height,
    }


def build_disbursement_processed_payload(command: Command, *, record_id=None) -> dict:
    return {
        "disbursement_id": command.payload["disbursement_id"],
        "status": DISBURSEMENT_COMPLETED,
    }


def build_disbursement_cancelled_payload(command: Command, *, record_id=None) -> dict:
    return {
        "disbursement_id": command.payload["disbursement_id"],
        "status": DISBURSEMENT_CANCELLED,
    }
