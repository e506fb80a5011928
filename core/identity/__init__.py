"""
Ledger Identity - Public API
============================
Authorization mode constants and policy guards.
"""

from core.identity.policy import (
    authority_only_guard,
    authority_or_institution_guard,
    owner_only_guard,
    resolve_authorization_guard,
)
from core.identity.requirements import (
    AUTHORITY_ONLY,
    AUTHORITY_OR_INSTITUTION,
    OPEN,
    OWNER_ONLY,
    VALID_AUTHORIZATION_MODES,
)

__all__ = [
    "AUTHORITY_ONLY",
    "AUTHORITY_OR_INSTITUTION",
    "OPEN",
    "OWNER_ONLY",
    "VALID_AUTHORIZATION_MODES",
    "authority_only_guard",
    "authority_or_institution_guard",
    "owner_only_guard",
    "resolve_authorization_guard",
]
