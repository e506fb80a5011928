"""
Ledger Identity - Authorization Mode Constants
================================================
Every mutating operation declares exactly one authorization mode.
"""

AUTHORITY_ONLY = "AUTHORITY_ONLY"
OWNER_ONLY = "OWNER_ONLY"
AUTHORITY_OR_INSTITUTION = "AUTHORITY_OR_INSTITUTION"
OPEN = "OPEN"

VALID_AUTHORIZATION_MODES = frozenset(
    {AUTHORITY_ONLY, OWNER_ONLY, AUTHORITY_OR_INSTITUTION, OPEN}
)
