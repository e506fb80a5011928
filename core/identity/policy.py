"""
Ledger Identity - Authorization Policy
========================================
Deterministic caller authorization guards for command execution.

The only principals are the fixed authority identity, the owner
recorded on a target record and the externally asserted
"authorized institution" capability. Guards never look at tables
themselves: owner resolution is injected as a lookup.
"""

from __future__ import annotations

from functools import partial
from typing import Callable, Optional

from core.commands.base import Command
from core.commands.rejection import (
    ERR_NOT_AUTHORIZED,
    ReasonCode,
    RejectionReason,
)
from core.context.ledger_context import LedgerContext
from core.identity.requirements import (
    AUTHORITY_ONLY,
    AUTHORITY_OR_INSTITUTION,
    OPEN,
    OWNER_ONLY,
    VALID_AUTHORIZATION_MODES,
)

# (command) -> owning actor_id, or None when the target is unknown
OwnerLookup = Callable[[Command], Optional[str]]


def _not_authorized(command: Command, policy_name: str) -> RejectionReason:
    return RejectionReason(
        code=ReasonCode.NOT_AUTHORIZED,
        error_code=ERR_NOT_AUTHORIZED,
        message=(
            f"Actor '{command.actor_id}' is not authorized for "
            f"'{command.command_type}'."
        ),
        policy_name=policy_name,
    )


def authority_only_guard(
    command: Command,
    context: LedgerContext,
) -> Optional[RejectionReason]:
    """Caller must be the fixed authority identity."""
    if context.is_authority(command.actor_id):
        return None
    return _not_authorized(command, "authority_only_guard")


def owner_only_guard(
    command: Command,
    context: LedgerContext,
    *,
    owner_lookup: OwnerLookup,
) -> Optional[RejectionReason]:
    """Caller must be the principal recorded on the target record."""
    owner = owner_lookup(command)
    if owner is not None and owner == command.actor_id:
        return None
    return _not_authorized(command, "owner_only_guard")


def authority_or_institution_guard(
    command: Command,
    context: LedgerContext,
) -> Optional[RejectionReason]:
    """Caller must be the authority or carry the institution capability."""
    if context.is_authority(command.actor_id):
        return None
    if command.caller.is_authorized_institution:
        return None
    return _not_authorized(command, "authority_or_institution_guard")


def resolve_authorization_guard(
    mode: str,
    *,
    owner_lookup: OwnerLookup | None = None,
):
    """
    Return the policy callable enforcing `mode`, or None for OPEN.

    OWNER_ONLY needs an owner_lookup bound to the engine's tables.
    """
    if mode not in VALID_AUTHORIZATION_MODES:
        raise ValueError(
            f"authorization mode '{mode}' not valid. "
            f"Must be one of: {sorted(VALID_AUTHORIZATION_MODES)}"
        )

    if mode == OPEN:
        return None
    if mode == AUTHORITY_ONLY:
        return authority_only_guard
    if mode == AUTHORITY_OR_INSTITUTION:
        return authority_or_institution_guard

    if owner_lookup is None:
        raise ValueError("OWNER_ONLY authorization requires owner_lookup.")
    guard = partial(owner_only_guard, owner_lookup=owner_lookup)
    guard.__qualname__ = "owner_only_guard"
    return guard
