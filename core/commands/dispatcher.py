"""
Ledger Command Layer - Command Dispatcher
===========================================
Accept Command -> Evaluate Policies -> Produce Outcome.

The Dispatcher is the DECISION MAKER. It decides whether a command
may execute. It does not execute, record events or touch tables.

Policies are registered per command type as callables returning
Optional[RejectionReason]. They run in registration order and the
first rejection wins, so registration order IS the check order:
existence checks first, then authorization, then domain validation.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional

from core.commands.base import Command
from core.commands.rejection import RejectionReason
from core.context.ledger_context import LedgerContext

logger = logging.getLogger("ledger.commands")


# A policy is a callable:
#   (Command, LedgerContext) -> Optional[RejectionReason]
PolicyEvaluator = Callable[
    [Command, LedgerContext],
    Optional[RejectionReason],
]


class CommandDispatcher:
    """
    Evaluate a command against the policies of its command type.

    Usage:
        dispatcher = CommandDispatcher(context=LedgerContext("authority"))
        dispatcher.register_policy(
            "scholarship.scholarship.fund.request",
            scholarship_must_exist,
        )
        dispatcher.register_policy(
            "scholarship.scholarship.fund.request",
            authority_only_guard,
        )

        rejection = dispatcher.evaluate(command)
    """

    def __init__(self, context: LedgerContext):
        self._context = context
        self._policies: Dict[str, List[PolicyEvaluator]] = {}

    @property
    def context(self) -> LedgerContext:
        return self._context

    def register_policy(self, command_type: str, policy: PolicyEvaluator) -> None:
        if not callable(policy):
            raise TypeError(
                f"Policy must be callable, got {type(policy).__name__}."
            )
        self._policies.setdefault(command_type, []).append(policy)

        policy_name = getattr(policy, "__qualname__", None) or getattr(
            getattr(policy, "func", None), "__qualname__", str(policy)
        )
        logger.debug(f"Policy registered for {command_type}: {policy_name}")

    def policies_for(self, command_type: str) -> tuple:
        return tuple(self._policies.get(command_type, ()))

    def evaluate(self, command: Command) -> Optional[RejectionReason]:
        """Return the first rejection for `command`, or None if it may run."""
        for policy in self._policies.get(command.command_type, ()):
            rejection = policy(command, self._context)
            if rejection is None:
                continue

            if not isinstance(rejection, RejectionReason):
                raise TypeError(
                    f"Policy must return RejectionReason or None, "
                    f"got {type(rejection).__name__}."
                )

            logger.info(
                f"Command {command.command_id} rejected by "
                f"policy '{rejection.policy_name}': "
                f"[{rejection.code}/{rejection.error_code}] {rejection.message}"
            )
            return rejection

        return None
