"""
Ledger Command Layer - Command Bus
====================================
High-level orchestration of the command lifecycle.

Flow:
    1. Resolve the engine handler for the command type
    2. Dispatch command -> first rejection or None
    3. If rejected -> REJECTED outcome, nothing else happens
    4. If accepted -> handler executes, records its event, returns value

The CommandBus:
- Orchestrates, does not decide
- Serializes every handle() call (one critical section per ledger),
  since id assignment is a read-modify-write on the table counters
- Never partially applies a command: policies run before any write
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Protocol

from core.commands.base import Command
from core.commands.dispatcher import CommandDispatcher
from core.commands.outcomes import CommandOutcome

logger = logging.getLogger("ledger.commands")


class EngineServiceProtocol(Protocol):
    """
    Protocol for engine service handlers.

    The handler executes an accepted command: it records the event,
    applies it to its projection store and returns the result value.
    """

    def execute(self, command: Command) -> Any:
        ...


class CommandBusError(Exception):
    """Base error for command bus operations."""
    pass


class NoHandlerRegistered(CommandBusError):
    """No engine service handler registered for command type."""

    def __init__(self, command_type: str):
        self.command_type = command_type
        super().__init__(
            f"No engine service handler registered for "
            f"command type '{command_type}'."
        )


class CommandBus:
    """
    Orchestration layer for command lifecycle.

    Usage:
        bus = CommandBus(dispatcher=dispatcher)
        bus.register_handler("applicant.applicant.register.request", service)
        outcome = bus.handle(command)
    """

    def __init__(self, dispatcher: CommandDispatcher):
        self._dispatcher = dispatcher
        self._handlers: Dict[str, Any] = {}
        self._lock = threading.RLock()

    @property
    def dispatcher(self) -> CommandDispatcher:
        return self._dispatcher

    def register_handler(self, command_type: str, handler: Any) -> None:
        """
        Register engine service handler for a command type.

        Handler must implement EngineServiceProtocol (have .execute()).
        """
        if not command_type.endswith(".request"):
            raise ValueError(
                f"command_type '{command_type}' must end with '.request'."
            )

        if not hasattr(handler, "execute") or not callable(handler.execute):
            raise TypeError("Handler must have callable .execute() method.")

        self._handlers[command_type] = handler
        logger.info(f"Handler registered: {command_type}")

    def has_handler(self, command_type: str) -> bool:
        return command_type in self._handlers

    def handle(self, command: Command) -> CommandOutcome:
        handler = self._handlers.get(command.command_type)
        if handler is None:
            raise NoHandlerRegistered(command.command_type)

        with self._lock:
            rejection = self._dispatcher.evaluate(command)
            if rejection is not None:
                return CommandOutcome.rejected(command.command_id, rejection)

            logger.info(
                f"Executing accepted command {command.command_id} "
                f"({command.command_type}) for '{command.actor_id}'"
            )
            value = handler.execute(command)
            return CommandOutcome.accepted(command.command_id, value)

    def serialized(self):
        """Hold the bus lock, e.g. while taking a consistent snapshot."""
        return self._lock
