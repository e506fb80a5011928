"""
Ledger Engines - Service Base
===============================
Shared execution path for every sub-ledger service.

Each engine declares:
- engine_name:        namespace of its commands and events
- command_types:      every command type it handles
- event_types:        every event type it owns in the registry
- command_to_event:   accepted command type -> event type
- payload_builders:   command type -> builder(command, record_id=...)
- creation_tables:    creating command type -> table receiving the new id
- _register_policies: ordered policy chain per command type

Execution of an accepted command:
    1. Reserve the next id (creations only)
    2. Build the event payload
    3. Record the event in the journal
    4. Apply the event to the projection store
    5. Return the new id, or True for mutations

Nothing is written before all policies have passed, so a rejected
command never touches a table, a counter or the journal.
"""

from __future__ import annotations

import logging
from typing import AbstractSet, Any, Callable, Mapping, Sequence

from core.commands.base import Command
from core.commands.bus import CommandBus
from core.commands.dispatcher import CommandDispatcher
from core.event_store.journal import EventJournal
from core.projections.store import TableProjectionStore

logger = logging.getLogger("ledger.engines")


class EmissionViolation(Exception):
    """An engine tried to emit an event outside its namespace."""

    def __init__(self, engine_name: str, event_type: str):
        self.engine_name = engine_name
        self.event_type = event_type
        super().__init__(
            f"Engine '{engine_name}' cannot emit '{event_type}'. "
            f"Engines can only emit events in their own namespace."
        )


class LedgerEngineService:
    engine_name: str = ""
    command_types: AbstractSet[str] = frozenset()
    event_types: Sequence[str] = ()
    command_to_event: Mapping[str, str] = {}
    payload_builders: Mapping[str, Callable[..., dict]] = {}
    creation_tables: Mapping[str, str] = {}

    def __init__(
        self,
        *,
        command_bus: CommandBus,
        journal: EventJournal,
        projection_store: TableProjectionStore,
    ):
        self._command_bus = command_bus
        self._journal = journal
        self._projection_store = projection_store

        for event_type in sorted(set(self.event_types)):
            if event_type.split(".")[0] != self.engine_name:
                raise EmissionViolation(self.engine_name, event_type)
        for event_type in sorted(set(self.command_to_event.values())):
            if event_type not in self.event_types:
                raise EmissionViolation(self.engine_name, event_type)
        if set(self.command_to_event) != set(self.command_types):
            raise ValueError(
                f"Engine '{self.engine_name}' maps "
                f"{sorted(self.command_to_event)} but declares "
                f"{sorted(self.command_types)}."
            )
        journal.registry.register_engine_types(
            self.engine_name, self.event_types,
        )

        self._register_policies(command_bus.dispatcher)
        for command_type in sorted(self.command_types):
            command_bus.register_handler(command_type, self)

    def _register_policies(self, dispatcher: CommandDispatcher) -> None:
        raise NotImplementedError

    def _register_chain(self, dispatcher: CommandDispatcher,
                        command_type: str, *policies) -> None:
        for policy in policies:
            if policy is not None:
                dispatcher.register_policy(command_type, policy)

    def execute(self, command: Command) -> Any:
        event_type = self.command_to_event.get(command.command_type)
        if event_type is None:
            raise ValueError(
                f"Unsupported {self.engine_name} command type: "
                f"{command.command_type}"
            )

        builder = self.payload_builders.get(command.command_type)
        if builder is None:
            raise ValueError(f"No payload builder for: {command.command_type}")

        table_name = self.creation_tables.get(command.command_type)
        record_id = None
        if table_name is not None:
            record_id = self._projection_store.table(table_name).next_id()

        payload = builder(command, record_id=record_id)
        event = self._journal.record(
            event_type,
            payload,
            source_engine=self.engine_name,
            actor_id=command.actor_id,
            block_height=command.block_height,
        )
        self._projection_store.apply(event_type, event.payload)

        if record_id is not None:
            logger.info(f"{self.engine_name}: {table_name} #{record_id} created")
            return record_id
        return True

    @property
    def projection_store(self) -> TableProjectionStore:
        return self._projection_store
