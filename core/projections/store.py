"""
Ledger Core Projections - Table Projection Store
==================================================
Base class for the in-memory entity tables an engine owns.

State is derived from events only: apply() is the single write path,
used both by live command execution and by replay.
"""

from __future__ import annotations

from typing import Any, Dict

from core.primitives.table import CountedTable


class UnknownProjectionEvent(Exception):
    def __init__(self, store_name: str, event_type: str):
        self.event_type = event_type
        super().__init__(
            f"Projection '{store_name}' has no handler for '{event_type}'."
        )


class TableProjectionStore:
    """
    Subclasses declare `projection_name` and `table_names`, and map
    event types to handler methods in `_appliers()`.
    """

    projection_name: str = ""
    table_names: tuple[str, ...] = ()

    def __init__(self):
        self._tables: Dict[str, CountedTable] = {
            name: CountedTable(name) for name in self.table_names
        }
        self._event_count = 0

    def table(self, name: str) -> CountedTable:
        try:
            return self._tables[name]
        except KeyError:
            raise KeyError(
                f"Projection '{self.projection_name}' has no table '{name}'."
            ) from None

    def _appliers(self) -> Dict[str, Any]:
        raise NotImplementedError

    def apply(self, event_type: str, payload: Dict[str, Any]) -> None:
        handler = self._appliers().get(event_type)
        if handler is None:
            raise UnknownProjectionEvent(self.projection_name, event_type)
        handler(payload)
        self._event_count += 1

    @property
    def event_count(self) -> int:
        return self._event_count

    def snapshot(self) -> dict:
        return {name: table.snapshot() for name, table in self._tables.items()}

    def counts(self) -> dict:
        return {name: table.count() for name, table in self._tables.items()}

    def adopt(self, other: TableProjectionStore) -> None:
        """Take over the tables of a store of the same kind."""
        if type(other) is not type(self):
            raise TypeError(
                f"Projection '{self.projection_name}' cannot adopt "
                f"{type(other).__name__}."
            )
        self._tables = other._tables
        self._event_count = other._event_count
