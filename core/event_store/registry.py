"""
Ledger Event Store - Event Type Registry
==========================================
Which event types may be journaled, and which engine owns each one.

Event types are versioned: engine.domain.action.vN
The first segment names the owning engine; an engine may only
register, and the journal may only record, types in its own namespace.
"""

from __future__ import annotations

import re
from threading import Lock
from typing import Iterable, Optional

_VERSION_SEGMENT = re.compile(r"^v[1-9][0-9]*$")


class EventTypeError(ValueError):
    """Malformed event type, or one claimed outside its namespace."""
    pass


def event_namespace(event_type: str) -> str:
    return event_type.split(".")[0]


def validate_event_type(event_type: str) -> None:
    if not event_type or not isinstance(event_type, str):
        raise EventTypeError("Event type must be a non-empty string.")

    parts = event_type.split(".")
    if len(parts) < 4 or not all(parts):
        raise EventTypeError(
            f"Event type '{event_type}' does not follow "
            f"engine.domain.action.vN format."
        )
    if not _VERSION_SEGMENT.match(parts[-1]):
        raise EventTypeError(
            f"Event type '{event_type}' must end with a version (e.g. '.v1')."
        )


class EventTypeRegistry:
    """
    Usage:
        registry = EventTypeRegistry()
        registry.register_engine_types(
            "applicant", ["applicant.applicant.registered.v1"],
        )
        registry.owner_of("applicant.applicant.registered.v1")  # "applicant"
    """

    def __init__(self):
        self._owners: dict[str, str] = {}
        self._lock = Lock()

    def register(self, event_type: str) -> None:
        """Register a type owned by the engine its namespace names."""
        self.register_engine_types(event_namespace(event_type), [event_type])

    def register_engine_types(self, engine_name: str,
                              event_types: Iterable[str]) -> None:
        event_types = tuple(event_types)
        for event_type in event_types:
            validate_event_type(event_type)
            if event_namespace(event_type) != engine_name:
                raise EventTypeError(
                    f"Engine '{engine_name}' cannot own '{event_type}'."
                )

        with self._lock:
            self._owners.update({t: engine_name for t in event_types})

    def is_registered(self, event_type: str) -> bool:
        with self._lock:
            return event_type in self._owners

    def owner_of(self, event_type: str) -> Optional[str]:
        with self._lock:
            return self._owners.get(event_type)

    def get_all_registered(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._owners)

    def types_for(self, engine_name: str) -> frozenset[str]:
        with self._lock:
            return frozenset(
                t for t, owner in self._owners.items() if owner == engine_name
            )

    def count(self) -> int:
        with self._lock:
            return len(self._owners)
