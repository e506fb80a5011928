"""
Ledger Table Primitive - Counted Entity Table
===============================================
Engine: Core Primitives

Every entity table in the ledger shares one shape:
- ids are positive integers from a per-table counter starting at 0
  (first assigned id is 1)
- the counter only moves on a committed insert, never on failure
- ids are never reused; there is no delete
- records are immutable values; an update replaces the whole record

This file contains NO persistence logic and NO authorization.
"""

from __future__ import annotations

from typing import Dict, Generic, Iterator, Optional, Tuple, TypeVar

R = TypeVar("R")


class TableIntegrityError(Exception):
    """A write would break the counter/record invariants."""
    pass


class CountedTable(Generic[R]):
    """In-memory id -> record table with a monotonic counter."""

    def __init__(self, name: str):
        if not name:
            raise ValueError("table name must be non-empty.")
        self._name = name
        self._records: Dict[int, R] = {}
        self._counter = 0

    @property
    def name(self) -> str:
        return self._name

    def next_id(self) -> int:
        """Id the next successful insert will receive."""
        return self._counter + 1

    def insert(self, record_id: int, record: R) -> int:
        if record_id != self._counter + 1:
            raise TableIntegrityError(
                f"{self._name}: insert id {record_id} out of sequence "
                f"(expected {self._counter + 1})."
            )
        self._records[record_id] = record
        self._counter = record_id
        return record_id

    def replace(self, record_id: int, record: R) -> None:
        if record_id not in self._records:
            raise TableIntegrityError(
                f"{self._name}: cannot replace missing id {record_id}."
            )
        self._records[record_id] = record

    def get(self, record_id: int) -> Optional[R]:
        return self._records.get(record_id)

    def exists(self, record_id: int) -> bool:
        return record_id in self._records

    def count(self) -> int:
        return self._counter

    def items(self) -> Iterator[Tuple[int, R]]:
        return iter(sorted(self._records.items()))

    def snapshot(self) -> dict:
        """Counter plus a copy of the records (records are immutable)."""
        return {"counter": self._counter, "records": dict(self._records)}

    def __len__(self) -> int:
        return len(self._records)
