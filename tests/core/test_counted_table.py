"""Ledger primitives - CountedTable tests."""

from dataclasses import dataclass

import pytest

from core.primitives.table import CountedTable, TableIntegrityError


@dataclass(frozen=True)
class Row:
    row_id: int
    label: str


class TestCountedTable:
    def test_starts_empty(self):
        table = CountedTable("rows")
        assert table.count() == 0
        assert table.next_id() == 1
        assert table.get(1) is None
        assert len(table) == 0

    def test_next_id_does_not_advance(self):
        table = CountedTable("rows")
        table.next_id()
        table.next_id()
        assert table.count() == 0

    def test_insert_advances_counter(self):
        table = CountedTable("rows")
        assert table.insert(1, Row(1, "a")) == 1
        assert table.insert(2, Row(2, "b")) == 2
        assert table.count() == 2
        assert table.next_id() == 3
        assert table.get(2) == Row(2, "b")

    def test_insert_out_of_sequence(self):
        table = CountedTable("rows")
        with pytest.raises(TableIntegrityError, match="out of sequence"):
            table.insert(2, Row(2, "b"))
        assert table.count() == 0

    def test_replace_keeps_counter(self):
        table = CountedTable("rows")
        table.insert(1, Row(1, "a"))
        table.replace(1, Row(1, "z"))
        assert table.get(1).label == "z"
        assert table.count() == 1

    def test_replace_missing(self):
        table = CountedTable("rows")
        with pytest.raises(TableIntegrityError, match="missing"):
            table.replace(1, Row(1, "a"))

    def test_exists_and_items(self):
        table = CountedTable("rows")
        table.insert(1, Row(1, "a"))
        table.insert(2, Row(2, "b"))
        assert table.exists(1)
        assert not table.exists(3)
        assert [row_id for row_id, _ in table.items()] == [1, 2]

    def test_snapshot_is_detached(self):
        table = CountedTable("rows")
        table.insert(1, Row(1, "a"))
        snapshot = table.snapshot()
        table.insert(2, Row(2, "b"))
        assert snapshot == {"counter": 1, "records": {1: Row(1, "a")}}

    def test_name_required(self):
        with pytest.raises(ValueError):
            CountedTable("")
