"""Unit tests for AssocMapper."""

from __future__ import annotations

from typing import Any

import pytest

from row_set.core.exceptions import UnknownColumnError
from row_set.mapping.assoc import AssocMapper
from row_set.mapping.plan import compile_descriptor


def _map(descriptor: str, rows: list[dict[str, Any]]) -> Any:
    return AssocMapper(compile_descriptor(descriptor)).map_many(rows)


CATEGORY_ROWS = [
    {"cat": "a", "n": 1},
    {"cat": "a", "n": 2},
    {"cat": "b", "n": 3},
]

ORDER_ROWS = [
    {"cust": "c1", "name": "Ann", "order": "o1", "item": "pen"},
    {"cust": "c1", "name": "Ann", "order": "o1", "item": "ink"},
    {"cust": "c1", "name": "Ann", "order": "o2", "item": "pad"},
    {"cust": "c2", "name": "Bob", "order": "o3", "item": "pen"},
]


class TestAssocMapper:
    def test_single_column(self) -> None:
        rows = [{"id": 1, "v": "x"}, {"id": 2, "v": "y"}]
        assert _map("id", rows) == {1: {"id": 1, "v": "x"}, 2: {"id": 2, "v": "y"}}

    def test_single_column_last_row_wins(self) -> None:
        rows = [{"id": 1, "v": "x"}, {"id": 1, "v": "y"}]
        assert _map("id", rows) == {1: {"id": 1, "v": "y"}}

    def test_trailing_record_keeps_first_row(self) -> None:
        rows = [{"id": 1, "v": "x"}, {"id": 1, "v": "y"}]
        assert _map("id,#", rows) == {1: {"id": 1, "v": "x"}}

    def test_wildcard_fans_out_without_dedup(self) -> None:
        assert _map("cat,*", CATEGORY_ROWS) == {
            "a": [{"cat": "a", "n": 1}, {"cat": "a", "n": 2}],
            "b": [{"cat": "b", "n": 3}],
        }

    def test_wildcard_only_is_row_list(self) -> None:
        assert _map("*", CATEGORY_ROWS) == CATEGORY_ROWS

    def test_wildcard_root_then_column(self) -> None:
        assert _map("*,cat", CATEGORY_ROWS[:2]) == [
            {"a": {"cat": "a", "n": 1}},
            {"a": {"cat": "a", "n": 2}},
        ]

    def test_two_level_grouping(self) -> None:
        tree = _map("cust,order", ORDER_ROWS)
        assert list(tree) == ["c1", "c2"]
        assert list(tree["c1"]) == ["o1", "o2"]
        # first row reaching a leaf keeps it
        assert tree["c1"]["o1"]["item"] == "pen"
        assert tree["c2"]["o3"] == ORDER_ROWS[3]

    def test_grouping_then_fan_out(self) -> None:
        tree = _map("cust,order,*", ORDER_ROWS)
        assert [row["item"] for row in tree["c1"]["o1"]] == ["pen", "ink"]
        assert [row["item"] for row in tree["c1"]["o2"]] == ["pad"]

    def test_record_lands_row_and_branches_on_attribute(self) -> None:
        tree = _map("cust,#,order", ORDER_ROWS)
        ann = tree["c1"]
        assert ann["name"] == "Ann"
        assert ann["cust"] == "c1"
        assert list(ann["order"]) == ["o1", "o2"]
        assert ann["order"]["o1"]["item"] == "pen"
        assert tree["c2"]["order"] == {"o3": ORDER_ROWS[3]}

    def test_record_then_fan_out(self) -> None:
        tree = _map("cust,#,order,*", ORDER_ROWS)
        assert [row["item"] for row in tree["c1"]["order"]["o1"]] == ["pen", "ink"]
        assert tree["c1"]["item"] == "pen"

    def test_record_node_does_not_alias_leaf_rows(self) -> None:
        rows = [dict(row) for row in ORDER_ROWS]
        tree = _map("cust,#,order", rows)
        assert rows[0]["order"] == "o1"
        assert tree["c1"]["order"]["o1"] is rows[0]

    def test_mixed_wildcard_and_record(self) -> None:
        tree = _map("cust,*,order,#,item", ORDER_ROWS[:2])
        assert len(tree["c1"]) == 2
        first = tree["c1"][0]["o1"]
        assert first["name"] == "Ann"
        assert first["item"] == {"pen": ORDER_ROWS[0]}

    def test_none_values_group_together(self) -> None:
        rows = [{"k": None, "n": 1}, {"k": None, "n": 2}]
        assert _map("k,*", rows) == {None: rows}

    def test_empty_rows(self) -> None:
        assert _map("cat,*", []) == {}
        assert _map("*,cat", []) == []

    def test_unknown_column_fails_before_output(self) -> None:
        consumed: list[dict[str, Any]] = []

        def rows():
            for row in CATEGORY_ROWS:
                consumed.append(row)
                yield row

        with pytest.raises(UnknownColumnError, match="bad_col"):
            AssocMapper(compile_descriptor("cat,bad_col")).map_many(rows())
        assert len(consumed) == 1

    def test_accepts_lazy_iterables(self) -> None:
        assert _map("cat,*", iter(CATEGORY_ROWS)) == _map("cat,*", CATEGORY_ROWS)
