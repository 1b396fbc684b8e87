"""Associative tree reconstruction mapper.

Single-pass O(rows x descriptor length) tree construction. Each row is walked
into the tree through an explicit slot handle, a (container, key) pair, with
get-or-insert at every level. Grouping falls out of reusing dict branches
keyed by row values; no sort or buffering pass is made.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from row_set.mapping.plan import AssocPlan, StepKind

# Marks a slot that has been reserved but not yet filled
_UNSET = object()


def _get(container: dict[Any, Any] | list[Any], key: Any) -> Any:
    if isinstance(container, list):
        return container[key]
    return container.get(key, _UNSET)


def _branch(container: dict[Any, Any] | list[Any], key: Any, factory: type) -> Any:
    """Return the node in slot (container, key), creating it if the slot is unset."""
    node = _get(container, key)
    if node is _UNSET:
        node = factory()
        container[key] = node
    return node


class AssocMapper:
    """Builds nested dict/list trees from flat rows as an AssocPlan describes.

    Example, descriptor ``"cat,*"``::

        {"a": [row1, row2], "b": [row3]}

    Descriptor ``"cust,#,order"`` lands the first row of each customer and
    groups that customer's rows under its ``order`` attribute::

        {"c1": {"cust": "c1", ..., "order": {"o1": row1, "o2": row2}}}
    """

    def __init__(self, plan: AssocPlan) -> None:
        self._plan = plan

    def map_many(self, rows: Iterable[dict[str, Any]]) -> dict[Any, Any] | list[Any]:
        """Validate against the first row, then fold every row into the tree.

        Raises:
            UnknownColumnError: if the descriptor names a column the first
                row lacks. Nothing is built in that case.
        """
        iterator = iter(rows)
        first = next(iterator, None)
        if first is None:
            return [] if self._plan.indexed_root else {}

        self._plan.validate(first)

        if self._plan.single_column:
            column = self._plan.steps[0].column
            data: dict[Any, Any] = {first[column]: first}
            for row in iterator:
                data[row[column]] = row
            return data

        root: list[Any] = [_UNSET]
        self._walk(root, first)
        for row in iterator:
            self._walk(root, row)
        return root[0]  # type: ignore[no-any-return]

    def _walk(self, root: list[Any], row: dict[str, Any]) -> None:
        """Walk one row from the root to its leaf, creating branches on the way."""
        container: Any = root
        key: Any = 0

        for step in self._plan.steps:
            if step.kind is StepKind.COLUMN:
                container, key = _branch(container, key, dict), row[step.column]

            elif step.kind is StepKind.WILDCARD:
                node = _branch(container, key, list)
                node.append(_UNSET)
                container, key = node, len(node) - 1

            else:  # record
                node = _get(container, key)
                if node is _UNSET:
                    node = dict(row)
                    node[step.column] = {}
                    container[key] = node
                container, key = node, step.column

        if _get(container, key) is _UNSET:
            container[key] = row
