"""Associative descriptor plans.

Frozen dataclasses representing a compiled, validated descriptor.
Used by AssocMapper at execution time.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from row_set.core.exceptions import DescriptorError, UnknownColumnError


class StepKind(Enum):
    """Kind of tree level a descriptor token produces."""

    COLUMN = "column"
    WILDCARD = "wildcard"
    RECORD = "record"


@dataclass(frozen=True)
class AssocStep:
    """One level of the tree walk.

    COLUMN steps branch on the row's value for ``column``. RECORD steps land
    the row and continue into its ``column`` attribute.
    """

    kind: StepKind
    column: str | None = None


@dataclass(frozen=True)
class AssocPlan:
    """Compiled associative descriptor."""

    descriptor: str
    steps: tuple[AssocStep, ...]
    single_column: bool = False

    @property
    def columns(self) -> tuple[str, ...]:
        """Column names the descriptor references, in order."""
        return tuple(
            step.column
            for step in self.steps
            if step.kind is StepKind.COLUMN and step.column is not None
        )

    @property
    def indexed_root(self) -> bool:
        """Whether the tree root is a list rather than a dict."""
        return bool(self.steps) and self.steps[0].kind is StepKind.WILDCARD

    def validate(self, row: Mapping[str, Any]) -> None:
        """Check every referenced column exists in row.

        Raises:
            UnknownColumnError: on the first missing column.
        """
        for column in self.columns:
            if column not in row:
                raise UnknownColumnError(column, f"associative descriptor '{self.descriptor}'")


def compile_descriptor(
    descriptor: str,
    *,
    separator: str = ",",
    wildcard: str = "*",
    record: str = "#",
) -> AssocPlan:
    """Compile a descriptor such as ``"cat,*"`` or ``"id,#,orders"`` into a plan.

    Tokens are stripped of surrounding whitespace, so ``"cat, *"`` equals
    ``"cat,*"``; a column whose name itself begins or ends with whitespace
    cannot be named in a descriptor. A single trailing record token is
    dropped. Every other record token must be followed by a column token,
    which it consumes as the attribute to drill into.

    Raises:
        DescriptorError: on empty tokens or a misplaced record token.
    """
    tokens = [token.strip() for token in descriptor.split(separator)]
    if any(not token for token in tokens):
        raise DescriptorError(descriptor, "empty token")

    if len(tokens) == 1 and tokens[0] not in (wildcard, record):
        return AssocPlan(
            descriptor=descriptor,
            steps=(AssocStep(StepKind.COLUMN, tokens[0]),),
            single_column=True,
        )

    if tokens[-1] == record:
        tokens.pop()
    if not tokens:
        raise DescriptorError(descriptor, "no grouping column")

    steps: list[AssocStep] = []
    for i, token in enumerate(tokens):
        if token == wildcard:
            steps.append(AssocStep(StepKind.WILDCARD))
        elif token == record:
            following = tokens[i + 1] if i + 1 < len(tokens) else None
            if following is None or following in (wildcard, record):
                raise DescriptorError(descriptor, f"'{record}' must be followed by a column")
            steps.append(AssocStep(StepKind.RECORD, following))
        else:
            steps.append(AssocStep(StepKind.COLUMN, token))

    return AssocPlan(descriptor=descriptor, steps=tuple(steps))
