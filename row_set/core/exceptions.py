"""RowSet exception hierarchy.

Raw driver exceptions are wrapped before they reach callers. Exhaustion of a
result is never an error.
"""

from __future__ import annotations


class RowSetError(Exception):
    """Base exception for all RowSet errors."""


# --- Materialization ---


class MaterializationError(RowSetError):
    """Base for invalid arguments passed to a bulk materializer."""


class DescriptorError(MaterializationError):
    """Raised when an associative descriptor is malformed."""

    def __init__(self, descriptor: str, detail: str) -> None:
        self.descriptor = descriptor
        super().__init__(f"Invalid associative descriptor '{descriptor}': {detail}")


class UnknownColumnError(MaterializationError):
    """Raised when a descriptor or pair argument names a column the result lacks."""

    def __init__(self, column: str, context: str) -> None:
        self.column = column
        self.context = context
        super().__init__(f"Unknown column '{column}' in {context}")


class ArgumentCombinationError(MaterializationError):
    """Raised when fetch_pairs gets a key column without a value column."""

    def __init__(self) -> None:
        super().__init__("Either none or both of key and value columns must be specified")


class InsufficientColumnsError(MaterializationError):
    """Raised when key/value auto-detection finds fewer than two columns."""

    def __init__(self, column_count: int) -> None:
        self.column_count = column_count
        super().__init__(
            f"Result must have at least two columns for pairs, got {column_count}"
        )


# --- Adapter ---


class AdapterError(RowSetError):
    """Base for row source errors."""


class SourceError(AdapterError):
    """Raised when a row source fails to execute or fetch."""


# --- Lifetime ---


class ResultReleasedError(RowSetError):
    """Raised when fetching from a result set whose source was released."""

    def __init__(self) -> None:
        super().__init__("Result set has been released")
