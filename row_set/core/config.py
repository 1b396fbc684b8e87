"""Result set configuration.

ResultSetConfig is a Pydantic model holding the descriptor mini-language
tokens and the initial conversion table.
"""

from __future__ import annotations

from pydantic import BaseModel, model_validator

from row_set.core.enums import ColumnType


class ResultSetConfig(BaseModel):
    """Configuration for a result set."""

    separator: str = ","
    wildcard: str = "*"
    record: str = "#"
    detect_types: bool = False
    conversions: dict[str, ColumnType] = {}

    @model_validator(mode="after")
    def _check_tokens(self) -> ResultSetConfig:
        if not self.separator:
            raise ValueError("separator must not be empty")
        if not self.wildcard or not self.record:
            raise ValueError("wildcard and record tokens must not be empty")
        if self.wildcard == self.record:
            raise ValueError("wildcard and record tokens must differ")
        for token in (self.wildcard, self.record):
            if self.separator in token:
                raise ValueError(f"token '{token}' must not contain the separator")
        return self
