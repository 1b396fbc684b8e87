"""Mapping layer - fold row streams into lists, pairs and trees."""

from __future__ import annotations

from row_set.mapping.assoc import AssocMapper
from row_set.mapping.flat import PairsMapper, RowsMapper
from row_set.mapping.plan import AssocPlan, AssocStep, StepKind, compile_descriptor
from row_set.mapping.protocol import Mapper

__all__ = [
    "Mapper",
    "RowsMapper",
    "PairsMapper",
    "AssocMapper",
    "AssocPlan",
    "AssocStep",
    "StepKind",
    "compile_descriptor",
]
