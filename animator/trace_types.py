"""Trace data types: the wire format produced by instrumented programs."""

from __future__ import annotations

from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from . import constants

Number = Union[int, float]


class WireModel(BaseModel):
    """Base for models exchanged as camelCase JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class OperationType(str, Enum):
    # Pairwise
    COMPARE = "compare"
    SWAP = "swap"
    # Single element
    ASSIGN = "assign"
    ACCESS = "access"
    MARK_SORTED = "mark_sorted"
    MARK_PIVOT = "mark_pivot"


OPERATION_ARITY: dict[OperationType, int] = {
    OperationType.COMPARE: 2,
    OperationType.SWAP: 2,
    OperationType.ASSIGN: 1,
    OperationType.ACCESS: 1,
    OperationType.MARK_SORTED: 1,
    OperationType.MARK_PIVOT: 1,
}

# Operation kinds that have a counter in TraceStats
STAT_FIELD_BY_TYPE: dict[OperationType, str] = {
    OperationType.COMPARE: constants.STAT_COMPARISONS,
    OperationType.SWAP: constants.STAT_SWAPS,
    OperationType.ASSIGN: constants.STAT_ASSIGNMENTS,
    OperationType.ACCESS: constants.STAT_ACCESSES,
}


class TracedOperation(WireModel):
    id: int
    type: OperationType
    indices: list[int] = []
    values: list[Number | None] | None = None  # null where the producer read past the array
    timestamp: float = 0.0
    description: str = ""
    line: int | None = None  # pseudocode line, when the producer knows it

    def __str__(self) -> str:
        args = ", ".join(str(i) for i in self.indices)
        return f"#{self.id} {self.type.value}({args})"


class TraceStats(WireModel):
    comparisons: int = 0
    swaps: int = 0
    assignments: int = 0
    accesses: int = 0


class ExecutionTrace(WireModel):
    """Complete trace of one instrumented run.

    ``operations`` is the authoritative log. ``array_snapshots`` are coarse
    checkpoints, ``final_array`` is the post-execution array and ``stats``
    repeats the operation counts so corruption can be detected.
    ``array_length`` and ``partial`` are producer declarations: the declared
    element count, and whether id gaps are acceptable.
    """

    operations: list[TracedOperation] = []
    array_snapshots: list[list[Number]] = []
    final_array: list[Number] = []
    stats: TraceStats | None = None
    execution_time: float = 0.0
    array_length: int | None = Field(default=None, ge=0)
    partial: bool = False
