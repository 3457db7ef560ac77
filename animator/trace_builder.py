"""Trace construction helpers: record operations against a live array, merge traces."""

from __future__ import annotations

import logging
import time
from typing import Callable

from .aggregator import count_operations
from .trace_types import (
    ExecutionTrace,
    Number,
    OperationType,
    TracedOperation,
    TraceStats,
)

logger = logging.getLogger(__name__)


class TraceRecorder:
    """Records primitive operations performed on a Python list.

    Mirrors the instrumentation prelude injected into user programs: every
    call logs one operation with the values it saw and a snapshot of the
    array taken before the operation mutates it, then performs the
    operation on ``self.array``.
    """

    def __init__(
        self,
        array: list[Number],
        clock: Callable[[], float] = time.perf_counter,
    ):
        self.array: list[Number] = list(array)
        self.operations: list[TracedOperation] = []
        self.snapshots: list[list[Number]] = []
        self._clock = clock
        self._start = clock()

    def _elapsed_ms(self) -> float:
        return (self._clock() - self._start) * 1000

    def record(
        self,
        op_type: OperationType,
        indices: list[int],
        values: list[Number] | None,
        description: str,
        line: int | None = None,
    ) -> TracedOperation:
        """Log a generic operation without touching the array."""
        operation = TracedOperation(
            id=len(self.operations),
            type=op_type,
            indices=indices,
            values=values,
            timestamp=self._elapsed_ms(),
            description=description,
            line=line,
        )
        self.operations.append(operation)
        self.snapshots.append(list(self.array))
        return operation

    def compare(self, i: int, j: int, line: int | None = None) -> Number:
        a, b = self.array[i], self.array[j]
        self.record(
            OperationType.COMPARE,
            [i, j],
            [a, b],
            f"Comparing arr[{i}]={a} with arr[{j}]={b}",
            line,
        )
        return a - b

    def swap(self, i: int, j: int, line: int | None = None):
        a, b = self.array[i], self.array[j]
        self.record(
            OperationType.SWAP,
            [i, j],
            [a, b],
            f"Swapping arr[{i}]={a} with arr[{j}]={b}",
            line,
        )
        self.array[i], self.array[j] = b, a

    def assign(self, i: int, value: Number, line: int | None = None):
        self.record(
            OperationType.ASSIGN,
            [i],
            [value],
            f"Setting arr[{i}] = {value}",
            line,
        )
        self.array[i] = value

    def access(self, i: int, line: int | None = None) -> Number:
        value = self.array[i]
        self.record(OperationType.ACCESS, [i], [value], f"Reading arr[{i}]={value}", line)
        return value

    def mark_sorted(self, i: int, line: int | None = None):
        self.record(
            OperationType.MARK_SORTED,
            [i],
            [self.array[i]],
            f"Element at index {i} is sorted",
            line,
        )

    def mark_pivot(self, i: int, line: int | None = None):
        self.record(
            OperationType.MARK_PIVOT,
            [i],
            [self.array[i]],
            f"Pivot selected at index {i}",
            line,
        )

    def build(self) -> ExecutionTrace:
        """Freeze everything recorded so far into an ExecutionTrace."""
        trace = ExecutionTrace(
            operations=list(self.operations),
            array_snapshots=[list(s) for s in self.snapshots],
            final_array=list(self.array),
            stats=TraceStats(**count_operations(self.operations)),
            execution_time=self._elapsed_ms(),
            array_length=len(self.array),
        )
        logger.debug("Recorded trace with %d operations", len(trace.operations))
        return trace


def create_initial_trace(array: list[Number]) -> ExecutionTrace:
    """An empty trace holding only the starting array."""
    return ExecutionTrace(
        operations=[],
        array_snapshots=[list(array)],
        final_array=list(array),
        stats=TraceStats(),
        array_length=len(array),
    )


def _sum_stats(traces: list[ExecutionTrace]) -> TraceStats | None:
    if any(trace.stats is None for trace in traces):
        return None
    return TraceStats(
        comparisons=sum(t.stats.comparisons for t in traces),
        swaps=sum(t.stats.swaps for t in traces),
        assignments=sum(t.stats.assignments for t in traces),
        accesses=sum(t.stats.accesses for t in traces),
    )


def merge_traces(traces: list[ExecutionTrace]) -> ExecutionTrace:
    """Concatenate traces (e.g. one per recursive call) into one.

    Operation ids are renumbered from 0 so the result is gap-free; the final
    array is taken from the last trace. Stats are summed, or dropped when
    any input lacks them.
    """
    if not traces:
        return ExecutionTrace()

    operations = [
        op.model_copy(update={"id": new_id})
        for new_id, op in enumerate(op for trace in traces for op in trace.operations)
    ]
    declared = [t.array_length for t in traces if t.array_length is not None]
    return ExecutionTrace(
        operations=operations,
        array_snapshots=[s for trace in traces for s in trace.array_snapshots],
        final_array=list(traces[-1].final_array),
        stats=_sum_stats(traces),
        execution_time=sum(t.execution_time for t in traces),
        array_length=max(declared) if declared else None,
    )
