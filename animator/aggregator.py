"""Trace Aggregator: cross-checks synthesised state against the trace's declarations."""

from __future__ import annotations

import logging
from collections import Counter

from .errors import TraceConsistencyWarning
from .state_tracker import StateTracker
from .trace_types import STAT_FIELD_BY_TYPE, ExecutionTrace, TracedOperation
from . import constants

logger = logging.getLogger(__name__)


def count_operations(operations: list[TracedOperation]) -> dict[str, int]:
    """Return the stat counters recomputed from an operation log.

    Every stat kind is present in the result, zero when unused.
    """
    counts = Counter(
        STAT_FIELD_BY_TYPE[op.type] for op in operations if op.type in STAT_FIELD_BY_TYPE
    )
    return {kind: counts.get(kind, 0) for kind in constants.STAT_KINDS}


def _stat_warnings(
    trace: ExecutionTrace, operations: list[TracedOperation]
) -> list[TraceConsistencyWarning]:
    if trace.stats is None:
        return []
    actual = count_operations(operations)
    return [
        TraceConsistencyWarning(kind=kind, expected=getattr(trace.stats, kind), actual=actual[kind])
        for kind in constants.STAT_KINDS
        if getattr(trace.stats, kind) != actual[kind]
    ]


def _final_array_warnings(
    trace: ExecutionTrace, tracker: StateTracker
) -> list[TraceConsistencyWarning]:
    if not trace.final_array:
        return []
    tracked = tracker.values
    if len(tracked) != len(trace.final_array):
        return [
            TraceConsistencyWarning(
                kind=constants.WARNING_FINAL_ARRAY_LENGTH,
                expected=len(trace.final_array),
                actual=len(tracked),
            )
        ]
    known_pairs = [
        (expected, actual)
        for expected, actual in zip(trace.final_array, tracked)
        if actual is not None
    ]
    if all(expected == actual for expected, actual in known_pairs):
        return []
    return [
        TraceConsistencyWarning(
            kind=constants.WARNING_FINAL_ARRAY,
            expected=list(trace.final_array),
            actual=tracked,
        )
    ]


def _value_warnings(tracker: StateTracker) -> list[TraceConsistencyWarning]:
    return [
        TraceConsistencyWarning(
            kind=constants.WARNING_VALUES,
            expected=mismatch.tracked,
            actual=mismatch.reported,
            operation_id=mismatch.operation_id,
        )
        for mismatch in tracker.value_mismatches
    ]


def _snapshot_warnings(
    trace: ExecutionTrace,
    operations: list[TracedOperation],
    tracker: StateTracker,
) -> list[TraceConsistencyWarning]:
    """Compare the producer's pre-operation snapshots with the tracked values.

    Only runs when there is exactly one snapshot per operation. Unknown
    tracked values are not compared.
    """
    if len(trace.array_snapshots) != len(trace.operations):
        return []
    warnings = []
    for op, snapshot, tracked in zip(
        operations, trace.array_snapshots, tracker.pre_operation_values
    ):
        agrees = len(snapshot) == len(tracked) and all(
            actual is None or actual == expected
            for expected, actual in zip(snapshot, tracked)
        )
        if not agrees:
            warnings.append(
                TraceConsistencyWarning(
                    kind=constants.WARNING_SNAPSHOT,
                    expected=list(snapshot),
                    actual=tracked,
                    operation_id=op.id,
                )
            )
    return warnings


def check_consistency(
    trace: ExecutionTrace,
    operations: list[TracedOperation],
    tracker: StateTracker,
    complete: bool = True,
) -> list[TraceConsistencyWarning]:
    """Compare the processed operations and final tracked state with the trace.

    Args:
        trace: The trace whose declarations (stats, final array) are checked.
        operations: The operations actually processed, in order.
        tracker: The tracker after processing *operations*.
        complete: False when synthesis stopped early; whole-trace checks
            (stats, final array) are skipped for a prefix.

    Returns:
        Warnings in a fixed order: stats, final array, operation values,
        snapshots.
    """
    warnings: list[TraceConsistencyWarning] = []
    if complete:
        warnings.extend(_stat_warnings(trace, operations))
        warnings.extend(_final_array_warnings(trace, tracker))
    warnings.extend(_value_warnings(tracker))
    warnings.extend(_snapshot_warnings(trace, operations, tracker))

    for warning in warnings:
        logger.warning("Trace inconsistency: %s", warning.message)
    return warnings
