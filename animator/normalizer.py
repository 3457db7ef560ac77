"""Operation Normalizer: structural validation of an untrusted operation log."""

from __future__ import annotations

import logging

from .errors import MalformedTraceError
from .trace_types import OPERATION_ARITY, ExecutionTrace, TracedOperation
from . import constants

logger = logging.getLogger(__name__)


def resolve_array_length(trace: ExecutionTrace) -> int | None:
    """Return the array length the producer declared, or None if it declared none.

    Falls back from the explicit ``array_length`` to the final array and then
    to the first snapshot.
    """
    if trace.array_length is not None:
        return trace.array_length
    if trace.final_array:
        return len(trace.final_array)
    if trace.array_snapshots:
        return len(trace.array_snapshots[0])
    return None


def infer_array_length(trace: ExecutionTrace) -> int:
    """Declared length if any, else largest index seen plus one."""
    declared = resolve_array_length(trace)
    if declared is not None:
        return declared
    return max(
        (index + 1 for op in trace.operations for index in op.indices),
        default=0,
    )


def _check_ordering(op: TracedOperation, previous_id: int | None, partial: bool):
    if previous_id is None:
        return
    if op.id <= previous_id:
        raise MalformedTraceError(
            op.id,
            constants.RULE_ORDERING,
            f"id does not follow previous id {previous_id}",
        )
    if not partial and op.id != previous_id + 1:
        raise MalformedTraceError(
            op.id,
            constants.RULE_GAP,
            f"gap after id {previous_id} in a trace not marked partial",
        )


def _check_arity(op: TracedOperation):
    expected = OPERATION_ARITY[op.type]
    if len(op.indices) != expected:
        raise MalformedTraceError(
            op.id,
            constants.RULE_ARITY,
            f"{op.type.value} takes {expected} indices, got {len(op.indices)}",
        )
    if op.values is not None and len(op.values) != len(op.indices):
        raise MalformedTraceError(
            op.id,
            constants.RULE_VALUES_ARITY,
            f"{len(op.values)} values for {len(op.indices)} indices",
        )


def _check_bounds(op: TracedOperation, length: int | None):
    for index in op.indices:
        if index < 0 or (length is not None and index >= length):
            raise MalformedTraceError(
                op.id,
                constants.RULE_BOUNDS,
                f"index {index} outside [0, {length if length is not None else 'n'})",
            )


def normalize_operations(trace: ExecutionTrace) -> list[TracedOperation]:
    """Validate every operation of *trace* and return them in order.

    Args:
        trace: The untrusted trace as received from the producer.

    Returns:
        A new list holding the same operations, in the same order.

    Raises:
        MalformedTraceError: On the first operation violating ordering, gap,
            arity, value-arity or bounds rules.
    """
    length = resolve_array_length(trace)
    previous_id: int | None = None
    for op in trace.operations:
        _check_ordering(op, previous_id, trace.partial)
        _check_arity(op)
        _check_bounds(op, length)
        previous_id = op.id

    logger.debug(
        "Normalized %d operations (array length %s, partial=%s)",
        len(trace.operations),
        length,
        trace.partial,
    )
    return list(trace.operations)
