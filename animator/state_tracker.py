"""State Tracker: the per-element visual state vector and its transition rules.

Each index carries two layers:

* a *sticky* layer holding ``default``, ``pivot`` or ``sorted``; it persists
  for the rest of the trace and only ever moves up the precedence order;
* a *pulse* that exists for the duration of a single ``apply`` call
  (``comparing``/``swapping`` highlights).

The displayed state is the higher-precedence of the two, so a transient
highlight can never hide a sorted or pivot element, and anything not touched
by the current operation falls back to its sticky state on the next step.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from .animation_types import ElementSnapshot, ElementVisualState, strongest
from .errors import IndexOutOfRangeError
from .trace_types import Number, OperationType, TracedOperation

logger = logging.getLogger(__name__)

Pulse = dict[int, ElementVisualState]


@dataclass(frozen=True)
class ValueMismatch:
    """Operation-reported value disagreeing with the tracked value."""

    operation_id: int
    index: int
    tracked: Number
    reported: Number


class StateTracker:
    """Owns the visual state of one array for the lifetime of one synthesis."""

    def __init__(self, length: int, initial_values: list[Number] | None = None):
        if length < 0:
            raise ValueError(f"Array length must be non-negative, got {length}")
        if initial_values is not None and len(initial_values) != length:
            raise ValueError(
                f"Expected {length} initial values, got {len(initial_values)}"
            )
        self._length = length
        self._sticky: list[ElementVisualState] = [ElementVisualState.DEFAULT] * length
        self._values: list[Number | None] = (
            list(initial_values) if initial_values is not None else [None] * length
        )
        self.value_mismatches: list[ValueMismatch] = []
        # Tracked values just before each applied operation
        self.pre_operation_values: list[list[Number | None]] = []

    @property
    def length(self) -> int:
        return self._length

    @property
    def values(self) -> list[Number | None]:
        return list(self._values)

    @property
    def sticky_states(self) -> list[ElementVisualState]:
        return list(self._sticky)

    def apply(self, operation: TracedOperation) -> list[ElementSnapshot]:
        """Apply *operation* and return the full per-index snapshot after it.

        Raises:
            IndexOutOfRangeError: If any index of the operation falls outside
                the tracked array. The tracker is left untouched.
        """
        self._check_indices(operation)
        self._reconcile_values(operation)
        self.pre_operation_values.append(list(self._values))
        pulse = _TRANSITIONS[operation.type](self, operation)
        logger.debug("Applied %s, pulse=%s", operation, pulse)
        return self.snapshot(pulse)

    def snapshot(self, pulse: Pulse | None = None) -> list[ElementSnapshot]:
        """Build the per-index view, overlaying *pulse* on the sticky layer."""
        pulse = pulse or {}
        return [
            ElementSnapshot(
                value=value,
                state=strongest(sticky, pulse.get(index, ElementVisualState.DEFAULT)),
            )
            for index, (value, sticky) in enumerate(zip(self._values, self._sticky))
        ]

    def _check_indices(self, operation: TracedOperation):
        for index in operation.indices:
            if index < 0 or index >= self._length:
                raise IndexOutOfRangeError(operation.id, index, self._length)

    def _reconcile_values(self, operation: TracedOperation):
        """Fill unknown values from telemetry and record disagreements.

        Assign carries the *new* value, so it is not compared here. Null
        entries carry no information and are skipped.
        """
        if operation.values is None or operation.type == OperationType.ASSIGN:
            return
        for index, reported in zip(operation.indices, operation.values):
            if reported is None:
                continue
            tracked = self._values[index]
            if tracked is None:
                self._values[index] = reported
            elif tracked != reported:
                self.value_mismatches.append(
                    ValueMismatch(operation.id, index, tracked, reported)
                )

    # ── Transitions ──────────────────────────────────────────────

    def _compare(self, operation: TracedOperation) -> Pulse:
        return {index: ElementVisualState.COMPARING for index in operation.indices}

    def _swap(self, operation: TracedOperation) -> Pulse:
        i, j = operation.indices
        if operation.values is not None:
            self._values[i], self._values[j] = self._values[j], self._values[i]
        return {i: ElementVisualState.SWAPPING, j: ElementVisualState.SWAPPING}

    def _assign(self, operation: TracedOperation) -> Pulse:
        (index,) = operation.indices
        if operation.values is not None and operation.values[0] is not None:
            self._values[index] = operation.values[0]
        return {index: ElementVisualState.DEFAULT}

    def _access(self, operation: TracedOperation) -> Pulse:
        (index,) = operation.indices
        return {index: ElementVisualState.COMPARING}

    def _mark_sorted(self, operation: TracedOperation) -> Pulse:
        (index,) = operation.indices
        self._sticky[index] = ElementVisualState.SORTED
        return {}

    def _mark_pivot(self, operation: TracedOperation) -> Pulse:
        (index,) = operation.indices
        self._sticky[index] = strongest(self._sticky[index], ElementVisualState.PIVOT)
        return {}


_TRANSITIONS: dict[OperationType, Callable[[StateTracker, TracedOperation], Pulse]] = {
    OperationType.COMPARE: StateTracker._compare,
    OperationType.SWAP: StateTracker._swap,
    OperationType.ASSIGN: StateTracker._assign,
    OperationType.ACCESS: StateTracker._access,
    OperationType.MARK_SORTED: StateTracker._mark_sorted,
    OperationType.MARK_PIVOT: StateTracker._mark_pivot,
}
