"""Reference sorting algorithms written against TraceRecorder.

They produce realistic traces for demos and tests; the synthesis engine never
looks at which algorithm produced a trace.
"""

from __future__ import annotations

import logging
from typing import Callable

from .trace_builder import TraceRecorder
from .trace_types import ExecutionTrace, Number

logger = logging.getLogger(__name__)


def bubble_sort(rec: TraceRecorder):
    n = len(rec.array)
    for i in range(n - 1):
        for j in range(n - i - 1):
            if rec.compare(j, j + 1) > 0:
                rec.swap(j, j + 1)
        rec.mark_sorted(n - 1 - i)
    if n:
        rec.mark_sorted(0)


def selection_sort(rec: TraceRecorder):
    n = len(rec.array)
    for i in range(n - 1):
        min_idx = i
        for j in range(i + 1, n):
            if rec.compare(j, min_idx) < 0:
                min_idx = j
        if min_idx != i:
            rec.swap(i, min_idx)
        rec.mark_sorted(i)
    if n:
        rec.mark_sorted(n - 1)


def insertion_sort(rec: TraceRecorder):
    n = len(rec.array)
    for i in range(1, n):
        rec.access(i)
        j = i
        while j > 0 and rec.compare(j - 1, j) > 0:
            rec.swap(j - 1, j)
            j -= 1
    for i in range(n):
        rec.mark_sorted(i)


def _partition(rec: TraceRecorder, low: int, high: int) -> int:
    rec.mark_pivot(high)
    i = low - 1
    for j in range(low, high):
        if rec.compare(j, high) <= 0:
            i += 1
            if i != j:
                rec.swap(i, j)
    if i + 1 != high:
        rec.swap(i + 1, high)
    rec.mark_sorted(i + 1)
    return i + 1


def _quick_sort(rec: TraceRecorder, low: int, high: int):
    if low > high:
        return
    if low == high:
        rec.mark_sorted(low)
        return
    pivot = _partition(rec, low, high)
    _quick_sort(rec, low, pivot - 1)
    _quick_sort(rec, pivot + 1, high)


def quick_sort(rec: TraceRecorder):
    _quick_sort(rec, 0, len(rec.array) - 1)


ALGORITHMS: dict[str, Callable[[TraceRecorder], None]] = {
    "bubble": bubble_sort,
    "selection": selection_sort,
    "insertion": insertion_sort,
    "quick": quick_sort,
}


def get_algorithm(name: str) -> Callable[[TraceRecorder], None]:
    if name not in ALGORITHMS:
        raise ValueError(f"Unknown algorithm: {name}. Available: {sorted(ALGORITHMS)}")
    return ALGORITHMS[name]


def record_algorithm(name: str, array: list[Number]) -> ExecutionTrace:
    """Run the named algorithm on a copy of *array* and return its trace."""
    algorithm = get_algorithm(name)
    rec = TraceRecorder(array)
    algorithm(rec)
    trace = rec.build()
    logger.info(
        "Recorded %s sort over %d elements: %d operations",
        name,
        len(array),
        len(trace.operations),
    )
    return trace
