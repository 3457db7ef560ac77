"""Pseudocode Binder: links operations to pseudocode lines, plus built-in mappings."""

from __future__ import annotations

import logging

from .animation_types import PseudocodeLine, PseudocodeMapping
from .trace_types import OperationType, TracedOperation

logger = logging.getLogger(__name__)


def _mapping(algorithm: str, rows: list[tuple[str, OperationType | None]]):
    return PseudocodeMapping(
        algorithm=algorithm,
        lines=[
            PseudocodeLine(line_number=number, code=code, operation_type=op_type)
            for number, (code, op_type) in enumerate(rows, start=1)
        ],
    )


_C = OperationType.COMPARE
_S = OperationType.SWAP
_SORTED = OperationType.MARK_SORTED
_PIVOT = OperationType.MARK_PIVOT
_ACCESS = OperationType.ACCESS

PSEUDOCODE_MAPPINGS: dict[str, PseudocodeMapping] = {
    "bubble": _mapping(
        "bubble",
        [
            ("procedure bubbleSort(A: list)", None),
            ("  n ← length(A)", None),
            ("  for i ← 0 to n-1 do", None),
            ("    for j ← 0 to n-i-1 do", None),
            ("      if A[j] > A[j+1] then", _C),
            ("        swap A[j] and A[j+1]", _S),
            ("      end if", None),
            ("    end for", None),
            ("  end for", _SORTED),
            ("end procedure", None),
        ],
    ),
    "selection": _mapping(
        "selection",
        [
            ("procedure selectionSort(A: list)", None),
            ("  n ← length(A)", None),
            ("  for i ← 0 to n-1 do", None),
            ("    minIdx ← i", None),
            ("    for j ← i+1 to n do", None),
            ("      if A[j] < A[minIdx] then", _C),
            ("        minIdx ← j", _PIVOT),
            ("      end if", None),
            ("    end for", None),
            ("    swap A[i] and A[minIdx]", _S),
            ("  end for", _SORTED),
            ("end procedure", None),
        ],
    ),
    "insertion": _mapping(
        "insertion",
        [
            ("procedure insertionSort(A: list)", None),
            ("  for i ← 1 to length(A) - 1 do", None),
            ("    key ← A[i]", _ACCESS),
            ("    j ← i", None),
            ("    while j > 0 and A[j-1] > A[j] do", _C),
            ("      swap A[j-1] and A[j]", _S),
            ("      j ← j - 1", None),
            ("    end while", None),
            ("  end for", None),
            ("  mark every element sorted", _SORTED),
            ("end procedure", None),
        ],
    ),
    "quick": _mapping(
        "quick",
        [
            ("procedure quickSort(A, low, high)", None),
            ("  if low < high then", None),
            ("    pivot ← partition(A, low, high)", None),
            ("    quickSort(A, low, pivot - 1)", None),
            ("    quickSort(A, pivot + 1, high)", None),
            ("  end if", None),
            ("end procedure", None),
            ("", None),
            ("procedure partition(A, low, high)", None),
            ("  pivot ← A[high]", _PIVOT),
            ("  i ← low - 1", None),
            ("  for j ← low to high-1 do", None),
            ("    if A[j] <= pivot then", _C),
            ("      i ← i + 1", None),
            ("      swap A[i] and A[j]", _S),
            ("    end if", None),
            ("  end for", None),
            ("  swap A[i+1] and A[high]", _S),
            ("  return i + 1", _SORTED),
            ("end procedure", None),
        ],
    ),
}


def available_algorithms() -> list[str]:
    return sorted(PSEUDOCODE_MAPPINGS)


def get_pseudocode_mapping(algorithm: str) -> PseudocodeMapping:
    """Return the built-in mapping for *algorithm*.

    Raises:
        ValueError: If no mapping is registered under that name.
    """
    if algorithm not in PSEUDOCODE_MAPPINGS:
        raise ValueError(
            f"Unknown algorithm: {algorithm}. Available: {available_algorithms()}"
        )
    return PSEUDOCODE_MAPPINGS[algorithm]


def resolve_line(
    operation: TracedOperation, mapping: PseudocodeMapping | None
) -> int | None:
    """Resolve the pseudocode line for *operation*.

    A producer-supplied ``line`` wins; otherwise the first mapping line bound
    to the operation's type; otherwise None. A missing binding is never an
    error.
    """
    if operation.line is not None:
        return operation.line
    if mapping is None:
        return None
    return next(
        (
            line.line_number
            for line in mapping.lines
            if line.operation_type == operation.type
        ),
        None,
    )


def highlight_pseudocode(
    mapping: PseudocodeMapping, current_line: int | None
) -> list[tuple[PseudocodeLine, bool]]:
    """Pair every mapping line with whether it is the current line."""
    return [(line, line.line_number == current_line) for line in mapping.lines]
