"""Error taxonomy for trace synthesis."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class AnimatorError(Exception):
    """Base class for all animator failures."""

    pass


class MalformedTraceError(AnimatorError):
    """Raised when a trace violates a structural rule (ordering, arity, bounds).

    Detected before synthesis starts, so nothing has been emitted.
    """

    def __init__(self, operation_id: int, rule: str, message: str):
        super().__init__(f"Operation {operation_id}: {message} [{rule}]")
        self.operation_id = operation_id
        self.rule = rule


class IndexOutOfRangeError(AnimatorError):
    """Raised when an operation touches an index outside the tracked array.

    ``partial_steps`` holds the steps synthesised before the failure; each
    one is self-contained and remains valid.
    """

    def __init__(self, operation_id: int, index: int, length: int):
        super().__init__(
            f"Operation {operation_id}: index {index} out of range "
            f"for array of length {length}"
        )
        self.operation_id = operation_id
        self.index = index
        self.length = length
        self.partial_steps: list[Any] = []


class TraceParsingError(AnimatorError):
    """Raised when program output cannot be parsed into an ExecutionTrace."""

    pass


@dataclass(frozen=True)
class TraceConsistencyWarning:
    """Non-fatal disagreement between the trace's declarations and its log."""

    kind: str
    expected: Any
    actual: Any
    operation_id: int | None = None

    @property
    def message(self) -> str:
        where = f" at operation {self.operation_id}" if self.operation_id is not None else ""
        return f"{self.kind}{where}: expected {self.expected!r}, got {self.actual!r}"

    def to_dict(self) -> dict:
        d: dict[str, Any] = {
            "kind": self.kind,
            "expected": self.expected,
            "actual": self.actual,
        }
        if self.operation_id is not None:
            d["operationId"] = self.operation_id
        return d
