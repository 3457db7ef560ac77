"""Animation data types (pure data, no business logic)."""

from __future__ import annotations

from enum import Enum

from .trace_types import Number, OperationType, TracedOperation, WireModel


class ElementVisualState(str, Enum):
    DEFAULT = "default"
    COMPARING = "comparing"
    SWAPPING = "swapping"
    PIVOT = "pivot"
    SORTED = "sorted"

    @property
    def precedence(self) -> int:
        return _PRECEDENCE[self]

    @property
    def is_sticky(self) -> bool:
        return self in (ElementVisualState.PIVOT, ElementVisualState.SORTED)


# sorted > pivot > transient (comparing/swapping) > default
_PRECEDENCE: dict[ElementVisualState, int] = {
    ElementVisualState.DEFAULT: 0,
    ElementVisualState.COMPARING: 1,
    ElementVisualState.SWAPPING: 1,
    ElementVisualState.PIVOT: 2,
    ElementVisualState.SORTED: 3,
}


def strongest(
    first: ElementVisualState, second: ElementVisualState
) -> ElementVisualState:
    """Return the higher-precedence state; ties keep *first*."""
    return second if second.precedence > first.precedence else first


class ElementSnapshot(WireModel):
    value: Number | None = None
    state: ElementVisualState = ElementVisualState.DEFAULT


class AnimationStepFromTrace(WireModel):
    """One self-contained frame: the full array after ``operation`` was applied."""

    id: int
    operation: TracedOperation
    array_snapshot: list[ElementSnapshot]
    pseudocode_line: int | None = None
    description: str = ""

    def states(self) -> list[ElementVisualState]:
        return [element.state for element in self.array_snapshot]

    def values(self) -> list[Number | None]:
        return [element.value for element in self.array_snapshot]


class PseudocodeLine(WireModel):
    line_number: int
    code: str
    operation_type: OperationType | None = None


class PseudocodeMapping(WireModel):
    algorithm: str
    lines: list[PseudocodeLine] = []
