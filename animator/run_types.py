"""Synthesis pipeline data types (pure data, no business logic)."""

from __future__ import annotations

import json
from dataclasses import dataclass, field

from .animation_types import AnimationStepFromTrace
from .errors import TraceConsistencyWarning


@dataclass(frozen=True)
class SynthesisConfig:
    """Groups synthesis configuration."""

    max_steps: int | None = None  # step budget; None means unbounded
    array_length: int | None = None  # tracked length; overrides the trace's declaration
    verbose: bool = False
    check_consistency: bool = True


@dataclass
class SynthesisResult:
    """Ordered animation steps plus any non-fatal consistency warnings."""

    steps: list[AnimationStepFromTrace] = field(default_factory=list)
    warnings: list[TraceConsistencyWarning] = field(default_factory=list)
    cancelled: bool = False
    array_length: int = 0

    def to_dict(self) -> dict:
        return {
            "steps": [step.to_dict() for step in self.steps],
            "warnings": [w.to_dict() for w in self.warnings],
            "cancelled": self.cancelled,
            "arrayLength": self.array_length,
        }

    def to_json(self, indent: int | None = None) -> str:
        return json.dumps(self.to_dict(), indent=indent)


@dataclass
class TraceSummary:
    """Operation counts and timing for one trace."""

    comparisons: int = 0
    swaps: int = 0
    assignments: int = 0
    accesses: int = 0
    marks: int = 0
    total_operations: int = 0
    array_length: int = 0
    execution_time: float = 0.0  # as reported by the producer (ms)

    # Synthesis outcome
    steps: int = 0
    warnings: int = 0
    cancelled: bool = False

    def report(self) -> str:
        lines = [
            "═══ Trace Statistics ═══",
            f"  Array: {self.array_length} elements, {self.total_operations} operations",
            "",
            f"  {'Operation':<20} {'Count':>10}",
            f"  {'─' * 20} {'─' * 10}",
        ]
        rows = [
            ("Comparisons", self.comparisons),
            ("Swaps", self.swaps),
            ("Assignments", self.assignments),
            ("Accesses", self.accesses),
            ("Marks", self.marks),
        ]
        for name, count in rows:
            lines.append(f"  {name:<20} {count:>10}")

        lines.append(f"  {'─' * 20} {'─' * 10}")
        lines.append(f"  {'Execution time':<20} {self.execution_time:>8.1f}ms")
        lines.append("")
        status = "cancelled" if self.cancelled else "complete"
        lines.append(
            f"  Animation: {self.steps} steps ({status}),"
            f" {self.warnings} consistency warnings"
        )
        return "\n".join(lines)
