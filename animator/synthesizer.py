"""Animation Step Synthesizer: one ordered pass from operations to animation steps."""

from __future__ import annotations

import logging
from typing import Callable

from .aggregator import check_consistency
from .animation_types import (
    AnimationStepFromTrace,
    ElementSnapshot,
    PseudocodeMapping,
)
from .errors import IndexOutOfRangeError
from .normalizer import infer_array_length, normalize_operations
from .pseudocode import resolve_line
from .run_types import SynthesisConfig, SynthesisResult
from .state_tracker import StateTracker
from .trace_types import ExecutionTrace, Number, TracedOperation

logger = logging.getLogger(__name__)


def _initial_values(trace: ExecutionTrace, length: int) -> list[Number] | None:
    """Seed values from the first snapshot when it covers the whole array."""
    if trace.array_snapshots and len(trace.array_snapshots[0]) == length:
        return list(trace.array_snapshots[0])
    return None


def _log_step(step: AnimationStepFromTrace):
    """Print verbose step-by-step synthesis info."""
    line = f" (line {step.pseudocode_line})" if step.pseudocode_line else ""
    print(f"[step {step.id}] {step.operation}{line}  {step.description}")
    cells = " ".join(
        f"{element.value}:{element.state.value}" for element in step.array_snapshot
    )
    print(f"    {cells}")


def build_step(
    operation: TracedOperation,
    snapshot: list[ElementSnapshot],
    mapping: PseudocodeMapping | None,
) -> AnimationStepFromTrace:
    return AnimationStepFromTrace(
        id=operation.id,
        operation=operation,
        array_snapshot=snapshot,
        pseudocode_line=resolve_line(operation, mapping),
        description=operation.description,
    )


def _should_stop(
    produced: int,
    config: SynthesisConfig,
    should_stop: Callable[[], bool] | None,
) -> bool:
    if config.max_steps is not None and produced >= config.max_steps:
        return True
    return should_stop is not None and should_stop()


def synthesize(
    trace: ExecutionTrace,
    mapping: PseudocodeMapping | None = None,
    config: SynthesisConfig = SynthesisConfig(),
    should_stop: Callable[[], bool] | None = None,
) -> SynthesisResult:
    """Convert *trace* into one self-contained animation step per operation.

    Validates the trace, allocates a fresh StateTracker, folds over the
    operations in their original order and finally cross-checks the result
    against the trace's declared stats and final array.

    Args:
        trace: The execution trace to animate.
        mapping: Pseudocode mapping used to bind steps to lines.
        config: Synthesis configuration (step budget, tracked length,
            verbosity, checks).
        should_stop: Polled before every operation; returning True stops
            synthesis and yields the steps produced so far.

    Returns:
        A SynthesisResult; ``cancelled`` is True when synthesis stopped early.

    Raises:
        MalformedTraceError: If the trace fails structural validation.
            Nothing is emitted.
        IndexOutOfRangeError: If an operation leaves the tracked array.
            The steps produced before it are on ``partial_steps``.
    """
    operations = normalize_operations(trace)
    length = (
        config.array_length
        if config.array_length is not None
        else infer_array_length(trace)
    )
    tracker = StateTracker(length, _initial_values(trace, length))

    steps: list[AnimationStepFromTrace] = []
    cancelled = False
    for operation in operations:
        if _should_stop(len(steps), config, should_stop):
            cancelled = True
            logger.info(
                "Synthesis stopped after %d of %d operations",
                len(steps),
                len(operations),
            )
            break
        try:
            snapshot = tracker.apply(operation)
        except IndexOutOfRangeError as exc:
            exc.partial_steps = steps
            logger.error("Synthesis aborted: %s", exc)
            raise
        step = build_step(operation, snapshot, mapping)
        steps.append(step)
        if config.verbose:
            _log_step(step)

    processed = operations[: len(steps)]
    warnings = (
        check_consistency(trace, processed, tracker, complete=not cancelled)
        if config.check_consistency
        else []
    )

    logger.info(
        "Synthesized %d steps over %d elements (%d warnings)",
        len(steps),
        length,
        len(warnings),
    )
    return SynthesisResult(
        steps=steps,
        warnings=warnings,
        cancelled=cancelled,
        array_length=length,
    )
