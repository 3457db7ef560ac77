"""Composable API functions for the trace animation pipelines.

Each function corresponds to a CLI workflow (animate a trace file, animate raw
program output, print a summary) but is callable programmatically without
argparse.
"""

from __future__ import annotations

import logging

from .aggregator import count_operations
from .animation_types import PseudocodeMapping
from .errors import TraceParsingError
from .execution_types import CodeExecutionResult
from .normalizer import infer_array_length
from .pseudocode import get_pseudocode_mapping
from .run_types import SynthesisConfig, SynthesisResult, TraceSummary
from .synthesizer import synthesize
from .trace_parser import parse_execution_output
from .trace_types import STAT_FIELD_BY_TYPE, ExecutionTrace
from . import constants

logger = logging.getLogger(__name__)


def _pick_mapping(
    algorithm: str, mapping: PseudocodeMapping | None
) -> PseudocodeMapping | None:
    if mapping is not None:
        return mapping
    if algorithm:
        return get_pseudocode_mapping(algorithm)
    return None


def animate_trace(
    trace: ExecutionTrace,
    algorithm: str = "",
    mapping: PseudocodeMapping | None = None,
    config: SynthesisConfig = SynthesisConfig(),
) -> SynthesisResult:
    """Synthesise animation steps for an already-decoded trace.

    Args:
        trace: The execution trace.
        algorithm: Name of a built-in pseudocode mapping ("bubble", ...).
            Ignored when *mapping* is given; empty means no pseudocode.
        mapping: An explicit pseudocode mapping.
        config: Synthesis configuration.

    Returns:
        The SynthesisResult with steps and consistency warnings.
    """
    logger.info(
        "animate_trace: %d operations, algorithm=%s",
        len(trace.operations),
        algorithm or "(none)",
    )
    return synthesize(trace, _pick_mapping(algorithm, mapping), config)


def animate_output(
    output: str,
    algorithm: str = "",
    config: SynthesisConfig = SynthesisConfig(),
) -> SynthesisResult:
    """Parse raw instrumented-program stdout and animate the trace inside it."""
    trace = parse_execution_output(output)
    return animate_trace(trace, algorithm=algorithm, config=config)


def animate_execution_result(
    result: CodeExecutionResult,
    algorithm: str = "",
    config: SynthesisConfig = SynthesisConfig(),
) -> SynthesisResult:
    """Animate the trace carried by an execution-service result.

    Raises:
        TraceParsingError: If the run failed or its output holds no trace.
    """
    if not result.success:
        detail = result.compile_output or result.stderr or result.status.description
        raise TraceParsingError(f"Execution failed: {detail}")
    return animate_output(result.output, algorithm=algorithm, config=config)


def summarize_trace(
    trace: ExecutionTrace, result: SynthesisResult | None = None
) -> TraceSummary:
    """Count operations by kind and fold in the synthesis outcome, if any."""
    counts = count_operations(trace.operations)
    marks = sum(1 for op in trace.operations if op.type not in STAT_FIELD_BY_TYPE)
    summary = TraceSummary(
        comparisons=counts[constants.STAT_COMPARISONS],
        swaps=counts[constants.STAT_SWAPS],
        assignments=counts[constants.STAT_ASSIGNMENTS],
        accesses=counts[constants.STAT_ACCESSES],
        marks=marks,
        total_operations=len(trace.operations),
        array_length=infer_array_length(trace),
        execution_time=trace.execution_time,
    )
    if result is not None:
        summary.steps = len(result.steps)
        summary.warnings = len(result.warnings)
        summary.cancelled = result.cancelled
    return summary
