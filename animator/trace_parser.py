"""Trace ingestion: turns instrumented program output into an ExecutionTrace."""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from pydantic import ValidationError

from .errors import TraceParsingError
from .trace_types import ExecutionTrace
from . import constants

logger = logging.getLogger(__name__)

_TRACE_OPENING = re.compile(r'\{\s*"' + re.escape(constants.TRACE_MARKER_KEY) + r'"\s*:')


def _strip_markdown_fences(text: str) -> str:
    """Remove markdown code fences around a pasted trace."""
    text = text.strip()
    if text.startswith("```"):
        first_newline = text.find("\n")
        text = text[first_newline + 1 :] if first_newline != -1 else text[3:]
    if text.endswith("```"):
        text = text[: text.rfind("```")]
    return text.strip()


def _validate(data: Any) -> ExecutionTrace:
    if not isinstance(data, dict):
        raise TraceParsingError(f"Expected JSON object, got {type(data).__name__}")
    try:
        return ExecutionTrace.model_validate(data)
    except ValidationError as exc:
        raise TraceParsingError(f"Invalid trace: {exc}") from exc


def _decode_at(decoder: json.JSONDecoder, output: str, start: int) -> Any:
    try:
        data, _end = decoder.raw_decode(output, start)
    except json.JSONDecodeError:
        return None
    return data


def _find_trace_object(output: str) -> dict[str, Any] | None:
    """Return a JSON object in *output* that carries an operation log.

    Objects opening with the marker key are tried first, latest first, since
    instrumented programs print the trace last. Only when none decodes is
    every ``{`` tried, for producers that order their keys differently.
    """
    decoder = json.JSONDecoder()
    for match in reversed(list(_TRACE_OPENING.finditer(output))):
        data = _decode_at(decoder, output, match.start())
        if isinstance(data, dict):
            return data

    start = output.find("{")
    while start != -1:
        data = _decode_at(decoder, output, start)
        if isinstance(data, dict) and constants.TRACE_MARKER_KEY in data:
            return data
        start = output.find("{", start + 1)
    return None


def parse_execution_output(output: str) -> ExecutionTrace:
    """Extract and validate the trace printed by an instrumented program.

    Args:
        output: Raw stdout of the instrumented program.

    Returns:
        The decoded ExecutionTrace.

    Raises:
        TraceParsingError: If no trace object is found or it fails validation.
    """
    data = _find_trace_object(output)
    if data is None:
        logger.error("No trace object in program output:\n%s", output[:2000])
        raise TraceParsingError(
            f"No JSON object with an '{constants.TRACE_MARKER_KEY}' key in output"
        )
    trace = _validate(data)
    logger.info("Parsed trace with %d operations", len(trace.operations))
    return trace


def load_trace(text: str) -> ExecutionTrace:
    """Parse a standalone JSON trace document."""
    try:
        data = json.loads(_strip_markdown_fences(text))
    except json.JSONDecodeError as exc:
        raise TraceParsingError(f"Failed to parse trace as JSON: {exc}") from exc
    return _validate(data)


def is_valid_trace(data: Any) -> bool:
    """Cheap structural check on a decoded trace object."""
    if not isinstance(data, dict):
        return False
    stats = data.get("stats")
    return (
        isinstance(data.get("operations"), list)
        and isinstance(data.get("finalArray"), list)
        and isinstance(stats, dict)
        and isinstance(stats.get("comparisons"), (int, float))
        and isinstance(stats.get("swaps"), (int, float))
    )
