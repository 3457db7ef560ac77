"""Trace animator package: execution traces in, replayable animation steps out."""

from .synthesizer import synthesize  # noqa: F401
from .api import (  # noqa: F401
    animate_trace,
    animate_output,
    animate_execution_result,
    summarize_trace,
)
