"""Named constants: execution-service IDs, stat and warning kinds, playback limits."""

from __future__ import annotations

# Judge-style execution service language IDs (static external contract)
LANGUAGE_IDS: dict[str, int] = {
    "javascript": 63,  # Node.js
    "python": 71,  # Python 3
    "cpp": 54,  # C++ (GCC)
    "java": 62,  # Java
}

DEFAULT_TIMEOUT_SECONDS = 10
DEFAULT_MEMORY_LIMIT_KB = 128000

# Key that marks the trace object inside raw program output
TRACE_MARKER_KEY = "operations"

STAT_COMPARISONS = "comparisons"
STAT_SWAPS = "swaps"
STAT_ASSIGNMENTS = "assignments"
STAT_ACCESSES = "accesses"

STAT_KINDS: tuple[str, ...] = (
    STAT_COMPARISONS,
    STAT_SWAPS,
    STAT_ASSIGNMENTS,
    STAT_ACCESSES,
)

WARNING_FINAL_ARRAY = "final_array"
WARNING_FINAL_ARRAY_LENGTH = "final_array_length"
WARNING_VALUES = "values"
WARNING_SNAPSHOT = "snapshot"

RULE_ORDERING = "ordering"
RULE_GAP = "gap"
RULE_ARITY = "arity"
RULE_VALUES_ARITY = "values_arity"
RULE_BOUNDS = "bounds"

# Playback interval bounds (milliseconds)
MIN_PLAYBACK_SPEED_MS = 10
MAX_PLAYBACK_SPEED_MS = 2000
DEFAULT_PLAYBACK_SPEED_MS = 500

DEFAULT_ALGORITHM = "bubble"
