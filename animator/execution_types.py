"""Execution service boundary types (pure data, no business logic).

The animator never talks to the execution service. These models describe the
request/response contract of the sandbox that runs instrumented user code, so
that callers reimplementing that boundary share one definition.
"""

from __future__ import annotations

from enum import Enum

from .trace_types import WireModel
from . import constants


class SupportedLanguage(str, Enum):
    JAVASCRIPT = "javascript"
    PYTHON = "python"
    CPP = "cpp"
    JAVA = "java"


def judge_language_id(language: str | SupportedLanguage) -> int:
    """Return the execution-service language ID for *language*."""
    name = language.value if isinstance(language, SupportedLanguage) else language
    if name not in constants.LANGUAGE_IDS:
        raise ValueError(f"Unsupported language: {name}")
    return constants.LANGUAGE_IDS[name]


class CodeExecutionRequest(WireModel):
    code: str
    language: SupportedLanguage
    input: str | None = None
    timeout: int = constants.DEFAULT_TIMEOUT_SECONDS  # seconds
    memory_limit: int = constants.DEFAULT_MEMORY_LIMIT_KB  # KB


class ExecutionStatus(WireModel):
    id: int
    description: str


class CodeExecutionResult(WireModel):
    success: bool
    output: str = ""
    stderr: str = ""
    execution_time: float = 0.0  # ms
    memory_usage: float = 0.0  # KB
    status: ExecutionStatus
    compile_output: str | None = None


class CodeTemplate(WireModel):
    """Per-language source template plus the snippet that emits trace records."""

    language: SupportedLanguage
    template: str
    instrumentation: str
