"""Command-line entry point: animate a trace file, program output, or a built-in demo."""

from __future__ import annotations

import argparse
import logging
import sys

from .algorithms import ALGORITHMS, record_algorithm
from .animation_types import ElementVisualState
from .api import animate_trace, summarize_trace
from .errors import AnimatorError, IndexOutOfRangeError, MalformedTraceError
from .pseudocode import available_algorithms, get_pseudocode_mapping, highlight_pseudocode
from .run_types import SynthesisConfig
from .trace_parser import load_trace, parse_execution_output
from .trace_types import ExecutionTrace
from . import constants

logger = logging.getLogger(__name__)

DEMO_ARRAY = [5, 3, 8, 1, 9, 2]

STATE_GLYPHS: dict[ElementVisualState, str] = {
    ElementVisualState.DEFAULT: ".",
    ElementVisualState.COMPARING: "c",
    ElementVisualState.SWAPPING: "s",
    ElementVisualState.PIVOT: "P",
    ElementVisualState.SORTED: "#",
}


def _read_trace(path: str) -> ExecutionTrace:
    """Load a JSON trace, or extract one from raw program output."""
    if path == "-":
        text = sys.stdin.read()
    else:
        with open(path) as f:
            text = f.read()
    if path.endswith(".json"):
        return load_trace(text)
    return parse_execution_output(text)


def _parse_array(text: str) -> list[int | float]:
    values = [v.strip() for v in text.split(",") if v.strip()]
    return [float(v) if "." in v else int(v) for v in values]


def _print_step(step, algorithm: str):
    print(f"═══ Step {step.id} ═══")
    print(f"  {step.description}")
    for index, element in enumerate(step.array_snapshot):
        print(f"  [{index}] {element.value!s:>8}  {element.state.value}")
    if algorithm:
        print()
        for line, current in highlight_pseudocode(
            get_pseudocode_mapping(algorithm), step.pseudocode_line
        ):
            marker = "→" if current else " "
            print(f"  {marker} {line.line_number:>3}  {line.code}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Turn an algorithm execution trace into animation steps"
    )
    parser.add_argument(
        "file", nargs="?", help="Trace JSON or raw program output ('-' for stdin)"
    )
    parser.add_argument(
        "--algorithm",
        "-a",
        default="",
        choices=[""] + available_algorithms(),
        help="Pseudocode mapping used to bind steps to lines",
    )
    parser.add_argument(
        "--demo",
        choices=sorted(ALGORITHMS),
        help="Record a built-in sorting algorithm instead of reading a file",
    )
    parser.add_argument(
        "--array",
        default=",".join(str(v) for v in DEMO_ARRAY),
        help="Comma-separated input array for --demo",
    )
    parser.add_argument(
        "--max-steps", "-n", type=int, default=None, help="Stop after this many steps"
    )
    parser.add_argument(
        "--summary", action="store_true", help="Only print trace statistics"
    )
    parser.add_argument("--step", type=int, default=None, help="Print a single step")
    parser.add_argument(
        "--json", action="store_true", help="Print the full result as JSON"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Print every step as it is built"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    algorithm = args.algorithm
    try:
        if args.demo:
            trace = record_algorithm(args.demo, _parse_array(args.array))
            algorithm = algorithm or args.demo
        elif args.file:
            trace = _read_trace(args.file)
        else:
            print("No file provided. Using built-in demo:\n")
            trace = record_algorithm(constants.DEFAULT_ALGORITHM, DEMO_ARRAY)
            algorithm = algorithm or constants.DEFAULT_ALGORITHM

        config = SynthesisConfig(max_steps=args.max_steps, verbose=args.verbose)
        result = animate_trace(trace, algorithm=algorithm, config=config)
    except (MalformedTraceError, IndexOutOfRangeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except AnimatorError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if args.json:
        print(result.to_json(indent=2))
        return 0

    if args.step is not None:
        step = next((s for s in result.steps if s.id == args.step), None)
        if step is None:
            print(f"error: no step with id {args.step}", file=sys.stderr)
            return 1
        _print_step(step, algorithm)
        return 0

    if not args.summary and not args.verbose:
        for step in result.steps:
            states = "".join(STATE_GLYPHS[e.state] for e in step.array_snapshot)
            print(f"  {step.id:>4}  {states}  {step.description}")
        print()

    print(summarize_trace(trace, result).report())
    for warning in result.warnings:
        print(f"  warning: {warning.message}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
