"""Tests for animator.trace_parser: extracting traces from program output."""

from __future__ import annotations

import json

import pytest

from animator.errors import TraceParsingError
from animator.trace_parser import (
    _find_trace_object,
    _strip_markdown_fences,
    is_valid_trace,
    load_trace,
    parse_execution_output,
)
from animator.trace_types import OperationType

TRACE_DATA = {
    "operations": [
        {
            "id": 0,
            "type": "compare",
            "indices": [0, 1],
            "values": [5, 3],
            "timestamp": 1700000000000,
            "description": "Comparing arr[0]=5 with arr[1]=3",
        },
        {
            "id": 1,
            "type": "swap",
            "indices": [0, 1],
            "values": [5, 3],
            "timestamp": 1700000000001,
            "description": "Swapping arr[0]=5 with arr[1]=3",
        },
    ],
    "arraySnapshots": [[5, 3], [5, 3]],
    "finalArray": [3, 5],
    "stats": {"comparisons": 1, "swaps": 1, "assignments": 0, "accesses": 0},
}

TRACE_JSON = json.dumps(TRACE_DATA)


class TestParseExecutionOutput:
    def test_trace_alone(self):
        trace = parse_execution_output(TRACE_JSON)
        assert len(trace.operations) == 2
        assert trace.operations[1].type == OperationType.SWAP
        assert trace.final_array == [3, 5]
        assert trace.stats.comparisons == 1

    def test_trace_surrounded_by_other_prints(self):
        output = f"sorting...\n{{'not': json}}\n{TRACE_JSON}\ndone\n"
        trace = parse_execution_output(output)
        assert trace.array_snapshots == [[5, 3], [5, 3]]

    def test_skips_json_objects_without_operations(self):
        output = json.dumps({"debug": True}) + "\n" + TRACE_JSON
        trace = parse_execution_output(output)
        assert len(trace.operations) == 2

    def test_compiled_language_output_without_stats(self):
        output = (
            '{"operations":[{"id":0,"type":"compare","indices":[0,1],'
            '"values":[2,1],"description":"Comparing elements"}],'
            '"finalArray":[1,2]}'
        )
        trace = parse_execution_output(output)
        assert trace.stats is None
        assert trace.operations[0].timestamp == 0.0
        assert trace.array_snapshots == []

    def test_many_braces_before_trace(self):
        noise = "{" * 5000 + "\n" + "{x}" * 2000 + "\n"
        trace = parse_execution_output(noise + TRACE_JSON)
        assert len(trace.operations) == 2

    def test_last_printed_trace_wins(self):
        earlier = json.dumps(dict(TRACE_DATA, finalArray=[5, 3]))
        trace = parse_execution_output(earlier + "\n" + TRACE_JSON)
        assert trace.final_array == [3, 5]

    def test_operations_key_not_first(self):
        output = 'log {"finalArray": [1], "operations": []} end'
        trace = parse_execution_output(output)
        assert trace.operations == []
        assert trace.final_array == [1]

    def test_no_trace_raises(self):
        with pytest.raises(TraceParsingError, match="No JSON object"):
            parse_execution_output("Traceback (most recent call last): ...")

    def test_unknown_operation_type_raises(self):
        data = dict(TRACE_DATA)
        data["operations"] = [{"id": 0, "type": "rotate", "indices": [0]}]
        with pytest.raises(TraceParsingError, match="Invalid trace"):
            parse_execution_output(json.dumps(data))

    def test_bad_field_type_is_chained(self):
        data = dict(TRACE_DATA, finalArray="oops")
        with pytest.raises(TraceParsingError) as excinfo:
            parse_execution_output(json.dumps(data))
        assert excinfo.value.__cause__ is not None


class TestLoadTrace:
    def test_plain_document(self):
        assert len(load_trace(TRACE_JSON).operations) == 2

    def test_fenced_document(self):
        trace = load_trace(f"```json\n{TRACE_JSON}\n```")
        assert trace.final_array == [3, 5]

    def test_invalid_json_raises(self):
        with pytest.raises(TraceParsingError, match="Failed to parse"):
            load_trace("{not json")

    def test_array_document_raises(self):
        with pytest.raises(TraceParsingError, match="Expected JSON object"):
            load_trace("[]")

    def test_producer_declarations_are_read(self):
        data = dict(TRACE_DATA, arrayLength=8, partial=True)
        trace = load_trace(json.dumps(data))
        assert trace.array_length == 8
        assert trace.partial is True


class TestHelpers:
    def test_strip_fences(self):
        assert _strip_markdown_fences("```\n{}\n```") == "{}"

    def test_find_trace_object_none(self):
        assert _find_trace_object("no braces here") is None

    def test_is_valid_trace(self):
        assert is_valid_trace(TRACE_DATA) is True

    def test_is_valid_trace_requires_stats(self):
        data = {k: v for k, v in TRACE_DATA.items() if k != "stats"}
        assert is_valid_trace(data) is False

    def test_is_valid_trace_rejects_non_dict(self):
        assert is_valid_trace([TRACE_DATA]) is False
