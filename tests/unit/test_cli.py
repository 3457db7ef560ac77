"""Tests for the trace-animator command-line entry point."""

import json

from animator.algorithms import record_algorithm
from animator.cli import _parse_array, main


def _write_trace(tmp_path, name="trace.json", algorithm="bubble", array=(3, 1, 2)):
    path = tmp_path / name
    trace = record_algorithm(algorithm, list(array))
    path.write_text(json.dumps(trace.to_dict()))
    return path


class TestDemo:
    def test_no_arguments_runs_builtin_demo(self, capsys):
        assert main([]) == 0
        out = capsys.readouterr().out
        assert "No file provided. Using built-in demo:" in out
        assert "Trace Statistics" in out

    def test_demo_with_custom_array(self, capsys):
        assert main(["--demo", "quick", "--array", "3,1,2", "--summary"]) == 0
        out = capsys.readouterr().out
        assert "Array: 3 elements" in out
        assert "Comparing" not in out

    def test_step_lines_use_state_glyphs(self, capsys):
        main(["--demo", "bubble", "--array", "2,1"])
        out = capsys.readouterr().out
        assert "cc  Comparing arr[0]=2 with arr[1]=1" in out
        assert "##  Element at index 0 is sorted" in out


class TestFiles:
    def test_json_trace_file(self, tmp_path, capsys):
        path = _write_trace(tmp_path)
        assert main([str(path), "--summary"]) == 0
        assert "0 consistency warnings" in capsys.readouterr().out

    def test_raw_output_file(self, tmp_path, capsys):
        trace = record_algorithm("selection", [2, 1])
        path = tmp_path / "stdout.txt"
        path.write_text("starting\n" + json.dumps(trace.to_dict()) + "\nbye\n")
        assert main([str(path), "--summary"]) == 0

    def test_unparseable_file_exits_1(self, tmp_path, capsys):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        assert main([str(path)]) == 1
        assert "error:" in capsys.readouterr().err

    def test_malformed_trace_exits_2(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text(
            json.dumps(
                {
                    "operations": [
                        {"id": 0, "type": "swap", "indices": [0, 1, 2]},
                    ],
                    "finalArray": [1, 2, 3],
                }
            )
        )
        assert main([str(path)]) == 2
        assert "Operation 0" in capsys.readouterr().err


class TestOutputModes:
    def test_json_output(self, tmp_path, capsys):
        path = _write_trace(tmp_path)
        assert main([str(path), "--json", "-a", "bubble"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["cancelled"] is False
        assert data["steps"][0]["pseudocodeLine"] == 5

    def test_single_step_with_pseudocode(self, tmp_path, capsys):
        path = _write_trace(tmp_path)
        assert main([str(path), "--step", "0", "-a", "bubble"]) == 0
        out = capsys.readouterr().out
        assert "═══ Step 0 ═══" in out
        assert "→" in out

    def test_missing_step_exits_1(self, tmp_path, capsys):
        path = _write_trace(tmp_path)
        assert main([str(path), "--step", "999"]) == 1

    def test_max_steps_marks_cancelled(self, tmp_path, capsys):
        path = _write_trace(tmp_path)
        assert main([str(path), "--max-steps", "2", "--summary"]) == 0
        assert "2 steps (cancelled)" in capsys.readouterr().out


class TestParseArray:
    def test_ints_and_floats(self):
        assert _parse_array("3, 1.5,2") == [3, 1.5, 2]

    def test_blank_entries_ignored(self):
        assert _parse_array("1,,2,") == [1, 2]
