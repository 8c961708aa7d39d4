import json

import pytest
from click.testing import CliRunner

from regfsm.main import entry


@pytest.fixture
def runner():
    return CliRunner()


def invoke(runner: CliRunner, *args: str) -> dict:
    result = runner.invoke(entry, list(args))
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


def test_pattern_report(runner):
    report = invoke(runner, "(a|b)*abb", "-t", "abb", "-t", "ab", "--test", "")
    assert {"nfa-lambda", "nfa", "dfa", "summary", "results"} <= report.keys()
    assert report["results"] == {"abb": True, "ab": False, "": False}
    assert report["dfa"]["start_state"] == "q0"
    assert report["dfa"]["alphabet"] == ["a", "b"]
    assert report["summary"].startswith("NFA-λ: ")


def test_epsilon_marker_is_printed_as_is(runner):
    report = invoke(runner, "a*")
    assert ["q2", "ε", "q0"] in report["nfa-lambda"]["transitions"]


@pytest.mark.parametrize("stage", ["nfa-lambda", "nfa", "dfa"])
def test_single_stage(runner, stage):
    report = invoke(runner, "ab", "--stage", stage)
    assert set(report) == {stage, "summary"}


def test_no_results_without_strings(runner):
    report = invoke(runner, "ab")
    assert "results" not in report


def test_edge_list(runner, tmp_path):
    edges = tmp_path / "edges.txt"
    edges.write_text("q0, a, q1\nq1, b, q2\naccept: q2\n", encoding="utf-8")
    report = invoke(runner, "--edges", str(edges), "-t", "ab", "-t", "a")
    assert report["nfa-lambda"]["states"] == ["q0", "q1", "q2"]
    assert report["nfa-lambda"]["accepting_states"] == ["q2"]
    assert report["results"] == {"ab": True, "a": False}


def test_input_file(runner, tmp_path):
    strings = tmp_path / "strings.txt"
    strings.write_text("ab\nabab\naba\n", encoding="utf-8")
    out = tmp_path / "report.json"
    result = runner.invoke(
        entry, ["(ab)+", "--input-file", str(strings), "--debug", "-o", str(out)]
    )
    assert result.exit_code == 0, result.output
    report = json.loads(out.read_text(encoding="utf-8"))
    assert report["results"] == {"ab": True, "abab": True, "aba": False}


def test_out_file(runner, tmp_path):
    out = tmp_path / "report.json"
    result = runner.invoke(entry, ["a|b", "-o", str(out)])
    assert result.exit_code == 0, result.output
    report = json.loads(out.read_text(encoding="utf-8"))
    assert report["dfa"]["accepting_states"] == ["q1", "q2"]


@pytest.mark.parametrize("pattern", ["(ab", "ab)", "*a"])
def test_malformed_pattern(runner, pattern):
    result = runner.invoke(entry, [pattern])
    assert result.exit_code == 2
    assert "Invalid value for PATTERN" in result.output


def test_missing_input(runner):
    result = runner.invoke(entry, [])
    assert result.exit_code == 2
    assert "either PATTERN or --edges is required" in result.output


def test_stdout_is_left_open(runner):
    result = runner.invoke(entry, ["a", "-t", "a"])
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["results"] == {"a": True}
    assert invoke(runner, "b", "-t", "a")["results"] == {"a": False}
