#!/usr/bin/env python3
"""
End-to-end tests for the intcalc command line.
"""
import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from calc_core import cli
from calc_core.cli import DEMO_CASES, main
from calc_core.events import reset_event_emitter


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    """Run each test in an empty directory with an empty home."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)
    reset_event_emitter()
    return tmp_path


def run(capsys, *argv):
    code = main(list(argv))
    return code, capsys.readouterr().out


@pytest.mark.parametrize("argv, line", [
    (["add", "2", "3"], "2 + 3 = 5"),
    (["subtract", "0", "5"], "0 - 5 = -5"),
    (["sub", "10", "10"], "10 - 10 = 0"),
    (["multiply", "-2", "3"], "-2 * 3 = -6"),
    (["mul", "3", "4"], "3 * 4 = 12"),
    (["divide", "10", "2"], "10 / 2 = 5"),
    (["div", "7", "3"], "7 / 3 = 2"),
])
def test_arithmetic_commands(capsys, argv, line):
    code, out = run(capsys, "--plain", *argv)
    assert code == 0
    assert line in out


def test_rich_output(capsys):
    code, out = run(capsys, "add", "2", "3")
    assert code == 0
    assert "2 + 3 =" in out
    assert "5" in out.split("=")[-1]


def test_quiet_prints_bare_result(capsys):
    code, out = run(capsys, "-q", "sub", "-1", "1")
    assert code == 0
    assert out.strip() == "-2"


def test_divide_by_zero_returns_sentinel_with_warning(capsys):
    code, out = run(capsys, "--plain", "div", "5", "0")
    assert code == 0
    assert "5 / 0 = 0" in out
    assert "[WARN] Division by zero" in out


def test_divide_by_zero_quiet(capsys):
    code, out = run(capsys, "-q", "divide", "5", "0")
    assert code == 0
    assert out.strip() == "0"


def test_strict_flag_fails(capsys):
    code, out = run(capsys, "--plain", "--strict", "divide", "5", "0")
    assert code == 1
    assert "[ERROR] Division by zero: 5 / 0" in out
    assert "[WARN]" not in out


def test_strict_from_local_config(capsys, isolated):
    (isolated / "intcalc.yaml").write_text("arithmetic:\n  strict_division: true\n", encoding="utf-8")
    code, out = run(capsys, "--plain", "divide", "1", "0")
    assert code == 1


def test_output_mode_from_config(capsys, isolated):
    (isolated / "intcalc.yaml").write_text("output:\n  mode: quiet\n", encoding="utf-8")
    code, out = run(capsys, "multiply", "6", "7")
    assert code == 0
    assert out.strip() == "42"


def test_invalid_config(capsys, isolated):
    (isolated / "intcalc.yaml").write_text("output:\n  mode: loud\n", encoding="utf-8")
    code, out = run(capsys, "add", "1", "1")
    assert code == 1
    assert "[ERROR] output.mode" in out


def test_non_mapping_repl_section_fails_before_repl(capsys, isolated):
    (isolated / "intcalc.yaml").write_text("repl: null\n", encoding="utf-8")
    code, out = run(capsys)
    assert code == 1
    assert "[ERROR] repl must be a mapping" in out


def test_missing_explicit_config(capsys):
    code, out = run(capsys, "-c", "missing.yaml", "add", "1", "1")
    assert code == 1
    assert "Config file not found" in out


def test_invalid_operand(capsys):
    code, out = run(capsys, "--plain", "add", "2.5", "1")
    assert code == 1
    assert "[ERROR] Not an integer: '2.5'" in out


@pytest.mark.parametrize("argv", [
    ["eval", "7 / 3"],
    ["eval", "div", "7", "3"],
    ["eval", "7", "/", "3"],
])
def test_eval(capsys, argv):
    code, out = run(capsys, "-q", *argv)
    assert code == 0
    assert out.strip() == "2"


def test_eval_rejects_longer_expressions(capsys):
    code, out = run(capsys, "--plain", "eval", "1 + 2 * 3")
    assert code == 1
    assert "[ERROR]" in out


def test_demo(capsys):
    code, out = run(capsys, "--plain", "demo")
    assert code == 0
    assert "=== Integer Calculator ===" in out
    for line in ("2 + 3 = 5", "0 - 5 = -5", "-2 * 3 = -6", "7 / 3 = 2", "5 / 0 = 0"):
        assert line in out


def test_demo_quiet_results(capsys):
    code, out = run(capsys, "-q", "demo")
    assert code == 0
    assert out.split() == ["5", "0", "0", "2", "-5", "0", "12", "-6", "0", "5", "2", "0"]
    assert len(DEMO_CASES) == 12


def test_version(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["--version"])
    assert exc_info.value.code == 0
    assert "intcalc 0.1.0" in capsys.readouterr().out


def test_usage_error():
    with pytest.raises(SystemExit) as exc_info:
        main(["add", "1"])
    assert exc_info.value.code == 2


def test_defaults_to_repl(capsys, monkeypatch):
    started = []

    class FakeREPL:
        def __init__(self, calculator, reporter, config):
            started.append((calculator.strict, config["output"]["mode"]))

        def run(self):
            pass

    monkeypatch.setattr(cli, "CalcREPL", FakeREPL)
    assert main(["--strict"]) == 0
    assert started == [(True, "rich")]
