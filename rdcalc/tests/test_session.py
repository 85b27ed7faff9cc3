"""Tests for the line-at-a-time session driver."""

import io

import pytest
from rich.console import Console

from rdcalc.session import InputReadError, SessionStats, run_session
from rdcalc.settings import Settings


@pytest.fixture
def console():
    """A colorless Rich console writing to a buffer, standing in for stderr."""
    return Console(file=io.StringIO(), force_terminal=False, color_system=None, width=200)


def run(lines, console, settings=None):
    out = io.StringIO()
    stats = run_session(lines, out, console, settings)
    return out.getvalue(), console.file.getvalue(), stats


# --- Values and diagnostics ---

def test_values_one_per_line(console):
    out, err, stats = run(["1+2\n", "2*3\n"], console)
    assert out == "3.0\n6.0\n"
    assert err == ""
    assert stats == SessionStats(lines=2, evaluated=2, failed=0, quit=False)


def test_parse_failure_is_not_fatal(console):
    out, err, stats = run(["1+2)\n", "4\n"], console)
    assert out == "4.0\n"
    assert "Couldn't parse input expression." in err
    assert stats.failed == 1
    assert stats.evaluated == 1


def test_special_values_are_printed(console):
    out, _, _ = run(["1/0\n", "(-1)^0.5\n", "-1/0\n"], console)
    assert out == "inf\nnan\n-inf\n"


def test_line_endings(console):
    out, _, _ = run(["1+2\r\n", "5"], console)
    assert out == "3.0\n5.0\n"


def test_empty_input(console):
    out, err, stats = run([], console)
    assert out == ""
    assert stats == SessionStats()


# --- Quit command ---

def test_quit_stops_reading(console):
    out, err, stats = run(["1\n", "quit\n", "2\n"], console)
    assert out == "1.0\n"
    assert err == ""
    assert stats.quit
    assert stats.lines == 1


@pytest.mark.parametrize("line", ["quit \n", " quit\n", "QUIT\n", "Quit\n"])
def test_quit_is_exact(console, line):
    out, err, stats = run([line], console)
    assert not stats.quit
    assert stats.failed == 1
    assert "Couldn't parse input expression." in err


# --- Read failures ---

def _failing_lines(exc):
    yield "1\n"
    raise exc


def test_read_error_is_fatal(console):
    out = io.StringIO()
    with pytest.raises(InputReadError) as exc_info:
        run_session(_failing_lines(OSError("boom")), out, console)
    assert out.getvalue() == "1.0\n"
    assert str(exc_info.value) == "Error reading in from stdin: boom"
    assert isinstance(exc_info.value.cause, OSError)


def test_decode_error_is_fatal(console):
    bad = UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")
    with pytest.raises(InputReadError):
        run_session(_failing_lines(bad), io.StringIO(), console)


# --- Settings ---

def test_prompt_goes_to_console(console):
    out, err, _ = run(["1\n"], console, Settings(prompt="calc> "))
    assert out == "1.0\n"
    assert err.count("calc> ") == 2


def test_verbose_prints_tree(console):
    out, err, _ = run(["(1+2)*3\n"], console, Settings(verbose=True))
    assert out == "9.0\n"
    assert "= 9.0" in err
    assert "= 3.0" in err


def test_too_deep_nesting_is_not_fatal(console):
    deep = "(" * 5000 + "1" + ")" * 5000
    out, err, stats = run([deep + "\n", "2\n"], console)
    assert out == "2.0\n"
    assert "Expression is nested too deeply." in err
    assert stats.failed == 1
