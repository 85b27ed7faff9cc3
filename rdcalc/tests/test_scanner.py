"""Tests for the scanning primitives.

Every primitive is pure: a failed match returns None and the caller's text
is left as it was.
"""

from rdcalc.scanner import char_is, is_numeral_char, match_char, match_run, skip_spaces


# --- match_char ---

def test_match_char_consumes_one_character():
    assert match_char(char_is("("), "(1)") == ("(", "1)")


def test_match_char_mismatch():
    assert match_char(char_is("("), "1)") is None


def test_match_char_empty_input():
    assert match_char(char_is("("), "") is None


# --- match_run ---

def test_match_run_takes_longest_prefix():
    assert match_run(is_numeral_char, "12.5+3") == ("12.5", "+3")


def test_match_run_whole_input():
    assert match_run(is_numeral_char, "-7") == ("-7", "")


def test_match_run_requires_one_character():
    assert match_run(is_numeral_char, "+3") is None
    assert match_run(is_numeral_char, "") is None


def test_match_run_stops_at_space():
    assert match_run(is_numeral_char, "1 2") == ("1", " 2")


# --- skip_spaces ---

def test_skip_spaces_leading():
    assert skip_spaces("   1 + 2") == "1 + 2"


def test_skip_spaces_nothing_to_skip():
    assert skip_spaces("1 ") == "1 "
    assert skip_spaces("") == ""


def test_skip_spaces_ignores_tabs_and_newlines():
    assert skip_spaces("\t1") == "\t1"
    assert skip_spaces(" \n1") == "\n1"


# --- predicates ---

def test_numeral_chars():
    assert all(is_numeral_char(c) for c in "0123456789.-")
    assert not any(is_numeral_char(c) for c in "+*/^() e")
