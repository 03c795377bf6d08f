"""Tests for the python dotenv-cli (venthur/dotenv-cli) dialect."""

from __future__ import annotations

import pytest

from punktum.dialect import Dialect
from punktum.errors import DotenvSyntaxError

CLI = Dialect.PythonDotenvCLI


def test_simple_assignments(parse):
    env = parse(CLI, "# c\nA=1\n  export B = 2  \nJUNK\nC=1 # not a comment\n")
    assert env == {"A": "1", "B": "2", "C": "1 # not a comment"}


def test_universal_newlines(parse):
    assert parse(CLI, "A=1\rB=2\r\nC=3\n") == {"A": "1", "B": "2", "C": "3"}


def test_only_cr_and_lf_end_lines(parse):
    assert parse(CLI, "A=x\x0cy\nB=1\n") == {"A": "x\x0cy", "B": "1"}
    assert parse(CLI, "A=x\x0by\x85z\u2028w\n") == {"A": "x\x0by\x85z\u2028w"}


def test_control_escapes(parse):
    env = parse(CLI, 'A="\\r,\\n,\\t,\\v,\\f,\\a,\\b"\n')
    assert env == {"A": "\r,\n,\t,\x0b,\x0c,\x07,\x08"}


def test_numeric_escapes(parse):
    env = parse(CLI, 'A="\\53\\053"\nB="\\x41\\u00e4\\U0001F603"\n')
    assert env == {"A": "++", "B": "A\u00e4\U0001F603"}


def test_non_ascii_is_reinterpreted_as_latin1(parse):
    assert parse(CLI, 'A="\u00e4"\n') == {"A": "\u00c3\u00a4"}


def test_unknown_escape_is_kept(parse):
    assert parse(CLI, 'A="\\q"\n') == {"A": "\\q"}


def test_truncated_escape_is_error(parse):
    with pytest.raises(DotenvSyntaxError, match="invalid escape sequence"):
        parse(CLI, 'A="\\x4"\n')


def test_single_quotes_only_removed(parse):
    assert parse(CLI, "A='x\\ny'\nB='\n") == {"A": "x\\ny", "B": "'"}


def test_empty_key_is_error(parse):
    with pytest.raises(DotenvSyntaxError):
        parse(CLI, "=1\n")
    assert parse(CLI, "=1\nA=2\n", strict=False) == {"A": "2"}


def test_null_byte_is_error(parse):
    with pytest.raises(DotenvSyntaxError):
        parse(CLI, "A=x\0y\n")
