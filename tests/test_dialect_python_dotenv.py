"""Tests for the python-dotenv dialect."""

from __future__ import annotations

import pytest

from punktum.dialect import Dialect
from punktum.dialects.python_dotenv import Binding, parse_stream
from punktum.errors import DotenvSyntaxError

PY = Dialect.PythonDotenv


def test_simple_assignments(parse):
    assert parse(PY, "A=1\nexport B=2\n'C'=3\n") == {"A": "1", "B": "2", "C": "3"}


def test_unquoted_comment_needs_whitespace(parse):
    assert parse(PY, "A=x # c\nB=x#c\n") == {"A": "x", "B": "x#c"}


def test_double_quote_escapes(parse):
    assert parse(PY, 'A="a\\tb\\nc\\\\"\n') == {"A": "a\tb\nc\\"}


def test_single_quote_escapes(parse):
    assert parse(PY, "A='a\\nb\\'c'\n") == {"A": "a\\nb'c"}


def test_multiline_double_quoted(parse):
    assert parse(PY, 'A="a\nb"\n') == {"A": "a\nb"}


def test_interpolation(parse):
    env = parse(PY, 'A=${HOME}/x\nB="${UNSET:-d}"\nC=${A}y\n', {"HOME": "/h"})
    assert env == {"A": "/h/x", "B": "d", "C": "/h/xy"}


def test_default_only_when_unset(parse):
    assert parse(PY, "A=${E:-d}\n", {"E": ""}) == {"A": ""}


def test_parent_wins_without_override(parse):
    assert parse(PY, "A=f\nB=${A}\n", {"A": "p"}) == {"A": "f", "B": "p"}
    assert parse(PY, "A=f\nB=${A}\n", {"A": "p"}, override=True) == {"A": "f", "B": "f"}


def test_bare_key_writes_nothing(parse):
    assert parse(PY, "A\nB=${A:-d}\n") == {"B": ""}


def test_unparsable_statement(parse):
    with pytest.raises(DotenvSyntaxError, match="could not parse statement starting at line 2"):
        parse(PY, "A=1\n'B=2\nC=3\n")
    assert parse(PY, "A=1\n'B=2\nC=3\n", strict=False) == {"A": "1", "C": "3"}


def test_garbage_after_quoted_value(parse):
    with pytest.raises(DotenvSyntaxError):
        parse(PY, 'A="x" y\n')


def test_null_byte_cut(parse):
    assert parse(PY, "A=x\0y\n") == {"A": "x"}


def test_parse_stream_bindings():
    bindings = list(parse_stream("# c\nA=1\nB\n"))
    assert bindings == [
        Binding(None, None, 1, False),
        Binding("A", "1", 2, False),
        Binding("B", None, 3, False),
    ]
