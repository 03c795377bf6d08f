"""Tests for the writers and export formats."""

from __future__ import annotations

import io
import json

import pytest

from punktum.dialect import Dialect
from punktum.writer import format_lines, quote_shell, write_iter, write_iter_binary, write_var


def test_write_var_quotes_single_quote():
    out = io.StringIO()
    write_var(out, "A", "it's")
    assert out.getvalue() == "A='it'\"'\"'s'\n"


def test_write_iter_reads_back(parse):
    out = io.StringIO()
    values = {"A": "it's", "B": "two\nlines", "C": "$HOME #x", "D": ""}
    write_iter(out, values.items())
    assert parse(Dialect.Punktum, out.getvalue()) == values


def test_write_iter_binary():
    out = io.BytesIO()
    write_iter_binary(out, [("A", "1"), ("B", "2")])
    assert out.getvalue() == b"A=1\0B=2\0"


def test_quote_shell_empty():
    assert quote_shell("") == "''"


def test_format_dotenv_sorted_and_bare_when_safe():
    lines = format_lines({"B": "has space", "A": "plain"}, "dotenv")
    assert lines == ["A=plain", "B='has space'"]


def test_format_unix():
    assert format_lines({"A": "x"}, "unix") == ["export A=x"]


def test_format_win():
    assert format_lines({"A": "it's"}, "win") == ["$env:A = 'it''s'"]


def test_format_json():
    (text,) = format_lines({"B": "2", "A": "1"}, "json")
    assert json.loads(text) == {"A": "1", "B": "2"}
    assert text.index('"A"') < text.index('"B"')


def test_format_unknown():
    with pytest.raises(ValueError, match="unknown format"):
        format_lines({"A": "1"}, "yaml")
