"""Tests for the binary KEY=VALUE\\0 dialect."""

from __future__ import annotations

import pytest

from punktum.dialect import Dialect
from punktum.errors import DotenvSyntaxError

BIN = Dialect.Binary


def test_records(parse):
    assert parse(BIN, b"A=1\0B=x\ny\0C=b=c\0") == {"A": "1", "B": "x\ny", "C": "b=c"}


def test_unterminated_record(parse):
    with pytest.raises(DotenvSyntaxError, match="null byte"):
        parse(BIN, b"A=1\0B=2")
    assert parse(BIN, b"A=1\0B=2", strict=False) == {"A": "1", "B": "2"}


def test_missing_equals(parse):
    with pytest.raises(DotenvSyntaxError) as info:
        parse(BIN, b"JUNK\0A=1\0")
    assert info.value.lineno == 1
    assert parse(BIN, b"JUNK\0A=1\0", strict=False) == {"A": "1"}


def test_empty_key(parse):
    with pytest.raises(DotenvSyntaxError, match="empty"):
        parse(BIN, b"=1\0")


def test_invalid_utf8(parse):
    with pytest.raises(DotenvSyntaxError):
        parse(BIN, b"A=\xff\0")
    assert parse(BIN, b"A=\xff\0B=1\0", strict=False) == {"B": "1"}
