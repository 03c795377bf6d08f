"""Tokenizer primitives shared by the dialect parsers.

Character classes are plain ``frozenset`` objects or predicates so each
dialect can pick the whitespace set and identifier alphabet of the tool it
emulates.  :class:`Cursor` is the position in a fully materialized buffer;
:meth:`Cursor.snapshot`/:meth:`Cursor.restore` implement quote backtracking.
"""

from __future__ import annotations

import string
from collections.abc import Callable, Container, Iterator
from typing import BinaryIO, NamedTuple

from punktum.encoding import LineSource
from punktum.errors import DecodeError, DotenvSyntaxError
from punktum.options import Options

CharClass = Container[str]

ASCII_ALNUM = frozenset(string.ascii_letters + string.digits)

# identifier alphabets
WORD = ASCII_ALNUM | {"_"}
WORD_DOT = WORD | {"."}
WORD_DOT_DASH = WORD_DOT | {"-"}

# whitespace sets
INLINE_WS = frozenset(" \t\x0b\x0c")
JAVA_WS = frozenset(" \t\n\x0b\x0c\r")
GO_SPACE = frozenset("\t\x0b\x0c\r \x85\xa0")


class Snapshot(NamedTuple):
    index: int
    lineno: int
    line_start: int


class Cursor:
    """Index into *buf* with 1-based line accounting."""

    __slots__ = ("buf", "index", "lineno", "line_start")

    def __init__(self, buf: str, lineno: int = 1) -> None:
        self.buf = buf
        self.index = 0
        self.lineno = lineno
        self.line_start = 0

    def __repr__(self) -> str:
        return f"Cursor(index={self.index}, lineno={self.lineno}, column={self.column})"

    @property
    def column(self) -> int:
        return self.index - self.line_start + 1

    def at_end(self) -> bool:
        return self.index >= len(self.buf)

    def peek(self, offset: int = 0) -> str:
        pos = self.index + offset
        return self.buf[pos] if pos < len(self.buf) else ""

    def startswith(self, prefix: str) -> bool:
        return self.buf.startswith(prefix, self.index)

    def tail(self) -> str:
        return self.buf[self.index:]

    def snapshot(self) -> Snapshot:
        return Snapshot(self.index, self.lineno, self.line_start)

    def restore(self, snap: Snapshot) -> None:
        self.index, self.lineno, self.line_start = snap

    def move_to(self, index: int) -> None:
        """Move forward to *index*, counting the newlines passed."""
        index = min(index, len(self.buf))
        newlines = self.buf.count("\n", self.index, index)
        if newlines:
            self.lineno += newlines
            self.line_start = self.buf.rfind("\n", self.index, index) + 1
        self.index = index

    def advance(self, count: int = 1) -> None:
        self.move_to(self.index + count)

    def skip(self, chars: CharClass) -> None:
        """Skip characters in *chars*; newlines in the set are counted."""
        buf = self.buf
        index = self.index
        end = len(buf)
        while index < end and buf[index] in chars:
            index += 1
        self.move_to(index)

    def skip_if(self, pred: Callable[[str], bool]) -> None:
        buf = self.buf
        index = self.index
        end = len(buf)
        while index < end and pred(buf[index]):
            index += 1
        self.move_to(index)

    def scan(self, chars: CharClass) -> str:
        """Consume and return the run of characters in *chars*."""
        start = self.index
        self.skip(chars)
        return self.buf[start:self.index]

    def line_end(self) -> int:
        return find_line_end(self.buf, self.index)

    def skip_line(self) -> None:
        """Move to the ``\\n`` ending the current line (or the end)."""
        self.move_to(self.line_end())

    def next_line(self) -> None:
        """Move past the ``\\n`` ending the current line."""
        self.move_to(self.line_end() + 1)

    def current_line(self) -> str:
        return self.buf[self.line_start:find_line_end(self.buf, self.line_start)]

    def error(self, options: Options, message: str, column: int | None = None) -> DotenvSyntaxError:
        return options.syntax_error(message, self.lineno, self.column if column is None else column)

    def unexpected(self, options: Options, expected: str) -> DotenvSyntaxError:
        ch = self.peek()
        if not ch:
            return self.error(options, f"{expected}, found end of file")
        return self.error(options, f"{expected}, found {ch!r}: {self.current_line()}")


def find_line_end(buf: str, index: int) -> int:
    pos = buf.find("\n", index)
    return len(buf) if pos < 0 else pos


def fix_newlines(buf: str) -> str:
    """``\\r\\n`` and lone ``\\r`` become ``\\n``."""
    return buf.replace("\r\n", "\n").replace("\r", "\n")


def crlf_to_lf(buf: str) -> str:
    return buf.replace("\r\n", "\n")


def split_lines(buf: str) -> Iterator[str]:
    """Split on ``\\n``, ``\\r\\n`` and ``\\r``.  A final unterminated line is kept."""
    index = 0
    end = len(buf)
    while index < end:
        cr = buf.find("\r", index)
        lf = buf.find("\n", index)
        if cr < 0 and lf < 0:
            yield buf[index:]
            return
        if cr < 0 or (0 <= lf < cr):
            yield buf[index:lf]
            index = lf + 1
        else:
            yield buf[index:cr]
            index = cr + 2 if buf.startswith("\r\n", cr) else cr + 1


def rstrip_chars(value: str, chars: CharClass) -> str:
    end = len(value)
    while end > 0 and value[end - 1] in chars:
        end -= 1
    return value[:end]


def strip_chars(value: str, chars: CharClass) -> str:
    start = 0
    end = len(value)
    while start < end and value[start] in chars:
        start += 1
    while end > start and value[end - 1] in chars:
        end -= 1
    return value[start:end]


def recover(options: Options, error: DotenvSyntaxError) -> None:
    """Log *error*; re-raise it under strict mode.

    Callers continue at their recovery point when this returns.
    """
    options.report(error)
    if options.strict:
        raise error


def _report_decode_error(options: Options) -> Callable[[DecodeError], None]:
    def report(error: DecodeError) -> None:
        options.log("%s:%s: %s", options.path, error.lineno, error.message)
    return report


def line_source(reader: BinaryIO, options: Options) -> LineSource:
    return LineSource(reader, options.encoding, options.strict, _report_decode_error(options))


def read_source(reader: BinaryIO, options: Options) -> str:
    """Decode the whole of *reader* line by line under the encoding policy."""
    return line_source(reader, options).read_all()
