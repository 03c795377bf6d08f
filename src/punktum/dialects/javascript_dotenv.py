"""JavaScript dotenv dialect (motdotla/dotenv ``lib/main.js``).

The upstream parser is a single regular expression.  This scanner
reproduces what that expression accepts, including its backtracking: a
quoted value followed by anything but a comment or the end of the line is
re-read as an unquoted value from the opening quote.
"""

from __future__ import annotations

from typing import BinaryIO

from punktum.dialects._scan import INLINE_WS, WORD_DOT_DASH, Cursor, fix_newlines, read_source, recover, rstrip_chars
from punktum.errors import DotenvSyntaxError
from punktum.options import Options
from punktum.store import ReadEnv, WriteEnv

QUOTES = ('"', "'", "`")

_WS_AND_NEWLINE = INLINE_WS | {"\n"}


def skip_to_quote_end(cur: Cursor, quote: str) -> bool:
    """Move *cur* onto the closing *quote*; ``False`` if there is none.

    A backslash before a quote is allowed to end the string only when no
    later quote exists, mirroring the lazy match of the upstream regex.
    """
    buf = cur.buf
    end = buf.find(quote, cur.index)
    if end < 0:
        return False
    while buf[end - 1] == "\\":
        nxt = buf.find(quote, end + 1)
        if nxt < 0:
            break
        end = nxt
    cur.move_to(end)
    return True


def find_value_end(buf: str, index: int) -> int:
    end = len(buf)
    while index < end and buf[index] not in "\n#":
        index += 1
    return index


def parse_quoted_or_plain(cur: Cursor) -> tuple[int, int]:
    """Scan a value with quote backtracking; return its ``[start, end)``.

    For a quoted value the range includes both quotes.
    """
    start = cur.index
    ch = cur.peek()
    if ch in QUOTES:
        snap = cur.snapshot()
        cur.advance()
        if skip_to_quote_end(cur, ch):
            cur.advance()
            end = cur.index
            cur.skip(INLINE_WS)
            nxt = cur.peek()
            if nxt == "#":
                cur.skip_line()
                return start, end
            if nxt in ("", "\n"):
                return start, end
        cur.restore(snap)
    end = find_value_end(cur.buf, cur.index)
    cur.move_to(end)
    return start, end


def _unescape_double_quoted(value: str) -> str:
    return value.replace("\\n", "\n").replace("\\r", "\r")


class _Parser:
    def __init__(self, buf: str, sink: WriteEnv, options: Options) -> None:
        self.cur = Cursor(buf)
        self.sink = sink
        self.options = options

    def parse_key(self) -> tuple[int, int]:
        cur = self.cur
        key_start = cur.index
        cur.skip(WORD_DOT_DASH)
        key_end = cur.index
        cur.skip(_WS_AND_NEWLINE)
        if cur.buf[key_start:key_end] == "export" and cur.peek() in WORD_DOT_DASH:
            key_start = cur.index
            cur.skip(WORD_DOT_DASH)
            key_end = cur.index
            cur.skip(_WS_AND_NEWLINE)
        return key_start, key_end

    def statement(self) -> None:
        cur = self.cur
        buf = cur.buf
        key_start, key_end = self.parse_key()
        if key_start == key_end:
            raise cur.unexpected(self.options, "expected variable name")

        ch = cur.peek()
        if ch not in ("=", ":"):
            error = cur.unexpected(self.options, "expected '=' or ':'")
            if self.options.strict:
                raise error
            self.options.report(error)
            # the `=` may be on a later line than the name; retry from there
            if not (key_end < cur.line_start and ch in WORD_DOT_DASH):
                cur.skip_line()
            return
        if ch == ":" and cur.index != key_end:
            raise cur.error(self.options, "there may be no space between the variable name and ':'")

        cur.advance()
        cur.skip(INLINE_WS)

        value_start, value_end = parse_quoted_or_plain(cur)
        raw = buf[value_start:value_end]
        first = raw[:1]
        if len(raw) > 1 and first in QUOTES and raw.endswith(first):
            value = raw[1:-1]
        else:
            value = rstrip_chars(raw, INLINE_WS)
        if first == '"':
            value = _unescape_double_quoted(value)

        cur.skip(INLINE_WS)
        nxt = cur.peek()
        if nxt == "#":
            cur.skip_line()
        elif nxt and nxt != "\n":
            raise cur.unexpected(self.options, "expected line end")

        self.options.set_var_cut_null(self.sink, buf[key_start:key_end], value)

    def run(self) -> None:
        cur = self.cur
        while not cur.at_end():
            cur.skip(_WS_AND_NEWLINE)
            if cur.peek() == "#":
                cur.skip_line()
                continue
            if cur.at_end():
                break
            try:
                self.statement()
            except DotenvSyntaxError as error:
                recover(self.options, error)
                cur.skip_line()


def parse(reader: BinaryIO, sink: WriteEnv, parent: ReadEnv, options: Options) -> None:
    _Parser(fix_newlines(read_source(reader, options)), sink, options).run()
