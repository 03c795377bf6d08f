"""Compose-Go dialect: ``docker compose`` ``.env`` files.

Whole-buffer scanner following compose-spec/compose-go ``dotenv/parser.go``
and ``template/template.go``.  Variables are looked up in the parent first,
then among the values already parsed from this source.
"""

from __future__ import annotations

import re
from typing import BinaryIO

from punktum.dialects._scan import GO_SPACE, Cursor, crlf_to_lf, find_line_end, read_source, recover
from punktum.dialects.substitution import InvalidTemplate, MissingVariable, substitute_template
from punktum.errors import DotenvSyntaxError
from punktum.options import Options
from punktum.store import ReadEnv, WriteEnv

_ESCAPE_SEQ = re.compile(r'\\(?:[abcfnrtv$"\\]|0[0-9]{0,3})')

_SIMPLE_ESCAPES = {
    "a": "\x07",
    "b": "\x08",
    "f": "\x0c",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\x0b",
    '"': '"',
    "\\": "\\",
}

_KEY_PUNCT = frozenset("_.-[]")


def _is_space(ch: str) -> bool:
    return ch in GO_SPACE


def _unescape(match: re.Match[str]) -> str:
    seq = match.group(0)
    if seq == "\\$":
        # handled by the template as an escaped dollar
        return "$$"
    if seq.startswith("\\0"):
        digits = seq[2:]
        if len(digits) == 3 and all("0" <= d <= "7" for d in digits):
            code = int(digits, 8)
            if code <= 0xFF:
                return chr(code)
        return seq
    return _SIMPLE_ESCAPES.get(seq[1], seq)


def expand_escapes(value: str) -> str:
    """Decode the shell escapes compose-go honors inside double quotes."""
    return _ESCAPE_SEQ.sub(_unescape, value)


class _Parser:
    def __init__(self, buf: str, sink: WriteEnv, parent: ReadEnv, options: Options) -> None:
        self.cur = Cursor(buf)
        self.sink = sink
        self.parent = parent
        self.options = options
        self.values: dict[str, str] = {}

    def lookup(self, name: str) -> str | None:
        value = self.parent.get(name)
        if value is None:
            value = self.values.get(name)
        return value

    def statement_start(self) -> bool:
        cur = self.cur
        while True:
            cur.skip_if(str.isspace)
            if cur.at_end():
                return False
            if cur.peek() != "#":
                return True
            cur.skip_line()

    def trim_export(self) -> None:
        cur = self.cur
        if cur.startswith("export") and _is_space(cur.peek(6)):
            cur.advance(6)
            cur.skip(GO_SPACE)

    def locate_key(self) -> tuple[str, bool]:
        cur = self.cur
        self.trim_export()
        buf = cur.buf
        start = cur.index
        index = start
        end = len(buf)
        while index < end:
            ch = buf[index]
            if _is_space(ch):
                index += 1
                continue
            if ch in "=:\n":
                key = buf[start:index].rstrip()
                cur.move_to(index + 1)
                cur.skip(GO_SPACE)
                return key, ch == "\n"
            if ch in _KEY_PUNCT or ch.isalpha() or ch.isnumeric():
                index += 1
                continue
            cur.move_to(index)
            line = buf[start:find_line_end(buf, start)]
            raise cur.error(self.options, f"unexpected character {ch!r} in variable name {line!r}")
        cur.move_to(end)
        raise cur.error(self.options, "unexpected end of file, expected '=' after variable name")

    def expand(self, value: str, lineno: int, column: int) -> str:
        try:
            return substitute_template(value, self.lookup)
        except (InvalidTemplate, MissingVariable) as exc:
            raise self.options.syntax_error(str(exc), lineno, column) from None

    def extract_value(self) -> str:
        cur = self.cur
        lineno, column = cur.lineno, cur.column
        quote = cur.peek()
        if quote not in ('"', "'"):
            line_end = cur.line_end()
            value = cur.buf[cur.index:line_end]
            cur.move_to(line_end + 1)
            value = value.split(" #", 1)[0].rstrip()
            return self.expand(value, lineno, column)

        buf = cur.buf
        chars: list[str] = []
        escaped = False
        index = cur.index + 1
        end = len(buf)
        while index < end:
            ch = buf[index]
            if ch != quote:
                if not escaped and ch == "\\":
                    escaped = True
                elif escaped:
                    escaped = False
                    chars.append("\\")
                    chars.append(ch)
                else:
                    chars.append(ch)
                index += 1
                continue
            if escaped:
                escaped = False
                chars.append(ch)
                index += 1
                continue
            cur.move_to(index + 1)
            value = "".join(chars)
            if quote == '"':
                value = self.expand(expand_escapes(value), lineno, column)
            return value

        line_end = cur.line_end()
        raise cur.error(self.options, f"unterminated quoted value {buf[cur.index:line_end]}")

    def run(self) -> None:
        cur = self.cur
        options = self.options
        while self.statement_start():
            resume = cur.line_end() + 1
            try:
                lineno = cur.lineno
                key, inherited = self.locate_key()
                if " " in key:
                    raise options.syntax_error(f"key cannot contain a space: {key!r}", lineno)
                if "\0" in key:
                    raise options.syntax_error(f"key contains a NUL byte: {key!r}", lineno)
                if inherited:
                    value = self.parent.get(key)
                    if value is not None:
                        self.values[key] = value
                        options.set_var(self.sink, key, value)
                    continue
                value = self.extract_value()
                resume = cur.index
                if "\0" in value:
                    raise options.syntax_error(f"value of {key} contains a NUL byte", lineno)
                self.values[key] = value
                options.set_var(self.sink, key, value)
            except DotenvSyntaxError as error:
                recover(options, error)
                if cur.index < resume:
                    cur.move_to(resume)


def parse(reader: BinaryIO, sink: WriteEnv, parent: ReadEnv, options: Options) -> None:
    buf = crlf_to_lf(read_source(reader, options))
    _Parser(buf, sink, parent, options).run()
