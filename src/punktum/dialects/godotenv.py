"""Go dotenv dialect (joho/godotenv v1.5.1)."""

from __future__ import annotations

import re
from typing import BinaryIO

from punktum.dialects._scan import GO_SPACE, Cursor, crlf_to_lf, read_source, recover, strip_chars
from punktum.errors import DotenvSyntaxError
from punktum.options import Options
from punktum.store import ReadEnv, WriteEnv

_ESCAPE = re.compile(r"\\.")
_UNESCAPE_CHARS = re.compile(r"\\([^$])")
_EXPAND_VAR = re.compile(r"(\\)?(\$)(\()?\{?([A-Z0-9_]+)?\}?")


def _is_space(ch: str) -> bool:
    return ch in GO_SPACE


def expand_escapes(value: str) -> str:
    def unescape(match: re.Match[str]) -> str:
        seq = match.group(0)
        if seq == "\\n":
            return "\n"
        if seq == "\\r":
            return "\r"
        return seq

    return _UNESCAPE_CHARS.sub(r"\1", _ESCAPE.sub(unescape, value))


class _Parser:
    def __init__(self, buf: str, sink: WriteEnv, parent: ReadEnv, options: Options) -> None:
        self.cur = Cursor(buf)
        self.sink = sink
        self.parent = parent
        self.options = options
        self.values: dict[str, str] = {}

    def expand_variables(self, value: str) -> str:
        def replace(match: re.Match[str]) -> str:
            if match.group(1):
                return match.group(0)[1:]
            name = match.group(4)
            if name:
                if name in self.values:
                    return self.values[name]
                inherited = self.parent.get(name)
                return inherited if inherited is not None else ""
            return match.group(0)

        return _EXPAND_VAR.sub(replace, value)

    def statement_start(self) -> bool:
        cur = self.cur
        while True:
            cur.skip_if(str.isspace)
            if cur.at_end():
                return False
            if cur.peek() != "#":
                return True
            cur.skip_line()

    def locate_key(self) -> str:
        cur = self.cur
        cur.skip(GO_SPACE)
        if cur.startswith("export") and _is_space(cur.peek(6)):
            cur.advance(6)
            cur.skip(GO_SPACE)

        buf = cur.buf
        start = cur.index
        index = start
        end = len(buf)
        while index < end:
            ch = buf[index]
            if _is_space(ch) or ch == "_" or ch == "." or ch.isalpha() or ch.isnumeric():
                index += 1
                continue
            if ch == "=" or ch == ":":
                key = buf[start:index].rstrip()
                cur.move_to(index + 1)
                cur.skip(GO_SPACE)
                return key
            cur.move_to(index)
            raise cur.error(self.options, f"unexpected character {ch!r} in variable name")
        cur.move_to(end)
        raise cur.error(self.options, "unexpected end of file, expected '=' after variable name")

    def extract_value(self) -> str:
        cur = self.cur
        buf = cur.buf
        quote = cur.peek()
        if quote not in ('"', "'"):
            end = cur.index
            while end < len(buf) and buf[end] not in "\r\n":
                end += 1
            line = buf[cur.index:end]
            cur.move_to(end)
            var_end = len(line)
            for i in range(len(line) - 1, 0, -1):
                if line[i] == "#" and _is_space(line[i - 1]):
                    var_end = i
                    break
            return self.expand_variables(strip_chars(line[:var_end], GO_SPACE))

        start = cur.index
        index = start + 1
        while index < len(buf):
            if buf[index] == quote and buf[index - 1] != "\\":
                value = buf[start:index].strip(quote)
                cur.move_to(index + 1)
                if quote == '"':
                    value = self.expand_variables(expand_escapes(value))
                return value
            index += 1

        raise cur.error(self.options, f"unterminated quoted value {buf[start:cur.line_end()]}")

    def run(self) -> None:
        cur = self.cur
        options = self.options
        while self.statement_start():
            resume = cur.line_end() + 1
            lineno = cur.lineno
            try:
                key = self.locate_key()
                value = self.extract_value()
            except DotenvSyntaxError as error:
                recover(options, error)
                if cur.index < resume:
                    cur.move_to(resume)
                continue
            self.values[key] = value
            if "\0" in key or "\0" in value:
                recover(options, options.syntax_error(f"variable {key!r} contains a NUL byte", lineno))
            options.set_var_cut_null(self.sink, key, value)


def parse(reader: BinaryIO, sink: WriteEnv, parent: ReadEnv, options: Options) -> None:
    buf = crlf_to_lf(read_source(reader, options))
    _Parser(buf, sink, parent, options).run()
