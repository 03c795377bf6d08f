"""The native Punktum dialect.

Line-buffered: physical lines are pulled from the source on demand, so a
quoted value, an escaped newline, or a substitution operand can continue on
the following lines.

* ``KEY=VALUE`` with ``KEY`` in ``[A-Za-z0-9_]``; ``KEY`` alone (or followed
  by a comment) inherits the parent's value.
* ``export KEY=VALUE`` only outside strict mode.
* Values are a concatenation of single-quoted (literal), double-quoted
  (escapes and substitution) and unquoted (substitution) segments.
* ``$NAME``, ``${NAME}`` and the six ``${NAME<modifier>operand}`` forms;
  variables are looked up in the sink first, then in the parent.
* A NUL anywhere in a value is an error.
"""

from __future__ import annotations

import string
from typing import BinaryIO

from punktum.dialects._scan import WORD, line_source, recover
from punktum.dialects.substitution import MissingVariable, match_modifier
from punktum.errors import DotenvSyntaxError
from punktum.options import Options
from punktum.store import ReadEnv, WriteEnv

_SPACE = frozenset(string.whitespace)
_HEX = frozenset(string.hexdigits)

_ESCAPES = {
    "\\": "\\",
    '"': '"',
    "$": "$",
    "'": "'",
    "r": "\r",
    "n": "\n",
    "t": "\t",
    "f": "\x0c",
    "b": "\x08",
}

# stop characters for a run of plain text inside each context
_DQ_STOP = frozenset('"\\$\n\0')
_SQ_STOP = frozenset("'\n\0")
_OPERAND_STOP = frozenset("\"'\\$}\n\0")


def _skip_space(line: str, index: int) -> int:
    end = len(line)
    while index < end and line[index] in _SPACE:
        index += 1
    return index


def _scan_word(line: str, index: int) -> int:
    end = len(line)
    while index < end and line[index] in WORD:
        index += 1
    return index


def _scan_until(line: str, index: int, stop) -> int:
    end = len(line)
    while index < end and line[index] not in stop:
        index += 1
    return index


class _Parser:
    def __init__(self, reader: BinaryIO, sink: WriteEnv, parent: ReadEnv, options: Options) -> None:
        self.lines = line_source(reader, options)
        self.sink = sink
        self.parent = parent
        self.options = options
        self.line = ""
        self.lineno = 0
        self.deferred: DotenvSyntaxError | None = None

    # -- input -------------------------------------------------------------

    def read_line(self) -> bool:
        line = self.lines.next_line()
        self.lineno = self.lines.lineno
        if line.endswith("\r\n"):
            line = line[:-2] + "\n"
        self.line = line
        return bool(line)

    def error(self, message: str, index: int, lineno: int | None = None) -> DotenvSyntaxError:
        text = self.line.rstrip("\n")
        return self.options.syntax_error(
            f"{message}: {text}", self.lineno if lineno is None else lineno, index + 1,
        )

    def lookup(self, name: str) -> str | None:
        value = self.sink.get(name)
        if value is None:
            value = self.parent.get(name)
        return value

    # -- statements --------------------------------------------------------

    def run(self) -> None:
        while self.read_line():
            try:
                self.parse_statement()
            except DotenvSyntaxError as error:
                recover(self.options, error)

    def inherit(self, key: str) -> None:
        value = self.parent.get(key)
        if value is not None:
            self.options.set_var(self.sink, key, value)

    def parse_statement(self) -> None:
        line = self.line
        index = _skip_space(line, 0)
        if index >= len(line) or line[index] == "#":
            return

        if line[index] not in WORD:
            raise self.error(f"unexpected {line[index]!r}, expected variable name", index)

        key_end = _scan_word(line, index)
        key = line[index:key_end]
        index = _skip_space(line, key_end)

        if index >= len(line) or line[index] == "#":
            self.inherit(key)
            return

        if line[index] != "=":
            if self.options.strict or key != "export" or line[index] not in WORD:
                raise self.error(f"expected '=', actual {line[index]!r}", index)
            key_end = _scan_word(line, index)
            key = line[index:key_end]
            index = _skip_space(line, key_end)
            if index >= len(line) or line[index] == "#":
                self.inherit(key)
                return
            if line[index] != "=":
                raise self.error(f"expected '=', actual {line[index]!r}", index)

        index = _skip_space(line, index + 1)
        self.deferred = None
        value, _ = self.parse_value(index, evaluate=True, operand=False)
        if self.deferred is not None:
            raise self.deferred
        self.options.set_var(self.sink, key, value)

    # -- values ------------------------------------------------------------

    def parse_value(self, index: int, evaluate: bool, operand: bool) -> tuple[str, int]:
        """Parse a value (or an operand when *operand*) starting at *index*.

        Returns the decoded text and the index just past it in the current
        line.  An operand ends at its closing ``}``, which is consumed.
        """
        parts: list[str] = []
        start_lineno = self.lineno
        start_index = index
        while True:
            line = self.line
            if index >= len(line):
                if operand:
                    raise self.error("unterminated variable substitution, expected '}'", start_index, start_lineno)
                break
            ch = line[index]

            if ch == '"' or ch == "'":
                text, index = self.parse_quoted(index, evaluate)
                parts.append(text)
                if not operand:
                    line = self.line
                    after = _skip_space(line, index)
                    if after > index and after < len(line) and line[after] != "#":
                        raise self.error("unexpected content after quoted value", after)
                continue

            if ch == "\0":
                raise self.error("illegal null byte", index)

            if ch == "$":
                text, index = self.parse_var(index, evaluate)
                parts.append(text)
                continue

            if operand:
                if ch == "}":
                    return "".join(parts), index + 1
                if ch == "\\":
                    text, index = self.parse_escape(index)
                    parts.append(text)
                    continue
                if ch == "\n":
                    parts.append("\n")
                    if not self.read_line():
                        raise self.error("unexpected end of file in variable substitution", start_index, start_lineno)
                    index = 0
                    continue
                end = _scan_until(line, index, _OPERAND_STOP)
                parts.append(line[index:end])
                index = end
                continue

            if ch == "#":
                break

            if ch in _SPACE:
                after = _skip_space(line, index)
                if after >= len(line) or line[after] == "#":
                    break
                parts.append(line[index:after])
                index = after
                continue

            end = index + 1
            while end < len(line) and line[end] not in _SPACE and line[end] not in "\"'$#\0":
                end += 1
            parts.append(line[index:end])
            index = end

        return "".join(parts), index

    def parse_quoted(self, index: int, evaluate: bool) -> tuple[str, int]:
        quote = self.line[index]
        start_lineno = self.lineno
        start_index = index
        stop = _DQ_STOP if quote == '"' else _SQ_STOP
        parts: list[str] = []
        index += 1
        while True:
            line = self.line
            if index >= len(line):
                raise self.error("unterminated string literal", start_index, start_lineno)
            ch = line[index]
            if ch == quote:
                return "".join(parts), index + 1
            if ch == "\n":
                parts.append("\n")
                if not self.read_line():
                    raise self.error("unexpected end of file in string literal", start_index, start_lineno)
                index = 0
                continue
            if ch == "\0":
                raise self.error("illegal null byte", index)
            if quote == '"':
                if ch == "\\":
                    text, index = self.parse_escape(index)
                    parts.append(text)
                    continue
                if ch == "$":
                    text, index = self.parse_var(index, evaluate)
                    parts.append(text)
                    continue
            end = _scan_until(line, index, stop)
            parts.append(line[index:end])
            index = end

    def _hex(self, index: int, count: int) -> int | None:
        digits = self.line[index:index + count]
        if len(digits) != count or any(ch not in _HEX for ch in digits):
            return None
        return int(digits, 16)

    def parse_escape(self, index: int) -> tuple[str, int]:
        line = self.line
        ch = line[index + 1] if index + 1 < len(line) else ""
        if not ch:
            raise self.error("unexpected end of file within escape sequence", index)
        if ch in _ESCAPES:
            return _ESCAPES[ch], index + 2
        if ch == "\n":
            if not self.read_line():
                raise self.error("unexpected end of file after line continuation", index)
            return "", 0
        if ch == "u":
            hi = self._hex(index + 2, 4)
            if hi is None:
                raise self.error(f"illegal escape sequence {line[index:index + 6]!r}", index)
            if 0xD800 <= hi <= 0xDBFF:
                lo = self._hex(index + 8, 4) if line.startswith("\\u", index + 6) else None
                if lo is None or not 0xDC00 <= lo <= 0xDFFF:
                    raise self.error(f"illegal escape sequence {line[index:index + 12]!r}", index)
                return chr(((hi & 0x3FF) << 10 | (lo & 0x3FF)) + 0x10000), index + 12
            if 0xDC00 <= hi <= 0xDFFF:
                raise self.error(f"illegal escape sequence {line[index:index + 6]!r}", index)
            return chr(hi), index + 6
        if ch == "U":
            code = self._hex(index + 2, 6)
            if code is None or code > 0x10FFFF or 0xD800 <= code <= 0xDFFF:
                raise self.error(f"illegal escape sequence {line[index:index + 8]!r}", index)
            return chr(code), index + 8
        if ch == "\0":
            raise self.error("illegal null byte", index + 1)
        raise self.error(f"illegal escape sequence {line[index:index + 2]!r}", index)

    def parse_var(self, index: int, evaluate: bool) -> tuple[str, int]:
        line = self.line
        start = index
        start_lineno = self.lineno
        index += 1
        braced = line.startswith("{", index)
        if braced:
            index += 1
        name_end = _scan_word(line, index)
        name = line[index:name_end]

        if not braced:
            if not name:
                raise self.error("single $ found", start)
            return (self.lookup(name) or "") if evaluate else "", name_end

        if not name:
            if line.startswith("}", name_end):
                raise self.error("${} found", start)
            raise self.error("expected variable name after '${'", name_end)

        index = name_end
        if line.startswith("}", index):
            return (self.lookup(name) or "") if evaluate else "", index + 1

        modifier = match_modifier(line, index)
        if modifier is None:
            raise self.error("expected '}'", index)

        value = self.lookup(name) if evaluate else None
        use_operand = evaluate and modifier.uses_operand(value)
        operand, index = self.parse_value(index + len(modifier.value), use_operand, operand=True)
        if not evaluate:
            return "", index
        try:
            return modifier.apply(name, value, operand), index
        except MissingVariable as exc:
            if self.deferred is None:
                self.deferred = self.options.syntax_error(str(exc), start_lineno, start + 1)
            return "", index


def parse(reader: BinaryIO, sink: WriteEnv, parent: ReadEnv, options: Options) -> None:
    _Parser(reader, sink, parent, options).run()
