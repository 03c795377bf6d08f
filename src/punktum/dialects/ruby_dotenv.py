"""Ruby dotenv dialect (bkeepers/dotenv ``lib/dotenv/parser.rb``).

Double-quoted ``\\n``/``\\r`` are only decoded in the legacy linebreak mode,
enabled by ``DOTENV_LINEBREAK_MODE=legacy`` in the sink (or, failing that,
the parent).
"""

from __future__ import annotations

from typing import BinaryIO

from punktum.dialects._scan import INLINE_WS, WORD, WORD_DOT, Cursor, fix_newlines, read_source, recover, rstrip_chars
from punktum.dialects.javascript_dotenv import find_value_end
from punktum.errors import DotenvSyntaxError
from punktum.options import Options
from punktum.store import ReadEnv, WriteEnv

LINEBREAK_MODE = "DOTENV_LINEBREAK_MODE"

_WS_AND_NEWLINE = INLINE_WS | {"\n"}


def skip_to_quote_end(cur: Cursor, quote: str) -> bool:
    """Move *cur* onto the first *quote* not escaped by a backslash."""
    buf = cur.buf
    index = cur.index
    end = len(buf)
    while index < end:
        ch = buf[index]
        if ch == "\\":
            if index + 1 >= end:
                return False
            if buf[index + 1] == quote:
                index += 1
        elif ch == quote:
            cur.move_to(index)
            return True
        index += 1
    return False


def unescape_unquoted(value: str) -> str:
    """``\\x`` becomes ``x``; ``\\$`` is kept for the substitution pass."""
    out: list[str] = []
    index = 0
    while True:
        slash = value.find("\\", index)
        if slash < 0 or slash + 1 >= len(value):
            break
        ch = value[slash + 1]
        out.append(value[index:slash])
        out.append("\\$" if ch == "$" else ch)
        index = slash + 2
    out.append(value[index:])
    return "".join(out)


def unescape_double_quoted(value: str, legacy_linebreak: bool) -> str:
    out: list[str] = []
    index = 0
    while True:
        slash = value.find("\\", index)
        if slash < 0 or slash + 1 >= len(value):
            break
        ch = value[slash + 1]
        out.append(value[index:slash])
        if ch == "$":
            out.append("\\$")
        elif ch == "n":
            out.append("\n" if legacy_linebreak else "\\n")
        elif ch == "r":
            out.append("\r" if legacy_linebreak else "\\r")
        else:
            out.append(ch)
        index = slash + 2
    out.append(value[index:])
    return "".join(out)


class _Parser:
    def __init__(self, buf: str, sink: WriteEnv, parent: ReadEnv, options: Options) -> None:
        self.cur = Cursor(buf)
        self.sink = sink
        self.parent = parent
        self.options = options

    def lookup(self, name: str) -> str | None:
        value = self.sink.get(name)
        if value is None:
            value = self.parent.get(name)
        return value

    def legacy_linebreak(self) -> bool:
        return self.lookup(LINEBREAK_MODE) == "legacy"

    def substitute(self, value: str) -> str:
        out: list[str] = []
        index = 0
        end = len(value)
        while index < end:
            ch = value[index]
            if ch == "\\":
                if index + 1 >= end:
                    out.append("\\")
                    break
                nxt = value[index + 1]
                if nxt != "$":
                    out.append("\\")
                out.append(nxt)
                index += 2
            elif ch == "$":
                name_start = index + 2 if value.startswith("${", index) else index + 1
                name_end = name_start
                while name_end < end and value[name_end] in WORD:
                    name_end += 1
                if name_end == name_start:
                    out.append(value[index:name_end])
                else:
                    out.append(self.lookup(value[name_start:name_end]) or "")
                    # the closing brace is optional and independent of the opening one
                    if value.startswith("}", name_end):
                        name_end += 1
                index = name_end
            else:
                run_end = index
                while run_end < end and value[run_end] not in "\\$":
                    run_end += 1
                out.append(value[index:run_end])
                index = run_end
        return "".join(out)

    def check_exported(self, first: str, first_end: int) -> None:
        """``export A B ...`` without a value: every name must already be set."""
        cur = self.cur
        name, name_end = first, first_end
        while True:
            if self.lookup(name) is None:
                raise self.options.syntax_error(
                    f"variable {name!r} is unset: {cur.current_line()}",
                    cur.lineno, name_end - cur.line_start + 1,
                )
            cur.skip(INLINE_WS)
            if cur.at_end() or cur.peek() in ("#", "\n"):
                cur.skip_line()
                return
            start = cur.index
            cur.skip(WORD_DOT)
            if cur.index == start:
                raise cur.unexpected(self.options, "expected variable name")
            name, name_end = cur.buf[start:cur.index], cur.index

    def statement(self) -> None:
        cur = self.cur
        buf = cur.buf
        options = self.options

        key_start = cur.index
        cur.skip(WORD_DOT)
        key_end = cur.index
        cur.skip(INLINE_WS)

        export = False
        if buf[key_start:key_end] == "export" and cur.peek() in WORD_DOT:
            export = True
            key_start = cur.index
            cur.skip(WORD_DOT)
            key_end = cur.index
            cur.skip(INLINE_WS)

        if key_start == key_end:
            raise cur.unexpected(options, "expected variable name")

        key = buf[key_start:key_end]
        ch = cur.peek()

        if export and ch in WORD_DOT:
            self.check_exported(key, key_end)
            return

        if ch in ("", "\n", "#"):
            value = self.parent.get(key)
            if value is None and export:
                raise options.syntax_error(f"variable {key!r} is unset", cur.lineno, key_end - cur.line_start + 1)
            cur.skip_line()
            if value is not None:
                options.set_var_cut_null(self.sink, key, value)
            return

        if ch not in ("=", ":"):
            raise cur.unexpected(options, "expected '='")

        cur.advance()
        cur.skip(INLINE_WS)

        value_start = cur.index
        quoted = False
        quote = cur.peek()
        if quote in ('"', "'"):
            snap = cur.snapshot()
            cur.advance()
            if skip_to_quote_end(cur, quote):
                cur.advance()
                value_end = cur.index
                cur.skip(INLINE_WS)
                if cur.peek() == "#":
                    cur.skip_line()
                    quoted = True
                elif cur.peek() in ("", "\n"):
                    quoted = True
            if not quoted:
                cur.restore(snap)
        if not quoted:
            value_end = find_value_end(buf, cur.index)
            cur.move_to(value_end)

        raw = buf[value_start:value_end]
        if len(raw) > 1 and raw[0] == "'" and raw[-1] == "'":
            value = raw[1:-1]
        elif len(raw) > 1 and raw[0] == '"' and raw[-1] == '"':
            value = self.substitute(unescape_double_quoted(raw[1:-1], self.legacy_linebreak()))
        else:
            value = self.substitute(unescape_unquoted(rstrip_chars(raw, INLINE_WS)))

        cur.skip(INLINE_WS)
        nxt = cur.peek()
        if nxt == "#":
            cur.skip_line()
        elif nxt and nxt != "\n":
            raise cur.unexpected(options, "expected line end")

        options.set_var_cut_null(self.sink, key, value)

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
    _Parser(fix_newlines(read_source(reader, options)), sink, parent, options).run()
