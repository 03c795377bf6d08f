"""Java dotenv dialect (cdimascio/dotenv-java ``DotenvParser``).

Upstream matches each trimmed line against
``^\\s*([\\w.\\-]+)\\s*(=)\\s*('[^']*'|"[^"]*"|[^#]*)?\\s*(#.*)?$``.
"""

from __future__ import annotations

from typing import BinaryIO

from punktum.dialects._scan import JAVA_WS, WORD_DOT_DASH, read_source, recover, split_lines
from punktum.errors import DotenvSyntaxError
from punktum.options import Options
from punktum.store import ReadEnv, WriteEnv


def java_trim(value: str) -> str:
    """``String.trim()``: strip every character up to and including space."""
    start = 0
    end = len(value)
    while start < end and value[start] <= " ":
        start += 1
    while end > start and value[end - 1] <= " ":
        end -= 1
    return value[start:end]


def _skip_ws(line: str, index: int) -> int:
    while index < len(line) and line[index] in JAVA_WS:
        index += 1
    return index


def _comment_start(line: str, index: int) -> int:
    pos = line.find("#", index)
    return len(line) if pos < 0 else pos


def normalize_value(value: str) -> str:
    value = java_trim(value)
    if len(value) > 1 and value.startswith('"') and value.endswith('"'):
        return value[1:-1]
    return value


def _is_skipped(line: str) -> bool:
    return (
        not line
        or all(ch in JAVA_WS for ch in line)
        or line.startswith("#")
        or line.startswith("////")
    )


def _parse_line(line: str, lineno: int, sink: WriteEnv, options: Options) -> None:
    index = _skip_ws(line, 0)
    key_start = index
    while index < len(line) and line[index] in WORD_DOT_DASH:
        index += 1
    key_end = index
    if key_start == key_end:
        found = repr(line[key_start]) if key_start < len(line) else "end of line"
        raise options.syntax_error(f"expected variable name, found {found}: {line}", lineno, key_start + 1)

    index = _skip_ws(line, index)
    if index >= len(line):
        raise options.syntax_error(f"unexpected end of line: {line}", lineno, index + 1)
    if line[index] != "=":
        raise options.syntax_error(f"expected '=', found {line[index]!r}: {line}", lineno, index + 1)

    value_start = _skip_ws(line, index + 1)
    value_end = value_start
    quote = line[value_start:value_start + 1]
    if quote in ('"', "'"):
        close = line.find(quote, value_start + 1)
        if close >= 0:
            value_end = close + 1

    if value_end == value_start:
        value_end = _comment_start(line, value_start)
    else:
        after = _skip_ws(line, value_end)
        if after < len(line) and line[after] != "#":
            error = options.syntax_error(
                f"expected line end or '#', found {line[after]!r}, fallback to unquoted string: {line}",
                lineno, after + 1,
            )
            if options.strict:
                raise error
            options.report(error)
            value_end = _comment_start(line, value_start)

    value = line[value_start:value_end]
    if value == '"':
        raise options.syntax_error(f"value is a single double quote: {line}", lineno, value_start + 1)
    options.set_var_cut_null(sink, line[key_start:key_end], normalize_value(value))


def parse(reader: BinaryIO, sink: WriteEnv, parent: ReadEnv, options: Options) -> None:
    for lineno, line in enumerate(split_lines(read_source(reader, options)), start=1):
        line = java_trim(line)
        if _is_skipped(line):
            continue
        try:
            _parse_line(line, lineno, sink, options)
        except DotenvSyntaxError as error:
            recover(options, error)
