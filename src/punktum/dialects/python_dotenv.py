"""Python dotenv dialect (theskumar/python-dotenv ``parser.py``/``main.py``).

Statements are matched with the same regular expressions python-dotenv
uses.  ``${NAME}`` and ``${NAME:-default}`` are expanded after the whole
source was parsed; the default only applies when ``NAME`` is unset.
"""

from __future__ import annotations

import codecs
import re
from typing import BinaryIO, NamedTuple, Optional

from punktum.dialects._scan import Cursor, read_source, recover
from punktum.options import Options
from punktum.store import ReadEnv, WriteEnv

_multiline_whitespace = re.compile(r"\s*", re.UNICODE | re.MULTILINE)
_whitespace = re.compile(r"[^\S\r\n]*", re.UNICODE)
_export = re.compile(r"(?:export[^\S\r\n]+)?", re.UNICODE)
_single_quoted_key = re.compile(r"'([^']+)'", re.UNICODE)
_unquoted_key = re.compile(r"([^=\#\s]+)", re.UNICODE)
_equal_sign = re.compile(r"(=[^\S\r\n]*)", re.UNICODE)
_single_quoted_value = re.compile(r"'((?:\\'|[^'])*)'", re.UNICODE)
_double_quoted_value = re.compile(r'"((?:\\"|[^"])*)"', re.UNICODE)
_unquoted_value = re.compile(r"([^\r\n]*)", re.UNICODE)
_comment = re.compile(r"(?:[^\S\r\n]*#[^\r\n]*)?", re.UNICODE)
_end_of_line = re.compile(r"[^\S\r\n]*(?:\r\n|\n|\r|$)", re.UNICODE)
_rest_of_line = re.compile(r"[^\r\n]*(?:\r|\n|\r\n)?", re.UNICODE)
_double_quote_escapes = re.compile(r"\\[\\'\"abfnrtv]", re.UNICODE)
_single_quote_escapes = re.compile(r"\\[\\']", re.UNICODE)

_posix_variable = re.compile(
    r"""
    \$\{
        (?P<name>[^\}:]*)
        (?::-
            (?P<default>[^\}]*)
        )?
    \}
    """,
    re.VERBOSE,
)


class Binding(NamedTuple):
    key: Optional[str]
    value: Optional[str]
    lineno: int
    error: bool


_MISSING = object()


class _NoMatch(Exception):
    pass


def decode_escapes(regex: re.Pattern[str], string: str) -> str:
    def decode_match(match: re.Match[str]) -> str:
        return codecs.decode(match.group(0), "unicode-escape")

    return regex.sub(decode_match, string)


def _read_regex(cur: Cursor, regex: re.Pattern[str]) -> tuple[str, ...]:
    match = regex.match(cur.buf, cur.index)
    if match is None:
        raise _NoMatch(regex.pattern)
    cur.move_to(match.end())
    return match.groups()


def _parse_key(cur: Cursor) -> Optional[str]:
    char = cur.peek()
    if char == "#":
        return None
    if char == "'":
        (key,) = _read_regex(cur, _single_quoted_key)
    else:
        (key,) = _read_regex(cur, _unquoted_key)
    return key


def _parse_value(cur: Cursor) -> str:
    char = cur.peek()
    if char == "'":
        (value,) = _read_regex(cur, _single_quoted_value)
        return decode_escapes(_single_quote_escapes, value)
    if char == '"':
        (value,) = _read_regex(cur, _double_quoted_value)
        return decode_escapes(_double_quote_escapes, value)
    if char in ("", "\n", "\r"):
        return ""
    (part,) = _read_regex(cur, _unquoted_value)
    return re.sub(r"\s+#.*", "", part).rstrip()


def _parse_binding(cur: Cursor) -> Binding:
    _read_regex(cur, _multiline_whitespace)
    lineno = cur.lineno
    if cur.at_end():
        return Binding(None, None, lineno, False)
    try:
        _read_regex(cur, _export)
        key = _parse_key(cur)
        _read_regex(cur, _whitespace)
        if cur.peek() == "=":
            _read_regex(cur, _equal_sign)
            value: Optional[str] = _parse_value(cur)
        else:
            value = None
        _read_regex(cur, _comment)
        _read_regex(cur, _end_of_line)
        return Binding(key, value, lineno, False)
    except _NoMatch:
        _read_regex(cur, _rest_of_line)
        return Binding(None, None, lineno, True)


def parse_stream(text: str):
    """Yield a :class:`Binding` per statement, blank ones included."""
    cur = Cursor(text)
    while not cur.at_end():
        yield _parse_binding(cur)


def expand(value: str, env) -> str:
    """Replace ``${NAME}``/``${NAME:-default}`` using *env*.

    *env* needs a ``get(name, default)``; a name bound to ``None`` (a bare
    key) resolves to ``""`` without falling back to the default.
    """

    def resolve(match: re.Match[str]) -> str:
        result = env.get(match.group("name"), _MISSING)
        if result is _MISSING:
            result = match.group("default")
        return result if result is not None else ""

    return _posix_variable.sub(resolve, value)


class _Scope:
    """Values parsed so far layered over the parent environment."""

    def __init__(self, values: dict[str, Optional[str]], parent: ReadEnv, prefer_values: bool) -> None:
        self.values = values
        self.parent = parent
        self.prefer_values = prefer_values

    def get(self, name: str, default: object = None) -> object:
        if self.prefer_values and name in self.values:
            return self.values[name]
        value = self.parent.get(name)
        if value is not None:
            return value
        return self.values.get(name, default)


def parse(reader: BinaryIO, sink: WriteEnv, parent: ReadEnv, options: Options) -> None:
    text = read_source(reader, options)
    values: dict[str, Optional[str]] = {}
    scope = _Scope(values, parent, options.override_env)

    for binding in parse_stream(text):
        if binding.error:
            recover(options, options.syntax_error(
                f"could not parse statement starting at line {binding.lineno}", binding.lineno,
            ))
            continue
        if binding.key is None:
            continue
        if binding.value is None:
            values[binding.key] = None
            continue
        value = expand(binding.value, scope)
        values[binding.key] = value
        options.set_var_cut_null(sink, binding.key, value)
