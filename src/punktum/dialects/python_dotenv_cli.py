"""Python dotenv CLI dialect (venthur/dotenv-cli ``core.py``)."""

from __future__ import annotations

import warnings
from typing import BinaryIO

from punktum.dialects._scan import read_source, recover, split_lines
from punktum.errors import DotenvSyntaxError
from punktum.options import Options
from punktum.store import ReadEnv, WriteEnv


def decode_escapes(value: str) -> str:
    """Decode *value* the way ``str.encode().decode("unicode_escape")`` does.

    The upstream round trip reinterprets non-ASCII text as Latin-1, so
    ``"ä"`` comes back as ``"Ã¤"``.  That is kept on purpose.
    """
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", DeprecationWarning)
        return value.encode("utf-8").decode("unicode_escape")


def parse(reader: BinaryIO, sink: WriteEnv, parent: ReadEnv, options: Options) -> None:
    text = read_source(reader, options)
    for lineno, line in enumerate(split_lines(text), start=1):
        line = line.strip()
        if line.startswith("#") or "=" not in line:
            continue

        key, value = line.split("=", 1)
        if key.startswith("export "):
            key = key[7:]
        key = key.strip()
        value = value.strip()

        try:
            if len(value) >= 2 and value[0] == value[-1] == '"':
                try:
                    value = decode_escapes(value[1:-1])
                except UnicodeDecodeError as exc:
                    raise options.syntax_error(f"invalid escape sequence: {exc.reason}", lineno) from None
            elif len(value) >= 2 and value[0] == value[-1] == "'":
                value = value[1:-1]
            options.set_var_check_null(sink, key, value, lineno)
        except DotenvSyntaxError as error:
            recover(options, error)
