"""Binary dialect: ``KEY=VALUE\\0`` records, UTF-8, no escaping.

This is the format written by ``punktum print --format binary`` and by
``env -0``.  Record numbers stand in for line numbers in diagnostics.
"""

from __future__ import annotations

from typing import BinaryIO

from punktum.dialects._scan import recover
from punktum.errors import DotenvSyntaxError
from punktum.options import Options
from punktum.store import ReadEnv, WriteEnv


def _records(data: bytes):
    start = 0
    while start < len(data):
        end = data.find(b"\0", start)
        if end < 0:
            yield data[start:], False
            return
        yield data[start:end], True
        start = end + 1


def _decode(raw: bytes, what: str, lineno: int, column: int, options: Options) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise options.syntax_error(f"error decoding {what}: {exc.reason}", lineno, column + exc.start) from None


def parse(reader: BinaryIO, sink: WriteEnv, parent: ReadEnv, options: Options) -> None:
    for lineno, (record, terminated) in enumerate(_records(reader.read()), start=1):
        if not terminated:
            recover(options, options.syntax_error(
                "record isn't terminated with a null byte", lineno, len(record) + 1,
            ))
        try:
            equals = record.find(b"=")
            if equals < 0:
                raise options.syntax_error("expected '='", lineno, len(record) + 1)
            key = _decode(record[:equals], "key", lineno, 1, options)
            value = _decode(record[equals + 1:], "value", lineno, equals + 2, options)
            if not key:
                raise options.syntax_error("empty keys are not allowed", lineno, 1)
        except DotenvSyntaxError as error:
            recover(options, error)
            continue
        options.set_var(sink, key, value)
