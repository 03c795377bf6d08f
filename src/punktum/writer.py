"""Writing environments back out.

:func:`write_var` produces ``KEY='VALUE'`` lines that POSIX shells and the
Punktum dialect read back unchanged.  :func:`write_var_binary` produces the
``KEY=VALUE\\0`` records of the binary dialect.  :func:`format_lines`
covers the other export formats of ``punktum print``.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import BinaryIO, TextIO

FORMATS = ("shell", "dotenv", "unix", "win", "json", "binary")


def quote_shell(value: str) -> str:
    """Single-quote *value*; an embedded ``'`` becomes ``'"'"'``."""
    return "'" + value.replace("'", "'\"'\"'") + "'"


def _needs_quoting(value: str) -> bool:
    return not value or any(c in value for c in " \t\n'\"\\$`!#&|;(){}<>*?~")


def _shell_escape(value: str) -> str:
    """Bare when safe for ``sh``, single-quoted otherwise."""
    if _needs_quoting(value):
        return quote_shell(value)
    return value


def _powershell_escape(value: str) -> str:
    """Escape for a PowerShell single-quoted string: ``'`` -> ``''``."""
    return value.replace("'", "''")


def write_var(out: TextIO, key: str, value: str) -> None:
    out.write(f"{key}={quote_shell(value)}\n")


def write_iter(out: TextIO, items: Iterable[tuple[str, str]]) -> None:
    for key, value in items:
        write_var(out, key, value)


def write_var_binary(out: BinaryIO, key: str, value: str) -> None:
    out.write(f"{key}={value}\0".encode())


def write_iter_binary(out: BinaryIO, items: Iterable[tuple[str, str]]) -> None:
    for key, value in items:
        write_var_binary(out, key, value)


def format_lines(pairs: dict[str, str], fmt: str) -> list[str]:
    """Render *pairs* sorted by key as lines of text in *fmt*.

    ``json`` yields a single (multi-line) entry.  ``binary`` is not a text
    format; use :func:`write_iter_binary`.
    """
    if fmt == "json":
        return [json.dumps(dict(sorted(pairs.items())), indent=2)]

    lines: list[str] = []
    for key, value in sorted(pairs.items()):
        if fmt == "shell":
            lines.append(f"{key}={quote_shell(value)}")
        elif fmt == "dotenv":
            lines.append(f"{key}={_shell_escape(value)}")
        elif fmt == "unix":
            lines.append(f"export {key}={_shell_escape(value)}")
        elif fmt == "win":
            lines.append(f"$env:{key} = '{_powershell_escape(value)}'")
        else:
            raise ValueError(f"unknown format: {fmt!r}")
    return lines
