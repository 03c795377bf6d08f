"""Source handling and dispatch.

These functions open the source named by :attr:`Options.path` (``-`` is
standard input), pick the parser for :attr:`Options.dialect` and run it
against a sink and a parent environment.
"""

from __future__ import annotations

import sys
from collections.abc import Mapping
from typing import BinaryIO

from punktum.dialects import get_parser
from punktum.errors import SourceIOError
from punktum.options import Options
from punktum.store import ReadEnv, WriteEnv
from punktum.stores import DictEnv, as_read_env, system_env


STDIN_PATH = "-"


def _options(options: Options | None, env: ReadEnv | None = None) -> Options:
    if options is not None:
        return options
    from punktum.config import default_options

    return default_options(env)


def config_with_reader(reader: BinaryIO, sink: WriteEnv, parent: ReadEnv, options: Options) -> None:
    """Parse *reader* with ``options.dialect`` into *sink*.

    ``options.path`` is only used in diagnostics.
    """
    parse = get_parser(options.dialect)
    options.log("%s: parsing as %s (%s)", options.path, options.dialect, options.encoding)
    parse(reader, sink, parent, options)


def config_with_options(sink: WriteEnv, parent: ReadEnv, options: Options) -> None:
    """Open ``options.path`` and parse it into *sink*.

    When the file cannot be opened the error is logged; under strict mode
    :class:`SourceIOError` is raised, otherwise nothing is written.
    """
    if options.path == STDIN_PATH:
        config_with_reader(sys.stdin.buffer, sink, parent, options)
        return

    try:
        reader = open(options.path, "rb")
    except OSError as exc:
        options.log("%s: %s", options.path, exc.strerror or exc)
        if options.strict:
            raise SourceIOError(f"{options.path}: {exc.strerror or exc}") from exc
        return

    with reader:
        config_with_reader(reader, sink, parent, options)


def config(options: Options | None = None) -> None:
    """Load into the process environment, which is also the parent."""
    env = system_env()
    config_with_options(env, env, _options(options, env))


def config_env(sink: WriteEnv, options: Options | None = None) -> None:
    """Load into *sink* with the process environment as the parent."""
    env = system_env()
    config_with_options(sink, env, _options(options, env))


def config_new(
    options: Options | None = None,
    parent: ReadEnv | Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Load into a fresh dict and return it."""
    parent_env = as_read_env(parent)
    sink = DictEnv()
    config_with_options(sink, parent_env, _options(options, parent_env))
    return sink.data


def config_new_with_reader(
    reader: BinaryIO,
    parent: ReadEnv | Mapping[str, str] | None = None,
    options: Options | None = None,
) -> dict[str, str]:
    """Parse *reader* into a fresh dict and return it."""
    parent_env = as_read_env(parent)
    sink = DictEnv()
    config_with_reader(reader, sink, parent_env, _options(options, parent_env))
    return sink.data


__all__ = [
    "STDIN_PATH",
    "config",
    "config_env",
    "config_new",
    "config_new_with_reader",
    "config_with_options",
    "config_with_reader",
    "system_env",
]
