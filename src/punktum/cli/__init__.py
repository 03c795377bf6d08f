# Copyright (c) 2026 The punktum authors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Punktum CLI -- load .env files in the dialect of many dotenv tools.

The CLI is split into per-command modules under this package.  The ``cli``
click group and shared helpers (``console``, ``load_files``, etc.) live
here so every command module can import them.
"""

from __future__ import annotations

import logging
import os

import click
from rich.console import Console
from rich.logging import RichHandler

from punktum import __version__
from punktum.config import PunktumConfig, load_config
from punktum.dialect import Dialect
from punktum.encoding import Encoding
from punktum.errors import PunktumError
from punktum.loader import config_with_options
from punktum.options import ENV_PATH, Options
from punktum.store import ReadEnv, WriteEnv
from punktum.stores import DictEnv, system_env

console = Console(stderr=True)


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

def _setup_logging(debug: bool) -> None:
    if not debug:
        return
    logger = logging.getLogger("punktum")
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(console=console, show_time=False, show_path=False))
    logger.setLevel(logging.DEBUG)


def _resolve_files(files: tuple[str, ...], options: Options, cfg: PunktumConfig) -> list[str]:
    """``--file`` flags, then DOTENV_CONFIG_PATH, then config ``files``, then ``.env``."""
    if files:
        return list(files)
    if os.environ.get(ENV_PATH):
        return [options.path]
    if cfg.files:
        return list(cfg.files)
    return [options.path]


def load_files(ctx: click.Context, sink: WriteEnv, parent: ReadEnv) -> None:
    """Load every file of the invocation into *sink*, in order."""
    options: Options = ctx.obj["options"]
    for path in ctx.obj["files"]:
        try:
            config_with_options(sink, parent, options.replace(path=path))
        except PunktumError as e:
            raise click.ClickException(str(e))


def build_env(ctx: click.Context, replace: bool) -> DictEnv:
    """The environment after loading: a copy of os.environ, or empty with *replace*."""
    parent = system_env()
    sink = DictEnv() if replace else DictEnv(dict(os.environ))
    load_files(ctx, sink, parent)
    return sink


# ---------------------------------------------------------------------------
# Top-level click group
# ---------------------------------------------------------------------------

@click.group()
@click.option(
    "--file", "-f", "files", multiple=True,
    help="Environment file to load; repeatable, '-' is stdin (default: DOTENV_CONFIG_PATH, config, else .env).",
)
@click.option(
    "--dialect", default=None,
    help="Parser to emulate (default: DOTENV_CONFIG_DIALECT or config, else punktum).",
)
@click.option(
    "--encoding", default=None,
    help="Source encoding (default: DOTENV_CONFIG_ENCODING or config, else utf-8).",
)
@click.option("--strict/--no-strict", default=None, help="Stop at the first error (default: on).")
@click.option("--debug", is_flag=True, help="Log diagnostics to stderr.")
@click.option("--override", is_flag=True, help="Overwrite variables that are already set.")
@click.version_option(__version__)
@click.pass_context
def cli(
    ctx: click.Context,
    files: tuple[str, ...],
    dialect: str | None,
    encoding: str | None,
    strict: bool | None,
    debug: bool,
    override: bool,
) -> None:
    """Load .env files the way other dotenv implementations do."""
    try:
        cfg = load_config()
        options = Options.from_env(None, cfg.options())
        changes: dict[str, object] = {}
        if dialect is not None:
            changes["dialect"] = Dialect.parse(dialect)
        if encoding is not None:
            changes["encoding"] = Encoding.parse(encoding)
    except PunktumError as e:
        raise click.UsageError(str(e))
    if strict is not None:
        changes["strict"] = strict
    if debug:
        changes["debug"] = True
    if override:
        changes["override_env"] = True
    options = options.replace(**changes)

    _setup_logging(options.debug)
    ctx.ensure_object(dict)
    ctx.obj["config"] = cfg
    ctx.obj["options"] = options
    ctx.obj["files"] = _resolve_files(files, options, cfg)


# ---------------------------------------------------------------------------
# Register all command modules (import triggers @cli.command registration)
# ---------------------------------------------------------------------------

from punktum.cli import (  # noqa: E402, F401
    exec_cmd,
    print_cmd,
    check_cmd,
    dialects_cmd,
)
