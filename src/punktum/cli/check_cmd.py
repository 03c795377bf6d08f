"""``punktum check`` command."""

from __future__ import annotations

import click
from rich.markup import escape

from punktum.cli import cli, console
from punktum.errors import PunktumError
from punktum.loader import config_with_options
from punktum.options import Options
from punktum.stores import DictEnv, EmptyEnv


@cli.command("check")
@click.pass_context
def check(ctx: click.Context) -> None:
    """Parse every file strictly and report the first error of each."""
    options: Options = ctx.obj["options"].replace(strict=True, override_env=True)
    failed = 0
    for path in ctx.obj["files"]:
        try:
            config_with_options(DictEnv(), EmptyEnv(), options.replace(path=path))
        except PunktumError as e:
            failed += 1
            console.print(f"[red]{escape(path)}: {escape(str(e))}[/red]", highlight=False, soft_wrap=True)
        else:
            console.print(f"[green]{escape(path)}: OK[/green]", highlight=False, soft_wrap=True)
    if failed:
        ctx.exit(1)
