"""``punktum print`` command."""

from __future__ import annotations

import click

from punktum.cli import build_env, cli
from punktum.writer import format_lines, write_iter_binary


@cli.command("print")
@click.option(
    "--format", "fmt",
    type=click.Choice(["shell", "binary", "json", "dotenv", "unix", "win"]),
    default="shell",
    help="Output format: shell (default, KEY='value'), binary (KEY=value\\0), json, dotenv, unix (export KEY=value), win (PowerShell).",
)
@click.option("--replace", is_flag=True, help="Only print variables from the files, not the whole environment.")
@click.pass_context
def print_env(ctx: click.Context, fmt: str, replace: bool) -> None:
    """Print the environment after loading the files, sorted by key.

    Use --format unix for shell sourcing: eval "$(punktum -f .env print --replace --format unix)".
    Use --format binary to feed xargs -0 or another punktum via --dialect binary.
    """
    env = build_env(ctx, replace)
    pairs = env.data

    if fmt == "binary":
        stream = click.get_binary_stream("stdout")
        write_iter_binary(stream, sorted(pairs.items()))
        stream.flush()
        return

    # values go out verbatim, no console rendering
    out = click.get_text_stream("stdout")
    for line in format_lines(pairs, fmt):
        out.write(line + "\n")
    out.flush()
