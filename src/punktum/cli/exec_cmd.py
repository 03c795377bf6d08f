"""``punktum exec`` command."""

from __future__ import annotations

import os

import click

from punktum.cli import build_env, cli
from punktum.errors import ExecError, NotEnoughArguments


def exec_program(program: str, args: list[str], env: dict[str, str]) -> None:
    """Replace the current process with *program*.  Only returns by raising."""
    try:
        os.execvpe(program, [program, *args], env)
    except OSError as e:
        raise ExecError(f"{program}: {e.strerror or e}") from e


@cli.command("exec", context_settings={"ignore_unknown_options": True, "allow_interspersed_args": False})
@click.option("--replace", is_flag=True, help="Start from an empty environment instead of a copy of the current one.")
@click.argument("program", required=False)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def exec_(ctx: click.Context, replace: bool, program: str | None, args: tuple[str, ...]) -> None:
    """Load the environment files and run PROGRAM with ARGS in that environment.

    The current process is replaced: punktum exec -f .env.prod -- ./server --port 8080
    """
    try:
        if not program:
            raise NotEnoughArguments("missing PROGRAM argument")
        env = build_env(ctx, replace)
        exec_program(program, list(args), env.data)
    except (NotEnoughArguments, ExecError) as e:
        raise click.ClickException(str(e))
