"""``punktum dialects`` command."""

from __future__ import annotations

from rich.table import Table

from punktum.cli import cli, console
from punktum.dialect import UPSTREAM, Dialect


@cli.command("dialects")
def dialects() -> None:
    """List the supported dialects."""
    table = Table(title="Dialects")
    table.add_column("Dialect", style="cyan")
    table.add_column("Aliases", style="white")
    table.add_column("Emulates", style="dim")
    for dialect in Dialect:
        table.add_row(dialect.value, ", ".join(dialect.aliases), UPSTREAM[dialect])
    console.print(table)
