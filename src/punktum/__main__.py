# Copyright (c) 2026 The punktum authors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Entry point for the punktum CLI (run via ``punktum`` or ``python -m punktum``)."""

from __future__ import annotations

import sys


def main() -> None:
    """Run the CLI."""
    try:
        from punktum.cli import cli
    except ImportError:
        sys.stderr.write("Punktum CLI dependencies missing. Install with: pip install punktum\n")
        sys.exit(1)
    cli()


if __name__ == "__main__":
    main()
