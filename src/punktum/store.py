# Copyright (c) 2026 The punktum authors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Abstract key/value interfaces consumed by every dialect parser."""

from __future__ import annotations

from abc import ABC, abstractmethod


class ReadEnv(ABC):
    """Read-only lookup used as the *parent* of a parse.

    The parent is consulted for inherited variables (a key with no value)
    and for ``$NAME`` substitution.  It is never written to by a parser.
    """

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the value for *key*, or ``None`` if it is not set."""

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None


class WriteEnv(ReadEnv):
    """Mutable sink that receives the parsed bindings.

    Whether an existing key is overwritten is decided by
    :meth:`punktum.options.Options.set_var`, not by the store.
    """

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Create or overwrite *key* with *value*."""
