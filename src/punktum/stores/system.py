"""The process environment as a store.

``os.environ`` is process-global.  All access made through
:class:`SystemEnv` is serialized by :data:`ENV_LOCK`, a re-entrant lock that
callers may also hold around a whole parse-and-apply sequence.  Code that
mutates ``os.environ`` without taking the lock is not safe to run
concurrently with a parse into :class:`SystemEnv`.
"""

from __future__ import annotations

import os
import threading
from collections.abc import Iterator

from punktum.store import WriteEnv

ENV_LOCK = threading.RLock()


class SystemEnv(WriteEnv):
    """Read and write ``os.environ``."""

    def get(self, key: str) -> str | None:
        if not key or "\0" in key:
            return None
        with ENV_LOCK:
            return os.environ.get(key)

    def set(self, key: str, value: str) -> None:
        """Set *key* in the process environment.

        Raises ``ValueError`` for keys or values the OS cannot represent
        (empty key, ``=`` in the key, embedded NUL).
        """
        if not key or "=" in key or "\0" in key or "\0" in value:
            raise ValueError(f"cannot set environment variable {key!r}")
        with ENV_LOCK:
            os.environ[key] = value

    def items(self) -> list[tuple[str, str]]:
        with ENV_LOCK:
            return list(os.environ.items())

    def __iter__(self) -> Iterator[str]:
        with ENV_LOCK:
            return iter(list(os.environ))

    def __repr__(self) -> str:
        return "SystemEnv()"


_SYSTEM_ENV = SystemEnv()


def system_env() -> SystemEnv:
    """Return the shared :class:`SystemEnv` instance."""
    return _SYSTEM_ENV
