"""Wrappers that restrict which keys reach an underlying store."""

from __future__ import annotations

from collections.abc import Iterable

from punktum.store import ReadEnv, WriteEnv


class AllowListEnv(WriteEnv):
    """Only keys in *allowed* are visible and writable; other writes are dropped."""

    def __init__(self, env: WriteEnv, allowed: Iterable[str]) -> None:
        self.env = env
        self.allowed = frozenset(allowed)

    def get(self, key: str) -> str | None:
        if key not in self.allowed:
            return None
        return self.env.get(key)

    def set(self, key: str, value: str) -> None:
        if key in self.allowed:
            self.env.set(key, value)


class DenyListEnv(WriteEnv):
    """Keys in *denied* are hidden and never written."""

    def __init__(self, env: WriteEnv, denied: Iterable[str]) -> None:
        self.env = env
        self.denied = frozenset(denied)

    def get(self, key: str) -> str | None:
        if key in self.denied:
            return None
        return self.env.get(key)

    def set(self, key: str, value: str) -> None:
        if key not in self.denied:
            self.env.set(key, value)


class ReadOnlyView(ReadEnv):
    """Expose only the read half of any store."""

    def __init__(self, env: ReadEnv) -> None:
        self.env = env

    def get(self, key: str) -> str | None:
        return self.env.get(key)
