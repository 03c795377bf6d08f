# Copyright (c) 2026 The punktum authors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Concrete stores and adapters from plain Python objects."""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping

from punktum.store import ReadEnv, WriteEnv
from punktum.stores.filtered import AllowListEnv, DenyListEnv, ReadOnlyView
from punktum.stores.memory import ChainEnv, DictEnv, EmptyEnv
from punktum.stores.system import ENV_LOCK, SystemEnv, system_env

__all__ = [
    "ENV_LOCK",
    "AllowListEnv",
    "ChainEnv",
    "DenyListEnv",
    "DictEnv",
    "EmptyEnv",
    "ReadOnlyView",
    "SystemEnv",
    "as_read_env",
    "as_write_env",
    "system_env",
]


class _MappingEnv(ReadEnv):
    def __init__(self, data: Mapping[str, str]) -> None:
        self.data = data

    def get(self, key: str) -> str | None:
        return self.data.get(key)


def as_read_env(obj: ReadEnv | Mapping[str, str] | None) -> ReadEnv:
    """Adapt ``None``, a mapping, or a store to :class:`ReadEnv`.

    ``None`` means the process environment.
    """
    if obj is None:
        return system_env()
    if isinstance(obj, ReadEnv):
        return obj
    if isinstance(obj, Mapping):
        return _MappingEnv(obj)
    raise TypeError(f"not a readable environment: {type(obj).__name__}")


def as_write_env(obj: WriteEnv | MutableMapping[str, str] | None) -> WriteEnv:
    """Adapt ``None``, a ``dict``, or a store to :class:`WriteEnv`.

    A ``dict`` is wrapped, not copied, so writes land in the caller's object.
    """
    if obj is None:
        return DictEnv()
    if isinstance(obj, WriteEnv):
        return obj
    if isinstance(obj, dict):
        return DictEnv(obj)
    raise TypeError(f"not a writable environment: {type(obj).__name__}")
