"""In-memory stores."""

from __future__ import annotations

from collections.abc import Iterator

from punktum.store import ReadEnv, WriteEnv


class DictEnv(WriteEnv):
    """A :class:`WriteEnv` backed by a plain ``dict`` (insertion ordered)."""

    def __init__(self, data: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = data if data is not None else {}

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def items(self) -> list[tuple[str, str]]:
        return list(self.data.items())

    def __iter__(self) -> Iterator[str]:
        return iter(self.data)

    def __len__(self) -> int:
        return len(self.data)

    def __repr__(self) -> str:
        return f"DictEnv({self.data!r})"


class EmptyEnv(ReadEnv):
    """Parent that never has any variable."""

    def get(self, key: str) -> str | None:
        return None


class ChainEnv(ReadEnv):
    """Look *key* up in each of *envs* in turn; first hit wins."""

    def __init__(self, *envs: ReadEnv) -> None:
        self.envs = envs

    def get(self, key: str) -> str | None:
        for env in self.envs:
            value = env.get(key)
            if value is not None:
                return value
        return None
