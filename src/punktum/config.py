""".punktum.toml configuration loading.

Searches upward from cwd for ``.punktum.toml`` and reads its ``[punktum]``
table.  The file provides defaults below ``DOTENV_CONFIG_*`` variables and
explicit arguments.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomllib  # type: ignore[import-not-found]
    except ModuleNotFoundError:
        import tomli as tomllib  # type: ignore[no-redef]

from punktum.dialect import Dialect
from punktum.encoding import Encoding
from punktum.errors import IllegalOption
from punktum.options import Options

CONFIG_FILE_NAME = ".punktum.toml"


@dataclass
class PunktumConfig:
    """Settings read from the config file (``None`` means not given)."""

    files: list[str] = field(default_factory=list)
    override: bool | None = None
    strict: bool | None = None
    debug: bool | None = None
    encoding: Encoding | None = None
    dialect: Dialect | None = None
    config_path: Path | None = None

    def options(self) -> Options:
        """Return :class:`Options` with this file's settings over the defaults."""
        changes: dict[str, Any] = {}
        if self.override is not None:
            changes["override_env"] = self.override
        if self.strict is not None:
            changes["strict"] = self.strict
        if self.debug is not None:
            changes["debug"] = self.debug
        if self.encoding is not None:
            changes["encoding"] = self.encoding
        if self.dialect is not None:
            changes["dialect"] = self.dialect
        if self.files:
            changes["path"] = self.files[0]
        return Options(**changes)


def find_config_file(start: Path | None = None) -> Path | None:
    """Walk upward from *start* (default cwd) looking for ``.punktum.toml``."""
    cur = (start or Path.cwd()).resolve()
    while True:
        candidate = cur / CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate
        if cur.parent == cur:
            return None
        cur = cur.parent


def _bool(section: dict[str, Any], name: str) -> bool | None:
    value = section.get(name)
    if value is None or isinstance(value, bool):
        return value
    raise IllegalOption(name, str(value), "Bool")


def load_config(path: Path | None = None) -> PunktumConfig:
    """Load and return config.  Returns defaults if no file found."""
    if path is None:
        path = find_config_file()
    if path is None:
        return PunktumConfig()

    raw: dict[str, Any] = tomllib.loads(path.read_text())
    section = raw.get("punktum", {})

    files = section.get("files")
    if files is None:
        files = [section["path"]] if "path" in section else []
    elif isinstance(files, str):
        files = [files]

    encoding = section.get("encoding")
    dialect = section.get("dialect")
    try:
        encoding = Encoding.parse(encoding) if encoding is not None else None
    except ValueError:
        raise IllegalOption("encoding", encoding, "Encoding") from None
    try:
        dialect = Dialect.parse(dialect) if dialect is not None else None
    except ValueError:
        raise IllegalOption("dialect", dialect, "Dialect") from None

    return PunktumConfig(
        files=[str(f) for f in files],
        override=_bool(section, "override"),
        strict=_bool(section, "strict"),
        debug=_bool(section, "debug"),
        encoding=encoding,
        dialect=dialect,
        config_path=path,
    )


def default_options(env: Any = None, config: PunktumConfig | None = None) -> Options:
    """Options from ``DOTENV_CONFIG_*`` in *env* over the config file over the defaults."""
    if config is None:
        config = load_config()
    return Options.from_env(env, config.options())
