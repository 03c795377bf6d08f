"""Parse options, ``DOTENV_CONFIG_*`` handling and the override policy.

Dialect parsers never call ``sink.set`` directly.  They go through
:meth:`Options.set_var` (or one of its NUL-handling variants) so that the
"write always" vs "write only if absent" decision lives in one place.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from punktum.dialect import Dialect
from punktum.encoding import Encoding
from punktum.errors import DotenvSyntaxError, IllegalDialect, IllegalEncoding, IllegalOption

if TYPE_CHECKING:
    from punktum.store import ReadEnv, WriteEnv

_LOGGER = logging.getLogger("punktum")

DEFAULT_PATH = ".env"

ENV_PATH = "DOTENV_CONFIG_PATH"
ENV_OVERRIDE = "DOTENV_CONFIG_OVERRIDE"
ENV_STRICT = "DOTENV_CONFIG_STRICT"
ENV_DEBUG = "DOTENV_CONFIG_DEBUG"
ENV_ENCODING = "DOTENV_CONFIG_ENCODING"
ENV_DIALECT = "DOTENV_CONFIG_DIALECT"


def parse_bool(name: str, value: str | None, default: bool) -> bool:
    """``true``/``1`` and ``false``/``0`` (case-insensitive); empty or unset is *default*."""
    if not value:
        return default
    lowered = value.lower()
    if lowered in ("true", "1"):
        return True
    if lowered in ("false", "0"):
        return False
    raise IllegalOption(name, value, "Bool")


@dataclass(frozen=True)
class Options:
    """How one source is parsed and applied."""

    override_env: bool = False
    strict: bool = True
    debug: bool = False
    encoding: Encoding = Encoding.UTF8
    dialect: Dialect = Dialect.Punktum
    path: str = DEFAULT_PATH

    @classmethod
    def from_env(cls, env: ReadEnv | Mapping[str, str] | None = None, base: Options | None = None) -> Options:
        """Build options from ``DOTENV_CONFIG_*`` variables in *env*.

        Unset or empty variables keep the value from *base* (or the
        defaults).  *env* defaults to the process environment.
        """
        from punktum.stores import as_read_env

        source = as_read_env(env)
        base = base or cls()

        encoding = base.encoding
        raw = source.get(ENV_ENCODING)
        if raw:
            try:
                encoding = Encoding.parse(raw)
            except IllegalEncoding:
                raise IllegalOption(ENV_ENCODING, raw, "Encoding") from None

        dialect = base.dialect
        raw = source.get(ENV_DIALECT)
        if raw:
            try:
                dialect = Dialect.parse(raw)
            except IllegalDialect:
                raise IllegalOption(ENV_DIALECT, raw, "Dialect") from None

        return cls(
            override_env=parse_bool(ENV_OVERRIDE, source.get(ENV_OVERRIDE), base.override_env),
            strict=parse_bool(ENV_STRICT, source.get(ENV_STRICT), base.strict),
            debug=parse_bool(ENV_DEBUG, source.get(ENV_DEBUG), base.debug),
            encoding=encoding,
            dialect=dialect,
            path=source.get(ENV_PATH) or base.path,
        )

    def replace(self, **changes: Any) -> Options:
        return dataclasses.replace(self, **changes)

    # -- diagnostics -------------------------------------------------------

    def log(self, message: str, *args: object) -> None:
        if self.debug:
            _LOGGER.debug(message, *args)

    def report(self, error: DotenvSyntaxError) -> None:
        """Log a syntax error as ``path:line:column: message``."""
        if error.path is None:
            error.path = self.path
        if self.debug:
            _LOGGER.debug("%s: %s", error.location, error.message)

    def syntax_error(self, message: str, lineno: int, column: int = 1) -> DotenvSyntaxError:
        return DotenvSyntaxError(message, lineno, column, self.path)

    # -- override policy ---------------------------------------------------

    def set_var(self, sink: WriteEnv, key: str, value: str) -> None:
        if self.override_env or sink.get(key) is None:
            sink.set(key, value)
        else:
            self.log("%r is already defined and was NOT overwritten", key)

    def set_var_cut_null(self, sink: WriteEnv, key: str, value: str) -> None:
        self.set_var(sink, key.split("\0", 1)[0], value.split("\0", 1)[0])

    def set_var_check_null(self, sink: WriteEnv, key: str, value: str, lineno: int, column: int = 1) -> None:
        if not key:
            raise self.syntax_error("empty variable name", lineno, column)
        if "\0" in key:
            raise self.syntax_error(f"variable name contains a NUL byte: {key!r}", lineno, column)
        if "\0" in value:
            raise self.syntax_error(f"value of {key} contains a NUL byte", lineno, column)
        self.set_var(sink, key, value)

    # -- entry points ------------------------------------------------------

    def config(self) -> None:
        """Apply this source to the process environment."""
        from punktum.loader import config_with_options
        from punktum.stores import system_env

        env = system_env()
        config_with_options(env, env, self)

    def config_env(self, sink: WriteEnv) -> None:
        from punktum.loader import config_with_options
        from punktum.stores import system_env

        config_with_options(sink, system_env(), self)

    def config_with_parent(self, sink: WriteEnv, parent: ReadEnv) -> None:
        from punktum.loader import config_with_options

        config_with_options(sink, parent, self)

    def config_new_with_parent(self, parent: ReadEnv) -> dict[str, str]:
        from punktum.loader import config_with_options
        from punktum.stores import DictEnv

        sink = DictEnv()
        config_with_options(sink, parent, self)
        return sink.data

    def config_new(self) -> dict[str, str]:
        from punktum.stores import system_env

        return self.config_new_with_parent(system_env())
