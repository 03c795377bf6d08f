"""python-dotenv style helpers on top of the loader."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from punktum.config import default_options
from punktum.dialect import Dialect
from punktum.encoding import Encoding
from punktum.loader import config_with_options
from punktum.options import Options
from punktum.store import ReadEnv, WriteEnv
from punktum.stores import DictEnv, as_read_env, system_env


class _CountingEnv(WriteEnv):
    """Forwards to *env* and counts the writes."""

    def __init__(self, env: WriteEnv) -> None:
        self.env = env
        self.count = 0

    def get(self, key: str) -> str | None:
        return self.env.get(key)

    def set(self, key: str, value: str) -> None:
        self.env.set(key, value)
        self.count += 1


def _resolve_options(
    parent: ReadEnv,
    path: str | None,
    dialect: Dialect | str | None,
    encoding: Encoding | str | None,
    **changes: Any,
) -> Options:
    """Explicit arguments over ``DOTENV_CONFIG_*`` over the config file."""
    options = default_options(parent)
    if path is not None:
        changes["path"] = str(path)
    if dialect is not None:
        changes["dialect"] = dialect if isinstance(dialect, Dialect) else Dialect.parse(dialect)
    if encoding is not None:
        changes["encoding"] = encoding if isinstance(encoding, Encoding) else Encoding.parse(encoding)
    return options.replace(**changes)


def load_dotenv(
    path: str | None = None,
    *,
    override: bool = False,
    dialect: Dialect | str | None = None,
    encoding: Encoding | str | None = None,
    strict: bool = False,
    debug: bool = False,
) -> bool:
    """Load an environment file into os.environ (python-dotenv compatible API).

    Parameters
    ----------
    path : str, optional
        File to read; ``"-"`` reads standard input. Defaults from
        DOTENV_CONFIG_PATH, then ``.punktum.toml``, else ``".env"``.
    override : bool, default False
        If True, overwrite variables that are already set. If False, only set
        variables that are not set yet (matches python-dotenv semantics).
    dialect : Dialect or str, optional
        Which parser to emulate, e.g. ``"python-dotenv"`` or ``"compose-go"``.
        Defaults from DOTENV_CONFIG_DIALECT or config, else ``"punktum"``.
    encoding : Encoding or str, optional
        Source encoding. Defaults from DOTENV_CONFIG_ENCODING or config, else UTF-8.
    strict : bool, default False
        If True, raise on the first syntax or I/O error instead of skipping it.
    debug : bool, default False
        If True, log diagnostics to the ``punktum`` logger.

    Returns
    -------
    bool
        True if at least one variable was set, False otherwise.

    Examples
    --------
    >>> from punktum import load_dotenv
    >>> load_dotenv()  # .env in the current directory
    True
    >>> load_dotenv(".env.local", dialect="python-dotenv", override=True)
    True
    """
    env = system_env()
    options = _resolve_options(
        env, path, dialect, encoding,
        override_env=override, strict=strict, debug=debug,
    )
    sink = _CountingEnv(env)
    config_with_options(sink, env, options)
    return sink.count > 0


def dotenv_values(
    path: str | None = None,
    *,
    dialect: Dialect | str | None = None,
    encoding: Encoding | str | None = None,
    strict: bool = False,
    parent: ReadEnv | Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Return the variables of an environment file without modifying os.environ.

    Parameters
    ----------
    path : str, optional
        File to read. Same defaults as :func:`load_dotenv`.
    dialect : Dialect or str, optional
        Which parser to emulate.
    encoding : Encoding or str, optional
        Source encoding.
    strict : bool, default False
        If True, raise on the first syntax or I/O error.
    parent : mapping or ReadEnv, optional
        Variables consulted for substitution and inheritance. Defaults to
        the process environment.

    Returns
    -------
    dict[str, str]
        Mapping of variable name to value, in file order.
    """
    parent_env = as_read_env(parent)
    options = _resolve_options(
        parent_env, path, dialect, encoding,
        override_env=True, strict=strict,
    )
    sink = DictEnv()
    config_with_options(sink, parent_env, options)
    return sink.data
