# Copyright (c) 2026 The punktum authors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error kinds and the exception hierarchy raised by the parsers.

Every exception carries an :class:`ErrorKind`.  Syntax errors also carry
the 1-based line and column where the parser gave up, and the path of the
source used for diagnostics.
"""

from __future__ import annotations

import enum


class ErrorKind(enum.Enum):
    OptionsParseError = "OptionsParseError"
    IOError = "IOError"
    SyntaxError = "SyntaxError"
    ExecError = "ExecError"
    NotEnoughArguments = "NotEnoughArguments"

    def __str__(self) -> str:
        return self.value


class PunktumError(Exception):
    """Base class for every error raised by punktum."""

    kind: ErrorKind = ErrorKind.IOError

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        if self.message:
            return f"{self.kind}: {self.message}"
        return str(self.kind)


class DotenvSyntaxError(PunktumError):
    """A malformed construct in an environment file."""

    kind = ErrorKind.SyntaxError

    def __init__(
        self,
        message: str,
        lineno: int,
        column: int = 1,
        path: str | None = None,
    ) -> None:
        super().__init__(message)
        self.lineno = lineno
        self.column = column
        self.path = path

    @property
    def location(self) -> str:
        path = self.path if self.path is not None else "<source>"
        return f"{path}:{self.lineno}:{self.column}"

    def __str__(self) -> str:
        return f"{self.kind}: {self.location}: {self.message}"


class SourceIOError(PunktumError):
    """The source could not be opened or read."""

    kind = ErrorKind.IOError

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        column: int | None = None,
    ) -> None:
        super().__init__(message)
        self.lineno = lineno
        self.column = column


class DecodeError(SourceIOError):
    """Bytes that are not valid in the selected encoding."""

    def __init__(self, message: str, lineno: int | None = None, column: int | None = None) -> None:
        super().__init__(message, lineno, column)


class IllegalOption(PunktumError, ValueError):
    """A ``DOTENV_CONFIG_*`` variable holds a value that cannot be parsed."""

    kind = ErrorKind.OptionsParseError

    def __init__(self, name: str, value: str, option_type: str) -> None:
        super().__init__(f"{option_type} option has illegal value: {name}={value!r}")
        self.name = name
        self.value = value
        self.option_type = option_type


class IllegalDialect(PunktumError, ValueError):
    kind = ErrorKind.OptionsParseError

    def __init__(self, value: str) -> None:
        super().__init__(f"illegal dialect: {value!r}")
        self.value = value


class IllegalEncoding(PunktumError, ValueError):
    kind = ErrorKind.OptionsParseError

    def __init__(self, value: str) -> None:
        super().__init__(f"illegal encoding: {value!r}")
        self.value = value


class ExecError(PunktumError):
    kind = ErrorKind.ExecError


class NotEnoughArguments(PunktumError):
    kind = ErrorKind.NotEnoughArguments
