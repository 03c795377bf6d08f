"""Parser registry: one ``parse(reader, sink, parent, options)`` per dialect."""

from __future__ import annotations

from collections.abc import Callable
from typing import BinaryIO

from punktum.dialect import Dialect
from punktum.dialects import (
    binary,
    composego,
    godotenv,
    java_dotenv,
    javascript_dotenv,
    nodejs,
    punktum,
    python_dotenv,
    python_dotenv_cli,
    ruby_dotenv,
)
from punktum.options import Options
from punktum.store import ReadEnv, WriteEnv

ParseFunc = Callable[[BinaryIO, WriteEnv, ReadEnv, Options], None]

PARSERS: dict[Dialect, ParseFunc] = {
    Dialect.Punktum: punktum.parse,
    Dialect.NodeJS: nodejs.parse,
    Dialect.JavaScriptDotenv: javascript_dotenv.parse,
    Dialect.PythonDotenv: python_dotenv.parse,
    Dialect.PythonDotenvCLI: python_dotenv_cli.parse,
    Dialect.ComposeGo: composego.parse,
    Dialect.GoDotenv: godotenv.parse,
    Dialect.RubyDotenv: ruby_dotenv.parse,
    Dialect.JavaDotenv: java_dotenv.parse,
    Dialect.Binary: binary.parse,
}


def get_parser(dialect: Dialect) -> ParseFunc:
    return PARSERS[dialect]


__all__ = ["PARSERS", "ParseFunc", "get_parser"]
