# Copyright (c) 2026 The punktum authors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Punktum -- a .env parser that speaks the dialects of many dotenv tools."""

from punktum.dialect import Dialect
from punktum.encoding import Encoding
from punktum.errors import DotenvSyntaxError, ErrorKind, PunktumError, SourceIOError
from punktum.loader import (
    config,
    config_env,
    config_new,
    config_new_with_reader,
    config_with_options,
    config_with_reader,
    system_env,
)
from punktum.options import Options
from punktum.sdk import dotenv_values, load_dotenv

__all__ = [
    "__version__",
    "Dialect",
    "DotenvSyntaxError",
    "Encoding",
    "ErrorKind",
    "Options",
    "PunktumError",
    "SourceIOError",
    "config",
    "config_env",
    "config_new",
    "config_new_with_reader",
    "config_with_options",
    "config_with_reader",
    "dotenv_values",
    "load_dotenv",
    "system_env",
]
__version__ = "0.1.0"
