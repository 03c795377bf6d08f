"""Tests for Options, DOTENV_CONFIG_* parsing and the override policy."""

from __future__ import annotations

import dataclasses
import logging

import pytest

from punktum.dialect import Dialect
from punktum.encoding import Encoding
from punktum.errors import DotenvSyntaxError, ErrorKind, IllegalOption
from punktum.options import Options, parse_bool
from punktum.stores import DictEnv


def test_defaults():
    options = Options()
    assert options.override_env is False
    assert options.strict is True
    assert options.debug is False
    assert options.encoding is Encoding.UTF8
    assert options.dialect is Dialect.Punktum
    assert options.path == ".env"


def test_from_env():
    env = {
        "DOTENV_CONFIG_PATH": "x.env",
        "DOTENV_CONFIG_OVERRIDE": "TRUE",
        "DOTENV_CONFIG_STRICT": "false",
        "DOTENV_CONFIG_DEBUG": "1",
        "DOTENV_CONFIG_ENCODING": "Latin1",
        "DOTENV_CONFIG_DIALECT": "godotenv",
    }
    options = Options.from_env(env)
    assert options == Options(
        override_env=True,
        strict=False,
        debug=True,
        encoding=Encoding.Latin1,
        dialect=Dialect.GoDotenv,
        path="x.env",
    )


def test_from_env_empty_values_keep_base():
    base = Options(strict=False, path="base.env")
    options = Options.from_env({"DOTENV_CONFIG_STRICT": "", "DOTENV_CONFIG_PATH": ""}, base)
    assert options.strict is False
    assert options.path == "base.env"


def test_from_env_reads_process_environment(monkeypatch):
    monkeypatch.setenv("DOTENV_CONFIG_DIALECT", "ruby-dotenv")
    assert Options.from_env().dialect is Dialect.RubyDotenv


@pytest.mark.parametrize(
    ("name", "value", "option_type"),
    [
        ("DOTENV_CONFIG_STRICT", "maybe", "Bool"),
        ("DOTENV_CONFIG_ENCODING", "ebcdic", "Encoding"),
        ("DOTENV_CONFIG_DIALECT", "perl", "Dialect"),
    ],
)
def test_from_env_illegal_values(name, value, option_type):
    with pytest.raises(IllegalOption) as info:
        Options.from_env({name: value})
    err = info.value
    assert err.option_type == option_type
    assert err.kind is ErrorKind.OptionsParseError
    assert str(err) == f"OptionsParseError: {option_type} option has illegal value: {name}={value!r}"


def test_parse_bool():
    assert parse_bool("X", "True", False) is True
    assert parse_bool("X", "0", True) is False
    assert parse_bool("X", None, True) is True
    with pytest.raises(ValueError):
        parse_bool("X", "yes", False)


def test_options_are_frozen():
    options = Options()
    with pytest.raises(dataclasses.FrozenInstanceError):
        options.strict = False  # type: ignore[misc]
    changed = options.replace(strict=False)
    assert changed.strict is False
    assert options.strict is True


def test_set_var_keeps_existing_value(caplog):
    caplog.set_level(logging.DEBUG, logger="punktum")
    sink = DictEnv({"A": "old"})
    Options(debug=True).set_var(sink, "A", "new")
    Options().set_var(sink, "B", "b")
    assert sink.data == {"A": "old", "B": "b"}
    assert "'A' is already defined and was NOT overwritten" in caplog.text


def test_set_var_override():
    sink = DictEnv({"A": "old"})
    Options(override_env=True).set_var(sink, "A", "new")
    assert sink.data == {"A": "new"}


def test_set_var_cut_null():
    sink = DictEnv()
    Options().set_var_cut_null(sink, "A\0B", "x\0y")
    assert sink.data == {"A": "x"}


@pytest.mark.parametrize(("key", "value"), [("", "x"), ("A\0", "x"), ("A", "x\0")])
def test_set_var_check_null(key, value):
    with pytest.raises(DotenvSyntaxError) as info:
        Options(path="f.env").set_var_check_null(DictEnv(), key, value, 3)
    assert info.value.location == "f.env:3:1"


def test_report_fills_in_path(caplog):
    caplog.set_level(logging.DEBUG, logger="punktum")
    error = DotenvSyntaxError("boom", 2, 5)
    Options(debug=True, path="x.env").report(error)
    assert error.path == "x.env"
    assert "x.env:2:5: boom" in caplog.text


def test_config_new_method(tmp_path):
    path = tmp_path / "a.env"
    path.write_text("A=1\nB=$A\n")
    assert Options(path=str(path)).config_new_with_parent(DictEnv()) == {"A": "1", "B": "1"}
