"""Tests for the python-dotenv-style SDK (load_dotenv, dotenv_values)."""

from __future__ import annotations

import os

import pytest

from punktum import dotenv_values, load_dotenv
from punktum.errors import DotenvSyntaxError


def test_load_dotenv_import():
    """from punktum import load_dotenv works."""
    from punktum import load_dotenv as ld

    assert callable(ld)


def test_load_dotenv_sets_environment(sample_env):
    keys = ("DB_HOST", "DB_URL", "GREETING")
    for key in keys:
        os.environ.pop(key, None)
    try:
        assert load_dotenv(str(sample_env)) is True
        assert os.environ["DB_URL"] == "postgres://localhost:5432/app"
        assert os.environ["GREETING"] == "hello world"
    finally:
        for key in ("DB_HOST", "DB_PORT", "DB_URL", "GREETING", "INLINE_COMMENT", "EMPTY_VALUE", "EQUALS_IN_VALUE"):
            os.environ.pop(key, None)


def test_load_dotenv_nothing_new(tmp_path, monkeypatch):
    p = tmp_path / ".env"
    p.write_text("PUNKTUM_SDK_TEST=from_file\n")
    monkeypatch.setenv("PUNKTUM_SDK_TEST", "already")
    assert load_dotenv(str(p)) is False
    assert os.environ["PUNKTUM_SDK_TEST"] == "already"


def test_load_dotenv_override(tmp_path, monkeypatch):
    p = tmp_path / ".env"
    p.write_text("PUNKTUM_SDK_TEST=from_file\n")
    monkeypatch.setenv("PUNKTUM_SDK_TEST", "already")
    assert load_dotenv(str(p), override=True) is True
    assert os.environ["PUNKTUM_SDK_TEST"] == "from_file"


def test_load_dotenv_missing_file(tmp_path):
    assert load_dotenv(str(tmp_path / "nope.env")) is False


def test_load_dotenv_default_path(tmp_path):
    (tmp_path / ".env").write_text("PUNKTUM_SDK_TEST=default\n")
    try:
        assert load_dotenv() is True
        assert os.environ["PUNKTUM_SDK_TEST"] == "default"
    finally:
        os.environ.pop("PUNKTUM_SDK_TEST", None)


def test_load_dotenv_dialect_by_name(tmp_path):
    p = tmp_path / ".env"
    p.write_text("export PUNKTUM_SDK_TEST=ruby # comment\n")
    try:
        assert load_dotenv(str(p), dialect="ruby-dotenv") is True
        assert os.environ["PUNKTUM_SDK_TEST"] == "ruby"
    finally:
        os.environ.pop("PUNKTUM_SDK_TEST", None)


def test_dotenv_values_does_not_touch_environment(sample_env):
    values = dotenv_values(str(sample_env), parent={})
    assert values["DB_URL"] == "postgres://localhost:5432/app"
    assert "DB_URL" not in os.environ


def test_dotenv_values_later_wins(tmp_path):
    p = tmp_path / ".env"
    p.write_text("A=1\nA=2\n")
    assert dotenv_values(str(p), parent={}) == {"A": "2"}


def test_dotenv_values_parent(tmp_path):
    p = tmp_path / ".env"
    p.write_text("URL=https://${HOST}/\n")
    assert dotenv_values(str(p), parent={"HOST": "example.org"}) == {"URL": "https://example.org/"}


def test_dotenv_values_dialect_from_environment(tmp_path, monkeypatch):
    p = tmp_path / ".env"
    p.write_text("A=\"x\\ty\"\n")
    monkeypatch.setenv("DOTENV_CONFIG_DIALECT", "nodejs")
    assert dotenv_values(str(p)) == {"A": "x\\ty"}
    # explicit argument beats the environment
    assert dotenv_values(str(p), dialect="punktum") == {"A": "x\ty"}


def test_dotenv_values_strict(tmp_path):
    p = tmp_path / ".env"
    p.write_text("A=1\nB='open\n")
    assert dotenv_values(str(p), parent={}) == {"A": "1"}
    with pytest.raises(DotenvSyntaxError):
        dotenv_values(str(p), parent={}, strict=True)


def test_dotenv_values_missing_file(tmp_path):
    assert dotenv_values(str(tmp_path / "nope.env"), parent={}) == {}
