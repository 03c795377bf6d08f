"""Tests for the shared ${NAME<modifier>operand} engine."""

from __future__ import annotations

import pytest

from punktum.dialects.substitution import (
    InvalidTemplate,
    MissingVariable,
    Modifier,
    first_closing_brace,
    match_modifier,
    substitute_template,
)

ENV = {"SET": "v", "EMPTY": ""}


def lookup(name):
    return ENV.get(name)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        (":-x", Modifier.DEFAULT_IF_EMPTY),
        ("-x", Modifier.DEFAULT_IF_UNSET),
        (":+x", Modifier.ALTERNATE_IF_NONEMPTY),
        ("+x", Modifier.ALTERNATE_IF_SET),
        (":?x", Modifier.REQUIRE_NONEMPTY),
        ("?x", Modifier.REQUIRE_SET),
        (":x", None),
        ("}", None),
    ],
)
def test_match_modifier(text, expected):
    assert match_modifier(text, 0) is expected


def test_modifier_apply():
    assert Modifier.DEFAULT_IF_EMPTY.apply("X", "", "d") == "d"
    assert Modifier.DEFAULT_IF_UNSET.apply("X", "", "d") == ""
    assert Modifier.ALTERNATE_IF_SET.apply("X", "", "a") == "a"
    assert Modifier.ALTERNATE_IF_NONEMPTY.apply("X", "", "a") == ""
    assert Modifier.DEFAULT_IF_UNSET.apply("X", None, lambda: "lazy") == "lazy"


def test_modifier_required():
    with pytest.raises(MissingVariable, match="required variable X is missing a value: why"):
        Modifier.REQUIRE_NONEMPTY.apply("X", "", "why")
    with pytest.raises(MissingVariable) as info:
        Modifier.REQUIRE_SET.apply("X", None, "")
    assert str(info.value) == "required variable X is missing a value"
    assert Modifier.REQUIRE_SET.apply("X", "", "why") == ""


def test_first_closing_brace():
    text = "${A:-${B}}x}"
    assert first_closing_brace(text, 0) == 9
    assert first_closing_brace("${A:-{}", 0) == 6
    assert first_closing_brace("${A", 0) == -1


@pytest.mark.parametrize(
    ("template", "expected"),
    [
        ("plain", "plain"),
        ("$SET-$EMPTY-$UNSET", "v--"),
        ("${SET}x", "vx"),
        ("$$SET", "$SET"),
        ("a $ b", "a $ b"),
        ("$1", "$1"),
        ("${UNSET:-${SET:+alt}}", "alt"),
        ("${EMPTY-d}${EMPTY:-d}", "d"),
    ],
)
def test_substitute_template(template, expected):
    assert substitute_template(template, lookup) == expected


@pytest.mark.parametrize("template", ["${", "${}", "${1A}", "${SET!x}", "${A\n}"])
def test_invalid_template(template):
    with pytest.raises(InvalidTemplate):
        substitute_template(template, lookup)
