"""POSIX-style ``${NAME<modifier>operand}`` semantics.

Shared by the Punktum and Compose-Go dialects.  Each dialect owns its own
lexing of ``$`` forms; this module only answers two questions for a braced
expression: does the operand take part in the result, and what is the
result.
"""

from __future__ import annotations

import enum
from collections.abc import Callable


class MissingVariable(ValueError):
    """A ``:?``/``?`` expression found its variable unset (or empty)."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        if reason:
            super().__init__(f"required variable {name} is missing a value: {reason}")
        else:
            super().__init__(f"required variable {name} is missing a value")


class Modifier(enum.Enum):
    DEFAULT_IF_EMPTY = ":-"
    DEFAULT_IF_UNSET = "-"
    ALTERNATE_IF_NONEMPTY = ":+"
    ALTERNATE_IF_SET = "+"
    REQUIRE_NONEMPTY = ":?"
    REQUIRE_SET = "?"

    @property
    def checks_empty(self) -> bool:
        return self.value.startswith(":")

    @property
    def is_default(self) -> bool:
        return self.value[-1] == "-"

    @property
    def is_alternate(self) -> bool:
        return self.value[-1] == "+"

    @property
    def is_required(self) -> bool:
        return self.value[-1] == "?"

    def is_missing(self, value: str | None) -> bool:
        return value is None or (self.checks_empty and value == "")

    def uses_operand(self, value: str | None) -> bool:
        """Whether the operand contributes to the result for *value*.

        For the required forms the operand is the error message and is used
        only when the check fails.
        """
        if self.is_alternate:
            return not self.is_missing(value)
        return self.is_missing(value)

    def apply(self, name: str, value: str | None, operand: str | Callable[[], str]) -> str:
        """Return the substitution result, or raise :class:`MissingVariable`."""
        use = self.uses_operand(value)
        if use:
            text = operand() if callable(operand) else operand
            if self.is_required:
                raise MissingVariable(name, text)
            return text
        if self.is_alternate:
            return ""
        return value or ""


def match_modifier(text: str, index: int) -> Modifier | None:
    """Return the modifier starting at *index* of *text*, if any."""
    two = text[index:index + 2]
    for modifier in (Modifier.DEFAULT_IF_EMPTY, Modifier.ALTERNATE_IF_NONEMPTY, Modifier.REQUIRE_NONEMPTY):
        if two == modifier.value:
            return modifier
    one = text[index:index + 1]
    for modifier in (Modifier.DEFAULT_IF_UNSET, Modifier.ALTERNATE_IF_SET, Modifier.REQUIRE_SET):
        if one == modifier.value:
            return modifier
    return None


class InvalidTemplate(ValueError):
    def __init__(self, template: str) -> None:
        super().__init__(f"Invalid template: {template!r}")
        self.template = template


def _is_name_start(ch: str) -> bool:
    return ch == "_" or ("a" <= ch <= "z") or ("A" <= ch <= "Z")


def _is_name_char(ch: str) -> bool:
    return _is_name_start(ch) or ("0" <= ch <= "9")


def first_closing_brace(text: str, start: int) -> int:
    """Index of the ``}`` closing the ``${`` at *start*, or -1.

    Only ``${`` openers are counted; a bare ``{`` does not nest.
    """
    depth = 0
    index = start
    end = len(text)
    while index < end:
        ch = text[index]
        if ch == "}":
            depth -= 1
            if depth == 0:
                return index
        elif ch == "$" and text.startswith("{", index + 1):
            depth += 1
            index += 1
        index += 1
    return -1


def substitute_template(template: str, lookup: Callable[[str], str | None]) -> str:
    """Expand a compose-go style template.

    ``$$`` is a literal ``$``; ``$name`` and ``${name}`` are replaced (unset
    is empty); ``${name<modifier>operand}`` follows :class:`Modifier`.  The
    operand is expanded before the lookup, so errors inside an unused
    operand still surface.  A ``$`` that starts none of these forms is kept.
    Raises :class:`InvalidTemplate` or :class:`MissingVariable`.
    """
    out: list[str] = []
    index = 0
    end = len(template)
    while index < end:
        dollar = template.find("$", index)
        if dollar < 0:
            out.append(template[index:])
            break
        out.append(template[index:dollar])
        nxt = template[dollar + 1:dollar + 2]

        if nxt == "$":
            out.append("$")
            index = dollar + 2
            continue

        if nxt and _is_name_start(nxt):
            name_end = dollar + 2
            while name_end < end and _is_name_char(template[name_end]):
                name_end += 1
            out.append(lookup(template[dollar + 1:name_end]) or "")
            index = name_end
            continue

        if nxt != "{":
            out.append("$")
            index = dollar + 1
            continue

        close = first_closing_brace(template, dollar)
        if close < 0:
            raise InvalidTemplate(template)
        body = template[dollar + 2:close]
        if "\n" in body or not body or not _is_name_start(body[0]):
            raise InvalidTemplate(template)
        name_end = 1
        while name_end < len(body) and _is_name_char(body[name_end]):
            name_end += 1
        name = body[:name_end]
        if name_end == len(body):
            out.append(lookup(name) or "")
        else:
            modifier = match_modifier(body, name_end)
            if modifier is None:
                raise InvalidTemplate(template)
            operand = substitute_template(body[name_end + len(modifier.value):], lookup)
            out.append(modifier.apply(name, lookup(name), operand))
        index = close + 1

    return "".join(out)
