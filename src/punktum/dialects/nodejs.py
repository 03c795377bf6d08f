"""Node.js dialect: the parser built into ``node --env-file``.

Follows ``Dotenv::ParseContent`` from Node's ``src/node_dotenv.cc``.  It
never reports errors; lines it does not understand are dropped.
"""

from __future__ import annotations

from typing import BinaryIO

from punktum.dialects._scan import read_source
from punktum.options import Options
from punktum.store import ReadEnv, WriteEnv


def _after_line(content: str, index: int = 0) -> str:
    newline = content.find("\n", index)
    return content[newline + 1:] if newline >= 0 else ""


def parse_content(content: str) -> list[tuple[str, str]]:
    """Return the ``(key, value)`` pairs Node would extract from *content*."""
    pairs: list[tuple[str, str]] = []
    content = content.replace("\r", "").strip(" ")

    while content:
        # skip empty lines and comments
        if content[0] in "\n#":
            content = _after_line(content)
            continue

        equal = content.find("=")
        newline = content.find("\n")
        if equal < 0 or 0 <= newline < equal:
            content = _after_line(content)
            continue

        key = content[:equal].strip(" ")
        content = content[equal + 1:]

        if not content or content[0] == "\n":
            pairs.append((key, ""))
            continue

        if key.startswith("export "):
            key = key[7:].strip(" ")
        if not key:
            content = _after_line(content)
            continue

        content = content.lstrip(" ")
        front = content[:1]

        if front == '"':
            closing = content.find('"', 1)
            if closing >= 0:
                pairs.append((key, content[1:closing].replace("\\n", "\n")))
                content = _after_line(content, closing + 1).strip(" ")
                continue

        if front and front in "\"'`":
            closing = content.find(front, 1)
            if closing >= 0:
                pairs.append((key, content[1:closing]))
                content = _after_line(content, closing + 1)
            else:
                # unterminated: the rest of the line, quote included
                newline = content.find("\n")
                if newline < 0:
                    pairs.append((key, content))
                    break
                pairs.append((key, content[:newline]))
                content = content[newline:]
        else:
            newline = content.find("\n")
            value = content[:newline] if newline >= 0 else content
            content = content[newline + 1:] if newline >= 0 else ""
            hash_at = value.find("#")
            if hash_at >= 0:
                value = value[:hash_at]
            pairs.append((key, value.strip(" ")))

        content = content.strip(" ")

    return pairs


def parse(reader: BinaryIO, sink: WriteEnv, parent: ReadEnv, options: Options) -> None:
    for key, value in parse_content(read_source(reader, options)):
        options.set_var_cut_null(sink, key, value)
