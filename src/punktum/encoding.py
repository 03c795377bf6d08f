"""Text encodings and the per-line decoder used by every text dialect.

Lines are split on the *encoded* newline code unit before decoding, so a
decoding error is confined to one physical line and the reader can go on
with the next one.
"""

from __future__ import annotations

import enum
from typing import BinaryIO

from punktum.errors import DecodeError, IllegalEncoding


class Encoding(enum.Enum):
    """Supported source encodings.  The value is the Python codec name."""

    ASCII = "ascii"
    Latin1 = "latin-1"
    UTF8 = "utf-8"
    UTF16BE = "utf-16-be"
    UTF16LE = "utf-16-le"
    UTF32BE = "utf-32-be"
    UTF32LE = "utf-32-le"

    def __str__(self) -> str:
        return self.name

    @property
    def codec(self) -> str:
        return self.value

    @property
    def unit_size(self) -> int:
        return _UNIT_SIZE.get(self, 1)

    @property
    def newline(self) -> bytes:
        return "\n".encode(self.value)

    @classmethod
    def parse(cls, value: str) -> Encoding:
        """Parse an encoding name (ASCII case-insensitive)."""
        try:
            return _ALIASES[value.lower()]
        except KeyError:
            raise IllegalEncoding(value) from None

    def read_line(self, stream: BinaryIO, lineno: int = 0) -> str:
        """Read and decode one physical line including its ``\\n``.

        Returns ``""`` at end of input.  Raises :class:`DecodeError` after
        the offending line has been consumed.
        """
        if self.unit_size == 1:
            raw = stream.readline()
        else:
            raw = _read_units(stream, self.unit_size, self.newline)
        if not raw:
            return ""
        try:
            return raw.decode(self.codec)
        except UnicodeDecodeError as exc:
            raise DecodeError(
                f"cannot decode line as {self.name}: {exc.reason}",
                lineno=lineno or None,
                column=exc.start // self.unit_size + 1,
            ) from exc


_UNIT_SIZE = {
    Encoding.UTF16BE: 2,
    Encoding.UTF16LE: 2,
    Encoding.UTF32BE: 4,
    Encoding.UTF32LE: 4,
}

_ALIASES: dict[str, Encoding] = {
    "utf-8": Encoding.UTF8,
    "utf8": Encoding.UTF8,
    "windows-65001": Encoding.UTF8,
    "ascii": Encoding.ASCII,
    "us-ascii": Encoding.ASCII,
    "windows-20127": Encoding.ASCII,
    "latin1": Encoding.Latin1,
    "iso-8859-1": Encoding.Latin1,
    "iso8859-1": Encoding.Latin1,
    "iso8859_1": Encoding.Latin1,
    "windows-28591": Encoding.Latin1,
    "cp819": Encoding.Latin1,
    "utf-16le": Encoding.UTF16LE,
    "utf16le": Encoding.UTF16LE,
    "windows-1200": Encoding.UTF16LE,
    "utf-16be": Encoding.UTF16BE,
    "utf16be": Encoding.UTF16BE,
    "windows-1201": Encoding.UTF16BE,
    "utf-32le": Encoding.UTF32LE,
    "utf32le": Encoding.UTF32LE,
    "windows-12000": Encoding.UTF32LE,
    "utf-32be": Encoding.UTF32BE,
    "utf32be": Encoding.UTF32BE,
    "windows-12001": Encoding.UTF32BE,
}


def _read_units(stream: BinaryIO, size: int, newline: bytes) -> bytes:
    buf = bytearray()
    while True:
        unit = stream.read(size)
        if not unit:
            break
        buf += unit
        if unit == newline or len(unit) < size:
            break
    return bytes(buf)


class LineSource:
    """Pull-based reader of decoded physical lines.

    Tracks the 1-based number of the line most recently returned.  With
    *strict* false, undecodable lines are reported to *on_error* and
    skipped; with *strict* true the :class:`DecodeError` propagates.
    """

    def __init__(self, stream: BinaryIO, encoding: Encoding, strict: bool = True, on_error=None) -> None:
        self.stream = stream
        self.encoding = encoding
        self.strict = strict
        self.on_error = on_error
        self.lineno = 0
        self.eof = False

    def next_line(self) -> str:
        while not self.eof:
            self.lineno += 1
            try:
                line = self.encoding.read_line(self.stream, self.lineno)
            except DecodeError as exc:
                if self.on_error is not None:
                    self.on_error(exc)
                if self.strict:
                    raise
                continue
            if not line:
                self.eof = True
                self.lineno -= 1
                return ""
            return line
        return ""

    def __iter__(self):
        while True:
            line = self.next_line()
            if not line:
                return
            yield line

    def read_all(self) -> str:
        return "".join(self)
