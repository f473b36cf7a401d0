"""Lexer for SLOP documents."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final

COMMENT_MARK: Final[str] = "#"
KEY_VALUE_SEPARATOR: Final[str] = "="
LIST_OPEN_MARK: Final[str] = "{"
LIST_CLOSE_MARK: Final[str] = "}"
LINE_SEPARATOR: Final[str] = "\n"


class LineKind(Enum):
    """Line kinds."""

    BLANK = "blank"
    COMMENT = "comment"
    STRING_KV = "string_kv"
    LIST_OPEN = "list_open"
    LIST_CLOSE = "list_close"
    INVALID = "invalid"
    EOF = "eof"


@dataclass(slots=True)
class Line:
    """A classified source line."""

    kind: LineKind
    index: int
    original: str  # as split from the source
    content: str  # trailing \r removed
    text: str  # content with leading whitespace removed


def clean_line(line: str) -> str:
    """Remove a trailing `\\r` and any leading (never trailing) whitespace."""
    return line.removesuffix("\r").lstrip()


def classify(text: str) -> LineKind:
    """Classify an already cleaned line."""
    if not text:
        return LineKind.BLANK
    if text.startswith(COMMENT_MARK):
        return LineKind.COMMENT
    if KEY_VALUE_SEPARATOR in text:
        return LineKind.STRING_KV
    if text.endswith(LIST_OPEN_MARK):
        return LineKind.LIST_OPEN
    if text == LIST_CLOSE_MARK:
        return LineKind.LIST_CLOSE
    return LineKind.INVALID


class Lexer:
    """Splits SLOP source into lines."""

    __slots__ = ("lines", "pos")

    def __init__(self, source: str) -> None:
        self.lines = source.split(LINE_SEPARATOR)
        self.pos = 0

    def next_line(self) -> Line:
        """Return the next line, or an EOF line past the end of the source."""
        if self.pos >= len(self.lines):
            return Line(LineKind.EOF, self.pos, "", "", "")

        index = self.pos
        original = self.lines[index]
        self.pos += 1

        text = clean_line(original)
        return Line(classify(text), index, original, original.removesuffix("\r"), text)
