"""Parser for SLOP documents."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .lexer import KEY_VALUE_SEPARATOR, Lexer, Line, LineKind
from .types import InvalidLineError, SlopValue, UnclosedListError

if TYPE_CHECKING:
    from .document import Slop


class Parser:
    """Parser for SLOP documents.

    KVs are inserted into the target document as soon as they are parsed, so
    when an error is raised every KV before the failing line is already there.
    """

    __slots__ = ("current", "lexer")

    def __init__(self, source: str) -> None:
        self.lexer = Lexer(source)
        self.current = self.lexer.next_line()

    def _advance(self) -> Line:
        """Consume and return the current line."""
        prev = self.current
        self.current = self.lexer.next_line()
        return prev

    def _check(self, *kinds: LineKind) -> bool:
        """Check if the current line matches any of the given kinds."""
        return self.current.kind in kinds

    def parse_into(self, slop: Slop) -> None:
        """Parse the whole source, inserting each KV into `slop`."""
        while not self._check(LineKind.EOF):
            line = self._advance()

            match line.kind:
                case LineKind.BLANK | LineKind.COMMENT:
                    continue
                case LineKind.STRING_KV:
                    key, value = self._parse_string_kv(line)
                case LineKind.LIST_OPEN:
                    key, value = self._parse_list_kv(line)
                case _:
                    raise InvalidLineError(line.index, line.text)

            slop.insert(key, value)

    def _parse_string_kv(self, line: Line) -> tuple[str, SlopValue]:
        """Split on the first `=`; the key is not validated here."""
        key, _, value = line.text.partition(KEY_VALUE_SEPARATOR)
        return key, SlopValue.string(value)

    def _parse_list_kv(self, opener: Line) -> tuple[str, SlopValue]:
        """Collect item lines up to the closing `}`.

        Items keep their indentation; only the trailing `\\r` is removed.
        """
        key = opener.text[:-1]
        items: list[str] = []

        while not self._check(LineKind.EOF):
            line = self._advance()
            if line.kind is LineKind.LIST_CLOSE:
                return key, SlopValue.from_items(items)
            items.append(line.content)

        raise UnclosedListError(opener.index, opener.original)


def parse(source: str) -> Slop:
    """Parse a SLOP document from source string."""
    from .document import Slop

    return Slop.parse(source)
