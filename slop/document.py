"""The SLOP document model."""

from __future__ import annotations

import logging
from collections.abc import ItemsView, Iterable, Iterator
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import TypeAlias

from .lexer import KEY_VALUE_SEPARATOR, LIST_OPEN_MARK
from .parser import Parser
from .types import (
    DEFAULT_ENCODING,
    DEFAULT_INDENT,
    InvalidKeyError,
    SlopIOError,
    SlopValue,
)

logger = logging.getLogger(__name__)

ValueLike: TypeAlias = SlopValue | str | Iterable[str]
StrPath: TypeAlias = str | PathLike[str]


def is_valid_key(key: str) -> bool:
    """A key must not contain `=` or end in `{`."""
    return KEY_VALUE_SEPARATOR not in key and not key.endswith(LIST_OPEN_MARK)


@dataclass(slots=True)
class Slop:
    """A parsed SLOP document held in memory.

    Maps each key to a `SlopValue`. Iteration order is not part of the
    contract, even though it currently follows insertion order.

        >>> slop = Slop.parse("some-key=some value\\nother-key{\\nother\\nvalue\\n}")
        >>> slop.get_string("some-key")
        'some value'
        >>> slop.get_list("other-key")
        ['other', 'value']
    """

    entries: dict[str, SlopValue] = field(default_factory=dict)

    # -- Construction ---------------------------------------------------

    @classmethod
    def parse(cls, source: str) -> Slop:
        """Parse a SLOP string into a new document."""
        slop = cls()
        slop.append_slop_string(source)
        return slop

    @classmethod
    def open(cls, path: StrPath, *, encoding: str = DEFAULT_ENCODING) -> Slop:
        """Read a SLOP file and parse it into a new document."""
        try:
            with Path(path).open(encoding=encoding, newline="") as f:
                source = f.read()
        except (OSError, UnicodeError) as e:
            raise SlopIOError(e) from e
        logger.debug("read %d characters from %s", len(source), path)
        return cls.parse(source)

    # -- Lookup ---------------------------------------------------------

    def is_empty(self) -> bool:
        return not self.entries

    def contains_key(self, key: str) -> bool:
        return key in self.entries

    def get(self, key: str) -> SlopValue | None:
        return self.entries.get(key)

    def get_string(self, key: str) -> str | None:
        """Return the text of a string KV, or None if missing or a list."""
        value = self.entries.get(key)
        return value.as_string() if value is not None else None

    def get_list(self, key: str) -> list[str] | None:
        """Return the items of a list KV, or None if missing or a string."""
        value = self.entries.get(key)
        return value.as_list() if value is not None else None

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    # -- Mutation -------------------------------------------------------

    def insert(self, key: str, value: ValueLike) -> SlopValue | None:
        """Insert `value` under `key`, returning the previous value if any.

        Raises InvalidKeyError if the key contains `=` or ends in `{`, as it
        could not be written back out. Use `insert_unchecked` when the key is
        known to be valid.
        """
        if not is_valid_key(key):
            raise InvalidKeyError(key)
        return self.insert_unchecked(key, value)

    def insert_unchecked(self, key: str, value: ValueLike) -> SlopValue | None:
        """Same as `insert`, without validating the key."""
        previous = self.entries.get(key)
        self.entries[key] = SlopValue.of(value)
        return previous

    def remove(self, key: str) -> SlopValue | None:
        return self.entries.pop(key, None)

    def append_slop_string(self, source: str) -> None:
        """Parse `source` and add its KVs to this document.

        Existing KVs are kept, and a KV in `source` replaces one with the same
        key. Parsing is not transactional: if an error is raised, the KVs
        parsed before the failing line have already been inserted.
        """
        Parser(source).parse_into(self)

    # -- Iteration ------------------------------------------------------

    def items(self) -> ItemsView[str, SlopValue]:
        return self.entries.items()

    def __iter__(self) -> Iterator[tuple[str, SlopValue]]:
        return iter(self.entries.items())

    def drain(self) -> Iterator[tuple[str, SlopValue]]:
        """Yield every KV, removing each one from the document as it goes."""
        while self.entries:
            key = next(iter(self.entries))
            yield key, self.entries.pop(key)

    # -- Serialization --------------------------------------------------

    def to_slop_string(self) -> str:
        return "".join(f"{key}{value.render()}\n" for key, value in self.entries.items())

    def to_string_pretty(self, indent: str = DEFAULT_INDENT) -> str:
        """Same as `to_slop_string`, but list items are indented."""
        return "".join(
            f"{key}{value.render_pretty(indent)}\n" for key, value in self.entries.items()
        )

    def __str__(self) -> str:
        return self.to_slop_string()

    def save(self, path: StrPath, *, encoding: str = DEFAULT_ENCODING) -> None:
        """Write the document to `path`.

        The write is not atomic; a failure can leave a partial file behind.
        """
        self._write(path, self.to_slop_string(), encoding)

    def save_pretty(
        self,
        path: StrPath,
        *,
        indent: str = DEFAULT_INDENT,
        encoding: str = DEFAULT_ENCODING,
    ) -> None:
        """Same as `save`, but list items are indented."""
        self._write(path, self.to_string_pretty(indent), encoding)

    def _write(self, path: StrPath, text: str, encoding: str) -> None:
        try:
            with Path(path).open("w", encoding=encoding, newline="") as f:
                f.write(text)
        except (OSError, UnicodeError) as e:
            raise SlopIOError(e) from e
        logger.debug("wrote %d characters to %s", len(text), path)
