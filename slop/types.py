"""Type definitions for SLOP values and errors."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Final, TypeVar

T = TypeVar("T")

DEFAULT_INDENT: Final[str] = "    "
DEFAULT_ENCODING: Final[str] = "utf-8"


class SlopError(Exception):
    """Base class for every error raised by this package."""


class LineError(SlopError):
    """A parse error tied to one line of the source."""

    reason = "is not a valid kv"

    def __init__(self, line_index: int, line: str) -> None:
        self.line_index = line_index  # 0-based
        self.line = line
        super().__init__(f"(in line {line_index + 1}) `{line}` {self.reason}")


class InvalidLineError(LineError):
    """The line is neither a string KV nor the start of a list KV."""


class UnclosedListError(LineError):
    """A list KV was opened but never closed with `}`."""

    reason = "is not closed"


class InvalidKeyError(SlopError):
    """The key contains `=` or ends in `{`."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"the key `{key}` contains invalid characters")


class SlopIOError(SlopError):
    """Wraps an OSError or encoding error raised while reading or writing a file."""

    def __init__(self, cause: OSError | UnicodeError) -> None:
        self.cause = cause
        super().__init__(f"io error: {cause}")


class ValueKind(Enum):
    """The shape of a value."""

    STRING = "string"
    LIST = "list"


@dataclass(slots=True)
class SlopValue:
    """The value of a KV: a single line of text or a list of lines."""

    kind: ValueKind
    data: str | list[str]

    @classmethod
    def string(cls, text: str) -> SlopValue:
        if not isinstance(text, str):
            raise TypeError(f"expected str, got {type(text).__name__}")
        return cls(ValueKind.STRING, text)

    @classmethod
    def from_items(cls, items: Iterable[str]) -> SlopValue:
        data = list(items)
        for item in data:
            if not isinstance(item, str):
                raise TypeError(f"list items must be str, got {type(item).__name__}")
        return cls(ValueKind.LIST, data)

    @classmethod
    def of(cls, obj: SlopValue | str | Iterable[str]) -> SlopValue:
        """Coerce `obj` into a value.

        A `str` becomes a string value and any other iterable of `str` becomes
        a list value. Values are passed through untouched.
        """
        if isinstance(obj, SlopValue):
            return obj
        if isinstance(obj, str):
            return cls.string(obj)
        if isinstance(obj, Iterable):
            return cls.from_items(obj)
        raise TypeError(f"cannot make a SLOP value from {type(obj).__name__}")

    def is_string(self) -> bool:
        return self.kind is ValueKind.STRING

    def is_list(self) -> bool:
        return self.kind is ValueKind.LIST

    def as_string(self) -> str | None:
        """Return the text, or None if this is a list."""
        return self.data if self.kind is ValueKind.STRING else None

    def as_list(self) -> list[str] | None:
        """Return the list itself (not a copy), or None if this is a string."""
        return self.data if self.kind is ValueKind.LIST else None

    def parse_as(self, convert: Callable[[str], T]) -> T | None:
        """Convert the text of a string value with `convert`.

        Returns None for a list value. Errors raised by `convert` propagate.

            >>> SlopValue.string("16").parse_as(int)
            16
            >>> SlopValue.from_items(["a"]).parse_as(int) is None
            True
        """
        match self.kind:
            case ValueKind.STRING:
                return convert(self.data)
            case ValueKind.LIST:
                return None

    def render(self) -> str:
        """Render as the part of a KV line that follows the key.

        An empty list renders as `{\\n}`, so it parses back empty.
        """
        match self.kind:
            case ValueKind.STRING:
                return f"={self.data}"
            case ValueKind.LIST:
                return "{\n" + "".join(f"{item}\n" for item in self.data) + "}"

    def render_pretty(self, indent: str = DEFAULT_INDENT) -> str:
        """Same as `render`, but list items are prefixed with `indent`."""
        match self.kind:
            case ValueKind.STRING:
                return f"={self.data}"
            case ValueKind.LIST:
                return "{\n" + "".join(f"{indent}{item}\n" for item in self.data) + "}"

    def __str__(self) -> str:
        return self.render()
