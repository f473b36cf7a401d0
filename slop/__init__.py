"""SLOP (Sans' Lovely Properties) parser and serializer for Python."""

from .document import Slop
from .lexer import Lexer, Line, LineKind
from .parser import Parser, parse
from .types import (
    DEFAULT_ENCODING,
    DEFAULT_INDENT,
    InvalidKeyError,
    InvalidLineError,
    LineError,
    SlopError,
    SlopIOError,
    SlopValue,
    UnclosedListError,
    ValueKind,
)

__all__ = [
    "DEFAULT_ENCODING",
    "DEFAULT_INDENT",
    "InvalidKeyError",
    "InvalidLineError",
    "Lexer",
    "Line",
    "LineError",
    "LineKind",
    "Parser",
    "Slop",
    "SlopError",
    "SlopIOError",
    "SlopValue",
    "UnclosedListError",
    "ValueKind",
    "parse",
]
