"""wurllib.parse.errors
Parse errors. Everything here is a ValueError so old `except ValueError` callers keep working.
"""

from typing import Self


class ParseError(ValueError):
    """Base class for every parse error.
    Fatal errors are raised and abort the parse. Non-fatal ones (ValidationError) are recorded next to the result.
    """

    fatal: bool = True

    def __init__(self: Self, message: str, position: int | None = None) -> None:
        super().__init__(message)
        self.message: str = message
        self.position: int | None = position

    def __str__(self: Self) -> str:
        if self.position is None:
            return self.message
        return f"{self.message} (at position {self.position})"

    def __repr__(self: Self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, position={self.position!r})"


class InvalidScheme(ParseError):
    """Missing or malformed scheme, or a relative reference with nothing to resolve it against."""


class MissingHost(ParseError):
    """A special scheme with an empty host."""


class InvalidHost(ParseError):
    """Host containing forbidden code points, or one that the host encoder rejected."""


class InvalidIPv4(InvalidHost):
    """All-numeric host that doesn't fit in 32 bits."""


class InvalidIPv6(InvalidHost):
    """Malformed bracketed IPv6 literal."""


class InvalidPort(ParseError):
    """Non-digit, empty or out of range port."""


class ValidationError(ParseError):
    """Non-fatal deviation. The parser repairs it and keeps going."""

    fatal = False


class InvalidPercentEncoding(ValidationError):
    """'%' that isn't followed by two hex digits."""


class InvalidPathSegment(ValidationError):
    """Backslash separators, Windows drive letter quirks and similar path repairs."""


class SyntaxViolation(ValidationError):
    """Anything else that got repaired: stray slashes, '@' in the authority, stripped whitespace."""
