"""wurllib.parse.url
The URL value type and its serializer.
"""

import dataclasses
import urllib.parse

from typing import Self

from .errors import InvalidScheme
from .host import Host
from .rfc3986 import is_scheme, is_uri
from .settings import ParseSettings

# Special schemes and their default ports. file has no default port.
SPECIAL_SCHEMES: dict[str, int | None] = {
    "ftp": 21,
    "file": None,
    "http": 80,
    "https": 443,
    "ws": 80,
    "wss": 443,
}


@dataclasses.dataclass(frozen=True)
class URL:
    """A parsed URL. Immutable. You should not instantiate this directly. Instead use parse().

    relative_flag is true for the hierarchical form (scheme://authority/path), and false for the
    opaque form (scheme:scheme_data), in which case only scheme, scheme_data, query and fragment mean anything.
    """

    scheme: str
    scheme_data: str = ""
    username: str | None = None
    password: str | None = None
    host: Host | None = None
    port: int | None = None
    path: tuple[str, ...] = ()
    query: str | None = None
    fragment: str | None = None
    relative_flag: bool = True

    def __post_init__(self: Self) -> None:
        # No path and a single empty segment are the same thing; keep just one of them.
        path: tuple[str, ...] = tuple(self.path)
        if path == ("",):
            path = ()
        object.__setattr__(self, "path", path)

    @property
    def is_special(self: Self) -> bool:
        return self.scheme in SPECIAL_SCHEMES

    @property
    def default_port(self: Self) -> int | None:
        return SPECIAL_SCHEMES.get(self.scheme)

    @property
    def userinfo(self: Self) -> str | None:
        """username[:password], or None if there are no credentials."""
        if self.username is None and self.password is None:
            return None
        if self.password is None:
            return self.username
        return f"{self.username or ''}:{self.password}"

    @property
    def authority(self: Self) -> str | None:
        """userinfo@host:port"""
        if not self.relative_flag:
            return None
        result: str = ""
        if self.userinfo is not None:
            result += f"{self.userinfo}@"
        if self.host is not None:
            result += self.host.serialize()
        if self.port is not None:
            result += f":{self.port}"
        return result

    @property
    def path_string(self: Self) -> str | None:
        if not self.relative_flag:
            return None
        return f"/{'/'.join(self.path)}"

    @property
    def file(self: Self) -> str:
        """Path, query and fragment, the way they'd appear after the authority."""
        result: str = self.path_string or ""
        if self.query is not None:
            result += f"?{self.query}"
        if self.fragment is not None:
            result += f"#{self.fragment}"
        return result

    def serialize(self: Self) -> str:
        result: str = f"{self.scheme}:"
        if self.relative_flag:
            result += f"//{self.authority}{self.path_string}"
        else:
            result += self.scheme_data
        if self.query is not None:
            result += f"?{self.query}"
        if self.fragment is not None:
            result += f"#{self.fragment}"
        return result

    def __str__(self: Self) -> str:
        return self.serialize()

    def __repr__(self: Self) -> str:
        return f"{self.__class__.__name__}({self.serialize()!r})"

    def with_scheme(self: Self, scheme: str, settings: ParseSettings | None = None) -> Self:
        """Returns a new URL with the scheme replaced.
        Between two special schemes the other components are kept as they are; otherwise the
        new serialization is parsed from scratch, which may well change how the rest is read.
        A switch to file is refused (the URL comes back unchanged) when there are credentials or a port,
        and so is a switch away from a file URL with an empty host.
        """
        from .machine import parse, replace_scheme

        if not isinstance(scheme, str):
            raise TypeError(f"expected str, got {type(scheme).__name__}")
        if not scheme:
            raise InvalidScheme("empty scheme")
        if not is_scheme(scheme):
            raise InvalidScheme(f"invalid scheme {scheme!r}")

        new_scheme: str = scheme.lower()
        if self.is_special and new_scheme in SPECIAL_SCHEMES:
            return replace_scheme(self, new_scheme, settings)
        return parse(new_scheme + self.serialize()[len(self.scheme) :], settings=settings)

    def join(self: Self, reference: str, settings: ParseSettings | None = None) -> Self:
        """Resolve reference against this URL."""
        from .machine import parse

        return parse(reference, base=self, settings=settings)

    def to_uri(self: Self) -> str:
        """The serialization, checked against the RFC 3986 URI grammar.
        Parse with Standard.RFC_2396 if you need this to succeed for arbitrary input.
        """
        serialized: str = self.serialize()
        if not is_uri(serialized):
            raise ValueError(f"{serialized!r} is not a valid RFC 3986 URI")
        return serialized

    @classmethod
    def from_uri(cls, uri: str, settings: ParseSettings | None = None) -> "URL":
        """Parse a string that must already be a valid RFC 3986 URI."""
        from .machine import parse

        if not is_uri(uri):
            raise ValueError(f"{uri!r} is not a valid RFC 3986 URI")
        return parse(uri, settings=settings)

    def to_urlsplit(self: Self) -> urllib.parse.SplitResult:
        """The five urlsplit() components.
        Lossy: urlsplit can't tell an empty query, fragment or authority from a missing one.
        """
        path: str = self.path_string if self.relative_flag else self.scheme_data
        assert "?" not in path and "#" not in path
        return urllib.parse.SplitResult(
            self.scheme, self.authority or "", path, self.query or "", self.fragment or ""
        )

    @classmethod
    def from_urlsplit(cls, parts: urllib.parse.SplitResult, settings: ParseSettings | None = None) -> "URL":
        from .machine import parse

        return parse(urllib.parse.urlunsplit(parts), settings=settings)
