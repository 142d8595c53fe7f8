"""wurllib.parse.machine
The WHATWG URL parser.
Every state is one small function; step() is the only thing that moves between them.
"""

import enum
import logging
import re

from typing import Callable, NamedTuple, Self

from .errors import (
    InvalidPathSegment,
    InvalidPercentEncoding,
    InvalidPort,
    InvalidScheme,
    MissingHost,
    ParseError,
    SyntaxViolation,
    ValidationError,
)
from .host import EMPTY_HOST, Domain, Host, parse_host
from .percent import (
    C0_CONTROL_SET,
    FRAGMENT_SET,
    PATH_SET,
    QUERY_SET,
    SPECIAL_QUERY_SET,
    USERINFO_SET,
    EncodeSet,
    encode_code_point,
    is_valid_escape,
)
from .settings import DEFAULT_SETTINGS, ParseSettings, Standard
from .url import SPECIAL_SCHEMES, URL

logger = logging.getLogger(__name__)

# "C:" or "C|"
_WINDOWS_DRIVE_LETTER_PAT: re.Pattern[str] = re.compile(r"[A-Za-z][:|]")

_NORMALIZED_WINDOWS_DRIVE_LETTER_PAT: re.Pattern[str] = re.compile(r"[A-Za-z]:")

_STARTS_WITH_WINDOWS_DRIVE_LETTER_PAT: re.Pattern[str] = re.compile(r"[A-Za-z][:|](?:[/\\?#]|\Z)")

# Everything from U+0000 to U+0020
_C0_CONTROL_OR_SPACE: str = "".join(map(chr, range(0x21)))

_SINGLE_DOT_SEGMENTS: frozenset[str] = frozenset((".", "%2e"))

_DOUBLE_DOT_SEGMENTS: frozenset[str] = frozenset(("..", ".%2e", "%2e.", "%2e%2e"))


class State(enum.Enum):
    SCHEME_START = enum.auto()
    SCHEME = enum.auto()
    NO_SCHEME = enum.auto()
    SPECIAL_RELATIVE_OR_AUTHORITY = enum.auto()
    PATH_OR_AUTHORITY = enum.auto()
    RELATIVE = enum.auto()
    RELATIVE_SLASH = enum.auto()
    SPECIAL_AUTHORITY_SLASHES = enum.auto()
    SPECIAL_AUTHORITY_IGNORE_SLASHES = enum.auto()
    AUTHORITY = enum.auto()
    HOST = enum.auto()
    PORT = enum.auto()
    FILE = enum.auto()
    FILE_SLASH = enum.auto()
    FILE_HOST = enum.auto()
    PATH_START = enum.auto()
    PATH = enum.auto()
    CANNOT_BE_A_BASE_URL_PATH = enum.auto()
    QUERY = enum.auto()
    FRAGMENT = enum.auto()


class ParseResult(NamedTuple):
    url: URL
    errors: tuple[ValidationError, ...]


class _Context:
    """Everything one parse needs: input, cursor, buffer and the URL under construction.
    A fresh one is made for every call, so parses never share anything mutable.
    """

    def __init__(
        self: Self,
        text: str,
        base: URL | None,
        settings: ParseSettings,
        url: URL | None = None,
        state_override: State | None = None,
    ) -> None:
        self.settings: ParseSettings = settings
        self.base: URL | None = base
        self.state_override: State | None = state_override
        self.errors: list[ValidationError] = []
        self.pointer: int = 0
        self.buffer: str = ""
        self.finished: bool = False
        self.at_sign_seen: bool = False
        self.inside_brackets: bool = False
        self.password_token_seen: bool = False

        self.scheme: str = ""
        self.scheme_data: str = ""
        self.username: str | None = None
        self.password: str | None = None
        self.host: Host | None = None
        self.port: int | None = None
        self.path: list[str] = []
        self.query: str | None = None
        self.fragment: str | None = None
        self.relative_flag: bool = True
        if url is not None:
            self.scheme, self.scheme_data = url.scheme, url.scheme_data
            self.username, self.password = url.username, url.password
            self.host, self.port, self.path = url.host, url.port, list(url.path)
            self.query, self.fragment = url.query, url.fragment
            self.relative_flag = url.relative_flag

        self.c0_set: EncodeSet = settings.encode_set(C0_CONTROL_SET)
        self.fragment_set: EncodeSet = settings.encode_set(FRAGMENT_SET)
        self.query_set: EncodeSet = settings.encode_set(QUERY_SET)
        self.special_query_set: EncodeSet = settings.encode_set(SPECIAL_QUERY_SET)
        self.path_set: EncodeSet = settings.encode_set(PATH_SET)
        self.userinfo_set: EncodeSet = settings.encode_set(USERINFO_SET)

        self.input: str = self._preprocess(text)

    def _preprocess(self: Self, text: str) -> str:
        """Strip and clean text, remembering where each kept code point was in the caller's string."""
        lead: int = len(text) - len(text.lstrip(_C0_CONTROL_OR_SPACE))
        stripped: str = text.strip(_C0_CONTROL_OR_SPACE)
        if stripped != text:
            self.validation_error(
                SyntaxViolation, "leading or trailing C0 control or space", 0 if lead else lead + len(stripped)
            )
        self.offsets: list[int] = [lead + i for i, c in enumerate(stripped) if c not in "\r\n\t"]
        self.end_offset: int = lead + len(stripped)
        cleaned: str = re.sub(r"[\r\n\t]", "", stripped)
        if cleaned != stripped:
            first: re.Match[str] = re.search(r"[\r\n\t]", stripped)
            self.validation_error(SyntaxViolation, "tab or newline in input", lead + first.start())
        return cleaned

    def original_position(self: Self, pointer: int) -> int:
        """Map a cursor position in the cleaned input back to the caller's string."""
        if 0 <= pointer < len(self.offsets):
            return self.offsets[pointer]
        if pointer >= len(self.offsets):
            return self.end_offset + pointer - len(self.offsets)
        return pointer

    @property
    def is_special(self: Self) -> bool:
        return self.scheme in SPECIAL_SCHEMES

    def validation_error(self: Self, kind: type[ValidationError], message: str, position: int | None = None) -> None:
        """Record a non-fatal error at the cursor (or position), or raise it in strict mode."""
        if position is None:
            position = self.original_position(self.pointer)
        error: ValidationError = kind(message, position)
        if self.settings.strict:
            raise error
        logger.debug("%s: %s", error.__class__.__name__, error)
        self.errors.append(error)

    def remaining_starts_with(self: Self, prefix: str) -> bool:
        return self.input.startswith(prefix, self.pointer + 1)

    def starts_with_windows_drive_letter(self: Self) -> bool:
        return _STARTS_WITH_WINDOWS_DRIVE_LETTER_PAT.match(self.input, self.pointer) is not None

    def escape(self: Self, c: str, encode_set: EncodeSet) -> str:
        if c == "%" and not is_valid_escape(self.input, self.pointer):
            self.validation_error(InvalidPercentEncoding, "'%' not followed by two hex digits")
            return "%25" if self.settings.standard is Standard.RFC_2396 else c
        return encode_code_point(c, encode_set)

    def copy_authority(self: Self, url: URL) -> None:
        self.username, self.password = url.username, url.password
        self.host, self.port = url.host, url.port

    def shorten_path(self: Self) -> None:
        # A file URL's drive letter is never popped.
        if (
            self.scheme == "file"
            and len(self.path) == 1
            and _NORMALIZED_WINDOWS_DRIVE_LETTER_PAT.fullmatch(self.path[0])
        ):
            return
        if self.path:
            self.path.pop()

    def parse_buffered_host(self: Self) -> Host:
        found: list[ValidationError] = []
        try:
            host: Host = parse_host(
                self.buffer,
                self.is_special,
                self.settings.host_encoder,
                found,
                self.c0_set,
                self.settings.standard is Standard.RFC_2396,
            )
        except ParseError as e:
            if e.position is None:
                e.position = self.pointer - len(self.buffer)
            raise
        for error in found:
            self.validation_error(type(error), error.message)
        return host

    def run(self: Self, state: State) -> URL:
        try:
            while self.pointer <= len(self.input) and not self.finished:
                c: str | None = self.input[self.pointer] if self.pointer < len(self.input) else None
                state = step(state, c, self)
                self.pointer += 1
        except ValidationError:
            # Already positioned by validation_error().
            raise
        except ParseError as e:
            if e.position is not None:
                e.position = self.original_position(e.position)
            raise
        return URL(
            scheme=self.scheme,
            scheme_data=self.scheme_data,
            username=self.username,
            password=self.password,
            host=self.host,
            port=self.port,
            path=tuple(self.path),
            query=self.query,
            fragment=self.fragment,
            relative_flag=self.relative_flag,
        )


def _is_ascii_alpha(c: str | None) -> bool:
    return c is not None and c.isascii() and c.isalpha()


def _scheme_start(ctx: _Context, c: str | None) -> State:
    if _is_ascii_alpha(c):
        ctx.buffer += c.lower()
        return State.SCHEME
    if ctx.state_override is None:
        ctx.pointer -= 1
        return State.NO_SCHEME
    raise InvalidScheme("scheme must start with an ASCII letter", ctx.pointer)


def _scheme(ctx: _Context, c: str | None) -> State:
    if c is not None and ((c.isascii() and c.isalnum()) or c in "+-."):
        ctx.buffer += c.lower()
        return State.SCHEME

    if c == ":":
        if ctx.state_override is not None:
            ctx.finished = True
            # file: can't carry credentials or a port; a file URL with an empty host stays a file URL.
            if ctx.buffer == "file" and (ctx.username or ctx.password or ctx.port is not None):
                return State.SCHEME
            if ctx.scheme == "file" and ctx.host == EMPTY_HOST:
                return State.SCHEME
            ctx.scheme = ctx.buffer
            if ctx.port is not None and ctx.port == SPECIAL_SCHEMES.get(ctx.scheme):
                ctx.port = None
            return State.SCHEME
        ctx.scheme, ctx.buffer = ctx.buffer, ""
        if ctx.scheme == "file":
            if not ctx.remaining_starts_with("//"):
                ctx.validation_error(SyntaxViolation, "expected '//' after 'file:'")
            return State.FILE
        if ctx.is_special:
            ctx.relative_flag = True
            if ctx.base is not None and ctx.base.scheme == ctx.scheme and ctx.base.relative_flag:
                return State.SPECIAL_RELATIVE_OR_AUTHORITY
            return State.SPECIAL_AUTHORITY_SLASHES
        if ctx.remaining_starts_with("/"):
            ctx.pointer += 1
            return State.PATH_OR_AUTHORITY
        ctx.relative_flag = False
        return State.CANNOT_BE_A_BASE_URL_PATH

    if ctx.state_override is None:
        # Not a scheme after all; start over from the top.
        ctx.buffer = ""
        ctx.pointer = -1
        return State.NO_SCHEME
    raise InvalidScheme(f"invalid scheme code point {c!r}", ctx.pointer)


def _no_scheme(ctx: _Context, c: str | None) -> State:
    base: URL | None = ctx.base
    if base is None:
        raise InvalidScheme("no scheme and no base URL to resolve against", ctx.pointer)
    if not base.relative_flag:
        if c != "#":
            raise InvalidScheme(f"cannot resolve a relative reference against {base.scheme}: URL", ctx.pointer)
        ctx.scheme, ctx.scheme_data = base.scheme, base.scheme_data
        ctx.query = base.query
        ctx.fragment = ""
        ctx.relative_flag = False
        return State.FRAGMENT
    ctx.pointer -= 1
    if base.scheme == "file":
        return State.FILE
    return State.RELATIVE


def _special_relative_or_authority(ctx: _Context, c: str | None) -> State:
    if c == "/" and ctx.remaining_starts_with("/"):
        ctx.pointer += 1
        return State.SPECIAL_AUTHORITY_IGNORE_SLASHES
    ctx.validation_error(SyntaxViolation, "expected '//' after the scheme")
    ctx.pointer -= 1
    return State.RELATIVE


def _path_or_authority(ctx: _Context, c: str | None) -> State:
    if c == "/":
        ctx.relative_flag = True
        return State.AUTHORITY
    # Only one slash: the whole thing, slash included, is scheme data.
    ctx.relative_flag = False
    ctx.pointer -= 2
    return State.CANNOT_BE_A_BASE_URL_PATH


def _relative(ctx: _Context, c: str | None) -> State:
    base: URL = ctx.base
    ctx.scheme = base.scheme
    ctx.relative_flag = True
    if c == "/":
        return State.RELATIVE_SLASH
    if ctx.is_special and c == "\\":
        ctx.validation_error(InvalidPathSegment, "'\\' used as a path separator")
        return State.RELATIVE_SLASH

    ctx.copy_authority(base)
    ctx.path = list(base.path)
    ctx.query = base.query
    if c == "?":
        ctx.query = ""
        return State.QUERY
    if c == "#":
        ctx.fragment = ""
        return State.FRAGMENT
    if c is not None:
        ctx.query = None
        ctx.shorten_path()
        ctx.pointer -= 1
        return State.PATH
    return State.RELATIVE


def _relative_slash(ctx: _Context, c: str | None) -> State:
    if ctx.is_special and c in ("/", "\\"):
        if c == "\\":
            ctx.validation_error(InvalidPathSegment, "'\\' used as a path separator")
        return State.SPECIAL_AUTHORITY_IGNORE_SLASHES
    if c == "/":
        return State.AUTHORITY
    ctx.copy_authority(ctx.base)
    ctx.pointer -= 1
    return State.PATH


def _special_authority_slashes(ctx: _Context, c: str | None) -> State:
    if c == "/" and ctx.remaining_starts_with("/"):
        ctx.pointer += 1
    else:
        ctx.validation_error(SyntaxViolation, "expected '//' after the scheme")
        ctx.pointer -= 1
    return State.SPECIAL_AUTHORITY_IGNORE_SLASHES


def _special_authority_ignore_slashes(ctx: _Context, c: str | None) -> State:
    if c not in ("/", "\\"):
        ctx.pointer -= 1
        return State.AUTHORITY
    ctx.validation_error(SyntaxViolation, "extra slash before the authority")
    return State.SPECIAL_AUTHORITY_IGNORE_SLASHES


def _is_authority_end(ctx: _Context, c: str | None) -> bool:
    return c is None or c in "/?#" or (ctx.is_special and c == "\\")


def _authority(ctx: _Context, c: str | None) -> State:
    if c == "@":
        ctx.validation_error(SyntaxViolation, "'@' in the authority")
        if ctx.at_sign_seen:
            ctx.buffer = "%40" + ctx.buffer
        ctx.at_sign_seen = True
        if ctx.username is None:
            ctx.username = ""
        for i, code_point in enumerate(ctx.buffer):
            if code_point == ":" and not ctx.password_token_seen:
                ctx.password_token_seen = True
                ctx.password = ""
                continue
            encoded: str
            if code_point == "%" and not is_valid_escape(ctx.buffer, i):
                ctx.validation_error(InvalidPercentEncoding, "'%' not followed by two hex digits in userinfo")
                encoded = "%25" if ctx.settings.standard is Standard.RFC_2396 else "%"
            else:
                encoded = encode_code_point(code_point, ctx.userinfo_set)
            if ctx.password_token_seen:
                ctx.password += encoded
            else:
                ctx.username += encoded
        ctx.buffer = ""
        return State.AUTHORITY

    if _is_authority_end(ctx, c):
        if ctx.at_sign_seen and ctx.buffer == "":
            raise MissingHost("credentials without a host", ctx.pointer)
        ctx.pointer -= len(ctx.buffer) + 1
        ctx.buffer = ""
        return State.HOST

    ctx.buffer += c
    return State.AUTHORITY


def _host(ctx: _Context, c: str | None) -> State:
    if c == ":" and not ctx.inside_brackets:
        if ctx.buffer == "":
            raise MissingHost("port without a host", ctx.pointer)
        ctx.host = ctx.parse_buffered_host()
        ctx.buffer = ""
        return State.PORT

    if _is_authority_end(ctx, c):
        if ctx.is_special and ctx.buffer == "":
            raise MissingHost(f"{ctx.scheme} URL without a host", ctx.pointer)
        ctx.host = ctx.parse_buffered_host()
        ctx.buffer = ""
        ctx.pointer -= 1
        return State.PATH_START

    if c == "[":
        ctx.inside_brackets = True
    elif c == "]":
        ctx.inside_brackets = False
    ctx.buffer += c
    return State.HOST


def _port(ctx: _Context, c: str | None) -> State:
    if c is not None and c in "0123456789":
        ctx.buffer += c
        return State.PORT

    if _is_authority_end(ctx, c):
        if ctx.buffer == "":
            raise InvalidPort("empty port", ctx.pointer)
        if len(ctx.buffer.lstrip("0")) > 5 or int(ctx.buffer) > 65535:
            raise InvalidPort(f"port {ctx.buffer} out of range", ctx.pointer - len(ctx.buffer))
        port: int = int(ctx.buffer)
        ctx.port = None if port == SPECIAL_SCHEMES.get(ctx.scheme) else port
        ctx.buffer = ""
        ctx.pointer -= 1
        return State.PATH_START

    raise InvalidPort(f"invalid port code point {c!r}", ctx.pointer)


def _file(ctx: _Context, c: str | None) -> State:
    ctx.scheme = "file"
    ctx.relative_flag = True
    ctx.host = EMPTY_HOST
    if c in ("/", "\\"):
        if c == "\\":
            ctx.validation_error(InvalidPathSegment, "'\\' used as a path separator")
        return State.FILE_SLASH

    base: URL | None = ctx.base
    if base is not None and base.scheme == "file":
        ctx.host = base.host
        ctx.path = list(base.path)
        ctx.query = base.query
        if c == "?":
            ctx.query = ""
            return State.QUERY
        if c == "#":
            ctx.fragment = ""
            return State.FRAGMENT
        if c is None:
            return State.FILE
        ctx.query = None
        if ctx.starts_with_windows_drive_letter():
            ctx.validation_error(InvalidPathSegment, "drive letter in a relative file reference")
            ctx.path = []
        else:
            ctx.shorten_path()

    ctx.pointer -= 1
    return State.PATH


def _file_slash(ctx: _Context, c: str | None) -> State:
    if c in ("/", "\\"):
        if c == "\\":
            ctx.validation_error(InvalidPathSegment, "'\\' used as a path separator")
        return State.FILE_HOST

    base: URL | None = ctx.base
    if base is not None and base.scheme == "file":
        ctx.host = base.host
        if (
            not ctx.starts_with_windows_drive_letter()
            and base.path
            and _NORMALIZED_WINDOWS_DRIVE_LETTER_PAT.fullmatch(base.path[0])
        ):
            ctx.path.append(base.path[0])
    ctx.pointer -= 1
    return State.PATH


def _file_host(ctx: _Context, c: str | None) -> State:
    if c is not None and c not in "/\\?#":
        ctx.buffer += c
        return State.FILE_HOST

    if _WINDOWS_DRIVE_LETTER_PAT.fullmatch(ctx.buffer):
        # "file://C:/" - the drive letter stays in the buffer and becomes the first segment.
        ctx.validation_error(InvalidPathSegment, "drive letter where a host was expected")
        ctx.pointer -= 1
        return State.PATH
    if ctx.buffer == "":
        ctx.host = EMPTY_HOST
    else:
        host: Host = ctx.parse_buffered_host()
        ctx.host = EMPTY_HOST if host == Domain("localhost") else host
        ctx.buffer = ""
    ctx.pointer -= 1
    return State.PATH_START


def _path_start(ctx: _Context, c: str | None) -> State:
    if ctx.is_special:
        if c == "\\":
            ctx.validation_error(InvalidPathSegment, "'\\' used as a path separator")
        if c not in ("/", "\\"):
            ctx.pointer -= 1
        return State.PATH
    if c == "?":
        ctx.query = ""
        return State.QUERY
    if c == "#":
        ctx.fragment = ""
        return State.FRAGMENT
    if c is not None:
        if c != "/":
            ctx.pointer -= 1
        return State.PATH
    return State.PATH_START


def _path(ctx: _Context, c: str | None) -> State:
    backslash: bool = ctx.is_special and c == "\\"
    if c is not None and c not in "/?#" and not backslash:
        ctx.buffer += ctx.escape(c, ctx.path_set)
        return State.PATH

    if backslash:
        ctx.validation_error(InvalidPathSegment, "'\\' used as a path separator")
    separator: bool = c == "/" or backslash
    segment: str = ctx.buffer.lower()
    if segment in _DOUBLE_DOT_SEGMENTS:
        ctx.shorten_path()
        if not separator:
            ctx.path.append("")
    elif segment in _SINGLE_DOT_SEGMENTS:
        if not separator:
            ctx.path.append("")
    else:
        if ctx.scheme == "file" and not ctx.path and _WINDOWS_DRIVE_LETTER_PAT.fullmatch(ctx.buffer):
            if ctx.buffer[1] == "|":
                ctx.validation_error(InvalidPathSegment, "'|' in a drive letter")
            ctx.buffer = f"{ctx.buffer[0]}:"
        ctx.path.append(ctx.buffer)
    ctx.buffer = ""

    if c == "?":
        ctx.query = ""
        return State.QUERY
    if c == "#":
        ctx.fragment = ""
        return State.FRAGMENT
    return State.PATH


def _cannot_be_a_base_url_path(ctx: _Context, c: str | None) -> State:
    if c == "?":
        ctx.query = ""
        return State.QUERY
    if c == "#":
        ctx.fragment = ""
        return State.FRAGMENT
    if c is not None:
        ctx.scheme_data += ctx.escape(c, ctx.c0_set)
    return State.CANNOT_BE_A_BASE_URL_PATH


def _query(ctx: _Context, c: str | None) -> State:
    if c == "#":
        ctx.fragment = ""
        return State.FRAGMENT
    if c is not None:
        ctx.query += ctx.escape(c, ctx.special_query_set if ctx.is_special else ctx.query_set)
    return State.QUERY


def _fragment(ctx: _Context, c: str | None) -> State:
    if c is not None:
        ctx.fragment += ctx.escape(c, ctx.fragment_set)
    return State.FRAGMENT


_TRANSITIONS: dict[State, Callable[[_Context, str | None], State]] = {
    State.SCHEME_START: _scheme_start,
    State.SCHEME: _scheme,
    State.NO_SCHEME: _no_scheme,
    State.SPECIAL_RELATIVE_OR_AUTHORITY: _special_relative_or_authority,
    State.PATH_OR_AUTHORITY: _path_or_authority,
    State.RELATIVE: _relative,
    State.RELATIVE_SLASH: _relative_slash,
    State.SPECIAL_AUTHORITY_SLASHES: _special_authority_slashes,
    State.SPECIAL_AUTHORITY_IGNORE_SLASHES: _special_authority_ignore_slashes,
    State.AUTHORITY: _authority,
    State.HOST: _host,
    State.PORT: _port,
    State.FILE: _file,
    State.FILE_SLASH: _file_slash,
    State.FILE_HOST: _file_host,
    State.PATH_START: _path_start,
    State.PATH: _path,
    State.CANNOT_BE_A_BASE_URL_PATH: _cannot_be_a_base_url_path,
    State.QUERY: _query,
    State.FRAGMENT: _fragment,
}


def step(state: State, c: str | None, ctx: _Context) -> State:
    """Feed one code point (None at end of input) to state and return the next state.
    Handlers may move ctx.pointer to re-read or skip input.
    """
    return _TRANSITIONS[state](ctx, c)


def new_context(
    text: str, base: URL | None = None, settings: ParseSettings | None = None, url: URL | None = None
) -> _Context:
    """Make a fresh parser context. Mostly useful for driving step() by hand."""
    return _Context(text, base, settings or DEFAULT_SETTINGS, url=url)


def parse_with_errors(text: str, base: URL | str | None = None, settings: ParseSettings | None = None) -> ParseResult:
    """Parse text (resolved against base, if given) and return the URL along with every validation error."""
    if not isinstance(text, str):
        raise TypeError(f"expected str, got {type(text).__name__}")
    settings = settings or DEFAULT_SETTINGS
    if isinstance(base, str):
        base = parse(base, settings=settings)
    ctx: _Context = _Context(text, base, settings)
    url: URL = ctx.run(State.SCHEME_START)
    return ParseResult(url, tuple(ctx.errors))


def parse(text: str, base: URL | str | None = None, settings: ParseSettings | None = None) -> URL:
    """Parse text into a URL, repairing whatever can be repaired.
    Raises a ParseError subclass when it can't (or, with strict settings, on the first validation error).
    """
    return parse_with_errors(text, base, settings).url


def replace_scheme(url: URL, scheme: str, settings: ParseSettings | None = None) -> URL:
    """Run the scheme states over "scheme:" on top of url's components, keeping everything else."""
    ctx: _Context = _Context(f"{scheme}:", None, settings or DEFAULT_SETTINGS, url=url, state_override=State.SCHEME_START)
    return ctx.run(State.SCHEME_START)


def urljoin(base: str, url: str) -> str:
    """Like urllib.parse.urljoin, but with WHATWG resolution rules."""
    return parse(url, base=base).serialize()
