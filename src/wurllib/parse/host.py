"""wurllib.parse.host
Host parsing and serialization.
A host is exactly one of Domain, IPv4Address, IPv6Address or OpaqueHost.
"""

import dataclasses
import re

from typing import Callable, Self, TypeAlias

import idna

from .errors import InvalidHost, InvalidIPv4, InvalidIPv6, InvalidPercentEncoding, ValidationError
from .percent import C0_CONTROL_SET, EncodeSet, encode_code_point, is_valid_escape, percent_decode


@dataclasses.dataclass(frozen=True)
class Domain:
    """An ASCII domain, already lowercased/IDNA-encoded. The empty domain is file's empty host."""

    value: str

    def serialize(self: Self) -> str:
        return self.value

    def __str__(self: Self) -> str:
        return self.serialize()


@dataclasses.dataclass(frozen=True)
class IPv4Address:
    value: int

    def serialize(self: Self) -> str:
        return ".".join(str((self.value >> shift) & 0xFF) for shift in (24, 16, 8, 0))

    def __str__(self: Self) -> str:
        return self.serialize()


@dataclasses.dataclass(frozen=True)
class IPv6Address:
    """Eight 16-bit pieces."""

    pieces: tuple[int, ...]

    def serialize(self: Self) -> str:
        """Bracketed, with the longest run of two or more zero pieces compressed (leftmost wins a tie)."""
        compress_start: int = -1
        compress_len: int = 1
        i: int = 0
        while i < 8:
            run_len: int = 0
            while i + run_len < 8 and self.pieces[i + run_len] == 0:
                run_len += 1
            if run_len > compress_len:
                compress_start, compress_len = i, run_len
            i += run_len + 1

        if compress_start < 0:
            return f"[{':'.join(f'{piece:x}' for piece in self.pieces)}]"
        head: str = ":".join(f"{piece:x}" for piece in self.pieces[:compress_start])
        tail: str = ":".join(f"{piece:x}" for piece in self.pieces[compress_start + compress_len :])
        return f"[{head}::{tail}]"

    def __str__(self: Self) -> str:
        return self.serialize()


@dataclasses.dataclass(frozen=True)
class OpaqueHost:
    """Host of a non-special URL, percent-encoded but otherwise untouched."""

    value: str

    def serialize(self: Self) -> str:
        return self.value

    def __str__(self: Self) -> str:
        return self.serialize()


Host: TypeAlias = Domain | IPv4Address | IPv6Address | OpaqueHost

EMPTY_HOST: Domain = Domain("")

# NUL, tab, LF, CR, space, # / : < > ? @ [ \ ] ^ |
_FORBIDDEN_HOST_CODE_POINTS: frozenset[str] = frozenset("\x00\t\n\r #/:<>?@[\\]^|")

_FORBIDDEN_DOMAIN_CODE_POINTS: frozenset[str] = (
    _FORBIDDEN_HOST_CODE_POINTS | frozenset(map(chr, range(0x20))) | frozenset("%\x7f")
)

# An IPv4 number is hex ("0x" prefix, possibly with no digits), octal (leading 0) or decimal.
_IPV4_NUMBER_PAT: re.Pattern[str] = re.compile(r"0[xX](?P<hex>[0-9A-Fa-f]*)|(?P<oct>0[0-7]*)|(?P<dec>[1-9][0-9]*)")


def to_ascii(domain: str) -> str:
    """Default host encoder: ASCII domains are lowercased, anything else goes through IDNA (UTS #46)."""
    if domain.isascii():
        return domain.lower()
    try:
        return idna.encode(domain, uts46=True).decode("ascii")
    except idna.IDNAError as e:
        raise InvalidHost(f"cannot IDNA-encode host {domain!r}: {e}") from e


def _parse_ipv4_number(label: str) -> int | None:
    m: re.Match[str] | None = _IPV4_NUMBER_PAT.fullmatch(label)
    if m is None:
        return None
    if m["hex"] is not None:
        return int(m["hex"], 16) if m["hex"] else 0
    if m["oct"] is not None:
        return int(m["oct"], 8)
    # int() refuses very long decimal strings; anything this long overflows regardless.
    if len(m["dec"]) > 10:
        return 2**32
    return int(m["dec"], 10)


def parse_ipv4(text: str) -> IPv4Address | None:
    """Returns None if text isn't made up of IPv4 numbers (i.e. it's a domain).
    Raises InvalidIPv4 if it is, but the numbers don't fit.
    """
    labels: list[str] = text.split(".")
    if len(labels) > 1 and labels[-1] == "":
        labels.pop()

    numbers: list[int] = []
    for label in labels:
        number: int | None = _parse_ipv4_number(label)
        if number is None:
            return None
        numbers.append(number)

    if len(numbers) > 4:
        raise InvalidIPv4(f"too many parts in IPv4 address {text!r}")
    if any(n > 255 for n in numbers[:-1]) or numbers[-1] >= 256 ** (5 - len(numbers)):
        raise InvalidIPv4(f"IPv4 address out of range: {text!r}")

    value: int = numbers[-1]
    for i, n in enumerate(numbers[:-1]):
        value += n << (8 * (3 - i))
    return IPv4Address(value)


def parse_ipv6(text: str) -> IPv6Address:
    """Parse the inside of a bracketed IPv6 literal."""
    pieces: list[int] = [0] * 8
    piece_index: int = 0
    compress: int | None = None
    i: int = 0

    def fail(why: str) -> InvalidIPv6:
        return InvalidIPv6(f"invalid IPv6 address {text!r}: {why}")

    if text.startswith(":"):
        if not text.startswith("::"):
            raise fail("leading ':'")
        i = 2
        piece_index += 1
        compress = piece_index

    while i < len(text):
        if piece_index == 8:
            raise fail("too many pieces")
        if text[i] == ":":
            if compress is not None:
                raise fail("more than one '::'")
            i += 1
            piece_index += 1
            compress = piece_index
            continue

        value: int = 0
        length: int = 0
        while length < 4 and i < len(text) and text[i] in "0123456789abcdefABCDEF":
            value = value * 0x10 + int(text[i], 16)
            i += 1
            length += 1

        if i < len(text) and text[i] == ".":
            if length == 0:
                raise fail("empty IPv4 part")
            i -= length
            if piece_index > 6:
                raise fail("no room for the IPv4 part")
            pieces[piece_index : piece_index + 2] = _parse_ipv4_in_ipv6(text[i:], fail)
            piece_index += 2
            i = len(text)
            break

        if i < len(text):
            if text[i] != ":":
                raise fail(f"unexpected {text[i]!r}")
            i += 1
            if i == len(text):
                raise fail("trailing ':'")
        pieces[piece_index] = value
        piece_index += 1

    if compress is not None:
        # Slide everything after the "::" to the end.
        moved: list[int] = pieces[compress:piece_index]
        pieces[compress:] = [0] * (8 - compress)
        if moved:
            pieces[8 - len(moved) :] = moved
    elif piece_index != 8:
        raise fail("too few pieces")
    return IPv6Address(tuple(pieces))


def _parse_ipv4_in_ipv6(text: str, fail: Callable[[str], InvalidIPv6]) -> list[int]:
    parts: list[str] = text.split(".")
    if len(parts) != 4:
        raise fail("IPv4 part needs four numbers")
    octets: list[int] = []
    for part in parts:
        if not re.fullmatch(r"0|[1-9][0-9]{0,2}", part) or int(part) > 255:
            raise fail(f"bad IPv4 number {part!r}")
        octets.append(int(part))
    return [(octets[0] << 8) | octets[1], (octets[2] << 8) | octets[3]]


def _parse_opaque_host(
    text: str, errors: list[ValidationError] | None, encode_set: EncodeSet, escape_stray_percent: bool
) -> OpaqueHost:
    forbidden: set[str] = _FORBIDDEN_HOST_CODE_POINTS.intersection(text)
    if forbidden:
        raise InvalidHost(f"forbidden host code point(s) {''.join(sorted(forbidden))!r} in {text!r}")
    result: str = ""
    for i, c in enumerate(text):
        if c == "%" and not is_valid_escape(text, i):
            if errors is not None:
                errors.append(InvalidPercentEncoding(f"bad percent-escape in host {text!r}"))
            if escape_stray_percent:
                result += "%25"
                continue
        result += encode_code_point(c, encode_set)
    return OpaqueHost(result)


def parse_host(
    text: str,
    is_special: bool = True,
    host_encoder: Callable[[str], str] = to_ascii,
    errors: list[ValidationError] | None = None,
    encode_set: EncodeSet = C0_CONTROL_SET,
    escape_stray_percent: bool = False,
) -> Host:
    """Classify and parse a host string.
    Non-fatal problems are appended to errors (when given); fatal ones raise.
    encode_set escapes opaque hosts; a domain holding any of its extra code points is rejected.
    """
    if text.startswith("["):
        if not text.endswith("]"):
            raise InvalidIPv6(f"unterminated IPv6 address {text!r}")
        return parse_ipv6(text[1:-1])

    if not is_special:
        return _parse_opaque_host(text, errors, encode_set, escape_stray_percent)

    domain: str = percent_decode(text).decode("utf-8", errors="replace")
    ascii_domain: str = host_encoder(domain)
    if not ascii_domain:
        raise InvalidHost(f"host {text!r} is empty after encoding")

    forbidden: set[str] = set(_FORBIDDEN_DOMAIN_CODE_POINTS.intersection(ascii_domain))
    forbidden.update(c for c in ascii_domain if ord(c) in encode_set.extra)
    if forbidden:
        raise InvalidHost(f"forbidden domain code point(s) {''.join(sorted(forbidden))!r} in {text!r}")

    ipv4: IPv4Address | None = parse_ipv4(ascii_domain)
    if ipv4 is not None:
        return ipv4
    return Domain(ascii_domain)
