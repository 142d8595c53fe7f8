"""wurllib.parse.percent
Percent-encoding with the named encode sets from the WHATWG URL standard.
"""

import dataclasses
import re

from typing import Iterable, Self

_HEXDIG: str = r"[0-9A-Fa-f]"

_PCT_ENCODED_PAT: re.Pattern[bytes] = re.compile(rf"%({_HEXDIG}{_HEXDIG})".encode("ascii"))

_PERCENT: int = ord("%")


@dataclasses.dataclass(frozen=True)
class EncodeSet:
    """A set of code points that must be percent-encoded.
    Every set contains the C0 controls and everything above U+007E, so only `extra` (printable ASCII) varies.
    """

    name: str
    extra: frozenset[int] = frozenset()

    def __contains__(self: Self, code_point: object) -> bool:
        if isinstance(code_point, str):
            if len(code_point) != 1:
                return False
            code_point = ord(code_point)
        if not isinstance(code_point, int):
            return False
        return code_point < 0x20 or code_point > 0x7E or code_point in self.extra

    def union(self: Self, chars: Iterable[str], name: str | None = None) -> "EncodeSet":
        return EncodeSet(name or f"{self.name}+", self.extra | frozenset(map(ord, chars)))


C0_CONTROL_SET: EncodeSet = EncodeSet("c0-control")

# C0 + space " < > `
FRAGMENT_SET: EncodeSet = C0_CONTROL_SET.union(' "<>`', "fragment")

# C0 + space " # < >
QUERY_SET: EncodeSet = C0_CONTROL_SET.union(' "#<>', "query")

# query + '
SPECIAL_QUERY_SET: EncodeSet = QUERY_SET.union("'", "special-query")

# query + ? ` { }
PATH_SET: EncodeSet = QUERY_SET.union("?`{}", "path")

# path + / : ; = @ [ \ ] ^ |
USERINFO_SET: EncodeSet = PATH_SET.union("/:;=@[\\]^|", "userinfo")


def _percent_byte(byte: int) -> str:
    return f"%{byte:02X}"


def percent_encode(data: str | bytes, encode_set: EncodeSet) -> str:
    """Encode data under encode_set. Strings are encoded as UTF-8 first.
    '%' is always escaped, so percent_decode(percent_encode(b, s)) == b for any bytes b.
    """
    if isinstance(data, str):
        data = data.encode("utf-8", errors="surrogatepass")
    return "".join(
        _percent_byte(byte) if byte in encode_set or byte == _PERCENT else chr(byte) for byte in data
    )


def encode_code_point(c: str, encode_set: EncodeSet) -> str:
    """Encode a single code point for the parser.
    '%' goes through untouched; the parser checks escape sequences on its own.
    """
    if c == "%" or c not in encode_set:
        return c
    return "".join(map(_percent_byte, c.encode("utf-8", errors="surrogatepass")))


def percent_decode(text: str | bytes) -> bytes:
    """Replace every %XX triple with its byte. Any other '%' is left as it is."""
    if isinstance(text, str):
        text = text.encode("utf-8", errors="surrogatepass")
    return _PCT_ENCODED_PAT.sub(lambda m: bytes((int(m[1], 16),)), text)


def is_valid_escape(text: str, index: int) -> bool:
    """True if text[index] is a '%' followed by two hex digits."""
    return re.match(rf"%{_HEXDIG}{_HEXDIG}", text[index : index + 3]) is not None
