"""wurllib.parse.settings
Per-call parser configuration. Instances are frozen, so one can be shared by any number of parses.
"""

import dataclasses
import enum

from typing import Callable, Self

from .host import to_ascii
from .percent import EncodeSet

# Characters RFC 2396 doesn't allow unescaped anywhere (delims and "unwise"), plus '#' for fragments.
_RFC2396_UNSAFE: str = '`"<>{}|\\^[]#'


class Standard(enum.Enum):
    WHATWG = "whatwg"
    # Escape more so that the serialization is also a valid RFC 2396/3986 URI.
    RFC_2396 = "rfc2396"


@dataclasses.dataclass(frozen=True)
class ParseSettings:
    """standard: which escaping rules to follow.
    strict: raise the first validation error instead of repairing it.
    host_encoder: turns a percent-decoded domain into its ASCII form.
    """

    standard: Standard = Standard.WHATWG
    strict: bool = False
    host_encoder: Callable[[str], str] = to_ascii

    def encode_set(self: Self, encode_set: EncodeSet) -> EncodeSet:
        if self.standard is Standard.RFC_2396:
            return encode_set.union(_RFC2396_UNSAFE, f"{encode_set.name}-rfc2396")
        return encode_set


DEFAULT_SETTINGS: ParseSettings = ParseSettings()
