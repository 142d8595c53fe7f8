"""wurllib.parse.rfc3986
Just enough of the RFC 3986 grammar to tell whether a serialized URL is also a generic URI.
"""

import re

# unreserved = ALPHA / DIGIT / "-" / "." / "_" / "~"
_UNRESERVED: str = r"[A-Za-z0-9\-._~]"

# pct-encoded = "%" HEXDIG HEXDIG
_PCT_ENCODED: str = r"%[0-9A-Fa-f]{2}"

# sub-delims = "!" / "$" / "&" / "'" / "(" / ")" / "*" / "+" / "," / ";" / "="
_SUB_DELIMS: str = r"[!$&'()*+,;=]"

# pchar = unreserved / pct-encoded / sub-delims / ":" / "@"
_PCHAR: str = rf"(?:{_UNRESERVED}|{_PCT_ENCODED}|{_SUB_DELIMS}|[:@])"

# scheme = ALPHA *( ALPHA / DIGIT / "+" / "-" / "." )
SCHEME: str = r"[A-Za-z][A-Za-z0-9+\-.]*"

# userinfo = *( unreserved / pct-encoded / sub-delims / ":" )
_USERINFO: str = rf"(?:{_UNRESERVED}|{_PCT_ENCODED}|{_SUB_DELIMS}|:)*"

# Our IPv6 serializer only ever emits hex digits, colons and dots between the brackets.
_IP_LITERAL: str = r"\[[0-9A-Fa-f:.]+\]"

# reg-name = *( unreserved / pct-encoded / sub-delims )
# (dotted-decimal IPv4 is a subset of this)
_REG_NAME: str = rf"(?:{_UNRESERVED}|{_PCT_ENCODED}|{_SUB_DELIMS})*"

# authority = [ userinfo "@" ] host [ ":" port ]
_AUTHORITY: str = rf"(?:{_USERINFO}@)?(?:{_IP_LITERAL}|{_REG_NAME})(?::[0-9]*)?"

# hier-part = "//" authority path-abempty / path-absolute / path-rootless / path-empty
_HIER_PART: str = rf"(?://{_AUTHORITY}(?:/{_PCHAR}*)*|/?(?:{_PCHAR}+(?:/{_PCHAR}*)*)?)"

# query = *( pchar / "/" / "?" ), and fragment is the same
_QUERY: str = rf"(?:{_PCHAR}|[/?])*"

# URI = scheme ":" hier-part [ "?" query ] [ "#" fragment ]
_URI_PAT: re.Pattern[str] = re.compile(rf"\A{SCHEME}:{_HIER_PART}(?:\?{_QUERY})?(?:#{_QUERY})?\Z")

_SCHEME_PAT: re.Pattern[str] = re.compile(SCHEME)


def is_uri(text: str) -> bool:
    return _URI_PAT.match(text) is not None


def is_scheme(text: str) -> bool:
    return _SCHEME_PAT.fullmatch(text) is not None
