__version__ = "0.1"

import logging

from .errors import InvalidHost, InvalidIPv4, InvalidIPv6, InvalidPathSegment, InvalidPercentEncoding, InvalidPort, InvalidScheme, MissingHost, ParseError, SyntaxViolation, ValidationError
from .host import Domain, Host, IPv4Address, IPv6Address, OpaqueHost, parse_host, parse_ipv4, parse_ipv6, to_ascii
from .machine import ParseResult, State, parse, parse_with_errors, step, urljoin
from .percent import C0_CONTROL_SET, FRAGMENT_SET, PATH_SET, QUERY_SET, SPECIAL_QUERY_SET, USERINFO_SET, EncodeSet, percent_decode, percent_encode
from .settings import DEFAULT_SETTINGS, ParseSettings, Standard
from .url import SPECIAL_SCHEMES, URL

logging.getLogger(__name__).addHandler(logging.NullHandler())
