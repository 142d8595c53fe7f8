"""tests/unit/test_host.py"""

import pytest

from wurllib.parse.errors import InvalidHost, InvalidIPv4, InvalidIPv6, InvalidPercentEncoding
from wurllib.parse.host import (
    Domain,
    IPv4Address,
    IPv6Address,
    OpaqueHost,
    parse_host,
    parse_ipv4,
    parse_ipv6,
)
from wurllib.parse.percent import PATH_SET


class TestIPv6:
    """Tests for IPv6 parsing and serialization."""

    def test_parse_full_form(self):
        host = parse_host("[2001:0db8:0000:0000:0000:0000:0000:0001]")
        assert host == IPv6Address((0x2001, 0xDB8, 0, 0, 0, 0, 0, 1))
        assert host.serialize() == "[2001:db8::1]"

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("::1", "[::1]"),
            ("::", "[::]"),
            ("1::", "[1::]"),
            ("1:0:0:2:0:0:0:3", "[1:0:0:2::3]"),
            ("1:0:0:2:0:0:3:4", "[1::2:0:0:3:4]"),
            ("1:0:2:3:4:5:6:7", "[1:0:2:3:4:5:6:7]"),
            ("ABCD:EF01:2345:6789:ABCD:EF01:2345:6789", "[abcd:ef01:2345:6789:abcd:ef01:2345:6789]"),
            ("::ffff:192.168.0.1", "[::ffff:c0a8:1]"),
            ("1:2:3:4:5:6:7::", "[1:2:3:4:5:6:7:0]"),
        ],
    )
    def test_canonical_form(self, text, expected):
        assert parse_ipv6(text).serialize() == expected

    def test_embedded_ipv4_pieces(self):
        assert parse_ipv6("::ffff:192.168.0.1").pieces == (0, 0, 0, 0, 0, 0xFFFF, 0xC0A8, 0x0001)

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "1:2:3",
            "1::2::3",
            "12345::",
            ":1",
            "1:2:3:4:5:6:7:8:9",
            "1:",
            "::1.2.3",
            "::1.2.3.256",
            "::1.2.3.04",
            "1:2:3:4:5:6:7:1.2.3.4",
            "::g",
        ],
    )
    def test_invalid(self, text):
        with pytest.raises(InvalidIPv6):
            parse_ipv6(text)

    def test_unterminated_bracket(self):
        with pytest.raises(InvalidIPv6):
            parse_host("[::1")

    def test_str_is_bracketed(self):
        assert str(parse_ipv6("::1")) == "[::1]"


class TestIPv4:
    """Tests for IPv4 detection."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("192.168.0.1", "192.168.0.1"),
            ("0x7f.1", "127.0.0.1"),
            ("0177.0.0.1", "127.0.0.1"),
            ("2130706433", "127.0.0.1"),
            ("127.1", "127.0.0.1"),
            ("1.2.3.4.", "1.2.3.4"),
            ("0x", "0.0.0.0"),
            ("0XFF.0.0.1", "255.0.0.1"),
            ("1.65536", "1.1.0.0"),
        ],
    )
    def test_numeric_forms(self, text, expected):
        host = parse_host(text)
        assert isinstance(host, IPv4Address)
        assert host.serialize() == expected

    def test_value_is_32_bit_integer(self):
        assert parse_host("192.168.0.1") == IPv4Address(0xC0A80001)

    @pytest.mark.parametrize(
        "text",
        ["256.0.0.1", "1.2.3.4.5", "4294967296", "99999999999999999999", "1.16777216", "0x100000000"],
    )
    def test_overflow(self, text):
        with pytest.raises(InvalidIPv4):
            parse_host(text)

    @pytest.mark.parametrize("text", ["1.2.foo.4", "09.1", "1..2", "example.com"])
    def test_not_all_numeric_is_a_domain(self, text):
        assert parse_ipv4(text) is None
        assert isinstance(parse_host(text), Domain)

    def test_invalid_ipv4_is_an_invalid_host(self):
        assert issubclass(InvalidIPv4, InvalidHost)


class TestDomain:
    """Tests for special-scheme domains."""

    def test_lowercased(self):
        assert parse_host("EXAMPLE.com") == Domain("example.com")

    def test_percent_decoded(self):
        assert parse_host("ex%41mple.com") == Domain("example.com")

    def test_idna(self):
        assert parse_host("bücher.de") == Domain("xn--bcher-kva.de")

    def test_percent_encoded_idna(self):
        assert parse_host("b%C3%BCcher.de") == Domain("xn--bcher-kva.de")

    def test_uppercase_non_ascii_is_mapped(self):
        assert parse_host("BÜCHER.de") == Domain("xn--bcher-kva.de")

    def test_idna_failure_is_an_invalid_host(self):
        with pytest.raises(InvalidHost):
            parse_host("☃.net")

    @pytest.mark.parametrize("text", ["exa mple.com", "a%20b", "a<b", "a%25b", "a^b", "a|b", "a\x01b"])
    def test_forbidden_code_points(self, text):
        with pytest.raises(InvalidHost):
            parse_host(text)

    def test_custom_host_encoder(self):
        assert parse_host("Example.COM", host_encoder=lambda domain: domain) == Domain("Example.COM")

    def test_host_encoder_failure(self):
        def refuse(domain):
            raise InvalidHost(f"refusing {domain}")

        with pytest.raises(InvalidHost):
            parse_host("example.com", host_encoder=refuse)

    def test_serialize_verbatim(self):
        assert str(Domain("example.com")) == "example.com"


class TestOpaqueHost:
    """Tests for hosts of non-special URLs."""

    def test_case_preserved(self):
        assert parse_host("Ex%41mple", is_special=False) == OpaqueHost("Ex%41mple")

    def test_non_ascii_encoded(self):
        assert parse_host("héllo", is_special=False) == OpaqueHost("h%C3%A9llo")

    def test_empty(self):
        assert parse_host("", is_special=False) == OpaqueHost("")

    @pytest.mark.parametrize("text", ["a b", "a/b", "a?b", "a@b", "a<b"])
    def test_forbidden(self, text):
        with pytest.raises(InvalidHost):
            parse_host(text, is_special=False)

    def test_bad_escape_is_recorded(self):
        errors = []
        assert parse_host("a%zz", is_special=False, errors=errors) == OpaqueHost("a%zz")
        assert len(errors) == 1
        assert isinstance(errors[0], InvalidPercentEncoding)

    def test_numbers_stay_opaque(self):
        assert parse_host("127.1", is_special=False) == OpaqueHost("127.1")

    def test_ipv6_still_parsed(self):
        assert isinstance(parse_host("[::1]", is_special=False), IPv6Address)

    def test_custom_encode_set(self):
        encode_set = PATH_SET.union("{}")
        assert parse_host("a{b}", is_special=False, encode_set=encode_set) == OpaqueHost("a%7Bb%7D")

    def test_stray_percent_escaped(self):
        errors = []
        host = parse_host("a%zz%41", is_special=False, errors=errors, escape_stray_percent=True)
        assert host == OpaqueHost("a%25zz%41")
        assert len(errors) == 1


class TestStricterEncodeSet:
    """A domain may not hold code points that the caller's encode set adds."""

    @pytest.mark.parametrize("text", ["a{b}.com", "a`b", 'a"b', "a%7Bb"])
    def test_rejected(self, text):
        with pytest.raises(InvalidHost):
            parse_host(text, encode_set=PATH_SET.union('`"{}'))

    @pytest.mark.parametrize("text", ["a{b}.com", "a`b", 'a"b'])
    def test_accepted_by_default(self, text):
        assert parse_host(text) == Domain(text)
