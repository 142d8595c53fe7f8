"""tests/unit/test_url.py"""

import dataclasses
import urllib.parse

import pytest

from wurllib.parse import URL, Domain, InvalidPort, InvalidScheme, ParseSettings, Standard, parse


class TestURLValue:
    """URL is an immutable value."""

    def test_frozen(self):
        url = parse("http://example.com/")
        with pytest.raises(dataclasses.FrozenInstanceError):
            url.scheme = "https"

    def test_single_empty_segment_is_no_path(self):
        assert URL(scheme="http", host=Domain("a"), path=("",)).path == ()

    def test_path_list_becomes_tuple(self):
        url = URL(scheme="http", host=Domain("a"), path=["x", "y"])
        assert url.path == ("x", "y")
        hash(url)

    def test_fragment_takes_part_in_equality(self):
        assert parse("http://a/#x") != parse("http://a/#y")
        assert parse("http://a/") != parse("http://a/#")

    def test_query_takes_part_in_equality(self):
        assert parse("http://a/?x") != parse("http://a/?y")
        assert parse("http://a/") != parse("http://a/?")

    def test_repr(self):
        assert repr(parse("http://a/")) == "URL('http://a/')"

    def test_str(self):
        assert str(parse("HTTP://A/b")) == "http://a/b"

    def test_built_by_hand(self):
        url = URL(scheme="https", host=Domain("example.com"), path=("a", ""), query="q")
        assert url.serialize() == "https://example.com/a/?q"


class TestAccessors:
    """Derived properties."""

    def test_hierarchical(self):
        url = parse("http://u:p@h:8080/a/b?q#f")
        assert url.is_special
        assert url.default_port == 80
        assert url.userinfo == "u:p"
        assert url.authority == "u:p@h:8080"
        assert url.path_string == "/a/b"
        assert url.file == "/a/b?q#f"

    def test_no_credentials(self):
        url = parse("http://h/")
        assert url.userinfo is None
        assert url.authority == "h"

    def test_password_only(self):
        assert parse("http://:pw@h/").userinfo == ":pw"

    def test_username_only(self):
        assert parse("http://me@h/").userinfo == "me"

    def test_opaque(self):
        url = parse("mailto:x?subject=hi")
        assert not url.is_special
        assert url.default_port is None
        assert url.authority is None
        assert url.path_string is None
        assert url.file == "?subject=hi"

    def test_file_default_port(self):
        url = parse("file:///x")
        assert url.is_special
        assert url.default_port is None

    def test_empty_path(self):
        assert parse("http://h").path_string == "/"


class TestWithScheme:
    """URL.with_scheme"""

    def test_between_special_schemes(self):
        url = parse("http://h:443/p?q#f")
        assert url.with_scheme("https").serialize() == "https://h/p?q#f"

    def test_keeps_non_default_port(self):
        assert parse("http://h:8080/").with_scheme("https").port == 8080

    def test_scheme_is_lowercased(self):
        assert parse("http://h/").with_scheme("WSS").scheme == "wss"

    def test_original_unchanged(self):
        url = parse("http://h/p")
        url.with_scheme("https")
        assert url.serialize() == "http://h/p"

    def test_opaque_to_special(self):
        assert parse("mailto:x@y").with_scheme("http").serialize() == "http://x@y/"

    def test_file_with_host_to_special(self):
        assert parse("file://server/share").with_scheme("https").serialize() == "https://server/share"

    def test_special_to_file(self):
        assert parse("http://h/a?q").with_scheme("file").serialize() == "file://h/a?q"

    def test_file_with_empty_host_is_unchanged(self):
        url = parse("file:///tmp/x")
        assert url.with_scheme("http") == url

    @pytest.mark.parametrize("text", ["http://u:p@h:8080/a", "http://u@h/a", "https://h:8443/"])
    def test_credentials_or_port_cannot_become_file(self, text):
        url = parse(text)
        assert url.with_scheme("file") == url

    def test_special_to_non_special(self):
        url = parse("http://h/").with_scheme("foo")
        assert url.serialize() == "foo://h/"
        assert not url.is_special

    def test_non_special_to_non_special(self):
        assert parse("mailto:x").with_scheme("news").serialize() == "news:x"

    @pytest.mark.parametrize("scheme", ["", "1x", "ht tp", "h:"])
    def test_invalid_scheme(self, scheme):
        with pytest.raises(InvalidScheme):
            parse("http://h/").with_scheme(scheme)

    def test_non_string_scheme(self):
        with pytest.raises(TypeError):
            parse("http://h/").with_scheme(3)

    def test_settings_are_used_for_the_reparse(self):
        settings = ParseSettings(standard=Standard.RFC_2396)
        assert parse("mailto:a|b").with_scheme("news", settings).serialize() == "news:a%7Cb"


class TestJoin:
    """URL.join"""

    def test_join(self):
        assert parse("http://a/b/c").join("../d").serialize() == "http://a/d"

    def test_join_absolute(self):
        assert parse("http://a/b/c").join("https://x/").serialize() == "https://x/"

    def test_join_against_opaque(self):
        with pytest.raises(InvalidScheme):
            parse("mailto:a").join("b")


class TestURI:
    """to_uri and from_uri"""

    @pytest.mark.parametrize(
        "text",
        [
            "http://user:pw@[::1]:8080/p?q#f",
            "https://example.com/a%20b?x=1&y=2",
            "mailto:a@b",
            "file:///C:/x",
            "foo:/path",
            "http://example.com/",
        ],
    )
    def test_to_uri(self, text):
        assert parse(text).to_uri() == parse(text).serialize()

    @pytest.mark.parametrize("text", ["http://h/a|b", "http://h/?[]", "http://h/#a#b", "http://h/a^b"])
    def test_to_uri_fails_for_whatwg_leftovers(self, text):
        with pytest.raises(ValueError):
            parse(text).to_uri()

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("http://h/a|b", "http://h/a%7Cb"),
            ("http://h/?[]", "http://h/?%5B%5D"),
            ("http://h/#a#b", "http://h/#a%23b"),
            ("http://h/a^b", "http://h/a%5Eb"),
        ],
    )
    def test_to_uri_in_rfc2396_mode(self, rfc2396_settings, text, expected):
        assert parse(text, settings=rfc2396_settings).to_uri() == expected

    def test_from_uri(self):
        url = URL.from_uri("HTTP://Example.com:80/a")
        assert url.serialize() == "http://example.com/a"

    @pytest.mark.parametrize("text", ["http://a b/", "http://h/a|b", "not a uri", "/relative"])
    def test_from_uri_rejects_non_uris(self, text):
        with pytest.raises(ValueError):
            URL.from_uri(text)

    def test_from_uri_still_checks_the_port(self):
        with pytest.raises(InvalidPort):
            URL.from_uri("http://h:99999/")


class TestURLSplit:
    """to_urlsplit and from_urlsplit"""

    def test_hierarchical(self):
        parts = parse("http://u:p@h:8080/a?q#f").to_urlsplit()
        assert parts == urllib.parse.SplitResult("http", "u:p@h:8080", "/a", "q", "f")
        assert parts.hostname == "h"
        assert parts.port == 8080

    def test_opaque(self):
        assert parse("mailto:x@y").to_urlsplit() == urllib.parse.SplitResult("mailto", "", "x@y", "", "")

    def test_from_urlsplit(self):
        url = URL.from_urlsplit(urllib.parse.urlsplit("HTTP://H:80/a b?q#f"))
        assert url == parse("http://h/a%20b?q#f")

    def test_through_urlsplit(self):
        url = parse("https://example.com/a/b?x=1#top")
        assert URL.from_urlsplit(url.to_urlsplit()) == url

    def test_empty_query_is_lost(self):
        assert URL.from_urlsplit(parse("http://h/?").to_urlsplit()).query is None
