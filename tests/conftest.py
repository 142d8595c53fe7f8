import pytest

from wurllib.parse import ParseSettings, Standard, parse


@pytest.fixture
def rfc_base():
    """The base URL used throughout RFC 3986 section 5.4."""
    return parse("http://a/b/c/d;p?q")


@pytest.fixture
def strict_settings():
    return ParseSettings(strict=True)


@pytest.fixture
def rfc2396_settings():
    return ParseSettings(standard=Standard.RFC_2396)
