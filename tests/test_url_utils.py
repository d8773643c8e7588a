import pytest

from app.utils.url_utils import ensure_url_scheme


@pytest.mark.parametrize(
    "value, expected",
    [
        ("example.com", "https://example.com"),
        ("https://example.com", "https://example.com"),
        ("http://example.com", "http://example.com"),
        ("HTTPS://Example.com", "HTTPS://Example.com"),
        ("github.com/ada", "https://github.com/ada"),
        ("httpbin.org", "https://httpbin.org"),
        ("http-docs.dev", "https://http-docs.dev"),
    ],
)
def test_ensure_url_scheme(value, expected):
    assert ensure_url_scheme(value) == expected
