import pytest

from feedback_app.services.origin import is_allowed


@pytest.mark.parametrize("origin,url", [
    ("https://example.com", "https://example.com"),
    ("https://example.com", "https://example.com/"),
    ("https://example.com", "https://example.com/pricing?ref=widget"),
    ("https://EXAMPLE.com", "https://example.com"),
    ("https://example.com", "https://example.com:443"),
    ("http://example.com:80", "http://example.com"),
    ("http://localhost:5173", "http://localhost:5173/app"),
])
def test_same_origin_is_allowed(origin, url):
    assert is_allowed(origin, url) is True


@pytest.mark.parametrize("origin,url", [
    ("https://evil.com", "https://example.com"),
    ("http://example.com", "https://example.com"),
    ("https://example.com:8443", "https://example.com"),
    ("https://sub.example.com", "https://example.com"),
    ("https://example.com.evil.com", "https://example.com"),
    ("null", "https://example.com"),
    ("", "https://example.com"),
    (None, "https://example.com"),
    ("https://example.com", None),
    ("https://example.com", "example.com"),
    ("https://example.com", "ftp://example.com"),
    ("https://example.com:99999", "https://example.com"),
    ("https://example.com", "https://example.com:notaport"),
    ("https://user:pw@example.com", "https://example.com"),
    (12345, "https://example.com"),
    ("javascript:alert(1)", "https://example.com"),
])
def test_everything_else_is_rejected(origin, url):
    assert is_allowed(origin, url) is False
