import pytest

from simplehttp.validation import Method, coerce_timeout, is_valid_method, is_valid_timeout, is_valid_url


@pytest.mark.parametrize("url", [
    "http://www.example.com",
    "https://www.example.com",
    "HTTP://WWW.EXAMPLE.COM",
    "HTTPS://WWW.EXAMPLE.COM",
    "http://www.example.com/example",
    "http://example.codes",
    "http://example.com/",
    "http://www.example.subdomain.example.com",
    "https://www.example.com/example?foo=bar",
    "http://example.com/example#foo/bar",
    "ftp://example.com",
    "ftps://example.com",
    "http://x.com",
    "http://127.0.0.1:8080/path",
    "http://[::1]:8080/",
])
def test_valid_urls(url):
    assert is_valid_url(url) is True


@pytest.mark.parametrize("url", [
    "example.com",
    "www.example.com",
    "example.com/foo",
    "$!$",
    "",
    None,
    42,
    "http://",
    "mailto:someone@example.com",
    "http://exa mple.com",
    "http://example.com:notaport/",
    "http://[::1/",
])
def test_invalid_urls(url):
    assert is_valid_url(url) is False


def test_valid_methods():
    assert is_valid_method(Method.GET)
    assert is_valid_method(Method.POST)
    assert is_valid_method("GET")
    assert is_valid_method("POST")


@pytest.mark.parametrize("method", ["get", "PUT", "DELETE", "", None, 1, "GETPOST"])
def test_invalid_methods(method):
    assert is_valid_method(method) is False


@pytest.mark.parametrize("timeout", [10, 30, 1, 0xAE3, "15", " 7 ", 2.9, "1.5", "2.9"])
def test_valid_timeouts(timeout):
    assert is_valid_timeout(timeout) is True


@pytest.mark.parametrize("timeout", [0, -10, "foo", 0.6, None, "0.5", "inf", "nan", True, float("inf")])
def test_invalid_timeouts(timeout):
    assert is_valid_timeout(timeout) is False


def test_coerce_timeout_truncates_floats():
    assert coerce_timeout(2.9) == 2
    assert coerce_timeout("15") == 15
    assert coerce_timeout("foo") is None


def test_coerce_timeout_truncates_numeric_strings():
    assert coerce_timeout("1.5") == 1
    assert coerce_timeout(" 2.9 ") == 2
    assert coerce_timeout("1e1") == 10
    assert coerce_timeout("inf") is None
