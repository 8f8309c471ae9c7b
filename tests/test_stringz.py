import base64

import pytest

from probekit import stringz


def test_trim_protocol_keeps_scheme_without_port_flag():
    assert stringz.trim_protocol("  http://example.com ", False) == "http://example.com"


def test_trim_protocol_with_default_port():
    assert stringz.trim_protocol("http://foo.com", True) == "foo.com:80"


def test_trim_protocol_non_http_untouched():
    assert stringz.trim_protocol("example.com:8080", True) == "example.com:8080"


@pytest.mark.parametrize(
    "raw, expected",
    [("http://foo.com", "http://foo.com:80"), ("https://foo.com", "https://foo.com:443")],
)
def test_add_url_default_port(raw, expected):
    assert stringz.add_url_default_port(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [("http://foo.com:80", "http://foo.com"), ("https://foo.com:443", "https://foo.com")],
)
def test_remove_url_default_port(raw, expected):
    assert stringz.remove_url_default_port(raw) == expected


def test_remove_url_keeps_non_default_port():
    assert stringz.remove_url_default_port("http://foo.com:8080/a") == "http://foo.com:8080/a"
    assert stringz.remove_url_default_port("https://foo.com:80") == "https://foo.com:80"


@pytest.mark.parametrize("url", ["http://foo.com/x?y=1", "https://bar.example.com/"])
def test_add_then_remove_round_trip(url):
    assert stringz.remove_url_default_port(stringz.add_url_default_port(url)) == url


def test_string_to_slice_int():
    assert stringz.string_to_slice_int("1, 2,3") == [1, 2, 3]
    assert stringz.string_to_slice_int("") == []


def test_string_to_slice_int_rejects_garbage():
    with pytest.raises(ValueError):
        stringz.string_to_slice_int("1,a")


def test_string_to_slice_uint32():
    assert stringz.string_to_slice_uint32("5, 6") == [5, 6]
    with pytest.raises(ValueError):
        stringz.string_to_slice_uint32("-1")


def test_split_by_char_and_trim_space():
    assert stringz.split_by_char_and_trim_space("a , b,c", ",") == ["a", "b", "c"]


def test_insert_into_invariants():
    text = "abcdefghij" * 17
    result = stringz.insert_into(text, 76, "\n")
    assert result.replace("\n", "") == text
    assert result.endswith("\n")
    assert all(len(chunk) <= 76 for chunk in result.split("\n"))


def test_insert_into_no_double_separator_at_exact_multiple():
    text = "x" * 152
    result = stringz.insert_into(text, 76, "\n")
    assert "\n\n" not in result
    assert result.count("\n") == 2


def test_base64_round_trip():
    data = bytes(range(256))
    assert base64.b64decode(stringz.base64_encode(data)) == data


def test_favicon_hash_requires_image():
    with pytest.raises(ValueError, match="content type is not image"):
        stringz.favicon_hash(b"<html></html>")


def test_favicon_hash_image_is_deterministic_int32():
    png = b"\x89PNG\r\n\x1a\n" + b"\x01" * 40
    first = stringz.favicon_hash(png)
    assert first == stringz.favicon_hash(png)
    assert -(2**31) <= first < 2**31


def test_get_invalid_uri_with_bad_escape():
    assert stringz.get_invalid_uri("http://foo.com/%invalid") == (True, "/%invalid")


def test_get_invalid_uri_valid_url():
    assert stringz.get_invalid_uri("http://foo.com/path?a=b") == (False, "")