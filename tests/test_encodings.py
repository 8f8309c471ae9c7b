import pytest

from probekit.encodings import (
    decode_big5,
    decode_data,
    decode_gbk,
    decode_korean,
    encode_big5,
)

CHINESE = "中文測試"
KOREAN = "한국어"


def test_decode_gbk():
    assert decode_gbk("中文".encode("gbk")) == "中文".encode("utf-8")


def test_big5_round_trip():
    encoded = encode_big5(CHINESE.encode("utf-8"))
    assert encoded == CHINESE.encode("big5")
    assert decode_big5(encoded) == CHINESE.encode("utf-8")


def test_encode_big5_rejects_unencodable():
    with pytest.raises(UnicodeError):
        encode_big5("😀".encode("utf-8"))


def test_decode_korean():
    assert decode_korean(KOREAN.encode("euc_kr")) == KOREAN.encode("utf-8")


def test_decode_data_from_header_charset():
    body = "中文".encode("gbk")
    headers = {"Content-Type": ["text/html; charset=GBK"]}
    assert decode_data(body, headers) == "中文".encode("utf-8")


def test_decode_data_korean_header():
    body = KOREAN.encode("euc_kr")
    headers = {"Content-Type": ["text/html; charset=euc-kr"]}
    assert decode_data(body, headers) == KOREAN.encode("utf-8")


def test_decode_data_from_meta_charset():
    body = b'<meta charset="gb2312">' + "中文".encode("gbk")
    headers = {"Content-Type": ["text/html"]}
    assert decode_data(body, headers) == '<meta charset="gb2312">中文'.encode("utf-8")


def test_decode_data_without_content_type_is_unchanged():
    body = "中文".encode("gbk")
    assert decode_data(body, {}) == body


def test_decode_data_utf8_is_unchanged():
    body = "中文".encode("utf-8")
    assert decode_data(body, {"Content-Type": ["text/html; charset=utf-8"]}) == body