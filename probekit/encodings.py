"""Decoding of response bodies in legacy Asian encodings."""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence

RE_CONTENT_TYPE = re.compile(rb'(?im)\s*charset="(.*?)"|charset=(.*?)"\s*')


def decode_gbk(data: bytes) -> bytes:
    """Convert GBK bytes to UTF-8."""
    return data.decode("gbk", errors="replace").encode("utf-8")


def decode_big5(data: bytes) -> bytes:
    """Convert Big5 bytes to UTF-8."""
    return data.decode("big5", errors="replace").encode("utf-8")


def encode_big5(data: bytes) -> bytes:
    """Convert UTF-8 bytes to Big5; raise ``UnicodeError`` on unencodable text."""
    return data.decode("utf-8").encode("big5")


def decode_korean(data: bytes) -> bytes:
    """Convert EUC-KR bytes to UTF-8."""
    return data.decode("euc_kr", errors="replace").encode("utf-8")


def _body_charset(data: bytes) -> str:
    match = RE_CONTENT_TYPE.search(data)
    if match is None:
        return ""
    charset = b""
    for group in match.groups():
        if group:
            charset = group
    return charset.decode("latin-1").lower()


def decode_data(data: bytes, headers: Mapping[str, Sequence[str]]) -> bytes:
    """Return ``data`` as UTF-8 when the headers or the page declare GBK or EUC-KR."""
    content_types = headers.get("Content-Type")
    if content_types is None:
        return data
    content_type = ";".join(content_types).lower()
    if "charset=gb2312" in content_type or "charset=gbk" in content_type:
        return decode_gbk(data)
    if "euc-kr" in content_type:
        return decode_korean(data)
    charset = _body_charset(data)
    if "gb2312" in charset or "gbk" in charset:
        return decode_gbk(data)
    return data