"""String and URL helpers."""

from __future__ import annotations

import base64
import re
from urllib.parse import urlsplit

from probekit.hashes import murmur3_32

_DEFAULT_PORTS = {"http": 80, "https": 443}
_SIGNED_INT = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_INT = re.compile(r"[0-9]+")
_HEX = set("0123456789abcdefABCDEF")
_INT64_MIN, _INT64_MAX = -(2**63), 2**63 - 1

_IMAGE_PREFIXES = (
    b"\x00\x00\x01\x00",
    b"\x00\x00\x02\x00",
    b"BM",
    b"GIF87a",
    b"GIF89a",
    b"\x89PNG\r\n\x1a\n",
    b"\xff\xd8\xff",
)


def trim_protocol(target_url: str, add_default_port: bool) -> str:
    """Strip whitespace and, when asked, drop the scheme after adding the default port."""
    url = target_url.strip()
    lowered = url.lower()
    if lowered.startswith(("http://", "https://")) and add_default_port:
        url = add_url_default_port(url)
        url = url[url.index("//") + 2:]
    return url


def string_to_slice_int(s: str) -> list[int]:
    """Parse a comma separated list of integers."""
    if s == "":
        return []
    result = []
    for token in s.split(","):
        token = token.strip()
        if not _SIGNED_INT.fullmatch(token):
            raise ValueError(f"invalid syntax: {token!r}")
        value = int(token)
        if not _INT64_MIN <= value <= _INT64_MAX:
            raise ValueError(f"value out of range: {token!r}")
        result.append(value)
    return result


def string_to_slice_uint32(s: str) -> list[int]:
    """Parse a comma separated list of unsigned integers truncated to 32 bits."""
    if s == "":
        return []
    result = []
    for token in s.split(","):
        token = token.strip()
        if not _UNSIGNED_INT.fullmatch(token):
            raise ValueError(f"invalid syntax: {token!r}")
        value = int(token)
        if value >= 2**64:
            raise ValueError(f"value out of range: {token!r}")
        result.append(value & 0xFFFFFFFF)
    return result


def split_by_char_and_trim_space(s: str, splitchar: str) -> list[str]:
    """Split ``s`` on ``splitchar`` and strip whitespace from every token."""
    tokens = list(s) if splitchar == "" else s.split(splitchar)
    return [token.strip() for token in tokens]


def add_url_default_port(raw_url: str) -> str:
    """Add the scheme's default port (80/443) to a URL that has none."""
    try:
        parts = urlsplit(raw_url)
        port = parts.port
    except ValueError:
        return raw_url
    default = _DEFAULT_PORTS.get(parts.scheme.lower())
    if port is not None or default is None or not parts.hostname:
        return raw_url
    netloc = parts.netloc.rstrip(":")
    return raw_url.replace(parts.netloc, f"{netloc}:{default}", 1)


def remove_url_default_port(raw_url: str) -> str:
    """Remove port 80 from http URLs and port 443 from https URLs."""
    try:
        parts = urlsplit(raw_url)
        port = parts.port
    except ValueError:
        return raw_url
    scheme = parts.scheme.lower()
    if port is None or _DEFAULT_PORTS.get(scheme) != port:
        return raw_url
    netloc = parts.netloc[: parts.netloc.rfind(":")]
    return raw_url.replace(parts.netloc, netloc, 1)


def _has_bad_escape(text: str) -> bool:
    index = text.find("%")
    while index >= 0:
        escape = text[index + 1:index + 3]
        if len(escape) < 2 or not set(escape) <= _HEX:
            return True
        index = text.find("%", index + 3)
    return False


def _strictly_invalid(raw_url: str) -> bool:
    if any(ord(ch) < 0x20 or ord(ch) == 0x7F for ch in raw_url):
        return True
    rest, _, fragment = raw_url.partition("#")
    before_query = rest.partition("?")[0]
    if _has_bad_escape(before_query) or _has_bad_escape(fragment):
        return True
    try:
        urlsplit(raw_url).port
    except ValueError:
        return True
    return False


def get_invalid_uri(raw_url: str) -> tuple[bool, str]:
    """Return ``(True, relative_path)`` when a URL is only parseable leniently."""
    if not _strictly_invalid(raw_url):
        return False, ""
    try:
        parts = urlsplit(raw_url)
    except ValueError:
        return False, ""
    relative = parts.path
    if parts.query:
        relative += "?" + parts.query
    if parts.fragment:
        relative += "#" + parts.fragment
    return True, relative


def _is_image(data: bytes) -> bool:
    head = data[:512]
    if head.startswith(_IMAGE_PREFIXES):
        return True
    return head[:4] == b"RIFF" and head[8:14] == b"WEBPVP"


def _murmurhash(data: bytes) -> int:
    wrapped = insert_into(base64.b64encode(data).decode("ascii"), 76, "\n")
    value = murmur3_32(wrapped.encode("ascii"), 0)
    return value - (1 << 32) if value >= (1 << 31) else value


def favicon_hash(data: bytes) -> int:
    """Return the signed favicon hash of image bytes."""
    if not _is_image(data):
        raise ValueError("content type is not image")
    return _murmurhash(data)


def insert_into(s: str, interval: int, sep: str) -> str:
    """Insert ``sep`` every ``interval`` bytes of ``s`` and once at the end."""
    before = interval - 1
    last = len(s.encode("utf-8")) - 1
    pieces = []
    offset = 0
    for char in s:
        pieces.append(char)
        if offset % interval == before and offset != last:
            pieces.append(sep)
        offset += len(char.encode("utf-8"))
    pieces.append(sep)
    return "".join(pieces)


def base64_encode(data: bytes) -> str:
    """Return the standard base64 encoding of ``data``."""
    return base64.b64encode(data).decode("ascii")