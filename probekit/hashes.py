"""Digest helpers used to fingerprint response bodies."""

from __future__ import annotations

import base64
import hashlib
import re
import struct

_MASK32 = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF
_FNV64_OFFSET = 14695981039346656037
_FNV64_PRIME = 1099511628211
_WORD_BOUNDARIES = re.compile(rb"[\w']+(?:\://[\w\./]+){0,1}")


def _rotl32(value: int, shift: int) -> int:
    return ((value << shift) | (value >> (32 - shift))) & _MASK32


def murmur3_32(data: bytes, seed: int = 0) -> int:
    """Return the unsigned 32-bit MurmurHash3 of ``data``."""
    c1, c2 = 0xCC9E2D51, 0x1B873593
    h = seed & _MASK32
    length = len(data)
    tail_start = length - length % 4

    for (k,) in struct.iter_unpack("<I", data[:tail_start]):
        k = (k * c1) & _MASK32
        k = _rotl32(k, 15)
        k = (k * c2) & _MASK32
        h ^= k
        h = _rotl32(h, 13)
        h = (h * 5 + 0xE6546B64) & _MASK32

    tail = data[tail_start:]
    if tail:
        k = int.from_bytes(tail, "little")
        k = (k * c1) & _MASK32
        k = _rotl32(k, 15)
        k = (k * c2) & _MASK32
        h ^= k

    h ^= length
    h ^= h >> 16
    h = (h * 0x85EBCA6B) & _MASK32
    h ^= h >> 13
    h = (h * 0xC2B2AE35) & _MASK32
    h ^= h >> 16
    return h


def _to_int32(value: int) -> int:
    return value - (1 << 32) if value >= (1 << 31) else value


def _std_base64(raw: bytes) -> bytes:
    """Base64 with a newline after every 76 characters and a final newline."""
    encoded = base64.b64encode(raw)
    lines = [encoded[i:i + 76] for i in range(0, len(encoded), 76)]
    out = b"".join(line + b"\n" if len(line) == 76 else line for line in lines)
    return out + b"\n"


def mmh3(data: bytes) -> str:
    """Return the signed MurmurHash3 of the wrapped base64 form of ``data``."""
    return str(_to_int32(murmur3_32(_std_base64(data), 0)))


def md5(data: bytes) -> str:
    return hashlib.md5(data).hexdigest()


def sha1(data: bytes) -> str:
    return hashlib.sha1(data).hexdigest()


def sha224(data: bytes) -> str:
    return hashlib.sha224(data).hexdigest()


def sha256(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def sha512(data: bytes) -> str:
    return hashlib.sha512(data).hexdigest()


def _fnv1_64(data: bytes) -> int:
    h = _FNV64_OFFSET
    for byte in data:
        h = (h * _FNV64_PRIME) & _MASK64
        h ^= byte
    return h


def _lower(data: bytes) -> bytes:
    if data.isascii():
        return data.lower()
    return data.decode("utf-8", "surrogateescape").lower().encode("utf-8", "surrogateescape")


def simhash(data: bytes) -> str:
    """Return the 64-bit word simhash of ``data`` as a decimal string."""
    vector = [0] * 64
    for word in _WORD_BOUNDARIES.findall(_lower(data)):
        feature = _fnv1_64(word)
        for bit in range(64):
            vector[bit] += 1 if (feature >> bit) & 1 else -1
    fingerprint = 0
    for bit, weight in enumerate(vector):
        if weight >= 0:
            fingerprint |= 1 << bit
    return str(fingerprint)