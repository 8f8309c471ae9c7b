import pytest

from probekit import hashes
from probekit.stringz import favicon_hash


def test_md5_known_vector():
    assert hashes.md5(b"abc") == "900150983cd24fb0d6963f7d28e17f72"


def test_sha256_known_vector():
    assert hashes.sha256(b"abc") == (
        "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
    )


@pytest.mark.parametrize(
    "func, size",
    [
        (hashes.md5, 32),
        (hashes.sha1, 40),
        (hashes.sha224, 56),
        (hashes.sha256, 64),
        (hashes.sha512, 128),
    ],
)
def test_digest_is_lowercase_hex_of_fixed_size(func, size):
    digest = func(b"some body")
    assert len(digest) == size
    assert set(digest) <= set("0123456789abcdef")


def test_digests_differ_for_different_input():
    assert hashes.sha1(b"a") != hashes.sha1(b"b")
    assert hashes.sha512(b"a") != hashes.sha512(b"b")


def test_murmur3_empty_seed_zero():
    assert hashes.murmur3_32(b"", 0) == 0


@pytest.mark.parametrize("data", [b"a", b"ab", b"abc", b"abcd", b"abcdefgh1"])
def test_murmur3_is_unsigned_32_bit_and_seed_dependent(data):
    first = hashes.murmur3_32(data, 0)
    assert 0 <= first < 2**32
    assert hashes.murmur3_32(data, 0) == first
    assert hashes.murmur3_32(data, 7) != first


def test_mmh3_is_signed_int32():
    value = int(hashes.mmh3(b"\x00\xff" * 300))
    assert -(2**31) <= value < 2**31


def test_mmh3_agrees_with_favicon_hash():
    png = b"\x89PNG\r\n\x1a\n" + bytes(range(100))
    assert hashes.mmh3(png) == str(favicon_hash(png))


def test_simhash_is_case_insensitive():
    assert hashes.simhash(b"Hello World") == hashes.simhash(b"hello world")


def test_simhash_ignores_word_order():
    assert hashes.simhash(b"alpha beta gamma") == hashes.simhash(b"gamma alpha beta")


def test_simhash_fits_64_bits_and_differs():
    a = int(hashes.simhash(b"the quick brown fox"))
    b = int(hashes.simhash(b"an entirely different sentence"))
    assert 0 <= a < 2**64
    assert a != b