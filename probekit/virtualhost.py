"""Virtual host detection by comparing responses to a real and a random host."""

from __future__ import annotations

import re
import secrets
from collections import Counter
from urllib.parse import urlsplit

from probekit.client import HTTPX, Request, UnsafeOptions

SIM_MULTIPLIER = 100
_WHITESPACE = re.compile(r"\s+")


def _bigrams(text: str) -> Counter:
    return Counter(a + b for a, b in zip(text, text[1:]))


def string_similarity(a: str, b: str) -> float:
    """Return the Dice coefficient of the character bigrams of ``a`` and ``b``."""
    a = _WHITESPACE.sub("", a)
    b = _WHITESPACE.sub("", b)
    if a == b:
        return 1.0
    if len(a) < 2 or len(b) < 2:
        return 0.0
    common = sum((_bigrams(a) & _bigrams(b)).values())
    return 2.0 * common / (len(a) + len(b) - 2)


def is_virtual_host(
    client: HTTPX, request: Request, unsafe_options: UnsafeOptions | None = None
) -> bool:
    """Return whether the target answers differently for a made-up host name.

    The request's host is replaced by a random subdomain of itself for the
    second probe.
    """
    first = client.do(request, unsafe_options)

    base_host = request.host or urlsplit(request.url).netloc
    request.host = f"{secrets.token_hex(10)}.{base_host}"
    second = client.do(request, unsafe_options)

    options = client.options
    if not options.vhost_ignore_status_code and first.status_code != second.status_code:
        return True
    if not options.vhost_ignore_content_length and first.content_length != second.content_length:
        return True
    if not options.vhost_ignore_number_of_words and first.words != second.words:
        return True
    if not options.vhost_ignore_number_of_lines and first.lines != second.lines:
        return True
    similarity = int(string_similarity(first.raw, second.raw) * SIM_MULTIPLIER)
    return similarity <= options.vhost_similarity_ratio