"""Domains from Content-Security-Policy headers and meta tags."""

from __future__ import annotations

import re
from html.parser import HTMLParser

from probekit.response import CSPData, Response

CSP_HEADERS = (
    "Content-Security-Policy",
    "Content-Security-Policy-Report-Only",
    "X-Content-Security-Policy-Report-Only",
    "X-Webkit-Csp-Report-Only",
)

_SEPARATORS = re.compile(r"[ ;,]")


class _MetaParser(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.contents: list[str] = []

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if tag != "meta":
            return
        first: dict[str, str] = {}
        for name, value in attrs:
            first.setdefault(name, value or "")
        if "http-equiv" in first and "content" in first:
            self.contents.append(first["content"])


def _is_potential_domain(token: str) -> bool:
    return "." in token or token.startswith("http")


def _add_potential_domains(domains: dict[str, None], data: str) -> None:
    for token in _SEPARATORS.split(data):
        if token and _is_potential_domain(token):
            domains[token] = None


def csp_grab(response: Response) -> CSPData | None:
    """Collect domains from CSP headers and ``http-equiv`` meta tags, or ``None``."""
    domains: dict[str, None] = {}
    for header in CSP_HEADERS:
        for value in response.headers.get(header, ()):
            _add_potential_domains(domains, value)

    if response.data:
        parser = _MetaParser()
        parser.feed(response.data.decode("utf-8", errors="replace"))
        parser.close()
        for content in parser.contents:
            _add_potential_domains(domains, content)

    return CSPData(domains=list(domains)) if domains else None