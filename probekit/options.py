"""Client options and scan targets."""

from __future__ import annotations

import string
from dataclasses import dataclass, field

DEFAULT_USER_AGENT = "probekit - Open-source project"

_TOKEN_CHARS = frozenset(string.ascii_letters + string.digits + "!#$%&'*+-.^_`|~")


def _valid_cookie_value(value: str) -> bool:
    return all(0x20 <= ord(ch) < 0x7F and ch not in '";\\' for ch in value)


def _parse_cookie_header(line: str) -> list[tuple[str, str]]:
    cookies = []
    for part in line.strip().split(";"):
        part = part.strip()
        if not part:
            continue
        name, _, value = part.partition("=")
        if not name or not set(name) <= _TOKEN_CHARS:
            continue
        if len(value) > 1 and value[0] == value[-1] == '"':
            value = value[1:-1]
        if not _valid_cookie_value(value):
            continue
        cookies.append((name, value))
    return cookies


@dataclass
class Options:
    """Configuration of the HTTP client."""

    random_agent: bool = False
    default_user_agent: str = ""
    http_proxy: str = ""
    socks_proxy: str = ""
    threads: int = 0
    cdn_check: bool = False
    exclude_cdn: bool = False
    timeout: float = 0.0
    retry_max: int = 0
    custom_headers: dict[str, str] = field(default_factory=dict)
    vhost_similarity_ratio: int = 0
    follow_redirects: bool = False
    follow_host_redirects: bool = False
    respect_hsts: bool = False
    max_redirects: int = 0
    unsafe: bool = False
    tls_grab: bool = False
    ztls: bool = False
    vhost_ignore_status_code: bool = False
    vhost_ignore_content_length: bool = False
    vhost_ignore_number_of_words: bool = False
    vhost_ignore_number_of_lines: bool = False
    vhost_strip_html: bool = False
    allow: list[str] = field(default_factory=list)
    deny: list[str] = field(default_factory=list)
    max_response_body_size_to_save: int = 0
    max_response_body_size_to_read: int = 0
    unsafe_uri: str = ""
    resolvers: list[str] = field(default_factory=list)
    custom_cookies: list[tuple[str, str]] = field(default_factory=list)
    sni_name: str = ""
    tls_impersonate: bool = False

    def parse_custom_cookies(self) -> None:
        """Fill ``custom_cookies`` from a custom ``Cookie`` header."""
        for name, value in self.custom_headers.items():
            if name.lower() == "cookie":
                self.custom_cookies = _parse_cookie_header(value)

    def has_custom_cookies(self) -> bool:
        return bool(self.custom_cookies)


def default_options() -> Options:
    """Return the default client options."""
    return Options(
        random_agent=True,
        threads=25,
        timeout=30.0,
        retry_max=5,
        max_redirects=10,
        unsafe=False,
        cdn_check=True,
        exclude_cdn=False,
        vhost_ignore_status_code=False,
        vhost_ignore_content_length=True,
        vhost_ignore_number_of_words=False,
        vhost_ignore_number_of_lines=False,
        vhost_strip_html=False,
        vhost_similarity_ratio=85,
        default_user_agent=DEFAULT_USER_AGENT,
    )


@dataclass
class Target:
    """A scan target with optional host header and IP overrides."""

    host: str = ""
    custom_host: str = ""
    custom_ip: str = ""