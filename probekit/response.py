"""HTTP responses and their redirect chains."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any


@dataclass
class ChainItem:
    """One request/response step of a redirect chain."""

    request: str = ""
    response: str = ""
    status_code: int = 0
    location: str = ""
    request_url: str = ""

    def as_dict(self) -> dict[str, Any]:
        """Return the JSON form, leaving out empty fields."""
        items = {
            "request": self.request,
            "response": self.response,
            "status_code": self.status_code,
            "location": self.location,
            "request-url": self.request_url,
        }
        return {key: value for key, value in items.items() if value}


@dataclass
class CSPData:
    """Domains found in Content-Security-Policy data."""

    domains: list[str] = field(default_factory=list)

    def as_dict(self) -> dict[str, Any]:
        return {"domains": list(self.domains)} if self.domains else {}


@dataclass
class Response:
    """A server response with its derived metrics."""

    status_code: int = 0
    headers: dict[str, list[str]] = field(default_factory=dict)
    raw_data: bytes = b""
    data: bytes = b""
    content_length: int = 0
    raw: str = ""
    raw_headers: str = ""
    words: int = 0
    lines: int = 0
    tls_data: Any = None
    csp_data: CSPData | None = None
    http2: bool = False
    pipeline: bool = False
    duration: float = 0.0
    chain: list[ChainItem] = field(default_factory=list)

    def get_header(self, name: str) -> str:
        """Return all values of header ``name`` joined by spaces."""
        values = self.headers.get(name)
        return " ".join(values) if values is not None else ""

    def get_header_part(self, name: str, sep: str) -> str:
        """Return the part of header ``name`` before the first ``sep``."""
        values = self.headers.get(name)
        if not values:
            return ""
        joined = " ".join(values)
        if sep == "":
            return joined[:1]
        return joined.split(sep, 1)[0]

    def get_chain_status_codes(self) -> list[int]:
        return [item.status_code for item in self.chain]

    def get_chain(self) -> str:
        """Return the redirect chain as one text, skipping the first request and last response."""
        last = len(self.chain) - 1
        parts = []
        for index, item in enumerate(self.chain):
            if index != 0:
                parts.append(item.request)
            if index < last:
                parts.append(item.response)
        return "".join(parts)

    def get_chain_as_list(self) -> list[ChainItem]:
        return [replace(item) for item in self.chain]

    def has_chain(self) -> bool:
        return len(self.chain) > 1

    def get_chain_last_url(self) -> str:
        """Return the URL of the last request of a redirect chain."""
        return self.chain[-1].request_url if self.has_chain() else ""