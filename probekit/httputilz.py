"""Raw HTTP request parsing and text normalisation."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from urllib.parse import urlsplit

_SPACES = re.compile(r"[\t\n\f\r ]+")


@dataclass
class ParsedRequest:
    """A request split into its method, path, headers and body."""

    method: str
    path: str
    headers: dict[str, str] = field(default_factory=dict)
    body: str = ""


def _read_line(text: str, pos: int) -> tuple[str, int, bool]:
    newline = text.find("\n", pos)
    if newline < 0:
        return text[pos:], len(text), True
    return text[pos:newline + 1], newline + 1, False


def parse_request(req: str, unsafe: bool) -> ParsedRequest:
    """Parse a raw HTTP request; ``unsafe`` keeps header lines unchecked."""
    first, pos, eof = _read_line(req, 0)
    if eof:
        raise ValueError("could not read request: EOF")
    parts = first.split(" ")
    if len(parts) < 3:
        raise ValueError("malformed request supplied")
    method = parts[0]

    headers: dict[str, str] = {}
    while True:
        line, pos, eof = _read_line(req, pos)
        line = line.strip()
        if eof or line == "":
            break
        pieces = line.split(":", 1)
        key = pieces[0]
        value = pieces[1] if len(pieces) == 2 else ""
        if not unsafe:
            if len(pieces) != 2 or key.lower() == "content-length":
                continue
            key = key.strip()
            value = value.strip()
        headers[key] = value

    path = parts[1]
    if path.startswith("http"):
        try:
            netloc = urlsplit(path).netloc
        except ValueError as exc:
            raise ValueError(f"could not parse request URL: {exc}") from exc
        headers["Host"] = netloc.rpartition("@")[2]

    return ParsedRequest(method=method, path=path, headers=headers, body=req[pos:])


def normalize_spaces(data: str) -> str:
    """Collapse every run of whitespace into a single space."""
    return _SPACES.sub(" ", data)