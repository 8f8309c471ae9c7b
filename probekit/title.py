"""Extraction of the HTML title of a response."""

from __future__ import annotations

import html
import re
from html.parser import HTMLParser

from probekit.response import Response

_CUTSET = "\n\t\v\f\r"
_RE_TITLE = re.compile(r"(?im)<\s*title.*>(.*?)<\s*/\s*title>")


class _TitleParser(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.found = False
        self.closed = False
        self.parts: list[str] = []

    def handle_starttag(self, tag: str, attrs: list) -> None:
        if tag == "title" and not self.found:
            self.found = True

    def handle_endtag(self, tag: str) -> None:
        if tag == "title" and self.found:
            self.closed = True

    def handle_data(self, data: str) -> None:
        if self.found and not self.closed:
            self.parts.append(data)


def _title_from_dom(data: bytes) -> str | None:
    parser = _TitleParser()
    parser.feed(data.decode("utf-8", errors="replace"))
    parser.close()
    if not parser.found:
        return None
    text = "".join(parser.parts)
    return text.replace("\r\n", "\n").replace("\r", "\n")


def _trim_title_tags(title: str) -> str:
    begin = title.find(">")
    end = title.find("</")
    if begin < 0 or end < 0:
        return title
    return title[begin + 1:end]


def extract_title(response: Response) -> str:
    """Return the page title, falling back to a regular expression over the raw response."""
    title = _title_from_dom(response.data)
    if title is None:
        match = _RE_TITLE.search(response.raw)
        title = html.unescape(_trim_title_tags(match.group(0))) if match else ""
    title = title.strip(_CUTSET).strip()
    return title.replace("\r", "\n")