"""Filters that decide whether a response matches."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field

from probekit.response import Response


class Filter(ABC):
    """A predicate over responses."""

    @abstractmethod
    def filter(self, response: Response) -> bool:
        """Return whether ``response`` matches."""


@dataclass
class FilterString(Filter):
    """Matches when the raw response contains any keyword."""

    keywords: list[str] = field(default_factory=list)

    def filter(self, response: Response) -> bool:
        return any(keyword in response.raw for keyword in self.keywords)


@dataclass
class FilterRegex(Filter):
    """Matches when any regular expression is found in the raw response."""

    regexs: list[str] = field(default_factory=list)

    def filter(self, response: Response) -> bool:
        """Return whether any pattern matches; an invalid pattern raises ``re.error``."""
        return any(re.search(regex, response.raw) for regex in self.regexs)


@dataclass
class FilterCustom(Filter):
    """Matches when any callback returns true; callbacks that raise are ignored."""

    callbacks: list[Callable[[Response], bool]] = field(default_factory=list)

    def filter(self, response: Response) -> bool:
        for callback in self.callbacks:
            try:
                if callback(response):
                    return True
            except Exception:
                continue
        return False