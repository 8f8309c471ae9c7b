"""Global custom headers given on the command line."""

from __future__ import annotations


class CustomHeaders(list):
    """Raw ``Name: value`` header lines applied to every request."""

    def set(self, value: str) -> None:
        """Add a header line."""
        self.append(value)

    def has(self, header: str) -> bool:
        """Return whether any header line starts with ``header``, ignoring case."""
        prefix = header.lower()
        return any(line.lower().startswith(prefix) for line in self)