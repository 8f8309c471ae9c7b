"""Lists of IPs and CIDR ranges given inline or through files."""

from __future__ import annotations

from probekit.fileutil import load_cidrs_from_slice_or_file_with_max_recursion

MAX_RECURSION = 10


class CustomList(list):
    """IP addresses and networks collected from repeated flag values."""

    def set(self, value: str) -> None:
        """Add the addresses and networks named by a comma separated value."""
        self.extend(load_cidrs_from_slice_or_file_with_max_recursion(value, ",", MAX_RECURSION))