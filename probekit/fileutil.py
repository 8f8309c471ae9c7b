"""File and input helpers."""

from __future__ import annotations

import glob
import ipaddress
import os
import re
import stat
import sys

from probekit.stringz import split_by_char_and_trim_space


def has_stdin() -> bool:
    """Return whether standard input is piped or redirected."""
    try:
        mode = os.fstat(sys.stdin.fileno()).st_mode
    except (OSError, AttributeError, ValueError):
        return False
    return not stat.S_ISCHR(mode) or stat.S_ISFIFO(mode)


def load_file(filename: str) -> list[str]:
    """Return the lines of a file, or an empty list if it cannot be read."""
    try:
        with open(filename, "rb") as handle:
            content = handle.read()
    except OSError:
        return []
    lines = content.split(b"\n")
    if lines[-1] == b"":
        lines.pop()
    return [
        (line[:-1] if line.endswith(b"\r") else line).decode("utf-8", "surrogateescape")
        for line in lines
    ]


def list_files_with_pattern(rootpattern: str) -> list[str]:
    """Return the files matching a glob pattern; raise if there are none."""
    files = sorted(glob.glob(rootpattern))
    if not files:
        raise FileNotFoundError("no files found")
    return files


def file_name_is_glob(pattern: str) -> bool:
    """Return whether ``pattern`` compiles as a regular expression."""
    try:
        re.compile(pattern)
    except re.error:
        return False
    return True


def _is_ip(item: str) -> bool:
    try:
        ipaddress.ip_address(item)
    except ValueError:
        return False
    return True


def _is_cidr(item: str) -> bool:
    if "/" not in item:
        return False
    try:
        ipaddress.ip_network(item, strict=False)
    except ValueError:
        return False
    return True


def load_cidrs_from_slice_or_file_with_max_recursion(
    option: str, splitchar: str, max_recursion: int
) -> list[str]:
    """Collect IPs and CIDRs from a list, following file names up to a depth."""
    if max_recursion < 0:
        return []
    networks: list[str] = []
    for item in split_by_char_and_trim_space(option, splitchar):
        if _is_ip(item) or _is_cidr(item):
            networks.append(item)
        elif os.path.isfile(item):
            try:
                with open(item, encoding="utf-8", errors="surrogateescape") as handle:
                    data = handle.read()
            except OSError:
                continue
            if data:
                networks.extend(
                    load_cidrs_from_slice_or_file_with_max_recursion(data, "\n", max_recursion - 1)
                )
    return networks


def abs_path_or_default(p: str) -> str:
    """Return the absolute form of ``p``, or ``p`` itself if that fails."""
    try:
        return os.path.abspath(p)
    except (OSError, ValueError):
        return p