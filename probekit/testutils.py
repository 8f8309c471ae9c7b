"""Helpers that run the command-line tool in a shell and collect its output."""

from __future__ import annotations

import subprocess
from collections.abc import Iterable

BINARY = "./probekit"


def _command(prefix: str, args: Iterable[str], debug: bool) -> list[str]:
    line = prefix + " ".join(args) + (" -debug" if debug else " -silent")
    return ["bash", "-c", line]


def _non_empty_lines(output: str) -> list[str]:
    return [line for line in output.split("\n") if line]


def _output(command: list[str], debug: bool) -> str:
    completed = subprocess.run(
        command,
        stdout=subprocess.PIPE,
        stderr=None if debug else subprocess.PIPE,
        check=True,
        encoding="utf-8",
        errors="replace",
    )
    return completed.stdout


def run_httpx_and_get_results(url: str, debug: bool, *args: str) -> list[str]:
    """Pipe ``url`` into the tool and return its non-empty output lines.

    Raises ``subprocess.CalledProcessError`` when the tool fails.
    """
    command = _command(f'echo "{url}" | {BINARY} ', args, debug)
    return _non_empty_lines(_output(command, debug))


def run_httpx_and_get_combined_results(url: str, debug: bool, *args: str) -> str:
    """Pipe ``url`` into the tool and return its standard output and error together."""
    command = _command(f'echo "{url}" | {BINARY} ', args, debug)
    completed = subprocess.run(
        command,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        check=True,
        encoding="utf-8",
        errors="replace",
    )
    return completed.stdout


def run_httpx_binary_and_get_results(
    target: str, httpx_binary: str, debug: bool, args: Iterable[str]
) -> list[str]:
    """Pipe ``target`` into the given binary and return its non-empty output lines."""
    command = _command(f"echo {target} | {httpx_binary} ", args, debug)
    return _non_empty_lines(_output(command, debug))