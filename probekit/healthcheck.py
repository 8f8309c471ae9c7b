"""Environment report: versions, config file access and network reachability."""

from __future__ import annotations

import os
import platform
import socket
import sys

from probekit.banner import VERSION

CONNECTIVITY_HOST = "scanme.sh"
CONNECTIVITY_PORT = 80
_TIMEOUT = 5.0


def _access(path: str, flags: int) -> str:
    try:
        fd = os.open(path, flags)
    except OSError as exc:
        return f"Ko ({exc})"
    os.close(fd)
    return "Ok"


def _connectivity(family: int) -> str:
    try:
        infos = socket.getaddrinfo(
            CONNECTIVITY_HOST, CONNECTIVITY_PORT, family=family, type=socket.SOCK_STREAM
        )
        last_error: OSError = OSError("no addresses found")
        for fam, kind, proto, _, address in infos:
            try:
                with socket.socket(fam, kind, proto) as sock:
                    sock.settimeout(_TIMEOUT)
                    sock.connect(address)
                return "Ok"
            except OSError as exc:
                last_error = exc
        raise last_error
    except OSError as exc:
        return f"Ko ({exc})"


def do_health_check(config_path: str) -> str:
    """Return a multi-line report about the running environment."""
    target = f"{CONNECTIVITY_HOST}:{CONNECTIVITY_PORT}"
    lines = [
        f"Version: {VERSION}",
        f"Operative System: {sys.platform}",
        f"Architecture: {platform.machine()}",
        f"Python Version: {platform.python_version()}",
        f"Compiler: {platform.python_implementation()}",
        f'Config file "{config_path}" Read => {_access(config_path, os.O_RDONLY)}',
        f'Config file "{config_path}" Write => {_access(config_path, os.O_WRONLY)}',
        f"IPv4 connectivity to {target} => {_connectivity(socket.AF_INET)}",
        f"IPv6 connectivity to {target} => {_connectivity(socket.AF_INET6)}",
    ]
    return "\n".join(lines) + "\n"