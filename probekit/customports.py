"""Port lists given as ``[scheme:]port`` and ``[scheme:]start-end`` items."""

from __future__ import annotations

import re
from collections.abc import Iterable

from probekit.schemes import HTTP, HTTP_AND_HTTPS, HTTP_OR_HTTPS, HTTPS

_MAX_PORT = 65535
_INTEGER = re.compile(r"[+-]?[0-9]+")
_SCHEME_PREFIXES = (HTTP, HTTPS, HTTP_AND_HTTPS)


def _to_int(text: str, message: str) -> int:
    if not _INTEGER.fullmatch(text):
        raise ValueError(f"{message}: invalid syntax {text!r}")
    return int(text)


def _check_port_value(port: int, context: str = "") -> None:
    if port > _MAX_PORT:
        prefix = f"{context}: " if context else ""
        raise ValueError(f"{prefix}port value is bigger than {_MAX_PORT}")


class CustomPorts(list):
    """The raw port specifications, with the expanded ``ports`` mapping port to scheme."""

    def __init__(self, iterable: Iterable[str] = (), ports: dict[int, str] | None = None):
        super().__init__(iterable)
        self.ports: dict[int, str] = {} if ports is None else ports

    def _merge(self, port: int, protocol: str) -> str:
        existing = self.ports.get(port)
        if {existing, protocol} == {HTTP, HTTPS}:
            return HTTP_AND_HTTPS
        return protocol

    def set(self, value: str) -> None:
        """Parse a comma separated port specification and record its ports."""
        for item in dict.fromkeys(value.split(",")):
            protocol = HTTP_OR_HTTPS
            port_spec = item.strip().lower()
            for scheme in _SCHEME_PREFIXES:
                prefix = scheme + ":"
                if port_spec.startswith(prefix):
                    port_spec = port_spec[len(prefix):]
                    protocol = scheme
                    break

            bounds = port_spec.split("-")
            if len(bounds) < 2:
                port = _to_int(
                    port_spec, f"Could not cast port to integer from your value: {port_spec}"
                )
                _check_port_value(port)
                protocol = self._merge(port, protocol)
                self.ports[port] = protocol
                continue

            low = _to_int(
                bounds[0],
                f"Could not cast first port of your range({port_spec}) "
                f"to integer from your value: {bounds[0]}",
            )
            _check_port_value(low, f"first port of your range({low})")
            high = _to_int(
                bounds[1],
                f"Could not cast last port of your port range({port_spec}) "
                f"to integer from your value: {bounds[1]}",
            )
            _check_port_value(high, f"last port of your range({low})")
            if low > high:
                raise ValueError(
                    "First value of port range should be lower than the last port "
                    f"from your range: [{low}, {high}]"
                )
            for port in range(low, high + 1):
                protocol = self._merge(port, protocol)
                self.ports[port] = protocol

        self.append(value)