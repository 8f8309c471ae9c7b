"""Detection of HTTP/1.1 pipelining support."""

from __future__ import annotations

import socket
import ssl

PROBES = 10
_REPLY_BUFFER = 1024
_READ_TIMEOUT = 1.0
_CONNECT_TIMEOUT = 10.0
_MIN_REPLIES = 2


def _dial(protocol: str, host: str, port: int) -> socket.socket:
    raw = socket.create_connection((host, port), timeout=_CONNECT_TIMEOUT)
    if protocol == "http":
        return raw
    context = ssl.create_default_context()
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    try:
        return context.wrap_socket(raw, server_hostname=host)
    except (OSError, ValueError):
        raw.close()
        raise


def _count_replies(conn: socket.socket) -> int:
    # The buffer is reused between reads, as leftovers of earlier replies count too.
    reply = bytearray(_REPLY_BUFFER)
    replies = 0
    for _ in range(PROBES):
        conn.settimeout(_READ_TIMEOUT)
        try:
            received = conn.recv_into(reply)
        except OSError:
            break
        if received == 0:
            break
        for segment in reply.decode("latin-1").split("\n\n"):
            if "HTTP/1.1" in segment or "HTTP/1.0" in segment:
                replies += 1
    return replies


def support_pipeline(protocol: str, method: str, host: str, port: int) -> bool:
    """Send several requests at once and expect at least two HTTP/1.x replies back."""
    if port == 0:
        port = 443 if protocol == "https" else 80
    if port < 0:
        return False
    addr = f"{host}:{port}"
    probe = f"{method} / HTTP/1.1\nHost: {addr}\n\n".encode()
    try:
        with _dial(protocol, host, port) as conn:
            for _ in range(PROBES):
                conn.sendall(probe)
            return _count_replies(conn) >= _MIN_REPLIES
    except (OSError, ValueError):
        return False