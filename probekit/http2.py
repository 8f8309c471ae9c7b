"""Detection of HTTP/2 support on a target."""

from __future__ import annotations

import http.client
import socket
import ssl
from urllib.parse import urlsplit

from probekit.client import HTTPX, UnsafeOptions
from probekit.schemes import HTTP

H2C_SETTINGS = "AAMAAABkAARAAAAAAAIAAAAA"
CONNECTION_PREFACE = b"PRI * HTTP/2.0\r\n\r\nSM\r\n\r\n"
_EMPTY_SETTINGS_FRAME = b"\x00\x00\x00\x04\x00\x00\x00\x00\x00"
_FRAME_HEADER_SIZE = 9
_SETTINGS_FRAME_TYPE = 0x4
_SWITCHING_PROTOCOLS = 101


def _h2c_upgrade(client: HTTPX, method: str, target_url: str) -> bool:
    try:
        request = client.new_request(method, target_url)
        request.headers["Connection"] = "Upgrade, HTTP2-Settings"
        request.headers["Upgrade"] = "h2c"
        request.headers["HTTP2-Settings"] = H2C_SETTINGS
        response = client.do(request, UnsafeOptions())
    except (OSError, ValueError, http.client.HTTPException):
        return False
    return response.status_code == _SWITCHING_PROTOCOLS


def _recv_exact(conn: socket.socket, size: int) -> bytes:
    data = b""
    while len(data) < size:
        chunk = conn.recv(size - len(data))
        if not chunk:
            break
        data += chunk
    return data


def _speaks_http2(conn: socket.socket) -> bool:
    conn.sendall(CONNECTION_PREFACE + _EMPTY_SETTINGS_FRAME)
    header = _recv_exact(conn, _FRAME_HEADER_SIZE)
    return len(header) == _FRAME_HEADER_SIZE and header[3] == _SETTINGS_FRAME_TYPE


def _direct_http2(client: HTTPX, target_url: str) -> bool:
    try:
        parts = urlsplit(target_url)
        secure = parts.scheme.lower() == "https"
        host = parts.hostname
        port = parts.port or (443 if secure else 80)
    except ValueError:
        return False
    if not host:
        return False
    timeout = client.options.timeout or None
    try:
        with socket.create_connection((host, port), timeout=timeout) as raw:
            if not secure:
                return _speaks_http2(raw)
            context = ssl.create_default_context()
            context.check_hostname = False
            context.verify_mode = ssl.CERT_NONE
            context.set_alpn_protocols(["h2", "http/1.1"])
            server_name = client.options.sni_name or host
            with context.wrap_socket(raw, server_hostname=server_name) as conn:
                if conn.selected_alpn_protocol() != "h2":
                    return False
                return _speaks_http2(conn)
    except (OSError, ValueError):
        return False


def support_http2(client: HTTPX, protocol: str, method: str, target_url: str) -> bool:
    """Return whether the target speaks HTTP/2.

    Plain ``http`` targets are asked to upgrade to h2c; any other protocol
    opens a direct HTTP/2 connection and waits for the server's SETTINGS frame.
    """
    if protocol == HTTP:
        return _h2c_upgrade(client, method, target_url)
    return _direct_http2(client, target_url)