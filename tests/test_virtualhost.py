import socket
import threading
from contextlib import contextmanager
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from probekit.client import HTTPX
from probekit.options import default_options
from probekit.virtualhost import is_virtual_host, string_similarity


def make_client():
    options = default_options()
    options.timeout = 5.0
    options.max_response_body_size_to_read = 65536
    return HTTPX(options)


@contextmanager
def host_server(host_sensitive):
    hosts = []

    class Handler(BaseHTTPRequestHandler):
        def do_GET(self):
            host = self.headers.get("Host", "")
            hosts.append(host)
            known = host == f"127.0.0.1:{self.server.server_address[1]}"
            if host_sensitive and not known:
                status, body = 404, b"nothing here for this name at all"
            else:
                status, body = 200, b"welcome to the site"
            self.send_response(status)
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            self.wfile.write(body)

        def log_message(self, *args):
            pass

    server = ThreadingHTTPServer(("127.0.0.1", 0), Handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield f"http://127.0.0.1:{server.server_address[1]}/", hosts
    finally:
        server.shutdown()
        server.server_close()


def test_similarity_known_value():
    assert string_similarity("healed", "sealed") == pytest.approx(0.8)


def test_similarity_identical_and_symmetric():
    assert string_similarity("same text", "same text") == 1.0
    assert string_similarity("abcdef", "abcxyz") == string_similarity("abcxyz", "abcdef")


def test_similarity_ignores_whitespace():
    assert string_similarity("a b c d", "abcd") == 1.0


def test_similarity_short_strings():
    assert string_similarity("a", "b") == 0.0


def test_similarity_disjoint():
    assert string_similarity("abab", "cdcd") == 0.0


def test_host_sensitive_server_is_virtual_host():
    client = make_client()
    with host_server(host_sensitive=True) as (url, hosts):
        request = client.new_request("GET", url)
        assert is_virtual_host(client, request) is True
    assert len(hosts) == 2
    assert hosts[1].endswith("." + hosts[0])
    assert request.host == hosts[1]


def test_same_answer_is_not_virtual_host():
    client = make_client()
    with host_server(host_sensitive=False) as (url, hosts):
        request = client.new_request("GET", url)
        assert is_virtual_host(client, request) is False
    assert hosts[0] != hosts[1]


def test_unreachable_target_raises():
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    client = make_client()
    request = client.new_request("GET", f"http://127.0.0.1:{port}/")
    with pytest.raises(OSError):
        is_virtual_host(client, request)