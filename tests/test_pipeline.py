import socket
import threading
from contextlib import contextmanager

from probekit.pipeline import PROBES, support_pipeline


def closed_port():
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


@contextmanager
def pipeline_server(reply):
    listener = socket.socket()
    listener.bind(("127.0.0.1", 0))
    listener.listen()
    received = []

    def serve():
        try:
            conn, _ = listener.accept()
        except OSError:
            return
        with conn:
            conn.settimeout(5)
            data = b""
            if reply is not None:
                while data.count(b"\n\n") < PROBES:
                    chunk = conn.recv(4096)
                    if not chunk:
                        break
                    data += chunk
                conn.sendall(reply)
            received.append(data)

    thread = threading.Thread(target=serve, daemon=True)
    thread.start()
    try:
        yield listener.getsockname()[1], received
    finally:
        listener.close()
        thread.join(timeout=5)


def test_two_replies_mean_pipelining():
    reply = b"HTTP/1.1 200 OK\n\nHTTP/1.1 200 OK\n\n"
    with pipeline_server(reply) as (port, received):
        assert support_pipeline("http", "GET", "127.0.0.1", port) is True
    assert received[0].startswith(f"GET / HTTP/1.1\nHost: 127.0.0.1:{port}\n\n".encode())
    assert received[0].count(b"GET / HTTP/1.1") == PROBES


def test_http10_replies_count():
    reply = b"HTTP/1.0 200 OK\n\nHTTP/1.0 200 OK\n\n"
    with pipeline_server(reply) as (port, _):
        assert support_pipeline("http", "HEAD", "127.0.0.1", port) is True


def test_single_reply_is_not_enough():
    with pipeline_server(b"HTTP/1.1 200 OK\r\n\r\n") as (port, _):
        assert support_pipeline("http", "GET", "127.0.0.1", port) is False


def test_server_closing_without_reply():
    with pipeline_server(None) as (port, _):
        assert support_pipeline("http", "GET", "127.0.0.1", port) is False


def test_unreachable_port():
    assert support_pipeline("http", "GET", "127.0.0.1", closed_port()) is False


def test_negative_port_cannot_be_dialled():
    assert support_pipeline("http", "GET", "127.0.0.1", -1) is False