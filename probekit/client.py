"""The HTTP probing client."""

from __future__ import annotations

import html
import random
import socket
import ssl
import time
from dataclasses import dataclass, field
from html.parser import HTMLParser
from http.client import HTTPResponse
from urllib.parse import urljoin, urlsplit, urlunsplit

import requests

from probekit.csp import csp_grab
from probekit.encodings import decode_data
from probekit.filters import Filter
from probekit.httputilz import normalize_spaces
from probekit.options import Options
from probekit.response import ChainItem, Response
from probekit.tlsinfo import tls_grab

_USER_AGENTS = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 13_5) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/16.6 Safari/605.1.15",
    "Mozilla/5.0 (X11; Linux x86_64; rv:121.0) Gecko/20100101 Firefox/121.0",
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_1 like Mac OS X) AppleWebKit/605.1.15 (KHTML, like Gecko) Mobile/15E148",
)
_NO_BODY_STATUSES = (101, 304)
_REDIRECT_STATUSES = (301, 302, 303, 307, 308)


@dataclass
class UnsafeOptions:
    """Overrides for raw requests."""

    uri_path: str = ""


@dataclass
class Request:
    """An outgoing HTTP request."""

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    host: str = ""
    body: bytes = b""


@dataclass
class _Fetched:
    status: int
    reason: str
    version: str
    header_pairs: list[tuple[str, str]]
    body: bytes
    url: str
    chain: list[ChainItem]


def _canonical(name: str) -> str:
    return "-".join(part[:1].upper() + part[1:].lower() for part in name.split("-"))


class _Stripper(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.parts: list[str] = []
        self._skip = 0

    def handle_starttag(self, tag, attrs):
        if tag in ("script", "style"):
            self._skip += 1

    def handle_endtag(self, tag):
        if tag in ("script", "style") and self._skip:
            self._skip -= 1

    def handle_data(self, data):
        if not self._skip:
            self.parts.append(html.escape(data, quote=True).replace("&#x27;", "&#39;"))


def strip_html(text: str) -> str:
    """Remove every HTML element, keeping escaped text content."""
    parser = _Stripper()
    parser.feed(text)
    parser.close()
    return "".join(parser.parts)


def _request_target(url: str) -> str:
    parts = urlsplit(url)
    target = parts.path or "/"
    return target + ("?" + parts.query if parts.query else "")


def dump_request(request: Request) -> str:
    """Render a request as it would go on the wire."""
    host = request.host or urlsplit(request.url).netloc
    lines = [f"{request.method} {_request_target(request.url)} HTTP/1.1", f"Host: {host}"]
    lines += [f"{k}: {v}" for k, v in request.headers.items() if k.lower() != "host"]
    return "\r\n".join(lines) + "\r\n\r\n" + request.body.decode("utf-8", "replace")


def _head_text(version: str, status: int, reason: str, pairs: list[tuple[str, str]]) -> str:
    lines = [f"HTTP/{version} {status} {reason}"] + [f"{k}: {v}" for k, v in pairs]
    return "\r\n".join(lines) + "\r\n\r\n"


class HTTPX:
    """HTTP client applying the configured options and filters."""

    def __init__(self, options: Options) -> None:
        self.options = options
        self.options.parse_custom_cookies()
        self.filters: list[Filter] = []
        self.custom_headers = options.custom_headers
        self._session = requests.Session()
        self._session.trust_env = False

    @property
    def _timeout(self) -> float | None:
        return self.options.timeout or None

    def _add_custom_cookies(self, headers: dict[str, str]) -> None:
        if self.options.has_custom_cookies():
            extra = "; ".join(f"{n}={v}" for n, v in self.options.custom_cookies)
            headers["Cookie"] = f"{headers['Cookie']}; {extra}" if headers.get("Cookie") else extra

    def _read_body(self, resp: requests.Response) -> bytes:
        limit = self.options.max_response_body_size_to_read
        if resp.status_code in _NO_BODY_STATUSES or limit <= 0:
            return b""
        chunks, size = [], 0
        for chunk in resp.iter_content(8192):
            chunks.append(chunk)
            size += len(chunk)
            if size >= limit:
                break
        return b"".join(chunks)[:limit]

    def _fetch_safe(self, request: Request, identity: bool) -> _Fetched:
        opts = self.options
        proxies = {"http": opts.http_proxy, "https": opts.http_proxy} if opts.http_proxy else None
        follow = opts.follow_redirects or opts.follow_host_redirects
        origin_host = request.host or urlsplit(request.url).netloc
        method, url, body = request.method, request.url, request.body
        headers = dict(request.headers)
        if request.host:
            headers["Host"] = request.host
        if identity:
            headers["Accept-Encoding"] = "identity"
        chain: list[ChainItem] = []
        hops = 0
        while True:
            resp = self._session.request(
                method, url, headers=headers, data=body or None, stream=True,
                allow_redirects=False, timeout=self._timeout, verify=False, proxies=proxies,
            )
            version = "1.0" if resp.raw.version == 10 else "1.1"
            pairs = [(_canonical(k), v) for k, v in resp.raw.headers.items()]
            head = _head_text(version, resp.status_code, resp.reason or "", pairs)
            item = ChainItem(
                request=dump_request(Request(method, url, headers, request.host, body)),
                response=head, status_code=resp.status_code,
                location=resp.headers.get("Location", ""), request_url=url,
            )
            chain.append(item)
            if not follow or resp.status_code not in _REDIRECT_STATUSES or not item.location:
                break
            next_url = urljoin(url, item.location)
            if opts.follow_host_redirects and urlsplit(next_url).netloc != origin_host:
                break
            if hops >= opts.max_redirects:
                break
            if opts.respect_hsts and resp.headers.get("Strict-Transport-Security"):
                next_url = urlunsplit(urlsplit(next_url)._replace(scheme="https"))
            resp.close()
            hops += 1
            if resp.status_code == 303 or (resp.status_code in (301, 302) and method == "POST"):
                method, body = ("HEAD" if method == "HEAD" else "GET"), b""
            headers = {k: v for k, v in headers.items() if k.lower() != "host"}
            self._add_custom_cookies(headers)
            url = next_url
        try:
            data = self._read_body(resp)
        finally:
            resp.close()
        return _Fetched(resp.status_code, resp.reason or "", version, pairs, data, url, chain)

    def _fetch_unsafe(self, request: Request, unsafe_options: UnsafeOptions) -> _Fetched:
        parts = urlsplit(request.url)
        secure = parts.scheme.lower() == "https"
        host = parts.hostname or ""
        port = parts.port or (443 if secure else 80)
        target = unsafe_options.uri_path or _request_target(request.url)
        lines = [f"{request.method} {target} HTTP/1.1"]
        if not any(k.lower() == "host" for k in request.headers):
            lines.append(f"Host: {request.host or parts.netloc}")
        lines += [f"{k}: {v}" for k, v in request.headers.items()]
        if request.body:
            lines.append(f"Content-Length: {len(request.body)}")
        lines.append("Connection: close")
        payload = ("\r\n".join(lines) + "\r\n\r\n").encode("latin-1", "replace") + request.body
        sock = socket.create_connection((host, port), timeout=self._timeout)
        try:
            if secure:
                context = ssl.create_default_context()
                context.check_hostname = False
                context.verify_mode = ssl.CERT_NONE
                sock = context.wrap_socket(sock, server_hostname=self.options.sni_name or host)
            sock.sendall(payload)
            reply = HTTPResponse(sock, method=request.method)
            reply.begin()
            limit = self.options.max_response_body_size_to_read
            data = b"" if reply.status in _NO_BODY_STATUSES or limit <= 0 else reply.read(limit)
            version = "1.0" if reply.version == 10 else "1.1"
            pairs = [(_canonical(k), v) for k, v in reply.getheaders()]
            return _Fetched(reply.status, reply.reason, version, pairs, data, request.url, [])
        finally:
            sock.close()

    def do(self, request: Request, unsafe_options: UnsafeOptions | None = None) -> Response:
        """Send ``request`` and build a response with its metrics."""
        start = time.monotonic()
        unsafe_options = unsafe_options or UnsafeOptions()
        if self.options.unsafe:
            fetched = self._fetch_unsafe(request, unsafe_options)
        else:
            try:
                fetched = self._fetch_safe(request, identity=False)
            except requests.exceptions.ContentDecodingError:
                # servers declaring gzip but sending plain bodies
                fetched = self._fetch_safe(request, identity=True)

        headers: dict[str, list[str]] = {}
        for name, value in fetched.header_pairs:
            headers.setdefault(name, []).append(value)
        raw_headers = _head_text(fetched.version, fetched.status, fetched.reason, fetched.header_pairs)
        resp = Response(status_code=fetched.status, headers=headers, raw_data=fetched.body)
        resp.raw_headers = raw_headers
        resp.raw = raw_headers + fetched.body.decode("utf-8", "replace")

        body = decode_data(fetched.body, headers)
        text = body.decode("utf-8", "replace")
        if self.options.vhost_strip_html:
            text = strip_html(text)
        length = headers.get("Content-Length")
        if length:
            try:
                resp.content_length = int(length[0])
            except ValueError:
                resp.content_length = 0
        if resp.content_length <= 0 and body:
            resp.content_length = len(body)
        resp.data = body
        resp.words = len(text.split(" "))
        resp.lines = len(text.split("\n"))

        parts = urlsplit(fetched.url)
        if not self.options.unsafe and self.options.tls_grab and parts.scheme == "https":
            resp.tls_data = tls_grab(
                parts.hostname or "", parts.port or 443, self.options.sni_name, self.options.timeout
            )
        resp.csp_data = csp_grab(resp)
        if not self.options.unsafe:
            resp.chain = fetched.chain
        resp.duration = time.monotonic() - start
        return resp

    def verify(self, request: Request, unsafe_options: UnsafeOptions | None = None) -> bool:
        """Return whether any filter matches the response to ``request``."""
        resp = self.do(request, unsafe_options)
        return any(f.filter(resp) for f in self.filters)

    def add_filter(self, f: Filter) -> None:
        self.filters.append(f)

    def new_request(self, method: str, target_url: str) -> Request:
        """Build a request, adding default headers unless in unsafe mode."""
        if not self.options.unsafe:
            parts = urlsplit(target_url)
            parts.port  # raises ValueError on a bad port
            if not parts.scheme or not parts.netloc:
                raise ValueError(f"invalid URL: {target_url!r}")
        request = Request(method=method, url=target_url)
        if not self.options.unsafe:
            request.headers["User-Agent"] = self.options.default_user_agent
            request.headers["Accept-Charset"] = "utf-8"
        return request

    def set_custom_headers(self, request: Request, headers: dict[str, str]) -> None:
        """Apply ``headers`` to ``request``; a Host header sets the host override."""
        for name, value in headers.items():
            if name.lower() == "host":
                request.host = value
            else:
                for existing in [k for k in request.headers if k.lower() == name.lower()]:
                    del request.headers[existing]
                request.headers[name] = value
        if self.options.random_agent:
            request.headers["User-Agent"] = random.choice(_USER_AGENTS)

    def sanitize(self, text: str, trim_line: bool, normalize_spaces: bool) -> str:
        """Strip HTML, optionally dropping newlines and collapsing whitespace."""
        text = strip_html(text)
        if trim_line:
            text = text.replace("\n", "")
        if normalize_spaces:
            text = _normalize(text)
        return text


_normalize = normalize_spaces