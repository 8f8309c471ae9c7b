# probekit

A toolkit for probing HTTP services and describing what answers. It sends
requests and records the redirect chain, extracts page titles and
Content-Security-Policy domains, reads TLS certificate details, fingerprints
bodies and favicons, and checks for HTTP/2, HTTP/1.1 pipelining and virtual
hosts. It also parses the kinds of input a prober takes: port lists, IP/CIDR
lists, custom headers, raw request text and duration filters.

## Installation

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Sending a request

```python
from probekit.client import HTTPX, UnsafeOptions
from probekit.options import default_options
from probekit.title import extract_title

options = default_options()
options.max_response_body_size_to_read = 1024 * 1024  # 0 means the body is not read
client = HTTPX(options)

request = client.new_request("GET", "https://example.com")
response = client.do(request, UnsafeOptions())

print(response.status_code, response.content_length, response.words, response.lines)
print(extract_title(response))
print(response.get_header("Content-Type"))
if response.has_chain():
    print("redirected to", response.get_chain_last_url())
```

`probekit.options.Options` holds every client setting: timeout, redirect
handling (`follow_redirects`, `follow_host_redirects` for same-host only,
`max_redirects`, `respect_hsts`), `http_proxy`, `custom_headers` (a `Cookie`
entry is parsed into `custom_cookies` and re-sent on redirects),
`max_response_body_size_to_read`, `tls_grab`, `sni_name`, `vhost_strip_html`
and the `vhost_*` settings used by virtual-host detection.
`default_options()` returns a fresh set of defaults; note that it leaves
`max_response_body_size_to_read` at 0, so set it when you want bodies.

Certificates are not verified. With `options.unsafe` set, `HTTPX.do` writes
the request over a plain socket (or TLS socket) itself, with the path taken
from `UnsafeOptions.uri_path` when given, so non-standard paths reach the
server unchanged; no redirect chain is recorded then.

Other `HTTPX` methods:

- `set_custom_headers(request, headers)` – a `Host` entry becomes the host
  override; with `random_agent` set, the User-Agent is replaced by a random
  browser string.
- `add_filter(f)` and `verify(request)` – `verify` returns whether any filter
  matches the response. Filters are in `probekit.filters`: `FilterString`
  (keywords in the raw response), `FilterRegex` (patterns; an invalid pattern
  raises `re.error`) and `FilterCustom` (callbacks; callbacks that raise are
  ignored).
- `sanitize(text, trim_line, normalize_spaces)` – strips HTML, optionally
  removes newlines and collapses whitespace.

`probekit.client.dump_request` renders a `Request` as wire text and
`strip_html` removes markup.

## Response analysis

- `probekit.title.extract_title` – page title, unescaped, trimmed and without
  carriage returns.
- `probekit.csp.csp_grab` – candidate domains from CSP headers and
  `<meta http-equiv>` tags, as `CSPData`, or `None`.
- `probekit.encodings.decode_data` – decodes GBK/GB2312 and EUC-KR bodies
  according to the Content-Type header or the charset named in the page;
  `decode_gbk`, `decode_big5`, `encode_big5` and `decode_korean` do single
  conversions.
- `probekit.tlsinfo.tls_grab(host, port, server_name, timeout)` – protocol
  version, cipher and a `CertificateResponse` (names, e-mails, issuer and
  subject, validity, expired, self-signed, mismatched, wildcard, MD5/SHA-1/
  SHA-256 fingerprints); `convert_certificate` summarises DER bytes directly.

## Fingerprints

```python
from probekit import hashes, stringz

hashes.md5(b"body")
hashes.sha256(b"body")
hashes.mmh3(b"body")       # murmur3 of the line-wrapped base64, as a signed int string
hashes.simhash(b"body")

stringz.favicon_hash(icon_bytes)   # raises ValueError if the data is not an image
```

`probekit.stringz` also adds and removes default ports
(`add_url_default_port`, `remove_url_default_port`), trims schemes
(`trim_protocol`), parses integer lists (`string_to_slice_int`,
`string_to_slice_uint32`) and detects URLs that only parse leniently
(`get_invalid_uri`).

## Capability checks

- `probekit.http2.support_http2(client, protocol, method, url)` – an h2c
  upgrade request for `http`, a direct HTTP/2 connection (ALPN over TLS) for
  anything else.
- `probekit.pipeline.support_pipeline(protocol, method, host, port)` – sends
  ten requests on one connection and expects at least two HTTP/1.x replies.
- `probekit.virtualhost.is_virtual_host(client, request)` – compares the
  response for the real host with one for a random sub-name, using status,
  length, word and line counts and `string_similarity` against
  `vhost_similarity_ratio`.

## Input helpers

```python
from probekit.customports import CustomPorts
from probekit.filteroperator import FilterOperator

ports = CustomPorts()
ports.set("http:80,https:443,8000-8010")
print(ports.ports)            # {80: 'http', 443: 'https', 8000: 'http|https', ...}

operator, duration = FilterOperator("-mrt").parse("<10s")   # ('<', timedelta(seconds=10))
```

- `probekit.customheader.CustomHeaders` – header lines, with `has(name)`.
- `probekit.customlist.CustomList` – IPs and CIDRs given inline or in files
  (files may name further files, up to ten levels).
- `probekit.httputilz.parse_request(text, unsafe)` – splits raw request text
  into a `ParsedRequest`; `normalize_spaces` collapses whitespace.
- `probekit.fileutil` – `load_file`, `list_files_with_pattern`, `has_stdin`
  and related helpers.
- `probekit.healthcheck.do_health_check(config_path)` – reports version,
  platform, config-file read/write access and IPv4/IPv6 connectivity.
- `probekit.banner.show_banner()` – writes the banner and version to stderr.

## Comparing two builds

`probekit-functional` runs every non-blank line of a test-case file against
two probe executables and reports whether they print the same number of
result lines. Each line is a target, a separator word, then the arguments to
pass.

```
probekit-functional -main ./old-build -dev ./new-build -testcases cases.txt
```

Set `DEBUG=true` to see the executables' own error output. The command exits
with status 1 if any case fails or differs.

## What this package does not do

There is no command that reads a list of targets and probes them; the library
calls above are the way to probe. `probekit.testutils` pipes a URL into an
executable named `./probekit` in the current directory, which this package
does not provide. There are no screenshots, CDN detection, JARM
fingerprints, error-page classification or resume files.