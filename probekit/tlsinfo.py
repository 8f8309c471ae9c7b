"""TLS connection details and certificate summaries."""

from __future__ import annotations

import hashlib
import socket
import ssl
from dataclasses import dataclass, field
from datetime import datetime, timezone

from cryptography import x509
from cryptography.x509.oid import ExtensionOID, NameOID

_VERSIONS = {
    "TLSv1": "tls10",
    "TLSv1.1": "tls11",
    "TLSv1.2": "tls12",
    "TLSv1.3": "tls13",
}


@dataclass
class CertificateResponse:
    """Summary of a leaf certificate."""

    subject_an: list[str] = field(default_factory=list)
    emails: list[str] = field(default_factory=list)
    not_before: datetime | None = None
    not_after: datetime | None = None
    expired: bool = False
    self_signed: bool = False
    mismatched: bool = False
    wildcard_cert: bool = False
    issuer_cn: str = ""
    issuer_org: list[str] = field(default_factory=list)
    subject_cn: str = ""
    subject_org: list[str] = field(default_factory=list)
    fingerprint_md5: str = ""
    fingerprint_sha1: str = ""
    fingerprint_sha256: str = ""
    issuer_dn: str = ""
    subject_dn: str = ""


@dataclass
class TLSResponse:
    """Details of a TLS handshake with a host."""

    host: str
    port: str
    version: str = ""
    cipher: str = ""
    tls_connection: str = "ctls"
    server_name: str = ""
    probe_status: bool = True
    certificate: CertificateResponse | None = None


def _attr_values(name: x509.Name, oid) -> list[str]:
    return [str(attr.value) for attr in name.get_attributes_for_oid(oid)]


def _first(values: list[str]) -> str:
    return values[0] if values else ""


def _extension(cert: x509.Certificate, oid):
    try:
        return cert.extensions.get_extension_for_oid(oid).value
    except x509.ExtensionNotFound:
        return None


def _utc(cert: x509.Certificate, attr: str) -> datetime:
    value = getattr(cert, attr + "_utc", None)
    if value is None:
        value = getattr(cert, attr).replace(tzinfo=timezone.utc)
    return value


def _name_matches(hostname: str, name: str) -> bool:
    hostname, name = hostname.lower().rstrip("."), name.lower().rstrip(".")
    if name.startswith("*."):
        head, _, rest = hostname.partition(".")
        return bool(head) and rest == name[2:]
    return hostname == name


def convert_certificate(hostname: str, der: bytes) -> CertificateResponse:
    """Summarise a DER encoded certificate as seen from ``hostname``."""
    cert = x509.load_der_x509_certificate(der)
    san = _extension(cert, ExtensionOID.SUBJECT_ALTERNATIVE_NAME)
    dns_names = san.get_values_for_type(x509.DNSName) if san is not None else []
    emails = san.get_values_for_type(x509.RFC822Name) if san is not None else []
    subject_cn = _first(_attr_values(cert.subject, NameOID.COMMON_NAME))
    names = [*dns_names, subject_cn]

    aki = _extension(cert, ExtensionOID.AUTHORITY_KEY_IDENTIFIER)
    ski = _extension(cert, ExtensionOID.SUBJECT_KEY_IDENTIFIER)
    authority_id = (aki.key_identifier or b"") if aki is not None else b""
    subject_id = ski.digest if ski is not None else b""

    not_after = _utc(cert, "not_valid_after")
    return CertificateResponse(
        subject_an=list(dns_names),
        emails=list(emails),
        not_before=_utc(cert, "not_valid_before"),
        not_after=not_after,
        expired=not_after < datetime.now(timezone.utc),
        self_signed=not authority_id or authority_id == subject_id,
        mismatched=not any(_name_matches(hostname, n) for n in names if n),
        wildcard_cert=any(n.startswith("*.") for n in names),
        issuer_cn=_first(_attr_values(cert.issuer, NameOID.COMMON_NAME)),
        issuer_org=_attr_values(cert.issuer, NameOID.ORGANIZATION_NAME),
        subject_cn=subject_cn,
        subject_org=_attr_values(cert.subject, NameOID.ORGANIZATION_NAME),
        fingerprint_md5=hashlib.md5(der).hexdigest(),
        fingerprint_sha1=hashlib.sha1(der).hexdigest(),
        fingerprint_sha256=hashlib.sha256(der).hexdigest(),
        issuer_dn=cert.issuer.rfc4514_string(),
        subject_dn=cert.subject.rfc4514_string(),
    )


def tls_grab(host: str, port: int = 443, server_name: str = "", timeout: float = 10.0) -> TLSResponse | None:
    """Handshake with ``host:port`` and describe the session, or ``None`` on failure."""
    context = ssl.create_default_context()
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    sni = server_name or host
    try:
        with socket.create_connection((host, port), timeout=timeout or None) as raw:
            with context.wrap_socket(raw, server_hostname=sni) as conn:
                der = conn.getpeercert(binary_form=True)
                version = conn.version() or ""
                cipher = conn.cipher()
    except (OSError, ValueError):
        return None
    if not der:
        return None
    return TLSResponse(
        host=host,
        port=str(port),
        version=_VERSIONS.get(version, ""),
        cipher=cipher[0] if cipher else "",
        server_name=server_name,
        certificate=convert_certificate(host, der),
    )