"""URL normalization for LinkGuard.

Turns arbitrary user input into a structurally valid absolute URL. Input
without an http(s) scheme is treated as an HTTPS candidate, so a bare domain
such as ``example.com`` becomes ``https://example.com/``.

The href is serialized the way a browser's URL parser would: only the
characters of each component's percent-encode set are escaped, so
characters such as ``^`` or ``|`` in a path survive for the lexical checks.
"""

from __future__ import annotations

import re
import string
from dataclasses import dataclass
from ipaddress import IPv6Address
from urllib.parse import quote, urlsplit, urlunsplit

# http(s) scheme plus any run of slashes; the authority always follows.
_SCHEME_RE = re.compile(r"^(https?):[/\\]*", re.IGNORECASE)

_LABEL_SEPARATORS = re.compile("[.。．｡]")

# Characters that may never appear in a hostname.
_FORBIDDEN_HOST_CHARS = frozenset(" \t\n\r#/:<>?@[\\]^|%\"'`{}")

_DEFAULT_PORTS = {"http": 80, "https": 443}


def _safe_except(excluded: str, base: str = string.punctuation) -> str:
    return "".join(c for c in base if c not in excluded)


# Printable ASCII left as typed per component. Everything else (space,
# controls, non-ASCII, and the listed characters) is percent-encoded.
_FRAGMENT_SAFE = _safe_except('"<>`')
_QUERY_SAFE = _safe_except("\"#<>'")
_PATH_SAFE = _safe_except('"#<>?`{}')
_USERINFO_SAFE = _safe_except("/:;=@[\\]^|", base=_PATH_SAFE)


class MalformedURL(ValueError):
    """Raised when input cannot be parsed into an absolute URL."""

    def __init__(self, raw: str, reason: str) -> None:
        super().__init__(f"Malformed URL detected ({reason}). Security sweep aborted.")
        self.raw = raw
        self.reason = reason


@dataclass(frozen=True)
class NormalizedURL:
    """An absolute URL in canonical form."""

    scheme: str
    hostname: str
    port: int | None
    path: str
    href: str


def normalize_url(raw: str) -> NormalizedURL:
    """Parse user input into a NormalizedURL.

    ``http:example.com`` and ``http:/example.com`` are read the same as
    ``http://example.com``.

    Args:
        raw: The URL as typed by the user.

    Returns:
        The normalized URL.

    Raises:
        MalformedURL: If the input is empty or has no valid host.
    """
    sanitized = (raw or "").strip()
    if not sanitized:
        raise MalformedURL(raw, "empty input")

    match = _SCHEME_RE.match(sanitized)
    if match:
        candidate = f"{match.group(1)}://{sanitized[match.end():]}"
    else:
        candidate = f"https://{sanitized}"

    try:
        parts = urlsplit(candidate)
        port = parts.port
    except ValueError as exc:
        raise MalformedURL(raw, str(exc)) from exc

    scheme = parts.scheme.lower()
    if not parts.netloc:
        raise MalformedURL(raw, "missing host")

    userinfo, _, hostport = parts.netloc.rpartition("@")
    hostname = _normalize_host(raw, hostport, port)

    if port == _DEFAULT_PORTS.get(scheme):
        port = None

    host_display = f"[{hostname}]" if ":" in hostname else hostname
    netloc = host_display if port is None else f"{host_display}:{port}"
    credentials = _encode_userinfo(userinfo)
    if credentials:
        netloc = f"{credentials}@{netloc}"

    path = quote(parts.path, safe=_PATH_SAFE) or "/"
    query = quote(parts.query, safe=_QUERY_SAFE)
    fragment = quote(parts.fragment, safe=_FRAGMENT_SAFE)
    href = urlunsplit((scheme, netloc, path, query, fragment))

    return NormalizedURL(scheme=scheme, hostname=hostname, port=port, path=path, href=href)


def _encode_userinfo(userinfo: str) -> str:
    """Percent-encode ``user:password``; an empty password drops the colon."""
    username, _, password = userinfo.partition(":")
    encoded = quote(username, safe=_USERINFO_SAFE)
    if password:
        encoded += ":" + quote(password, safe=_USERINFO_SAFE)
    return encoded


def _normalize_host(raw: str, hostport: str, port: int | None) -> str:
    """Validate the host part of a netloc and return its canonical form.

    ASCII labels are only lowercased, so over-long or empty labels are kept
    as typed. Labels with non-ASCII characters are IDNA-encoded.

    Args:
        raw: Original input, for error reporting.
        hostport: The netloc with any userinfo removed.
        port: The parsed port, if any.

    Returns:
        Lowercased ASCII hostname (IPv6 addresses without brackets).

    Raises:
        MalformedURL: If the host is empty or invalid.
    """
    if hostport.startswith("["):
        literal, sep, _rest = hostport[1:].partition("]")
        if not sep:
            raise MalformedURL(raw, "unbalanced IPv6 brackets")
        try:
            return IPv6Address(literal).compressed
        except ValueError as exc:
            raise MalformedURL(raw, f"invalid IPv6 address {literal!r}") from exc

    host = hostport
    if port is not None or host.endswith(":"):
        host = host.rsplit(":", 1)[0]

    host = host.lower()
    if not host:
        raise MalformedURL(raw, "missing host")

    bad = sorted(set(host) & _FORBIDDEN_HOST_CHARS)
    if bad:
        raise MalformedURL(raw, f"forbidden host characters {''.join(bad)!r}")

    labels = []
    for label in _LABEL_SEPARATORS.split(host):
        if not label.isascii():
            try:
                label = label.encode("idna").decode("ascii").lower()
            except UnicodeError as exc:
                raise MalformedURL(raw, f"invalid host label {label!r}") from exc
        labels.append(label)
    return ".".join(labels)
