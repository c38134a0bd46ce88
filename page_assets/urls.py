"""Resolution of attribute values into absolute URLs."""

from __future__ import annotations

import re
from typing import Optional
from urllib.parse import urljoin, urlsplit, urlunsplit

import idna
from requests.utils import requote_uri

from .errors import InvalidBaseURLError

# Schemes that always carry an authority component.
SPECIAL_SCHEMES = {"http", "https", "ftp", "ws", "wss"}

_STRIP_CHARS = "".join(chr(code) for code in range(0x21))
_TAB_OR_NEWLINE = re.compile(r"[\t\n\r]")
_FORBIDDEN_HOST_CHARS = re.compile(r"[\s\"<>\\^`{|}%]")


def _clean(value: str) -> str:
    """Trim control characters and whitespace the way browsers do."""
    return _TAB_OR_NEWLINE.sub("", value.strip(_STRIP_CHARS))


def _ascii_netloc(netloc: str) -> Optional[str]:
    """Punycode a non-ASCII host, keeping userinfo and port as written."""
    userinfo, at, hostport = netloc.rpartition("@")
    host, colon, port = hostport.rpartition(":")
    if not colon:
        host, port = hostport, ""
    try:
        ascii_host = idna.encode(host, uts46=True).decode("ascii")
    except idna.IDNAError:
        return None
    return f"{userinfo}{at}{ascii_host}{colon}{port}"


def _validate(candidate: str) -> Optional[str]:
    try:
        parts = urlsplit(candidate)
        parts.port  # raises ValueError for non-numeric or out-of-range ports
    except ValueError:
        return None
    if not parts.scheme:
        return None
    if parts.scheme in SPECIAL_SCHEMES:
        host = parts.hostname or ""
        if not host or _FORBIDDEN_HOST_CHARS.search(host):
            return None
        if not host.isascii():
            netloc = _ascii_netloc(parts.netloc)
            if netloc is None:
                return None
            candidate = urlunsplit(parts._replace(netloc=netloc))
    return requote_uri(candidate)


def parse_absolute_url(value: str) -> Optional[str]:
    """Return ``value`` normalized if it is already an absolute URL."""
    cleaned = _clean(value)
    try:
        scheme = urlsplit(cleaned).scheme
    except ValueError:
        return None
    if not scheme:
        return None
    return _validate(cleaned)


def resolve_url(base_url: str, value: str) -> Optional[str]:
    """Join ``value`` against ``base_url``; ``None`` if the result is malformed."""
    try:
        joined = urljoin(base_url, _clean(value))
    except ValueError:
        return None
    return _validate(joined)


def require_base_url(base_url: str) -> str:
    """Validate the document base URL, raising if it cannot anchor relative links."""
    normalized = parse_absolute_url(base_url) if isinstance(base_url, str) else None
    if normalized is None:
        raise InvalidBaseURLError(str(base_url))
    parts = urlsplit(normalized)
    if not parts.netloc and parts.scheme != "file":
        raise InvalidBaseURLError(base_url)
    return normalized
