"""Web URI Check — pure syntax test for "is this a well-formed http(s) URI".

Invariants:
    - Only http and https schemes qualify (case-insensitive)
    - An authority (host) component is mandatory
    - Characters outside the RFC 3986 set and malformed %-escapes are rejected
    - The empty string is not a web URI
    - No length limit
"""

import re
from typing import Annotated
from urllib.parse import urlsplit

from pydantic import AnyUrl, TypeAdapter, UrlConstraints, ValidationError

_ILLEGAL_CHARS = re.compile(r"[^a-z0-9:/?#\[\]@!$&'()*+,;=.\-_~%]", re.IGNORECASE)
_BAD_ESCAPE = re.compile(r"%(?![0-9a-f]{2})", re.IGNORECASE)
_WEB_SCHEMES = ("http", "https")

# HttpUrl caps length at 2083; web URIs have no length limit
_web_url = TypeAdapter(Annotated[
    AnyUrl, UrlConstraints(allowed_schemes=list(_WEB_SCHEMES), host_required=True),
])


def is_web_uri(value: object) -> bool:
    """Return True when value is an absolute http(s) URI with a host."""
    if not isinstance(value, str) or not value:
        return False
    if _ILLEGAL_CHARS.search(value) or _BAD_ESCAPE.search(value):
        return False

    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    if parts.scheme.lower() not in _WEB_SCHEMES or not parts.netloc:
        return False

    # Host, port and IP-literal rules
    try:
        _web_url.validate_python(value)
    except ValidationError:
        return False
    return True
