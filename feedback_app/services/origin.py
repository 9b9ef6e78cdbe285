from typing import Optional, Tuple
from urllib.parse import urlsplit

_DEFAULT_PORTS = {"http": 80, "https": 443}


def _origin_key(value) -> Optional[Tuple[str, str, int]]:
    """
    Reduce a URL or Origin header to (scheme, host, port).
    Returns None for anything that is not an absolute http(s) URL.
    """
    if not isinstance(value, str):
        return None
    value = value.strip()
    if not value or value.lower() == "null":
        return None
    try:
        parts = urlsplit(value)
        scheme = (parts.scheme or "").lower()
        host = (parts.hostname or "").lower()
        port = parts.port  # raises ValueError on a bad port
    except ValueError:
        return None
    if scheme not in _DEFAULT_PORTS or not host:
        return None
    if parts.username or parts.password:
        return None
    return scheme, host.rstrip("."), port or _DEFAULT_PORTS[scheme]


def is_allowed(declared_origin, registered_url) -> bool:
    """True only when the request origin and the form's URL name the same origin."""
    declared = _origin_key(declared_origin)
    if declared is None:
        return False
    registered = _origin_key(registered_url)
    if registered is None:
        return False
    return declared == registered
