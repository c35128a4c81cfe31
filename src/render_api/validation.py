"""Target URL validation.

Only absolute ``http``/``https`` URLs may reach the browser. This is the
boundary that keeps ``file:``, ``javascript:`` and similar schemes out.
"""

from typing import Any
from urllib.parse import urlsplit

from render_api.errors import InvalidTargetError

ALLOWED_SCHEMES = frozenset({"http", "https"})


def is_allowed_target(url: Any) -> bool:
    """Return True if ``url`` is an absolute http(s) URL."""
    if not isinstance(url, str) or not url.strip():
        return False
    try:
        parts = urlsplit(url.strip())
        # Accessing .port validates the port component
        parts.port
    except ValueError:
        return False
    return parts.scheme.lower() in ALLOWED_SCHEMES and bool(parts.hostname)


def require_target(url: Any) -> str:
    """Return ``url`` without surrounding whitespace, or raise InvalidTargetError."""
    if not is_allowed_target(url):
        raise InvalidTargetError("Invalid url", cause=ValueError(f"not an absolute http(s) URL: {url!r}"))
    return url.strip()
