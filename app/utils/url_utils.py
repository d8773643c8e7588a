"""
Helpers for profile links (website and social network handles).
"""

import re

from app.core.config import settings

_SCHEME_PATTERN = re.compile(r"^https?://", re.IGNORECASE)


def ensure_url_scheme(value: str, scheme: str = None) -> str:
    """
    Prefix a scheme to a link that does not already carry one.

    Links that start with http:// or https:// are returned untouched. A bare
    host that merely begins with "http" (httpbin.org) still gets a scheme.

    Args:
        value: Link as entered by the user, e.g. "example.com"
        scheme: Scheme to prefix, defaults to DEFAULT_URL_SCHEME

    Returns:
        str: Link with a scheme, e.g. "https://example.com"
    """
    if _SCHEME_PATTERN.match(value):
        return value
    return f"{scheme or settings.DEFAULT_URL_SCHEME}://{value}"
