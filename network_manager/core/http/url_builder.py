"""
URL construction from a base string, path segments and query parameters.
"""

from typing import Mapping, Optional, Sequence
from urllib.parse import quote, urlsplit, urlunsplit

import httpx

from network_manager.core.http.exceptions import InvalidBaseURLError


def construct_url(
    base_url: str,
    segments: Sequence[str] = (),
    queries: Optional[Mapping[str, str]] = None
) -> httpx.URL:
    """
    Build an absolute URL.

    Args:
        base_url: Absolute URL string (scheme and host are required)
        segments: Path segments appended in order, each percent-encoded on its own
        queries: Query parameters, emitted in the mapping's iteration order

    Returns:
        httpx.URL for the assembled endpoint

    Raises:
        InvalidBaseURLError: If base_url is not an absolute URL
    """
    try:
        parts = urlsplit(base_url.strip())
    except ValueError as e:
        raise InvalidBaseURLError(
            message=f"Could not parse base URL: {e}",
            url=base_url,
            original_error=e
        )

    if not parts.scheme or not parts.netloc:
        raise InvalidBaseURLError(
            message="Base URL must be absolute (scheme and host required)",
            url=base_url
        )

    path = parts.path
    encoded = [quote(segment, safe="") for segment in segments if segment]
    if encoded:
        path = path.rstrip("/") + "/" + "/".join(encoded)

    query = parts.query
    if queries:
        pairs = "&".join(
            f"{quote(str(key), safe='')}={quote(str(value), safe='')}"
            for key, value in queries.items()
        )
        query = f"{query}&{pairs}" if query else pairs

    assembled = urlunsplit((parts.scheme, parts.netloc, path, query, ""))

    try:
        return httpx.URL(assembled)
    except httpx.InvalidURL as e:
        raise InvalidBaseURLError(
            message=f"Could not build URL: {e}",
            url=base_url,
            original_error=e
        )
