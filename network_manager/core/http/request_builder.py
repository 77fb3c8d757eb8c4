"""
Request descriptors handed to the dispatcher.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Mapping, Optional, Union

import httpx


class HTTPMethod(str, Enum):
    GET = "GET"
    PUT = "PUT"
    POST = "POST"
    DELETE = "DELETE"


@dataclass(frozen=True)
class HTTPRequest:
    """
    Immutable description of one HTTP call.

    Owned by the dispatcher for the duration of the call.
    """

    method: HTTPMethod
    url: httpx.URL
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None


def construct_request(
    method: Union[HTTPMethod, str],
    url: Union[httpx.URL, str],
    headers: Optional[Mapping[str, str]] = None,
    body: Optional[bytes] = None
) -> HTTPRequest:
    """
    Combine method, URL, headers and body into a request descriptor.

    Args:
        method: HTTPMethod or its name ("get", "POST", ...)
        url: Target URL, normally produced by construct_url
        headers: Header map; names are case-insensitive and a later spelling
            of the same name replaces the earlier one
        body: Encoded request body (optional)

    Returns:
        HTTPRequest descriptor

    Raises:
        ValueError: If method is not one of GET, PUT, POST, DELETE
    """
    if not isinstance(method, HTTPMethod):
        method = HTTPMethod(str(method).upper())

    applied: Dict[str, str] = {}
    spellings: Dict[str, str] = {}
    for name, value in (headers or {}).items():
        previous = spellings.pop(name.lower(), None)
        if previous is not None:
            del applied[previous]
        spellings[name.lower()] = name
        applied[name] = value

    return HTTPRequest(
        method=method,
        url=url if isinstance(url, httpx.URL) else httpx.URL(url),
        headers=applied,
        body=body
    )
