"""
Error taxonomy for network manager operations.

This module provides a hierarchy of exceptions describing every way a call
can fail. Failures are normally delivered as values inside a ``Failed``
result; they are only raised by the URL builder and by ``Failed.unwrap()``.
"""

from enum import Enum, IntEnum
from typing import Optional


class ErrorKind(str, Enum):
    """Fixed set of failure categories reported to callers."""

    CONSTRUCTING_URL_FAILED = "constructing_url_failed"
    DATA_TASK_ERROR = "data_task_error"
    NO_NETWORK_RESPONSE = "no_network_response"
    NO_DATA_RETURNED = "no_data_returned"
    DECODING_FAILED = "decoding_failed"
    RESPONSE_ERROR = "response_error"


class TransportErrorCode(IntEnum):
    """
    Native transport error codes.

    Values follow the Foundation URL loading error codes so that callers
    porting code from other clients see familiar numbers.
    """

    UNKNOWN = -1
    CANCELLED = -999
    BAD_URL = -1000
    TIMED_OUT = -1001
    UNSUPPORTED_URL = -1002
    CANNOT_FIND_HOST = -1003
    CANNOT_CONNECT_TO_HOST = -1004
    NETWORK_CONNECTION_LOST = -1005
    TOO_MANY_REDIRECTS = -1007
    BAD_SERVER_RESPONSE = -1011
    SECURE_CONNECTION_FAILED = -1200


class NetworkError(Exception):
    """
    Base exception for all network manager errors.

    Catch this to handle any failure generically, or inspect ``kind``.
    """

    kind: ErrorKind

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        original_error: Optional[Exception] = None
    ):
        """
        Initialize network error.

        Args:
            message: Human-readable error description
            url: The URL that was being accessed (optional)
            status_code: HTTP status code if applicable (optional)
            original_error: The underlying exception that caused this error (optional)
        """
        self.message = message
        self.url = url
        self.status_code = status_code
        self.original_error = original_error

        super().__init__(self.message)

    def __str__(self) -> str:
        """Return string representation of the error."""
        parts = [self.message]
        if self.url:
            parts.append(f"URL: {self.url}")
        if self.status_code:
            parts.append(f"Status: {self.status_code}")
        return " | ".join(parts)


class ConstructingURLFailedError(NetworkError):
    """
    Raised when the base string or components cannot form a valid URL.

    Detected before dispatch, so no network call is made.
    """

    kind = ErrorKind.CONSTRUCTING_URL_FAILED


class InvalidBaseURLError(ConstructingURLFailedError):
    """The base string is not an absolute URL."""
    pass


class DataTaskError(NetworkError):
    """
    Transport-level failure: DNS, TLS, timeout, connection reset, cancellation.

    The transport's native error code is kept in ``code``.
    """

    kind = ErrorKind.DATA_TASK_ERROR

    def __init__(
        self,
        code: int,
        url: Optional[str] = None,
        original_error: Optional[Exception] = None
    ):
        self.code = code
        try:
            label = TransportErrorCode(code).name.lower().replace("_", " ")
        except ValueError:
            label = "transport error"
        super().__init__(
            message=f"Data task failed with code {code} ({label})",
            url=url,
            original_error=original_error
        )


class NoNetworkResponseError(NetworkError):
    """The transport returned something that is not an HTTP response."""

    kind = ErrorKind.NO_NETWORK_RESPONSE


class NoDataReturnedError(NetworkError):
    """A 2xx response carried no body although a structured type was expected."""

    kind = ErrorKind.NO_DATA_RETURNED


class DecodingFailedError(NetworkError):
    """The success body could not be decoded into the requested type."""

    kind = ErrorKind.DECODING_FAILED


class ResponseError(NetworkError):
    """The server answered with a non-2xx status code."""

    kind = ErrorKind.RESPONSE_ERROR

    def __init__(self, status_code: int, url: Optional[str] = None):
        super().__init__(
            message=f"HTTP {status_code} error",
            url=url,
            status_code=status_code
        )
