"""
Classified outcomes and typed results.

``Outcome`` is what the dispatcher produces for one request before any
structured decoding. ``TypedResult`` is the only value handed to callers.
Both are closed unions: code consuming them checks every variant.
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar, Union

from network_manager.core.http.exceptions import ErrorKind, NetworkError

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class TransportFailure:
    """The transport reported an error; any body it returned is kept."""

    code: int
    body: Optional[bytes] = None
    original_error: Optional[Exception] = None


@dataclass(frozen=True)
class NoResponse:
    """The transport returned nothing that can be read as an HTTP response."""


@dataclass(frozen=True)
class StatusError:
    status_code: int
    body: Optional[bytes] = None


@dataclass(frozen=True)
class Success:
    body: Optional[bytes] = None
    status_code: int = 200


Outcome = Union[TransportFailure, NoResponse, StatusError, Success]


@dataclass(frozen=True)
class Decoded(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Failed(Generic[E]):
    """
    A failed call.

    ``error_body`` is a best-effort decode of the response payload into the
    caller's error type and is None whenever that was not possible.
    """

    error: NetworkError
    error_body: Optional[E] = None

    @property
    def ok(self) -> bool:
        return False

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind

    def unwrap(self):
        raise self.error


TypedResult = Union[Decoded[T], Failed[E]]
