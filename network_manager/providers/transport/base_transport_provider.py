from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from network_manager.core.http.request_builder import HTTPRequest


@dataclass(frozen=True)
class RawResponse:
    """Status line and headers as reported by the transport."""

    status_code: Any
    headers: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class RawTransportError:
    code: int
    original_error: Optional[Exception] = None


@dataclass(frozen=True)
class RawTransportResult:
    """
    Unclassified result of one request.

    Any combination of the three fields may be present; classifying them is
    the dispatcher's job.
    """

    body: Optional[bytes] = None
    response: Optional[RawResponse] = None
    error: Optional[RawTransportError] = None


class TransportProvider(ABC):
    """
    Abstract base class for transport providers.

    A transport owns the connection pool, timeouts and process-wide default
    headers. It is shared between calls and read-only once constructed.
    """

    @abstractmethod
    async def send(self, request: HTTPRequest) -> RawTransportResult:
        """
        Submit a request and collect whatever the transport produced.

        Transport failures are reported in the returned value, not raised.
        Task cancellation propagates as asyncio.CancelledError.

        Args:
            request: Request descriptor to submit

        Returns:
            RawTransportResult with body, response and error as available
        """
        pass

    @property
    @abstractmethod
    def default_headers(self) -> Mapping[str, str]:
        """Headers sent with every request unless overridden per request."""
        pass

    @property
    @abstractmethod
    def provider_name(self) -> str:
        pass

    async def aclose(self) -> None:
        """Release pooled connections."""
        return None
