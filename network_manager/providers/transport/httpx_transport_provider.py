import socket
import ssl
from types import MappingProxyType
from typing import Dict, Mapping, Optional

import httpx

from network_manager.core.http.exceptions import TransportErrorCode
from network_manager.core.http.request_builder import HTTPRequest
from network_manager.core.logging import get_logger
from network_manager.providers.transport.base_transport_provider import (
    RawResponse,
    RawTransportError,
    RawTransportResult,
    TransportProvider
)

logger = get_logger(__name__)


def _caused_by(error: BaseException, exc_type: type) -> bool:
    seen = set()
    current: Optional[BaseException] = error
    while current is not None and id(current) not in seen:
        if isinstance(current, exc_type):
            return True
        seen.add(id(current))
        current = current.__cause__ or current.__context__
    return False


def error_code_for(error: Exception) -> int:
    """Map an httpx exception onto a native transport error code."""
    if isinstance(error, httpx.TimeoutException):
        return TransportErrorCode.TIMED_OUT
    if isinstance(error, httpx.ConnectError):
        if _caused_by(error, socket.gaierror):
            return TransportErrorCode.CANNOT_FIND_HOST
        if _caused_by(error, ssl.SSLError):
            return TransportErrorCode.SECURE_CONNECTION_FAILED
        return TransportErrorCode.CANNOT_CONNECT_TO_HOST
    if isinstance(error, httpx.UnsupportedProtocol):
        return TransportErrorCode.UNSUPPORTED_URL
    if isinstance(error, httpx.RemoteProtocolError):
        return TransportErrorCode.BAD_SERVER_RESPONSE
    if isinstance(error, (httpx.ReadError, httpx.WriteError, httpx.CloseError)):
        return TransportErrorCode.NETWORK_CONNECTION_LOST
    if isinstance(error, httpx.TooManyRedirects):
        return TransportErrorCode.TOO_MANY_REDIRECTS
    if isinstance(error, httpx.InvalidURL):
        return TransportErrorCode.BAD_URL
    return TransportErrorCode.UNKNOWN


class HTTPXTransportProvider(TransportProvider):
    """
    Transport provider built on httpx.AsyncClient.

    One instance holds one connection pool and is meant to be shared across
    the process. Default headers, timeouts and redirect policy are fixed at
    construction.

    Example:
        ```python
        transport = HTTPXTransportProvider(default_headers={"Accept": "application/json"})
        manager = NetworkManager(transport=transport)
        ```
    """

    def __init__(
        self,
        default_headers: Optional[Mapping[str, str]] = None,
        timeout: float = 30.0,
        connect_timeout: Optional[float] = None,
        follow_redirects: bool = True,
        max_redirects: int = 5,
        max_connections: int = 20,
        max_keepalive_connections: int = 10,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize httpx transport provider.

        Args:
            default_headers: Headers added to every request
            timeout: Default timeout in seconds for all requests (default: 30.0)
            connect_timeout: Connect timeout in seconds (defaults to timeout)
            follow_redirects: Whether redirects are followed
            max_redirects: Redirect limit when following redirects
            max_connections: Connection pool size
            max_keepalive_connections: Idle connections kept in the pool
            transport: Custom httpx transport, e.g. httpx.MockTransport in tests
        """
        self._default_headers: Dict[str, str] = dict(default_headers or {})
        self.timeout = timeout
        self._client = httpx.AsyncClient(
            headers=self._default_headers,
            timeout=httpx.Timeout(timeout, connect=connect_timeout or timeout),
            follow_redirects=follow_redirects,
            max_redirects=max_redirects,
            limits=httpx.Limits(
                max_connections=max_connections,
                max_keepalive_connections=max_keepalive_connections
            ),
            transport=transport
        )

    @classmethod
    def from_config(
        cls,
        default_headers: Optional[Mapping[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> "HTTPXTransportProvider":
        """Create a provider from the environment-driven settings in core.config."""
        from network_manager.core import config

        headers = {"User-Agent": config.NETWORK_USER_AGENT}
        headers.update(default_headers or {})

        return cls(
            default_headers=headers,
            timeout=config.NETWORK_TIMEOUT,
            connect_timeout=config.NETWORK_CONNECT_TIMEOUT,
            follow_redirects=config.NETWORK_FOLLOW_REDIRECTS,
            max_redirects=config.NETWORK_MAX_REDIRECTS,
            max_connections=config.NETWORK_MAX_CONNECTIONS,
            max_keepalive_connections=config.NETWORK_MAX_KEEPALIVE_CONNECTIONS,
            transport=transport
        )

    async def send(self, request: HTTPRequest) -> RawTransportResult:
        """Send the request through the shared httpx client."""
        try:
            httpx_request = self._client.build_request(
                request.method.value,
                request.url,
                headers=request.headers,
                content=request.body
            )
            response = await self._client.send(httpx_request)

        except (httpx.HTTPError, httpx.InvalidURL) as e:
            code = error_code_for(e)
            logger.debug(f"{request.method.value} {request.url} failed with code {code}: {e}")
            return RawTransportResult(error=RawTransportError(code=code, original_error=e))

        except Exception as e:
            logger.debug(f"Unexpected transport error during {request.method.value} {request.url}: {e}")
            return RawTransportResult(
                error=RawTransportError(code=TransportErrorCode.UNKNOWN, original_error=e)
            )

        return RawTransportResult(
            body=response.content,
            response=RawResponse(
                status_code=response.status_code,
                headers=dict(response.headers)
            )
        )

    @property
    def default_headers(self) -> Mapping[str, str]:
        return MappingProxyType(self._default_headers)

    @property
    def provider_name(self) -> str:
        return "httpx"

    async def aclose(self) -> None:
        await self._client.aclose()
