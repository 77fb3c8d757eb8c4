from typing import Awaitable, Callable, List, Optional

import httpx
from pydantic import BaseModel

from network_manager.core.http.request_builder import HTTPRequest
from network_manager.providers.transport.base_transport_provider import (
    RawTransportResult,
    TransportProvider
)
from network_manager.providers.transport.httpx_transport_provider import HTTPXTransportProvider

Handler = Callable[[httpx.Request], Awaitable[httpx.Response]]


class User(BaseModel):
    id: int
    name: str


class ErrorMessage(BaseModel):
    message: str


class FakeTransport(TransportProvider):
    """Returns canned raw results and records every request it receives."""

    def __init__(self, results: Optional[List[RawTransportResult]] = None) -> None:
        self.results = list(results or [])
        self.requests: List[HTTPRequest] = []
        self.closed = False

    async def send(self, request: HTTPRequest) -> RawTransportResult:
        self.requests.append(request)
        if not self.results:
            raise AssertionError("No more fake results available")
        return self.results.pop(0)

    @property
    def default_headers(self):
        return {}

    @property
    def provider_name(self) -> str:
        return "fake"

    async def aclose(self) -> None:
        self.closed = True


def mock_provider(handler: Handler, **kwargs) -> HTTPXTransportProvider:
    return HTTPXTransportProvider(transport=httpx.MockTransport(handler), **kwargs)
