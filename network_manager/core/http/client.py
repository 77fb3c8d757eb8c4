"""
Network manager facade.

This module wires the URL builder, request builder, dispatcher, decoder
pipeline and completion context into the public request API.
"""

import asyncio
import functools
from typing import Any, Mapping, Optional, Sequence, Set, Union

import httpx

from network_manager.core.http.completion import (
    Completion,
    CompletionContext,
    EventLoopCompletionContext
)
from network_manager.core.http.decoder import DecoderPipeline
from network_manager.core.http.dispatcher import Dispatcher
from network_manager.core.http.exceptions import (
    ConstructingURLFailedError,
    DataTaskError,
    TransportErrorCode
)
from network_manager.core.http.outcomes import Failed, TypedResult
from network_manager.core.http.request_builder import (
    HTTPMethod,
    HTTPRequest,
    construct_request
)
from network_manager.core.http.structured_decoder import StructuredDecoder
from network_manager.core.http.url_builder import construct_url
from network_manager.core.logging import get_logger
from network_manager.providers.transport.base_transport_provider import TransportProvider
from network_manager.providers.transport.httpx_transport_provider import HTTPXTransportProvider

logger = get_logger(__name__)


class NetworkManager:
    """
    Generic asynchronous HTTP client facade.

    Builds requests, executes them through a shared transport, classifies the
    outcome and decodes the body into the caller's success type, or on failure
    into the caller's error-body type when possible.

    Example:
        ```python
        def on_result(result):
            if result.ok:
                print(result.value.name)
            else:
                print(result.kind, result.error_body)

        manager = NetworkManager()
        manager.make_endpoint_request(
            "https://api.example.com",
            on_result,
            paths=["users", "42"],
            response_type=User,
            error_type=APIErrorModel
        )
        ```
    """

    _shared: Optional["NetworkManager"] = None

    def __init__(
        self,
        transport: Optional[TransportProvider] = None,
        completion_context: Optional[CompletionContext] = None,
        decoder: Optional[StructuredDecoder] = None
    ):
        """
        Initialize network manager.

        Args:
            transport: Shared transport; an httpx transport built from config if omitted
            completion_context: Where results are delivered; the running event loop if omitted
            decoder: Structured decoder used for success and error bodies
        """
        self._owns_transport = transport is None
        self.transport = transport or HTTPXTransportProvider.from_config()
        self.completion_context = completion_context or EventLoopCompletionContext()
        self.dispatcher = Dispatcher(self.transport)
        self.pipeline = DecoderPipeline(decoder)
        self._in_flight: Set[asyncio.Task] = set()

    @classmethod
    def shared(cls) -> "NetworkManager":
        """Process-wide manager using the default transport and completion context."""
        if cls._shared is None:
            cls._shared = cls()
        return cls._shared

    def construct_url(
        self,
        base_url: str,
        paths: Sequence[str] = (),
        queries: Optional[Mapping[str, str]] = None
    ) -> httpx.URL:
        return construct_url(base_url, paths, queries)

    def construct_request(
        self,
        method: Union[HTTPMethod, str],
        url: Union[httpx.URL, str],
        headers: Optional[Mapping[str, str]] = None,
        body: Optional[bytes] = None
    ) -> HTTPRequest:
        return construct_request(method, url, headers, body)

    async def fetch(
        self,
        request: HTTPRequest,
        *,
        response_type: Any,
        error_type: Any = None
    ) -> TypedResult:
        """
        Execute a request and return its typed result to the awaiting coroutine.

        Args:
            request: Request descriptor
            response_type: Success type (bytes for the raw body, None for status only)
            error_type: Error-body type (bytes for the raw body, None to skip)

        Returns:
            Decoded or Failed
        """
        outcome = await self.dispatcher.send(request)
        return self.pipeline.decode(outcome, response_type, error_type, url=str(request.url))

    async def fetch_endpoint(
        self,
        base_url: str,
        *,
        paths: Sequence[str] = (),
        queries: Optional[Mapping[str, str]] = None,
        method: Union[HTTPMethod, str] = HTTPMethod.GET,
        headers: Optional[Mapping[str, str]] = None,
        body: Optional[bytes] = None,
        response_type: Any,
        error_type: Any = None
    ) -> TypedResult:
        """Build and execute a request; URL failures come back as Failed without a network call."""
        try:
            url = construct_url(base_url, paths, queries)
        except ConstructingURLFailedError as e:
            return Failed(error=e)

        request = construct_request(method, url, headers, body)
        return await self.fetch(request, response_type=response_type, error_type=error_type)

    def make_request(
        self,
        request: HTTPRequest,
        completion: Completion,
        *,
        response_type: Any,
        error_type: Any = None
    ) -> asyncio.Task:
        """
        Start a request and deliver its result to completion.

        Must be called from a running event loop. completion receives exactly
        one result, on the completion context. A cancelled call is delivered
        as a DataTaskError with the CANCELLED code and must not be retried
        automatically.

        Args:
            request: Request descriptor
            completion: Callable receiving the TypedResult
            response_type: Success type (bytes for the raw body, None for status only)
            error_type: Error-body type (bytes for the raw body, None to skip)

        Returns:
            asyncio.Task that can be cancelled
        """
        task = asyncio.get_running_loop().create_task(
            self.fetch(request, response_type=response_type, error_type=error_type)
        )
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)
        task.add_done_callback(functools.partial(self._deliver, completion, str(request.url)))
        return task

    def make_endpoint_request(
        self,
        base_url: str,
        completion: Completion,
        *,
        paths: Sequence[str] = (),
        queries: Optional[Mapping[str, str]] = None,
        method: Union[HTTPMethod, str] = HTTPMethod.GET,
        headers: Optional[Mapping[str, str]] = None,
        body: Optional[bytes] = None,
        response_type: Any,
        error_type: Any = None
    ) -> Optional[asyncio.Task]:
        """
        Build the URL and request, then start it like make_request.

        If the URL cannot be built, completion receives a Failed result with
        ConstructingURLFailedError and no task is started.

        Returns:
            asyncio.Task for the call, or None when the URL was invalid
        """
        try:
            url = construct_url(base_url, paths, queries)
        except ConstructingURLFailedError as e:
            logger.debug(f"Not dispatching, URL construction failed: {e}")
            self.completion_context.dispatch(completion, Failed(error=e))
            return None

        request = construct_request(method, url, headers, body)
        return self.make_request(
            request,
            completion,
            response_type=response_type,
            error_type=error_type
        )

    def _deliver(self, completion: Completion, url: str, task: asyncio.Task) -> None:
        if task.cancelled():
            result = Failed(error=DataTaskError(TransportErrorCode.CANCELLED, url=url))
        elif task.exception() is not None:
            error = task.exception()
            logger.error(f"Unexpected error while processing {url}: {error}", exc_info=error)
            result = Failed(error=DataTaskError(TransportErrorCode.UNKNOWN, url=url, original_error=error))
        else:
            result = task.result()

        self.completion_context.dispatch(completion, result)

    async def aclose(self) -> None:
        """Close the transport if this manager created it."""
        if self._owns_transport:
            await self.transport.aclose()

    async def __aenter__(self) -> "NetworkManager":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
