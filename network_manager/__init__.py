"""Generic asynchronous HTTP client facade with typed response decoding."""

from network_manager.core.http import (
    ConstructingURLFailedError,
    DataTaskError,
    Decoded,
    DecodingFailedError,
    ErrorKind,
    EventLoopCompletionContext,
    Failed,
    HTTPMethod,
    HTTPRequest,
    NetworkError,
    NetworkManager,
    NoDataReturnedError,
    NoNetworkResponseError,
    ResponseError,
    SerialExecutorCompletionContext,
    TransportErrorCode,
    TypedResult,
    construct_request,
    construct_url,
    encode_form
)
from network_manager.pydantic_models.errors.api_error_model import APIErrorModel
from network_manager.providers.transport.base_transport_provider import TransportProvider
from network_manager.providers.transport.httpx_transport_provider import HTTPXTransportProvider

__version__ = "1.0.0"

__all__ = [
    "NetworkManager",
    "construct_url",
    "construct_request",
    "encode_form",
    "HTTPMethod",
    "HTTPRequest",
    "Decoded",
    "Failed",
    "TypedResult",
    "ErrorKind",
    "TransportErrorCode",
    "NetworkError",
    "ConstructingURLFailedError",
    "DataTaskError",
    "NoNetworkResponseError",
    "NoDataReturnedError",
    "DecodingFailedError",
    "ResponseError",
    "EventLoopCompletionContext",
    "SerialExecutorCompletionContext",
    "TransportProvider",
    "HTTPXTransportProvider",
    "APIErrorModel",
]
