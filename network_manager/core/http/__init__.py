"""
Request/response pipeline.

This module provides URL and request construction, dispatch with outcome
classification, and dual-type decoding of response bodies.
"""

from network_manager.core.http.client import NetworkManager
from network_manager.core.http.completion import (
    CompletionContext,
    EventLoopCompletionContext,
    SerialExecutorCompletionContext
)
from network_manager.core.http.decoder import DecoderPipeline
from network_manager.core.http.dispatcher import Dispatcher
from network_manager.core.http.exceptions import (
    ConstructingURLFailedError,
    DataTaskError,
    DecodingFailedError,
    ErrorKind,
    InvalidBaseURLError,
    NetworkError,
    NoDataReturnedError,
    NoNetworkResponseError,
    ResponseError,
    TransportErrorCode
)
from network_manager.core.http.form_encoder import FORM_CONTENT_TYPE, encode_form
from network_manager.core.http.outcomes import (
    Decoded,
    Failed,
    NoResponse,
    Outcome,
    StatusError,
    Success,
    TransportFailure,
    TypedResult
)
from network_manager.core.http.request_builder import HTTPMethod, HTTPRequest, construct_request
from network_manager.core.http.url_builder import construct_url

__all__ = [
    "NetworkManager",
    "CompletionContext",
    "EventLoopCompletionContext",
    "SerialExecutorCompletionContext",
    "DecoderPipeline",
    "Dispatcher",
    "ErrorKind",
    "TransportErrorCode",
    "NetworkError",
    "ConstructingURLFailedError",
    "InvalidBaseURLError",
    "DataTaskError",
    "NoNetworkResponseError",
    "NoDataReturnedError",
    "DecodingFailedError",
    "ResponseError",
    "FORM_CONTENT_TYPE",
    "encode_form",
    "Decoded",
    "Failed",
    "Outcome",
    "TransportFailure",
    "NoResponse",
    "StatusError",
    "Success",
    "TypedResult",
    "HTTPMethod",
    "HTTPRequest",
    "construct_request",
    "construct_url",
]
