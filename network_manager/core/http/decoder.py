"""
Decoding of classified outcomes into typed results.

Two target types drive the pipeline: the success type ``T`` and the
error-body type ``E``. ``bytes`` is the raw passthrough type for both and
skips structured decoding. ``None`` as the success type means the caller only
cares about the status; ``None`` as the error type disables error-body
decoding.

Success-path decode failures are reported as ``DecodingFailedError``.
Error-path decode failures are silent and leave ``error_body`` as None.
"""

from typing import Any, Optional

from pydantic import PydanticUserError, ValidationError

from network_manager.core.http.exceptions import (
    DataTaskError,
    DecodingFailedError,
    NoDataReturnedError,
    NoNetworkResponseError,
    ResponseError
)
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
from network_manager.core.http.structured_decoder import StructuredDecoder
from network_manager.core.logging import get_logger

logger = get_logger(__name__)

RAW_BYTES = bytes


class DecoderPipeline:

    def __init__(self, decoder: Optional[StructuredDecoder] = None):
        self.decoder = decoder or StructuredDecoder()

    def decode(
        self,
        outcome: Outcome,
        response_type: Any,
        error_type: Any = None,
        url: Optional[str] = None
    ) -> TypedResult:
        """
        Turn an outcome into the value handed to the caller.

        Args:
            outcome: Classified dispatcher outcome
            response_type: Success type, bytes for passthrough, None for status only
            error_type: Error-body type, bytes for passthrough, None to skip
            url: Request URL, recorded on errors for diagnostics

        Returns:
            Decoded on success, Failed otherwise
        """
        if isinstance(outcome, TransportFailure):
            return Failed(
                error=DataTaskError(outcome.code, url=url, original_error=outcome.original_error),
                error_body=self.decode_error_body(outcome.body, error_type)
            )

        if isinstance(outcome, NoResponse):
            return Failed(error=NoNetworkResponseError("No HTTP response received", url=url))

        if isinstance(outcome, StatusError):
            return Failed(
                error=ResponseError(outcome.status_code, url=url),
                error_body=self.decode_error_body(outcome.body, error_type)
            )

        if isinstance(outcome, Success):
            return self._decode_success(outcome, response_type, url)

        raise TypeError(f"Unknown outcome variant: {type(outcome).__name__}")

    def _decode_success(self, outcome: Success, response_type: Any, url: Optional[str]) -> TypedResult:
        if response_type is RAW_BYTES:
            return Decoded(outcome.body or b"")

        if response_type is None:
            return Decoded(None)

        if not outcome.body:
            return Failed(error=NoDataReturnedError(
                f"HTTP {outcome.status_code} response had no body",
                url=url,
                status_code=outcome.status_code
            ))

        try:
            value = self.decoder.decode(outcome.body, response_type)
        except ValidationError as e:
            logger.debug(f"Decoding {_type_name(response_type)} from {url} failed: {e}")
            return Failed(error=DecodingFailedError(
                f"Could not decode response as {_type_name(response_type)}",
                url=url,
                status_code=outcome.status_code,
                original_error=e
            ))

        return Decoded(value)

    def decode_error_body(self, body: Optional[bytes], error_type: Any) -> Any:
        """Best-effort decode of an error payload; None when unavailable."""
        if error_type is None:
            return None

        if error_type is RAW_BYTES:
            return body

        if not body:
            return None

        try:
            return self.decoder.decode(body, error_type)
        except (ValidationError, PydanticUserError) as e:
            logger.debug(f"Error body not decodable as {_type_name(error_type)}: {e}")
            return None


def _type_name(target: Any) -> str:
    return getattr(target, "__name__", repr(target))
