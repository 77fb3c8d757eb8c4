"""
Submission of request descriptors and classification of what comes back.
"""

from network_manager.core.http.outcomes import (
    NoResponse,
    Outcome,
    StatusError,
    Success,
    TransportFailure
)
from network_manager.core.http.request_builder import HTTPRequest
from network_manager.core.logging import get_logger
from network_manager.providers.transport.base_transport_provider import (
    RawTransportResult,
    TransportProvider
)

logger = get_logger(__name__)


def _is_http_status(status_code) -> bool:
    return isinstance(status_code, int) and not isinstance(status_code, bool) and 100 <= status_code <= 599


def classify(raw: RawTransportResult) -> Outcome:
    """
    Classify a raw transport result, first matching rule wins.

    1. Transport error, whatever else is present.
    2. No response, or a status that is not an HTTP status.
    3. 2xx status.
    4. Any other status.
    """
    if raw.error is not None:
        return TransportFailure(
            code=raw.error.code,
            body=raw.body,
            original_error=raw.error.original_error
        )

    response = raw.response
    if response is None or not _is_http_status(response.status_code):
        return NoResponse()

    if 200 <= response.status_code < 300:
        return Success(body=raw.body, status_code=response.status_code)

    return StatusError(status_code=response.status_code, body=raw.body)


class Dispatcher:
    """Sends one request per call through a shared transport."""

    def __init__(self, transport: TransportProvider):
        self.transport = transport

    async def send(self, request: HTTPRequest) -> Outcome:
        """
        Submit request and return its classified outcome.

        Args:
            request: Request descriptor

        Returns:
            Exactly one Outcome for the call
        """
        logger.debug(f"Dispatching {request.method.value} {request.url} via {self.transport.provider_name}")

        raw = await self.transport.send(request)
        outcome = classify(raw)

        logger.debug(f"{request.method.value} {request.url} classified as {type(outcome).__name__}")
        return outcome
