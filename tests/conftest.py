from typing import List

import httpx
import pytest

from network_manager.core.http.client import NetworkManager
from tests.helpers import Handler, mock_provider


@pytest.fixture
def recorded_requests() -> List[httpx.Request]:
    return []


@pytest.fixture
def manager_for(recorded_requests):
    """Build a NetworkManager whose httpx transport answers through handler."""

    def _build(handler: Handler, **kwargs) -> NetworkManager:
        async def recording_handler(request: httpx.Request) -> httpx.Response:
            recorded_requests.append(request)
            return await handler(request)

        return NetworkManager(transport=mock_provider(recording_handler, **kwargs))

    return _build
