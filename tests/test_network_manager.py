import asyncio
import threading

import httpx
import pytest

from network_manager.core import config
from network_manager.core.http.client import NetworkManager
from network_manager.core.http.completion import SerialExecutorCompletionContext
from network_manager.core.http.exceptions import ErrorKind, TransportErrorCode
from network_manager.core.http.form_encoder import FORM_CONTENT_TYPE, encode_form
from network_manager.core.http.outcomes import Decoded, Failed
from network_manager.core.http.request_builder import HTTPMethod
from network_manager.providers.transport.base_transport_provider import RawResponse, RawTransportResult
from network_manager.providers.transport.httpx_transport_provider import HTTPXTransportProvider
from tests.helpers import ErrorMessage, FakeTransport, User


def _completion_future():
    future = asyncio.get_running_loop().create_future()
    calls = []

    def completion(result) -> None:
        calls.append(result)
        if not future.done():
            future.set_result(result)

    return future, calls, completion


async def _respond(status_code: int, content: bytes = b"") -> httpx.Response:
    return httpx.Response(status_code, content=content)


@pytest.mark.asyncio
async def test_scenario_a_success_is_decoded(manager_for, recorded_requests) -> None:
    manager = manager_for(lambda request: _respond(200, b'{"id":42,"name":"Ada"}'))
    future, calls, completion = _completion_future()

    task = manager.make_endpoint_request(
        "https://api.example.com",
        completion,
        paths=["users", "42"],
        method=HTTPMethod.GET,
        response_type=User,
        error_type=ErrorMessage
    )
    result = await asyncio.wait_for(future, timeout=1)

    assert isinstance(task, asyncio.Task)
    assert result == Decoded(User(id=42, name="Ada"))
    assert str(recorded_requests[0].url) == "https://api.example.com/users/42"
    assert recorded_requests[0].method == "GET"


@pytest.mark.asyncio
async def test_scenario_b_status_error_carries_error_body(manager_for) -> None:
    manager = manager_for(lambda request: _respond(404, b'{"message":"not found"}'))
    future, _, completion = _completion_future()

    manager.make_endpoint_request(
        "https://api.example.com",
        completion,
        paths=["users", "42"],
        response_type=User,
        error_type=ErrorMessage
    )
    result = await asyncio.wait_for(future, timeout=1)

    assert isinstance(result, Failed)
    assert result.kind == ErrorKind.RESPONSE_ERROR
    assert result.error.status_code == 404
    assert result.error_body == ErrorMessage(message="not found")


@pytest.mark.asyncio
async def test_scenario_c_invalid_base_fails_without_transport_call(manager_for, recorded_requests) -> None:
    manager = manager_for(lambda request: _respond(200, b"{}"))
    future, calls, completion = _completion_future()

    task = manager.make_endpoint_request("not a url", completion, paths=["users"], response_type=User)
    result = await asyncio.wait_for(future, timeout=1)

    assert task is None
    assert isinstance(result, Failed)
    assert result.kind == ErrorKind.CONSTRUCTING_URL_FAILED
    assert result.error_body is None
    assert recorded_requests == []
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_fetch_endpoint_reports_invalid_base(manager_for, recorded_requests) -> None:
    manager = manager_for(lambda request: _respond(200, b"{}"))

    result = await manager.fetch_endpoint("not a url", response_type=User)

    assert result.kind == ErrorKind.CONSTRUCTING_URL_FAILED
    assert recorded_requests == []


@pytest.mark.asyncio
async def test_decode_asymmetry_between_success_and_error_paths(manager_for) -> None:
    success_manager = manager_for(lambda request: _respond(200, b"{not json"))
    error_manager = manager_for(lambda request: _respond(422, b"{not json"))

    success_result = await success_manager.fetch_endpoint(
        "https://api.example.com", response_type=User, error_type=ErrorMessage
    )
    error_result = await error_manager.fetch_endpoint(
        "https://api.example.com", response_type=User, error_type=ErrorMessage
    )

    assert success_result.kind == ErrorKind.DECODING_FAILED
    assert success_result.error_body is None
    assert error_result.kind == ErrorKind.RESPONSE_ERROR
    assert error_result.error.status_code == 422
    assert error_result.error_body is None


@pytest.mark.asyncio
async def test_raw_bytes_on_no_content_is_decoded_empty(manager_for) -> None:
    manager = manager_for(lambda request: _respond(204))

    result = await manager.fetch_endpoint("https://api.example.com", paths=["ping"], response_type=bytes)

    assert result == Decoded(b"")


@pytest.mark.asyncio
async def test_post_form_body_and_headers_reach_transport(manager_for, recorded_requests) -> None:
    manager = manager_for(lambda request: _respond(201), default_headers={"User-Agent": "tests/1.0"})
    body = encode_form({"name": "Ada Lovelace"})

    result = await manager.fetch_endpoint(
        "https://api.example.com",
        paths=["users"],
        queries={"notify": "true"},
        method="post",
        headers={"Content-Type": FORM_CONTENT_TYPE},
        body=body,
        response_type=None
    )

    sent = recorded_requests[0]
    assert result == Decoded(None)
    assert sent.method == "POST"
    assert str(sent.url) == "https://api.example.com/users?notify=true"
    assert sent.headers["Content-Type"] == FORM_CONTENT_TYPE
    assert sent.headers["User-Agent"] == "tests/1.0"
    assert sent.content == b"name=Ada+Lovelace"


@pytest.mark.asyncio
async def test_transport_error_is_delivered_once(manager_for) -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    manager = manager_for(handler)
    future, calls, completion = _completion_future()
    request = manager.construct_request("GET", manager.construct_url("https://api.example.com", ["users"]))

    manager.make_request(request, completion, response_type=User, error_type=ErrorMessage)
    result = await asyncio.wait_for(future, timeout=1)
    await asyncio.sleep(0.01)

    assert result.kind == ErrorKind.DATA_TASK_ERROR
    assert result.error.code == TransportErrorCode.CANNOT_CONNECT_TO_HOST
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_cancelled_call_delivers_cancelled_transport_error(manager_for) -> None:
    started = asyncio.Event()

    async def handler(request: httpx.Request) -> httpx.Response:
        started.set()
        await asyncio.sleep(10)
        return httpx.Response(200, content=b"{}")

    manager = manager_for(handler)
    future, calls, completion = _completion_future()

    task = manager.make_endpoint_request("https://api.example.com", completion, response_type=User)
    await asyncio.wait_for(started.wait(), timeout=1)
    task.cancel()
    result = await asyncio.wait_for(future, timeout=1)
    await asyncio.sleep(0.01)

    assert task.cancelled()
    assert result.kind == ErrorKind.DATA_TASK_ERROR
    assert result.error.code == TransportErrorCode.CANCELLED
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_unexpected_error_is_still_delivered() -> None:
    class BrokenTransport(FakeTransport):
        async def send(self, request):
            raise RuntimeError("provider bug")

    manager = NetworkManager(transport=BrokenTransport())
    future, calls, completion = _completion_future()

    manager.make_request(manager.construct_request("GET", "https://api.example.com"), completion, response_type=User)
    result = await asyncio.wait_for(future, timeout=1)

    assert result.kind == ErrorKind.DATA_TASK_ERROR
    assert result.error.code == TransportErrorCode.UNKNOWN
    assert isinstance(result.error.original_error, RuntimeError)


@pytest.mark.asyncio
async def test_no_response_from_transport() -> None:
    transport = FakeTransport([RawTransportResult(body=b"{}", response=RawResponse(status_code=None))])
    manager = NetworkManager(transport=transport)

    result = await manager.fetch(manager.construct_request("GET", "https://api.example.com"), response_type=User)

    assert result.kind == ErrorKind.NO_NETWORK_RESPONSE
    assert result.error_body is None


@pytest.mark.asyncio
async def test_serial_executor_completion_context_runs_callbacks_off_loop() -> None:
    transport = FakeTransport([RawTransportResult(body=b'{"id":1,"name":"A"}', response=RawResponse(status_code=200))])
    context = SerialExecutorCompletionContext()
    manager = NetworkManager(transport=transport, completion_context=context)
    delivered = []

    def completion(result) -> None:
        delivered.append((result, threading.get_ident()))

    task = manager.make_request(
        manager.construct_request("GET", "https://api.example.com"), completion, response_type=User
    )
    await task
    await asyncio.sleep(0)
    context.shutdown(wait=True)

    assert len(delivered) == 1
    assert delivered[0][0] == Decoded(User(id=1, name="A"))
    assert delivered[0][1] != threading.get_ident()


@pytest.mark.asyncio
async def test_aclose_only_closes_owned_transport() -> None:
    transport = FakeTransport()

    async with NetworkManager(transport=transport):
        pass

    assert transport.closed is False


@pytest.mark.asyncio
async def test_transport_built_from_config(monkeypatch) -> None:
    monkeypatch.setattr(config, "NETWORK_USER_AGENT", "configured-agent/2.0")
    monkeypatch.setattr(config, "NETWORK_TIMEOUT", 5.0)

    provider = HTTPXTransportProvider.from_config(default_headers={"Accept": "application/json"})
    await provider.aclose()

    assert provider.default_headers["User-Agent"] == "configured-agent/2.0"
    assert provider.default_headers["Accept"] == "application/json"
    assert provider.timeout == 5.0
    with pytest.raises(TypeError):
        provider.default_headers["Accept"] = "text/plain"


@pytest.mark.asyncio
async def test_shared_manager_is_reused(monkeypatch) -> None:
    monkeypatch.setattr(NetworkManager, "_shared", None)

    first = NetworkManager.shared()
    second = NetworkManager.shared()
    await first.aclose()

    assert first is second
    assert first.transport.provider_name == "httpx"


def test_manager_reused_across_event_loops_delivers_every_result() -> None:
    transport = FakeTransport([
        RawTransportResult(body=b"first", response=RawResponse(status_code=200)),
        RawTransportResult(body=b"second", response=RawResponse(status_code=200)),
    ])
    manager = NetworkManager(transport=transport)
    calls = []

    async def run_once() -> None:
        future, _, completion = _completion_future()

        def record(result) -> None:
            calls.append(result)
            completion(result)

        manager.make_endpoint_request("https://api.example.com", record, response_type=bytes)
        await asyncio.wait_for(future, timeout=1)

    asyncio.run(run_once())
    asyncio.run(run_once())

    assert calls == [Decoded(b"first"), Decoded(b"second")]
