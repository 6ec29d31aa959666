from __future__ import annotations

import json
from typing import Any

import aiohttp
import pytest

from pyorders._transport import HttpTransport
from pyorders.config import OrdersConfig
from pyorders.exceptions import OrdersAuthError, OrdersNetworkError, OrdersServerError


class _FakeResponse:
    def __init__(self, status: int, body: bytes, headers: dict[str, str] | None = None) -> None:
        self.status = status
        self._body = body
        self.headers = headers or {}

    async def read(self) -> bytes:
        return self._body

    async def __aenter__(self) -> _FakeResponse:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        return None


class _FakeSession:
    def __init__(self, response: _FakeResponse | None = None, error: Exception | None = None) -> None:
        self._response = response
        self._error = error
        self.requests: list[dict[str, Any]] = []

    def get(self, url: str, **kwargs: Any) -> _FakeResponse:
        self.requests.append({"url": url, **kwargs})
        if self._error is not None:
            raise self._error
        assert self._response is not None
        return self._response


class _ExplodingSession:
    def get(self, *_args: Any, **_kwargs: Any) -> Any:
        raise AssertionError("no request may be sent without a token")


def _config(token: str | None = "token-1") -> OrdersConfig:
    return OrdersConfig(base_url="https://api.test/", access_token=token)


@pytest.mark.asyncio
async def test_missing_token_fails_before_any_request() -> None:
    transport = HttpTransport(_config(token=None), _ExplodingSession())  # type: ignore[arg-type]

    with pytest.raises(OrdersAuthError) as exc_info:
        await transport.get_json("/stations/all")

    assert exc_info.value.status_code is None
    assert exc_info.value.endpoint == "/stations/all"


@pytest.mark.asyncio
async def test_blank_token_counts_as_missing() -> None:
    transport = HttpTransport(_config(token="   "), _ExplodingSession())  # type: ignore[arg-type]
    with pytest.raises(OrdersAuthError):
        await transport.get_binary("/admin/orders/export-excel")


@pytest.mark.asyncio
async def test_bearer_header_and_params_are_sent() -> None:
    session = _FakeSession(_FakeResponse(200, json.dumps([{"stationId": 1}]).encode()))
    transport = HttpTransport(_config(), session)  # type: ignore[arg-type]

    body = await transport.get_json("/vendors/stations/1", {"page": 0, "size": 1000, "skip": None})

    assert body == [{"stationId": 1}]
    request = session.requests[0]
    assert request["url"] == "https://api.test/vendors/stations/1"
    assert request["headers"]["authorization"] == "Bearer token-1"
    assert request["params"] == {"page": "0", "size": "1000"}


@pytest.mark.asyncio
async def test_constructor_token_overrides_config() -> None:
    session = _FakeSession(_FakeResponse(200, b"[]"))
    transport = HttpTransport(_config(token=None), session, access_token="injected")  # type: ignore[arg-type]

    await transport.get_json("/stations/all")

    assert session.requests[0]["headers"]["authorization"] == "Bearer injected"


@pytest.mark.asyncio
async def test_server_message_is_surfaced_verbatim() -> None:
    body = json.dumps({"message": "Station not found"}).encode()
    transport = HttpTransport(_config(), _FakeSession(_FakeResponse(404, body)))  # type: ignore[arg-type]

    with pytest.raises(OrdersServerError) as exc_info:
        await transport.get_json("/vendors/stations/99")

    assert str(exc_info.value) == "Station not found"
    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_non_json_error_body_is_kept() -> None:
    transport = HttpTransport(_config(), _FakeSession(_FakeResponse(502, b"Bad Gateway")))  # type: ignore[arg-type]
    with pytest.raises(OrdersServerError, match="Bad Gateway"):
        await transport.get_binary("/admin/orders/export-excel")


@pytest.mark.parametrize("status", [401, 403])
@pytest.mark.asyncio
async def test_rejected_credential_is_auth_error(status: int) -> None:
    transport = HttpTransport(_config(), _FakeSession(_FakeResponse(status, b"")))  # type: ignore[arg-type]
    with pytest.raises(OrdersAuthError) as exc_info:
        await transport.get_json("/stations/all")
    assert exc_info.value.status_code == status


@pytest.mark.asyncio
async def test_client_error_becomes_network_error() -> None:
    session = _FakeSession(error=aiohttp.ClientConnectionError("connection refused"))
    transport = HttpTransport(_config(), session)  # type: ignore[arg-type]

    with pytest.raises(OrdersNetworkError) as exc_info:
        await transport.get_json("/stations/all")

    assert exc_info.value.endpoint == "/stations/all"
    assert isinstance(exc_info.value.__cause__, aiohttp.ClientConnectionError)


@pytest.mark.asyncio
async def test_timeout_becomes_network_error() -> None:
    transport = HttpTransport(_config(), _FakeSession(error=TimeoutError()))  # type: ignore[arg-type]
    with pytest.raises(OrdersNetworkError, match="timed out"):
        await transport.get_json("/stations/all")


@pytest.mark.asyncio
async def test_invalid_json_is_server_error() -> None:
    transport = HttpTransport(_config(), _FakeSession(_FakeResponse(200, b"<html>")))  # type: ignore[arg-type]
    with pytest.raises(OrdersServerError, match="Invalid JSON"):
        await transport.get_json("/stations/all")


@pytest.mark.asyncio
async def test_binary_body_and_headers_pass_through() -> None:
    response = _FakeResponse(
        200,
        b"\x00\x01binary",
        {"Content-Type": "application/vnd.ms-excel", "Content-Disposition": "attachment; filename=a.xls"},
    )
    transport = HttpTransport(_config(), _FakeSession(response))  # type: ignore[arg-type]

    result = await transport.get_binary("/admin/orders/export-excel", {"startDate": "2023-06-01"})

    assert result.content == b"\x00\x01binary"
    assert result.content_type == "application/vnd.ms-excel"
    assert result.content_disposition == "attachment; filename=a.xls"
