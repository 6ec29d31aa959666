"""HTTP transport with bearer authentication and error mapping."""

from __future__ import annotations

import dataclasses
import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from pyorders._constants import USER_AGENT
from pyorders._redact import redact_for_log
from pyorders.config import OrdersConfig
from pyorders.exceptions import (
    OrdersAuthError,
    OrdersNetworkError,
    OrdersServerError,
)

_logger = logging.getLogger(__name__)

_AUTH_REJECTED_STATUSES: frozenset[int] = frozenset({401, 403})


@dataclasses.dataclass(frozen=True)
class BinaryResponse:
    """Raw bytes of a binary response plus the headers that describe them."""

    content: bytes = dataclasses.field(repr=False)
    content_type: str = ""
    content_disposition: str = ""


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Endpoint modules only depend on this protocol, so tests can pass small
    fakes while production uses :class:`HttpTransport`.
    """

    async def get_json(self, endpoint: str, params: Mapping[str, Any] | None = None) -> Any:
        ...

    async def get_binary(self, endpoint: str, params: Mapping[str, Any] | None = None) -> BinaryResponse:
        ...


def _server_message(text: str) -> str:
    """Pull the server-supplied ``message`` out of an error body, if any."""
    try:
        body = json.loads(text)
    except (json.JSONDecodeError, ValueError):
        return text[:200]
    if isinstance(body, dict):
        for key in ("message", "error", "detail"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    return text[:200]


def _raise_for_status(status: int, text: str, endpoint: str) -> None:
    if 200 <= status < 300:
        return
    message = _server_message(text)
    if status in _AUTH_REJECTED_STATUSES:
        raise OrdersAuthError(
            message or f"HTTP {status} from {endpoint}",
            status_code=status,
            endpoint=endpoint,
        )
    raise OrdersServerError(
        message or f"HTTP {status} from {endpoint}",
        status_code=status,
        endpoint=endpoint,
    )


class HttpTransport:
    """aiohttp-backed transport that attaches the bearer credential."""

    def __init__(
        self,
        config: OrdersConfig,
        http_session: aiohttp.ClientSession,
        *,
        access_token: str | None = None,
    ) -> None:
        self._config = config
        self._http = http_session
        self._access_token = access_token if access_token is not None else config.access_token
        self._timeout: aiohttp.ClientTimeout | None = None
        if config.request_timeout > 0:
            self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    def _build_headers(self, endpoint: str, accept: str) -> dict[str, str]:
        token = (self._access_token or "").strip()
        if not token:
            raise OrdersAuthError("No authentication token found", endpoint=endpoint)
        return {
            "accept": accept,
            "authorization": f"Bearer {token}",
            "user-agent": USER_AGENT,
        }

    @staticmethod
    def _query(params: Mapping[str, Any] | None) -> dict[str, str]:
        if not params:
            return {}
        return {key: str(value) for key, value in params.items() if value is not None}

    def _trace(self, method: str, url: str, status: int, params: Mapping[str, Any], size: int) -> None:
        if not self._config.api_trace_enabled:
            return
        _logger.info(
            "trace %s %s params=%s -> %d (%d bytes)",
            method,
            url,
            redact_for_log(params),
            status,
            size,
        )

    async def _get(
        self,
        endpoint: str,
        params: Mapping[str, Any] | None,
        accept: str,
    ) -> tuple[bytes, Mapping[str, str]]:
        # Header construction fails fast on a missing token, before any I/O.
        headers = self._build_headers(endpoint, accept)
        query = self._query(params)
        url = f"{self._config.base_url}{endpoint}"

        _logger.debug("GET %s params=%s headers=%s", url, redact_for_log(query), redact_for_log(headers))

        try:
            async with self._http.get(url, params=query, headers=headers, timeout=self._timeout) as resp:
                body = await resp.read()
                self._trace("GET", url, resp.status, query, len(body))
                if not 200 <= resp.status < 300:
                    _raise_for_status(resp.status, body.decode("utf-8", errors="replace"), endpoint)
                return body, resp.headers
        except aiohttp.ClientError as exc:
            raise OrdersNetworkError(
                f"Request to {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc
        except TimeoutError as exc:
            raise OrdersNetworkError(
                f"Request to {endpoint} timed out",
                endpoint=endpoint,
            ) from exc

    async def get_json(self, endpoint: str, params: Mapping[str, Any] | None = None) -> Any:
        """GET *endpoint* and decode the JSON body."""
        body, _headers = await self._get(endpoint, params, "application/json")
        if not body.strip():
            return None
        try:
            return json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise OrdersServerError(
                f"Invalid JSON from {endpoint}: {body[:200]!r}",
                endpoint=endpoint,
            ) from exc

    async def get_binary(self, endpoint: str, params: Mapping[str, Any] | None = None) -> BinaryResponse:
        """GET *endpoint* and return the body untouched."""
        body, headers = await self._get(endpoint, params, "*/*")
        return BinaryResponse(
            content=body,
            content_type=str(headers.get("Content-Type", "")),
            content_disposition=str(headers.get("Content-Disposition", "")),
        )
