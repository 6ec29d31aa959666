"""High-level async client for the orders-admin backend."""

from __future__ import annotations

from typing import Any, Protocol

import aiohttp

from pyorders._api import export as _export_api
from pyorders._api import stations as _stations_api
from pyorders._api import vendors as _vendors_api
from pyorders._transport import HttpTransport, Transport
from pyorders.config import OrdersConfig
from pyorders.exceptions import OrdersError
from pyorders.models.directory import Station, Vendor
from pyorders.models.export import ExportPayload, ExportRequest


class DirectoryGateway(Protocol):
    """The three backend calls the export workflow depends on.

    :class:`OrdersClient` is the production implementation; the state
    machine and orchestrator accept any object with this shape.
    """

    async def list_stations(self) -> list[Station]:
        ...

    async def list_vendors(self, station_id: int) -> list[Vendor]:
        ...

    async def export_report(self, request: ExportRequest) -> ExportPayload:
        ...


class OrdersClient:
    """Async client for the orders-admin API.

    Usage::

        async with OrdersClient(config) as client:
            stations = await client.list_stations()
            vendors = await client.list_vendors(stations[0].id)

    Every call is a single attempt: no retries happen here.
    """

    def __init__(
        self,
        config: OrdersConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        access_token: str | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._access_token = access_token
        self._transport: Transport | None = transport

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> OrdersClient:
        if self._transport is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = HttpTransport(
                self._config,
                self._http_session,
                access_token=self._access_token,
            )
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
            self._transport = None

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise OrdersError("Client not initialized. Use 'async with OrdersClient(...) as client:'")
        return self._transport

    @property
    def config(self) -> OrdersConfig:
        return self._config

    # ------------------------------------------------------------------
    # Directory
    # ------------------------------------------------------------------

    async def list_stations(self) -> list[Station]:
        """Fetch all stations."""
        return await _stations_api.fetch_station_list(self._require_transport())

    async def list_vendors(self, station_id: int) -> list[Vendor]:
        """Fetch every vendor of *station_id* (empty list when it has none)."""
        return await _vendors_api.fetch_vendor_list(self._config, self._require_transport(), station_id)

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    async def export_report(self, request: ExportRequest) -> ExportPayload:
        """Download the orders report matching *request*."""
        return await _export_api.fetch_order_export(self._config, self._require_transport(), request)
