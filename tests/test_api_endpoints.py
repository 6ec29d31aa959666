from __future__ import annotations

import datetime as dt
from collections.abc import Mapping
from typing import Any

import pytest

from pyorders._api.export import (
    build_export_params,
    disposition_filename,
    fetch_order_export,
    resolve_extension,
)
from pyorders._api.stations import fetch_station_list
from pyorders._api.vendors import fetch_vendor_list
from pyorders._transport import BinaryResponse
from pyorders.config import OrdersConfig
from pyorders.exceptions import OrdersServerError, OrdersValidationError
from pyorders.models import ExportRequest
from pyorders.validation import RangeProblem

XLSX = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


class _RecordingTransport:
    def __init__(self, json_body: Any = None, binary: BinaryResponse | None = None) -> None:
        self._json_body = json_body
        self._binary = binary
        self.calls: list[tuple[str, dict[str, Any]]] = []

    async def get_json(self, endpoint: str, params: Mapping[str, Any] | None = None) -> Any:
        self.calls.append((endpoint, dict(params or {})))
        return self._json_body

    async def get_binary(self, endpoint: str, params: Mapping[str, Any] | None = None) -> BinaryResponse:
        self.calls.append((endpoint, dict(params or {})))
        assert self._binary is not None
        return self._binary


def _config(**kwargs: Any) -> OrdersConfig:
    return OrdersConfig(base_url="https://api.test", access_token="token-1", **kwargs)


@pytest.mark.asyncio
async def test_station_list_hits_stations_endpoint() -> None:
    transport = _RecordingTransport(
        [{"stationId": 1, "stationName": "Central", "stationCode": "CTR"}, "garbage"],
    )

    stations = await fetch_station_list(transport)

    assert transport.calls == [("/stations/all", {})]
    assert [s.name for s in stations] == ["Central"]


@pytest.mark.asyncio
async def test_station_list_rejects_non_list_payload() -> None:
    with pytest.raises(OrdersServerError):
        await fetch_station_list(_RecordingTransport({"unexpected": True}))


@pytest.mark.asyncio
async def test_station_without_id_is_a_server_error() -> None:
    with pytest.raises(OrdersServerError) as excinfo:
        await fetch_station_list(_RecordingTransport([{"stationName": "no id"}]))
    assert excinfo.value.endpoint == "/stations/all"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"content": [{"businessName": "no id"}]},
        [{"businessName": "no id"}],
    ],
)
async def test_vendor_without_id_is_a_server_error(body: Any) -> None:
    with pytest.raises(OrdersServerError) as excinfo:
        await fetch_vendor_list(_config(), _RecordingTransport(body), 3)
    assert excinfo.value.endpoint == "/vendors/stations/3"


@pytest.mark.asyncio
async def test_vendor_list_requests_one_large_page() -> None:
    transport = _RecordingTransport({"content": [{"vendorId": 9, "businessName": "Acme"}], "totalElements": 1})

    vendors = await fetch_vendor_list(_config(), transport, 1)

    assert transport.calls == [("/vendors/stations/1", {"page": 0, "size": 1000})]
    assert [(v.id, v.station_id) for v in vendors] == [(9, 1)]


@pytest.mark.asyncio
async def test_vendor_list_empty_station_is_not_an_error() -> None:
    transport = _RecordingTransport({"content": [], "totalElements": 0, "totalPages": 0})
    assert await fetch_vendor_list(_config(vendor_page_size=50), transport, 4) == []
    assert transport.calls[0][1]["size"] == 50


def test_export_params_use_plain_dates() -> None:
    request = ExportRequest(station_id=1, vendor_id=9, start=dt.date(2023, 6, 1), end=dt.date(2023, 6, 10))
    assert build_export_params(_config(), request) == {
        "stationId": 1,
        "vendorId": 9,
        "startDate": "2023-06-01",
        "endDate": "2023-06-10",
    }


def test_export_params_omit_missing_scope() -> None:
    request = ExportRequest(start=dt.date(2023, 6, 1), end=dt.date(2023, 6, 1))
    assert build_export_params(_config(), request) == {"startDate": "2023-06-01", "endDate": "2023-06-01"}


def test_export_params_day_bounds() -> None:
    request = ExportRequest(station_id=1, start=dt.date(2023, 6, 1), end=dt.date(2023, 6, 10))
    params = build_export_params(_config(export_day_bounds=True), request)
    assert params["startDate"] == "2023-06-01T00:00:00"
    assert params["endDate"] == "2023-06-10T23:59:59"


@pytest.mark.asyncio
async def test_export_without_dates_never_reaches_transport() -> None:
    transport = _RecordingTransport(binary=BinaryResponse(content=b"x"))

    with pytest.raises(OrdersValidationError) as exc_info:
        await fetch_order_export(_config(), transport, ExportRequest(station_id=1, end=dt.date(2023, 6, 1)))

    assert exc_info.value.reason is RangeProblem.MISSING_START
    assert transport.calls == []


@pytest.mark.asyncio
async def test_export_returns_bytes_untouched() -> None:
    content = b"PK\x03\x04 not really a workbook"
    transport = _RecordingTransport(
        binary=BinaryResponse(
            content=content,
            content_type=XLSX,
            content_disposition='attachment; filename="orders.xlsx"',
        )
    )
    request = ExportRequest(start=dt.date(2023, 6, 1), end=dt.date(2023, 6, 2))

    payload = await fetch_order_export(_config(), transport, request)

    assert transport.calls[0][0] == "/admin/orders/export-excel"
    assert payload.content == content
    assert payload.extension == ".xlsx"
    assert payload.suggested_filename == "orders.xlsx"


@pytest.mark.parametrize(
    ("content_type", "disposition", "expected"),
    [
        (XLSX, "", ".xlsx"),
        ("application/vnd.ms-excel; charset=binary", "", ".xls"),
        ("text/csv;charset=UTF-8", "", ".csv"),
        ("application/octet-stream", "", ".xlsx"),
        ("", "", ".xlsx"),
        ("application/octet-stream", "attachment; filename=report.CSV", ".csv"),
        (XLSX, "attachment; filename*=UTF-8''orders%20june.xls", ".xls"),
    ],
)
def test_resolve_extension(content_type: str, disposition: str, expected: str) -> None:
    assert resolve_extension(content_type, disposition_filename(disposition)) == expected


def test_disposition_without_filename() -> None:
    assert disposition_filename("attachment") is None
    assert disposition_filename("") is None
