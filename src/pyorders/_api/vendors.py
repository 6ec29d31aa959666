"""Vendors-by-station endpoint: ``GET /vendors/stations/{stationId}``."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from pyorders._constants import VENDORS_BY_STATION_ENDPOINT
from pyorders._transport import Transport
from pyorders.config import OrdersConfig
from pyorders.exceptions import OrdersServerError
from pyorders.models.directory import Vendor, VendorPage

_logger = logging.getLogger(__name__)


def build_vendor_params(config: OrdersConfig) -> dict[str, int]:
    """Query params requesting one page large enough for every vendor."""
    return {"page": 0, "size": config.vendor_page_size}


def _stamp_station(items: list[Any], station_id: int) -> list[dict[str, Any]]:
    # The endpoint does not echo the station id on each vendor.
    stamped: list[dict[str, Any]] = []
    for item in items:
        if not isinstance(item, dict):
            continue
        entry = dict(item)
        if entry.get("stationId") is None and entry.get("station_id") is None:
            entry["stationId"] = station_id
        stamped.append(entry)
    return stamped


def parse_vendor_page(decoded: Any, station_id: int) -> VendorPage:
    """Parse a page envelope (or a bare list) of vendors for *station_id*."""
    endpoint = VENDORS_BY_STATION_ENDPOINT.format(station_id=station_id)
    if decoded is None:
        return VendorPage()
    if isinstance(decoded, list):
        content = _stamp_station(decoded, station_id)
        body: dict[str, Any] = {"content": content, "totalElements": len(content), "totalPages": 1}
    elif isinstance(decoded, dict):
        body = dict(decoded)
        raw_content = body.get("content")
        body["content"] = _stamp_station(raw_content if isinstance(raw_content, list) else [], station_id)
    else:
        raise OrdersServerError(
            f"Unexpected vendor page payload: {type(decoded).__name__}",
            endpoint=endpoint,
        )
    try:
        return VendorPage.model_validate(body)
    except ValidationError as exc:
        raise OrdersServerError(
            f"Malformed vendor page: {exc.error_count()} validation errors",
            endpoint=endpoint,
        ) from exc


async def fetch_vendor_list(
    config: OrdersConfig,
    transport: Transport,
    station_id: int,
) -> list[Vendor]:
    """Fetch all vendors scoped to *station_id*.

    A station without vendors yields an empty list, not an error.
    """
    endpoint = VENDORS_BY_STATION_ENDPOINT.format(station_id=station_id)
    decoded = await transport.get_json(endpoint, build_vendor_params(config))
    page = parse_vendor_page(decoded, station_id)
    if page.is_truncated:
        _logger.warning(
            "Station %s has %d vendors but only %d fit in one page",
            station_id,
            page.total_elements,
            len(page.content),
        )
    return list(page.content)
