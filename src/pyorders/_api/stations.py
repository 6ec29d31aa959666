"""Station listing endpoint: ``GET /stations/all``."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from pyorders._constants import STATIONS_ENDPOINT
from pyorders._transport import Transport
from pyorders.exceptions import OrdersServerError
from pyorders.models.directory import Station

_logger = logging.getLogger(__name__)


def parse_station_list(decoded: Any) -> list[Station]:
    """Parse the station listing body.

    A ``null`` body is an empty directory; anything other than a list is a
    server contract violation.
    """
    if decoded is None:
        return []
    if not isinstance(decoded, list):
        raise OrdersServerError(
            f"Unexpected station list payload: {type(decoded).__name__}",
            endpoint=STATIONS_ENDPOINT,
        )
    stations: list[Station] = []
    for item in decoded:
        if not isinstance(item, dict):
            _logger.debug("Skipping non-object station entry: %r", item)
            continue
        try:
            stations.append(Station.model_validate(item))
        except ValidationError as exc:
            raise OrdersServerError(
                f"Malformed station entry: {exc.error_count()} validation errors",
                endpoint=STATIONS_ENDPOINT,
            ) from exc
    return stations


async def fetch_station_list(transport: Transport) -> list[Station]:
    """Fetch every station visible to the authenticated user."""
    decoded = await transport.get_json(STATIONS_ENDPOINT)
    return parse_station_list(decoded)
