"""Order export endpoint: ``GET /admin/orders/export-excel``."""

from __future__ import annotations

import logging
import mimetypes
import re
from pathlib import PurePosixPath
from typing import Any

from pyorders._constants import (
    CONTENT_TYPE_EXTENSIONS,
    DEFAULT_EXPORT_EXTENSION,
    ORDERS_EXPORT_ENDPOINT,
)
from pyorders._transport import BinaryResponse, Transport
from pyorders.config import OrdersConfig
from pyorders.models.export import DateRange, ExportPayload, ExportRequest
from pyorders.validation import require_valid_range

_logger = logging.getLogger(__name__)

_DISPOSITION_FILENAME = re.compile(r"""filename\*?=(?:UTF-8'')?["']?([^"';]+)["']?""", re.IGNORECASE)


def build_export_params(config: OrdersConfig, request: ExportRequest) -> dict[str, Any]:
    """Build the export query string.

    Raises :class:`~pyorders.exceptions.OrdersValidationError` when either
    date is missing or the range is inverted, so such a request never
    reaches the network.
    """
    checked = require_valid_range(DateRange(start=request.start, end=request.end))

    params: dict[str, Any] = {}
    if request.station_id is not None:
        params["stationId"] = request.station_id
    if request.vendor_id is not None:
        params["vendorId"] = request.vendor_id
    if config.export_day_bounds:
        params["startDate"] = f"{checked.start.isoformat()}T00:00:00"
        params["endDate"] = f"{checked.end.isoformat()}T23:59:59"
    else:
        params["startDate"] = checked.start.isoformat()
        params["endDate"] = checked.end.isoformat()
    return params


def disposition_filename(content_disposition: str) -> str | None:
    """Extract the filename from a ``Content-Disposition`` header."""
    if not content_disposition:
        return None
    match = _DISPOSITION_FILENAME.search(content_disposition)
    if match is None:
        return None
    name = match.group(1).strip()
    return name or None


def resolve_extension(content_type: str, suggested_filename: str | None) -> str:
    """Pick the file extension the server declared for the payload.

    The ``Content-Disposition`` filename wins, then the MIME type, then
    the spreadsheet default.
    """
    if suggested_filename:
        suffix = PurePosixPath(suggested_filename).suffix
        if suffix:
            return suffix.lower()
    mime = content_type.split(";", 1)[0].strip().lower()
    if mime in CONTENT_TYPE_EXTENSIONS:
        return CONTENT_TYPE_EXTENSIONS[mime]
    if mime and mime != "application/octet-stream":
        guessed = mimetypes.guess_extension(mime)
        if guessed:
            return guessed
    return DEFAULT_EXPORT_EXTENSION


def parse_export_response(response: BinaryResponse) -> ExportPayload:
    suggested = disposition_filename(response.content_disposition)
    return ExportPayload(
        content=response.content,
        content_type=response.content_type,
        extension=resolve_extension(response.content_type, suggested),
        suggested_filename=suggested,
    )


async def fetch_order_export(
    config: OrdersConfig,
    transport: Transport,
    request: ExportRequest,
) -> ExportPayload:
    """Download the orders report for *request*; the bytes are not inspected."""
    params = build_export_params(config, request)
    response = await transport.get_binary(ORDERS_EXPORT_ENDPOINT, params)
    payload = parse_export_response(response)
    _logger.debug("Export downloaded: %d bytes, extension=%s", payload.size, payload.extension)
    return payload
