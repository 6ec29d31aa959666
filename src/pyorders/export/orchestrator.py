"""Export orchestration: validate, request, deliver.

One export may be in flight at a time.  A second trigger while one is
pending returns ``BUSY`` immediately and is not queued.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable
from datetime import datetime
from enum import StrEnum

from pyorders._constants import EXPORT_FILENAME_PREFIX, EXPORT_TIMESTAMP_FORMAT
from pyorders.client import DirectoryGateway
from pyorders.exceptions import OrdersError
from pyorders.export.delivery import FileDeliverer
from pyorders.models.export import DateRange, ExportRequest
from pyorders.state.selection import SelectionState
from pyorders.validation import RangeErr, RangeOk, RangeProblem, validate_range

_logger = logging.getLogger(__name__)


def _localnow() -> datetime:
    return datetime.now()


class ExportStatus(StrEnum):
    DELIVERED = "delivered"
    INVALID = "invalid"
    BUSY = "busy"
    FAILED = "failed"


@dataclasses.dataclass(frozen=True, slots=True)
class ExportResult:
    """Outcome of one export trigger."""

    status: ExportStatus
    filename: str | None = None
    location: str | None = None
    size: int = 0
    reason: RangeProblem | None = None
    error: OrdersError | None = None

    @property
    def ok(self) -> bool:
        return self.status is ExportStatus.DELIVERED

    @property
    def error_kind(self) -> str | None:
        """Exception class name of a failed export (e.g. ``"OrdersAuthError"``)."""
        return type(self.error).__name__ if self.error is not None else None

    @property
    def message(self) -> str:
        """User-facing summary."""
        if self.status is ExportStatus.DELIVERED:
            return f"Orders exported to {self.location or self.filename}"
        if self.status is ExportStatus.INVALID and self.reason is not None:
            return self.reason.message
        if self.status is ExportStatus.BUSY:
            return "An export is already in progress"
        if self.error is not None and str(self.error):
            return str(self.error)
        return "Failed to export orders. Please try again."


def build_export_filename(moment: datetime, extension: str) -> str:
    """``orders_export_<YYYYMMDD>_<HHMMSS><ext>``."""
    if extension and not extension.startswith("."):
        extension = f".{extension}"
    return f"{EXPORT_FILENAME_PREFIX}_{moment.strftime(EXPORT_TIMESTAMP_FORMAT)}{extension}"


def build_export_request(selection: SelectionState, checked: RangeOk) -> ExportRequest:
    """Combine the selection snapshot with a validated range.

    Without a station (or vendor) the export covers all of them.
    """
    station = selection.selected_station
    vendor = selection.selected_vendor
    return ExportRequest(
        station_id=station.id if station is not None else None,
        vendor_id=vendor.id if vendor is not None else None,
        start=checked.start,
        end=checked.end,
    )


class ExportOrchestrator:
    """Turns an export intent into a delivered file."""

    def __init__(
        self,
        gateway: DirectoryGateway,
        deliverer: FileDeliverer,
        *,
        clock: Callable[[], datetime] = _localnow,
    ) -> None:
        self._gateway = gateway
        self._deliverer = deliverer
        self._clock = clock
        self._busy = False
        self._last_result: ExportResult | None = None

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def last_result(self) -> ExportResult | None:
        """Result of the last export that was not rejected as ``BUSY``."""
        return self._last_result

    async def request_export(self, selection: SelectionState, date_range: DateRange) -> ExportResult:
        """Export orders matching *selection* and *date_range*.

        Both arguments are read once, up front; later changes to the
        selection do not affect an export already in flight.
        """
        if self._busy:
            _logger.debug("Export ignored: another export is in flight")
            return ExportResult(ExportStatus.BUSY)

        check = validate_range(date_range)
        if isinstance(check, RangeErr):
            _logger.debug("Export rejected: %s", check.reason)
            self._last_result = ExportResult(ExportStatus.INVALID, reason=check.reason)
            return self._last_result

        request = build_export_request(selection, check)
        self._busy = True
        try:
            payload = await self._gateway.export_report(request)
            filename = build_export_filename(self._clock(), payload.extension)
            location = self._deliverer.deliver(payload.content, filename)
        except OrdersError as exc:
            _logger.warning("Export failed (%s): %s", type(exc).__name__, exc)
            result = ExportResult(ExportStatus.FAILED, error=exc)
        else:
            _logger.info("Exported %d bytes as %s", payload.size, filename)
            result = ExportResult(
                ExportStatus.DELIVERED,
                filename=filename,
                location=location,
                size=payload.size,
            )
        finally:
            self._busy = False

        self._last_result = result
        return result
