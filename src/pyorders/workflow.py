"""Export workflow facade.

Bundles the selection machine, the date range being edited and the export
orchestrator behind the intents a front-end dispatches.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Callable

from pyorders.client import DirectoryGateway
from pyorders.export.delivery import FileDeliverer
from pyorders.export.orchestrator import ExportOrchestrator, ExportResult
from pyorders.models.directory import Station, Vendor
from pyorders.models.export import DateRange
from pyorders.state.machine import SelectionListener, SelectionMachine
from pyorders.state.selection import SelectionState


class ExportWorkflow:
    """One export screen session.

    Usage::

        workflow = ExportWorkflow(client, DirectoryDeliverer("exports"))
        await workflow.start()
        await workflow.select_station_id(1)
        workflow.select_vendor_id(9)
        workflow.set_date_range(date(2023, 6, 1), date(2023, 6, 10))
        result = await workflow.export()
    """

    def __init__(
        self,
        gateway: DirectoryGateway,
        deliverer: FileDeliverer,
        *,
        clock: Callable[[], dt.datetime] | None = None,
    ) -> None:
        self._machine = SelectionMachine(gateway)
        if clock is None:
            self._orchestrator = ExportOrchestrator(gateway, deliverer)
        else:
            self._orchestrator = ExportOrchestrator(gateway, deliverer, clock=clock)
        self._date_range = DateRange()

    @property
    def selection(self) -> SelectionState:
        return self._machine.state

    @property
    def date_range(self) -> DateRange:
        return self._date_range

    @property
    def busy(self) -> bool:
        """Whether an export is in flight."""
        return self._orchestrator.busy

    def subscribe(self, listener: SelectionListener) -> Callable[[], None]:
        return self._machine.subscribe(listener)

    async def start(self) -> None:
        """Load the station directory."""
        await self._machine.load_stations()

    # ------------------------------------------------------------------
    # Selection intents
    # ------------------------------------------------------------------

    async def select_station(self, station: Station | None) -> bool:
        return await self._machine.select_station(station)

    async def select_station_id(self, station_id: int | None) -> bool:
        """Select a station by id; unknown ids are rejected like foreign stations."""
        if station_id is None:
            return await self._machine.select_station(None)
        station = self.selection.station_by_id(station_id)
        if station is None:
            return False
        return await self._machine.select_station(station)

    def clear_station_selection(self) -> None:
        self._machine.clear_station_selection()

    def select_vendor(self, vendor: Vendor) -> bool:
        return self._machine.select_vendor(vendor)

    def select_vendor_id(self, vendor_id: int | None) -> bool:
        if vendor_id is None:
            self._machine.clear_vendor_selection()
            return True
        vendor = self.selection.vendor_by_id(vendor_id)
        if vendor is None:
            return False
        return self._machine.select_vendor(vendor)

    # ------------------------------------------------------------------
    # Date range intents
    # ------------------------------------------------------------------

    def set_start_date(self, start: dt.date | None) -> None:
        self._date_range = DateRange(start=start, end=self._date_range.end)

    def set_end_date(self, end: dt.date | None) -> None:
        self._date_range = DateRange(start=self._date_range.start, end=end)

    def set_date_range(self, start: dt.date | None, end: dt.date | None) -> None:
        self._date_range = DateRange(start=start, end=end)

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    async def export(self) -> ExportResult:
        """Export with the current filters; they are left untouched afterwards."""
        return await self._orchestrator.request_export(self._machine.state, self._date_range)
