"""Station → vendor dependent selection state machine.

Stations load once.  Every station change replaces the snapshot in one
step (new station, no vendor, empty vendor list, next generation) *before*
the vendor fetch is awaited.  The fetch result is tagged with that
generation and dropped on arrival if another station change happened in
the meantime, whatever order the responses come back in.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

from pyorders.client import DirectoryGateway
from pyorders.exceptions import OrdersError
from pyorders.models.directory import Station, Vendor
from pyorders.state.policy import find_by_id, is_current_generation, vendor_in_scope
from pyorders.state.selection import SelectionState, StationsPhase, VendorPhase

_logger = logging.getLogger(__name__)

SelectionListener = Callable[[SelectionState], None]


class SelectionMachine:
    """Single owner of the :class:`SelectionState`.

    All transitions run on one event loop; the only suspension points are
    the gateway calls, and every snapshot replacement happens between them.
    """

    def __init__(self, gateway: DirectoryGateway) -> None:
        self._gateway = gateway
        self._state = SelectionState()
        self._listeners: list[SelectionListener] = []

    @property
    def state(self) -> SelectionState:
        """Current snapshot.  Snapshots are immutable; keep one as long as needed."""
        return self._state

    def subscribe(self, listener: SelectionListener) -> Callable[[], None]:
        """Call *listener* with every new snapshot.  Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _commit(self, **changes: Any) -> SelectionState:
        fields = {name: getattr(self._state, name) for name in SelectionState.model_fields}
        fields.update(changes)
        new_state = SelectionState(**fields)
        self._state = new_state
        for listener in list(self._listeners):
            try:
                listener(new_state)
            except Exception:
                _logger.debug("Selection listener failed", exc_info=True)
        return new_state

    # ------------------------------------------------------------------
    # Stations
    # ------------------------------------------------------------------

    async def load_stations(self) -> None:
        """Fetch the station directory.  Only the first call does anything.

        A failure still settles the phase to ``READY`` (with no stations and
        ``stations_error`` set) so the rest of the screen keeps working.
        """
        if self._state.stations_phase is not StationsPhase.IDLE:
            _logger.debug("load_stations ignored in phase %s", self._state.stations_phase)
            return

        self._commit(stations_phase=StationsPhase.LOADING, stations_error=None)
        try:
            stations = await self._gateway.list_stations()
        except OrdersError as exc:
            _logger.warning("Failed to load stations: %s", exc)
            self._commit(stations=(), stations_phase=StationsPhase.READY, stations_error=exc)
            return

        self._commit(stations=tuple(stations), stations_phase=StationsPhase.READY)

    async def select_station(self, station: Station | None) -> bool:
        """Select *station* and fetch its vendors.

        ``None`` is the same as :meth:`clear_station_selection`.  Returns
        ``True`` when this call's vendor response was applied, ``False`` when
        the selection was rejected or the response went stale.
        """
        if station is None:
            self.clear_station_selection()
            return False

        state = self._state
        if state.stations_phase is not StationsPhase.READY:
            _logger.debug("select_station(%s) rejected: stations are %s", station.id, state.stations_phase)
            return False
        member = find_by_id(state.stations, station.id)
        if member is None:
            _logger.debug("select_station(%s) rejected: not in the station list", station.id)
            return False

        generation = state.vendor_fetch_generation + 1
        self._commit(
            selected_station=member,
            selected_vendor=None,
            vendors=(),
            vendor_phase=VendorPhase.LOADING,
            vendor_error=None,
            vendor_fetch_generation=generation,
        )

        try:
            vendors = await self._gateway.list_vendors(member.id)
        except OrdersError as exc:
            return self._apply_vendor_failure(generation, member, exc)
        return self._apply_vendor_list(generation, member, vendors)

    def clear_station_selection(self) -> None:
        """Deselect the station; any vendor fetch still in flight goes stale."""
        self._commit(
            selected_station=None,
            selected_vendor=None,
            vendors=(),
            vendor_phase=VendorPhase.NO_STATION,
            vendor_error=None,
            vendor_fetch_generation=self._state.vendor_fetch_generation + 1,
        )

    def _apply_vendor_list(self, generation: int, station: Station, vendors: Sequence[Vendor]) -> bool:
        if not is_current_generation(generation, self._state.vendor_fetch_generation):
            _logger.debug(
                "Discarding stale vendor list for station %s (generation %d, live %d)",
                station.id,
                generation,
                self._state.vendor_fetch_generation,
            )
            return False

        in_scope = tuple(vendor for vendor in vendors if vendor_in_scope(vendor, station))
        if len(in_scope) != len(vendors):
            _logger.warning(
                "Dropped %d vendors not scoped to station %s",
                len(vendors) - len(in_scope),
                station.id,
            )
        self._commit(vendors=in_scope, vendor_phase=VendorPhase.READY, vendor_error=None)
        return True

    def _apply_vendor_failure(self, generation: int, station: Station, exc: OrdersError) -> bool:
        if not is_current_generation(generation, self._state.vendor_fetch_generation):
            _logger.debug("Discarding stale vendor failure for station %s: %s", station.id, exc)
            return False

        _logger.warning("Failed to load vendors for station %s: %s", station.id, exc)
        self._commit(vendors=(), vendor_phase=VendorPhase.FAILED, vendor_error=exc)
        return True

    # ------------------------------------------------------------------
    # Vendors
    # ------------------------------------------------------------------

    def select_vendor(self, vendor: Vendor) -> bool:
        """Select *vendor* if it is in the current, loaded vendor list.

        Anything else is a no-op returning ``False``.
        """
        state = self._state
        if state.vendor_phase is not VendorPhase.READY:
            _logger.debug("select_vendor(%s) rejected: vendors are %s", vendor.id, state.vendor_phase)
            return False
        member = find_by_id(state.vendors, vendor.id)
        if member is None:
            _logger.debug("select_vendor(%s) rejected: not in the vendor list", vendor.id)
            return False

        self._commit(selected_vendor=member)
        return True

    def clear_vendor_selection(self) -> None:
        """Drop the vendor filter, keeping the station and its vendor list."""
        if self._state.selected_vendor is not None:
            self._commit(selected_vendor=None)
