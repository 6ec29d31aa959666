"""Immutable selection snapshot."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from pyorders.exceptions import OrdersError
from pyorders.models.directory import Station, Vendor
from pyorders.state.policy import find_by_id, vendor_in_scope


class StationsPhase(StrEnum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"


class VendorPhase(StrEnum):
    NO_STATION = "no_station"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class SelectionState(BaseModel):
    """One observable state of the station/vendor filter.

    A vendor can only be selected together with its own station; the
    validator below rejects any snapshot that breaks this, so a transition
    that would break it fails instead of publishing an inconsistent state.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    stations: tuple[Station, ...] = ()
    stations_phase: StationsPhase = StationsPhase.IDLE
    stations_error: OrdersError | None = None

    selected_station: Station | None = None
    selected_vendor: Vendor | None = None
    vendors: tuple[Vendor, ...] = ()
    vendor_phase: VendorPhase = VendorPhase.NO_STATION
    vendor_error: OrdersError | None = None

    vendor_fetch_generation: int = Field(default=0, ge=0)
    """Bumped on every station change; tags in-flight vendor fetches."""

    @model_validator(mode="after")
    def _vendor_belongs_to_station(self) -> SelectionState:
        vendor = self.selected_vendor
        if vendor is None:
            return self
        if self.selected_station is None or not vendor_in_scope(vendor, self.selected_station):
            raise ValueError(
                f"vendor {vendor.id} (station {vendor.station_id}) is outside the selected station "
                f"{self.selected_station.id if self.selected_station else None}"
            )
        return self

    @property
    def stations_loading(self) -> bool:
        return self.stations_phase is StationsPhase.LOADING

    @property
    def vendors_loading(self) -> bool:
        return self.vendor_phase is VendorPhase.LOADING

    @property
    def can_select_station(self) -> bool:
        """Station selection is enabled once the directory settled with entries."""
        return self.stations_phase is StationsPhase.READY and bool(self.stations)

    @property
    def can_select_vendor(self) -> bool:
        return self.vendor_phase is VendorPhase.READY and bool(self.vendors)

    def station_by_id(self, station_id: int) -> Station | None:
        return find_by_id(self.stations, station_id)

    def vendor_by_id(self, vendor_id: int) -> Vendor | None:
        return find_by_id(self.vendors, vendor_id)
