"""Selection policy predicates.

Pure functions only; the machine decides *when* to apply them.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol, TypeVar

from pyorders.models.directory import Station, Vendor


class _Identified(Protocol):
    @property
    def id(self) -> int: ...


TItem = TypeVar("TItem", bound=_Identified)


def is_current_generation(tag: int, live_generation: int) -> bool:
    """A tagged vendor response may be applied only for the live generation."""
    return tag == live_generation


def vendor_in_scope(vendor: Vendor, station: Station) -> bool:
    return vendor.station_id == station.id


def find_by_id(items: Iterable[TItem], item_id: int) -> TItem | None:
    """Return the member of *items* with *item_id*, or ``None``."""
    for item in items:
        if item.id == item_id:
            return item
    return None
