"""Dependent station/vendor selection.

This package is the single owner of the export filter's selection state.
Callers read immutable :class:`SelectionState` snapshots and change them
only through :class:`SelectionMachine` transitions.
"""

from pyorders.state.machine import SelectionListener, SelectionMachine
from pyorders.state.selection import SelectionState, StationsPhase, VendorPhase

__all__ = [
    "SelectionListener",
    "SelectionMachine",
    "SelectionState",
    "StationsPhase",
    "VendorPhase",
]
