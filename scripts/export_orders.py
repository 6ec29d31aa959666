#!/usr/bin/env python3
"""Export orders from the command line.

Runs the same station → vendor → date range → export workflow as the
admin screen, against a live backend.

Usage
-----
Set environment variables and run::

    export ORDERS_BASE_URL="https://admin.example.com/api"
    export ORDERS_ACCESS_TOKEN="eyJ..."
    python scripts/export_orders.py --station 1 --vendor 9 \\
        --start 2023-06-01 --end 2023-06-10 --output exports/

Options::

    --list               Print stations (and the station's vendors with
                         --station) instead of exporting
    --station ID         Restrict the export to one station
    --vendor ID          Restrict the export to one vendor (needs --station)
    --start / --end      Inclusive date range, YYYY-MM-DD
    --output DIR         Directory to write the report to
    --day-bounds         Send start/end of day timestamps instead of dates
"""

from __future__ import annotations

import argparse
import asyncio
import datetime as dt
import logging
import sys
from pathlib import Path

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyorders import (  # noqa: E402
    DirectoryDeliverer,
    ExportWorkflow,
    OrdersClient,
    OrdersConfig,
    OrdersError,
    VendorPhase,
)


def _parse_date(value: str) -> dt.date:
    try:
        return dt.date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}") from exc


def _print_directory(workflow: ExportWorkflow) -> None:
    selection = workflow.selection
    if selection.stations_error is not None:
        print(f"Failed to load stations: {selection.stations_error}")
        return
    if selection.selected_station is None:
        for station in selection.stations:
            print(f"{station.id:>6}  {station.label}")
        return

    print(f"Vendors of {selection.selected_station.label}:")
    for vendor in selection.vendors:
        print(f"{vendor.id:>6}  {vendor.name}")


async def main() -> int:
    parser = argparse.ArgumentParser(description="Export orders to a spreadsheet.")
    parser.add_argument("--list", action="store_true", dest="list_mode", help="List stations/vendors and exit")
    parser.add_argument("--station", type=int, help="Station id filter")
    parser.add_argument("--vendor", type=int, help="Vendor id filter (requires --station)")
    parser.add_argument("--start", type=_parse_date, help="Start date (YYYY-MM-DD)")
    parser.add_argument("--end", type=_parse_date, help="End date (YYYY-MM-DD)")
    parser.add_argument("--output", "-o", help="Output directory (default: ORDERS_OUTPUT_DIR or .)")
    parser.add_argument("--day-bounds", action="store_true", help="Send start/end of day timestamps")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    if args.vendor is not None and args.station is None:
        parser.error("--vendor requires --station")

    overrides: dict[str, object] = {}
    if args.day_bounds:
        overrides["export_day_bounds"] = True
    try:
        config = OrdersConfig.from_env(**overrides)
    except OrdersError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    output_dir = Path(args.output or config.output_dir)

    async with OrdersClient(config) as client:
        workflow = ExportWorkflow(client, DirectoryDeliverer(output_dir))
        await workflow.start()
        if workflow.selection.stations_error is not None:
            print(f"Failed to load stations: {workflow.selection.stations_error}", file=sys.stderr)
            return 1

        if args.station is not None:
            if not await workflow.select_station_id(args.station):
                print(f"Unknown station id {args.station}", file=sys.stderr)
                return 1
            state = workflow.selection
            if state.vendor_phase is VendorPhase.FAILED and (args.vendor is not None or args.list_mode):
                print(f"Failed to load vendors: {state.vendor_error}", file=sys.stderr)
                return 1

        if args.list_mode:
            _print_directory(workflow)
            return 0

        if args.vendor is not None and not workflow.select_vendor_id(args.vendor):
            print(f"Vendor {args.vendor} does not belong to station {args.station}", file=sys.stderr)
            return 1

        workflow.set_date_range(args.start, args.end)
        result = await workflow.export()

    if not result.ok:
        print(result.message, file=sys.stderr)
        return 1
    print(f"{result.message} ({result.size} bytes)")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
