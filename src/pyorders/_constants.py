"""Internal constants shared across the library."""

BASE_URL = "http://localhost:8080/api"
USER_AGENT = "pyorders"

STATIONS_ENDPOINT = "/stations/all"
VENDORS_BY_STATION_ENDPOINT = "/vendors/stations/{station_id}"
ORDERS_EXPORT_ENDPOINT = "/admin/orders/export-excel"

# The vendor picker does not paginate, so one large page stands in for "all".
VENDOR_PAGE_SIZE = 1000

EXPORT_FILENAME_PREFIX = "orders_export"
EXPORT_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"

# ------------------------------------------------------------------
# Export payload format → file extension
# ------------------------------------------------------------------

DEFAULT_EXPORT_EXTENSION = ".xlsx"

CONTENT_TYPE_EXTENSIONS: dict[str, str] = {
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet": ".xlsx",
    "application/vnd.ms-excel": ".xls",
    "text/csv": ".csv",
}
