"""pyorders - Async client and export workflow for the orders-admin API."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyorders")
except PackageNotFoundError:
    __version__ = "0+local"
from pyorders.client import DirectoryGateway, OrdersClient
from pyorders.config import OrdersConfig
from pyorders.exceptions import (
    OrdersAuthError,
    OrdersConfigError,
    OrdersDeliveryError,
    OrdersError,
    OrdersNetworkError,
    OrdersServerError,
    OrdersValidationError,
)
from pyorders.export import (
    DirectoryDeliverer,
    ExportOrchestrator,
    ExportResult,
    ExportStatus,
    FileDeliverer,
    MemoryDeliverer,
)
from pyorders.models import DateRange, ExportPayload, ExportRequest, Station, Vendor
from pyorders.state import SelectionMachine, SelectionState, StationsPhase, VendorPhase
from pyorders.validation import RangeErr, RangeOk, RangeProblem, validate_range
from pyorders.workflow import ExportWorkflow

__all__ = [
    "__version__",
    "DateRange",
    "DirectoryDeliverer",
    "DirectoryGateway",
    "ExportOrchestrator",
    "ExportPayload",
    "ExportRequest",
    "ExportResult",
    "ExportStatus",
    "ExportWorkflow",
    "FileDeliverer",
    "MemoryDeliverer",
    "OrdersAuthError",
    "OrdersClient",
    "OrdersConfig",
    "OrdersConfigError",
    "OrdersDeliveryError",
    "OrdersError",
    "OrdersNetworkError",
    "OrdersServerError",
    "OrdersValidationError",
    "RangeErr",
    "RangeOk",
    "RangeProblem",
    "SelectionMachine",
    "SelectionState",
    "StationsPhase",
    "Station",
    "Vendor",
    "VendorPhase",
    "validate_range",
]
