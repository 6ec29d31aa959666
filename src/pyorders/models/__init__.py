"""Data models for backend API payloads."""

from pyorders.models._base import OrdersBaseModel
from pyorders.models.directory import Station, Vendor, VendorPage
from pyorders.models.export import DateRange, ExportPayload, ExportRequest

__all__ = [
    "DateRange",
    "ExportPayload",
    "ExportRequest",
    "OrdersBaseModel",
    "Station",
    "Vendor",
    "VendorPage",
]
