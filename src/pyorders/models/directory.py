"""Station and vendor directory models."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, AliasPath, Field, field_validator

from pyorders.models._base import OrdersBaseModel


class Station(OrdersBaseModel):
    """A pickup/delivery location that scopes vendors.

    Fields are mapped from the ``/stations/all`` response.
    """

    id: int = Field(validation_alias=AliasChoices("stationId", "id"))
    """Station identifier."""
    name: str = Field(default="", validation_alias=AliasChoices("stationName", "name"))
    """Display name (e.g. ``"Central"``)."""
    code: str = Field(default="", validation_alias=AliasChoices("stationCode", "code"))
    """Short station code."""
    city: str = ""
    state: str = ""

    @property
    def label(self) -> str:
        """Display label as shown in the station picker."""
        return f"{self.name} ({self.code})" if self.code else self.name


class Vendor(OrdersBaseModel):
    """A merchant scoped to exactly one station."""

    id: int = Field(validation_alias=AliasChoices("vendorId", "id"))
    """Vendor identifier."""
    name: str = Field(default="", validation_alias=AliasChoices("businessName", "name"))
    """Business name."""
    station_id: int = Field(validation_alias=AliasChoices("stationId", "station_id"))
    """Owning station; stamped from the request when the payload omits it."""


class VendorPage(OrdersBaseModel):
    """One page of the vendors-by-station listing."""

    content: list[Vendor] = Field(default_factory=list)
    total_elements: int = Field(default=0, validation_alias=AliasChoices("totalElements", "total_elements"))
    total_pages: int = Field(default=0, validation_alias=AliasChoices("totalPages", "total_pages"))
    page_number: int = Field(
        default=0,
        validation_alias=AliasChoices(AliasPath("pageable", "pageNumber"), "page_number"),
    )
    page_size: int = Field(
        default=0,
        validation_alias=AliasChoices(AliasPath("pageable", "pageSize"), "page_size"),
    )

    @field_validator("content", mode="before")
    @classmethod
    def _drop_null_content(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def is_truncated(self) -> bool:
        """Whether the station has more vendors than this page carries."""
        return self.total_elements > len(self.content)
