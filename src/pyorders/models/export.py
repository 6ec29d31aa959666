"""Date range, export request and export payload models."""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field


class DateRange(BaseModel):
    """Date filter as entered by the user.

    Either bound may be missing, and ``end`` may precede ``start`` while the
    user is still editing; see :func:`pyorders.validation.validate_range`.
    """

    model_config = ConfigDict(frozen=True)

    start: dt.date | None = None
    end: dt.date | None = None


class ExportRequest(BaseModel):
    """Filter set sent to the export endpoint.

    Missing ``station_id`` / ``vendor_id`` mean "all stations" / "all
    vendors".
    """

    model_config = ConfigDict(frozen=True)

    station_id: int | None = None
    vendor_id: int | None = None
    start: dt.date | None = None
    end: dt.date | None = None


class ExportPayload(BaseModel):
    """Opaque report bytes plus the format the server declared for them."""

    model_config = ConfigDict(frozen=True)

    content: bytes = Field(repr=False)
    content_type: str = ""
    extension: str = ".xlsx"
    """File extension including the leading dot."""
    suggested_filename: str | None = None
    """Filename from ``Content-Disposition``, when the server sent one."""

    @property
    def size(self) -> int:
        return len(self.content)
