from __future__ import annotations

import datetime as dt

import pytest
from pydantic import ValidationError

from pyorders._api.vendors import parse_vendor_page
from pyorders.models import DateRange, ExportRequest, Station, Vendor


def test_station_maps_backend_field_names() -> None:
    payload = {
        "stationId": 1,
        "stationName": "Central",
        "stationCode": "CTR",
        "city": "Pune",
        "state": "MH",
    }

    station = Station.model_validate(payload)

    assert station.id == 1
    assert station.name == "Central"
    assert station.code == "CTR"
    assert station.city == "Pune"
    assert station.label == "Central (CTR)"
    assert station.raw == payload


def test_station_accepts_snake_case_names() -> None:
    station = Station(id=3, name="North")
    assert station.label == "North"
    assert station.code == ""


def test_station_requires_an_id() -> None:
    with pytest.raises(ValidationError):
        Station.model_validate({"stationName": "Nameless"})


def test_vendor_maps_business_name() -> None:
    vendor = Vendor.model_validate({"vendorId": "9", "businessName": "Acme", "stationId": 1})
    assert vendor.id == 9
    assert vendor.name == "Acme"
    assert vendor.station_id == 1


def test_vendor_page_stamps_requested_station() -> None:
    page = parse_vendor_page(
        {
            "content": [{"vendorId": 9, "businessName": "Acme"}, {"vendorId": 10, "businessName": "Zed"}],
            "pageable": {"pageNumber": 0, "pageSize": 1000},
            "totalElements": 2,
            "totalPages": 1,
        },
        station_id=1,
    )

    assert [v.id for v in page.content] == [9, 10]
    assert all(v.station_id == 1 for v in page.content)
    assert page.page_size == 1000
    assert page.total_elements == 2
    assert not page.is_truncated


def test_vendor_page_keeps_explicit_station_id() -> None:
    page = parse_vendor_page({"content": [{"vendorId": 9, "businessName": "Acme", "stationId": 7}]}, station_id=1)
    assert page.content[0].station_id == 7


def test_vendor_page_null_content_is_empty() -> None:
    assert parse_vendor_page({"content": None, "totalElements": 0}, station_id=1).content == []
    assert parse_vendor_page(None, station_id=1).content == []


def test_date_range_parses_iso_strings() -> None:
    date_range = DateRange.model_validate({"start": "2023-06-01", "end": None})
    assert date_range.start == dt.date(2023, 6, 1)
    assert date_range.end is None


def test_export_request_scope_is_optional() -> None:
    request = ExportRequest(start=dt.date(2023, 6, 1), end=dt.date(2023, 6, 10))
    assert request.station_id is None
    assert request.vendor_id is None
