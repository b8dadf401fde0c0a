"""Tests for Maramataka API endpoints."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from maramataka.app import app
from maramataka.routers import maramataka as maramataka_router


client = TestClient(app)


@pytest.fixture
def fake_ephemeris(monkeypatch, ohotu_day_provider):
    monkeypatch.setattr(maramataka_router, "PROVIDER", ohotu_day_provider)
    return ohotu_day_provider


def test_phases_lists_full_catalog() -> None:
    resp = client.get("/v1/maramataka/phases")
    assert resp.status_code == 200
    data = resp.json()
    assert len(data) == 30
    assert data[0]["lunar_day"] == 0 and data[0]["phase"]["name"] == "Whiro"
    assert data[29]["phase"]["name"] == "Mutuwhenua"


def test_phase_for_date() -> None:
    resp = client.get("/v1/maramataka/phase", params={"date": "2024-01-27"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["lunar_day"] == 16
    assert data["phase"]["quality"] == "Excellent"
    assert data["phase"]["bite_qualities"] == ["excellent", "excellent", "good", "average"]


def test_phase_before_table_is_unprocessable() -> None:
    resp = client.get("/v1/maramataka/phase", params={"date": "2023-06-01"})
    assert resp.status_code == 422
    assert resp.json()["detail"]["code"] == "DATE_OUT_OF_RANGE"


def test_phase_rejects_malformed_date() -> None:
    resp = client.get("/v1/maramataka/phase", params={"date": "27/01/2024"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "INVALID_DATE"


def test_bite_times_shape(fake_ephemeris) -> None:
    resp = client.get(
        "/v1/maramataka/bite-times",
        params={"date": "2024-01-25", "lat": -36.85, "lon": 174.76, "tz": "UTC"},
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["lunar_day"] == 14
    assert data["phase"]["name"] == "Ohotu"
    assert len(data["windows"]["major"]) == 2
    assert len(data["windows"]["minor"]) == 2
    major = [w for w in data["windows"]["major"] if w["quality"] == "good"]
    assert len(major) == 1
    start = datetime.fromisoformat(major[0]["start"].replace("Z", "+00:00"))
    assert start == datetime(2024, 1, 25, 13, tzinfo=timezone.utc)
    assert data["meta"]["ephemeris"] == "custom"
    assert data["meta"]["place_defaults_used"] is False
    assert data["sun"] == {"sunrise": None, "sunset": None}


def test_bite_times_absent_windows_are_tagged(monkeypatch, make_provider) -> None:
    provider = make_provider(peak=datetime(2024, 1, 25, 14, tzinfo=timezone.utc))
    monkeypatch.setattr(maramataka_router, "PROVIDER", provider)
    resp = client.get(
        "/v1/maramataka/bite-times",
        params={"date": "2024-01-25", "lat": 0, "lon": 0, "tz": "UTC"},
    )
    assert resp.status_code == 200
    minor = resp.json()["windows"]["minor"]
    assert minor == [{"kind": "absent", "quality": "poor"}, {"kind": "absent", "quality": "poor"}]


def test_bite_times_uses_default_place(fake_ephemeris) -> None:
    resp = client.get("/v1/maramataka/bite-times", params={"date": "2024-01-25"})
    assert resp.status_code == 200
    meta = resp.json()["meta"]
    assert meta["place_defaults_used"] is True
    assert meta["default_reason"] == "missing_latlon"


def test_bite_times_validates_coordinates(fake_ephemeris) -> None:
    resp = client.get("/v1/maramataka/bite-times", params={"date": "2024-01-25", "lat": 95, "lon": 0})
    assert resp.status_code == 422


def test_bite_times_unknown_timezone(fake_ephemeris) -> None:
    resp = client.get(
        "/v1/maramataka/bite-times",
        params={"date": "2024-01-25", "lat": 0, "lon": 0, "tz": "Mars/Olympus_Mons"},
    )
    assert resp.status_code == 400
    assert resp.json()["detail"] == "UNKNOWN_TZ"


def test_bite_times_out_of_range(fake_ephemeris) -> None:
    resp = client.get(
        "/v1/maramataka/bite-times",
        params={"date": "2020-01-01", "lat": 0, "lon": 0, "tz": "UTC"},
    )
    assert resp.status_code == 422


def test_calendar_month() -> None:
    resp = client.get("/v1/maramataka/calendar", params={"year": 2024, "month": 3, "tz": "Pacific/Auckland"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["tz"] == "Pacific/Auckland"
    assert len(data["days"]) == 42
    march_10 = next(d for d in data["days"] if d["date"] == "2024-03-10")
    assert march_10["lunar_day"] == 0
    assert march_10["is_current_month"] is True


def test_calendar_rejects_bad_month() -> None:
    resp = client.get("/v1/maramataka/calendar", params={"year": 2024, "month": 13})
    assert resp.status_code == 422
