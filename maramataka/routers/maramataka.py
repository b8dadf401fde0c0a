"""Maramataka phase and bite-time endpoints."""

from __future__ import annotations

from datetime import date as date_cls, datetime
from typing import List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fastapi import APIRouter, HTTPException, Query

from ..schemas import CatalogEntry, DailyOutlook, MonthCalendar, PhaseForDate
from ..services.epochs import lunar_day_index
from ..services.errors import OutOfRangeError
from ..services.maramataka import calendar_month, daily_outlook
from ..services.phase_catalog import PHASE_CATALOG
from ..services.trip_store import STORE
from ..services.util.place_defaults import normalize_place


router = APIRouter(prefix="/v1/maramataka", tags=["maramataka"])

# Swapped out in tests for a deterministic provider; None selects Swiss Ephemeris.
PROVIDER = None


def _parse_date(value: Optional[str], tz: str) -> date_cls:
    if not value:
        return datetime.now(ZoneInfo(tz)).date()
    try:
        return date_cls.fromisoformat(value)
    except ValueError:
        raise HTTPException(status_code=400, detail="INVALID_DATE")


def _check_tz(tz: str) -> str:
    try:
        ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError):
        raise HTTPException(status_code=400, detail="UNKNOWN_TZ")
    return tz


def _out_of_range(exc: OutOfRangeError) -> HTTPException:
    return HTTPException(
        status_code=422,
        detail={"code": "DATE_OUT_OF_RANGE", "message": str(exc)},
    )


@router.get("/phases", response_model=List[CatalogEntry])
def list_phases() -> List[CatalogEntry]:
    return [CatalogEntry(lunar_day=i, phase=p) for i, p in enumerate(PHASE_CATALOG)]


@router.get("/phase", response_model=PhaseForDate)
def phase(date: Optional[str] = Query(default=None, description="YYYY-MM-DD")) -> PhaseForDate:
    day = _parse_date(date, "UTC")
    try:
        idx = lunar_day_index(day)
    except OutOfRangeError as exc:
        raise _out_of_range(exc) from exc
    return PhaseForDate(date=day, lunar_day=idx, phase=PHASE_CATALOG.get(idx))


@router.get("/bite-times", response_model=DailyOutlook)
def bite_times(
    date: Optional[str] = Query(default=None, description="YYYY-MM-DD"),
    lat: Optional[float] = Query(default=None, ge=-90.0, le=90.0),
    lon: Optional[float] = Query(default=None, ge=-180.0, le=180.0),
    tz: Optional[str] = Query(default=None),
) -> DailyOutlook:
    place, flags = normalize_place(lat, lon, tz)
    eff_tz = _check_tz(place["tz"])
    day = _parse_date(date, eff_tz)
    try:
        outlook = daily_outlook(day, place["lat"], place["lon"], tz=eff_tz, provider=PROVIDER)
    except OutOfRangeError as exc:
        raise _out_of_range(exc) from exc
    outlook.meta.update(flags)
    outlook.meta["place_label"] = place["label"]
    return outlook


@router.get("/calendar", response_model=MonthCalendar)
def month_calendar(
    year: int = Query(..., ge=1, le=9999),
    month: int = Query(..., ge=1, le=12),
    tz: str = Query(default="UTC"),
) -> MonthCalendar:
    tz = _check_tz(tz)
    return calendar_month(
        year,
        month,
        tz=tz,
        has_log=lambda day: bool(STORE.trips_by_date(day.isoformat())),
    )
