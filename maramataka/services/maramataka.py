"""Daily Maramataka outlook: phase classification plus bite windows."""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Callable, Optional, Tuple
from zoneinfo import ZoneInfo

from ..schemas import (
    BiteWindows,
    CalendarDay,
    DailyOutlook,
    MonthCalendar,
    MoonEventsVM,
    PhaseRecord,
    SunEventsVM,
)
from .bite_windows import compute_bite_windows
from .ephem import ENGINE_VERSION, MoonEventProvider, RiseSet, default_provider
from .epochs import DateLike, lunar_day_index
from .errors import OutOfRangeError, ProviderUnavailable
from .phase_catalog import PHASE_CATALOG
from .transit_finder import Transits, find_transits

logger = logging.getLogger(__name__)

GRID_CELLS = 42


def phase_for_date(value: DateLike) -> PhaseRecord:
    return PHASE_CATALOG.get(lunar_day_index(value))


def local_day_start(day: date, tz: str = "UTC") -> datetime:
    """Local midnight of ``day`` in the named timezone."""
    return datetime(day.year, day.month, day.day, tzinfo=ZoneInfo(tz))


def _moon_events(
    day_start: datetime, lat: float, lon: float, provider: MoonEventProvider
) -> Tuple[Transits, RiseSet, bool]:
    degraded = False
    transits = find_transits(day_start, lambda instant: provider.altitude_at(instant, lat, lon))
    try:
        rise_set = provider.rise_set(day_start, lat, lon)
    except ProviderUnavailable:
        logger.warning(
            "moon_provider_unavailable",
            extra={"day_start": day_start.isoformat(), "lat": lat, "lon": lon},
        )
        rise_set = RiseSet()
        degraded = True
    if transits.upper is None:
        degraded = True
    return transits, rise_set, degraded


def _sun_events(day_start: datetime, lat: float, lon: float, provider) -> SunEventsVM:
    # Sun times are optional on custom providers.
    sun_events = getattr(provider, "sun_events", None)
    if sun_events is None:
        return SunEventsVM()
    try:
        events = sun_events(day_start, lat, lon)
    except ProviderUnavailable:
        logger.warning(
            "sun_provider_unavailable",
            extra={"day_start": day_start.isoformat(), "lat": lat, "lon": lon},
        )
        return SunEventsVM()
    return SunEventsVM(sunrise=events.rise, sunset=events.set)


def bite_windows_for(
    day: date,
    lat: float,
    lon: float,
    tz: str = "UTC",
    provider: Optional[MoonEventProvider] = None,
) -> BiteWindows:
    """Two major and two minor bite windows for ``day`` at (lat, lon)."""

    phase = phase_for_date(day)
    day_start = local_day_start(day, tz)
    transits, rise_set, _ = _moon_events(day_start, lat, lon, provider or default_provider())
    return compute_bite_windows(phase, transits, rise_set)


def daily_outlook(
    day: date,
    lat: float,
    lon: float,
    tz: str = "UTC",
    provider: Optional[MoonEventProvider] = None,
) -> DailyOutlook:
    """Phase, moon and sun events and bite windows for one local day.

    Raises :class:`OutOfRangeError` when ``day`` precedes the epoch table.
    Provider failures only blank out the affected windows.
    """

    lunar_day = lunar_day_index(day)
    phase = PHASE_CATALOG.get(lunar_day)
    day_start = local_day_start(day, tz)
    source = provider or default_provider()
    transits, rise_set, degraded = _moon_events(day_start, lat, lon, source)

    return DailyOutlook(
        date=day,
        tz=tz,
        lat=lat,
        lon=lon,
        lunar_day=lunar_day,
        phase=phase,
        moon=MoonEventsVM(
            moonrise=rise_set.rise,
            moonset=rise_set.set,
            upper_transit=transits.upper,
            lower_transit=transits.lower,
        ),
        sun=_sun_events(day_start, lat, lon, source),
        windows=compute_bite_windows(phase, transits, rise_set),
        meta={"degraded": degraded, "ephemeris": ENGINE_VERSION if provider is None else "custom"},
    )


def calendar_month(
    year: int,
    month: int,
    tz: str = "UTC",
    today: Optional[date] = None,
    has_log: Optional[Callable[[date], bool]] = None,
) -> MonthCalendar:
    """Six Monday-first weeks covering ``month``.

    Days before the first tabulated new moon carry no phase.
    """

    if today is None:
        today = datetime.now(ZoneInfo(tz)).date()
    first = date(year, month, 1)
    grid_start = first - timedelta(days=first.weekday())

    days = []
    for offset in range(GRID_CELLS):
        current = grid_start + timedelta(days=offset)
        try:
            lunar_day: Optional[int] = lunar_day_index(current)
        except OutOfRangeError:
            lunar_day = None
        days.append(
            CalendarDay(
                date=current,
                day_of_month=current.day,
                lunar_day=lunar_day,
                phase=PHASE_CATALOG.get(lunar_day) if lunar_day is not None else None,
                is_today=current == today,
                is_current_month=current.month == month,
                has_log=bool(has_log(current)) if has_log else False,
            )
        )

    return MonthCalendar(year=year, month=month, tz=tz, days=days)


__all__ = [
    "bite_windows_for",
    "calendar_month",
    "daily_outlook",
    "local_day_start",
    "phase_for_date",
]
