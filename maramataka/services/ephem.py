"""Swiss Ephemeris helpers and the moon event provider used by the bite-time engine."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Protocol

import swisseph as swe

from .errors import ProviderUnavailable
from .transit_finder import local_day_end

logger = logging.getLogger(__name__)

# Engine version for API responses
try:
    ENGINE_VERSION = f"swisseph-{swe.version}"
except AttributeError:
    ENGINE_VERSION = "swisseph-2.10"  # Fallback if version not available


@dataclass(frozen=True)
class RiseSet:
    rise: Optional[datetime] = None
    set: Optional[datetime] = None


class MoonEventProvider(Protocol):
    """Source of lunar altitude samples and rise/set instants.

    Implementations must be deterministic for a fixed (instant, lat, lon).
    """

    def altitude_at(self, instant: datetime, lat: float, lon: float) -> Optional[float]:
        ...

    def rise_set(self, day_start: datetime, lat: float, lon: float) -> RiseSet:
        ...


def _backend_flag() -> int:
    """Return the Swiss Ephemeris backend flag based on environment configuration."""

    raw_backend = os.getenv("EPHEMERIS_BACKEND")
    backend = raw_backend.strip().lower() if raw_backend else "moseph"
    return swe.FLG_SWIEPH if backend == "swieph" else swe.FLG_MOSEPH


def init_paths(ephe_dir: str | os.PathLike[str] | None) -> None:
    """Set the Swiss Ephemeris file search path when available."""

    if not ephe_dir:
        return

    path = os.fspath(ephe_dir)
    if os.path.isdir(path):
        swe.set_ephe_path(path)


def to_jd(moment: datetime) -> float:
    """Convert a datetime into Julian Day (UT); naive values are taken as UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment_utc = moment.astimezone(timezone.utc)
    return moment_utc.timestamp() / 86400.0 + 2440587.5


def jd_to_datetime(jd: float) -> datetime:
    seconds = (jd - 2440587.5) * 86400.0
    return datetime.fromtimestamp(seconds, tz=timezone.utc)


class SwissEphemerisMoonProvider:
    """Moon altitude and rise/set times computed with pyswisseph."""

    def __init__(self, elevation: float = 0.0, flags: Optional[int] = None) -> None:
        self.elevation = elevation
        self.flags = _backend_flag() if flags is None else flags

    def altitude_at(self, instant: datetime, lat: float, lon: float) -> float:
        """True (unrefracted) altitude of the Moon's centre in degrees."""

        jd = to_jd(instant)
        geopos = (lon, lat, self.elevation)
        try:
            values, _ = swe.calc_ut(jd, swe.MOON, self.flags)
            _az, true_alt, _apparent_alt = swe.azalt(
                jd, swe.ECL2HOR, geopos, 0.0, 0.0, (values[0], values[1], values[2])
            )
        except swe.Error as exc:  # type: ignore[attr-defined]
            raise ProviderUnavailable(f"moon altitude unavailable: {exc}") from exc
        return true_alt

    def _event(
        self, day_start: datetime, body: int, rsmi: int, lat: float, lon: float
    ) -> Optional[datetime]:
        jd_start = to_jd(day_start)
        geopos = (lon, lat, self.elevation)
        try:
            result, times = swe.rise_trans(
                jd_start, body, rsmi | swe.BIT_DISC_CENTER, geopos, 0.0, 0.0, self.flags
            )
        except swe.Error:  # type: ignore[attr-defined]
            logger.info(
                "rise_trans_failed", extra={"body": body, "lat": lat, "lon": lon, "rsmi": rsmi}
            )
            return None
        # result -2 means circumpolar: the body never crosses the horizon.
        if result < 0 or not times:
            return None
        event_utc = jd_to_datetime(times[0])
        if event_utc >= local_day_end(day_start):
            return None
        return event_utc.astimezone(day_start.tzinfo or timezone.utc)

    def rise_set(self, day_start: datetime, lat: float, lon: float) -> RiseSet:
        """Moonrise and moonset falling on the local day starting at ``day_start``."""

        return RiseSet(
            rise=self._event(day_start, swe.MOON, swe.CALC_RISE, lat, lon),
            set=self._event(day_start, swe.MOON, swe.CALC_SET, lat, lon),
        )

    def sun_events(self, day_start: datetime, lat: float, lon: float) -> RiseSet:
        """Sunrise and sunset on the same local day; ``None`` during polar day or night."""

        return RiseSet(
            rise=self._event(day_start, swe.SUN, swe.CALC_RISE, lat, lon),
            set=self._event(day_start, swe.SUN, swe.CALC_SET, lat, lon),
        )


_DEFAULT_PROVIDER: Optional[SwissEphemerisMoonProvider] = None


def default_provider() -> SwissEphemerisMoonProvider:
    global _DEFAULT_PROVIDER
    if _DEFAULT_PROVIDER is None:
        init_paths(os.getenv("EPHE_PATH"))
        _DEFAULT_PROVIDER = SwissEphemerisMoonProvider()
    return _DEFAULT_PROVIDER


__all__ = [
    "ENGINE_VERSION",
    "MoonEventProvider",
    "RiseSet",
    "SwissEphemerisMoonProvider",
    "default_provider",
    "init_paths",
    "jd_to_datetime",
    "to_jd",
]
