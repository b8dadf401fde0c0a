"""Upper and lower lunar transit estimation from altitude samples.

The upper transit is taken as the minute of maximum lunar altitude over the
day. The lower transit is not searched for: it is placed half a mean lunar
day (12h25m) away from the upper transit, on whichever side stays within the
same local calendar day. Its error is small next to the +-60 minute width of
the major bite windows built on it.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Iterator, Optional

from .errors import ProviderUnavailable

logger = logging.getLogger(__name__)

HALF_LUNAR_DAY = timedelta(hours=12, minutes=25)
SAMPLE_STEP = timedelta(minutes=1)
SAMPLE_SPAN = timedelta(hours=24)

AltitudeSampler = Callable[[datetime], Optional[float]]


@dataclass(frozen=True)
class MoonSample:
    instant: datetime
    altitude: float


@dataclass(frozen=True)
class Transits:
    upper: Optional[datetime] = None
    lower: Optional[datetime] = None


def _ensure_aware(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def local_day_end(day_start: datetime) -> datetime:
    """Next local midnight after ``day_start``, as a UTC instant.

    Local days are 23 or 25 hours long across DST changes.
    """

    day_start = _ensure_aware(day_start)
    next_day = day_start.date() + timedelta(days=1)
    local_end = datetime(next_day.year, next_day.month, next_day.day, tzinfo=day_start.tzinfo)
    return local_end.astimezone(timezone.utc)


def iter_samples(
    day_start: datetime,
    altitude_at: AltitudeSampler,
    step: timedelta = SAMPLE_STEP,
    span: timedelta = SAMPLE_SPAN,
) -> Iterator[MoonSample]:
    """Yield the usable altitude samples across ``span`` from ``day_start``.

    Samples the sampler cannot provide (``None`` or NaN) are skipped.
    """

    # Step in UTC so DST transitions do not skip or repeat wall-clock minutes.
    origin = _ensure_aware(day_start).astimezone(timezone.utc)
    count = int(span / step)
    for i in range(count):
        instant = origin + i * step
        altitude = altitude_at(instant)
        if altitude is None or math.isnan(altitude):
            continue
        yield MoonSample(instant=instant, altitude=altitude)


def lower_transit_for(upper: datetime, day_start: datetime) -> datetime:
    """Place the lower transit 12h25m from ``upper`` within the local day."""

    local_tz = day_start.tzinfo or timezone.utc
    local_day = day_start.astimezone(local_tz).date()
    upper_utc = upper.astimezone(timezone.utc)
    later = (upper_utc + HALF_LUNAR_DAY).astimezone(local_tz)
    if later.date() == local_day:
        return later
    return (upper_utc - HALF_LUNAR_DAY).astimezone(local_tz)


def find_transits(day_start: datetime, altitude_at: AltitudeSampler) -> Transits:
    """Derive the day's upper and lower transits from minute altitude samples."""

    day_start = _ensure_aware(day_start)
    span = local_day_end(day_start) - day_start.astimezone(timezone.utc)
    best: Optional[MoonSample] = None
    try:
        for sample in iter_samples(day_start, altitude_at, span=span):
            if best is None or sample.altitude > best.altitude:
                best = sample
    except ProviderUnavailable:
        logger.warning("moon_provider_unavailable", extra={"day_start": day_start.isoformat()})
        return Transits()

    if best is None:
        return Transits()

    upper = best.instant.astimezone(day_start.tzinfo)
    return Transits(upper=upper, lower=lower_transit_for(upper, day_start))


__all__ = [
    "HALF_LUNAR_DAY",
    "MoonSample",
    "Transits",
    "find_transits",
    "iter_samples",
    "local_day_end",
    "lower_transit_for",
]
