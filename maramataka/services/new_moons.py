"""New-moon search with Swiss Ephemeris.

Used to extend the epoch table in :mod:`maramataka.services.epochs`. A new
moon is the instant the Moon-Sun elongation passes 360 degrees back to 0; it
is bracketed by stepping forward a few hours at a time and then bisected.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable, List

import swisseph as swe

from .ephem import _backend_flag, to_jd


def _longitude(moment: datetime, body: int) -> float:
    values, _ = swe.calc_ut(to_jd(moment), body, _backend_flag())
    return values[0] % 360.0


def moon_sun_elongation(moment: datetime) -> float:
    """Longitudinal separation of the Moon ahead of the Sun, in [0, 360)."""
    return (_longitude(moment, swe.MOON) - _longitude(moment, swe.SUN)) % 360.0


def _unwrap(value: float, reference: float) -> float:
    """Unwrap a forward-moving angle relative to a reference value."""
    while value < reference:
        value += 360.0
    return value


def _find_boundary(
    reference_time: datetime,
    target: float,
    getter: Callable[[datetime], float],
    step_hours: int = 6,
    max_hours: int = 24 * 31,
) -> datetime:
    """Locate the moment a steadily increasing angle crosses ``target``."""

    reference_value = getter(reference_time)
    unwrapped_target = target
    while unwrapped_target <= reference_value:
        unwrapped_target += 360.0

    low_time = reference_time
    high_time = reference_time + timedelta(hours=max_hours)
    previous_value = reference_value
    hours = step_hours
    while hours <= max_hours:
        candidate = reference_time + timedelta(hours=hours)
        value = _unwrap(getter(candidate), previous_value)
        if value >= unwrapped_target:
            high_time = candidate
            break
        low_time, previous_value = candidate, value
        hours += step_hours

    for _ in range(40):
        midpoint = low_time + (high_time - low_time) / 2
        mid_value = _unwrap(getter(midpoint), previous_value)
        if mid_value < unwrapped_target:
            low_time = midpoint
            previous_value = mid_value
        else:
            high_time = midpoint

    return high_time


def next_new_moon(after: datetime) -> datetime:
    if after.tzinfo is None:
        after = after.replace(tzinfo=timezone.utc)
    return _find_boundary(after, 0.0, moon_sun_elongation)


def find_new_moons(start: datetime, end: datetime) -> List[datetime]:
    """All new moons in ``[start, end)``, rounded to the minute."""

    found: List[datetime] = []
    current = start if start.tzinfo else start.replace(tzinfo=timezone.utc)
    end = end if end.tzinfo else end.replace(tzinfo=timezone.utc)
    while True:
        moment = next_new_moon(current)
        if moment >= end:
            break
        found.append(_round_minute(moment))
        # skip past this lunation before searching again
        current = moment + timedelta(days=1)
    return found


def _round_minute(moment: datetime) -> datetime:
    moment = moment.astimezone(timezone.utc)
    base = moment.replace(second=0, microsecond=0)
    if moment - base >= timedelta(seconds=30):
        base += timedelta(minutes=1)
    return base


def format_epoch(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%MZ")


__all__ = ["find_new_moons", "format_epoch", "moon_sun_elongation", "next_new_moon"]
