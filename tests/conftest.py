from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Optional

import pytest

from maramataka.services.ephem import RiseSet
from maramataka.services.errors import ProviderUnavailable

MEAN_LUNAR_DAY_MINUTES = 24 * 60 + 50


class FakeMoonProvider:
    """Deterministic provider: a cosine altitude curve peaking at ``peak``."""

    def __init__(
        self,
        peak: Optional[datetime] = None,
        rise: Optional[datetime] = None,
        set_: Optional[datetime] = None,
        amplitude: float = 50.0,
        altitude_available: bool = True,
        rise_set_available: bool = True,
    ) -> None:
        self.peak = peak
        self.rise = rise
        self.set = set_
        self.amplitude = amplitude
        self.altitude_available = altitude_available
        self.rise_set_available = rise_set_available
        self.altitude_calls = 0

    def altitude_at(self, instant: datetime, lat: float, lon: float) -> Optional[float]:
        self.altitude_calls += 1
        if not self.altitude_available:
            raise ProviderUnavailable("no ephemeris")
        if self.peak is None:
            return None
        minutes = (instant - self.peak).total_seconds() / 60.0
        return self.amplitude * math.cos(2 * math.pi * minutes / MEAN_LUNAR_DAY_MINUTES)

    def rise_set(self, day_start: datetime, lat: float, lon: float) -> RiseSet:
        if not self.rise_set_available:
            raise ProviderUnavailable("no ephemeris")
        return RiseSet(rise=self.rise, set=self.set)


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


@pytest.fixture
def ohotu_day_provider() -> FakeMoonProvider:
    """Moon peaks at 14:00, rises 06:10 and sets 18:40 on 2024-01-25 (UTC)."""
    return FakeMoonProvider(
        peak=utc(2024, 1, 25, 14, 0),
        rise=utc(2024, 1, 25, 6, 10),
        set_=utc(2024, 1, 25, 18, 40),
    )


@pytest.fixture
def make_provider():
    return FakeMoonProvider
