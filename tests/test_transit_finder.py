import math
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from maramataka.services.errors import ProviderUnavailable
from maramataka.services.transit_finder import (
    HALF_LUNAR_DAY,
    find_transits,
    iter_samples,
    local_day_end,
    lower_transit_for,
)

DAY = datetime(2024, 1, 25, tzinfo=timezone.utc)


def _peaked_at(peak: datetime):
    def sampler(instant: datetime) -> float:
        minutes = (instant - peak).total_seconds() / 60.0
        return 50.0 * math.cos(2 * math.pi * minutes / (24 * 60 + 50))

    return sampler


def test_upper_transit_is_the_maximum_altitude_minute():
    transits = find_transits(DAY, _peaked_at(DAY + timedelta(hours=14)))
    assert transits.upper == DAY + timedelta(hours=14)


def test_lower_transit_goes_backwards_when_forward_leaves_the_day():
    transits = find_transits(DAY, _peaked_at(DAY + timedelta(hours=14)))
    assert transits.lower == DAY + timedelta(hours=1, minutes=35)


def test_lower_transit_goes_forwards_when_it_stays_in_the_day():
    transits = find_transits(DAY, _peaked_at(DAY + timedelta(hours=3, minutes=5)))
    assert transits.lower == DAY + timedelta(hours=15, minutes=30)


@pytest.mark.parametrize("minute", range(0, 24 * 60, 7))
def test_lower_transit_is_exactly_half_a_lunar_day_away(minute):
    upper = DAY + timedelta(minutes=minute)
    lower = lower_transit_for(upper, DAY)
    assert abs(lower - upper) == HALF_LUNAR_DAY
    forward = upper + HALF_LUNAR_DAY
    if forward.date() == DAY.date():
        assert lower == forward
    else:
        assert lower == upper - HALF_LUNAR_DAY
        if upper - HALF_LUNAR_DAY >= DAY:
            assert lower.date() == DAY.date()


def test_same_day_is_judged_in_local_time():
    auckland = ZoneInfo("Pacific/Auckland")
    day_start = datetime(2024, 1, 25, tzinfo=auckland)
    upper = day_start + timedelta(hours=4)
    lower = lower_transit_for(upper, day_start)
    assert lower == upper + HALF_LUNAR_DAY
    assert lower.astimezone(auckland).date() == day_start.date()


def test_samples_every_minute_for_a_day():
    calls = []

    def sampler(instant):
        calls.append(instant)
        return 0.0

    list(iter_samples(DAY, sampler))
    assert len(calls) == 1440
    assert calls[0] == DAY
    assert calls[-1] == DAY + timedelta(hours=23, minutes=59)


def test_no_samples_means_no_transits():
    transits = find_transits(DAY, lambda instant: None)
    assert transits.upper is None
    assert transits.lower is None


def test_nan_samples_are_skipped():
    peak = DAY + timedelta(hours=20)
    base = _peaked_at(peak)

    def sampler(instant):
        if instant.hour < 12:
            return float("nan")
        return base(instant)

    transits = find_transits(DAY, sampler)
    assert transits.upper == peak


def test_provider_failure_yields_absent_transits():
    def sampler(instant):
        raise ProviderUnavailable("ephemeris offline")

    transits = find_transits(DAY, sampler)
    assert transits.upper is None and transits.lower is None


def test_first_maximum_wins_on_ties():
    transits = find_transits(DAY, lambda instant: 10.0)
    assert transits.upper == DAY


def test_naive_day_start_is_treated_as_utc():
    naive = datetime(2024, 1, 25)
    transits = find_transits(naive, _peaked_at(DAY + timedelta(hours=9)))
    assert transits.upper == DAY + timedelta(hours=9)


def test_local_day_end_follows_dst_changes():
    auckland = ZoneInfo("Pacific/Auckland")
    spring = datetime(2024, 9, 29, tzinfo=auckland)
    autumn = datetime(2024, 4, 7, tzinfo=auckland)
    assert local_day_end(spring) - spring.astimezone(timezone.utc) == timedelta(hours=23)
    assert local_day_end(autumn) - autumn.astimezone(timezone.utc) == timedelta(hours=25)
    assert local_day_end(DAY) == DAY + timedelta(days=1)


def test_short_dst_day_scan_stops_at_local_midnight():
    auckland = ZoneInfo("Pacific/Auckland")
    day_start = datetime(2024, 9, 29, tzinfo=auckland)
    calls = []
    base = _peaked_at(datetime(2024, 9, 30, 0, 30, tzinfo=auckland))

    def sampler(instant):
        calls.append(instant)
        return base(instant)

    transits = find_transits(day_start, sampler)
    assert len(calls) == 23 * 60
    assert transits.upper == datetime(2024, 9, 29, 23, 59, tzinfo=auckland)
    assert transits.upper.date() == day_start.date()
    assert transits.lower.date() == day_start.date()
