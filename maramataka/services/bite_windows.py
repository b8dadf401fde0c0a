"""Major and minor bite windows for a day.

Major windows span +-60 minutes around the upper and lower lunar transits,
minor windows +-30 minutes around moonrise and moonset. Each window takes its
quality from the matching slot of the phase's ``bite_qualities``. A window
whose moon event is unknown is returned as an ``AbsentWindow`` so that every
day always carries two major and two minor entries.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import List, Optional

from ..schemas import AbsentWindow, BiteQuality, BiteWindows, PhaseRecord, PresentWindow
from .ephem import RiseSet
from .transit_finder import Transits

logger = logging.getLogger(__name__)

MAJOR_HALF_WIDTH = timedelta(minutes=60)
MINOR_HALF_WIDTH = timedelta(minutes=30)


def _window(
    center: Optional[datetime], half_width: timedelta, quality: BiteQuality, label: str
):
    if not isinstance(center, datetime):
        logger.debug("bite_window_event_absent", extra={"event": label})
        return AbsentWindow()
    return PresentWindow(start=center - half_width, end=center + half_width, quality=quality)


def _sort_key(window) -> tuple:
    # Present windows first, in start order; absent placeholders last.
    if isinstance(window, PresentWindow):
        return (0, window.start.timestamp())
    return (1, 0.0)


def _ordered(windows: List) -> List:
    return sorted(windows, key=_sort_key)


def compute_bite_windows(phase: PhaseRecord, transits: Transits, rise_set: RiseSet) -> BiteWindows:
    upper_q, lower_q, rise_q, set_q = phase.bite_qualities
    major = [
        _window(transits.upper, MAJOR_HALF_WIDTH, upper_q, "upper_transit"),
        _window(transits.lower, MAJOR_HALF_WIDTH, lower_q, "lower_transit"),
    ]
    minor = [
        _window(rise_set.rise, MINOR_HALF_WIDTH, rise_q, "moonrise"),
        _window(rise_set.set, MINOR_HALF_WIDTH, set_q, "moonset"),
    ]
    return BiteWindows(major=_ordered(major), minor=_ordered(minor))


__all__ = ["MAJOR_HALF_WIDTH", "MINOR_HALF_WIDTH", "compute_bite_windows"]
