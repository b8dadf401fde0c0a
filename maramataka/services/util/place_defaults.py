"""Helpers for filling in missing place inputs on bite-time requests."""

import os
from typing import Any, Dict, Optional, Tuple

try:  # pragma: no cover - optional dependency
    from timezonefinder import TimezoneFinder

    _TF = TimezoneFinder()
except Exception:  # pragma: no cover - defensive
    _TF = None


DEF_LAT = float(os.getenv("DEFAULT_PLACE_LAT", "-36.8485"))
DEF_LON = float(os.getenv("DEFAULT_PLACE_LON", "174.7633"))
DEF_TZ = os.getenv("DEFAULT_PLACE_TZ", "Pacific/Auckland")
DEF_LBL = os.getenv("DEFAULT_PLACE_LABEL", "Auckland, New Zealand")


def infer_tz(lat: float, lon: float) -> Optional[str]:
    """Infer timezone name for a coordinate pair."""

    if _TF is None:
        return None
    try:
        return _TF.timezone_at(lng=lon, lat=lat)
    except Exception:  # pragma: no cover - defensive
        return None


def normalize_place(
    lat: Optional[float], lon: Optional[float], tz: Optional[str]
) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """Resolve effective coordinates and timezone, recording which defaults applied.

    Coordinates are passed through unchanged when both are given.
    """

    flags: Dict[str, Any] = {
        "place_defaults_used": False,
        "tz_inferred": False,
        "default_reason": None,
    }

    if lat is None or lon is None:
        flags.update({"place_defaults_used": True, "default_reason": "missing_latlon"})
        return {"lat": DEF_LAT, "lon": DEF_LON, "tz": tz or DEF_TZ, "label": DEF_LBL}, flags

    if not tz:
        tz_guess = infer_tz(lat, lon)
        if tz_guess:
            tz = tz_guess
            flags["tz_inferred"] = True
        else:
            tz = "UTC"
        flags["default_reason"] = "missing_tz"

    return {"lat": lat, "lon": lon, "tz": tz, "label": f"{lat:.4f}, {lon:.4f}"}, flags
