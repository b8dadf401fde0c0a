from datetime import datetime, timedelta, timezone

import pytest
from pydantic import TypeAdapter, ValidationError

from maramataka.schemas import AbsentWindow, BiteWindows, PhaseRecord, PresentWindow, TripIn, Window
from maramataka.services.phase_catalog import PHASE_CATALOG

WINDOW = TypeAdapter(Window)


def test_phase_record_round_trips_through_json():
    for phase in PHASE_CATALOG:
        restored = PhaseRecord.model_validate_json(phase.model_dump_json())
        assert restored == phase
        assert restored.bite_qualities == phase.bite_qualities


def test_present_window_round_trips():
    start = datetime(2024, 1, 25, 13, tzinfo=timezone.utc)
    window = PresentWindow(start=start, end=start + timedelta(hours=2), quality="excellent")
    restored = WINDOW.validate_json(WINDOW.dump_json(window))
    assert isinstance(restored, PresentWindow)
    assert restored == window


def test_absent_window_keeps_its_tag():
    payload = WINDOW.dump_python(AbsentWindow(), mode="json")
    assert payload == {"kind": "absent", "quality": "poor"}
    assert isinstance(WINDOW.validate_python(payload), AbsentWindow)


def test_bite_windows_round_trip_mixed_variants():
    start = datetime(2024, 1, 25, 5, 40, tzinfo=timezone.utc)
    windows = BiteWindows(
        major=[AbsentWindow(), AbsentWindow()],
        minor=[
            PresentWindow(start=start, end=start + timedelta(hours=1), quality="good"),
            AbsentWindow(),
        ],
    )
    restored = BiteWindows.model_validate_json(windows.model_dump_json())
    assert restored == windows
    assert [w.kind for w in restored.minor] == ["present", "absent"]


@pytest.mark.parametrize("value", ["2024-13-45", "2024-02-30", "2024-1-5"])
def test_trip_date_must_be_a_calendar_date(value):
    with pytest.raises(ValidationError):
        TripIn(date=value)


def test_trip_date_is_kept_as_iso_string():
    assert TripIn(date="2024-02-29").date == "2024-02-29"
