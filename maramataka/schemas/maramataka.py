"""Maramataka phase, bite-window and calendar schemas."""

from __future__ import annotations

from datetime import date as date_type, datetime
from typing import Annotated, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

FishingRating = Literal["Excellent", "Good", "Average", "Poor"]
BiteQuality = Literal["poor", "average", "good", "excellent"]

LOWEST_BITE_QUALITY: BiteQuality = "poor"


class PhaseRecord(BaseModel):
    """One of the 30 named lunar days."""

    model_config = ConfigDict(frozen=True)

    name: str
    quality: FishingRating
    description: str
    # major 1 (upper transit), major 2 (lower transit), minor 1 (rise), minor 2 (set)
    bite_qualities: Tuple[BiteQuality, BiteQuality, BiteQuality, BiteQuality]


class PresentWindow(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["present"] = "present"
    start: datetime
    end: datetime
    quality: BiteQuality


class AbsentWindow(BaseModel):
    """Placeholder for a window whose anchoring moon event could not be found."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["absent"] = "absent"
    quality: BiteQuality = LOWEST_BITE_QUALITY


Window = Annotated[Union[PresentWindow, AbsentWindow], Field(discriminator="kind")]


class BiteWindows(BaseModel):
    model_config = ConfigDict(frozen=True)

    major: List[Window] = Field(min_length=2, max_length=2)
    minor: List[Window] = Field(min_length=2, max_length=2)


class MoonEventsVM(BaseModel):
    moonrise: Optional[datetime] = None
    moonset: Optional[datetime] = None
    upper_transit: Optional[datetime] = None
    lower_transit: Optional[datetime] = None


class SunEventsVM(BaseModel):
    sunrise: Optional[datetime] = None
    sunset: Optional[datetime] = None


class CatalogEntry(BaseModel):
    lunar_day: int
    phase: PhaseRecord


class PhaseForDate(BaseModel):
    date: date_type
    lunar_day: int
    phase: PhaseRecord


class DailyOutlook(BaseModel):
    date: date_type
    tz: str
    lat: float
    lon: float
    lunar_day: int
    phase: PhaseRecord
    moon: MoonEventsVM
    sun: SunEventsVM = Field(default_factory=SunEventsVM)
    windows: BiteWindows
    meta: dict = Field(default_factory=dict)


class CalendarDay(BaseModel):
    date: date_type
    day_of_month: int
    lunar_day: Optional[int] = None
    phase: Optional[PhaseRecord] = None
    is_today: bool
    is_current_month: bool
    has_log: bool


class MonthCalendar(BaseModel):
    year: int
    month: int
    tz: str
    days: List[CalendarDay]
