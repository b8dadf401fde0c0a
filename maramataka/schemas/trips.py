from datetime import date as date_type

from pydantic import BaseModel, Field, field_validator
from typing import List, Literal, Optional

TimeOfDay = Literal["AM", "PM", "EVE"]


class TripIn(BaseModel):
    date: str = Field(pattern=r"^\d{4}-\d{2}-\d{2}$")  # YYYY-MM-DD
    water: str = ""
    location: str = ""
    hours: float = Field(default=0.0, ge=0.0)
    companions: str = ""
    notes: str = ""

    @field_validator("date")
    @classmethod
    def _real_calendar_date(cls, value: str) -> str:
        try:
            date_type.fromisoformat(value)
        except ValueError as exc:
            raise ValueError(f"not a calendar date: {value}") from exc
        return value


class Trip(TripIn):
    id: int


class FishCatchIn(BaseModel):
    species: str
    gear: List[str] = []
    length: str = ""
    weight: str = ""
    time: str = ""  # HH:MM
    details: str = ""
    photo: Optional[str] = None  # base64 image


class FishCatch(FishCatchIn):
    id: int
    trip_id: int


class WeatherLogIn(BaseModel):
    time_of_day: TimeOfDay
    sky: str = ""
    wind_condition: str = ""
    wind_direction: str = ""
    water_temp: Optional[float] = None
    air_temp: Optional[float] = None


class WeatherLog(WeatherLogIn):
    id: int
    trip_id: int


class TripDetail(BaseModel):
    trip: Trip
    catches: List[FishCatch]
    weather: List[WeatherLog]
