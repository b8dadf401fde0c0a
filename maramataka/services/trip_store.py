"""Trip, catch and weather-log records.

``TripRepository`` is the boundary the rest of the service talks to. The
in-memory store below keeps records in-process only and is protected by a
threading lock for concurrent access from request handlers. Durable storage
is expected to implement the same protocol.
"""

import threading
from typing import Dict, List, Optional, Protocol

from ..schemas import FishCatch, FishCatchIn, Trip, TripIn, WeatherLog, WeatherLogIn
from .errors import RecordNotFound, TripNotFound


class TripRepository(Protocol):
    def add_trip(self, trip: TripIn) -> Trip: ...

    def get_trip(self, trip_id: int) -> Optional[Trip]: ...

    def trips_by_date(self, date: str) -> List[Trip]: ...

    def update_trip(self, trip_id: int, trip: TripIn) -> Trip: ...

    def delete_trip(self, trip_id: int) -> None: ...

    def add_catch(self, trip_id: int, fish: FishCatchIn) -> FishCatch: ...

    def catches_by_trip(self, trip_id: int) -> List[FishCatch]: ...

    def update_catch(self, trip_id: int, catch_id: int, fish: FishCatchIn) -> FishCatch: ...

    def delete_catch(self, trip_id: int, catch_id: int) -> bool: ...

    def add_weather(self, trip_id: int, weather: WeatherLogIn) -> WeatherLog: ...

    def weather_by_trip(self, trip_id: int) -> List[WeatherLog]: ...

    def update_weather(self, trip_id: int, weather_id: int, weather: WeatherLogIn) -> WeatherLog: ...

    def delete_weather(self, trip_id: int, weather_id: int) -> bool: ...


class InMemoryTripStore:
    def __init__(self) -> None:
        self._trips: Dict[int, Trip] = {}
        self._catches: Dict[int, FishCatch] = {}
        self._weather: Dict[int, WeatherLog] = {}
        self._next_id = {"trips": 1, "catches": 1, "weather": 1}
        self._lock = threading.Lock()

    def _allocate(self, kind: str) -> int:
        value = self._next_id[kind]
        self._next_id[kind] = value + 1
        return value

    def _require_trip(self, trip_id: int) -> Trip:
        trip = self._trips.get(trip_id)
        if trip is None:
            raise TripNotFound(trip_id)
        return trip

    @staticmethod
    def _owned(records: Dict, trip_id: int, record_id: int) -> bool:
        record = records.get(record_id)
        return record is not None and record.trip_id == trip_id

    # Trips ---------------------------------------------------------------

    def add_trip(self, trip: TripIn) -> Trip:
        with self._lock:
            stored = Trip(id=self._allocate("trips"), **trip.model_dump())
            self._trips[stored.id] = stored
            return stored

    def get_trip(self, trip_id: int) -> Optional[Trip]:
        with self._lock:
            return self._trips.get(trip_id)

    def trips_by_date(self, date: str) -> List[Trip]:
        with self._lock:
            return [t for t in self._trips.values() if t.date == date]

    def update_trip(self, trip_id: int, trip: TripIn) -> Trip:
        with self._lock:
            self._require_trip(trip_id)
            stored = Trip(id=trip_id, **trip.model_dump())
            self._trips[trip_id] = stored
            return stored

    def delete_trip(self, trip_id: int) -> None:
        """Delete a trip together with every catch and weather log referencing it."""
        with self._lock:
            self._require_trip(trip_id)
            self._catches = {k: v for k, v in self._catches.items() if v.trip_id != trip_id}
            self._weather = {k: v for k, v in self._weather.items() if v.trip_id != trip_id}
            del self._trips[trip_id]

    # Catches -------------------------------------------------------------

    def add_catch(self, trip_id: int, fish: FishCatchIn) -> FishCatch:
        with self._lock:
            self._require_trip(trip_id)
            stored = FishCatch(id=self._allocate("catches"), trip_id=trip_id, **fish.model_dump())
            self._catches[stored.id] = stored
            return stored

    def catches_by_trip(self, trip_id: int) -> List[FishCatch]:
        with self._lock:
            return [c for c in self._catches.values() if c.trip_id == trip_id]

    def update_catch(self, trip_id: int, catch_id: int, fish: FishCatchIn) -> FishCatch:
        with self._lock:
            if not self._owned(self._catches, trip_id, catch_id):
                raise RecordNotFound(catch_id)
            stored = FishCatch(id=catch_id, trip_id=trip_id, **fish.model_dump())
            self._catches[catch_id] = stored
            return stored

    def delete_catch(self, trip_id: int, catch_id: int) -> bool:
        with self._lock:
            if not self._owned(self._catches, trip_id, catch_id):
                return False
            del self._catches[catch_id]
            return True

    # Weather -------------------------------------------------------------

    def add_weather(self, trip_id: int, weather: WeatherLogIn) -> WeatherLog:
        with self._lock:
            self._require_trip(trip_id)
            stored = WeatherLog(id=self._allocate("weather"), trip_id=trip_id, **weather.model_dump())
            self._weather[stored.id] = stored
            return stored

    def weather_by_trip(self, trip_id: int) -> List[WeatherLog]:
        with self._lock:
            return [w for w in self._weather.values() if w.trip_id == trip_id]

    def update_weather(self, trip_id: int, weather_id: int, weather: WeatherLogIn) -> WeatherLog:
        with self._lock:
            if not self._owned(self._weather, trip_id, weather_id):
                raise RecordNotFound(weather_id)
            stored = WeatherLog(id=weather_id, trip_id=trip_id, **weather.model_dump())
            self._weather[weather_id] = stored
            return stored

    def delete_weather(self, trip_id: int, weather_id: int) -> bool:
        with self._lock:
            if not self._owned(self._weather, trip_id, weather_id):
                return False
            del self._weather[weather_id]
            return True


# Global store used by the API.
STORE = InMemoryTripStore()
