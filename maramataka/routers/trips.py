"""Trip log endpoints: trips, catches and weather observations."""

from typing import List

from fastapi import APIRouter, HTTPException, Query, Response

from ..schemas import FishCatch, FishCatchIn, Trip, TripDetail, TripIn, WeatherLog, WeatherLogIn
from ..services.errors import RecordNotFound, TripNotFound
from ..services.trip_store import STORE


router = APIRouter(prefix="/v1/trips", tags=["trips"])


def _not_found() -> HTTPException:
    return HTTPException(status_code=404, detail="NOT_FOUND")


@router.post("", response_model=Trip, status_code=201)
def create_trip(req: TripIn) -> Trip:
    return STORE.add_trip(req)


@router.get("", response_model=List[Trip])
def list_trips(date: str = Query(..., pattern=r"^\d{4}-\d{2}-\d{2}$")) -> List[Trip]:
    return STORE.trips_by_date(date)


@router.get("/{trip_id}", response_model=TripDetail)
def get_trip(trip_id: int) -> TripDetail:
    trip = STORE.get_trip(trip_id)
    if trip is None:
        raise _not_found()
    return TripDetail(
        trip=trip,
        catches=STORE.catches_by_trip(trip_id),
        weather=STORE.weather_by_trip(trip_id),
    )


@router.put("/{trip_id}", response_model=Trip)
def update_trip(trip_id: int, req: TripIn) -> Trip:
    try:
        return STORE.update_trip(trip_id, req)
    except TripNotFound:
        raise _not_found()


@router.delete("/{trip_id}", status_code=204)
def delete_trip(trip_id: int) -> Response:
    try:
        STORE.delete_trip(trip_id)
    except TripNotFound:
        raise _not_found()
    return Response(status_code=204)


@router.post("/{trip_id}/catches", response_model=FishCatch, status_code=201)
def add_catch(trip_id: int, req: FishCatchIn) -> FishCatch:
    try:
        return STORE.add_catch(trip_id, req)
    except TripNotFound:
        raise _not_found()


@router.get("/{trip_id}/catches", response_model=List[FishCatch])
def list_catches(trip_id: int) -> List[FishCatch]:
    return STORE.catches_by_trip(trip_id)


@router.put("/{trip_id}/catches/{catch_id}", response_model=FishCatch)
def update_catch(trip_id: int, catch_id: int, req: FishCatchIn) -> FishCatch:
    try:
        return STORE.update_catch(trip_id, catch_id, req)
    except RecordNotFound:
        raise _not_found()


@router.delete("/{trip_id}/catches/{catch_id}", status_code=204)
def delete_catch(trip_id: int, catch_id: int) -> Response:
    if not STORE.delete_catch(trip_id, catch_id):
        raise _not_found()
    return Response(status_code=204)


@router.post("/{trip_id}/weather", response_model=WeatherLog, status_code=201)
def add_weather(trip_id: int, req: WeatherLogIn) -> WeatherLog:
    try:
        return STORE.add_weather(trip_id, req)
    except TripNotFound:
        raise _not_found()


@router.get("/{trip_id}/weather", response_model=List[WeatherLog])
def list_weather(trip_id: int) -> List[WeatherLog]:
    return STORE.weather_by_trip(trip_id)


@router.put("/{trip_id}/weather/{weather_id}", response_model=WeatherLog)
def update_weather(trip_id: int, weather_id: int, req: WeatherLogIn) -> WeatherLog:
    try:
        return STORE.update_weather(trip_id, weather_id, req)
    except RecordNotFound:
        raise _not_found()


@router.delete("/{trip_id}/weather/{weather_id}", status_code=204)
def delete_weather(trip_id: int, weather_id: int) -> Response:
    if not STORE.delete_weather(trip_id, weather_id):
        raise _not_found()
    return Response(status_code=204)
