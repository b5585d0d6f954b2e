"""Typed rows produced by the record decoder, one model per feed file."""

from pydantic import BaseModel, ConfigDict

from transit_feed.models.gtfs import RouteType


class FeedRecord(BaseModel):
    """Base for decoded rows."""

    model_config = ConfigDict(frozen=True)


class CalendarRecord(FeedRecord):
    """calendar.txt row."""

    service_id: str
    days: tuple[str, str, str, str, str, str, str]  # monday..sunday


class ShapePointRecord(FeedRecord):
    """shapes.txt row."""

    shape_id: str
    lat: float
    lon: float
    seq: int


class RouteRecord(FeedRecord):
    """routes.txt row."""

    route_id: str
    short_name: str
    long_name: str
    route_type: RouteType
    agency_id: str | None = None
    description: str | None = None
    url: str | None = None
    color: str | None = None
    text_color: str | None = None


class TripRecord(FeedRecord):
    """trips.txt row."""

    trip_id: str
    route_id: str
    service_id: str
    direction: str
    shape_id: str
    headsign: str


class StopRecord(FeedRecord):
    """stops.txt row."""

    stop_id: str
    name: str
    lat: float
    lon: float


class StopTimeRecord(FeedRecord):
    """stop_times.txt row."""

    trip_id: str
    stop_id: str
    seq: int
    time: int  # arrival_time in seconds since midnight
