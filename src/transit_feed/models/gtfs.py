"""In-memory GTFS entity graph.

Entities are compared and hashed by identity: two distinct Shape objects are
different shapes even when they share an id. Back-references (trip -> route,
trip -> shape, scheduled stop -> trip/stop) are plain references for traversal
only; the Feed owns every entity.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path


class RouteType(IntEnum):
    """Vehicle type used on a route (GTFS route_type 0-7)."""

    LIGHT_RAIL = 0
    SUBWAY = 1
    RAIL = 2
    BUS = 3
    FERRY = 4
    CABLE_CAR = 5
    GONDOLA = 6
    FUNICULAR = 7


# Calendar day columns in the order they are stored on CalendarEntry.days
WEEKDAY_COLUMNS = [
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
]


@dataclass(eq=False)
class Coordinate:
    """A point on a shape or the location of a stop.

    seq is only meaningful for shape points; stops leave it at 0.
    """

    lat: float = 0.0
    lon: float = 0.0
    seq: int = 0


@dataclass(eq=False)
class Shape:
    """Physical path taken by a vehicle, ordered by point sequence."""

    id: str
    coords: list[Coordinate] = field(default_factory=list)


@dataclass(eq=False)
class Stop:
    """A location where vehicles pick up or drop off passengers."""

    id: str
    name: str
    coord: Coordinate = field(default_factory=Coordinate)


@dataclass(eq=False)
class Route:
    """A single line, made up of one or more trips.

    Optional text fields are None when the column is missing from routes.txt.
    """

    id: str
    short_name: str
    long_name: str
    route_type: RouteType = RouteType.LIGHT_RAIL
    agency_id: str | None = None
    description: str | None = None
    url: str | None = None
    color: str | None = None
    text_color: str | None = None
    trips: list["Trip"] = field(default_factory=list, repr=False)


@dataclass(eq=False)
class Trip:
    """A journey taken by a vehicle along a route."""

    id: str
    service_id: str
    direction: str
    headsign: str
    route: Route = field(repr=False)
    shape: Shape | None = field(default=None, repr=False)
    # Empty unless stop_times.txt was loaded
    stop_times: list["ScheduledStop"] = field(default_factory=list, repr=False)


@dataclass(eq=False)
class ScheduledStop:
    """One scheduled visit of a trip to a stop."""

    seq: int
    time: int  # seconds since midnight, may exceed 86400
    stop: Stop = field(repr=False)
    trip: Trip = field(repr=False)


@dataclass(eq=False)
class CalendarEntry:
    """Weekly service pattern; days holds the raw Monday..Sunday flags."""

    service_id: str
    days: list[str]

    def is_active(self, weekday: int) -> bool:
        """Return True if the service runs on weekday (0=Monday, 6=Sunday)."""
        return self.days[weekday] == "1"


@dataclass
class LoadWarning:
    """A row skipped or partially linked during loading."""

    filename: str
    row_number: int
    message: str


@dataclass(eq=False)
class Feed:
    """A fully loaded GTFS feed.

    Maps are keyed by entity id. calendar_entries keeps calendar.txt order.
    """

    feed_dir: Path
    routes: dict[str, Route] = field(default_factory=dict)
    shapes: dict[str, Shape] = field(default_factory=dict)
    stops: dict[str, Stop] = field(default_factory=dict)
    trips: dict[str, Trip] = field(default_factory=dict)
    calendar_entries: dict[str, CalendarEntry] = field(default_factory=dict)
    stop_times_loaded: bool = False
    warnings: list[LoadWarning] = field(default_factory=list)
