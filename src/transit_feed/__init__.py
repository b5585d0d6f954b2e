"""Load static GTFS feeds into memory and query routes, shapes, stops and calendars."""

from transit_feed.data.feed_loader import FeedLoader, load_feed
from transit_feed.errors import FeedError, FeedFileError, UnresolvedReferenceError
from transit_feed.models.gtfs import (
    CalendarEntry,
    Coordinate,
    Feed,
    Route,
    RouteType,
    ScheduledStop,
    Shape,
    Stop,
    Trip,
)
from transit_feed.services.calendar_service import active_service_ids
from transit_feed.services.route_service import (
    longest_shape,
    route_by_short_name,
    route_headsigns,
    route_shapes,
    route_stops,
)

__version__ = "0.1.0"

__all__ = [
    # Loading
    "FeedLoader",
    "load_feed",
    # Errors
    "FeedError",
    "FeedFileError",
    "UnresolvedReferenceError",
    # Model
    "Feed",
    "Route",
    "RouteType",
    "Trip",
    "Shape",
    "Stop",
    "ScheduledStop",
    "Coordinate",
    "CalendarEntry",
    # Queries
    "route_by_short_name",
    "route_shapes",
    "longest_shape",
    "route_stops",
    "route_headsigns",
    "active_service_ids",
]
