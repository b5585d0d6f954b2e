"""GTFS feed loader building the in-memory entity graph."""

import logging
from pathlib import Path

from transit_feed.data.csv_source import FeedSource
from transit_feed.data.decoder import (
    decode_calendar,
    decode_route,
    decode_shape_point,
    decode_stop,
    decode_stop_time,
    decode_trip,
)
from transit_feed.errors import FeedFileError, UnresolvedReferenceError
from transit_feed.models.gtfs import (
    WEEKDAY_COLUMNS,
    CalendarEntry,
    Coordinate,
    Feed,
    LoadWarning,
    Route,
    ScheduledStop,
    Shape,
    Stop,
    Trip,
)

logger = logging.getLogger(__name__)

CALENDAR_FILE = "calendar.txt"
SHAPES_FILE = "shapes.txt"
ROUTES_FILE = "routes.txt"
TRIPS_FILE = "trips.txt"
STOPS_FILE = "stops.txt"
STOP_TIMES_FILE = "stop_times.txt"

# Columns that must be present in each file's header.
REQUIRED_COLUMNS: dict[str, list[str]] = {
    CALENDAR_FILE: ["service_id", *WEEKDAY_COLUMNS],
    SHAPES_FILE: ["shape_id", "shape_pt_lat", "shape_pt_lon", "shape_pt_sequence"],
    ROUTES_FILE: ["route_id", "route_type"],
    TRIPS_FILE: ["route_id", "service_id", "trip_id"],
    STOPS_FILE: ["stop_id"],
    STOP_TIMES_FILE: ["trip_id", "stop_id", "stop_sequence"],
}


class FeedLoader:
    """Loader for reading a GTFS feed into memory.

    Files are read in dependency order (calendar, shapes, routes, trips,
    stops, stop_times) because later files reference ids defined by earlier
    ones.
    """

    def __init__(self, strict: bool = False):
        """Initialize the loader.

        Args:
            strict: Raise UnresolvedReferenceError on the first row that
                references an unknown id instead of skipping it with a warning.
        """
        self.strict = strict

    def load(self, feed_path: Path, load_stop_times: bool = True) -> Feed:
        """Load a GTFS feed from a directory or ZIP file.

        Args:
            feed_path: Path to GTFS directory or ZIP file.
            load_stop_times: Read stop_times.txt. Callers that only need
                routes and geometry can skip it, it is usually the largest file.

        Returns:
            The fully linked Feed.

        Raises:
            FeedFileError: If the feed path or a required file is missing or
                has an unusable header.
            UnresolvedReferenceError: In strict mode, if a row references an
                unknown route, shape, trip or stop.
        """
        feed_path = Path(feed_path)
        if not feed_path.exists():
            raise FeedFileError(str(feed_path), "GTFS path not found")

        logger.info(f"Loading GTFS feed from {feed_path}...")
        source = FeedSource(feed_path)
        feed = Feed(feed_dir=feed_path)

        self._load_calendar(feed, source)
        self._load_shapes(feed, source)
        self._load_routes(feed, source)
        self._load_trips(feed, source)
        self._load_stops(feed, source)
        if load_stop_times:
            self._load_stop_times(feed, source)

        logger.info(
            f"GTFS feed loaded: {len(feed.routes)} routes, {len(feed.trips)} trips, "
            f"{len(feed.shapes)} shapes, {len(feed.stops)} stops"
            + (f" ({len(feed.warnings)} warnings)" if feed.warnings else "")
        )
        return feed

    def _rows(self, source: FeedSource, filename: str):
        """Yield (line_number, row) pairs for a file, checking its required columns."""
        return source.read_rows(filename, REQUIRED_COLUMNS[filename])

    def _unresolved(
        self, feed: Feed, filename: str, row_number: int, reference: str, action: str
    ) -> None:
        """Apply the unresolved-reference policy for one row."""
        if self.strict:
            raise UnresolvedReferenceError(filename, row_number, reference)
        message = f"unknown {reference}, {action}"
        logger.warning(f"{filename} row {row_number}: {message}")
        feed.warnings.append(LoadWarning(filename=filename, row_number=row_number, message=message))

    def _log_count(self, filename: str, count: int) -> None:
        logger.info(f"  Loaded {count:,} rows from {filename}")

    def _load_calendar(self, feed: Feed, source: FeedSource) -> None:
        count = 0
        for _, row in self._rows(source, CALENDAR_FILE):
            record = decode_calendar(row)
            feed.calendar_entries[record.service_id] = CalendarEntry(
                service_id=record.service_id, days=list(record.days)
            )
            count += 1
        self._log_count(CALENDAR_FILE, count)

    def _load_shapes(self, feed: Feed, source: FeedSource) -> None:
        """Load shapes.txt.

        Rows of one shape are assumed to be contiguous. A single accumulator
        is committed whenever the shape id changes, so an id that shows up
        again later replaces the earlier block in the map.
        """
        count = 0
        current: Shape | None = None
        for _, row in self._rows(source, SHAPES_FILE):
            record = decode_shape_point(row)
            if current is None or record.shape_id != current.id:
                if current is not None:
                    feed.shapes[current.id] = current
                current = Shape(id=record.shape_id)
            current.coords.append(Coordinate(lat=record.lat, lon=record.lon, seq=record.seq))
            count += 1
        if current is not None:
            feed.shapes[current.id] = current

        for shape in feed.shapes.values():
            shape.coords.sort(key=lambda c: c.seq)
        self._log_count(SHAPES_FILE, count)

    def _load_routes(self, feed: Feed, source: FeedSource) -> None:
        count = 0
        for _, row in self._rows(source, ROUTES_FILE):
            record = decode_route(row)
            feed.routes[record.route_id] = Route(
                id=record.route_id,
                short_name=record.short_name,
                long_name=record.long_name,
                route_type=record.route_type,
                agency_id=record.agency_id,
                description=record.description,
                url=record.url,
                color=record.color,
                text_color=record.text_color,
            )
            count += 1
        self._log_count(ROUTES_FILE, count)

    def _load_trips(self, feed: Feed, source: FeedSource) -> None:
        count = 0
        for row_number, row in self._rows(source, TRIPS_FILE):
            record = decode_trip(row)

            route = feed.routes.get(record.route_id)
            if route is None:
                self._unresolved(
                    feed, TRIPS_FILE, row_number, f"route_id {record.route_id!r}", "trip skipped"
                )
                continue

            shape = None
            if record.shape_id:
                shape = feed.shapes.get(record.shape_id)
                if shape is None:
                    self._unresolved(
                        feed,
                        TRIPS_FILE,
                        row_number,
                        f"shape_id {record.shape_id!r}",
                        "trip kept without shape",
                    )

            trip = Trip(
                id=record.trip_id,
                service_id=record.service_id,
                direction=record.direction,
                headsign=record.headsign,
                route=route,
                shape=shape,
            )
            route.trips.append(trip)
            feed.trips[trip.id] = trip
            count += 1
        self._log_count(TRIPS_FILE, count)

    def _load_stops(self, feed: Feed, source: FeedSource) -> None:
        count = 0
        for _, row in self._rows(source, STOPS_FILE):
            record = decode_stop(row)
            feed.stops[record.stop_id] = Stop(
                id=record.stop_id,
                name=record.name,
                coord=Coordinate(lat=record.lat, lon=record.lon),
            )
            count += 1
        self._log_count(STOPS_FILE, count)

    def _load_stop_times(self, feed: Feed, source: FeedSource) -> None:
        count = 0
        for row_number, row in self._rows(source, STOP_TIMES_FILE):
            record = decode_stop_time(row)

            trip = feed.trips.get(record.trip_id)
            if trip is None:
                self._unresolved(
                    feed, STOP_TIMES_FILE, row_number, f"trip_id {record.trip_id!r}", "row skipped"
                )
                continue
            stop = feed.stops.get(record.stop_id)
            if stop is None:
                self._unresolved(
                    feed, STOP_TIMES_FILE, row_number, f"stop_id {record.stop_id!r}", "row skipped"
                )
                continue

            trip.stop_times.append(
                ScheduledStop(seq=record.seq, time=record.time, stop=stop, trip=trip)
            )
            count += 1

        for trip in feed.trips.values():
            trip.stop_times.sort(key=lambda st: st.seq)
        feed.stop_times_loaded = True
        self._log_count(STOP_TIMES_FILE, count)


def load_feed(feed_path: Path, load_stop_times: bool = True, strict: bool = False) -> Feed:
    """Load a GTFS feed with a one-off FeedLoader.

    Args:
        feed_path: Path to GTFS directory or ZIP file.
        load_stop_times: Read stop_times.txt as well.
        strict: Fail on unresolved references instead of skipping rows.

    Returns:
        The loaded Feed.
    """
    return FeedLoader(strict=strict).load(feed_path, load_stop_times)
