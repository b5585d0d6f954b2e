"""Decode raw feed rows into typed records.

Coercion is forgiving: a cell that does not parse takes its type's zero
value and the row is kept. Feeds are expected to come from a curated source.
"""

from collections.abc import Mapping

from transit_feed.models.gtfs import WEEKDAY_COLUMNS, RouteType
from transit_feed.models.records import (
    CalendarRecord,
    RouteRecord,
    ShapePointRecord,
    StopRecord,
    StopTimeRecord,
    TripRecord,
)

Row = Mapping[str, str]

# Optional routes.txt columns: field -> accepted column names, standard name first
OPTIONAL_ROUTE_COLUMNS: dict[str, tuple[str, ...]] = {
    "agency_id": ("agency_id",),
    "description": ("route_desc", "description"),
    "url": ("route_url", "url"),
    "color": ("route_color",),
    "text_color": ("route_text_color", "text_color"),
}


def parse_int(value: str | None) -> int:
    """Parse an integer cell, returning 0 if it is empty or malformed."""
    if value is None:
        return 0
    try:
        return int(value.strip())
    except ValueError:
        return 0


def parse_float(value: str | None) -> float:
    """Parse a float cell, returning 0.0 if it is empty or malformed."""
    if value is None:
        return 0.0
    try:
        return float(value.strip())
    except ValueError:
        return 0.0


def parse_route_type(value: str | None) -> RouteType:
    """Parse a route_type cell.

    Unparseable values and codes outside 0-7 fall back to LIGHT_RAIL (0).
    """
    code = parse_int(value)
    try:
        return RouteType(code)
    except ValueError:
        return RouteType.LIGHT_RAIL


def gtfs_time_to_seconds(time_str: str | None) -> int:
    """Convert a GTFS HH:MM:SS time to seconds since midnight.

    Hours are not bounded: "25:30:00" is 1:30 AM on the next day and gives
    91800. Each component is parsed on its own, so a missing or non-numeric
    component counts as 0 instead of failing the whole value.
    """
    parts = (time_str or "").split(":")
    parts += [""] * (3 - len(parts))
    hours, minutes, seconds = (parse_int(p) for p in parts[:3])
    return hours * 3600 + minutes * 60 + seconds


def _text(row: Row, column: str) -> str:
    return row.get(column) or ""


def _optional_text(row: Row, columns: tuple[str, ...]) -> str | None:
    """Return the trimmed value of the first present column, or None if none is present."""
    for column in columns:
        value = row.get(column)
        if value is not None:
            return value.strip()
    return None


def decode_calendar(row: Row) -> CalendarRecord:
    return CalendarRecord(
        service_id=_text(row, "service_id"),
        days=tuple(_text(row, day) for day in WEEKDAY_COLUMNS),
    )


def decode_shape_point(row: Row) -> ShapePointRecord:
    return ShapePointRecord(
        shape_id=_text(row, "shape_id"),
        lat=parse_float(row.get("shape_pt_lat")),
        lon=parse_float(row.get("shape_pt_lon")),
        seq=parse_int(row.get("shape_pt_sequence")),
    )


def decode_route(row: Row) -> RouteRecord:
    """Decode a routes.txt row.

    Id and names are trimmed. Optional columns stay None when the file does
    not have them at all; a present but empty cell is kept as "".
    """
    optional = {
        name: _optional_text(row, columns) for name, columns in OPTIONAL_ROUTE_COLUMNS.items()
    }
    return RouteRecord(
        route_id=_text(row, "route_id").strip(),
        short_name=_text(row, "route_short_name").strip(),
        long_name=_text(row, "route_long_name").strip(),
        route_type=parse_route_type(row.get("route_type")),
        **optional,
    )


def decode_trip(row: Row) -> TripRecord:
    return TripRecord(
        trip_id=_text(row, "trip_id"),
        route_id=_text(row, "route_id").strip(),
        service_id=_text(row, "service_id"),
        direction=_text(row, "direction_id"),
        shape_id=_text(row, "shape_id"),
        headsign=_text(row, "trip_headsign"),
    )


def decode_stop(row: Row) -> StopRecord:
    return StopRecord(
        stop_id=_text(row, "stop_id"),
        name=_text(row, "stop_name"),
        lat=parse_float(row.get("stop_lat")),
        lon=parse_float(row.get("stop_lon")),
    )


def decode_stop_time(row: Row) -> StopTimeRecord:
    return StopTimeRecord(
        trip_id=_text(row, "trip_id"),
        stop_id=_text(row, "stop_id"),
        seq=parse_int(row.get("stop_sequence")),
        time=gtfs_time_to_seconds(row.get("arrival_time")),
    )
