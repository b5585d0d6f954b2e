"""Read-only route queries over a loaded feed.

Results that the underlying maps would leave in arbitrary order are sorted
by id so repeated calls give identical answers.
"""

from transit_feed.models.gtfs import Feed, Route, Shape, Stop

# Starting point counts for the headsign selection of direction "0" and "1".
# The asymmetry matches the established behaviour; see DESIGN.md.
HEADSIGN_THRESHOLDS = {"0": 0, "1": 1}


def route_by_short_name(feed: Feed, short_name: str) -> Route | None:
    """Find a route by its exact short name.

    No trimming or case folding is applied. When several routes share the
    short name, the one with the smallest route id is returned.

    Args:
        feed: Loaded feed.
        short_name: Route short name to look for.

    Returns:
        The matching Route, or None if no route has that short name.
    """
    for route_id in sorted(feed.routes):
        route = feed.routes[route_id]
        if route.short_name == short_name:
            return route
    return None


def route_shapes(route: Route) -> list[Shape]:
    """Return the distinct shapes used by a route's trips, ordered by shape id.

    Trips without a shape contribute nothing.
    """
    shapes: dict[int, Shape] = {}
    for trip in route.trips:
        if trip.shape is not None:
            shapes[id(trip.shape)] = trip.shape
    return sorted(shapes.values(), key=lambda s: s.id)


def longest_shape(route: Route) -> Shape | None:
    """Return the route's shape with the most points.

    Ties go to the shape with the smallest id. Returns None if no trip of
    the route has a shape.
    """
    longest: Shape | None = None
    for shape in route_shapes(route):
        if longest is None or len(shape.coords) > len(longest.coords):
            longest = shape
    return longest


def route_stops(route: Route) -> list[Stop]:
    """Return the distinct stops visited by any trip of the route, ordered by stop id.

    Always empty if the feed was loaded without stop times.
    """
    stops: dict[int, Stop] = {}
    for trip in route.trips:
        for stop_time in trip.stop_times:
            stops[id(stop_time.stop)] = stop_time.stop
    return sorted(stops.values(), key=lambda s: s.id)


def route_headsigns(route: Route) -> list[str]:
    """Return the headsigns for direction "0" and "1" of a route.

    For each direction the headsign of the trip with the longest shape wins.
    A trip only takes the slot when its shape has strictly more points than
    the current best, starting from HEADSIGN_THRESHOLDS, so in direction "1"
    a single-point shape never qualifies. Trips without a shape and trips
    with any other direction value are ignored.

    Returns:
        [headsign_0, headsign_1]; a slot is "" when no trip qualifies.
    """
    best = dict(HEADSIGN_THRESHOLDS)
    headsigns = {direction: "" for direction in HEADSIGN_THRESHOLDS}

    for trip in route.trips:
        if trip.direction not in best or trip.shape is None:
            continue
        length = len(trip.shape.coords)
        if length > best[trip.direction]:
            best[trip.direction] = length
            headsigns[trip.direction] = trip.headsign.strip()

    return [headsigns["0"], headsigns["1"]]
