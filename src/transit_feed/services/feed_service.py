"""Feed query service building tool responses from the shared feed."""

from transit_feed.data.config import FeedConfig
from transit_feed.data.feed_store import get_feed
from transit_feed.models.gtfs import Feed, Route, Shape
from transit_feed.models.responses import (
    ActiveServicesResponse,
    FeedSummaryResponse,
    GetRouteResponse,
    Headsign,
    RouteHeadsignsResponse,
    RouteInfo,
    RouteShapesResponse,
    RouteStopsResponse,
    ShapeInfo,
    StopInfo,
)
from transit_feed.services.calendar_service import active_service_ids, service_ids_by_weekday
from transit_feed.services.route_service import (
    longest_shape,
    route_by_short_name,
    route_headsigns,
    route_shapes,
    route_stops,
)


def _route_to_info(route: Route) -> RouteInfo:
    return RouteInfo(
        route_id=route.id,
        route_short_name=route.short_name,
        route_long_name=route.long_name,
        route_type=int(route.route_type),
        route_type_name=route.route_type.name,
        agency_id=route.agency_id,
        description=route.description,
        url=route.url,
        color=route.color,
        text_color=route.text_color,
        trip_count=len(route.trips),
    )


def _shape_to_info(shape: Shape) -> ShapeInfo:
    return ShapeInfo(shape_id=shape.id, point_count=len(shape.coords))


def _require_route(feed: Feed, short_name: str) -> Route:
    route = route_by_short_name(feed, short_name)
    if route is None:
        raise ValueError(f"Route not found: {short_name}")
    return route


async def get_route(short_name: str, config: FeedConfig | None = None) -> GetRouteResponse:
    """Look up a route by exact short name."""
    feed = await get_feed(config)
    route = route_by_short_name(feed, short_name)
    return GetRouteResponse(
        query=short_name,
        route=_route_to_info(route) if route is not None else None,
        found=route is not None,
    )


async def get_route_shapes(
    short_name: str, config: FeedConfig | None = None
) -> RouteShapesResponse:
    """Get the distinct shapes of a route and its longest one.

    Raises:
        ValueError: If no route has this short name.
    """
    feed = await get_feed(config)
    route = _require_route(feed, short_name)
    shapes = [_shape_to_info(s) for s in route_shapes(route)]
    longest = longest_shape(route)
    return RouteShapesResponse(
        route_id=route.id,
        shapes=shapes,
        longest_shape=_shape_to_info(longest) if longest is not None else None,
        count=len(shapes),
    )


async def get_route_stops(short_name: str, config: FeedConfig | None = None) -> RouteStopsResponse:
    """Get the distinct stops served by a route.

    Raises:
        ValueError: If no route has this short name.
    """
    feed = await get_feed(config)
    route = _require_route(feed, short_name)
    stops = [
        StopInfo(stop_id=s.id, stop_name=s.name, stop_lat=s.coord.lat, stop_lon=s.coord.lon)
        for s in route_stops(route)
    ]
    return RouteStopsResponse(
        route_id=route.id,
        stops=stops,
        count=len(stops),
        stop_times_loaded=feed.stop_times_loaded,
    )


async def get_route_headsigns(
    short_name: str, config: FeedConfig | None = None
) -> RouteHeadsignsResponse:
    """Get the headsign shown for each direction of a route.

    Raises:
        ValueError: If no route has this short name.
    """
    feed = await get_feed(config)
    route = _require_route(feed, short_name)
    headsign_0, headsign_1 = route_headsigns(route)
    return RouteHeadsignsResponse(
        route_id=route.id,
        headsigns=[
            Headsign(direction="0", text=headsign_0),
            Headsign(direction="1", text=headsign_1),
        ],
    )


async def get_active_services(config: FeedConfig | None = None) -> ActiveServicesResponse:
    """Get the service ids active on each weekday.

    service_ids lists every active (weekday, service) pair, so a service
    running on five days appears five times.
    """
    feed = await get_feed(config)
    return ActiveServicesResponse(
        service_ids=active_service_ids(feed),
        by_weekday=service_ids_by_weekday(feed),
    )


def summarize_feed(feed: Feed) -> FeedSummaryResponse:
    """Build entity counts for a loaded feed."""
    return FeedSummaryResponse(
        feed_path=str(feed.feed_dir),
        route_count=len(feed.routes),
        trip_count=len(feed.trips),
        shape_count=len(feed.shapes),
        stop_count=len(feed.stops),
        service_count=len(feed.calendar_entries),
        stop_times_loaded=feed.stop_times_loaded,
        warning_count=len(feed.warnings),
    )


async def get_feed_summary(config: FeedConfig | None = None) -> FeedSummaryResponse:
    """Get entity counts for the shared feed."""
    feed = await get_feed(config)
    return summarize_feed(feed)
