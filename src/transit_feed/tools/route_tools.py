"""MCP tools for route queries."""

from transit_feed.app import mcp
from transit_feed.models.responses import (
    GetRouteResponse,
    RouteHeadsignsResponse,
    RouteShapesResponse,
    RouteStopsResponse,
)
from transit_feed.services import feed_service


@mcp.tool()
async def get_route(short_name: str) -> GetRouteResponse:
    """Find a route by its short name (e.g. "24" or "Green").

    The match is exact: no trimming or case folding. If several routes share
    the short name, the one with the smallest route_id is returned.

    Args:
        short_name: Route short name as published in routes.txt.

    Returns:
        GetRouteResponse with the route details and found=False if no route matches.
    """
    return await feed_service.get_route(short_name)


@mcp.tool()
async def get_route_shapes(short_name: str) -> RouteShapesResponse:
    """List the distinct shapes (vehicle paths) used by a route.

    Also returns the longest shape, i.e. the one with the most points.

    Args:
        short_name: Route short name. Use get_route() to check it exists.
    """
    return await feed_service.get_route_shapes(short_name)


@mcp.tool()
async def get_route_stops(short_name: str) -> RouteStopsResponse:
    """List the distinct stops served by any trip of a route.

    Requires the feed to be loaded with stop times; otherwise the list is
    empty and stop_times_loaded is False.

    Args:
        short_name: Route short name.
    """
    return await feed_service.get_route_stops(short_name)


@mcp.tool()
async def get_route_headsigns(short_name: str) -> RouteHeadsignsResponse:
    """Get the destination text shown for each direction of a route.

    For each direction the headsign of the trip with the longest shape is used.

    Args:
        short_name: Route short name.
    """
    return await feed_service.get_route_headsigns(short_name)
