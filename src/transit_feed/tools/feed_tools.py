"""MCP tools for feed-wide information."""

from transit_feed.app import mcp
from transit_feed.models.responses import ActiveServicesResponse, FeedSummaryResponse
from transit_feed.services import feed_service


@mcp.tool()
async def feed_summary() -> FeedSummaryResponse:
    """Get entity counts for the loaded GTFS feed.

    Returns the number of routes, trips, shapes, stops and services, whether
    stop times were loaded, and how many rows were skipped while loading.
    """
    return await feed_service.get_feed_summary()


@mcp.tool()
async def get_active_services() -> ActiveServicesResponse:
    """List the service IDs active on each weekday.

    service_ids walks Monday..Sunday and repeats a service once for every
    day it runs; by_weekday groups the same data per day.
    """
    return await feed_service.get_active_services()
