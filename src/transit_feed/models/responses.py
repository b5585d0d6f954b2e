from pydantic import BaseModel, Field


class RouteInfo(BaseModel):
    route_id: str
    route_short_name: str
    route_long_name: str
    route_type: int = Field(description="0=light rail, 1=subway, 2=rail, 3=bus, 4=ferry, ...")
    route_type_name: str = Field(description="Vehicle type name, e.g. BUS")
    agency_id: str | None = None
    description: str | None = None
    url: str | None = None
    color: str | None = None
    text_color: str | None = None
    trip_count: int = Field(description="Number of trips on this route")


class GetRouteResponse(BaseModel):
    """Response for get_route."""

    query: str = Field(description="Short name that was looked up")
    route: RouteInfo | None = None
    found: bool


class ShapeInfo(BaseModel):
    shape_id: str
    point_count: int = Field(description="Number of points in the shape path")


class RouteShapesResponse(BaseModel):
    route_id: str
    shapes: list[ShapeInfo] = Field(description="Distinct shapes used by the route, by shape_id")
    longest_shape: ShapeInfo | None = Field(
        default=None, description="Shape with the most points (None if the route has no shapes)"
    )
    count: int


class StopInfo(BaseModel):
    stop_id: str
    stop_name: str
    stop_lat: float
    stop_lon: float


class RouteStopsResponse(BaseModel):
    route_id: str
    stops: list[StopInfo] = Field(description="Distinct stops served by the route, by stop_id")
    count: int
    stop_times_loaded: bool = Field(
        description="False if the feed was loaded without stop_times.txt (stops is then empty)"
    )


class Headsign(BaseModel):
    direction: str = Field(description="Direction ID ('0' or '1')")
    text: str = Field(description="Headsign text, empty if no trip qualifies")


class RouteHeadsignsResponse(BaseModel):
    route_id: str
    headsigns: list[Headsign] = Field(description="One entry per direction, '0' first")


class ActiveServicesResponse(BaseModel):
    service_ids: list[str] = Field(
        description="Active service IDs for Monday..Sunday; repeated once per active day"
    )
    by_weekday: dict[str, list[str]] = Field(description="Active service IDs keyed by weekday")


class FeedSummaryResponse(BaseModel):
    feed_path: str
    route_count: int
    trip_count: int
    shape_count: int
    stop_count: int
    service_count: int
    stop_times_loaded: bool
    warning_count: int = Field(description="Rows skipped or partially linked while loading")
