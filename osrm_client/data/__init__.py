"""Data types for the OSRM client."""

from osrm_client.data.geometry import (
    decode_polyline,
    encode_polyline,
    format_coordinates,
    parse_coordinates,
)
from osrm_client.data.responses import (
    Annotation,
    GeoJSONGeometry,
    Intersection,
    Lane,
    ManeuverType,
    MatchResponse,
    MatchRoute,
    NearestResponse,
    Route,
    RouteLeg,
    RouteResponse,
    RouteStep,
    ServiceResponse,
    StepManeuver,
    TableResponse,
    TileResponse,
    Tracepoint,
    TripResponse,
    TripWaypoint,
    Waypoint,
    geometry_coordinates,
)
from osrm_client.data.types import (
    UNLIMITED,
    AnnotationType,
    Approach,
    Bearing,
    Coordinate,
    CoordinateFormat,
    FallbackCoordinate,
    GapHandling,
    Geometries,
    Overview,
    Profile,
    Service,
    Snapping,
    TableAnnotation,
    TripDestination,
    TripSource,
)

__all__ = [
    # Geometry
    "decode_polyline",
    "encode_polyline",
    "format_coordinates",
    "parse_coordinates",
    # Responses
    "Annotation",
    "GeoJSONGeometry",
    "Intersection",
    "Lane",
    "ManeuverType",
    "MatchResponse",
    "MatchRoute",
    "NearestResponse",
    "Route",
    "RouteLeg",
    "RouteResponse",
    "RouteStep",
    "ServiceResponse",
    "StepManeuver",
    "TableResponse",
    "TileResponse",
    "Tracepoint",
    "TripResponse",
    "TripWaypoint",
    "Waypoint",
    "geometry_coordinates",
    # Types
    "UNLIMITED",
    "AnnotationType",
    "Approach",
    "Bearing",
    "Coordinate",
    "CoordinateFormat",
    "FallbackCoordinate",
    "GapHandling",
    "Geometries",
    "Overview",
    "Profile",
    "Service",
    "Snapping",
    "TableAnnotation",
    "TripDestination",
    "TripSource",
]
