"""Typed models for the payloads returned by the OSRM services.

The engine only sends the keys that match the options of the request, so
most fields are optional. Fields the engine always sends are required and a
missing one fails validation, which the decoder reports as a
``DecodingError``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from osrm_client.data.geometry import decode_polyline
from osrm_client.data.types import Coordinate
from osrm_client.errors import DecodingError


class OSRMModel(BaseModel):
    """Base model: unknown keys are ignored, aliases and names both accepted."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


class GeoJSONGeometry(OSRMModel):
    """A GeoJSON geometry (returned with ``geometries=geojson``)."""

    type: str
    coordinates: list[Any]


Geometry = Union[str, GeoJSONGeometry]


def geometry_coordinates(
    geometry: Optional[Geometry], precision: int = 5
) -> list[tuple[float, float]]:
    """Flatten a route or step geometry into (longitude, latitude) tuples.

    Args:
        geometry: Encoded polyline string or GeoJSON geometry.
        precision: Polyline precision, 6 when ``geometries=polyline6`` was requested.

    Returns:
        List of (longitude, latitude) tuples, empty when there is no geometry.
    """
    if geometry is None:
        return []
    if isinstance(geometry, str):
        return decode_polyline(geometry, precision)
    if geometry.type == "Point":
        return [(geometry.coordinates[0], geometry.coordinates[1])]
    if geometry.type == "LineString":
        return [(point[0], point[1]) for point in geometry.coordinates]
    raise DecodingError(f"Unsupported geometry type: {geometry.type}")


class Waypoint(OSRMModel):
    """An input coordinate snapped to the street network."""

    name: str
    location: tuple[float, float]
    distance: Optional[float] = None
    hint: Optional[str] = None
    nodes: Optional[list[int]] = None

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(longitude=self.location[0], latitude=self.location[1])


class Lane(OSRMModel):
    indications: list[str]
    valid: bool


class Intersection(OSRMModel):
    """A cross-way passed along a route step."""

    location: tuple[float, float]
    bearings: list[int]
    entry: list[bool]
    in_index: Optional[int] = Field(default=None, alias="in")
    out_index: Optional[int] = Field(default=None, alias="out")
    lanes: Optional[list[Lane]] = None
    classes: Optional[list[str]] = None


class ManeuverType:
    """Constants for documented maneuver types.

    New identifiers may be introduced without an API version change, so the
    maneuver ``type`` is kept as a plain string.
    """

    TURN = "turn"
    NEW_NAME = "new name"
    DEPART = "depart"
    ARRIVE = "arrive"
    MERGE = "merge"
    ON_RAMP = "on ramp"
    OFF_RAMP = "off ramp"
    FORK = "fork"
    END_OF_ROAD = "end of road"
    CONTINUE = "continue"
    ROUNDABOUT = "roundabout"
    ROTARY = "rotary"
    ROUNDABOUT_TURN = "roundabout turn"
    NOTIFICATION = "notification"
    EXIT_ROUNDABOUT = "exit roundabout"
    EXIT_ROTARY = "exit rotary"


class StepManeuver(OSRMModel):
    location: tuple[float, float]
    bearing_before: int
    bearing_after: int
    type: str
    modifier: Optional[str] = None
    exit: Optional[int] = None


class RouteStep(OSRMModel):
    """A maneuver followed by travel along a single way."""

    distance: float
    duration: float
    weight: float
    name: str
    mode: str
    maneuver: StepManeuver
    geometry: Optional[Geometry] = None
    ref: Optional[str] = None
    pronunciation: Optional[str] = None
    destinations: Optional[str] = None
    exits: Optional[str] = None
    intersections: list[Intersection] = Field(default_factory=list)
    rotary_name: Optional[str] = None
    rotary_pronunciation: Optional[str] = None
    driving_side: Optional[str] = None


class AnnotationMetadata(OSRMModel):
    datasource_names: Optional[list[str]] = None


class Annotation(OSRMModel):
    """Per-segment annotation of a route leg; keys depend on the request."""

    distance: Optional[list[float]] = None
    duration: Optional[list[float]] = None
    datasources: Optional[list[int]] = None
    nodes: Optional[list[int]] = None
    weight: Optional[list[float]] = None
    speed: Optional[list[float]] = None
    metadata: Optional[AnnotationMetadata] = None


class RouteLeg(OSRMModel):
    """The part of a route between two waypoints."""

    distance: float
    duration: float
    weight: Optional[float] = None
    summary: str = ""
    steps: list[RouteStep] = Field(default_factory=list)
    annotation: Optional[Annotation] = None


class Route(OSRMModel):
    """A route through (potentially multiple) waypoints."""

    distance: float
    duration: float
    weight: Optional[float] = None
    weight_name: Optional[str] = None
    legs: list[RouteLeg]
    geometry: Optional[Geometry] = None

    def coordinates(self, precision: int = 5) -> list[tuple[float, float]]:
        """Decode the overview geometry into (longitude, latitude) tuples."""
        return geometry_coordinates(self.geometry, precision)


class MatchRoute(Route):
    """A route assembling (part of) a matched trace."""

    confidence: float


class Tracepoint(Waypoint):
    """A trace point snapped by the match service."""

    matchings_index: int
    waypoint_index: int
    alternatives_count: int


class TripWaypoint(Waypoint):
    """An input waypoint placed in a computed trip."""

    trips_index: int
    waypoint_index: int


class ServiceResponse(OSRMModel):
    """Fields shared by every decoded JSON payload."""

    data_version: Optional[str] = None


class RouteResponse(ServiceResponse):
    routes: list[Route]
    waypoints: Optional[list[Waypoint]] = None


class TableResponse(ServiceResponse):
    """Duration and/or distance matrices, row-major by source."""

    durations: Optional[list[list[Optional[float]]]] = None
    distances: Optional[list[list[Optional[float]]]] = None
    sources: Optional[list[Waypoint]] = None
    destinations: Optional[list[Waypoint]] = None
    fallback_speed_cells: Optional[list[tuple[int, int]]] = None

    @model_validator(mode="after")
    def _check_matrices(self) -> "TableResponse":
        if self.durations is None and self.distances is None:
            raise ValueError("table response carries neither durations nor distances")
        shapes = {
            _matrix_shape(matrix)
            for matrix in (self.durations, self.distances)
            if matrix is not None
        }
        if len(shapes) > 1:
            raise ValueError(f"durations and distances disagree on shape: {shapes}")
        return self

    @property
    def shape(self) -> tuple[int, int]:
        """(sources, destinations) dimensions of the returned matrices."""
        matrix = self.durations if self.durations is not None else self.distances
        return _matrix_shape(matrix)


def _matrix_shape(matrix: list[list[Optional[float]]]) -> tuple[int, int]:
    widths = {len(row) for row in matrix}
    if len(widths) > 1:
        raise ValueError("matrix rows have different lengths")
    return len(matrix), widths.pop() if widths else 0


class MatchResponse(ServiceResponse):
    matchings: list[MatchRoute]
    # None entries are trace points dropped as outliers
    tracepoints: Optional[list[Optional[Tracepoint]]] = None


class TripResponse(ServiceResponse):
    trips: list[Route]
    waypoints: Optional[list[TripWaypoint]] = None


class NearestResponse(ServiceResponse):
    # Absent when skip_waypoints=true was requested
    waypoints: Optional[list[Waypoint]] = None


@dataclass(frozen=True)
class TileResponse:
    """A binary vector tile, passed through unmodified."""

    data: bytes
    content_type: Optional[str] = None

    def __len__(self) -> int:
        return len(self.data)
