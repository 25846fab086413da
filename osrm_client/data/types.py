"""Value types shared by every OSRM service request."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from osrm_client.errors import ValidationError

# Radius sentinel meaning "no search radius limit"
UNLIMITED = math.inf


@dataclass(frozen=True)
class Coordinate:
    """A point on earth, in (longitude, latitude) order as OSRM expects."""

    longitude: float
    latitude: float

    def __post_init__(self):
        try:
            longitude = float(self.longitude)
            latitude = float(self.latitude)
        except (TypeError, ValueError) as e:
            raise ValidationError(
                f"Coordinate values must be numbers, got ({self.longitude!r}, {self.latitude!r})"
            ) from e

        if not (math.isfinite(longitude) and math.isfinite(latitude)):
            raise ValidationError(
                f"Coordinate values must be finite, got ({longitude}, {latitude})"
            )
        if not -180.0 <= longitude <= 180.0:
            raise ValidationError(f"Longitude out of range [-180, 180]: {longitude}")
        if not -90.0 <= latitude <= 90.0:
            raise ValidationError(f"Latitude out of range [-90, 90]: {latitude}")

        object.__setattr__(self, "longitude", longitude)
        object.__setattr__(self, "latitude", latitude)

    @classmethod
    def from_latlon(cls, latitude: float, longitude: float) -> Coordinate:
        """Build a coordinate from the (lat, lon) order most map APIs use."""
        return cls(longitude=longitude, latitude=latitude)

    @classmethod
    def parse(cls, text: str) -> Coordinate:
        """Parse the ``lon,lat`` wire form."""
        parts = text.strip().split(",")
        if len(parts) != 2:
            raise ValidationError(f"Expected 'lon,lat', got {text!r}")
        try:
            longitude, latitude = (float(part) for part in parts)
        except ValueError as e:
            raise ValidationError(f"Expected 'lon,lat', got {text!r}") from e
        return cls(longitude=longitude, latitude=latitude)

    def to_wire(self) -> str:
        """Render as fixed-decimal ``lon,lat``."""
        return f"{self.longitude:.6f},{self.latitude:.6f}"

    def __str__(self) -> str:
        return self.to_wire()


@dataclass(frozen=True)
class Bearing:
    """Limits snapping to segments heading ``value`` degrees, +/- ``range``."""

    value: int
    range: int

    def __post_init__(self):
        for name in ("value", "range"):
            degrees = getattr(self, name)
            if isinstance(degrees, bool) or not isinstance(degrees, int):
                raise ValidationError(f"Bearing {name} must be whole degrees, got {degrees!r}")
        if not 0 <= self.value <= 360:
            raise ValidationError(f"Bearing value out of range [0, 360]: {self.value}")
        if not 0 <= self.range <= 180:
            raise ValidationError(f"Bearing range out of range [0, 180]: {self.range}")

    def to_wire(self) -> str:
        return f"{self.value},{self.range}"


def validate_radius(radius: float) -> float:
    """Check a search radius in meters; ``UNLIMITED`` is accepted."""
    try:
        value = float(radius)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Radius must be a number, got {radius!r}") from e
    if math.isnan(value) or value < 0:
        raise ValidationError(f"Radius must be >= 0, got {radius}")
    return value


def validate_hint(hint: str) -> str:
    """Check a base64 hint returned by a previous request."""
    if not isinstance(hint, str) or not hint:
        raise ValidationError(f"Hint must be a non-empty string, got {hint!r}")
    return hint


def validate_profile(profile: str) -> str:
    """Profiles are server-defined, so only emptiness is checked."""
    if not isinstance(profile, str) or not profile.strip():
        raise ValidationError("Profile must be a non-empty string")
    return profile


class Profile:
    """Constants for commonly deployed routing profiles."""

    DRIVING = "driving"
    CAR = "car"
    BIKE = "bike"
    CYCLING = "cycling"
    FOOT = "foot"
    WALKING = "walking"


class Service(str, Enum):
    """The services exposed by the engine."""

    ROUTE = "route"
    TABLE = "table"
    MATCH = "match"
    TRIP = "trip"
    NEAREST = "nearest"
    TILE = "tile"


class Approach(str, Enum):
    """Side of the road from which a waypoint is approached."""

    UNRESTRICTED = "unrestricted"
    CURB = "curb"
    OPPOSITE = "opposite"


class Snapping(str, Enum):
    """Default snapping avoids is_startpoint edges, ``any`` snaps to every edge."""

    DEFAULT = "default"
    ANY = "any"


class Geometries(str, Enum):
    """Returned route geometry format."""

    POLYLINE = "polyline"
    POLYLINE6 = "polyline6"
    GEOJSON = "geojson"


class Overview(str, Enum):
    """Level of detail of the overview geometry."""

    SIMPLIFIED = "simplified"
    FULL = "full"
    NONE = "false"


class AnnotationType(str, Enum):
    """Per-segment metadata attached to route legs."""

    NODES = "nodes"
    DISTANCE = "distance"
    DURATION = "duration"
    DATASOURCES = "datasources"
    WEIGHT = "weight"
    SPEED = "speed"


class TableAnnotation(str, Enum):
    """Which matrices the table service returns."""

    DURATION = "duration"
    DISTANCE = "distance"
    BOTH = "duration,distance"


class FallbackCoordinate(str, Enum):
    """Coordinate used for crow-flies fallback distances."""

    INPUT = "input"
    SNAPPED = "snapped"


class GapHandling(str, Enum):
    """How the match service treats large timestamp gaps."""

    SPLIT = "split"
    IGNORE = "ignore"


class TripSource(str, Enum):
    """Which coordinate a trip may start from."""

    ANY = "any"
    FIRST = "first"


class TripDestination(str, Enum):
    """Which coordinate a trip may end at."""

    ANY = "any"
    LAST = "last"


class CoordinateFormat(str, Enum):
    """How the coordinate list is written into the URL path."""

    PLAIN = "plain"
    POLYLINE = "polyline"
    POLYLINE6 = "polyline6"
