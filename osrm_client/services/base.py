"""Base request and builder shared by the coordinate-based services.

Every request carries the general options documented for all services
(bearings, radiuses, hints, approaches, exclude, snapping, generate_hints,
skip_waypoints). Requests are frozen dataclasses validated at construction;
builders are immutable and return a new builder from every setter.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Any, Callable, ClassVar, Optional, Sequence
from urllib.parse import quote

from osrm_client.config import get_settings
from osrm_client.data.geometry import format_coordinates
from osrm_client.data.types import (
    AnnotationType,
    Approach,
    Bearing,
    Coordinate,
    CoordinateFormat,
    Profile,
    Service,
    Snapping,
    validate_hint,
    validate_profile,
    validate_radius,
)
from osrm_client.errors import ValidationError
from osrm_client.services.query import QueryBuilder

logger = logging.getLogger(__name__)


def to_coordinate(value: Any) -> Coordinate:
    """Accept a Coordinate or a (longitude, latitude) pair."""
    if isinstance(value, Coordinate):
        return value
    try:
        longitude, latitude = value
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Expected a (longitude, latitude) pair, got {value!r}") from e
    return Coordinate(longitude=longitude, latitude=latitude)


def to_bearing(value: Any) -> Bearing:
    if isinstance(value, Bearing):
        return value
    try:
        bearing, deviation = value
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Expected a (value, range) bearing, got {value!r}") from e
    return Bearing(value=bearing, range=deviation)


def to_enum(enum_cls: type) -> Callable[[Any], Any]:
    def convert(value: Any) -> Any:
        try:
            return enum_cls(value)
        except ValueError as e:
            raise ValidationError(f"Invalid {enum_cls.__name__}: {value!r}") from e

    return convert


def per_waypoint(
    name: str,
    values: Any,
    count: int,
    convert: Callable[[Any], Any],
) -> Optional[tuple]:
    """Normalize a per-waypoint option.

    A list or tuple must hold exactly one entry per coordinate (``None``
    meaning no constraint at that waypoint). Any other value is broadcast
    to every coordinate.
    """
    if values is None:
        return None
    if not isinstance(values, (list, tuple)):
        values = [values] * count
    if len(values) != count:
        raise ValidationError(
            f"'{name}' has {len(values)} entries for {count} coordinates",
            {"option": name},
        )
    return tuple(None if value is None else convert(value) for value in values)


def check_indices(name: str, indices: Optional[Sequence[int]], count: int) -> Optional[tuple[int, ...]]:
    """Check that every index refers to an input coordinate."""
    if indices is None:
        return None
    if isinstance(indices, int):
        indices = [indices]
    if len(indices) == 0:
        raise ValidationError(f"'{name}' must not be empty")
    checked = []
    for index in indices:
        if isinstance(index, bool) or not isinstance(index, int):
            raise ValidationError(f"'{name}' indices must be integers, got {index!r}")
        if not 0 <= index < count:
            raise ValidationError(
                f"'{name}' index {index} out of range for {count} coordinates",
                {"option": name, "index": index},
            )
        checked.append(index)
    return tuple(checked)


def to_annotations(value: Any) -> Any:
    """Route annotations are either a flag or a list of annotation types."""
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, (str, AnnotationType)):
        value = [value]
    return tuple(to_enum(AnnotationType)(v) for v in value)


def add_annotations(query: QueryBuilder, annotations: Any) -> None:
    if isinstance(annotations, tuple):
        query.joined("annotations", annotations, separator=",")
    else:
        query.scalar("annotations", annotations)


def check_waypoint_indices(
    indices: Optional[Sequence[int]], count: int
) -> Optional[tuple[int, ...]]:
    """Waypoint indices must be in range and keep the first and last coordinate."""
    indices = check_indices("waypoints", indices, count)
    if indices is None:
        return None
    if 0 not in indices or count - 1 not in indices:
        raise ValidationError("'waypoints' must include the first and last coordinate")
    if list(indices) != sorted(set(indices)):
        raise ValidationError("'waypoints' indices must be strictly increasing")
    return indices


@dataclass(frozen=True)
class BaseRequest:
    """Fields and rendering common to every coordinate-based request."""

    service: ClassVar[Service]
    min_coordinates: ClassVar[int] = 1
    max_coordinates: ClassVar[Optional[int]] = None

    coordinates: tuple[Coordinate, ...]
    profile: str = Profile.DRIVING
    bearings: Optional[tuple[Optional[Bearing], ...]] = None
    radiuses: Optional[tuple[Optional[float], ...]] = None
    hints: Optional[tuple[Optional[str], ...]] = None
    approaches: Optional[tuple[Optional[Approach], ...]] = None
    exclude: Optional[tuple[str, ...]] = None
    snapping: Optional[Snapping] = None
    generate_hints: Optional[bool] = None
    skip_waypoints: Optional[bool] = None
    coordinate_format: CoordinateFormat = CoordinateFormat.PLAIN

    def __post_init__(self):
        coordinates = tuple(to_coordinate(c) for c in self.coordinates)
        count = len(coordinates)
        if count < self.min_coordinates:
            raise ValidationError(
                f"{self.service.value} requires at least {self.min_coordinates} "
                f"coordinates, got {count}"
            )
        if self.max_coordinates is not None and count > self.max_coordinates:
            raise ValidationError(
                f"{self.service.value} accepts at most {self.max_coordinates} "
                f"coordinates, got {count}"
            )

        exclude = self.exclude
        if exclude is not None:
            exclude = (exclude,) if isinstance(exclude, str) else tuple(exclude)
            if not exclude:
                raise ValidationError("'exclude' must name at least one class")
            if not all(isinstance(c, str) and c for c in exclude):
                raise ValidationError("'exclude' classes must be non-empty strings")

        self._set("coordinates", coordinates)
        self._set("profile", validate_profile(self.profile))
        self._set("bearings", per_waypoint("bearings", self.bearings, count, to_bearing))
        self._set("radiuses", per_waypoint("radiuses", self.radiuses, count, validate_radius))
        self._set("hints", per_waypoint("hints", self.hints, count, validate_hint))
        self._set(
            "approaches",
            per_waypoint("approaches", self.approaches, count, to_enum(Approach)),
        )
        self._set("exclude", exclude)
        if self.snapping is not None:
            self._set("snapping", to_enum(Snapping)(self.snapping))
        self._set("coordinate_format", to_enum(CoordinateFormat)(self.coordinate_format))

    def _set(self, name: str, value: Any) -> None:
        object.__setattr__(self, name, value)

    def check_indices(self, name: str, indices: Optional[Sequence[int]]) -> Optional[tuple[int, ...]]:
        return check_indices(name, indices, len(self.coordinates))

    def path(self, version: str = "v1") -> str:
        """Render ``/{service}/{version}/{profile}/{coordinates}``."""
        coordinates = format_coordinates(self.coordinates, self.coordinate_format)
        profile = quote(self.profile, safe="")
        return f"/{self.service.value}/{version}/{profile}/{coordinates}"

    def add_options(self, query: QueryBuilder) -> None:
        """Add the service specific options. Overridden by each service."""

    def query(self) -> QueryBuilder:
        query = QueryBuilder(len(self.coordinates))
        self.add_options(query)
        query.per_waypoint("bearings", self.bearings)
        query.per_waypoint("radiuses", self.radiuses)
        query.scalar("generate_hints", self.generate_hints)
        query.per_waypoint("hints", self.hints)
        query.per_waypoint("approaches", self.approaches)
        query.joined("exclude", self.exclude, separator=",")
        query.scalar("snapping", self.snapping)
        query.scalar("skip_waypoints", self.skip_waypoints)
        return query

    def url(self, base_url: str, version: str = "v1") -> str:
        """Render the full request URL."""
        query = self.query().render()
        url = f"{base_url.rstrip('/')}{self.path(version)}"
        return f"{url}?{query}" if query else url


class RequestBuilder:
    """Immutable builder; each setter returns a new builder.

    Args:
        coordinates: Input coordinates, as Coordinate values or (lon, lat) pairs.
        profile: Routing profile. Defaults to the configured default profile.
    """

    request_class: ClassVar[type[BaseRequest]] = BaseRequest

    def __init__(
        self,
        coordinates: Sequence[Any],
        profile: Optional[str] = None,
        options: Optional[dict[str, Any]] = None,
    ):
        self._coordinates = tuple(coordinates)
        self._profile = profile
        self._options = dict(options or {})

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(coordinates={len(self._coordinates)}, "
            f"profile={self._profile!r}, options={self._options!r})"
        )

    def set(self, **options: Any) -> RequestBuilder:
        """Return a builder with the given request options applied."""
        known = {f.name for f in fields(self.request_class)} - {"coordinates", "profile"}
        unknown = sorted(set(options) - known)
        if unknown:
            raise ValidationError(
                f"Unknown options for {self.request_class.service.value}: {', '.join(unknown)}"
            )
        return type(self)(self._coordinates, self._profile, {**self._options, **options})

    def profile(self, profile: str) -> RequestBuilder:
        return type(self)(self._coordinates, profile, self._options)

    def bearings(self, bearings: Any) -> RequestBuilder:
        return self.set(bearings=bearings)

    def radiuses(self, radiuses: Any) -> RequestBuilder:
        return self.set(radiuses=radiuses)

    def hints(self, hints: Any) -> RequestBuilder:
        return self.set(hints=hints)

    def approaches(self, approaches: Any) -> RequestBuilder:
        return self.set(approaches=approaches)

    def exclude(self, *classes: str) -> RequestBuilder:
        return self.set(exclude=classes)

    def snapping(self, snapping: Snapping) -> RequestBuilder:
        return self.set(snapping=snapping)

    def generate_hints(self, enabled: bool = True) -> RequestBuilder:
        return self.set(generate_hints=enabled)

    def skip_waypoints(self, enabled: bool = True) -> RequestBuilder:
        return self.set(skip_waypoints=enabled)

    def coordinate_format(self, coordinate_format: CoordinateFormat) -> RequestBuilder:
        return self.set(coordinate_format=coordinate_format)

    def build(self) -> BaseRequest:
        """Finalize into a validated, immutable request."""
        profile = self._profile
        if profile is None:
            profile = get_settings().osrm_default_profile
        request = self.request_class(
            coordinates=self._coordinates, profile=profile, **self._options
        )
        logger.debug(f"Built {request.service.value} request with {len(request.coordinates)} coordinates")
        return request
