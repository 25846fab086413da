"""Table service: durations and/or distances between all source/destination pairs.

Distances are those of the fastest routes, not the shortest distances
between the coordinates. Durations are in seconds, distances in meters.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import ClassVar, Optional, Sequence

from osrm_client.data.types import FallbackCoordinate, Service, TableAnnotation
from osrm_client.errors import ValidationError
from osrm_client.services.base import BaseRequest, RequestBuilder, to_enum
from osrm_client.services.query import QueryBuilder


def _check_positive(name: str, value: Optional[float]) -> Optional[float]:
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"'{name}' must be a number, got {value!r}") from e
    if not math.isfinite(number) or number <= 0:
        raise ValidationError(f"'{name}' must be a finite number > 0, got {value}")
    return number


@dataclass(frozen=True)
class TableRequest(BaseRequest):
    """A finalized table request.

    By default every coordinate is used both as source and destination.
    """

    service: ClassVar[Service] = Service.TABLE
    min_coordinates: ClassVar[int] = 1

    sources: Optional[tuple[int, ...]] = None
    destinations: Optional[tuple[int, ...]] = None
    annotations: Optional[TableAnnotation] = None
    fallback_speed: Optional[float] = None
    fallback_coordinate: Optional[FallbackCoordinate] = None
    scale_factor: Optional[float] = None

    def __post_init__(self):
        super().__post_init__()
        self._set("sources", self.check_indices("sources", self.sources))
        self._set("destinations", self.check_indices("destinations", self.destinations))
        if self.annotations is not None:
            self._set("annotations", to_enum(TableAnnotation)(self.annotations))
        self._set("fallback_speed", _check_positive("fallback_speed", self.fallback_speed))
        if self.fallback_coordinate is not None:
            self._set(
                "fallback_coordinate",
                to_enum(FallbackCoordinate)(self.fallback_coordinate),
            )
        self._set("scale_factor", _check_positive("scale_factor", self.scale_factor))

    @property
    def expected_shape(self) -> tuple[int, int]:
        """(rows, columns) of the matrices the engine should return."""
        count = len(self.coordinates)
        rows = len(self.sources) if self.sources is not None else count
        columns = len(self.destinations) if self.destinations is not None else count
        return rows, columns

    def add_options(self, query: QueryBuilder) -> None:
        query.joined("sources", self.sources)
        query.joined("destinations", self.destinations)
        query.scalar("annotations", self.annotations)
        query.scalar("fallback_speed", self.fallback_speed)
        query.scalar("fallback_coordinate", self.fallback_coordinate)
        query.scalar("scale_factor", self.scale_factor)


class TableRequestBuilder(RequestBuilder):
    request_class = TableRequest

    def sources(self, indices: Sequence[int]) -> TableRequestBuilder:
        return self.set(sources=tuple(indices))

    def destinations(self, indices: Sequence[int]) -> TableRequestBuilder:
        return self.set(destinations=tuple(indices))

    def annotations(self, annotations: TableAnnotation) -> TableRequestBuilder:
        return self.set(annotations=annotations)

    def fallback_speed(self, speed: float) -> TableRequestBuilder:
        return self.set(fallback_speed=speed)

    def fallback_coordinate(self, coordinate: FallbackCoordinate) -> TableRequestBuilder:
        return self.set(fallback_coordinate=coordinate)

    def scale_factor(self, factor: float) -> TableRequestBuilder:
        return self.set(scale_factor=factor)
