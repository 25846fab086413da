"""Trip service: solves the Traveling Salesman Problem over the coordinates.

The engine only supports a subset of roundtrip/source/destination
combinations:

    roundtrip | source | destination | supported
    ----------+--------+-------------+----------
    true      | any    | any         | yes
    true      | first  | any/last    | yes
    true      | any    | last        | yes
    false     | first  | last        | yes
    false     | any of the other combinations | no
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional, Union

from osrm_client.data.types import (
    AnnotationType,
    Geometries,
    Overview,
    Service,
    TripDestination,
    TripSource,
)
from osrm_client.errors import ValidationError
from osrm_client.services.base import (
    BaseRequest,
    RequestBuilder,
    add_annotations,
    to_annotations,
    to_enum,
)
from osrm_client.services.query import QueryBuilder


@dataclass(frozen=True)
class TripRequest(BaseRequest):
    service: ClassVar[Service] = Service.TRIP
    min_coordinates: ClassVar[int] = 2

    roundtrip: Optional[bool] = None
    source: Optional[TripSource] = None
    destination: Optional[TripDestination] = None
    steps: Optional[bool] = None
    geometries: Optional[Geometries] = None
    annotations: Optional[Union[bool, tuple[AnnotationType, ...]]] = None
    overview: Optional[Overview] = None

    def __post_init__(self):
        super().__post_init__()
        if self.source is not None:
            self._set("source", to_enum(TripSource)(self.source))
        if self.destination is not None:
            self._set("destination", to_enum(TripDestination)(self.destination))
        if self.geometries is not None:
            self._set("geometries", to_enum(Geometries)(self.geometries))
        self._set("annotations", to_annotations(self.annotations))
        if self.overview is not None:
            self._set("overview", to_enum(Overview)(self.overview))

        # Engine defaults: source=any, destination=any
        if self.roundtrip is False and (
            self.source is not TripSource.FIRST
            or self.destination is not TripDestination.LAST
        ):
            raise ValidationError(
                "roundtrip=false is only supported with source=first and destination=last",
                {"roundtrip": False, "source": self.source, "destination": self.destination},
            )

    def add_options(self, query: QueryBuilder) -> None:
        query.scalar("roundtrip", self.roundtrip)
        query.scalar("source", self.source)
        query.scalar("destination", self.destination)
        query.scalar("steps", self.steps)
        query.scalar("geometries", self.geometries)
        add_annotations(query, self.annotations)
        query.scalar("overview", self.overview)


class TripRequestBuilder(RequestBuilder):
    request_class = TripRequest

    def roundtrip(self, enabled: bool = True) -> TripRequestBuilder:
        return self.set(roundtrip=enabled)

    def source(self, source: TripSource) -> TripRequestBuilder:
        return self.set(source=source)

    def destination(self, destination: TripDestination) -> TripRequestBuilder:
        return self.set(destination=destination)

    def steps(self, enabled: bool = True) -> TripRequestBuilder:
        return self.set(steps=enabled)

    def geometries(self, geometries: Geometries) -> TripRequestBuilder:
        return self.set(geometries=geometries)

    def annotations(self, annotations=True) -> TripRequestBuilder:
        return self.set(annotations=annotations)

    def overview(self, overview: Overview) -> TripRequestBuilder:
        return self.set(overview=overview)
