"""Route service: fastest route between coordinates in the supplied order."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional, Union

from osrm_client.data.types import AnnotationType, Geometries, Overview, Service
from osrm_client.errors import ValidationError
from osrm_client.services.base import (
    BaseRequest,
    RequestBuilder,
    add_annotations,
    check_waypoint_indices,
    to_annotations,
    to_enum,
)
from osrm_client.services.query import QueryBuilder


@dataclass(frozen=True)
class RouteRequest(BaseRequest):
    """A finalized route request.

    ``alternatives`` is either a flag or the maximum number of alternative
    routes to search for; a result is not guaranteed either way.
    ``annotations`` is either a flag or a tuple of ``AnnotationType``.
    """

    service: ClassVar[Service] = Service.ROUTE
    min_coordinates: ClassVar[int] = 2

    alternatives: Optional[Union[bool, int]] = None
    steps: Optional[bool] = None
    annotations: Optional[Union[bool, tuple[AnnotationType, ...]]] = None
    geometries: Optional[Geometries] = None
    overview: Optional[Overview] = None
    continue_straight: Optional[bool] = None
    waypoints: Optional[tuple[int, ...]] = None

    def __post_init__(self):
        super().__post_init__()
        alternatives = self.alternatives
        if alternatives is not None and not isinstance(alternatives, bool):
            if not isinstance(alternatives, int) or alternatives < 0:
                raise ValidationError(
                    f"'alternatives' must be a flag or a count >= 0, got {alternatives!r}"
                )
        self._set("annotations", to_annotations(self.annotations))
        if self.geometries is not None:
            self._set("geometries", to_enum(Geometries)(self.geometries))
        if self.overview is not None:
            self._set("overview", to_enum(Overview)(self.overview))
        self._set(
            "waypoints", check_waypoint_indices(self.waypoints, len(self.coordinates))
        )

    def add_options(self, query: QueryBuilder) -> None:
        query.scalar("alternatives", self.alternatives)
        query.scalar("steps", self.steps)
        add_annotations(query, self.annotations)
        query.scalar("geometries", self.geometries)
        query.scalar("overview", self.overview)
        query.scalar("continue_straight", self.continue_straight)
        query.joined("waypoints", self.waypoints)


class RouteRequestBuilder(RequestBuilder):
    request_class = RouteRequest

    def alternatives(self, alternatives: Union[bool, int] = True) -> RouteRequestBuilder:
        return self.set(alternatives=alternatives)

    def steps(self, enabled: bool = True) -> RouteRequestBuilder:
        return self.set(steps=enabled)

    def annotations(self, annotations=True) -> RouteRequestBuilder:
        return self.set(annotations=annotations)

    def geometries(self, geometries: Geometries) -> RouteRequestBuilder:
        return self.set(geometries=geometries)

    def overview(self, overview: Overview) -> RouteRequestBuilder:
        return self.set(overview=overview)

    def continue_straight(self, enabled: bool = True) -> RouteRequestBuilder:
        return self.set(continue_straight=enabled)

    def waypoints(self, *indices: int) -> RouteRequestBuilder:
        return self.set(waypoints=indices)
