"""Match service: snaps a noisy GPS trace to the road network.

The engine may split the trace into several sub-traces on large timestamp
gaps (> 60s) or improbable transitions, and drops outliers it cannot match.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional, Sequence, Union

from osrm_client.data.types import (
    AnnotationType,
    GapHandling,
    Geometries,
    Overview,
    Service,
)
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
class MatchRequest(BaseRequest):
    """A finalized match request.

    ``timestamps`` are seconds since the UNIX epoch, one per coordinate,
    and must not decrease along the trace.
    """

    service: ClassVar[Service] = Service.MATCH
    min_coordinates: ClassVar[int] = 2

    steps: Optional[bool] = None
    geometries: Optional[Geometries] = None
    annotations: Optional[Union[bool, tuple[AnnotationType, ...]]] = None
    overview: Optional[Overview] = None
    timestamps: Optional[tuple[int, ...]] = None
    gaps: Optional[GapHandling] = None
    tidy: Optional[bool] = None
    waypoints: Optional[tuple[int, ...]] = None

    def __post_init__(self):
        super().__post_init__()
        if self.geometries is not None:
            self._set("geometries", to_enum(Geometries)(self.geometries))
        self._set("annotations", to_annotations(self.annotations))
        if self.overview is not None:
            self._set("overview", to_enum(Overview)(self.overview))
        self._set("timestamps", self._check_timestamps())
        if self.gaps is not None:
            self._set("gaps", to_enum(GapHandling)(self.gaps))
        self._set(
            "waypoints", check_waypoint_indices(self.waypoints, len(self.coordinates))
        )

    def _check_timestamps(self) -> Optional[tuple[int, ...]]:
        if self.timestamps is None:
            return None
        timestamps = tuple(self.timestamps)
        if len(timestamps) != len(self.coordinates):
            raise ValidationError(
                f"'timestamps' has {len(timestamps)} entries for "
                f"{len(self.coordinates)} coordinates",
                {"option": "timestamps"},
            )
        for timestamp in timestamps:
            if isinstance(timestamp, bool) or not isinstance(timestamp, int) or timestamp < 0:
                raise ValidationError(
                    f"'timestamps' must be non-negative integers, got {timestamp!r}"
                )
        if any(later < earlier for earlier, later in zip(timestamps, timestamps[1:])):
            raise ValidationError("'timestamps' must be monotonically increasing")
        return timestamps

    def add_options(self, query: QueryBuilder) -> None:
        query.scalar("steps", self.steps)
        add_annotations(query, self.annotations)
        query.scalar("geometries", self.geometries)
        query.scalar("overview", self.overview)
        query.per_waypoint("timestamps", self.timestamps)
        query.scalar("gaps", self.gaps)
        query.scalar("tidy", self.tidy)
        query.joined("waypoints", self.waypoints)


class MatchRequestBuilder(RequestBuilder):
    request_class = MatchRequest

    def steps(self, enabled: bool = True) -> MatchRequestBuilder:
        return self.set(steps=enabled)

    def geometries(self, geometries: Geometries) -> MatchRequestBuilder:
        return self.set(geometries=geometries)

    def annotations(self, annotations=True) -> MatchRequestBuilder:
        return self.set(annotations=annotations)

    def overview(self, overview: Overview) -> MatchRequestBuilder:
        return self.set(overview=overview)

    def timestamps(self, timestamps: Sequence[int]) -> MatchRequestBuilder:
        return self.set(timestamps=tuple(timestamps))

    def gaps(self, gaps: GapHandling) -> MatchRequestBuilder:
        return self.set(gaps=gaps)

    def tidy(self, enabled: bool = True) -> MatchRequestBuilder:
        return self.set(tidy=enabled)

    def waypoints(self, *indices: int) -> MatchRequestBuilder:
        return self.set(waypoints=indices)
