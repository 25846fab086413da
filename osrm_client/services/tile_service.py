"""Tile service: Mapbox Vector Tiles of the routing graph.

Tiles contain a ``speeds`` layer (road segments with speed, duration,
weight, datasource) and a ``turns`` layer (turn angles, costs and weights).
The x, y and zoom values follow the slippy map tile naming scheme. The
engine only serves tiles from zoom level 12 upwards and answers 400 for
lower zooms, so that limit is left to the engine.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import ClassVar, Optional
from urllib.parse import quote

from osrm_client.config import get_settings
from osrm_client.data.types import Coordinate, Profile, Service, validate_profile
from osrm_client.errors import ValidationError

logger = logging.getLogger(__name__)

DEBUG_MAP_URL = "http://map.project-osrm.org/debug/"


@dataclass(frozen=True)
class TileRequest:
    """A finalized tile request."""

    service: ClassVar[Service] = Service.TILE

    x: int
    y: int
    zoom: int
    profile: str = Profile.DRIVING

    def __post_init__(self):
        for name in ("x", "y", "zoom"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValidationError(f"Tile '{name}' must be an integer, got {value!r}")
        if self.zoom < 0:
            raise ValidationError(f"Tile zoom must be >= 0, got {self.zoom}")
        size = 2**self.zoom
        if not (0 <= self.x < size and 0 <= self.y < size):
            raise ValidationError(
                f"Tile ({self.x}, {self.y}) outside the {size}x{size} grid of zoom {self.zoom}"
            )
        validate_profile(self.profile)

    def path(self, version: str = "v1") -> str:
        """Render ``/tile/{version}/{profile}/tile({x},{y},{zoom}).mvt``."""
        profile = quote(self.profile, safe="")
        return f"/{self.service.value}/{version}/{profile}/tile({self.x},{self.y},{self.zoom}).mvt"

    def url(self, base_url: str, version: str = "v1") -> str:
        return f"{base_url.rstrip('/')}{self.path(version)}"

    def center(self) -> Coordinate:
        """Center of the tile in a Web Mercator projection."""
        size = 2**self.zoom
        longitude = (self.x + 0.5) / size * 360.0 - 180.0
        latitude = math.degrees(math.atan(math.sinh(math.pi * (1 - 2 * (self.y + 0.5) / size))))
        return Coordinate(longitude=longitude, latitude=latitude)

    def debug_map_url(self) -> str:
        """URL of the engine's public debug map centered on this tile."""
        center = self.center()
        return f"{DEBUG_MAP_URL}#{self.zoom}/{center.latitude:.6f}/{center.longitude:.6f}"


class TileRequestBuilder:
    """Immutable builder for tile requests."""

    def __init__(self, x: int, y: int, zoom: int, profile: Optional[str] = None):
        self._x = x
        self._y = y
        self._zoom = zoom
        self._profile = profile

    def profile(self, profile: str) -> TileRequestBuilder:
        return TileRequestBuilder(self._x, self._y, self._zoom, profile)

    def build(self) -> TileRequest:
        profile = self._profile
        if profile is None:
            profile = get_settings().osrm_default_profile
        request = TileRequest(x=self._x, y=self._y, zoom=self._zoom, profile=profile)
        logger.debug(f"Built tile request {request.path()}")
        return request
