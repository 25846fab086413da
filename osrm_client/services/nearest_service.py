"""Nearest service: snaps one coordinate to the street network."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional

from osrm_client.data.types import Service
from osrm_client.errors import ValidationError
from osrm_client.services.base import BaseRequest, RequestBuilder
from osrm_client.services.query import QueryBuilder


@dataclass(frozen=True)
class NearestRequest(BaseRequest):
    """A finalized nearest request; ``number`` is how many matches to return."""

    service: ClassVar[Service] = Service.NEAREST
    min_coordinates: ClassVar[int] = 1
    max_coordinates: ClassVar[Optional[int]] = 1

    number: Optional[int] = None

    def __post_init__(self):
        super().__post_init__()
        number = self.number
        if number is not None and (
            isinstance(number, bool) or not isinstance(number, int) or number < 1
        ):
            raise ValidationError(f"'number' must be an integer >= 1, got {number!r}")

    def add_options(self, query: QueryBuilder) -> None:
        query.scalar("number", self.number)


class NearestRequestBuilder(RequestBuilder):
    request_class = NearestRequest

    def number(self, number: int) -> NearestRequestBuilder:
        return self.set(number=number)
