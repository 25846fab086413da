"""Decoding of engine responses into typed results or typed errors.

Every JSON answer shares an envelope (``code``, ``message``,
``data_version``); the rest of the object is the service specific payload,
decoded with the model registered for the service. Tiles have no envelope.
"""

from __future__ import annotations

import json
import logging
from typing import Optional, Union

import pydantic

from osrm_client.data.responses import (
    MatchResponse,
    NearestResponse,
    OSRMModel,
    RouteResponse,
    ServiceResponse,
    TableResponse,
    TileResponse,
    TripResponse,
)
from osrm_client.data.types import Service
from osrm_client.errors import DecodingError, EngineError, TransportError

logger = logging.getLogger(__name__)

OK = "Ok"

PAYLOAD_MODELS: dict[Service, type[ServiceResponse]] = {
    Service.ROUTE: RouteResponse,
    Service.TABLE: TableResponse,
    Service.MATCH: MatchResponse,
    Service.TRIP: TripResponse,
    Service.NEAREST: NearestResponse,
}


class Envelope(OSRMModel):
    """Fields common to every JSON response."""

    code: str
    message: Optional[str] = None
    data_version: Optional[str] = None


def parse_json(body: Union[bytes, str]) -> dict:
    """Parse a response body into a JSON object."""
    try:
        data = json.loads(body)
    except (ValueError, UnicodeDecodeError) as e:
        raise DecodingError(f"Malformed JSON payload: {e}") from e
    if not isinstance(data, dict):
        raise DecodingError(f"Expected a JSON object, got {type(data).__name__}")
    return data


def parse_envelope(data: dict) -> Envelope:
    try:
        return Envelope.model_validate(data)
    except pydantic.ValidationError as e:
        raise DecodingError("Response is missing a valid 'code' field") from e


def raise_for_code(envelope: Envelope) -> None:
    """Raise the engine error matching a non-Ok envelope."""
    if envelope.code == OK:
        return
    error = EngineError.from_code(envelope.code, envelope.message or "")
    logger.warning(f"OSRM returned {error.code}: {error.engine_message}")
    raise error


def decode_payload(service: Service, data: dict) -> ServiceResponse:
    """Decode an Ok payload with the model registered for ``service``."""
    model = PAYLOAD_MODELS.get(service)
    if model is None:
        raise DecodingError(f"The {service.value} service has no JSON payload")
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as e:
        raise DecodingError(
            f"Invalid {service.value} payload: {e.error_count()} validation error(s)",
            {"service": service.value, "errors": str(e)},
        ) from e


def decode_response(service: Union[Service, str], body: Union[bytes, str]) -> ServiceResponse:
    """Decode a JSON response body for ``service``.

    Args:
        service: The service the request was sent to.
        body: Raw response body.

    Returns:
        The typed payload of an Ok response.

    Raises:
        DecodingError: If the body is not JSON or does not match the payload shape.
        EngineError: If the engine answered with a non-Ok code.
    """
    service = Service(service)
    data = parse_json(body)
    raise_for_code(parse_envelope(data))
    return decode_payload(service, data)


def decode_tile(
    status_code: int, body: bytes, content_type: Optional[str] = None
) -> TileResponse:
    """Pass a tile through on 2xx; any other status is a transport failure."""
    if 200 <= status_code < 300:
        return TileResponse(data=bytes(body), content_type=content_type)
    raise TransportError(
        f"Tile request failed with HTTP {status_code}",
        status_code=status_code,
    )
