"""Polyline codec and coordinate path rendering."""

from __future__ import annotations

import math
from typing import Iterable, Sequence
from urllib.parse import quote, unquote

from osrm_client.data.types import Coordinate, CoordinateFormat
from osrm_client.errors import DecodingError, ValidationError

POLYLINE_PRECISION = {
    CoordinateFormat.POLYLINE: 5,
    CoordinateFormat.POLYLINE6: 6,
}


def _encode_value(value: int) -> str:
    value = ~(value << 1) if value < 0 else value << 1
    chunks = []
    while value >= 0x20:
        chunks.append(chr((0x20 | (value & 0x1F)) + 63))
        value >>= 5
    chunks.append(chr(value + 63))
    return "".join(chunks)


def _decode_value(encoded: str, index: int) -> tuple[int, int]:
    shift = 0
    result = 0
    length = len(encoded)
    while True:
        if index >= length:
            raise DecodingError(f"Truncated polyline at offset {index}")
        byte = ord(encoded[index]) - 63
        index += 1
        result |= (byte & 0x1F) << shift
        shift += 5
        if byte < 0x20:
            break
    value = (~(result >> 1)) if (result & 1) else (result >> 1)
    return value, index


def encode_polyline(coordinates: Iterable[Coordinate], precision: int = 5) -> str:
    """Encode coordinates as a Google-style polyline.

    Args:
        coordinates: Points to encode.
        precision: Number of decimals kept (5 for polyline, 6 for polyline6).

    Returns:
        Encoded polyline string (latitude first, as the format requires).
    """
    factor = 10**precision
    previous_lat = 0
    previous_lon = 0
    chunks = []

    for coordinate in coordinates:
        lat = int(math.floor(coordinate.latitude * factor + 0.5))
        lon = int(math.floor(coordinate.longitude * factor + 0.5))
        chunks.append(_encode_value(lat - previous_lat))
        chunks.append(_encode_value(lon - previous_lon))
        previous_lat, previous_lon = lat, lon

    return "".join(chunks)


def decode_polyline(encoded: str, precision: int = 5) -> list[tuple[float, float]]:
    """Decode a Google-style encoded polyline.

    Args:
        encoded: Encoded polyline string.
        precision: Coordinate precision (5 for polyline, 6 for polyline6).

    Returns:
        List of (longitude, latitude) coordinate tuples.
    """
    coordinates = []
    index = 0
    lat = 0
    lon = 0
    factor = 10**precision

    while index < len(encoded):
        delta_lat, index = _decode_value(encoded, index)
        delta_lon, index = _decode_value(encoded, index)
        lat += delta_lat
        lon += delta_lon
        coordinates.append((lon / factor, lat / factor))

    return coordinates


def format_coordinates(
    coordinates: Sequence[Coordinate],
    coordinate_format: CoordinateFormat = CoordinateFormat.PLAIN,
) -> str:
    """Render the coordinate segment of a service path."""
    fmt = CoordinateFormat(coordinate_format)
    if fmt is CoordinateFormat.PLAIN:
        return ";".join(coordinate.to_wire() for coordinate in coordinates)

    encoded = encode_polyline(coordinates, POLYLINE_PRECISION[fmt])
    return f"{fmt.value}({quote(encoded, safe='')})"


def parse_coordinates(segment: str) -> list[Coordinate]:
    """Parse a coordinate path segment back into coordinates.

    Accepts the plain ``lon,lat;lon,lat`` form as well as the
    ``polyline(...)`` and ``polyline6(...)`` forms.
    """
    segment = unquote(segment.strip())

    for fmt in (CoordinateFormat.POLYLINE6, CoordinateFormat.POLYLINE):
        prefix = f"{fmt.value}("
        if segment.startswith(prefix) and segment.endswith(")"):
            points = decode_polyline(segment[len(prefix):-1], POLYLINE_PRECISION[fmt])
            return [Coordinate(longitude=lon, latitude=lat) for lon, lat in points]

    if not segment:
        raise ValidationError("Empty coordinate segment")
    return [Coordinate.parse(pair) for pair in segment.split(";")]
