"""Tests for coordinate and parameter types."""

import dataclasses
import math

import pytest

from osrm_client.data.geometry import (
    decode_polyline,
    encode_polyline,
    format_coordinates,
    parse_coordinates,
)
from osrm_client.data.responses import GeoJSONGeometry, geometry_coordinates
from osrm_client.data.types import (
    UNLIMITED,
    Bearing,
    Coordinate,
    CoordinateFormat,
    validate_profile,
    validate_radius,
)
from osrm_client.errors import DecodingError, ValidationError


def test_coordinate_wire_format():
    """Coordinates render as fixed 6-decimal lon,lat."""
    assert Coordinate(13.388860, 52.517037).to_wire() == "13.388860,52.517037"
    assert Coordinate(-0.1278, 51.5074).to_wire() == "-0.127800,51.507400"
    assert Coordinate(1e-7, 0).to_wire() == "0.000000,0.000000"


@pytest.mark.parametrize(
    "longitude, latitude",
    [(180.1, 0.0), (-180.1, 0.0), (0.0, 90.5), (0.0, -91.0), (math.nan, 0.0), (0.0, math.inf)],
)
def test_coordinate_out_of_range(longitude, latitude):
    with pytest.raises(ValidationError):
        Coordinate(longitude, latitude)


def test_coordinate_bounds_are_inclusive():
    assert Coordinate(180, -90).longitude == 180.0
    assert Coordinate(-180, 90).latitude == 90.0


def test_coordinate_rejects_non_numbers():
    with pytest.raises(ValidationError):
        Coordinate("east", 1.0)


def test_coordinate_is_immutable():
    coordinate = Coordinate(4.35, 50.8333)
    with pytest.raises(dataclasses.FrozenInstanceError):
        coordinate.longitude = 5.0


def test_coordinate_parse_and_latlon():
    assert Coordinate.parse("13.388860,52.517037") == Coordinate(13.38886, 52.517037)
    assert Coordinate.from_latlon(52.517037, 13.38886) == Coordinate(13.38886, 52.517037)
    with pytest.raises(ValidationError):
        Coordinate.parse("13.38886")
    with pytest.raises(ValidationError):
        Coordinate.parse("a,b")


def test_bearing():
    assert Bearing(90, 20).to_wire() == "90,20"
    with pytest.raises(ValidationError):
        Bearing(361, 10)
    with pytest.raises(ValidationError):
        Bearing(90, 181)


@pytest.mark.parametrize("value, deviation", [("90", 10), (90.5, 10), (90, None), (True, 10)])
def test_bearing_requires_whole_degrees(value, deviation):
    with pytest.raises(ValidationError):
        Bearing(value, deviation)


def test_unsupported_geometry_type():
    polygon = GeoJSONGeometry(type="Polygon", coordinates=[[[0.0, 0.0], [1.0, 0.0], [0.0, 0.0]]])

    with pytest.raises(DecodingError):
        geometry_coordinates(polygon)


def test_radius_and_profile_validation():
    assert validate_radius(50) == 50.0
    assert validate_radius(UNLIMITED) == math.inf
    with pytest.raises(ValidationError):
        validate_radius(-1)
    with pytest.raises(ValidationError):
        validate_profile("  ")
    assert validate_profile("foot") == "foot"


def test_polyline_known_vector():
    """The reference example of the polyline algorithm."""
    encoded = "_p~iF~ps|U_ulLnnqC_mqNvxq`@"
    points = decode_polyline(encoded)

    assert points == [
        pytest.approx((-120.2, 38.5)),
        pytest.approx((-120.95, 40.7)),
        pytest.approx((-126.453, 43.252)),
    ]
    coordinates = [Coordinate(lon, lat) for lon, lat in points]
    assert encode_polyline(coordinates) == encoded


def test_polyline_truncated():
    with pytest.raises(DecodingError):
        decode_polyline("_p~iF~ps|U_")


def test_plain_coordinates_round_trip():
    coordinates = [Coordinate(13.388860, 52.517037), Coordinate(13.397634, 52.529407)]
    segment = format_coordinates(coordinates)

    assert segment == "13.388860,52.517037;13.397634,52.529407"
    assert parse_coordinates(segment) == coordinates


@pytest.mark.parametrize("fmt", [CoordinateFormat.POLYLINE, CoordinateFormat.POLYLINE6])
def test_polyline_coordinates_round_trip(fmt):
    coordinates = [Coordinate(13.38886, 52.51703), Coordinate(13.39763, 52.5294)]
    segment = format_coordinates(coordinates, fmt)

    assert segment.startswith(f"{fmt.value}(")
    parsed = parse_coordinates(segment)
    assert [(c.longitude, c.latitude) for c in parsed] == [
        pytest.approx((c.longitude, c.latitude)) for c in coordinates
    ]
