"""Tests for response decoding and engine error mapping."""

import json

import pytest

from osrm_client.data.responses import (
    GeoJSONGeometry,
    MatchResponse,
    NearestResponse,
    RouteResponse,
    TableResponse,
    TripResponse,
)
from osrm_client.data.types import Coordinate, Service
from osrm_client.errors import (
    DecodingError,
    EngineError,
    InvalidQueryError,
    NoRouteError,
    NoSegmentError,
    TransportError,
    UnknownEngineError,
)
from osrm_client.services.decoder import decode_response, decode_tile


def body(payload) -> bytes:
    return json.dumps(payload).encode()


def test_decode_route(route_response):
    """An Ok route answer becomes a typed RouteResponse."""
    result = decode_response(Service.ROUTE, body(route_response))

    assert isinstance(result, RouteResponse)
    assert len(result.routes) == 1
    assert len(result.waypoints) == 2
    assert result.routes[0].distance == pytest.approx(28139.9)
    assert result.routes[0].legs[0].steps == []
    assert result.waypoints[0].name == "Jagersstraat"
    assert result.waypoints[0].coordinate == Coordinate(4.516091, 50.859136)


def test_route_geometry_is_decoded(route_response):
    result = decode_response("route", body(route_response))
    points = result.routes[0].coordinates()

    assert points[0] == pytest.approx((4.51609, 50.85914))
    assert len(points) > 2


def test_data_version_is_kept(route_response):
    route_response["data_version"] = "2024-01-01T00:00:00Z"

    result = decode_response(Service.ROUTE, body(route_response))

    assert result.data_version == "2024-01-01T00:00:00Z"


def test_unknown_keys_are_ignored(route_response):
    route_response["routes"][0]["something_new"] = {"a": 1}

    assert decode_response(Service.ROUTE, body(route_response)).routes


@pytest.mark.parametrize(
    "service", [Service.ROUTE, Service.TABLE, Service.MATCH, Service.TRIP, Service.NEAREST]
)
def test_engine_code_is_raised_for_every_service(service):
    payload = {"code": "NoRoute", "message": "Impossible route between points"}

    with pytest.raises(NoRouteError) as raised:
        decode_response(service, body(payload))

    assert raised.value.code == "NoRoute"
    assert raised.value.engine_message == "Impossible route between points"
    assert str(raised.value) == "NoRoute: Impossible route between points"


@pytest.mark.parametrize(
    "code, error_cls",
    [("InvalidQuery", InvalidQueryError), ("NoSegment", NoSegmentError)],
)
def test_engine_codes_map_to_error_types(code, error_cls):
    with pytest.raises(error_cls):
        decode_response(Service.ROUTE, body({"code": code}))


def test_unknown_engine_code():
    with pytest.raises(UnknownEngineError) as raised:
        decode_response(Service.ROUTE, body({"code": "Overheated", "message": "too hot"}))

    assert isinstance(raised.value, EngineError)
    assert raised.value.code == "Overheated"


@pytest.mark.parametrize("raw", [b"<html>oops</html>", b"[]", b'{"routes": []}', b"\xff\xfe"])
def test_malformed_bodies(raw):
    with pytest.raises(DecodingError):
        decode_response(Service.ROUTE, raw)


def test_missing_required_field(route_response):
    del route_response["routes"]

    with pytest.raises(DecodingError) as raised:
        decode_response(Service.ROUTE, body(route_response))

    assert raised.value.details["service"] == "route"


def test_waypoint_without_location(route_response):
    del route_response["waypoints"][1]["location"]

    with pytest.raises(DecodingError):
        decode_response(Service.ROUTE, body(route_response))


def test_decode_table_with_unreachable_cells(waypoint):
    payload = {
        "code": "Ok",
        "durations": [[0.0, 120.5, None], [118.2, 0.0, 30.0]],
        "sources": [waypoint, waypoint],
        "destinations": [waypoint, waypoint, waypoint],
    }

    result = decode_response(Service.TABLE, body(payload))

    assert isinstance(result, TableResponse)
    assert result.shape == (2, 3)
    assert result.durations[0][2] is None
    assert result.distances is None


def test_table_matrices_must_agree():
    payload = {
        "code": "Ok",
        "durations": [[0.0, 1.0], [1.0, 0.0]],
        "distances": [[0.0, 1.0, 2.0], [1.0, 0.0, 2.0]],
    }

    with pytest.raises(DecodingError):
        decode_response(Service.TABLE, body(payload))


@pytest.mark.parametrize(
    "payload",
    [
        {"code": "Ok"},
        {"code": "Ok", "durations": [[0.0, 1.0], [1.0]]},
    ],
)
def test_invalid_table_payloads(payload):
    with pytest.raises(DecodingError):
        decode_response(Service.TABLE, body(payload))


def test_decode_match_with_dropped_tracepoint(waypoint):
    tracepoint = {**waypoint, "matchings_index": 0, "waypoint_index": 0, "alternatives_count": 0}
    payload = {
        "code": "Ok",
        "matchings": [{"confidence": 0.87, "distance": 10.0, "duration": 2.0, "legs": []}],
        "tracepoints": [tracepoint, None],
    }

    result = decode_response(Service.MATCH, body(payload))

    assert isinstance(result, MatchResponse)
    assert result.matchings[0].confidence == pytest.approx(0.87)
    assert result.tracepoints[1] is None
    assert result.tracepoints[0].matchings_index == 0


def test_decode_trip(waypoint):
    payload = {
        "code": "Ok",
        "trips": [{"distance": 10.0, "duration": 2.0, "legs": []}],
        "waypoints": [{**waypoint, "trips_index": 0, "waypoint_index": 1}],
    }

    result = decode_response(Service.TRIP, body(payload))

    assert isinstance(result, TripResponse)
    assert result.waypoints[0].waypoint_index == 1


def test_decode_nearest(waypoint):
    waypoint["nodes"] = [2264199819, 0]
    result = decode_response(Service.NEAREST, body({"code": "Ok", "waypoints": [waypoint]}))

    assert isinstance(result, NearestResponse)
    assert result.waypoints[0].nodes == [2264199819, 0]
    assert result.waypoints[0].distance == pytest.approx(7.615206)


def test_decode_geojson_steps():
    step = {
        "distance": 100.0,
        "duration": 10.0,
        "weight": 10.0,
        "name": "Unter den Linden",
        "mode": "driving",
        "geometry": {"type": "LineString", "coordinates": [[13.38, 52.51], [13.39, 52.52]]},
        "maneuver": {
            "location": [13.38, 52.51],
            "bearing_before": 0,
            "bearing_after": 90,
            "type": "depart",
        },
        "intersections": [
            {"location": [13.38, 52.51], "bearings": [90], "entry": [True], "out": 0}
        ],
    }
    route = {
        "distance": 100.0,
        "duration": 10.0,
        "geometry": step["geometry"],
        "legs": [{"distance": 100.0, "duration": 10.0, "summary": "", "steps": [step]}],
    }

    result = decode_response(Service.ROUTE, body({"code": "Ok", "routes": [route]}))

    decoded_step = result.routes[0].legs[0].steps[0]
    assert isinstance(decoded_step.geometry, GeoJSONGeometry)
    assert decoded_step.intersections[0].out_index == 0
    assert decoded_step.intersections[0].in_index is None
    assert decoded_step.maneuver.type == "depart"
    assert result.routes[0].coordinates() == [(13.38, 52.51), (13.39, 52.52)]


def test_decode_tile():
    tile = decode_tile(200, b"\x1a\x02mvt", "application/x-protobuf")

    assert tile.data == b"\x1a\x02mvt"
    assert len(tile) == 5
    assert tile.content_type == "application/x-protobuf"


def test_decode_tile_failure():
    with pytest.raises(TransportError) as raised:
        decode_tile(400, b'{"code": "InvalidValue"}')

    assert raised.value.status_code == 400
