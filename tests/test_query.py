"""Tests for the query string builder."""

import math

import pytest

from osrm_client.data.types import Approach, Bearing, Overview
from osrm_client.errors import EncodingError
from osrm_client.services.query import QueryBuilder, format_value


@pytest.mark.parametrize(
    "value, expected",
    [
        (True, "true"),
        (False, "false"),
        (3, "3"),
        (50.0, "50"),
        (13.88, "13.88"),
        (1e-7, "0.0000001"),
        (1e20, "100000000000000000000"),
        (math.inf, "unlimited"),
        (Overview.NONE, "false"),
        (Approach.CURB, "curb"),
        (Bearing(90, 20), "90,20"),
        ("toll", "toll"),
    ],
)
def test_format_value(value, expected):
    assert format_value(value) == expected


def test_format_value_rejects_nan_and_unknown_types():
    with pytest.raises(EncodingError):
        format_value(math.nan)
    with pytest.raises(EncodingError):
        format_value(object())


def test_absent_options_are_omitted():
    query = QueryBuilder(2)
    query.scalar("steps", None).per_waypoint("radiuses", None).joined("sources", None)

    assert query.render() == ""
    assert query.items() == []


def test_options_keep_insertion_order():
    query = QueryBuilder(3)
    query.scalar("overview", Overview.FULL)
    query.scalar("steps", True)
    query.per_waypoint("radiuses", [None, 100.0, math.inf])
    query.joined("sources", [0, 2])
    query.joined("exclude", ["toll", "motorway"], separator=",")

    assert query.render() == (
        "overview=full&steps=true&radiuses=;100;unlimited&sources=0;2&exclude=toll,motorway"
    )


def test_per_waypoint_length_mismatch():
    query = QueryBuilder(3)

    with pytest.raises(EncodingError) as raised:
        query.per_waypoint("bearings", [Bearing(0, 90), Bearing(90, 90)])

    assert raised.value.details["option"] == "bearings"


def test_values_are_percent_encoded():
    query = QueryBuilder(1)
    query.per_waypoint("hints", ["ab+/c="])

    assert query.render() == "hints=ab%2B%2Fc%3D"
