"""Shared payloads for the OSRM client tests."""

import copy

import pytest

BERLIN = [(13.388860, 52.517037), (13.397634, 52.529407)]

WAYPOINTS = [
    {
        "hint": "-0eQgNlS0oMEAAAAEwAAACwAAAA8AAAAGJhDQDdcQEH8uOtBodYgQgQAAAATAAAALAAAADwAAAAJ9AAA--hEAIAMCAOZ6EQAnQwIAwEAzwxXg-vq",
        "distance": 7.615206,
        "name": "Jagersstraat",
        "location": [4.516091, 50.859136],
    },
    {
        "hint": "NbnigxYXmIlLAAAAAAAAAEoAAAAAAAAATZl7QQAAAAAYEHZBAAAAACYAAAAAAAAAJQAAAAAAAAAJ9AAA74JGACkkBQNwhkYA8iIFAwEAbwVXg-vq",
        "distance": 72.232413,
        "name": "Voie Minckelers",
        "location": [4.621039, 50.668585],
    },
]

ROUTE = {
    "geometry": "slluHq`qZ~eChbDtcFfzCpzAulD~vBsfAbh@}j@|cAs~CxpCkoDtuA}sE|f@wcAxiAi{@nbB{n@jMd_@bk@i]xCvLyL|GjH`O",
    "legs": [
        {
            "steps": [],
            "summary": "",
            "weight": 1519.3,
            "duration": 1498.1,
            "distance": 28139.9,
        }
    ],
    "weight_name": "routability",
    "weight": 1519.3,
    "duration": 1498.1,
    "distance": 28139.9,
}

ROUTE_RESPONSE = {
    "code": "Ok",
    "routes": [ROUTE],
    "waypoints": WAYPOINTS,
}


@pytest.fixture
def route_response() -> dict:
    return copy.deepcopy(ROUTE_RESPONSE)


@pytest.fixture
def waypoint() -> dict:
    return copy.deepcopy(WAYPOINTS[0])
