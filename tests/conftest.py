"""Shared test fixtures: a fake HTTP session and realistic service payloads."""

import json
import math
from unittest.mock import MagicMock

import pytest
import requests

EARTH_RADIUS = 6378137.0

PRATT_LAT = 39.2856
PRATT_LON = -76.6036
# Spherical Mercator, computed independently of pyproj
PRATT_X = EARTH_RADIUS * math.radians(PRATT_LON)
PRATT_Y = EARTH_RADIUS * math.log(math.tan(math.pi / 4 + math.radians(PRATT_LAT) / 2))

GEOCODE_URL = "https://geocode.test/arcgis/rest/services/MD/GeocodeServer"
RESOURCE = "https://opendata.maryland.gov/resource/abcd-1234"


def make_response(payload, status: int = 200, url: str = "https://example.test/") -> requests.Response:
    r = requests.Response()
    r.status_code = status
    if isinstance(payload, bytes):
        r._content = payload
    else:
        r._content = json.dumps(payload).encode("utf-8")
    r.headers["Content-Type"] = "application/json"
    r.encoding = "utf-8"
    r.url = url
    return r


@pytest.fixture()
def session():
    """A stand-in requests.Session; set session.request.return_value per test."""
    s = MagicMock()
    s.headers = {}
    return s


@pytest.fixture()
def batch_body():
    return {
        "spatialReference": {"wkid": 102100, "latestWkid": 3857},
        "locations": [
            {
                "address": "501 E PRATT ST, BALTIMORE, MD, 21202",
                "location": {"x": PRATT_X, "y": PRATT_Y},
                "score": 100,
                "attributes": {"ResultID": 1, "Status": "M", "Score": 100},
            },
            {
                "address": "",
                "location": {"x": "NaN", "y": "NaN"},
                "score": 0,
                "attributes": {"ResultID": 2, "Status": "U", "Score": 0},
            },
            {
                "address": "100 N HOWARD ST, BALTIMORE, MD, 21201",
                "location": {"x": -8528400.0, "y": 4763500.0},
                "score": 97.4,
                "attributes": {"ResultID": 3, "Status": "M", "Score": 97.4},
            },
            # not part of the submitted batch
            {
                "address": "1 STRAY RD",
                "location": {"x": -8500000.0, "y": 4700000.0},
                "score": 88,
                "attributes": {"ResultID": 42, "Status": "M"},
            },
        ],
    }


@pytest.fixture()
def candidates_body():
    return {
        "spatialReference": {"wkid": 102100, "latestWkid": 3857},
        "candidates": [
            {
                "address": "501 E PRATT ST, BALTIMORE, MD, 21202",
                "location": {"x": PRATT_X + 15.0, "y": PRATT_Y},
                "score": 92.5,
                "attributes": {"Addr_type": "PointAddress"},
            },
            {
                "address": "501 E PRATT ST, BALTIMORE, MD, 21202",
                "location": {"x": PRATT_X, "y": PRATT_Y},
                "score": 100,
                "attributes": {"Addr_type": "PointAddress"},
            },
        ],
    }


@pytest.fixture()
def reverse_body():
    return {
        "address": {
            "Match_addr": "501 E PRATT ST, BALTIMORE, MD, 21202",
            "Street": "501 E PRATT ST",
            "City": "BALTIMORE",
            "ZIP": "21202",
        },
        "location": {
            "x": PRATT_X,
            "y": PRATT_Y,
            "spatialReference": {"wkid": 102100, "latestWkid": 3857},
        },
    }


@pytest.fixture()
def reverse_not_found_body():
    return {
        "error": {
            "code": 400,
            "message": "Cannot perform query. Invalid query parameters.",
            "details": ["Unable to find address for the specified location."],
        }
    }
