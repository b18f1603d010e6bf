"""Tests for the fix payload and the GET /fix endpoint."""

import json
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from nmea_bridge import Fix, LocationBridge
from server.formatters import fix_to_dict, format_fix_message
from server.main import app
from tests.helpers import GGA_FIX, RMC_ACTIVE


def test_no_fix_yet_is_invalid() -> None:
    with TestClient(app) as client:
        response = client.get("/fix")

    assert response.status_code == 200
    data = response.json()
    assert data["type"] == "fix"
    assert data["valid"] is False
    assert data["utc_time"] is None


def test_current_fix_after_sentences(bridge: LocationBridge) -> None:
    with TestClient(app) as client:
        bridge.aggregator.handle_sentence(RMC_ACTIVE)
        bridge.aggregator.handle_sentence(GGA_FIX)
        data = client.get("/fix").json()

    assert data["valid"] is True
    assert data["lat"] == pytest.approx(48.1173)
    assert data["lon"] == pytest.approx(11.516667, rel=1e-6)
    assert data["alt"] == pytest.approx(545.4)
    assert data["num_satellites"] == 8
    assert data["hdop"] == pytest.approx(0.9)
    assert data["course_degrees"] == pytest.approx(84.4)
    assert data["utc_time"] == "2094-03-23T12:35:19+00:00"


def test_websocket_payload_matches_endpoint(bridge: LocationBridge) -> None:
    with TestClient(app) as client, client.websocket_connect("/ws") as websocket:
        bridge.aggregator.handle_sentence(GGA_FIX)
        pushed = websocket.receive_json()
        assert pushed == client.get("/fix").json()


def test_fix_to_dict_keys() -> None:
    fix = Fix(
        valid=True,
        latitude_degrees=1.5,
        longitude_degrees=-2.5,
        speed_knots=3.0,
        utc_time=datetime(2026, 5, 19, 8, 0, 1, 250000, tzinfo=timezone.utc),
    )

    data = fix_to_dict(fix)

    assert data == {
        "type": "fix",
        "valid": True,
        "lat": 1.5,
        "lon": -2.5,
        "alt": 0.0,
        "num_satellites": 0,
        "hdop": 0.0,
        "speed_knots": 3.0,
        "course_degrees": 0.0,
        "utc_time": "2026-05-19T08:00:01.250000+00:00",
    }


def test_format_fix_message_is_json() -> None:
    assert json.loads(format_fix_message(Fix()))["valid"] is False
