"""Pytest fixtures for server module testing."""

from collections.abc import Iterator
from unittest.mock import patch

import pytest

from nmea_bridge import BridgeConfig, LocationBridge


@pytest.fixture(autouse=True)
def bridge() -> Iterator[LocationBridge]:
    """Bridge handed to the app; receives nothing until a test feeds it."""
    controlled = LocationBridge(BridgeConfig(auto_start=False))
    with patch("server.main.create_bridge", return_value=controlled):
        yield controlled
