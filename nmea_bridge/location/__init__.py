"""Position state: smoothing and the current fix."""

from nmea_bridge.location.aggregator import FixAggregator

__all__ = ["FixAggregator"]
