"""Real-time NMEA location bridge.

Receives NMEA 0183 sentences from a device on the local network, decodes
RMC and GGA into a position fix, and keeps a smoothed current fix for
consumers.
"""

from nmea_bridge.bridge import LocationBridge
from nmea_bridge.config import DEFAULT_CONFIG, BridgeConfig, ConfigError, Transport
from nmea_bridge.location import FixAggregator
from nmea_bridge.nmea import (
    Fix,
    SentenceKind,
    classify,
    decode,
    degrees_minutes_to_decimal,
    validate_checksum,
)
from nmea_bridge.transport import LineFramer, NmeaReceiver, Observers

__all__ = [
    "DEFAULT_CONFIG",
    "BridgeConfig",
    "ConfigError",
    "Fix",
    "FixAggregator",
    "LineFramer",
    "LocationBridge",
    "NmeaReceiver",
    "Observers",
    "SentenceKind",
    "Transport",
    "classify",
    "decode",
    "degrees_minutes_to_decimal",
    "validate_checksum",
]
