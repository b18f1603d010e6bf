"""NMEA 0183 decoding for RMC and GGA sentences."""

from nmea_bridge.nmea.checksum import compute_checksum, validate_checksum
from nmea_bridge.nmea.decoder import classify, decode
from nmea_bridge.nmea.fields import degrees_minutes_to_decimal
from nmea_bridge.nmea.types import Fix, SentenceKind

__all__ = [
    "Fix",
    "SentenceKind",
    "classify",
    "compute_checksum",
    "decode",
    "degrees_minutes_to_decimal",
    "validate_checksum",
]
