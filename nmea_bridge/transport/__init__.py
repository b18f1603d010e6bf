"""Network transport: sockets, line framing and notifications."""

from nmea_bridge.transport.framing import LineFramer
from nmea_bridge.transport.observers import Observers
from nmea_bridge.transport.receiver import NmeaReceiver

__all__ = ["LineFramer", "NmeaReceiver", "Observers"]
