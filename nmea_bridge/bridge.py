"""LocationBridge: receiver and aggregator wired together.

The receiver's sentences feed the aggregator; its status and error messages
go to the log. Hosts usually need nothing else::

    with LocationBridge(BridgeConfig.from_env()) as bridge:
        while running:
            fix = bridge.current_fix
            if fix.valid:
                render(fix.latitude_degrees, fix.longitude_degrees)
"""

import logging
from types import TracebackType

from nmea_bridge.config import DEFAULT_CONFIG, BridgeConfig
from nmea_bridge.location import FixAggregator
from nmea_bridge.nmea import Fix
from nmea_bridge.transport import NmeaReceiver

__all__ = ["LocationBridge", "describe_fix"]

logger = logging.getLogger(__name__)


def describe_fix(fix: Fix) -> str:
    """One-line summary of a fix for logs."""
    return (
        f"Lat:{fix.latitude_degrees:.6f} Lon:{fix.longitude_degrees:.6f} "
        f"Alt:{fix.altitude_meters:.1f}m Sats:{fix.num_satellites} "
        f"HDOP:{fix.horizontal_dilution_of_precision:.1f} "
        f"Speed:{fix.speed_knots:.1f}kn Course:{fix.course_degrees:.1f}deg"
    )


class LocationBridge:
    """Owns one ``NmeaReceiver`` and one ``FixAggregator``.

    Entering the bridge starts the receiver when ``config.auto_start`` is
    set; leaving it always stops the receiver. Stopping or restarting the
    receiver keeps the aggregator's current fix; call
    ``aggregator.reset()`` to clear it.

    Args:
        config: Static bridge configuration.
    """

    def __init__(self, config: BridgeConfig = DEFAULT_CONFIG) -> None:
        self._config = config
        self.aggregator = FixAggregator(
            smoothing=config.smoothing,
            verify_checksum=config.verify_checksum,
        )
        self.receiver = NmeaReceiver(config)
        self.receiver.on_sentence.subscribe(self.aggregator.handle_sentence)
        self.receiver.on_status.subscribe(self._log_status)
        self.receiver.on_error.subscribe(self._log_error)
        self.aggregator.on_fix.subscribe(self._log_fix)

    def __enter__(self) -> "LocationBridge":
        logger.info(
            "Using %s %s:%d (listen=%s)",
            self._config.transport.name,
            self.receiver.address,
            self._config.port,
            self._config.listen,
        )
        if self._config.auto_start:
            self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.stop()

    @property
    def config(self) -> BridgeConfig:
        return self._config

    @property
    def current_fix(self) -> Fix:
        """Latest smoothed fix; see ``FixAggregator.current``."""
        return self.aggregator.current

    def start(self) -> None:
        """(Re)start receiving; see ``NmeaReceiver.start``."""
        self.receiver.start()

    def stop(self) -> None:
        """Stop receiving; see ``NmeaReceiver.stop``."""
        self.receiver.stop()

    @staticmethod
    def _log_status(message: str) -> None:
        logger.info("%s", message)

    @staticmethod
    def _log_error(message: str) -> None:
        logger.error("%s", message)

    @staticmethod
    def _log_fix(fix: Fix) -> None:
        if fix.valid:
            logger.debug("%s", describe_fix(fix))
