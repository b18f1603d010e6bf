"""FixAggregator: the single owner of the current position fix.

Every sentence accepted by the receiver is decoded against the current fix.
Latitude and longitude of each valid result are then passed through an
exponential moving average to take the jitter out of phone GNSS output::

    smoothed = previous * (1 - alpha) + new * alpha

The smoothed value is both the published position and the reference for the
next sentence, so smoothing compounds sentence over sentence. All other
fields are published exactly as decoded.

Threading:
    The receive loop is the writer; any thread may read ``current``. The fix
    is immutable and replaced with a single reference assignment, so readers
    never lock and never see a half-updated fix. Writers (``handle_sentence``
    and ``reset``) serialize on a lock.
"""

import dataclasses
import logging
import threading

from nmea_bridge.nmea import Fix, decode
from nmea_bridge.transport.observers import Observers

__all__ = ["FixAggregator"]

logger = logging.getLogger(__name__)

_DEFAULT_SMOOTHING = 0.2


class FixAggregator:
    """Merge decoded sentences into one smoothed, always-current fix.

    Args:
        smoothing: Weight of the newest position, in ``[0, 1]``. 0 disables
            smoothing (raw positions are published), 1 also publishes raw
            positions, values in between lag behind the raw track.
        verify_checksum: Passed to ``decode``; discard sentences whose
            checksum is missing or wrong.

    Raises:
        ValueError: If *smoothing* is outside ``[0, 1]``.

    Example:
        >>> aggregator = FixAggregator(smoothing=0.5)
        >>> aggregator.handle_sentence("$GPGGA,123519,4807.038,N,01131.000,E,1,08,0.9,545.4,M,46.9,M,,*47")
        >>> aggregator.current.num_satellites
        8
    """

    def __init__(
        self,
        smoothing: float = _DEFAULT_SMOOTHING,
        verify_checksum: bool = False,
    ) -> None:
        if not 0.0 <= smoothing <= 1.0:
            raise ValueError(f"smoothing must be in [0, 1], got {smoothing}")
        self._smoothing = smoothing
        self._verify_checksum = verify_checksum
        self._current = Fix()
        self._reference: tuple[float, float] | None = None
        self._lock = threading.Lock()
        self.on_fix: Observers[Fix] = Observers("fix")

    @property
    def smoothing(self) -> float:
        return self._smoothing

    @property
    def current(self) -> Fix:
        """Latest published fix. Never blocks."""
        return self._current

    def _smooth(self, fix: Fix) -> Fix:
        if self._reference is None or self._smoothing <= 0.0:
            return fix
        alpha = self._smoothing
        previous_latitude, previous_longitude = self._reference
        return dataclasses.replace(
            fix,
            latitude_degrees=previous_latitude * (1 - alpha)
            + fix.latitude_degrees * alpha,
            longitude_degrees=previous_longitude * (1 - alpha)
            + fix.longitude_degrees * alpha,
        )

    def handle_sentence(self, line: str) -> None:
        """Decode *line* against the current fix and publish the result.

        Lines that do not change the fix (unknown kinds, void sentences,
        malformed input) publish nothing.
        """
        with self._lock:
            current = self._current
            decoded = decode(line, current, verify_checksum=self._verify_checksum)
            if decoded is current:
                return
            if decoded.valid:
                decoded = self._smooth(decoded)
                self._reference = (decoded.latitude_degrees, decoded.longitude_degrees)
            self._current = decoded

        self.on_fix.notify(decoded)

    def reset(self) -> None:
        """Forget the current fix and the smoothing reference."""
        with self._lock:
            self._current = Fix()
            self._reference = None
