"""Position fix and sentence kind types.

Design Decisions:
    1. Accretive merge: a ``Fix`` is never built from scratch by a sentence.
       Each decoded sentence derives a new ``Fix`` from the previous one with
       ``dataclasses.replace``, touching only the fields that sentence
       carries. RMC supplies velocity and course, GGA supplies altitude and
       quality, so the fix is only complete after both have been seen.

    2. Frozen dataclass: a published ``Fix`` is shared between the receive
       thread and any number of readers. It is replaced, never mutated.

    3. Plain defaults instead of ``None``: the fields start at zero and the
       ``valid`` flag says whether the position can be used. ``utc_time``
       and ``last_sentence`` are the exceptions since there is no meaningful
       zero for them.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

__all__ = ["Fix", "SentenceKind"]


class SentenceKind(Enum):
    """The two sentence kinds the decoder understands, by NMEA kind code."""

    POSITION_VELOCITY = "RMC"
    POSITION_QUALITY = "GGA"


@dataclass(frozen=True)
class Fix:
    """Best-known position state assembled from decoded sentences.

    Attributes:
        valid: True once any sentence has supplied a usable position.
            Stays True afterwards; void or no-fix sentences leave the fix
            unchanged instead of invalidating it.

        latitude_degrees: Latitude in decimal degrees, positive=North.

        longitude_degrees: Longitude in decimal degrees, positive=East.

        altitude_meters: Altitude above mean sea level (GGA only).

        num_satellites: Satellites used in the solution (GGA only).

        horizontal_dilution_of_precision: HDOP (GGA only). Lower is better.

        speed_knots: Speed over ground in knots (RMC only).

        course_degrees: Course over ground relative to true north (RMC only).

        utc_time: Timezone-aware UTC timestamp of the last update, or
            None before the first timed sentence.

        last_sentence: Raw text of the last sentence that updated the fix,
            kept for diagnostics.

    Example:
        >>> fix = decode("$GPRMC,123519,A,4807.038,N,01131.000,E,022.4,084.4,230394,003.1,W*6A", Fix())
        >>> fix.valid, round(fix.latitude_degrees, 4)
        (True, 48.1173)
    """

    valid: bool = False
    latitude_degrees: float = 0.0
    longitude_degrees: float = 0.0
    altitude_meters: float = 0.0
    num_satellites: int = 0
    horizontal_dilution_of_precision: float = 0.0
    speed_knots: float = 0.0
    course_degrees: float = 0.0
    utc_time: datetime | None = None
    last_sentence: str | None = None
