"""GGA sentence decoding (position, altitude and fix quality).

GGA Sentence Format:
    $GPGGA,123519,4807.038,N,01131.000,E,1,08,0.9,545.4,M,46.9,M,,*47
           |      |        | |         | | |  |   |     | |     |
           |      |        | |         | | |  |   |     | |     +-- DGPS info (ignored)
           |      |        | |         | | |  |   |     | +-- Geoid height (ignored)
           |      |        | |         | | |  |   +-----+-- Altitude above MSL
           |      |        | |         | | |  +-- HDOP (horizontal dilution)
           |      |        | |         | | +-- Number of satellites
           |      |        | |         | +-- Fix quality (0 = invalid)
           |      |        | +---------+-- Longitude + E/W
           |      +--------+-- Latitude + N/S
           +-- UTC time (hhmmss[.sss])

GGA has no date field. Its time of day is attached to the date of the
previous fix, which normally comes from an earlier RMC sentence.
"""

import dataclasses

from nmea_bridge.nmea.fields import (
    UNKNOWN_DATE,
    combine_utc,
    degrees_minutes_to_decimal,
    parse_float_field,
    parse_int_field,
    parse_time_of_day,
)
from nmea_bridge.nmea.types import Fix

__all__ = ["MINIMUM_FIELD_COUNT", "apply_gga"]

# Sentence id plus the nine fields up to and including the altitude
MINIMUM_FIELD_COUNT = 10


def apply_gga(fields: list[str], previous: Fix, sentence: str) -> Fix:
    """Merge a GGA sentence into *previous*.

    Only latitude, longitude, altitude, satellite count, HDOP and time are
    touched; speed and course are carried over unchanged.

    Args:
        fields: Comma-separated fields with the checksum already removed.
            Must hold at least ``MINIMUM_FIELD_COUNT`` items.
        previous: The fix to derive from.
        sentence: Raw sentence text recorded as ``last_sentence``.

    Returns:
        The merged fix, or *previous* itself if the fix quality is 0 or empty.

    Raises:
        FieldError: If any field carried by the sentence is malformed.
    """
    quality = parse_int_field(fields[6]) or 0
    if quality <= 0:
        return previous

    latitude = degrees_minutes_to_decimal(fields[2], fields[3])
    longitude = degrees_minutes_to_decimal(fields[4], fields[5])
    satellites = parse_int_field(fields[7])
    hdop = parse_float_field(fields[8])
    altitude = parse_float_field(fields[9])
    time_of_day = parse_time_of_day(fields[1])

    utc_time = previous.utc_time
    if time_of_day is not None:
        day = previous.utc_time.date() if previous.utc_time else UNKNOWN_DATE
        utc_time = combine_utc(day, time_of_day)

    return dataclasses.replace(
        previous,
        valid=True,
        latitude_degrees=latitude,
        longitude_degrees=longitude,
        altitude_meters=previous.altitude_meters if altitude is None else altitude,
        num_satellites=previous.num_satellites if satellites is None else satellites,
        horizontal_dilution_of_precision=(
            previous.horizontal_dilution_of_precision if hdop is None else hdop
        ),
        utc_time=utc_time,
        last_sentence=sentence,
    )
